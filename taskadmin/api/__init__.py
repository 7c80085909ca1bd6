"""
Pacchetto per le API JSON del pannello.

Contiene:
- api_auth_bp          -> login/logout/utente corrente
- api_tasks_bp         -> task
- api_users_bp         -> utenti
- api_roles_bp         -> ruoli e permessi
- api_activity_logs_bp -> registro attività
"""

from .api_auth import api_auth_bp
from .api_tasks import api_tasks_bp
from .api_users import api_users_bp
from .api_roles import api_roles_bp
from .api_activity_logs import api_activity_logs_bp

__all__ = [
    "api_auth_bp",
    "api_tasks_bp",
    "api_users_bp",
    "api_roles_bp",
    "api_activity_logs_bp",
]
