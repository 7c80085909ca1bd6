"""
Pacchetto per i servizi (logica di business) dell'applicazione.

I servizi orchestrano:
- autorizzazione (ruoli -> permessi) con attore esplicito
- repository (accesso al DB) tramite UnitOfWork
- validazioni e transazioni (mutazione + voce di log in un unico commit)
- logging strutturato
"""

from .authorization_service import Actor, authorize, resolve_permissions, is_allowed
from .auth_service import authenticate
from .task_service import (
    list_tasks_for_owner,
    get_task,
    list_assignable_users,
    create_task,
    update_task,
    delete_task,
)
from .user_service import (
    list_users,
    get_user,
    create_user,
    update_user,
    delete_user,
)
from .role_service import (
    list_roles,
    get_role,
    list_permissions,
    create_role,
    update_role,
    delete_role,
)
from .activity_log_service import list_activity_logs
from .overdue_service import run_overdue_sweep, OverdueSweepResult
from .seed_service import seed_defaults
from .settings_service import get_setting

__all__ = [
    # Autorizzazione
    "Actor",
    "authorize",
    "resolve_permissions",
    "is_allowed",
    "authenticate",
    # Task
    "list_tasks_for_owner",
    "get_task",
    "list_assignable_users",
    "create_task",
    "update_task",
    "delete_task",
    # Utenti
    "list_users",
    "get_user",
    "create_user",
    "update_user",
    "delete_user",
    # Ruoli
    "list_roles",
    "get_role",
    "list_permissions",
    "create_role",
    "update_role",
    "delete_role",
    # Registro attività
    "list_activity_logs",
    "run_overdue_sweep",
    "OverdueSweepResult",
    # Seed / impostazioni
    "seed_defaults",
    "get_setting",
]
