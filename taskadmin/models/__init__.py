"""
Pacchetto per i modelli SQLAlchemy.

Qui vengono esportate le classi modello principali e le tabelle di associazione.
"""

from .permission import Permission, role_permissions
from .role import Role, user_roles
from .user import User, USER_STATUSES, USER_STATUS_ACTIVE, USER_STATUS_INACTIVE
from .task import Task, TaskStatus
from .activity_log import ActivityLog, ActivityAction

__all__ = [
    "Permission",
    "role_permissions",
    "Role",
    "user_roles",
    "User",
    "USER_STATUSES",
    "USER_STATUS_ACTIVE",
    "USER_STATUS_INACTIVE",
    "Task",
    "TaskStatus",
    "ActivityLog",
    "ActivityAction",
]
