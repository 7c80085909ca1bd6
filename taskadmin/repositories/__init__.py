"""
Package repositories.
Espone i Repository per l'accesso ai dati.
"""

from .permission_repo import PermissionRepository
from .role_repo import RoleRepository
from .user_repo import UserRepository
from .task_repo import TaskRepository
from .activity_log_repo import ActivityLogRepository, AppendOnlyViolation

__all__ = [
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
    "TaskRepository",
    "ActivityLogRepository",
    "AppendOnlyViolation",
]
