"""
Seed dei dati di riferimento: permessi, ruoli Admin/Manager/Staff e utenti iniziali.

Idempotente: ciò che esiste già non viene toccato. Le entità create dal seed
vengono registrate nel log attività senza attore (voci di sistema).
"""
from __future__ import annotations

from typing import Dict, List

from taskadmin.models import ActivityAction, Role, User
from taskadmin.services.audit_service import record_activity
from taskadmin.services.authorization_service import (
    ALL_PERMISSIONS,
    LOG_LIST,
    TASK_CREATE,
    TASK_DELETE,
    TASK_EDIT,
    TASK_LIST,
)
from taskadmin.services.logging import log_structured_event
from taskadmin.services.unit_of_work import UnitOfWork

DEFAULT_ROLES: Dict[str, List[str]] = {
    "Admin": list(ALL_PERMISSIONS),
    "Manager": [TASK_LIST, TASK_CREATE, TASK_EDIT, TASK_DELETE, LOG_LIST],
    "Staff": [TASK_LIST],
}

DEFAULT_USERS = [
    {"name": "Admin", "email": "admin@example.com", "role": "Admin"},
    {"name": "Manager", "email": "manager@example.com", "role": "Manager"},
    {"name": "Staff", "email": "staff@example.com", "role": "Staff"},
]


def seed_defaults(password: str) -> Dict[str, int]:
    """Crea quanto manca e restituisce i conteggi delle entità create."""
    summary = {"permissions": 0, "roles": 0, "users": 0}

    with UnitOfWork() as uow:
        permissions = {}
        for name in ALL_PERMISSIONS:
            if uow.permissions.get_by_name(name) is None:
                summary["permissions"] += 1
            permissions[name] = uow.permissions.get_or_create(name)

        for role_name, permission_names in DEFAULT_ROLES.items():
            if uow.roles.get_by_name(role_name) is not None:
                continue
            role = Role(name=role_name)
            role.permissions = [permissions[p] for p in permission_names]
            uow.roles.add(role)
            uow.roles.flush()
            record_activity(
                uow, None, ActivityAction.CREATE_ROLE,
                f"Creato il ruolo: {role.name} (seed)",
                subject_type="role", subject_id=role.id,
            )
            summary["roles"] += 1

        for entry in DEFAULT_USERS:
            if uow.users.get_by_email(entry["email"]) is not None:
                continue
            user = User(name=entry["name"], email=entry["email"])
            user.set_password(password)
            user.roles = [uow.roles.get_by_name(entry["role"])]
            uow.users.add(user)
            uow.users.flush()
            record_activity(
                uow, None, ActivityAction.CREATE_USER,
                f"Creato l'utente: {user.name} ({user.email}) (seed)",
                subject_type="user", subject_id=user.id,
            )
            summary["users"] += 1

        uow.commit()

    log_structured_event("seed", message="Seed completato", **summary)
    return summary
