"""
Servizi per la gestione dei ruoli (Role) e dei relativi permessi.
Rifattorizzato con Pattern Unit of Work.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from taskadmin.errors import NotFound, ValidationFailed
from taskadmin.models import ActivityAction, Permission, Role
from taskadmin.services.audit_service import record_activity
from taskadmin.services.authorization_service import (
    ROLE_CREATE,
    ROLE_DELETE,
    ROLE_EDIT,
    ROLE_VIEW,
    Actor,
    authorize,
)
from taskadmin.services.dto.role_input import RoleInput
from taskadmin.services.logging import log_structured_event
from taskadmin.services.settings_service import get_int_setting
from taskadmin.services.unit_of_work import UnitOfWork


def list_roles(actor: Optional[Actor], page: int = 1):
    with UnitOfWork() as uow:
        authorize(uow, actor, ROLE_VIEW)
        return uow.roles.paginate_ordered(page, get_int_setting("ROLES_PER_PAGE", 5))


def get_role(actor: Optional[Actor], role_id: int) -> Role:
    with UnitOfWork() as uow:
        authorize(uow, actor, ROLE_VIEW)
        return _get_or_404(uow, role_id)


def list_permissions(actor: Optional[Actor]) -> List[Permission]:
    """Elenco dei permessi, per i form di creazione/modifica ruolo."""
    with UnitOfWork() as uow:
        authorize(uow, actor, ROLE_VIEW)
        return uow.permissions.list_all_ordered()


def create_role(actor: Optional[Actor], fields: Mapping[str, Any]) -> Role:
    with UnitOfWork() as uow:
        current = authorize(uow, actor, (ROLE_CREATE,))
        data = RoleInput.from_mapping(fields)

        if uow.roles.name_taken(data.name):
            raise ValidationFailed({"name": "Esiste già un ruolo con questo nome."})

        role = Role(name=data.name)
        role.permissions = _resolve_permissions(uow, data.permission_ids)
        uow.roles.add(role)
        uow.roles.flush()

        record_activity(
            uow,
            current.id,
            ActivityAction.CREATE_ROLE,
            f"Creato il ruolo: {role.name} ({len(role.permissions)} permessi)",
            subject_type="role",
            subject_id=role.id,
        )
        uow.commit()

        log_structured_event(
            "create_role", message="Ruolo creato", actor_id=current.id, role_id=role.id
        )
        return role


def update_role(actor: Optional[Actor], role_id: int, fields: Mapping[str, Any]) -> Role:
    """Rinomina il ruolo e sincronizza i permessi (sostituzione, non aggiunta)."""
    with UnitOfWork() as uow:
        current = authorize(uow, actor, (ROLE_EDIT,))
        role = _get_or_404(uow, role_id)
        data = RoleInput.from_mapping(fields)

        if uow.roles.name_taken(data.name, exclude_id=role.id):
            raise ValidationFailed({"name": "Esiste già un ruolo con questo nome."})

        role.name = data.name
        role.permissions = _resolve_permissions(uow, data.permission_ids)

        record_activity(
            uow,
            current.id,
            ActivityAction.UPDATE_ROLE,
            f"Aggiornato il ruolo: {role.name} ({len(role.permissions)} permessi)",
            subject_type="role",
            subject_id=role.id,
        )
        uow.commit()

        log_structured_event(
            "update_role", message="Ruolo aggiornato", actor_id=current.id, role_id=role.id
        )
        return role


def delete_role(actor: Optional[Actor], role_id: int) -> None:
    """Elimina il ruolo togliendolo prima a tutti gli utenti che lo possiedono."""
    with UnitOfWork() as uow:
        current = authorize(uow, actor, (ROLE_DELETE,))
        role = _get_or_404(uow, role_id)

        description = f"Eliminato il ruolo: {role.name}"
        uow.roles.delete_with_grants(role)

        record_activity(
            uow,
            current.id,
            ActivityAction.DELETE_ROLE,
            description,
            subject_type="role",
            subject_id=role_id,
        )
        uow.commit()

        log_structured_event(
            "delete_role", message="Ruolo eliminato", actor_id=current.id, role_id=role_id
        )


def _get_or_404(uow: UnitOfWork, role_id: int) -> Role:
    role = uow.roles.get_by_id(role_id)
    if role is None:
        raise NotFound("Ruolo", role_id)
    return role


def _resolve_permissions(uow: UnitOfWork, permission_ids: List[int]) -> List[Permission]:
    permissions = uow.permissions.list_by_ids(permission_ids)
    missing = sorted(set(permission_ids) - {p.id for p in permissions})
    if missing:
        raise ValidationFailed(
            {"permission_ids": "Permessi inesistenti: " + ", ".join(str(m) for m in missing)}
        )
    return permissions
