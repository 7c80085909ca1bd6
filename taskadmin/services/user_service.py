"""
Servizi per la gestione degli utenti (User).

- la password viene salvata solo come hash e non compare mai nei log;
- i ruoli vengono sostituiti in blocco a ogni salvataggio;
- la cancellazione sgancia task e voci di log senza eliminarli.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from taskadmin.errors import NotFound, ValidationFailed
from taskadmin.models import ActivityAction, Role, User
from taskadmin.services.audit_service import record_activity
from taskadmin.services.authorization_service import (
    USER_CREATE,
    USER_DELETE,
    USER_EDIT,
    USER_VIEW,
    Actor,
    authorize,
)
from taskadmin.services.dto.user_input import UserInput
from taskadmin.services.logging import log_structured_event
from taskadmin.services.settings_service import get_int_setting
from taskadmin.services.unit_of_work import UnitOfWork


def list_users(actor: Optional[Actor], page: int = 1):
    with UnitOfWork() as uow:
        authorize(uow, actor, USER_VIEW)
        return uow.users.paginate_latest(page, get_int_setting("USERS_PER_PAGE", 5))


def get_user(actor: Optional[Actor], user_id: int) -> User:
    with UnitOfWork() as uow:
        authorize(uow, actor, USER_VIEW)
        return _get_or_404(uow, user_id)


def create_user(actor: Optional[Actor], fields: Mapping[str, Any]) -> User:
    with UnitOfWork() as uow:
        current = authorize(uow, actor, (USER_CREATE,))
        data = UserInput.from_mapping(fields, creating=True)

        if uow.users.email_taken(data.email):
            raise ValidationFailed({"email": "Email già registrata."})
        roles = _resolve_roles(uow, data.roles)

        user = User(name=data.name, email=data.email, status=data.status)
        user.set_password(data.password)
        user.roles = roles
        uow.users.add(user)
        uow.users.flush()

        record_activity(
            uow,
            current.id,
            ActivityAction.CREATE_USER,
            f"Creato l'utente: {user.name} ({user.email})",
            subject_type="user",
            subject_id=user.id,
        )
        uow.commit()

        log_structured_event(
            "create_user",
            message="Utente creato",
            actor_id=current.id,
            user_id=user.id,
            roles=data.roles,
        )
        return user


def update_user(actor: Optional[Actor], user_id: int, fields: Mapping[str, Any]) -> User:
    """
    Aggiorna anagrafica, stato e ruoli.

    Password vuota: l'hash esistente resta invariato.
    """
    with UnitOfWork() as uow:
        current = authorize(uow, actor, (USER_EDIT,))
        user = _get_or_404(uow, user_id)
        data = UserInput.from_mapping(fields, creating=False)

        if uow.users.email_taken(data.email, exclude_id=user.id):
            raise ValidationFailed({"email": "Email già registrata."})
        roles = _resolve_roles(uow, data.roles)

        user.name = data.name
        user.email = data.email
        if data.status is not None:
            user.status = data.status
        if data.password:
            user.set_password(data.password)
        # Sostituzione completa, non merge
        user.roles = roles

        record_activity(
            uow,
            current.id,
            ActivityAction.UPDATE_USER,
            f"Aggiornato l'utente: {user.name} ({user.email})",
            subject_type="user",
            subject_id=user.id,
        )
        uow.commit()

        log_structured_event(
            "update_user",
            message="Utente aggiornato",
            actor_id=current.id,
            user_id=user.id,
            password_changed=bool(data.password),
        )
        return user


def delete_user(actor: Optional[Actor], user_id: int) -> None:
    with UnitOfWork() as uow:
        current = authorize(uow, actor, (USER_DELETE,))
        user = _get_or_404(uow, user_id)
        if user.id == current.id:
            raise ValidationFailed({"id": "Non è possibile eliminare il proprio utente."})

        description = f"Eliminato l'utente: {user.name} (ID {user.id})"
        uow.users.delete_detaching_references(user)

        record_activity(
            uow,
            current.id,
            ActivityAction.DELETE_USER,
            description,
            subject_type="user",
            subject_id=user_id,
        )
        uow.commit()

        log_structured_event(
            "delete_user", message="Utente eliminato", actor_id=current.id, user_id=user_id
        )


def _get_or_404(uow: UnitOfWork, user_id: int) -> User:
    user = uow.users.get_by_id(user_id)
    if user is None:
        raise NotFound("Utente", user_id)
    return user


def _resolve_roles(uow: UnitOfWork, names: List[str]) -> List[Role]:
    roles = uow.roles.list_by_names(names)
    missing = sorted(set(names) - {role.name for role in roles})
    if missing:
        raise ValidationFailed({"roles": "Ruoli inesistenti: " + ", ".join(missing)})
    return roles
