"""
Motore di autorizzazione basato su ruoli e permessi.

Regola: i permessi concessi a un utente sono l'unione dei permessi di tutti i
suoi ruoli; un'operazione è consentita se almeno uno dei permessi richiesti
(disgiunzione) è tra quelli concessi. Un utente senza ruoli non può fare nulla.

L'identità dell'attore viene sempre passata esplicitamente ai servizi
(``Actor``); questo modulo non legge mai ``flask.g``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from taskadmin.errors import Forbidden, Unauthenticated
from taskadmin.models import Role, User
from taskadmin.services.logging import log_structured_event

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Nomi dei permessi
# ---------------------------------------------------------------------
TASK_LIST = "task-list"
TASK_CREATE = "task-create"
TASK_EDIT = "task-edit"
TASK_DELETE = "task-delete"

USER_LIST = "user-list"
USER_CREATE = "user-create"
USER_EDIT = "user-edit"
USER_DELETE = "user-delete"

ROLE_LIST = "role-list"
ROLE_CREATE = "role-create"
ROLE_EDIT = "role-edit"
ROLE_DELETE = "role-delete"

LOG_LIST = "log-list"

ALL_PERMISSIONS = (
    TASK_LIST, TASK_CREATE, TASK_EDIT, TASK_DELETE,
    USER_LIST, USER_CREATE, USER_EDIT, USER_DELETE,
    ROLE_LIST, ROLE_CREATE, ROLE_EDIT, ROLE_DELETE,
    LOG_LIST,
)

# Permessi per la consultazione (basta uno qualsiasi)
TASK_VIEW = (TASK_LIST, TASK_CREATE, TASK_EDIT, TASK_DELETE)
USER_VIEW = (USER_LIST, USER_EDIT, USER_DELETE, USER_CREATE)
ROLE_VIEW = (ROLE_LIST, ROLE_CREATE, ROLE_EDIT, ROLE_DELETE)


@dataclass(frozen=True)
class Actor:
    """
    Identità autenticata che esegue un'operazione.

    - id: id dell'utente in tabella users
    - name / email: solo per log e risposte
    """

    id: int
    name: str = ""
    email: str = ""

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, name=user.name, email=user.email)


def resolve_permissions(roles: Iterable[Role]) -> FrozenSet[str]:
    """Unione dei nomi dei permessi di tutti i ruoli."""
    granted = set()
    for role in roles:
        granted.update(role.permission_names)
    return frozenset(granted)


def is_allowed(granted: Iterable[str], required: Iterable[str]) -> bool:
    """True se almeno un permesso richiesto è presente tra quelli concessi."""
    return not frozenset(granted).isdisjoint(required)


def user_can(user: User, *required: str) -> bool:
    return is_allowed(resolve_permissions(user.roles), required)


def authorize(uow, actor: Optional[Actor], required: Iterable[str]) -> User:
    """
    Verifica che ``actor`` possa eseguire un'operazione che richiede uno
    qualsiasi dei permessi ``required``.

    - nessun attore, attore non più esistente o non attivo -> Unauthenticated
    - nessun permesso in comune -> Forbidden

    Restituisce la riga User dell'attore, caricata nella sessione della UoW.
    """
    required = tuple(required)

    if actor is None:
        raise Unauthenticated()

    user = uow.users.get_by_id(actor.id)
    if user is None or not user.is_active:
        log_structured_event(
            "authorization_unauthenticated",
            message="Attore non risolvibile o non attivo",
            level="warning",
            actor_id=actor.id,
        )
        raise Unauthenticated()

    granted = resolve_permissions(user.roles)
    if not is_allowed(granted, required):
        log_structured_event(
            "authorization_denied",
            message="Permesso negato",
            level="warning",
            actor_id=user.id,
            required=list(required),
        )
        raise Forbidden(required=required)

    logger.debug("Accesso consentito a utente %s per %s", user.id, required)
    return user
