"""
Autenticazione con email e password.

Un account non attivo viene rifiutato sempre, anche con password corretta,
con un messaggio dedicato.
"""
from __future__ import annotations

from taskadmin.errors import ValidationFailed
from taskadmin.models import User
from taskadmin.services.dto.form_parsing import clean_str
from taskadmin.services.logging import log_structured_event
from taskadmin.services.unit_of_work import UnitOfWork

FAILED_MESSAGE = "Credenziali non valide."
INACTIVE_MESSAGE = "Il tuo account non è attivo. Contatta l'amministratore."


def authenticate(email: str, password: str) -> User:
    email = (clean_str(email) or "").lower()
    with UnitOfWork() as uow:
        user = uow.users.get_by_email(email)

        if user is not None and not user.is_active:
            log_structured_event(
                "login_inactive", message="Login rifiutato: account non attivo",
                level="warning", user_id=user.id,
            )
            raise ValidationFailed({"email": INACTIVE_MESSAGE})

        # Un JSON con password numerica non deve arrivare a Werkzeug
        valid_password = isinstance(password, str) and bool(password)
        if user is None or not valid_password or not user.check_password(password):
            log_structured_event("login_failed", message="Login fallito", level="warning")
            raise ValidationFailed({"email": FAILED_MESSAGE})

        log_structured_event("login", message="Login riuscito", user_id=user.id)
        return user
