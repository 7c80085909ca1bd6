"""
Middleware di risoluzione dell'attore dalla sessione Flask.

Obiettivo:
- Leggere ``session["user_id"]`` (impostato dal login) e rendere disponibile
  l'attore in ``flask.g.current_user`` come ``Actor`` oppure ``None``.
- NON bloccare nessuna route: il controllo di autenticazione e permessi è
  fatto dai servizi, che ricevono l'attore come parametro esplicito.
"""

from __future__ import annotations

from typing import Optional

from flask import Flask, g, session

from taskadmin.extensions import db
from taskadmin.models import User
from taskadmin.services.authorization_service import Actor

SESSION_USER_KEY = "user_id"


def login_user(user: User) -> None:
    session.clear()
    session[SESSION_USER_KEY] = user.id


def logout_user() -> None:
    session.pop(SESSION_USER_KEY, None)


def current_actor() -> Optional[Actor]:
    return getattr(g, "current_user", None)


def init_auth_session(app: Flask) -> None:
    """
    Registra l'hook before_request che imposta g.current_user.
    """

    @app.before_request
    def load_current_user() -> None:
        g.current_user = None

        user_id = session.get(SESSION_USER_KEY)
        if user_id is None:
            return

        user = db.session.get(User, user_id)
        if user is None or not user.is_active:
            # Utente cancellato o disattivato dopo il login
            logout_user()
            return

        g.current_user = Actor.from_user(user)
