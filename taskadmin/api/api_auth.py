"""
API JSON di autenticazione.

POST /api/auth/login   {"email": ..., "password": ...}
POST /api/auth/logout
GET  /api/auth/me      utente corrente + permessi effettivi
"""

from __future__ import annotations

from flask import Blueprint, request

from taskadmin.api.serializers import envelope, user_to_dict
from taskadmin.errors import Unauthenticated
from taskadmin.extensions import db
from taskadmin.middleware.auth_session import current_actor, login_user, logout_user
from taskadmin.models import User
from taskadmin.services import authenticate, resolve_permissions

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.route("/login", methods=["POST"])
def api_login():
    data = request.get_json(silent=True) or {}
    user = authenticate(data.get("email"), data.get("password"))
    login_user(user)
    return envelope(user_to_dict(user), message="Accesso effettuato.")


@api_auth_bp.route("/logout", methods=["POST"])
def api_logout():
    logout_user()
    return envelope(None, message="Disconnesso.")


@api_auth_bp.route("/me", methods=["GET"])
def api_me():
    actor = current_actor()
    if actor is None:
        raise Unauthenticated()

    user = db.session.get(User, actor.id)
    payload = user_to_dict(user)
    payload["permissions"] = sorted(resolve_permissions(user.roles))
    return envelope(payload)
