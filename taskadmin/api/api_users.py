"""
API JSON per gli utenti.

GET    /api/users/
GET    /api/users/<id>
POST   /api/users/       {"name", "email", "password", "confirm_password", "roles": [...], "status"?}
PUT    /api/users/<id>   password vuota = invariata
DELETE /api/users/<id>
"""

from __future__ import annotations

from flask import Blueprint, request

from taskadmin.api.serializers import envelope, page_to_dict, user_to_dict
from taskadmin.middleware.auth_session import current_actor
from taskadmin.services import create_user, delete_user, get_user, list_users, update_user

api_users_bp = Blueprint("api_users", __name__)


@api_users_bp.route("/", methods=["GET"])
def api_list_users():
    page = request.args.get("page", 1, type=int)
    return envelope(page_to_dict(list_users(current_actor(), page), user_to_dict))


@api_users_bp.route("/<int:user_id>", methods=["GET"])
def api_get_user(user_id: int):
    return envelope(user_to_dict(get_user(current_actor(), user_id)))


@api_users_bp.route("/", methods=["POST"])
def api_create_user():
    data = request.get_json(silent=True) or {}
    user = create_user(current_actor(), data)
    return envelope(user_to_dict(user), message="Utente creato con successo.", status=201)


@api_users_bp.route("/<int:user_id>", methods=["PUT"])
def api_update_user(user_id: int):
    data = request.get_json(silent=True) or {}
    user = update_user(current_actor(), user_id, data)
    return envelope(user_to_dict(user), message="Utente aggiornato con successo.")


@api_users_bp.route("/<int:user_id>", methods=["DELETE"])
def api_delete_user(user_id: int):
    delete_user(current_actor(), user_id)
    return envelope(None, message="Utente eliminato con successo.")
