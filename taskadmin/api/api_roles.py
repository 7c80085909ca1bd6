"""
API JSON per ruoli e permessi.

GET    /api/roles/
GET    /api/roles/permissions
GET    /api/roles/<id>
POST   /api/roles/        {"name": ..., "permission_ids": [...]}
PUT    /api/roles/<id>    i permessi vengono sostituiti, non aggiunti
DELETE /api/roles/<id>
"""

from __future__ import annotations

from flask import Blueprint, request

from taskadmin.api.serializers import envelope, page_to_dict, permission_to_dict, role_to_dict
from taskadmin.middleware.auth_session import current_actor
from taskadmin.services import (
    create_role,
    delete_role,
    get_role,
    list_permissions,
    list_roles,
    update_role,
)

api_roles_bp = Blueprint("api_roles", __name__)


@api_roles_bp.route("/", methods=["GET"])
def api_list_roles():
    page = request.args.get("page", 1, type=int)
    return envelope(page_to_dict(list_roles(current_actor(), page), role_to_dict))


@api_roles_bp.route("/permissions", methods=["GET"])
def api_list_permissions():
    return envelope([permission_to_dict(p) for p in list_permissions(current_actor())])


@api_roles_bp.route("/<int:role_id>", methods=["GET"])
def api_get_role(role_id: int):
    return envelope(role_to_dict(get_role(current_actor(), role_id)))


@api_roles_bp.route("/", methods=["POST"])
def api_create_role():
    data = request.get_json(silent=True) or {}
    role = create_role(current_actor(), data)
    return envelope(role_to_dict(role), message="Ruolo creato con successo.", status=201)


@api_roles_bp.route("/<int:role_id>", methods=["PUT"])
def api_update_role(role_id: int):
    data = request.get_json(silent=True) or {}
    role = update_role(current_actor(), role_id, data)
    return envelope(role_to_dict(role), message="Ruolo aggiornato con successo.")


@api_roles_bp.route("/<int:role_id>", methods=["DELETE"])
def api_delete_role(role_id: int):
    delete_role(current_actor(), role_id)
    return envelope(None, message="Ruolo eliminato con successo.")
