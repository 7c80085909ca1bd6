"""
API JSON per i task.

GET    /api/tasks/                elenco paginato dei task assegnati all'utente corrente
GET    /api/tasks/assignable      utenti assegnabili (per i form)
GET    /api/tasks/<id>
POST   /api/tasks/                crea (set completo di campi)
PUT    /api/tasks/<id>            aggiorna (set completo di campi)
DELETE /api/tasks/<id>
"""

from __future__ import annotations

from flask import Blueprint, request

from taskadmin.api.serializers import envelope, page_to_dict, task_to_dict, user_to_dict
from taskadmin.middleware.auth_session import current_actor
from taskadmin.services import (
    create_task,
    delete_task,
    get_task,
    list_assignable_users,
    list_tasks_for_owner,
    update_task,
)

api_tasks_bp = Blueprint("api_tasks", __name__)


@api_tasks_bp.route("/", methods=["GET"])
def api_list_tasks():
    page = request.args.get("page", 1, type=int)
    pagination = list_tasks_for_owner(current_actor(), page)
    return envelope(page_to_dict(pagination, task_to_dict))


@api_tasks_bp.route("/assignable", methods=["GET"])
def api_assignable_users():
    users = list_assignable_users(current_actor())
    return envelope([user_to_dict(u) for u in users])


@api_tasks_bp.route("/<int:task_id>", methods=["GET"])
def api_get_task(task_id: int):
    return envelope(task_to_dict(get_task(current_actor(), task_id)))


@api_tasks_bp.route("/", methods=["POST"])
def api_create_task():
    data = request.get_json(silent=True) or {}
    task = create_task(current_actor(), data)
    return envelope(task_to_dict(task), message="Task creato con successo.", status=201)


@api_tasks_bp.route("/<int:task_id>", methods=["PUT"])
def api_update_task(task_id: int):
    data = request.get_json(silent=True) or {}
    task = update_task(current_actor(), task_id, data)
    return envelope(task_to_dict(task), message="Task aggiornato con successo.")


@api_tasks_bp.route("/<int:task_id>", methods=["DELETE"])
def api_delete_task(task_id: int):
    delete_task(current_actor(), task_id)
    return envelope(None, message="Task eliminato con successo.")
