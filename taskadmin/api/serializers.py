"""
Serializzazione delle entità e dell'involucro JSON comune alle API:

    {"success": bool, "message": str, "payload": ...}
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from flask import jsonify


def envelope(payload: Any = None, message: str = "", status: int = 200, success: bool = True):
    return jsonify(
        {
            "success": success,
            "message": message,
            "payload": payload,
        }
    ), status


def page_to_dict(pagination, item_fn: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "items": [item_fn(item) for item in pagination.items],
        "page": pagination.page,
        "per_page": pagination.per_page,
        "pages": pagination.pages,
        "total": pagination.total,
    }


def task_to_dict(task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "detail": task.detail,
        "assigned_to": task.assigned_to,
        "assigned_to_name": task.assignee.name if task.assignee else None,
        "status": task.status,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "created_at": task.created_at.isoformat() if task.created_at else None,
        "updated_at": task.updated_at.isoformat() if task.updated_at else None,
    }


def user_to_dict(user) -> Dict[str, Any]:
    # password_hash non viene mai esposto
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "status": user.status,
        "roles": [role.name for role in user.roles],
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def role_to_dict(role) -> Dict[str, Any]:
    return {
        "id": role.id,
        "name": role.name,
        "permissions": [{"id": p.id, "name": p.name} for p in role.permissions],
    }


def permission_to_dict(permission) -> Dict[str, Any]:
    return {"id": permission.id, "name": permission.name}


def activity_log_to_dict(entry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "user_name": entry.user.name if entry.user else None,
        "action": entry.action,
        "description": entry.description,
        "subject_type": entry.subject_type,
        "subject_id": entry.subject_id,
        "logged_at": entry.logged_at.isoformat() if entry.logged_at else None,
    }
