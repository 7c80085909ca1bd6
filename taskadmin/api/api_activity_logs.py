"""
API JSON per il registro attività (sola lettura, permesso log-list).

GET /api/activity-logs/?page=N
"""

from __future__ import annotations

from flask import Blueprint, request

from taskadmin.api.serializers import activity_log_to_dict, envelope, page_to_dict
from taskadmin.middleware.auth_session import current_actor
from taskadmin.services import list_activity_logs

api_activity_logs_bp = Blueprint("api_activity_logs", __name__)


@api_activity_logs_bp.route("/", methods=["GET"])
def api_list_activity_logs():
    page = request.args.get("page", 1, type=int)
    pagination = list_activity_logs(current_actor(), page)
    return envelope(page_to_dict(pagination, activity_log_to_dict))
