"""
Consultazione del registro attività (sola lettura).
"""
from __future__ import annotations

from typing import Optional

from taskadmin.services.authorization_service import LOG_LIST, Actor, authorize
from taskadmin.services.settings_service import get_int_setting
from taskadmin.services.unit_of_work import UnitOfWork


def list_activity_logs(actor: Optional[Actor], page: int = 1):
    """Voci del registro dalla più recente, 10 per pagina di default."""
    with UnitOfWork() as uow:
        authorize(uow, actor, (LOG_LIST,))
        return uow.activity_logs.paginate_latest(page, get_int_setting("LOGS_PER_PAGE", 10))
