"""
Repository per il modello ActivityLog.

Il registro è append-only: il repository espone solo inserimento e letture.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import joinedload

from taskadmin.models import ActivityLog
from taskadmin.repositories.base import SqlAlchemyRepository


class AppendOnlyViolation(RuntimeError):
    """Tentativo di cancellare una voce del registro attività."""


class ActivityLogRepository(SqlAlchemyRepository[ActivityLog]):
    def __init__(self, session):
        super().__init__(session, ActivityLog)

    def get_by_id(self, log_id: str) -> Optional[ActivityLog]:
        if not log_id:
            return None
        return self.session.get(ActivityLog, log_id)

    def delete(self, entity: ActivityLog) -> None:
        raise AppendOnlyViolation("Le voci del registro attività non si cancellano.")

    def paginate_latest(self, page: int, per_page: int):
        """Voci dalla più recente, con l'utente già caricato."""
        query = (
            self.session.query(ActivityLog)
            .options(joinedload(ActivityLog.user))
            .order_by(ActivityLog.logged_at.desc(), ActivityLog.id.desc())
        )
        return self.paginate(query, page, per_page)

    def list_for_subject(self, subject_type: str, subject_id: int) -> List[ActivityLog]:
        return (
            self.session.query(ActivityLog)
            .filter_by(subject_type=subject_type, subject_id=subject_id)
            .order_by(ActivityLog.logged_at.asc())
            .all()
        )

    def exists_since(
        self,
        action: str,
        subject_type: str,
        subject_id: int,
        since: datetime,
    ) -> bool:
        """True se esiste una voce ``action`` per il soggetto registrata da ``since`` in poi."""
        return (
            self.session.query(ActivityLog.id)
            .filter(ActivityLog.action == action)
            .filter(ActivityLog.subject_type == subject_type)
            .filter(ActivityLog.subject_id == subject_id)
            .filter(ActivityLog.logged_at >= since)
            .first()
            is not None
        )
