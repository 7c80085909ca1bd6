"""
Repository specifico per Task.
Gestisce le query CRUD, l'elenco per assegnatario e la selezione dei task scaduti.
"""
from __future__ import annotations

from datetime import date
from typing import List

from taskadmin.models import Task, TaskStatus
from taskadmin.repositories.base import SqlAlchemyRepository


class TaskRepository(SqlAlchemyRepository[Task]):
    def __init__(self, session):
        super().__init__(session, Task)

    def paginate_for_owner(self, owner_id: int, page: int, per_page: int):
        """Task assegnati a ``owner_id``, dal più recente."""
        query = (
            self.session.query(Task)
            .filter(Task.assigned_to == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        return self.paginate(query, page, per_page)

    def list_overdue(self, due_before: date) -> List[Task]:
        """
        Task con due_date < due_before e status diverso da 'done'.

        I task senza scadenza non vengono mai selezionati.
        """
        return (
            self.session.query(Task)
            .filter(Task.due_date.isnot(None))
            .filter(Task.due_date < due_before)
            .filter(Task.status != TaskStatus.DONE.value)
            .order_by(Task.due_date.asc(), Task.id.asc())
            .all()
        )
