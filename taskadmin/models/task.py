"""
Modello Task (tabella: tasks).

Unità di lavoro assegnata (opzionalmente) a un utente.
Se l'utente assegnatario viene cancellato il task resta, con assigned_to = NULL.

Stati ammessi (enumerazione chiusa): pending, in_progress, done.
Un task 'done' non è mai considerato scaduto.
"""

import enum
from datetime import datetime

from taskadmin.extensions import db


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def values(cls):
        return [member.value for member in cls]


class Task(db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(255), nullable=False)
    detail = db.Column(db.Text, nullable=False)

    assigned_to = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    due_date = db.Column(db.Date, nullable=True, index=True)

    status = db.Column(
        db.String(16),
        nullable=False,
        default=TaskStatus.PENDING.value,
        index=True,
    )

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    assignee = db.relationship("User", back_populates="assigned_tasks", lazy="joined")

    @property
    def assignee_name(self) -> str:
        return self.assignee.name if self.assignee is not None else "nessuno"

    def __repr__(self) -> str:
        return f"<Task id={self.id} name={self.name!r} status={self.status!r}>"
