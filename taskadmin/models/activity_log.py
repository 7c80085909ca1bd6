"""
Modello ActivityLog (tabella: activity_logs).

Registro append-only delle azioni che modificano lo stato:
- chi (user_id, NULL per le voci di sistema o se l'utente è stato cancellato)
- cosa (action, vocabolario chiuso in ActivityAction)
- su quale entità (subject_type/subject_id, senza FK: la voce sopravvive all'entità)
- quando (logged_at)

L'id è un UUID casuale: lo sweep dei task scaduti crea voci fuori da ogni
richiesta utente senza bisogno di un contatore condiviso.
"""

import enum
import uuid
from datetime import datetime

from taskadmin.extensions import db


class ActivityAction(str, enum.Enum):
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"
    TASK_OVERDUE = "task_overdue"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    CREATE_ROLE = "create_role"
    UPDATE_ROLE = "update_role"
    DELETE_ROLE = "delete_role"


def _new_log_id() -> str:
    return str(uuid.uuid4())


class ActivityLog(db.Model):
    __tablename__ = "activity_logs"

    id = db.Column(db.String(36), primary_key=True, default=_new_log_id)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    action = db.Column(db.String(32), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)

    # es. "task", "user", "role"
    subject_type = db.Column(db.String(16), nullable=True)
    subject_id = db.Column(db.Integer, nullable=True)

    logged_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    user = db.relationship("User", lazy="joined")

    __table_args__ = (
        db.Index("ix_activity_logs_subject", "subject_type", "subject_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ActivityLog id={self.id} action={self.action!r} "
            f"user_id={self.user_id}>"
        )
