"""
Registro attività (audit log).

``record_activity`` accoda una voce nella UnitOfWork corrente senza fare commit:
la voce viene confermata insieme alla mutazione che descrive. Se il commit
fallisce, UnitOfWork annulla entrambe e solleva StorageFailure.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from taskadmin.models import ActivityAction, ActivityLog


def record_activity(
    uow,
    actor_id: Optional[int],
    action: Union[ActivityAction, str],
    description: str,
    *,
    subject_type: Optional[str] = None,
    subject_id: Optional[int] = None,
    logged_at: Optional[datetime] = None,
) -> ActivityLog:
    """
    Aggiunge una voce al registro attività.

    :param actor_id: utente che ha eseguito l'azione (None per le voci di sistema).
    :param action: tag dell'azione, deve appartenere a ActivityAction.
    :param description: testo leggibile.
    """
    action = ActivityAction(action)

    entry = ActivityLog(
        user_id=actor_id,
        action=action.value,
        description=description,
        subject_type=subject_type,
        subject_id=subject_id,
        logged_at=logged_at or datetime.utcnow(),
    )
    uow.activity_logs.add(entry)
    return entry
