"""
Sweep dei task scaduti, pensato per essere lanciato da cron
(``python manage.py log-overdue``) e non da una richiesta web.

Un task è scaduto se la sua due_date (presa alle 00:00) è strettamente
precedente all'istante di esecuzione e lo status non è 'done'. Il task non
viene modificato: per ognuno si aggiunge una voce 'task_overdue' al registro.

Comportamento di default: ogni esecuzione registra di nuovo tutti i task
ancora scaduti. Con OVERDUE_SWEEP_DEDUP attivo un task viene registrato una
sola volta dopo la sua scadenza.

Ogni voce ha la sua transazione: se una fallisce lo sweep prosegue e
raccoglie l'errore.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from taskadmin.errors import StorageFailure
from taskadmin.models import ActivityAction, Task, TaskStatus
from taskadmin.services.audit_service import record_activity
from taskadmin.services.logging import log_structured_event
from taskadmin.services.settings_service import get_bool_setting
from taskadmin.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass
class OverdueSweepResult:
    started_at: datetime
    logged: int = 0
    skipped: int = 0
    errors: List[Tuple[int, str]] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(),
            "logged": self.logged,
            "skipped": self.skipped,
            "errors": [{"task_id": tid, "error": msg} for tid, msg in self.errors],
        }


def overdue_cutoff(now: datetime) -> date:
    """
    Prima data NON scaduta rispetto a ``now``: i task con due_date < cutoff sono scaduti.

    Una data vale come 00:00 di quel giorno, quindi una scadenza odierna è già
    superata appena dopo la mezzanotte.
    """
    if now.time() == time.min:
        return now.date()
    return now.date() + timedelta(days=1)


def is_overdue(task: Task, now: datetime) -> bool:
    if task.due_date is None or task.status == TaskStatus.DONE.value:
        return False
    return datetime.combine(task.due_date, time.min) < now


def run_overdue_sweep(
    now: Optional[datetime] = None,
    dedup: Optional[bool] = None,
) -> OverdueSweepResult:
    """
    Esegue lo sweep e restituisce il riepilogo (``logged`` = voci registrate).

    :param now: istante di riferimento (default: adesso, UTC).
    :param dedup: sovrascrive OVERDUE_SWEEP_DEDUP.
    """
    now = now or datetime.utcnow()
    if dedup is None:
        dedup = get_bool_setting("OVERDUE_SWEEP_DEDUP", False)

    result = OverdueSweepResult(started_at=now)

    # Lettura una tantum: i dati servono come valori semplici per le transazioni successive
    with UnitOfWork() as uow:
        candidates = [
            (task.id, task.assigned_to, task.due_date)
            for task in uow.tasks.list_overdue(overdue_cutoff(now))
        ]

    for task_id, assigned_to, due_date in candidates:
        try:
            with UnitOfWork() as uow:
                if dedup and uow.activity_logs.exists_since(
                    ActivityAction.TASK_OVERDUE.value,
                    "task",
                    task_id,
                    datetime.combine(due_date, time.min),
                ):
                    result.skipped += 1
                    continue

                record_activity(
                    uow,
                    assigned_to,
                    ActivityAction.TASK_OVERDUE,
                    f"Task scaduto: {task_id} (scheduler)",
                    subject_type="task",
                    subject_id=task_id,
                    logged_at=now,
                )
                uow.commit()
                result.logged += 1
        except StorageFailure as exc:
            logger.error("Registrazione task scaduto %s fallita: %s", task_id, exc.__cause__ or exc)
            result.errors.append((task_id, str(exc.__cause__ or exc)))

    log_structured_event(
        "task_overdue_sweep",
        message=f"Registrati {result.logged} task scaduti.",
        level="warning" if result.errors else "info",
        logged=result.logged,
        skipped=result.skipped,
        errors=len(result.errors),
        dedup=dedup,
    )
    return result
