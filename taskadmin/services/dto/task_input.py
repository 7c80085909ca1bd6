"""DTO per i dati in ingresso di creazione/modifica di un Task."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping

from taskadmin.errors import ValidationFailed
from taskadmin.models import TaskStatus
from taskadmin.services.dto.form_parsing import (
    clean_str,
    collect_missing,
    parse_date,
    parse_int,
)

TASK_FIELDS = ["name", "detail", "assigned_to", "status", "due_date"]


@dataclass
class TaskInput:
    name: str
    detail: str
    assigned_to: int
    status: str
    due_date: date

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TaskInput":
        """
        Valida il set completo di campi (non sono ammessi aggiornamenti parziali).

        Tutti gli errori vengono raccolti e sollevati insieme in ValidationFailed.
        """
        data = data or {}
        errors: Dict[str, str] = collect_missing(data, TASK_FIELDS)

        assigned_to = parse_int(data.get("assigned_to"))
        if "assigned_to" not in errors and assigned_to is None:
            errors["assigned_to"] = "L'utente assegnatario non è valido."

        status = clean_str(data.get("status"))
        if "status" not in errors and status not in TaskStatus.values():
            errors["status"] = (
                "Stato non valido. Valori ammessi: " + ", ".join(TaskStatus.values()) + "."
            )

        due_date = parse_date(data.get("due_date"))
        if "due_date" not in errors and due_date is None:
            errors["due_date"] = "La scadenza deve essere una data valida (AAAA-MM-GG)."

        if errors:
            raise ValidationFailed(errors)

        return cls(
            name=clean_str(data.get("name")),
            detail=clean_str(data.get("detail")),
            assigned_to=assigned_to,
            status=status,
            due_date=due_date,
        )
