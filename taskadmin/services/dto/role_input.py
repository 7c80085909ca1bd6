"""DTO per i dati in ingresso di creazione/modifica di un Role."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from taskadmin.errors import ValidationFailed
from taskadmin.services.dto.form_parsing import as_list, clean_str, collect_missing, parse_int


@dataclass
class RoleInput:
    name: str
    permission_ids: List[int]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RoleInput":
        data = data or {}
        errors: Dict[str, str] = collect_missing(data, ["name", "permission_ids"])

        raw_ids = as_list(data.get("permission_ids"))
        permission_ids = [parse_int(v) for v in raw_ids]
        if "permission_ids" not in errors and any(pid is None for pid in permission_ids):
            errors["permission_ids"] = "Elenco permessi non valido."

        if errors:
            raise ValidationFailed(errors)

        return cls(
            name=clean_str(data.get("name")),
            permission_ids=sorted(set(permission_ids)),
        )
