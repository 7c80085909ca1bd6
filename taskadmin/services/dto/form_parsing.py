"""Helper comuni per la lettura dei campi in ingresso (dict JSON o form)."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

REQUIRED_MESSAGE = "Il campo {field} è obbligatorio."


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set)):
        return len(value) == 0
    return False


def collect_missing(data: Mapping[str, Any], fields: List[str]) -> Dict[str, str]:
    """Mappa campo -> messaggio per tutti i campi obbligatori mancanti o vuoti."""
    return {
        field: REQUIRED_MESSAGE.format(field=field)
        for field in fields
        if is_blank(data.get(field))
    }


def clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_date(value: Any) -> Optional[date]:
    """Accetta date/datetime o stringhe 'YYYY-MM-DD'; None se non interpretabile."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_int(value: Any) -> Optional[int]:
    if value in (None, "") or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def as_list(value: Any) -> List[Any]:
    """Normalizza un valore singolo o una lista (es. roles=['Staff'] o roles='Staff')."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [v for v in value if not is_blank(v)]
    return [] if is_blank(value) else [value]
