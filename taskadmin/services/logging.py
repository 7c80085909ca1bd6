"""Eventi di business in formato strutturato (mutazioni, accessi negati, sweep)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from taskadmin.extensions import REDACTED_KEYS

EVENTS_LOGGER = "taskadmin.events"


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """
    Scrive un evento sul logger ``taskadmin.events``; ``action`` e ``fields``
    finiscono nel blocco extra della riga JSON.

    Le chiavi sensibili vengono scartate prima di arrivare al formatter.
    Un errore di logging non interrompe mai il servizio chiamante.
    """
    logger = logging.getLogger(EVENTS_LOGGER)
    emit = getattr(logger, level.lower(), logger.info)

    extra = {key: value for key, value in fields.items() if key not in REDACTED_KEYS}
    extra["action"] = action

    try:
        emit(message or action, extra=extra)
    except Exception:
        logger.debug("Evento %s non registrato", action, exc_info=True)
