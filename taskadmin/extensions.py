"""
Estensioni Flask condivise: istanza ``db`` e logging JSON del pannello.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from flask import Flask, g, has_request_context
from flask_sqlalchemy import SQLAlchemy

# Inizializzata da create_app()
db = SQLAlchemy()

_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Chiavi che non devono mai finire nei log, nemmeno per errore
REDACTED_KEYS = frozenset({"password", "password_hash", "confirm_password", "confirm-password"})


def _request_actor_id() -> Optional[int]:
    if not has_request_context():
        return None
    actor = getattr(g, "current_user", None)
    return getattr(actor, "id", None)


class JsonFormatter(logging.Formatter):
    """
    Una riga JSON per record:

    - timestamp (UTC, suffisso Z), level, logger, module, message
    - actor_id: utente della richiesta corrente, se c'è
    - extra: campi passati con extra={...}, con le chiavi sensibili oscurate
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_record: Dict[str, Any] = {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        actor_id = _request_actor_id()
        if actor_id is not None:
            log_record["actor_id"] = actor_id

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        extra_fields = {
            key: ("***" if key in REDACTED_KEYS else value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }
        if extra_fields:
            log_record["extra"] = extra_fields

        return json.dumps(log_record, ensure_ascii=False, default=str)


def init_extensions(app: Flask) -> None:
    """Chiamata da create_app(): database e logging."""
    db.init_app(app)
    _init_logging(app)


def _build_handlers(app: Flask) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    log_dir = app.config.get("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(log_dir, app.config.get("LOG_FILE_NAME", "app.log")),
                maxBytes=5 * 1024 * 1024,  # 5 MB
                backupCount=3,
                encoding="utf-8",
            )
        )
    return handlers


def _init_logging(app: Flask) -> None:
    """
    Configura il root logger con formatter JSON.

    Console sempre (dev, container, cron dello sweep); file rotante solo se
    LOG_DIR è impostata. I test usano solo la console.
    """
    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    app.logger.setLevel(log_level)

    # create_app può essere chiamata più volte nello stesso processo (test)
    if getattr(root_logger, "_json_logging_configured", False):
        for handler in root_logger.handlers:
            handler.setLevel(log_level)
        return

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = JsonFormatter()
    for handler in _build_handlers(app):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger._json_logging_configured = True  # type: ignore[attr-defined]

    app.logger.info(
        "Logging JSON inizializzato.",
        extra={"component": "logging", "log_dir": app.config.get("LOG_DIR"), "level": level_name},
    )
