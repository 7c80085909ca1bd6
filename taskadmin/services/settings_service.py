"""
Servizi per la lettura delle impostazioni applicative (app.config).
"""

from flask import current_app


def get_setting(key: str, default=None):
    return current_app.config.get(key, default)


def get_int_setting(key: str, default: int) -> int:
    raw = current_app.config.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def get_bool_setting(key: str, default: bool = False) -> bool:
    raw = current_app.config.get(key, default)
    if isinstance(raw, str):
        return raw.strip().lower() in {"1", "true", "yes", "on"}
    return bool(raw)
