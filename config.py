"""
Modulo di configurazione per l'applicazione Flask del pannello task.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Configurazione base, comune a tutti gli ambienti."""

    # Chiave segreta: in produzione deve essere sovrascritta da variabile d'ambiente
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # --- CONFIGURAZIONE DATABASE MYSQL --------------------------------------
    DB_USER = os.environ.get("DB_USER", "taskadmin")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "taskadmin")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = os.environ.get("DB_PORT", "3306")
    DB_NAME = os.environ.get("DB_NAME", "pannello_task")

    # Stringa di connessione composta in modo parametrico
    DEFAULT_DB_URL = (
        f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", DEFAULT_DB_URL)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- PAGINAZIONE ---------------------------------------------------------
    TASKS_PER_PAGE = int(os.environ.get("TASKS_PER_PAGE", "5"))
    USERS_PER_PAGE = int(os.environ.get("USERS_PER_PAGE", "5"))
    ROLES_PER_PAGE = int(os.environ.get("ROLES_PER_PAGE", "5"))
    LOGS_PER_PAGE = int(os.environ.get("LOGS_PER_PAGE", "10"))

    # --- SWEEP TASK SCADUTI --------------------------------------------------
    # False: ogni esecuzione registra di nuovo tutti i task ancora scaduti.
    # True: un task viene registrato una sola volta dopo la sua scadenza.
    OVERDUE_SWEEP_DEDUP = _env_flag("OVERDUE_SWEEP_DEDUP")

    # Ruolo degli utenti proponibili come assegnatari dei task
    ASSIGNABLE_ROLE = os.environ.get("ASSIGNABLE_ROLE", "Staff")

    # --- SEED ----------------------------------------------------------------
    SEED_PASSWORD = os.environ.get("SEED_PASSWORD", "123456")

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "app.log")


class DevConfig(Config):
    """Configurazione per ambiente di sviluppo."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProdConfig(Config):
    """Configurazione per ambiente di produzione."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    """Configurazione per la suite di test (SQLite in memoria, log solo su console)."""
    TESTING = True
    DEBUG = False
    ENV = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_DIR = None
    LOG_LEVEL = "WARNING"
    OVERDUE_SWEEP_DEDUP = False
