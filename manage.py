#!/usr/bin/env python3
"""
Script di gestione del pannello task.

Uso:
    python manage.py runserver     # Avvia il server di sviluppo
    python manage.py create-db     # Crea le tabelle del database MySQL
    python manage.py seed          # Permessi, ruoli e utenti iniziali
    python manage.py log-overdue   # Sweep dei task scaduti (da cron)

Esempio crontab (ogni ora):
    0 * * * * cd /srv/pannello-task && .venv/bin/python manage.py log-overdue
"""

import argparse
import logging
import os
import sys

from sqlalchemy.exc import OperationalError as SAOperationalError

from taskadmin import create_app
from taskadmin.extensions import db
from config import DevConfig, ProdConfig

# ---------------------------------------------------------------------
# Logger CLI (fuori dal contesto Flask)
# ---------------------------------------------------------------------
cli_logger = logging.getLogger("manage_cli")
cli_logger.setLevel(logging.INFO)

if not cli_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s: %(name)s: %(message)s")
    )
    cli_logger.addHandler(handler)


# ---------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------
def _import_all_models() -> None:
    """Assicura che tutti i modelli siano registrati prima di create_all()."""
    import taskadmin.models  # noqa: F401


# ---------------------------------------------------------------------
# Comandi
# ---------------------------------------------------------------------
def create_db(app) -> int:
    """Crea tutte le tabelle del database definite nei modelli SQLAlchemy."""
    with app.app_context():
        cli_logger.info("Tentativo di creare tutte le tabelle nel database...")
        try:
            _import_all_models()
            db.create_all()
        except SAOperationalError as e:
            cli_logger.error("Errore di connessione o permessi DB: %s", e)
            cli_logger.info(
                "Verifica che MySQL sia attivo e che l'utente '%s' abbia accesso al DB '%s'.",
                app.config.get("DB_USER"),
                app.config.get("DB_NAME"),
            )
            return 1
        cli_logger.info("Database creato con successo.")
        return 0


def seed(app) -> int:
    """Inserisce permessi, ruoli e utenti iniziali (idempotente)."""
    from taskadmin.services import seed_defaults

    with app.app_context():
        summary = seed_defaults(app.config["SEED_PASSWORD"])
        cli_logger.info(
            "Seed completato: %s permessi, %s ruoli, %s utenti creati.",
            summary["permissions"],
            summary["roles"],
            summary["users"],
        )
        return 0


def log_overdue(app) -> int:
    """Registra nel log attività i task scaduti e non completati."""
    from taskadmin.services import run_overdue_sweep

    with app.app_context():
        result = run_overdue_sweep()
        cli_logger.info("Registrati %s task scaduti.", result.logged)
        if result.skipped:
            cli_logger.info("Saltati %s task già registrati.", result.skipped)
        for task_id, error in result.errors:
            cli_logger.error("Task %s non registrato: %s", task_id, error)
        return 1 if result.errors else 0


def run_server(app) -> int:
    """Avvia il server di sviluppo Flask (LAN-ready)."""
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))
    debug = app.config.get("DEBUG", False)

    app.logger.info("Avvio del server su http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)
    return 0


COMMANDS = {
    "runserver": run_server,
    "create-db": create_db,
    "seed": seed,
    "log-overdue": log_overdue,
}


# ---------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Gestione del pannello amministrativo task."
    )
    parser.add_argument(
        "command",
        choices=sorted(COMMANDS),
        help="Comando da eseguire.",
    )
    parser.add_argument(
        "--prod",
        action="store_true",
        help="Usa la configurazione di produzione.",
    )

    args = parser.parse_args(argv)

    app = create_app(ProdConfig if args.prod else DevConfig)
    return COMMANDS[args.command](app)


if __name__ == "__main__":
    sys.exit(main())
