"""
Pacchetto principale dell'applicazione Flask (pannello amministrativo task).
"""

from flask import Flask, jsonify
from config import DevConfig
from .errors import StorageFailure, TaskAdminError, ValidationFailed
from .extensions import init_extensions


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    init_extensions(app)

    from .middleware.auth_session import init_auth_session
    init_auth_session(app)

    _register_blueprints(app)
    _register_error_handlers(app)

    app.logger.info("Applicazione Flask inizializzata.")

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _register_blueprints(app: Flask) -> None:
    from .api import (
        api_activity_logs_bp,
        api_auth_bp,
        api_roles_bp,
        api_tasks_bp,
        api_users_bp,
    )

    app.register_blueprint(api_auth_bp, url_prefix="/api/auth")
    app.register_blueprint(api_tasks_bp, url_prefix="/api/tasks")
    app.register_blueprint(api_users_bp, url_prefix="/api/users")
    app.register_blueprint(api_roles_bp, url_prefix="/api/roles")
    app.register_blueprint(api_activity_logs_bp, url_prefix="/api/activity-logs")


def _register_error_handlers(app: Flask) -> None:
    """Traduce le eccezioni applicative nell'involucro JSON delle API."""

    @app.errorhandler(TaskAdminError)
    def handle_app_error(exc: TaskAdminError):
        payload = None
        if isinstance(exc, ValidationFailed):
            payload = {"errors": exc.errors}
        if isinstance(exc, StorageFailure):
            app.logger.error("Errore di salvataggio", exc_info=exc)

        return jsonify(
            {
                "success": False,
                "message": exc.message,
                "payload": payload,
            }
        ), exc.status_code
