"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging
import os

from flask import Flask, send_from_directory
from flask_login import current_user

from .error_handlers import register_error_handlers as _register_error_handlers
from .extensions import csrf_protect, db, login_manager, migrate, scheduler
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Replace Flask's default handler with the StudyMate logging setup."""

    setup_logging(
        app,
        log_level=app.config.get('LOG_LEVEL', 'INFO'),
        log_dir=app.config.get('LOG_DIR'),
        to_file=app.config.get('LOG_TO_FILE', False),
    )
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf_protect.init_app(app)

    if not app.config.get('SCHEDULER_ENABLED', False):
        app.logger.debug("Scheduler disabled by configuration.")
        return

    # Avoid starting a second scheduler in the reloader's parent process
    if not app.debug or os.environ.get("WERKZEUG_RUN_MAIN") == "true":
        from apscheduler.schedulers import SchedulerAlreadyRunningError
        try:
            scheduler.init_app(app)
            if not scheduler.running:
                scheduler.start()

            from ..modules.auth.tasks import purge_expired_password_resets
            if not scheduler.get_job('purge_password_resets'):
                scheduler.add_job(
                    id='purge_password_resets',
                    func=purge_expired_password_resets,
                    trigger='cron',
                    hour=3,
                    minute=0,
                    replace_existing=True
                )
                app.logger.info("Registered job purge_password_resets (03:00 daily).")
        except SchedulerAlreadyRunningError:
            app.logger.info("Scheduler already running, skipping re-initialisation.")


def configure_static_uploads(app: Flask) -> None:
    """Expose user uploads (avatars) under /uploads."""

    upload_folder = app.config['UPLOAD_FOLDER']

    def media_uploads(filename: str):
        return send_from_directory(upload_folder, filename)

    app.add_url_rule('/uploads/<path:filename>', endpoint='media_uploads', view_func=media_uploads)
    app.logger.debug("Serving uploads from %s at /uploads", upload_folder)


def register_context_processors(app: Flask) -> None:
    """Register template filters, globals and the Flask-Login user loader."""

    from ..utils.template_filters import register_template_filters

    register_template_filters(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, int(user_id))

    @app.context_processor
    def inject_globals() -> dict[str, object]:
        return {
            "current_user": current_user,
            "app_name": app.config.get('APP_NAME', 'StudyMate'),
        }


def register_error_handlers(app: Flask) -> None:
    """Attach the application's error handlers."""

    _register_error_handlers(app)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables if they do not exist yet."""

    from .. import models  # noqa: F401  # make sure every model is registered

    db.create_all()
    app.logger.log(logging.DEBUG, "Database tables ensured at %s", app.config['SQLALCHEMY_DATABASE_URI'])
