"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging

from flask import Flask

from ..extensions import csrf_protect, db, login_manager
from .error_handlers import register_error_handlers as _register_error_handlers
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure the package logger and the Flask app logger."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
        log_to_file=app.config.get("LOG_TO_FILE", True),
    )

    if app.logger.handlers:
        return

    app.logger.setLevel(logging.DEBUG if app.debug else logging.INFO)
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)
    csrf_protect.init_app(app)


def register_user_loader(app: Flask) -> None:
    """Wire Flask-Login to the User model."""

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None


def register_error_handlers(app: Flask) -> None:
    _register_error_handlers(app)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables and ensure the default data exists."""

    from ..models import Semester, User
    from .seeds import seed_sample_data

    db.create_all()

    admin_user = User.query.filter_by(is_admin=True).first()
    if admin_user is None:
        admin = User(username=app.config.get("DEFAULT_ADMIN_USERNAME", "admin"), is_admin=True)
        admin.set_password(app.config.get("DEFAULT_ADMIN_PASSWORD", "admin"))
        db.session.add(admin)
        db.session.commit()
        app.logger.info("Created default admin user '%s'.", admin.username)
    else:
        app.logger.info("Admin user already present, skipping default admin creation.")

    if app.config.get("SEED_SAMPLE_DATA") and Semester.query.first() is None:
        result = seed_sample_data()
        app.logger.info(
            "Seeded %s sample semesters with %s words.", result["semesters"], result["words"]
        )
