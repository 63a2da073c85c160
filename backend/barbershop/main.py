import logging
import os
from typing import Optional

from flask import Flask, jsonify
from sqlalchemy import text

from .core import config
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def test_database_connection() -> bool:
    """Return True when a trivial query succeeds on the configured database."""
    from .db.session import get_engine

    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False


def create_app(config_overrides: Optional[dict] = None) -> Flask:
    """Application factory.

    Configures logging, creates tables, seeds the default catalog (unless
    disabled) and registers the API blueprints.
    """
    env = os.getenv("FLASK_ENV", "development")
    is_production = env == "production"

    app = Flask(__name__)
    app.config["TESTING"] = config.TESTING
    app.config["SEED_DEFAULT_CATALOG"] = not config.TESTING
    if config_overrides:
        app.config.update(config_overrides)

    setup_logging(
        app=app,
        log_level=config.LOG_LEVEL,
        log_to_file=config.LOG_TO_FILE and not app.config["TESTING"],
        use_json_format=config.LOG_JSON or is_production,
    )
    logger.info(
        "Logging configured",
        extra={
            "context": {
                "environment": env,
                "json_format": config.LOG_JSON or is_production,
                "testing": app.config["TESTING"],
            }
        },
    )
    config.log_scheduling_config()

    from .db.seed import seed_default_catalog
    from .db.session import SessionLocal, create_tables

    try:
        create_tables()
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(
            "Error creating tables",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        raise

    if app.config["SEED_DEFAULT_CATALOG"]:
        db = SessionLocal()
        try:
            seed_default_catalog(db)
        finally:
            db.close()

    from .controllers.appointment_controller import appointment_bp
    from .controllers.catalog_controller import catalog_bp
    from .controllers.client_controller import client_bp
    from .controllers.finance_controller import finance_bp
    from .controllers.settings_controller import settings_bp

    app.register_blueprint(appointment_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(client_bp)
    app.register_blueprint(finance_bp)
    app.register_blueprint(settings_bp)

    @app.route("/health")
    def health_check():
        """Health check endpoint for Docker"""
        db_status = test_database_connection()
        return jsonify(
            {
                "status": "healthy" if db_status else "unhealthy",
                "database": "connected" if db_status else "disconnected",
            }
        ), (200 if db_status else 503)

    @app.cli.command("seed")
    def seed_command():
        """Insert the default services and professional into an empty catalog."""
        db = SessionLocal()
        try:
            seeded = seed_default_catalog(db)
        finally:
            db.close()
        print("Default catalog seeded." if seeded else "Catalog already populated.")

    return app
