import logging
import os
from typing import Any, Dict, Iterable, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from sqlalchemy import text

from clinic.container import EXTENSION_KEY, ClinicContainer, load_id_seeds
from clinic.core.api_utils import register_error_handlers
from clinic.core.config import get_log_settings, is_testing, log_billing_config
from clinic.core.logging_config import setup_logging
from clinic.db.session import SessionLocal, create_tables, get_engine
from clinic.domain.interfaces import IAppointmentObserver
from clinic.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)

# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()


def check_database_connection() -> bool:
    """Test database connection"""
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False


def _build_id_generator() -> IdGenerator:
    db = SessionLocal()
    try:
        seeds = load_id_seeds(db)
    finally:
        db.close()
    return IdGenerator(
        doctor_seed=seeds["doctor"],
        patient_seed=seeds["patient"],
        appointment_seed=seeds["appointment"],
        bill_seed=seeds["bill"],
    )


def create_app(
    config_overrides: Optional[Dict[str, Any]] = None,
    observers: Optional[Iterable[IAppointmentObserver]] = None,
) -> Flask:
    """
    Application factory.

    Args:
        config_overrides: Flask config values; ``DATABASE_URL``, ``TAX_RATE`` and
            ``INSURANCE_DISCOUNT_RATE`` are also honoured here
        observers: Extra appointment observers registered after the
            logging observer
    """
    config_overrides = dict(config_overrides or {})

    if "DATABASE_URL" in config_overrides:
        os.environ["DATABASE_URL"] = config_overrides.pop("DATABASE_URL")

    app = Flask(__name__)
    app.config["TESTING"] = is_testing()
    app.config.update(config_overrides)
    app.json.sort_keys = False

    log_settings = get_log_settings()
    setup_logging(
        app,
        log_level=log_settings["log_level"],
        log_to_file=log_settings["log_to_file"] and not app.config["TESTING"],
        use_json_format=log_settings["use_json_format"],
    )
    logger.info(
        "Starting clinic backend",
        extra={"context": {"environment": log_settings["environment"]}},
    )

    create_tables()

    container = ClinicContainer.build(
        tax_rate=app.config.get("TAX_RATE"),
        insurance_discount_rate=app.config.get("INSURANCE_DISCOUNT_RATE"),
        id_generator=_build_id_generator(),
        observers=observers,
    )
    app.extensions[EXTENSION_KEY] = container
    log_billing_config(
        container.strategy_registry.tax_rate,
        container.strategy_registry.insurance_discount_rate,
    )

    from clinic.controllers import appointment_bp, bill_bp, doctor_bp, patient_bp

    app.register_blueprint(doctor_bp)
    app.register_blueprint(patient_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(bill_bp)

    register_error_handlers(app)

    @app.route("/health")
    def health_check():
        db_status = check_database_connection()
        return jsonify(
            {
                "status": "healthy" if db_status else "unhealthy",
                "database": "connected" if db_status else "disconnected",
            }
        ), (200 if db_status else 503)

    logger.info(
        "Clinic backend ready",
        extra={"context": {"id_counters": container.id_generator.snapshot()}},
    )
    return app
