"""
Centralized configuration module for application-wide settings.

Values are read from environment variables (optionally loaded from a .env
file by the application factory) and cached at import time. Each section
exposes a ``get_*`` accessor, a module-level constant and a ``log_*_config``
helper that is called once during application startup.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# ===========================
# Billing Configuration
# ===========================

DEFAULT_TAX_RATE = 0.18
DEFAULT_INSURANCE_DISCOUNT_RATE = 0.15

# Fixed 50% surcharge applied to the base fee of emergency bills.
EMERGENCY_SURCHARGE_MULTIPLIER = 1.5


def _read_rate(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return default

    try:
        value = float(raw)
    except ValueError:
        logger.warning(
            f"Invalid value '{raw}' for {env_var}, falling back to {default}",
            extra={"context": {"env_var": env_var, "raw_value": raw}},
        )
        return default

    if value < 0 or value != value or value == float("inf"):
        logger.warning(
            f"{env_var} must be a finite non-negative number, falling back to {default}",
            extra={"context": {"env_var": env_var, "raw_value": raw}},
        )
        return default

    return value


def get_tax_rate() -> float:
    """
    Get the tax rate applied to consultation fees.

    Environment Variables:
        CLINIC_TAX_RATE: Fraction of the (discounted) fee charged as tax.
            Default: 0.18

    Examples:
        >>> # In .env file:
        >>> # CLINIC_TAX_RATE=0.18
        >>> get_tax_rate()
        0.18
    """
    return _read_rate("CLINIC_TAX_RATE", DEFAULT_TAX_RATE)


def get_insurance_discount_rate() -> float:
    """
    Get the discount fraction granted to insurance-covered bills.

    Environment Variables:
        CLINIC_INSURANCE_DISCOUNT_RATE: Fraction of the fee discounted.
            Default: 0.15
    """
    return _read_rate("CLINIC_INSURANCE_DISCOUNT_RATE", DEFAULT_INSURANCE_DISCOUNT_RATE)


TAX_RATE = get_tax_rate()
INSURANCE_DISCOUNT_RATE = get_insurance_discount_rate()


def log_billing_config(
    tax_rate: Optional[float] = None, insurance_discount_rate: Optional[float] = None
):
    """Log the billing rates in effect, defaulting to the environment values."""
    logger.info(
        "Billing configuration initialized",
        extra={
            "context": {
                "tax_rate": TAX_RATE if tax_rate is None else tax_rate,
                "insurance_discount_rate": (
                    INSURANCE_DISCOUNT_RATE
                    if insurance_discount_rate is None
                    else insurance_discount_rate
                ),
                "emergency_surcharge": EMERGENCY_SURCHARGE_MULTIPLIER,
            }
        },
    )


# ===========================
# Database Configuration
# ===========================


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL.

    Environment Variables:
        DATABASE_URL: Any SQLAlchemy URL.
            Default: 'sqlite:///./clinic.db'
            Tests: 'sqlite:///:memory:'
    """
    return os.getenv("DATABASE_URL", "sqlite:///./clinic.db")


# ===========================
# Logging Configuration
# ===========================


def _read_flag(env_var: str, default: str) -> bool:
    return os.getenv(env_var, default).strip().lower() in ("true", "1", "yes")


def get_log_settings() -> dict:
    """
    Get logging settings derived from the environment.

    Environment Variables:
        LOG_LEVEL: Root log level name. Default: DEBUG in development, INFO in production
        LOG_TO_FILE: Write rotating log files ("1"/"0"). Default: '1'
        LOG_JSON: Force JSON console output ("1"/"0"). Default: on in production
        FLASK_ENV: 'production' or 'development'. Default: 'development'
    """
    env = os.getenv("FLASK_ENV", "development")
    is_production = env == "production"
    return {
        "environment": env,
        "log_level": os.getenv("LOG_LEVEL", "INFO" if is_production else "DEBUG"),
        "log_to_file": _read_flag("LOG_TO_FILE", "1"),
        "use_json_format": _read_flag("LOG_JSON", "1" if is_production else "0"),
    }


def is_testing() -> bool:
    return _read_flag("TESTING", "false")
