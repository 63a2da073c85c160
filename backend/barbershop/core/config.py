"""
Centralized configuration module for application-wide settings.

Values are read from the environment once at import time. A ``.env`` file
next to the backend root is loaded first when present (existing environment
variables are never overridden).
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


# ===========================
# Database Configuration
# ===========================


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL.

    Environment Variables:
        DATABASE_URL: Any SQLAlchemy URL. Heroku-style ``postgres://`` URLs
            are rewritten to ``postgresql://``.
            Default: local SQLite file ``barbershop.db``
    """
    database_url = (os.getenv("DATABASE_URL") or "").strip()
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    return database_url or "sqlite:///barbershop.db"


# ===========================
# Scheduling Configuration
# ===========================

ALLOWED_SLOT_STEPS = (5, 10, 15, 20, 30, 60)
DEFAULT_SLOT_STEP_MINUTES = 15

MONTHLY_POLICY_ROLLOVER = "rollover"
MONTHLY_POLICY_CLAMP = "clamp"
MONTHLY_POLICIES = (MONTHLY_POLICY_ROLLOVER, MONTHLY_POLICY_CLAMP)

DEFAULT_MAX_RECURRENCE_COUNT = 52


def get_slot_step_minutes() -> int:
    """
    Get the slot grid granularity in minutes.

    Environment Variables:
        SLOT_STEP_MINUTES: One of 5, 10, 15, 20, 30 or 60.
            Default: 15

    Invalid values fall back to the default with a warning.
    """
    raw = os.getenv("SLOT_STEP_MINUTES", str(DEFAULT_SLOT_STEP_MINUTES))
    try:
        step = int(raw)
    except (TypeError, ValueError):
        step = None

    if step not in ALLOWED_SLOT_STEPS:
        logger.warning(
            f"Invalid SLOT_STEP_MINUTES '{raw}'. "
            f"Falling back to {DEFAULT_SLOT_STEP_MINUTES}.",
            extra={"context": {"allowed": list(ALLOWED_SLOT_STEPS)}},
        )
        return DEFAULT_SLOT_STEP_MINUTES
    return step


def get_monthly_recurrence_policy() -> str:
    """
    Get how a monthly cadence handles days missing from the target month.

    Environment Variables:
        MONTHLY_RECURRENCE_POLICY:
            'rollover' - overflow days carry into the following month
                         (Jan 31 + 1 month -> Mar 3 on a 28-day February)
            'clamp'    - use the last valid day of the target month
                         (Jan 31 + 1 month -> Feb 28)
            Default: 'rollover'
    """
    policy = os.getenv("MONTHLY_RECURRENCE_POLICY", MONTHLY_POLICY_ROLLOVER)
    policy = policy.strip().lower()
    if policy not in MONTHLY_POLICIES:
        logger.warning(
            f"Invalid MONTHLY_RECURRENCE_POLICY '{policy}'. "
            f"Falling back to '{MONTHLY_POLICY_ROLLOVER}'."
        )
        return MONTHLY_POLICY_ROLLOVER
    return policy


def get_max_recurrence_count() -> int:
    """Upper bound for the number of repeats accepted in one booking."""
    try:
        value = int(
            os.getenv("MAX_RECURRENCE_COUNT", str(DEFAULT_MAX_RECURRENCE_COUNT))
        )
    except (TypeError, ValueError):
        return DEFAULT_MAX_RECURRENCE_COUNT
    return value if value > 0 else DEFAULT_MAX_RECURRENCE_COUNT


SLOT_STEP_MINUTES = get_slot_step_minutes()
MONTHLY_RECURRENCE_POLICY = get_monthly_recurrence_policy()
MAX_RECURRENCE_COUNT = get_max_recurrence_count()


# ===========================
# Logging Configuration
# ===========================

TESTING = _env_flag("TESTING", "false")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_JSON = _env_flag("LOG_JSON", "false")
LOG_TO_FILE = _env_flag("LOG_TO_FILE", "false" if TESTING else "true")


def log_scheduling_config():
    """
    Log the active scheduling configuration.

    Should be called during application startup to provide visibility
    into the slot grid and recurrence policy being used.
    """
    logger.info(
        "Scheduling configuration initialized",
        extra={
            "context": {
                "slot_step_minutes": SLOT_STEP_MINUTES,
                "monthly_recurrence_policy": MONTHLY_RECURRENCE_POLICY,
                "max_recurrence_count": MAX_RECURRENCE_COUNT,
            }
        },
    )
