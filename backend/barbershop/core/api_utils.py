"""
Common API utilities for consistent response formatting across all controllers.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

from flask import jsonify

from ..schemas.dtos import ErrorResponse
from .exceptions import (
    InvalidStatusTransitionError,
    ResourceInUseError,
    ResourceNotFoundError,
    SlotUnavailableError,
)
from .logging_config import get_logger

logger = get_logger(__name__)


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def error_response(exc: Exception) -> tuple:
    """Map a service exception to an error payload and HTTP status.

    ValueError -> 400, ResourceNotFoundError -> 404,
    slot, status and in-use conflicts -> 409, anything else -> 500.
    """
    if isinstance(exc, ResourceNotFoundError):
        error = ErrorResponse.not_found(exc.resource, exc.resource_id)
        status_code = 404
    elif isinstance(
        exc, (SlotUnavailableError, InvalidStatusTransitionError, ResourceInUseError)
    ):
        error, status_code = ErrorResponse.conflict(str(exc)), 409
    elif isinstance(exc, ValueError):
        error, status_code = ErrorResponse.validation_error(str(exc)), 400
    else:
        logger.error(
            "Unhandled error while processing request",
            extra={"context": {"error": str(exc)}},
            exc_info=True,
        )
        error, status_code = ErrorResponse.server_error(), 500
    return jsonify(error.to_dict()), status_code


def parse_date_param(value: Optional[str], name: str = "date") -> date:
    """Parse an ISO ``YYYY-MM-DD`` request value."""
    if not value:
        raise ValueError(f"{name} is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid {name} '{value}', expected YYYY-MM-DD")


def parse_id_list(value: Any) -> List[int]:
    """Accept ``[1, 2]`` from JSON bodies or ``"1,2"`` from query strings."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    try:
        return [int(item) for item in value]
    except (TypeError, ValueError):
        raise ValueError("Service ids must be integers")


def parse_optional_int(value: Any, name: str) -> Optional[int]:
    """Whole numbers only: ``2``, ``2.0`` and ``"2"`` pass, ``2.7`` does not."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name} must be an integer")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer")


def parse_number(value: Any, name: str) -> float:
    """Parse a required amount given as a JSON number or a numeric string."""
    if value is None or value == "":
        raise ValueError(f"{name} is required")
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, TypeError):
        raise ValueError(f"{name} must be a number")
    if not number.is_finite():
        raise ValueError(f"{name} must be a number")
    return float(number)


def parse_bool(value: Any, name: str, default: bool = False) -> bool:
    """Accept JSON booleans or the strings "true"/"false"; nothing else."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"{name} must be true or false")


def parse_month_param(value: Optional[str]) -> Tuple[int, int]:
    """Parse ``YYYY-MM``; the current month when missing."""
    if not value:
        today = date.today()
        return today.year, today.month
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
    except ValueError:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM")
    if not 1 <= month <= 12 or year < 1:
        raise ValueError(f"Invalid month '{value}', expected YYYY-MM")
    return year, month
