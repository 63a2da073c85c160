"""
Settings controller - shop operating calendar and profile endpoints.
"""

from flask import Blueprint, request

from ..core.api_utils import (
    api_response,
    error_response,
    parse_bool,
    parse_date_param,
    parse_number,
)
from ..db.session import SessionLocal
from ..repositories import ShopSettingsRepository
from ..schemas.dtos import CalendarSettingsRequest, ShopProfileRequest, SpecialDayRequest
from ..services.settings_service import ShopSettingsService

settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.route("/calendar", methods=["GET"])
def get_calendar():
    db = SessionLocal()
    try:
        calendar = ShopSettingsService(ShopSettingsRepository(db)).get_calendar()
        return api_response(True, "Operating calendar", calendar.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@settings_bp.route("/calendar", methods=["PUT"])
def update_calendar():
    """Replace the weekly pattern: {"working_days": [0..6], "start", "end"}."""
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        settings_request = CalendarSettingsRequest(
            working_days=list(data.get("working_days") or []),
            start=data.get("start") or "",
            end=data.get("end") or "",
        )
        calendar = ShopSettingsService(
            ShopSettingsRepository(db)
        ).update_weekly_pattern(settings_request)
        return api_response(True, "Operating calendar updated", calendar.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@settings_bp.route("/calendar/special-days/<day>", methods=["PUT"])
def set_special_day(day: str):
    """Close the shop on ``day`` or give it custom hours."""
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        special_day_request = SpecialDayRequest(
            date=parse_date_param(day),
            is_closed=parse_bool(data.get("is_closed"), "is_closed"),
            start=data.get("start"),
            end=data.get("end"),
        )
        calendar = ShopSettingsService(ShopSettingsRepository(db)).set_special_day(
            special_day_request
        )
        return api_response(True, "Special day saved", calendar.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@settings_bp.route("/calendar/special-days/<day>", methods=["DELETE"])
def remove_special_day(day: str):
    db = SessionLocal()
    try:
        removed = ShopSettingsService(ShopSettingsRepository(db)).remove_special_day(
            parse_date_param(day)
        )
        if not removed:
            return api_response(False, "Special day not found", status_code=404)
        return api_response(True, "Special day removed")
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@settings_bp.route("/profile", methods=["GET"])
def get_profile():
    db = SessionLocal()
    try:
        profile = ShopSettingsService(ShopSettingsRepository(db)).get_profile()
        return api_response(True, "Shop profile", profile.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@settings_bp.route("/profile", methods=["PUT"])
def update_profile():
    """{"name", "address", "monthly_goal"}"""
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        profile_request = ShopProfileRequest(
            name=data.get("name") or "",
            address=data.get("address") or "",
            monthly_goal=parse_number(data.get("monthly_goal", 0), "monthly_goal"),
        )
        profile = ShopSettingsService(ShopSettingsRepository(db)).update_profile(
            profile_request
        )
        return api_response(True, "Shop profile updated", profile.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()
