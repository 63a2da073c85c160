"""
Appointment controller - HTTP endpoints for availability and bookings.

Handles HTTP concerns only; every rule lives in AppointmentService.
"""

from typing import Optional

from flask import Blueprint, request

from ..core.api_utils import (
    api_response,
    error_response,
    parse_date_param,
    parse_id_list,
    parse_optional_int,
)
from ..db.session import SessionLocal
from ..domain.entities import AppointmentStatus, RecurrenceRequest, parse_time
from ..repositories import AppointmentRepository, CatalogRepository, ShopSettingsRepository
from ..schemas.dtos import BookingRequest, RescheduleRequest
from ..services.appointment_service import AppointmentService

appointment_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


def _build_service(db) -> AppointmentService:
    return AppointmentService(
        AppointmentRepository(db),
        CatalogRepository(db),
        ShopSettingsRepository(db),
    )


def _parse_start(data: dict):
    start_date = parse_date_param(data.get("date")) if data.get("date") else None
    start_time = parse_time(data["time"]) if data.get("time") else None
    return start_date, start_time


def _parse_recurrence(data: Optional[dict]) -> RecurrenceRequest:
    if not data:
        return RecurrenceRequest()
    count = parse_optional_int(data.get("count"), "count") or 0
    return RecurrenceRequest(cadence=data.get("cadence") or "none", occurrence_count=count)


@appointment_bp.route("/slots", methods=["GET"])
def available_slots():
    """Free start times for a professional, a date and a set of services.

    Query params: professional_id, date (YYYY-MM-DD), service_ids (comma
    separated) and optionally exclude_id when editing an appointment.
    """
    db = SessionLocal()
    try:
        day = parse_date_param(request.args.get("date"))
        professional_id = parse_optional_int(
            request.args.get("professional_id"), "professional_id"
        )
        service_ids = parse_id_list(request.args.get("service_ids"))
        exclude_id = parse_optional_int(request.args.get("exclude_id"), "exclude_id")

        service = _build_service(db)
        slots = service.get_available_slots(
            professional_id, day, service_ids, exclude_appointment_id=exclude_id
        )
        return api_response(
            True,
            f"{len(slots)} slots available",
            {
                "date": day.isoformat(),
                "is_open": service.is_shop_open(day),
                "slots": slots,
            },
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@appointment_bp.route("", methods=["POST"])
def create_appointment():
    """Book an appointment, optionally repeating it."""
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        start_date, start_time = _parse_start(data)
        booking = BookingRequest(
            client_name=data.get("client_name") or "",
            professional_id=parse_optional_int(
                data.get("professional_id"), "professional_id"
            ),
            service_ids=parse_id_list(data.get("service_ids")),
            start_date=start_date,
            start_time=start_time,
            notes=data.get("notes"),
            recurrence=_parse_recurrence(data.get("recurrence")),
        )

        result = _build_service(db).book(booking)
        return api_response(True, result.message, result.to_dict(), 201)
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@appointment_bp.route("/<int:appointment_id>", methods=["GET"])
def get_appointment(appointment_id: int):
    db = SessionLocal()
    try:
        response = _build_service(db).get_appointment(appointment_id)
        return api_response(True, "Appointment found", response.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@appointment_bp.route("/<int:appointment_id>", methods=["PUT"])
def update_appointment(appointment_id: int):
    """Edit a pending appointment (client, professional, services, time)."""
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        start_date, start_time = _parse_start(data)
        reschedule = RescheduleRequest(
            client_name=data.get("client_name") or "",
            professional_id=parse_optional_int(
                data.get("professional_id"), "professional_id"
            ),
            service_ids=parse_id_list(data.get("service_ids")),
            start_date=start_date,
            start_time=start_time,
            notes=data.get("notes"),
        )

        response = _build_service(db).reschedule(appointment_id, reschedule)
        return api_response(True, "Appointment updated", response.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@appointment_bp.route("/<int:appointment_id>/complete", methods=["POST"])
def complete_appointment(appointment_id: int):
    db = SessionLocal()
    try:
        response = _build_service(db).complete(appointment_id)
        return api_response(True, "Appointment completed", response.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@appointment_bp.route("/<int:appointment_id>/cancel", methods=["POST"])
def cancel_appointment(appointment_id: int):
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        response = _build_service(db).cancel(appointment_id, data.get("reason") or "")
        return api_response(True, "Appointment canceled", response.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@appointment_bp.route("/day", methods=["GET"])
def daily_schedule():
    """Appointments of one day, optionally filtered by professional and status."""
    db = SessionLocal()
    try:
        day = parse_date_param(request.args.get("date"))
        professional_id = parse_optional_int(
            request.args.get("professional_id"), "professional_id"
        )
        status = request.args.get("status")
        if status:
            try:
                status = AppointmentStatus(status.upper())
            except ValueError:
                raise ValueError(f"Invalid status '{status}'")

        appointments = _build_service(db).get_daily_schedule(
            day, professional_id=professional_id, status=status or None
        )
        return api_response(
            True,
            f"{len(appointments)} appointments",
            [a.to_dict() for a in appointments],
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@appointment_bp.route("/day/summary", methods=["GET"])
def day_summary():
    db = SessionLocal()
    try:
        day = parse_date_param(request.args.get("date"))
        summary = _build_service(db).get_day_summary(day)
        return api_response(True, "Day summary", summary.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()
