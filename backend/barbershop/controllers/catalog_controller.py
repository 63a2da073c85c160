"""
Catalog controller - services and professionals.
"""

from flask import Blueprint, request

from ..core.api_utils import (
    api_response,
    error_response,
    parse_number,
    parse_optional_int,
)
from ..db.session import SessionLocal
from ..repositories import AppointmentRepository, CatalogRepository
from ..schemas.dtos import ProfessionalRequest, ServiceRequest
from ..services.catalog_service import CatalogService

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api/catalog")


def _build_service(db) -> CatalogService:
    return CatalogService(CatalogRepository(db), AppointmentRepository(db))


def _service_dict(service) -> dict:
    return {
        "id": service.id,
        "name": service.name,
        "price": service.price,
        "duration_minutes": service.duration_minutes,
    }


def _professional_dict(professional) -> dict:
    return {
        "id": professional.id,
        "name": professional.name,
        "specialty": professional.specialty,
    }


def _service_request(data: dict) -> ServiceRequest:
    """JSON numbers or numeric strings; anything else is a 400."""
    duration = parse_optional_int(data.get("duration_minutes"), "duration_minutes")
    if duration is None:
        raise ValueError("duration_minutes is required")
    return ServiceRequest(
        name=data.get("name") or "",
        price=parse_number(data.get("price"), "price"),
        duration_minutes=duration,
    )


def _professional_request(data: dict) -> ProfessionalRequest:
    return ProfessionalRequest(
        name=data.get("name") or "", specialty=data.get("specialty") or ""
    )


@catalog_bp.route("/services", methods=["GET"])
def list_services():
    db = SessionLocal()
    try:
        services = _build_service(db).list_services()
        return api_response(
            True, f"{len(services)} services", [_service_dict(s) for s in services]
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@catalog_bp.route("/services", methods=["POST"])
def create_service():
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        service = _build_service(db).create_service(_service_request(data))
        return api_response(True, "Service created", _service_dict(service), 201)
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@catalog_bp.route("/services/<int:service_id>", methods=["PUT"])
def update_service(service_id: int):
    """Replace name, price and duration; booked appointments keep their snapshot."""
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        service = _build_service(db).update_service(service_id, _service_request(data))
        return api_response(True, "Service updated", _service_dict(service))
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@catalog_bp.route("/services/<int:service_id>", methods=["DELETE"])
def delete_service(service_id: int):
    db = SessionLocal()
    try:
        _build_service(db).delete_service(service_id)
        return api_response(True, "Service deleted")
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@catalog_bp.route("/professionals", methods=["GET"])
def list_professionals():
    db = SessionLocal()
    try:
        professionals = _build_service(db).list_professionals()
        return api_response(
            True,
            f"{len(professionals)} professionals",
            [_professional_dict(p) for p in professionals],
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@catalog_bp.route("/professionals", methods=["POST"])
def create_professional():
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        professional = _build_service(db).create_professional(
            _professional_request(data)
        )
        return api_response(
            True, "Professional created", _professional_dict(professional), 201
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@catalog_bp.route("/professionals/<int:professional_id>", methods=["PUT"])
def update_professional(professional_id: int):
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        professional = _build_service(db).update_professional(
            professional_id, _professional_request(data)
        )
        return api_response(
            True, "Professional updated", _professional_dict(professional)
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@catalog_bp.route("/professionals/<int:professional_id>", methods=["DELETE"])
def delete_professional(professional_id: int):
    """409 while the professional still has pending appointments."""
    db = SessionLocal()
    try:
        _build_service(db).delete_professional(professional_id)
        return api_response(True, "Professional deleted")
    except Exception as e:
        return error_response(e)
    finally:
        db.close()
