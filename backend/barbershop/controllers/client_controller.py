"""
Client controller - client register and client history.
"""

from flask import Blueprint, request

from ..core.api_utils import api_response, error_response, parse_optional_int
from ..db.session import SessionLocal
from ..repositories import AppointmentRepository, ClientRepository
from ..schemas.dtos import ClientProfileResponse, ClientRequest
from ..services.client_service import ClientService

client_bp = Blueprint("clients", __name__, url_prefix="/api/clients")


def _build_service(db) -> ClientService:
    return ClientService(ClientRepository(db), AppointmentRepository(db))


@client_bp.route("", methods=["GET"])
def list_clients():
    """Every client with revenue, service counts and cancellations."""
    db = SessionLocal()
    try:
        profiles = _build_service(db).list_profiles()
        return api_response(
            True, f"{len(profiles)} clients", [p.to_dict() for p in profiles]
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@client_bp.route("", methods=["POST"])
def create_client():
    db = SessionLocal()
    try:
        data = request.get_json(silent=True) or {}
        client_request = ClientRequest(
            name=data.get("name") or "",
            age=parse_optional_int(data.get("age"), "age"),
            phone=str(data.get("phone") or ""),
        )
        client = _build_service(db).create_client(client_request)
        return api_response(
            True, "Client created", ClientProfileResponse(client=client).to_dict(), 201
        )
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@client_bp.route("/<int:client_id>", methods=["GET"])
def get_client(client_id: int):
    db = SessionLocal()
    try:
        profile = _build_service(db).get_profile(client_id)
        return api_response(True, "Client history", profile.to_dict())
    except Exception as e:
        return error_response(e)
    finally:
        db.close()


@client_bp.route("/<int:client_id>", methods=["DELETE"])
def delete_client(client_id: int):
    db = SessionLocal()
    try:
        _build_service(db).delete_client(client_id)
        return api_response(True, "Client deleted")
    except Exception as e:
        return error_response(e)
    finally:
        db.close()
