"""
Doctor controller: registration and lookup endpoints.
"""

from flask import Blueprint

from clinic.container import get_container
from clinic.core.api_utils import api_response, error_response, get_json_body
from clinic.db.session import SessionLocal
from clinic.schemas.dtos import DoctorCreateRequest, DoctorResponse

doctor_bp = Blueprint("doctors", __name__, url_prefix="/api/doctors")


@doctor_bp.route("", methods=["POST"])
def register_doctor():
    """Register a doctor."""
    request_dto = DoctorCreateRequest.from_payload(get_json_body())
    db = SessionLocal()
    try:
        service = get_container().doctor_service(db)
        doctor = service.register_doctor(request_dto)
        return api_response(
            True,
            "Doctor registered",
            DoctorResponse.from_domain(doctor).to_dict(),
            201,
        )
    finally:
        db.close()


@doctor_bp.route("", methods=["GET"])
def list_doctors():
    db = SessionLocal()
    try:
        service = get_container().doctor_service(db)
        doctors = service.get_all_doctors()
        return api_response(
            True,
            f"{len(doctors)} doctor(s) found",
            [DoctorResponse.from_domain(d).to_dict() for d in doctors],
        )
    finally:
        db.close()


@doctor_bp.route("/<doctor_id>", methods=["GET"])
def get_doctor(doctor_id: str):
    db = SessionLocal()
    try:
        service = get_container().doctor_service(db)
        doctor = service.get_doctor_by_id(doctor_id)
        if doctor is None:
            return error_response(
                "not_found", f"Doctor not found with ID: {doctor_id}", 404
            )
        return api_response(
            True, "Doctor found", DoctorResponse.from_domain(doctor).to_dict()
        )
    finally:
        db.close()
