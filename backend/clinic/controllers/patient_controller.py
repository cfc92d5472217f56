"""
Patient controller: registration and lookup endpoints.
"""

from flask import Blueprint

from clinic.container import get_container
from clinic.core.api_utils import api_response, error_response, get_json_body
from clinic.db.session import SessionLocal
from clinic.schemas.dtos import PatientCreateRequest, PatientResponse

patient_bp = Blueprint("patients", __name__, url_prefix="/api/patients")


@patient_bp.route("", methods=["POST"])
def register_patient():
    """Register a patient."""
    request_dto = PatientCreateRequest.from_payload(get_json_body())
    db = SessionLocal()
    try:
        service = get_container().patient_service(db)
        patient = service.register_patient(request_dto)
        return api_response(
            True,
            "Patient registered",
            PatientResponse.from_domain(patient).to_dict(),
            201,
        )
    finally:
        db.close()


@patient_bp.route("", methods=["GET"])
def list_patients():
    db = SessionLocal()
    try:
        service = get_container().patient_service(db)
        patients = service.get_all_patients()
        return api_response(
            True,
            f"{len(patients)} patient(s) found",
            [PatientResponse.from_domain(p).to_dict() for p in patients],
        )
    finally:
        db.close()


@patient_bp.route("/<patient_id>", methods=["GET"])
def get_patient(patient_id: str):
    db = SessionLocal()
    try:
        service = get_container().patient_service(db)
        patient = service.get_patient_by_id(patient_id)
        if patient is None:
            return error_response(
                "not_found", f"Patient not found with ID: {patient_id}", 404
            )
        return api_response(
            True, "Patient found", PatientResponse.from_domain(patient).to_dict()
        )
    finally:
        db.close()
