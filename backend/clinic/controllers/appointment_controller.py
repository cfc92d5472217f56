"""
Appointment controller following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Delegates every lifecycle rule to AppointmentService
- Lets NotFoundError / InvalidDataError reach the app-level error handlers
"""

from flask import Blueprint, request

from clinic.container import get_container
from clinic.core.api_utils import api_response, get_json_body
from clinic.db.session import SessionLocal
from clinic.schemas.dtos import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AppointmentStatusUpdateRequest,
)

appointment_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


def _serialize_many(appointments):
    return [AppointmentResponse.from_domain(a).to_dict() for a in appointments]


@appointment_bp.route("", methods=["POST"])
def create_appointment():
    """Create a new appointment (stored as CONFIRMED)."""
    request_dto = AppointmentCreateRequest.from_payload(get_json_body())
    request_dto.validate()

    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        appointment = service.create_appointment(
            request_dto.doctor_id,
            request_dto.patient_id,
            request_dto.scheduled_at,
            request_dto.notes,
        )
        return api_response(
            True,
            "Appointment created",
            AppointmentResponse.from_domain(appointment).to_dict(),
            201,
        )
    finally:
        db.close()


@appointment_bp.route("", methods=["GET"])
def list_appointments():
    """List appointments, optionally filtered with ?status=."""
    status = request.args.get("status")
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        if status:
            appointments = service.get_appointments_by_status(status)
        else:
            appointments = service.get_all_appointments()
        return api_response(
            True,
            f"{len(appointments)} appointment(s) found",
            _serialize_many(appointments),
        )
    finally:
        db.close()


@appointment_bp.route("/upcoming", methods=["GET"])
def upcoming_appointments():
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        appointments = service.get_upcoming_appointments()
        return api_response(
            True,
            f"{len(appointments)} upcoming appointment(s)",
            _serialize_many(appointments),
        )
    finally:
        db.close()


@appointment_bp.route("/doctor/<doctor_id>", methods=["GET"])
def appointments_by_doctor(doctor_id: str):
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        appointments = service.get_appointments_by_doctor(doctor_id)
        return api_response(
            True,
            f"{len(appointments)} appointment(s) found",
            _serialize_many(appointments),
        )
    finally:
        db.close()


@appointment_bp.route("/patient/<patient_id>", methods=["GET"])
def appointments_by_patient(patient_id: str):
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        appointments = service.get_appointments_by_patient(patient_id)
        return api_response(
            True,
            f"{len(appointments)} appointment(s) found",
            _serialize_many(appointments),
        )
    finally:
        db.close()


@appointment_bp.route("/analytics/per-doctor", methods=["GET"])
def count_per_doctor():
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        counts = service.get_appointment_count_per_doctor()
        return api_response(True, "Appointments per doctor", counts)
    finally:
        db.close()


@appointment_bp.route("/analytics/per-status", methods=["GET"])
def count_per_status():
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        counts = service.get_appointment_count_per_status()
        return api_response(True, "Appointments per status", counts)
    finally:
        db.close()


@appointment_bp.route("/<appointment_id>", methods=["GET"])
def get_appointment(appointment_id: str):
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        appointment = service.get_appointment_by_id(appointment_id)
        return api_response(
            True,
            "Appointment found",
            AppointmentResponse.from_domain(appointment).to_dict(),
        )
    finally:
        db.close()


@appointment_bp.route("/<appointment_id>/cancel", methods=["PUT"])
def cancel_appointment(appointment_id: str):
    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        appointment = service.cancel_appointment(appointment_id)
        return api_response(
            True,
            "Appointment cancelled",
            AppointmentResponse.from_domain(appointment).to_dict(),
        )
    finally:
        db.close()


@appointment_bp.route("/<appointment_id>/status", methods=["PUT"])
def update_status(appointment_id: str):
    """Set the status from the JSON body or the ?status= query parameter."""
    payload = get_json_body()
    if "status" not in payload and request.args.get("status"):
        payload = {"status": request.args.get("status")}
    request_dto = AppointmentStatusUpdateRequest.from_payload(payload)

    db = SessionLocal()
    try:
        service = get_container().appointment_service(db)
        appointment = service.update_status(
            appointment_id, request_dto.status
        )
        return api_response(
            True,
            "Appointment status updated",
            AppointmentResponse.from_domain(appointment).to_dict(),
        )
    finally:
        db.close()
