"""
Bill controller: bill generation, lookup and revenue analytics.
"""

from flask import Blueprint

from clinic.container import get_container
from clinic.core.api_utils import api_response, error_response, get_json_body
from clinic.db.session import SessionLocal
from clinic.schemas.dtos import BillGenerateRequest, BillResponse, bill_summary_to_dict

bill_bp = Blueprint("bills", __name__, url_prefix="/api/bills")


@bill_bp.route("", methods=["POST"])
def generate_bill():
    """Generate a bill for an appointment.

    Body: {"appointment_id": "...", "bill_type": "STANDARD|INSURANCE|EMERGENCY"}
    Unrecognised bill types are billed as STANDARD.
    """
    request_dto = BillGenerateRequest.from_payload(get_json_body())
    request_dto.validate()

    db = SessionLocal()
    try:
        service = get_container().billing_service(db)
        bill = service.generate_bill(
            request_dto.appointment_id, request_dto.bill_type
        )
        return api_response(
            True, "Bill generated", BillResponse.from_domain(bill).to_dict(), 201
        )
    finally:
        db.close()


@bill_bp.route("", methods=["GET"])
def list_bills():
    db = SessionLocal()
    try:
        service = get_container().billing_service(db)
        bills = service.get_all_bills()
        return api_response(
            True,
            f"{len(bills)} bill(s) found",
            [BillResponse.from_domain(b).to_dict() for b in bills],
        )
    finally:
        db.close()


@bill_bp.route("/analytics/revenue", methods=["GET"])
def revenue_analytics():
    db = SessionLocal()
    try:
        service = get_container().billing_service(db)
        return api_response(
            True,
            "Revenue analytics",
            {
                "total_revenue": service.get_total_revenue(),
                "revenue_by_type": service.get_revenue_by_bill_type(),
            },
        )
    finally:
        db.close()


@bill_bp.route("/patient/<patient_id>", methods=["GET"])
def bills_by_patient(patient_id: str):
    db = SessionLocal()
    try:
        service = get_container().billing_service(db)
        bills = service.get_bills_by_patient(patient_id)
        return api_response(
            True,
            f"{len(bills)} bill(s) found",
            [BillResponse.from_domain(b).to_dict() for b in bills],
        )
    finally:
        db.close()


@bill_bp.route("/<bill_id>", methods=["GET"])
def get_bill(bill_id: str):
    db = SessionLocal()
    try:
        service = get_container().billing_service(db)
        bill = service.get_bill_by_id(bill_id)
        if bill is None:
            return error_response(
                "not_found", f"Bill not found with ID: {bill_id}", 404
            )
        return api_response(
            True, "Bill found", BillResponse.from_domain(bill).to_dict()
        )
    finally:
        db.close()


@bill_bp.route("/<bill_id>/summary", methods=["GET"])
def get_bill_summary(bill_id: str):
    db = SessionLocal()
    try:
        service = get_container().billing_service(db)
        summary = service.get_bill_summary(bill_id)
        return api_response(True, "Bill summary", bill_summary_to_dict(summary))
    finally:
        db.close()
