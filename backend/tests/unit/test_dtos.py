"""Unit tests for request/response DTOs."""

from datetime import datetime

import pytest

from clinic.core.exceptions import InvalidDataError
from clinic.domain.entities import AppointmentStatus, Specialization
from clinic.schemas.dtos import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AppointmentStatusUpdateRequest,
    BillGenerateRequest,
    BillResponse,
    DoctorCreateRequest,
    PatientCreateRequest,
    bill_summary_to_dict,
)
from tests.factories.entity_factories import make_appointment, make_bill


class TestDoctorCreateRequest:
    def test_from_payload(self):
        request = DoctorCreateRequest.from_payload(
            {
                "name": "Asha Rao",
                "age": "45",
                "consultation_fee": 1000,
                "specialization": "cardiology",
                "phone": "9876543210",
            }
        )
        request.validate()

        assert request.age == 45
        assert request.consultation_fee == 1000.0
        assert request.specialization is Specialization.CARDIOLOGY

    def test_non_numeric_fee(self):
        with pytest.raises(InvalidDataError) as exc_info:
            DoctorCreateRequest.from_payload(
                {"name": "A", "age": 40, "consultation_fee": "lots"}
            )
        assert exc_info.value.field_name == "consultation_fee"

    @pytest.mark.parametrize(
        "overrides,field_name",
        [
            ({"phone": "12345"}, "phone"),
            ({"email": "not-an-email"}, "email"),
            ({"consultation_fee": -1}, "consultation_fee"),
            ({"name": ""}, "name"),
        ],
    )
    def test_validate(self, overrides, field_name):
        payload = {"name": "Asha", "age": 40, "consultation_fee": 500}
        payload.update(overrides)
        request = DoctorCreateRequest.from_payload(payload)

        with pytest.raises(InvalidDataError) as exc_info:
            request.validate()
        assert exc_info.value.field_name == field_name


class TestPatientCreateRequest:
    def test_lists_default_to_empty(self):
        request = PatientCreateRequest.from_payload({"name": "Meera", "age": 29})
        assert request.allergies == []
        assert request.medical_history == []

    def test_allergies_must_be_a_list(self):
        with pytest.raises(InvalidDataError) as exc_info:
            PatientCreateRequest.from_payload(
                {"name": "Meera", "age": 29, "allergies": "dust"}
            )
        assert exc_info.value.field_name == "allergies"


@pytest.mark.appointment
class TestAppointmentRequests:
    def test_create_parses_iso_datetime(self):
        request = AppointmentCreateRequest.from_payload(
            {
                "doctor_id": "DOC-1001",
                "patient_id": "PAT-2001",
                "scheduled_at": "2026-04-02T15:30:00",
            }
        )
        request.validate()
        assert request.scheduled_at == datetime(2026, 4, 2, 15, 30)

    def test_create_rejects_bad_datetime(self):
        with pytest.raises(InvalidDataError) as exc_info:
            AppointmentCreateRequest.from_payload(
                {"doctor_id": "D", "patient_id": "P", "scheduled_at": "tomorrow"}
            )
        assert exc_info.value.field_name == "scheduled_at"

    def test_create_requires_ids(self):
        request = AppointmentCreateRequest.from_payload(
            {"scheduled_at": "2026-04-02T15:30:00"}
        )
        with pytest.raises(InvalidDataError) as exc_info:
            request.validate()
        assert exc_info.value.field_name == "doctor_id"

    def test_status_update_parses_status(self):
        request = AppointmentStatusUpdateRequest.from_payload({"status": "completed"})
        assert request.status is AppointmentStatus.COMPLETED

    def test_status_update_rejects_unknown(self):
        with pytest.raises(InvalidDataError):
            AppointmentStatusUpdateRequest.from_payload({"status": "lost"})

    def test_response_serialises_status_and_datetime(self):
        data = AppointmentResponse.from_domain(
            make_appointment(scheduled_at=datetime(2026, 4, 2, 15, 30))
        ).to_dict()

        assert data["status"] == "CONFIRMED"
        assert data["status_display"] == "Confirmed"
        assert data["scheduled_at"] == "2026-04-02T15:30:00"


@pytest.mark.billing
class TestBillDtos:
    def test_bill_type_defaults_to_standard(self):
        request = BillGenerateRequest.from_payload({"appointment_id": "APT-3001"})
        assert request.bill_type == "STANDARD"

    def test_bill_type_is_free_text(self):
        request = BillGenerateRequest.from_payload(
            {"appointment_id": "APT-3001", "bill_type": "vip"}
        )
        assert request.bill_type == "vip"

    def test_appointment_id_required(self):
        with pytest.raises(InvalidDataError) as exc_info:
            BillGenerateRequest.from_payload({}).validate()
        assert exc_info.value.field_name == "appointment_id"

    def test_bill_response_keeps_full_precision(self):
        bill = make_bill(tax_amount=10.01 * 0.18)
        data = BillResponse.from_domain(bill).to_dict()

        assert data["tax_amount"] == bill.tax_amount
        assert isinstance(data["billed_at"], str)

    def test_summary_dict(self):
        bill = make_bill()
        data = bill_summary_to_dict(bill.to_summary())

        assert data["bill_id"] == "BILL-4001"
        assert data["total_amount"] == bill.total_amount
        assert data["generated_at"] == bill.billed_at.isoformat()
