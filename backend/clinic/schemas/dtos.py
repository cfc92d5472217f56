"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification

Request DTOs are built from JSON payloads with ``from_payload`` and checked
with ``validate()``; response DTOs are built from domain entities with
``from_domain`` and serialised with ``to_dict()``.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from clinic.core.exceptions import InvalidDataError
from clinic.core.validation import (
    validate_age,
    validate_email,
    validate_non_negative,
    validate_not_empty,
    validate_phone,
)
from clinic.domain.billing_types import BillType
from clinic.domain.entities import (
    Appointment,
    AppointmentStatus,
    Bill,
    BillSummary,
    Doctor,
    Patient,
    Specialization,
)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_datetime(value: Any, field_name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDataError(field_name, f"{field_name} is required (ISO-8601)")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        raise InvalidDataError(
            field_name, f"{field_name} must be an ISO-8601 date-time"
        ) from None


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise InvalidDataError(field_name, f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidDataError(field_name, f"{field_name} must be an integer") from None


def _as_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise InvalidDataError(field_name, f"{field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidDataError(field_name, f"{field_name} must be a number") from None


def _as_str_list(value: Any, field_name: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidDataError(field_name, f"{field_name} must be a list")
    return [str(item) for item in value]


@dataclass
class DoctorCreateRequest:
    """DTO for doctor registration requests."""

    name: str
    age: int
    consultation_fee: float
    specialization: Specialization = Specialization.GENERAL
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    years_of_experience: int = 0

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "DoctorCreateRequest":
        return cls(
            name=data.get("name") or "",
            age=_as_int(data.get("age"), "age"),
            consultation_fee=_as_float(data.get("consultation_fee"), "consultation_fee"),
            specialization=Specialization.parse(data.get("specialization")),
            gender=data.get("gender"),
            phone=data.get("phone"),
            email=data.get("email"),
            years_of_experience=_as_int(
                data.get("years_of_experience", 0), "years_of_experience"
            ),
        )

    def validate(self) -> None:
        """Validate the request data."""
        validate_not_empty(self.name, "name")
        validate_age(self.age)
        validate_non_negative(self.consultation_fee, "consultation_fee")
        if self.phone is not None:
            validate_phone(self.phone)
        if self.email is not None:
            validate_email(self.email)
        if self.years_of_experience < 0:
            raise InvalidDataError(
                "years_of_experience", "years_of_experience must be non-negative"
            )


@dataclass
class PatientCreateRequest:
    """DTO for patient registration requests."""

    name: str
    age: int
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    blood_group: Optional[str] = None
    allergies: List[str] = field(default_factory=list)
    medical_history: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "PatientCreateRequest":
        return cls(
            name=data.get("name") or "",
            age=_as_int(data.get("age"), "age"),
            gender=data.get("gender"),
            phone=data.get("phone"),
            email=data.get("email"),
            blood_group=data.get("blood_group"),
            allergies=_as_str_list(data.get("allergies"), "allergies"),
            medical_history=_as_str_list(data.get("medical_history"), "medical_history"),
        )

    def validate(self) -> None:
        """Validate the request data."""
        validate_not_empty(self.name, "name")
        validate_age(self.age)
        if self.phone is not None:
            validate_phone(self.phone)
        if self.email is not None:
            validate_email(self.email)


@dataclass
class AppointmentCreateRequest:
    """DTO for appointment creation requests."""

    doctor_id: str
    patient_id: str
    scheduled_at: datetime
    notes: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "AppointmentCreateRequest":
        return cls(
            doctor_id=data.get("doctor_id") or "",
            patient_id=data.get("patient_id") or "",
            scheduled_at=_parse_datetime(data.get("scheduled_at"), "scheduled_at"),
            notes=data.get("notes", ""),
        )

    def validate(self) -> None:
        validate_not_empty(self.doctor_id, "doctor_id")
        validate_not_empty(self.patient_id, "patient_id")


@dataclass
class AppointmentStatusUpdateRequest:
    """DTO for status updates; the status is validated here, before the service runs."""

    status: AppointmentStatus

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "AppointmentStatusUpdateRequest":
        return cls(status=AppointmentStatus.parse(data.get("status")))


@dataclass
class BillGenerateRequest:
    """DTO for bill generation requests. ``bill_type`` is free text."""

    appointment_id: str
    bill_type: str = BillType.STANDARD.value

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "BillGenerateRequest":
        return cls(
            appointment_id=data.get("appointment_id") or "",
            bill_type=data.get("bill_type") or BillType.STANDARD.value,
        )

    def validate(self) -> None:
        validate_not_empty(self.appointment_id, "appointment_id")


@dataclass
class DoctorResponse:
    id: str
    name: str
    age: int
    gender: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    specialization: str
    specialization_display: str
    consultation_fee: float
    years_of_experience: int

    @classmethod
    def from_domain(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(
            id=doctor.id,
            name=doctor.name,
            age=doctor.age,
            gender=doctor.gender,
            phone=doctor.phone,
            email=doctor.email,
            specialization=doctor.specialization.name,
            specialization_display=doctor.specialization.display_name,
            consultation_fee=doctor.consultation_fee,
            years_of_experience=doctor.years_of_experience,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PatientResponse:
    id: str
    name: str
    age: int
    gender: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    blood_group: Optional[str]
    allergies: List[str]
    medical_history: List[str]

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            name=patient.name,
            age=patient.age,
            gender=patient.gender,
            phone=patient.phone,
            email=patient.email,
            blood_group=patient.blood_group,
            allergies=list(patient.allergies),
            medical_history=list(patient.medical_history),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppointmentResponse:
    """DTO for appointment API responses."""

    id: str
    doctor_id: str
    patient_id: str
    doctor_name: str
    patient_name: str
    scheduled_at: Optional[datetime]
    status: str
    status_display: str
    notes: Optional[str]

    @classmethod
    def from_domain(cls, appointment: Appointment) -> "AppointmentResponse":
        """Create response from domain entity."""
        return cls(
            id=appointment.id,
            doctor_id=appointment.doctor_id,
            patient_id=appointment.patient_id,
            doctor_name=appointment.doctor_name,
            patient_name=appointment.patient_name,
            scheduled_at=appointment.scheduled_at,
            status=appointment.status.value,
            status_display=appointment.status.display_name,
            notes=appointment.notes,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["scheduled_at"] = _isoformat(self.scheduled_at)
        return data


@dataclass
class BillResponse:
    """DTO for bill API responses. Amounts are returned unrounded."""

    id: str
    appointment_id: str
    patient_id: str
    patient_name: str
    doctor_name: str
    consultation_fee: float
    discount: float
    tax_amount: float
    total_amount: float
    bill_type: str
    billed_at: Optional[datetime]

    @classmethod
    def from_domain(cls, bill: Bill) -> "BillResponse":
        return cls(
            id=bill.id,
            appointment_id=bill.appointment_id,
            patient_id=bill.patient_id,
            patient_name=bill.patient_name,
            doctor_name=bill.doctor_name,
            consultation_fee=bill.consultation_fee,
            discount=bill.discount,
            tax_amount=bill.tax_amount,
            total_amount=bill.total_amount,
            bill_type=bill.bill_type,
            billed_at=bill.billed_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["billed_at"] = _isoformat(self.billed_at)
        return data


def bill_summary_to_dict(summary: BillSummary) -> Dict[str, Any]:
    data = asdict(summary)
    data["generated_at"] = _isoformat(summary.generated_at)
    return data
