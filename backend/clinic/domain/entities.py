"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from clinic.core.exceptions import InvalidDataError
from clinic.core.validation import (
    validate_age,
    validate_non_negative,
    validate_not_empty,
)
from clinic.domain.tax_rules import apply_discount, calculate_tax


class Specialization(Enum):
    """Medical specializations, each with a display name and description."""

    CARDIOLOGY = ("Cardiology", "Heart and cardiovascular system")
    DERMATOLOGY = ("Dermatology", "Skin, hair, and nails")
    NEUROLOGY = ("Neurology", "Brain and nervous system")
    ORTHOPEDICS = ("Orthopedics", "Bones and joints")
    PEDIATRICS = ("Pediatrics", "Children's health")
    GENERAL = ("General Medicine", "General health and wellness")
    ENT = ("ENT", "Ear, Nose, and Throat")
    OPHTHALMOLOGY = ("Ophthalmology", "Eye care")
    PSYCHIATRY = ("Psychiatry", "Mental health")
    GYNECOLOGY = ("Gynecology", "Women's health")

    def __init__(self, display_name: str, description: str):
        self.display_name = display_name
        self.description = description

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Specialization":
        if raw is None or not str(raw).strip():
            return cls.GENERAL
        try:
            return cls[str(raw).strip().upper()]
        except KeyError:
            raise InvalidDataError(
                "specialization", f"Unknown specialization: {raw}"
            ) from None


class AppointmentStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, raw: Optional[str]) -> "AppointmentStatus":
        """Validate a caller-supplied status (case-insensitive)."""
        if isinstance(raw, cls):
            return raw
        if raw is None or not str(raw).strip():
            raise InvalidDataError("status", "status cannot be null or empty")
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            raise InvalidDataError(
                "status", f"Invalid appointment status: {raw}"
            ) from None


@dataclass
class Doctor:
    """Domain entity representing a Doctor and their consultation fee."""

    id: Optional[str] = None
    name: str = ""
    age: int = 0
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    specialization: Specialization = Specialization.GENERAL
    consultation_fee: float = 0.0
    years_of_experience: int = 0
    available_slots: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate business rules."""
        validate_not_empty(self.name, "name")
        validate_age(self.age)
        validate_non_negative(self.consultation_fee, "consultation_fee")
        if self.years_of_experience < 0:
            raise InvalidDataError(
                "years_of_experience", "years_of_experience must be non-negative"
            )

    def summary(self) -> str:
        return (
            f"Dr. {self.name} - {self.specialization.display_name} "
            f"(Fee: ${self.consultation_fee:.2f})"
        )


@dataclass
class Patient:
    """Domain entity representing a Patient."""

    id: Optional[str] = None
    name: str = ""
    age: int = 0
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    blood_group: Optional[str] = None
    allergies: List[str] = field(default_factory=list)
    medical_history: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate business rules."""
        validate_not_empty(self.name, "name")
        validate_age(self.age)

    def summary(self) -> str:
        return f"{self.name} (Age: {self.age}, Blood Group: {self.blood_group})"


@dataclass
class Appointment:
    """Domain entity for an appointment between a doctor and a patient.

    Only the current status is stored; there is no transition history.
    """

    id: Optional[str] = None
    doctor_id: str = ""
    patient_id: str = ""
    doctor_name: str = ""
    patient_name: str = ""
    scheduled_at: Optional[datetime] = None
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: Optional[str] = None

    def __post_init__(self):
        self.status = AppointmentStatus.parse(self.status)

    def summary(self) -> str:
        when = "-"
        if self.scheduled_at:
            when = self.scheduled_at.strftime("%d %b %Y, %I:%M %p")
        return (
            f"Appointment: {self.patient_name} with Dr. {self.doctor_name} "
            f"on {when} [{self.status.display_name}]"
        )


@dataclass(frozen=True)
class BillSummary:
    """Read-only reporting projection of a Bill."""

    bill_id: Optional[str]
    patient_name: str
    doctor_name: str
    consultation_fee: float
    tax_amount: float
    discount: float
    total_amount: float
    generated_at: Optional[datetime]

    def __str__(self) -> str:
        return (
            f"BillSummary(bill_id={self.bill_id}, patient={self.patient_name}, "
            f"doctor={self.doctor_name}, total=${self.total_amount:.2f})"
        )


@dataclass
class Bill:
    """Domain entity for a bill raised against an appointment.

    Invariant after any pricing step:
        tax = (fee - discount) * tax_rate
        total = (fee - discount) + tax
    """

    id: Optional[str] = None
    appointment_id: str = ""
    patient_id: str = ""
    patient_name: str = ""
    doctor_name: str = ""
    consultation_fee: float = 0.0
    discount: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    bill_type: str = "STANDARD"
    billed_at: Optional[datetime] = None

    def __post_init__(self):
        validate_non_negative(self.consultation_fee, "consultation_fee")
        if self.billed_at is None:
            self.billed_at = datetime.now()

    def calculate_total(self, tax_rate: float) -> float:
        """Re-derive tax and total from the fee and the current discount."""
        after_discount = self.consultation_fee - self.discount
        self.tax_amount = calculate_tax(after_discount, tax_rate)
        self.total_amount = after_discount + self.tax_amount
        return self.total_amount

    def apply_discount(self, discount_fraction: float, tax_rate: float) -> float:
        self.discount = apply_discount(self.consultation_fee, discount_fraction)
        return self.calculate_total(tax_rate)

    def to_summary(self) -> BillSummary:
        # Copies stored amounts as-is so the summary matches the bill exactly
        return BillSummary(
            bill_id=self.id,
            patient_name=self.patient_name,
            doctor_name=self.doctor_name,
            consultation_fee=self.consultation_fee,
            tax_amount=self.tax_amount,
            discount=self.discount,
            total_amount=self.total_amount,
            generated_at=self.billed_at,
        )

    def summary_line(self) -> str:
        return f"Bill #{self.id} - {self.patient_name} | Total: ${self.total_amount:.2f}"
