"""
Builders for domain entities used across the test suite.

Defaults describe the reference scenario: a doctor charging 1000 per
consultation and a confirmed appointment with one patient.
"""

from datetime import datetime, timedelta
from typing import Optional

from clinic.domain.entities import (
    Appointment,
    AppointmentStatus,
    Bill,
    Doctor,
    Patient,
    Specialization,
)

DEFAULT_FEE = 1000.0


def make_doctor(
    doctor_id: str = "DOC-1001",
    name: str = "Asha Rao",
    consultation_fee: float = DEFAULT_FEE,
    specialization: Specialization = Specialization.CARDIOLOGY,
) -> Doctor:
    return Doctor(
        id=doctor_id,
        name=name,
        age=45,
        gender="F",
        phone="9876543210",
        email="asha.rao@clinic.example",
        specialization=specialization,
        consultation_fee=consultation_fee,
        years_of_experience=18,
    )


def make_patient(patient_id: str = "PAT-2001", name: str = "Ravi Kumar") -> Patient:
    return Patient(
        id=patient_id,
        name=name,
        age=34,
        gender="M",
        phone="9123456780",
        email="ravi.kumar@mail.example",
        blood_group="O+",
        allergies=["penicillin"],
        medical_history=["asthma"],
    )


def make_appointment(
    appointment_id: str = "APT-3001",
    doctor: Optional[Doctor] = None,
    patient: Optional[Patient] = None,
    status: AppointmentStatus = AppointmentStatus.CONFIRMED,
    scheduled_at: Optional[datetime] = None,
) -> Appointment:
    doctor = doctor or make_doctor()
    patient = patient or make_patient()
    return Appointment(
        id=appointment_id,
        doctor_id=doctor.id,
        patient_id=patient.id,
        doctor_name=doctor.name,
        patient_name=patient.name,
        scheduled_at=scheduled_at or datetime.now() + timedelta(days=1),
        status=status,
        notes="Follow-up",
    )


def make_bill(
    bill_id: str = "BILL-4001",
    consultation_fee: float = DEFAULT_FEE,
    discount: float = 0.0,
    tax_amount: float = 180.0,
    total_amount: float = 1180.0,
    bill_type: str = "STANDARD",
    patient_id: str = "PAT-2001",
) -> Bill:
    return Bill(
        id=bill_id,
        appointment_id="APT-3001",
        patient_id=patient_id,
        patient_name="Ravi Kumar",
        doctor_name="Asha Rao",
        consultation_fee=consultation_fee,
        discount=discount,
        tax_amount=tax_amount,
        total_amount=total_amount,
        bill_type=bill_type,
    )
