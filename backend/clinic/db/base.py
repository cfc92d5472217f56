from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .session import Base


class Doctor(Base):
    """Doctor model"""

    __tablename__ = "doctors"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gender: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    specialization: Mapped[str] = mapped_column(String(30), nullable=False)
    # Float (double precision) keeps amounts bit-identical through storage
    consultation_fee: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    years_of_experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_slots: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Doctor(id='{self.id}', name='{self.name}', fee={self.consultation_fee})>"


class Patient(Base):
    """Patient model"""

    __tablename__ = "patients"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gender: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    blood_group: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    allergies: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    medical_history: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Patient(id='{self.id}', name='{self.name}')>"


class Appointment(Base):
    """Appointment model. Doctor/patient are plain references, resolved on demand."""

    __tablename__ = "appointments"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    doctor_id: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    patient_id: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    doctor_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    patient_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    scheduled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self):
        return f"<Appointment(id='{self.id}', status='{self.status}')>"


class Bill(Base):
    """Bill model. Several bills may reference the same appointment."""

    __tablename__ = "bills"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    appointment_id: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    patient_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    patient_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    doctor_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    consultation_fee: Mapped[float] = mapped_column(Float, nullable=False)
    tax_amount: Mapped[float] = mapped_column(Float, nullable=False)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    bill_type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    billed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Bill(id='{self.id}', type='{self.bill_type}', total={self.total_amount})>"
