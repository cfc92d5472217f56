"""
Appointment repository implementation following SOLID principles.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from clinic.db.base import Appointment as DbAppointment
from clinic.domain.entities import Appointment as DomainAppointment
from clinic.domain.entities import AppointmentStatus
from clinic.domain.interfaces import IAppointmentRepository


class AppointmentRepository(IAppointmentRepository):
    """Repository for Appointment persistence operations.

    Writes commit immediately; any failure rolls the session back and is
    re-raised, so a half-applied change is never visible to later reads.
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, appointment_id: str) -> Optional[DomainAppointment]:
        db_appointment = (
            self.db.query(DbAppointment).filter_by(id=appointment_id).first()
        )
        return self._to_domain(db_appointment) if db_appointment else None

    def get_all(self) -> List[DomainAppointment]:
        rows = self.db.query(DbAppointment).order_by(DbAppointment.id).all()
        return [self._to_domain(row) for row in rows]

    def get_by_doctor_id(self, doctor_id: str) -> List[DomainAppointment]:
        rows = (
            self.db.query(DbAppointment)
            .filter_by(doctor_id=doctor_id)
            .order_by(DbAppointment.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def get_by_patient_id(self, patient_id: str) -> List[DomainAppointment]:
        rows = (
            self.db.query(DbAppointment)
            .filter_by(patient_id=patient_id)
            .order_by(DbAppointment.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def get_by_status(self, status: AppointmentStatus) -> List[DomainAppointment]:
        rows = (
            self.db.query(DbAppointment)
            .filter_by(status=status.value)
            .order_by(DbAppointment.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def get_upcoming(self, after: datetime) -> List[DomainAppointment]:
        rows = (
            self.db.query(DbAppointment)
            .filter(
                DbAppointment.scheduled_at > after,
                DbAppointment.status != AppointmentStatus.CANCELLED.value,
            )
            .order_by(DbAppointment.scheduled_at.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def create(self, appointment: DomainAppointment) -> DomainAppointment:
        """Create a new appointment."""
        db_appointment = DbAppointment(id=appointment.id)
        self._apply(db_appointment, appointment)
        try:
            self.db.add(db_appointment)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_appointment)
        return self._to_domain(db_appointment)

    def update(self, appointment: DomainAppointment) -> DomainAppointment:
        """Update an existing appointment."""
        if not appointment.id:
            raise ValueError("Appointment ID is required for update")

        db_appointment = (
            self.db.query(DbAppointment).filter_by(id=appointment.id).first()
        )
        if db_appointment is None:
            raise ValueError(f"Appointment with ID {appointment.id} not found")

        try:
            self._apply(db_appointment, appointment)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_appointment)
        return self._to_domain(db_appointment)

    @staticmethod
    def _apply(db_appointment: DbAppointment, appointment: DomainAppointment) -> None:
        db_appointment.doctor_id = appointment.doctor_id
        db_appointment.patient_id = appointment.patient_id
        db_appointment.doctor_name = appointment.doctor_name
        db_appointment.patient_name = appointment.patient_name
        db_appointment.scheduled_at = appointment.scheduled_at
        db_appointment.status = appointment.status.value
        db_appointment.notes = appointment.notes

    def _to_domain(self, db_appointment: DbAppointment) -> DomainAppointment:
        """Convert database model to domain entity."""
        return DomainAppointment(
            id=db_appointment.id,
            doctor_id=db_appointment.doctor_id,
            patient_id=db_appointment.patient_id,
            doctor_name=db_appointment.doctor_name or "",
            patient_name=db_appointment.patient_name or "",
            scheduled_at=db_appointment.scheduled_at,
            status=AppointmentStatus(db_appointment.status),
            notes=db_appointment.notes,
        )
