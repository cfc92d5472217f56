"""
Appointment service following SOLID principles.

Owns the appointment lifecycle: creation, cancellation and status updates.
Each committed transition is followed by a synchronous notification to the
registered observers. Transitions are deliberately permissive: any status
may move to any other status.
"""

import logging
from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Union

from clinic.core.exceptions import AppointmentNotFoundError, InvalidDataError
from clinic.domain.entities import Appointment, AppointmentStatus
from clinic.domain.interfaces import (
    IAppointmentObserver,
    IAppointmentRepository,
    IDoctorReader,
    IPatientReader,
)
from clinic.services.notification_service import AppointmentNotifier
from clinic.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class AppointmentService:
    """Application service for appointment-related use-cases.

    This service demonstrates:
    - Single Responsibility: Handles only appointment business logic
    - Dependency Inversion: Depends on interfaces, not concrete implementations
    """

    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        doctor_repo: IDoctorReader,
        patient_repo: IPatientReader,
        id_generator: IdGenerator,
        notifier: Optional[AppointmentNotifier] = None,
    ):
        self.appointment_repo = appointment_repo
        self.doctor_repo = doctor_repo
        self.patient_repo = patient_repo
        self.id_generator = id_generator
        self.notifier = notifier if notifier is not None else AppointmentNotifier()

    def add_observer(self, observer: IAppointmentObserver) -> None:
        self.notifier.register(observer)

    # --- Lifecycle transitions ---

    def create_appointment(
        self,
        doctor_id: str,
        patient_id: str,
        scheduled_at: Optional[datetime],
        notes: Optional[str] = None,
    ) -> Appointment:
        """Book an appointment; it is always stored as CONFIRMED.

        Business Rules:
        - Doctor and patient must both exist (InvalidDataError otherwise)
        """
        doctor = self.doctor_repo.get_by_id(doctor_id)
        if doctor is None:
            raise InvalidDataError("doctor_id", f"Doctor not found: {doctor_id}")
        patient = self.patient_repo.get_by_id(patient_id)
        if patient is None:
            raise InvalidDataError("patient_id", f"Patient not found: {patient_id}")

        appointment = Appointment(
            id=self.id_generator.next_appointment_id(),
            doctor_id=doctor_id,
            patient_id=patient_id,
            doctor_name=doctor.name,
            patient_name=patient.name,
            scheduled_at=scheduled_at,
            notes=notes,
        )
        # New appointments skip the PENDING state
        appointment.status = AppointmentStatus.CONFIRMED

        saved = self.appointment_repo.create(appointment)
        logger.info(
            "Appointment created",
            extra={
                "context": {
                    "appointment_id": saved.id,
                    "doctor_id": doctor_id,
                    "patient_id": patient_id,
                }
            },
        )
        self.notifier.notify_created(saved)
        return saved

    def cancel_appointment(self, appointment_id: str) -> Appointment:
        """Cancel an appointment, whatever its current status."""
        appointment = self.get_appointment_by_id(appointment_id)
        saved = self.appointment_repo.update(
            replace(appointment, status=AppointmentStatus.CANCELLED)
        )
        logger.info(
            "Appointment cancelled",
            extra={
                "context": {
                    "appointment_id": saved.id,
                    "previous_status": appointment.status.value,
                }
            },
        )
        self.notifier.notify_cancelled(saved)
        return saved

    def update_status(
        self, appointment_id: str, status: Union[AppointmentStatus, str]
    ) -> Appointment:
        """Move an appointment to ``status``; no transition table is enforced."""
        new_status = AppointmentStatus.parse(status)
        appointment = self.get_appointment_by_id(appointment_id)
        saved = self.appointment_repo.update(replace(appointment, status=new_status))
        logger.info(
            "Appointment status changed",
            extra={
                "context": {
                    "appointment_id": saved.id,
                    "previous_status": appointment.status.value,
                    "status": saved.status.value,
                }
            },
        )
        self.notifier.notify_status_changed(saved)
        return saved

    # --- Queries ---

    def get_appointment_by_id(self, appointment_id: str) -> Appointment:
        appointment = self.appointment_repo.get_by_id(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    def get_all_appointments(self) -> List[Appointment]:
        return self.appointment_repo.get_all()

    def get_appointments_by_doctor(self, doctor_id: str) -> List[Appointment]:
        return self.appointment_repo.get_by_doctor_id(doctor_id)

    def get_appointments_by_patient(self, patient_id: str) -> List[Appointment]:
        return self.appointment_repo.get_by_patient_id(patient_id)

    def get_appointments_by_status(
        self, status: Union[AppointmentStatus, str]
    ) -> List[Appointment]:
        return self.appointment_repo.get_by_status(AppointmentStatus.parse(status))

    def get_upcoming_appointments(
        self, now: Optional[datetime] = None
    ) -> List[Appointment]:
        """Non-cancelled appointments scheduled after ``now``, soonest first."""
        return self.appointment_repo.get_upcoming(now or datetime.now())

    # --- Analytics ---

    def get_appointment_count_per_doctor(self) -> Dict[str, int]:
        return dict(Counter(a.doctor_name for a in self.appointment_repo.get_all()))

    def get_appointment_count_per_status(self) -> Dict[str, int]:
        return dict(Counter(a.status.value for a in self.appointment_repo.get_all()))
