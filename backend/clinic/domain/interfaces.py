"""
Abstract interfaces for repositories and observers following Interface
Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from .entities import Appointment, AppointmentStatus, Bill, Doctor, Patient


class IDoctorReader(ABC):
    """Interface for doctor read operations."""

    @abstractmethod
    def get_by_id(self, doctor_id: str) -> Optional[Doctor]:
        """Get doctor by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Doctor]:
        """Get all doctors."""
        pass


class IDoctorWriter(ABC):
    """Interface for doctor write operations."""

    @abstractmethod
    def create(self, doctor: Doctor) -> Doctor:
        """Persist a new doctor."""
        pass


class IDoctorRepository(IDoctorReader, IDoctorWriter):
    """Complete doctor repository interface."""

    pass


class IPatientReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        """Get patient by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Patient]:
        """Get all patients."""
        pass


class IPatientWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def create(self, patient: Patient) -> Patient:
        """Persist a new patient."""
        pass


class IPatientRepository(IPatientReader, IPatientWriter):
    """Complete patient repository interface."""

    pass


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_by_id(self, appointment_id: str) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Appointment]:
        """Get all appointments."""
        pass

    @abstractmethod
    def get_by_doctor_id(self, doctor_id: str) -> List[Appointment]:
        """Get all appointments for a doctor."""
        pass

    @abstractmethod
    def get_by_patient_id(self, patient_id: str) -> List[Appointment]:
        """Get all appointments for a patient."""
        pass

    @abstractmethod
    def get_by_status(self, status: AppointmentStatus) -> List[Appointment]:
        """Get all appointments currently in ``status``."""
        pass

    @abstractmethod
    def get_upcoming(self, after: datetime) -> List[Appointment]:
        """Get non-cancelled appointments scheduled after ``after``, soonest first."""
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def create(self, appointment: Appointment) -> Appointment:
        """Create a new appointment."""
        pass

    @abstractmethod
    def update(self, appointment: Appointment) -> Appointment:
        """Update an existing appointment."""
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass


class IBillReader(ABC):
    """Interface for bill read operations."""

    @abstractmethod
    def get_by_id(self, bill_id: str) -> Optional[Bill]:
        """Get bill by ID."""
        pass

    @abstractmethod
    def get_all(self) -> List[Bill]:
        """Get all bills."""
        pass

    @abstractmethod
    def get_by_patient_id(self, patient_id: str) -> List[Bill]:
        """Get all bills for a patient."""
        pass

    @abstractmethod
    def get_by_appointment_id(self, appointment_id: str) -> List[Bill]:
        """Get all bills raised against an appointment."""
        pass


class IBillWriter(ABC):
    """Interface for bill write operations."""

    @abstractmethod
    def create(self, bill: Bill) -> Bill:
        """Persist a priced bill."""
        pass


class IBillRepository(IBillReader, IBillWriter):
    """Complete bill repository interface."""

    pass


class IAppointmentObserver(ABC):
    """Receives the post-transition Appointment after each committed lifecycle change."""

    @abstractmethod
    def on_appointment_created(self, appointment: Appointment) -> None:
        pass

    @abstractmethod
    def on_appointment_cancelled(self, appointment: Appointment) -> None:
        pass

    @abstractmethod
    def on_appointment_status_changed(self, appointment: Appointment) -> None:
        pass
