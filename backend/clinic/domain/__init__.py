"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- billing_types.py: Bill-type tag parsing
- tax_rules.py: Pure tax and discount arithmetic
- interfaces.py: Repository and observer contracts
"""

from .billing_types import BillType, BillTypeTag
from .entities import (
    Appointment,
    AppointmentStatus,
    Bill,
    BillSummary,
    Doctor,
    Patient,
    Specialization,
)
from .interfaces import (
    IAppointmentObserver,
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    IBillReader,
    IBillRepository,
    IBillWriter,
    IDoctorReader,
    IDoctorRepository,
    IDoctorWriter,
    IPatientReader,
    IPatientRepository,
    IPatientWriter,
)

__all__ = [
    # Domain entities
    "Appointment",
    "AppointmentStatus",
    "Bill",
    "BillSummary",
    "BillType",
    "BillTypeTag",
    "Doctor",
    "Patient",
    "Specialization",
    # Repository interfaces
    "IAppointmentRepository",
    "IBillRepository",
    "IDoctorRepository",
    "IPatientRepository",
    # Segregated interfaces
    "IAppointmentReader",
    "IAppointmentWriter",
    "IBillReader",
    "IBillWriter",
    "IDoctorReader",
    "IDoctorWriter",
    "IPatientReader",
    "IPatientWriter",
    # Observer contract
    "IAppointmentObserver",
]
