"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Taxonomy:
- NotFoundError: a referenced appointment or bill does not exist (HTTP 404)
- InvalidDataError: a referenced doctor/patient does not exist, or a field
  failed validation (HTTP 400)
Anything else reaching the HTTP boundary is reported as an opaque 500.
"""

from typing import Optional


class ClinicError(Exception):
    """Base class for every error raised deliberately by the clinic core."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ClinicError):
    """Raised when an appointment or bill identifier cannot be resolved."""

    def __init__(self, entity: str, identifier: Optional[str]):
        super().__init__(f"{entity} not found with ID: {identifier}")
        self.entity = entity
        self.identifier = identifier


class AppointmentNotFoundError(NotFoundError):
    def __init__(self, appointment_id: Optional[str]):
        super().__init__("Appointment", appointment_id)
        self.appointment_id = appointment_id


class BillNotFoundError(NotFoundError):
    def __init__(self, bill_id: Optional[str]):
        super().__init__("Bill", bill_id)
        self.bill_id = bill_id


class InvalidDataError(ClinicError):
    """Raised when input data is invalid or a referenced record is missing.

    Carries the offending field name so the HTTP layer can report it.
    """

    def __init__(self, field_name: Optional[str], message: str):
        super().__init__(message)
        self.field_name = field_name
