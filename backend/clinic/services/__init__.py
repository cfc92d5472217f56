# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import (
    appointment_service,
    bill_factory,
    billing_service,
    billing_strategies,
    doctor_service,
    notification_service,
    patient_service,
)

__all__ = [
    "appointment_service",
    "bill_factory",
    "billing_service",
    "billing_strategies",
    "doctor_service",
    "notification_service",
    "patient_service",
]
