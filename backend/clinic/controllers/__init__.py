from .appointment_controller import appointment_bp
from .bill_controller import bill_bp
from .doctor_controller import doctor_bp
from .patient_controller import patient_bp

__all__ = ["appointment_bp", "bill_bp", "doctor_bp", "patient_bp"]
