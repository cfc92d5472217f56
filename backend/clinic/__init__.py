"""Clinic management backend: appointment lifecycle and billing."""

__version__ = "0.1.0"
