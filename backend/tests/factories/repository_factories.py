"""
Repository test factories following Interface Segregation Principle.

This module provides mock factories for repository interfaces, ensuring
tests only depend on the specific interfaces they need.
"""

from unittest.mock import Mock

from clinic.domain.interfaces import (
    IAppointmentObserver,
    IAppointmentReader,
    IAppointmentRepository,
    IBillRepository,
    IDoctorReader,
    IDoctorRepository,
    IPatientReader,
    IPatientRepository,
)


def _echo_create(mock_repo: Mock) -> None:
    # Writes return the entity they were given, like a repository after refresh
    mock_repo.create.side_effect = lambda entity: entity


class DoctorRepositoryFactory:
    """Factory for creating Doctor repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        """Create mock that only implements IDoctorReader operations."""
        mock_reader = Mock(spec=IDoctorReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.get_all.return_value = []
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IDoctorRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_all.return_value = []
        _echo_create(mock_repo)
        return mock_repo


class PatientRepositoryFactory:
    """Factory for creating Patient repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IPatientReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.get_all.return_value = []
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IPatientRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_all.return_value = []
        _echo_create(mock_repo)
        return mock_repo


class AppointmentRepositoryFactory:
    """Factory for creating Appointment repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        mock_reader = Mock(spec=IAppointmentReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.get_all.return_value = []
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        """Create mock that implements both read and write operations."""
        mock_repo = Mock(spec=IAppointmentRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_all.return_value = []
        mock_repo.get_by_doctor_id.return_value = []
        mock_repo.get_by_patient_id.return_value = []
        mock_repo.get_by_status.return_value = []
        mock_repo.get_upcoming.return_value = []
        _echo_create(mock_repo)
        mock_repo.update.side_effect = lambda appointment: appointment
        return mock_repo


class BillRepositoryFactory:
    """Factory for creating Bill repository mocks."""

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IBillRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_all.return_value = []
        mock_repo.get_by_patient_id.return_value = []
        mock_repo.get_by_appointment_id.return_value = []
        _echo_create(mock_repo)
        return mock_repo


class ObserverFactory:
    """Factory for appointment observer mocks."""

    @staticmethod
    def create_mock_observer() -> Mock:
        return Mock(spec=IAppointmentObserver)
