"""
Unit tests for AppointmentService.

This module tests the appointment lifecycle:
- Creation (always CONFIRMED, doctor and patient must exist)
- Cancellation and status updates (unconditional)
- Observer notification after each committed transition
- Read-only queries and analytics
"""

from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

from clinic.core.exceptions import AppointmentNotFoundError, InvalidDataError
from clinic.domain.entities import AppointmentStatus
from clinic.services.appointment_service import AppointmentService
from clinic.services.notification_service import AppointmentNotifier
from clinic.utils.id_generator import IdGenerator
from tests.factories.entity_factories import (
    make_appointment,
    make_doctor,
    make_patient,
)
from tests.factories.repository_factories import (
    AppointmentRepositoryFactory,
    DoctorRepositoryFactory,
    ObserverFactory,
    PatientRepositoryFactory,
)


@pytest.fixture
def mock_appointment_repo() -> Mock:
    return AppointmentRepositoryFactory.create_mock_full()


@pytest.fixture
def mock_doctor_repo() -> Mock:
    repo = DoctorRepositoryFactory.create_mock_reader()
    repo.get_by_id.side_effect = lambda doctor_id: (
        make_doctor(doctor_id) if doctor_id == "DOC-1001" else None
    )
    return repo


@pytest.fixture
def mock_patient_repo() -> Mock:
    repo = PatientRepositoryFactory.create_mock_reader()
    repo.get_by_id.side_effect = lambda patient_id: (
        make_patient(patient_id) if patient_id == "PAT-2001" else None
    )
    return repo


@pytest.fixture
def observer() -> Mock:
    return ObserverFactory.create_mock_observer()


@pytest.fixture
def service(mock_appointment_repo, mock_doctor_repo, mock_patient_repo, observer):
    """Initialize AppointmentService with mocked repositories."""
    return AppointmentService(
        mock_appointment_repo,
        mock_doctor_repo,
        mock_patient_repo,
        IdGenerator(),
        AppointmentNotifier([observer]),
    )


@pytest.mark.services
@pytest.mark.appointment
class TestAppointmentCreation:
    def test_create_stores_confirmed(self, service, mock_appointment_repo, observer):
        """New appointments are stored as CONFIRMED, never PENDING."""
        when = datetime(2026, 5, 1, 9, 0)

        result = service.create_appointment("DOC-1001", "PAT-2001", when, "Checkup")

        stored = mock_appointment_repo.create.call_args[0][0]
        assert stored.status is AppointmentStatus.CONFIRMED
        assert stored.id == "APT-3001"
        assert stored.doctor_name == "Asha Rao"
        assert stored.patient_name == "Ravi Kumar"
        assert stored.scheduled_at == when
        assert result.status is AppointmentStatus.CONFIRMED
        observer.on_appointment_created.assert_called_once()

    def test_create_unknown_doctor(self, service, mock_appointment_repo, observer):
        with pytest.raises(InvalidDataError) as exc_info:
            service.create_appointment("DOC-9999", "PAT-2001", datetime.now())

        assert exc_info.value.field_name == "doctor_id"
        mock_appointment_repo.create.assert_not_called()
        observer.on_appointment_created.assert_not_called()

    def test_create_unknown_patient(self, service, mock_appointment_repo, observer):
        with pytest.raises(InvalidDataError) as exc_info:
            service.create_appointment("DOC-1001", "PAT-9999", datetime.now())

        assert exc_info.value.field_name == "patient_id"
        mock_appointment_repo.create.assert_not_called()
        observer.on_appointment_created.assert_not_called()

    def test_failed_write_does_not_notify(self, service, mock_appointment_repo, observer):
        mock_appointment_repo.create.side_effect = RuntimeError("disk full")

        with pytest.raises(RuntimeError):
            service.create_appointment("DOC-1001", "PAT-2001", datetime.now())

        observer.on_appointment_created.assert_not_called()

    def test_observer_failure_does_not_fail_creation(
        self, service, mock_appointment_repo, observer
    ):
        observer.on_appointment_created.side_effect = RuntimeError("boom")

        result = service.create_appointment("DOC-1001", "PAT-2001", datetime.now())

        assert result.status is AppointmentStatus.CONFIRMED
        mock_appointment_repo.create.assert_called_once()

    def test_add_observer(self, service):
        late_observer = ObserverFactory.create_mock_observer()
        service.add_observer(late_observer)

        service.create_appointment("DOC-1001", "PAT-2001", datetime.now())

        late_observer.on_appointment_created.assert_called_once()


@pytest.mark.services
@pytest.mark.appointment
class TestAppointmentCancellation:
    @pytest.mark.parametrize("current", list(AppointmentStatus))
    def test_cancel_from_any_status(
        self, service, mock_appointment_repo, observer, current
    ):
        """Cancellation is unconditional."""
        mock_appointment_repo.get_by_id.return_value = make_appointment(status=current)

        result = service.cancel_appointment("APT-3001")

        assert result.status is AppointmentStatus.CANCELLED
        updated = mock_appointment_repo.update.call_args[0][0]
        assert updated.status is AppointmentStatus.CANCELLED
        notified = observer.on_appointment_cancelled.call_args[0][0]
        assert notified.status is AppointmentStatus.CANCELLED

    def test_cancel_missing_appointment(self, service, mock_appointment_repo, observer):
        with pytest.raises(AppointmentNotFoundError):
            service.cancel_appointment("APT-404")

        mock_appointment_repo.update.assert_not_called()
        observer.on_appointment_cancelled.assert_not_called()

    def test_failed_write_leaves_loaded_appointment_untouched(
        self, service, mock_appointment_repo, observer
    ):
        loaded = make_appointment(status=AppointmentStatus.CONFIRMED)
        mock_appointment_repo.get_by_id.return_value = loaded
        mock_appointment_repo.update.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            service.cancel_appointment("APT-3001")

        assert loaded.status is AppointmentStatus.CONFIRMED
        observer.on_appointment_cancelled.assert_not_called()


@pytest.mark.services
@pytest.mark.appointment
class TestAppointmentStatusUpdate:
    def test_update_status(self, service, mock_appointment_repo, observer):
        mock_appointment_repo.get_by_id.return_value = make_appointment()

        result = service.update_status("APT-3001", AppointmentStatus.COMPLETED)

        assert result.status is AppointmentStatus.COMPLETED
        notified = observer.on_appointment_status_changed.call_args[0][0]
        assert notified.status is AppointmentStatus.COMPLETED

    def test_status_may_leave_cancelled(self, service, mock_appointment_repo):
        """No transition table: even CANCELLED can move on."""
        mock_appointment_repo.get_by_id.return_value = make_appointment(
            status=AppointmentStatus.CANCELLED
        )

        result = service.update_status("APT-3001", "confirmed")

        assert result.status is AppointmentStatus.CONFIRMED

    def test_invalid_status_rejected_before_lookup(self, service, mock_appointment_repo):
        with pytest.raises(InvalidDataError):
            service.update_status("APT-3001", "ARCHIVED")

        mock_appointment_repo.get_by_id.assert_not_called()

    def test_update_missing_appointment(self, service, observer):
        with pytest.raises(AppointmentNotFoundError):
            service.update_status("APT-404", AppointmentStatus.NO_SHOW)

        observer.on_appointment_status_changed.assert_not_called()


@pytest.mark.services
@pytest.mark.appointment
class TestAppointmentQueries:
    def test_get_by_id(self, service, mock_appointment_repo):
        appointment = make_appointment()
        mock_appointment_repo.get_by_id.return_value = appointment
        assert service.get_appointment_by_id("APT-3001") == appointment

    def test_get_by_id_missing(self, service):
        with pytest.raises(AppointmentNotFoundError) as exc_info:
            service.get_appointment_by_id("APT-404")
        assert exc_info.value.identifier == "APT-404"

    def test_filters_delegate_to_repository(self, service, mock_appointment_repo):
        service.get_appointments_by_doctor("DOC-1001")
        service.get_appointments_by_patient("PAT-2001")
        service.get_appointments_by_status("no_show")

        mock_appointment_repo.get_by_doctor_id.assert_called_once_with("DOC-1001")
        mock_appointment_repo.get_by_patient_id.assert_called_once_with("PAT-2001")
        mock_appointment_repo.get_by_status.assert_called_once_with(
            AppointmentStatus.NO_SHOW
        )

    def test_upcoming_uses_given_reference_time(self, service, mock_appointment_repo):
        now = datetime(2026, 1, 1, 12, 0)
        service.get_upcoming_appointments(now)
        mock_appointment_repo.get_upcoming.assert_called_once_with(now)

    def test_counts(self, service, mock_appointment_repo):
        other_doctor = make_doctor("DOC-1002", name="Vikram Shah")
        mock_appointment_repo.get_all.return_value = [
            make_appointment("APT-1"),
            make_appointment("APT-2", status=AppointmentStatus.CANCELLED),
            make_appointment(
                "APT-3",
                doctor=other_doctor,
                scheduled_at=datetime.now() + timedelta(days=3),
            ),
        ]

        assert service.get_appointment_count_per_doctor() == {
            "Asha Rao": 2,
            "Vikram Shah": 1,
        }
        assert service.get_appointment_count_per_status() == {
            "CONFIRMED": 2,
            "CANCELLED": 1,
        }
