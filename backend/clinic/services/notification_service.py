"""
Appointment notification dispatch.

Observers are called synchronously, in registration order, after a
lifecycle transition has been committed. A failing observer is logged and
skipped; it never undoes the transition or prevents later observers from
running.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from clinic.domain.entities import Appointment
from clinic.domain.interfaces import IAppointmentObserver

logger = logging.getLogger(__name__)


class LoggingNotificationObserver(IAppointmentObserver):
    """Writes a log line for every appointment event."""

    def __init__(self, notification_logger: Optional[logging.Logger] = None):
        self.logger = notification_logger or logging.getLogger("clinic.notifications")

    def on_appointment_created(self, appointment: Appointment) -> None:
        when = (
            appointment.scheduled_at.strftime("%d %b %Y, %I:%M %p")
            if appointment.scheduled_at
            else "an unscheduled time"
        )
        self.logger.info(
            f"[NOTIFICATION] New appointment created: {appointment.patient_name} "
            f"with Dr. {appointment.doctor_name} on {when}"
        )

    def on_appointment_cancelled(self, appointment: Appointment) -> None:
        self.logger.info(
            f"[NOTIFICATION] Appointment CANCELLED: {appointment.patient_name} "
            f"with Dr. {appointment.doctor_name} (ID: {appointment.id})"
        )

    def on_appointment_status_changed(self, appointment: Appointment) -> None:
        self.logger.info(
            f"[NOTIFICATION] Appointment status changed to "
            f"{appointment.status.display_name} "
            f"for {appointment.patient_name} (ID: {appointment.id})"
        )


class AppointmentNotifier:
    """Registry of appointment observers with ordered, fault-isolated fan-out."""

    def __init__(self, observers: Optional[Iterable[IAppointmentObserver]] = None):
        self._observers: List[IAppointmentObserver] = list(observers or [])

    @property
    def observers(self) -> Tuple[IAppointmentObserver, ...]:
        return tuple(self._observers)

    def register(self, observer: IAppointmentObserver) -> None:
        self._observers.append(observer)

    def unregister(self, observer: IAppointmentObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def notify_created(self, appointment: Appointment) -> None:
        self._dispatch("on_appointment_created", appointment)

    def notify_cancelled(self, appointment: Appointment) -> None:
        self._dispatch("on_appointment_cancelled", appointment)

    def notify_status_changed(self, appointment: Appointment) -> None:
        self._dispatch("on_appointment_status_changed", appointment)

    def _dispatch(self, event: str, appointment: Appointment) -> None:
        for observer in list(self._observers):
            # Each observer gets its own copy of the committed state
            snapshot = replace(appointment)
            try:
                getattr(observer, event)(snapshot)
            except Exception:
                logger.exception(
                    "Appointment observer failed",
                    extra={
                        "context": {
                            "event": event,
                            "observer": type(observer).__name__,
                            "appointment_id": appointment.id,
                        }
                    },
                )
