"""
Process-wide service wiring.

The IdGenerator, notifier, strategy registry and bill factory are built once
per application and shared; repositories and services are built per request
around that request's database session.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from flask import current_app

from clinic.db.base import Appointment as DbAppointment
from clinic.db.base import Bill as DbBill
from clinic.db.base import Doctor as DbDoctor
from clinic.db.base import Patient as DbPatient
from clinic.domain.interfaces import IAppointmentObserver
from clinic.repositories.appointment_repo import AppointmentRepository
from clinic.repositories.bill_repo import BillRepository
from clinic.repositories.doctor_repo import DoctorRepository
from clinic.repositories.patient_repo import PatientRepository
from clinic.services.appointment_service import AppointmentService
from clinic.services.bill_factory import BillFactory
from clinic.services.billing_service import BillingService
from clinic.services.billing_strategies import BillingStrategyRegistry
from clinic.services.doctor_service import DoctorService
from clinic.services.notification_service import (
    AppointmentNotifier,
    LoggingNotificationObserver,
)
from clinic.services.patient_service import PatientService
from clinic.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)

EXTENSION_KEY = "clinic"


def load_id_seeds(db) -> Dict[str, int]:
    """Highest numeric id suffix already stored per entity kind.

    Used at startup so a restarted process never re-issues an existing id.
    """
    seeds = dict(IdGenerator.DEFAULT_SEEDS)
    for kind, model in (
        ("doctor", DbDoctor),
        ("patient", DbPatient),
        ("appointment", DbAppointment),
        ("bill", DbBill),
    ):
        for (identifier,) in db.query(model.id).all():
            suffix = identifier.rsplit("-", 1)[-1]
            if suffix.isdigit():
                seeds[kind] = max(seeds[kind], int(suffix))
    return seeds


@dataclass
class ClinicContainer:
    id_generator: IdGenerator
    notifier: AppointmentNotifier
    strategy_registry: BillingStrategyRegistry
    bill_factory: BillFactory

    @classmethod
    def build(
        cls,
        tax_rate: Optional[float] = None,
        insurance_discount_rate: Optional[float] = None,
        id_generator: Optional[IdGenerator] = None,
        observers: Optional[Iterable[IAppointmentObserver]] = None,
    ) -> "ClinicContainer":
        id_generator = id_generator or IdGenerator()
        notifier = AppointmentNotifier([LoggingNotificationObserver()])
        for observer in observers or []:
            notifier.register(observer)
        return cls(
            id_generator=id_generator,
            notifier=notifier,
            strategy_registry=BillingStrategyRegistry(tax_rate, insurance_discount_rate),
            bill_factory=BillFactory(id_generator, tax_rate),
        )

    def doctor_service(self, db) -> DoctorService:
        return DoctorService(DoctorRepository(db), self.id_generator)

    def patient_service(self, db) -> PatientService:
        return PatientService(PatientRepository(db), self.id_generator)

    def appointment_service(self, db) -> AppointmentService:
        return AppointmentService(
            AppointmentRepository(db),
            DoctorRepository(db),
            PatientRepository(db),
            self.id_generator,
            self.notifier,
        )

    def billing_service(self, db) -> BillingService:
        return BillingService(
            BillRepository(db),
            AppointmentRepository(db),
            DoctorRepository(db),
            PatientRepository(db),
            self.bill_factory,
            self.strategy_registry,
        )


def get_container() -> ClinicContainer:
    return current_app.extensions[EXTENSION_KEY]
