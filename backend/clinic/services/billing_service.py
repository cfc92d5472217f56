"""
Billing service: turns an appointment into a priced, persisted bill.

generate_bill runs as one unit: every lookup and calculation happens before
the single write, so a failure at any earlier step leaves nothing persisted.
No uniqueness is enforced per appointment; generating twice yields two bills.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional, Union

from clinic.core.exceptions import (
    AppointmentNotFoundError,
    BillNotFoundError,
    InvalidDataError,
)
from clinic.core.logging_config import log_performance
from clinic.domain.billing_types import BillType, BillTypeTag
from clinic.domain.entities import Bill, BillSummary
from clinic.domain.interfaces import (
    IAppointmentReader,
    IBillRepository,
    IDoctorReader,
    IPatientReader,
)
from clinic.services.bill_factory import BillFactory
from clinic.services.billing_strategies import BillingStrategyRegistry

logger = logging.getLogger(__name__)


class BillingService:
    def __init__(
        self,
        bill_repo: IBillRepository,
        appointment_repo: IAppointmentReader,
        doctor_repo: IDoctorReader,
        patient_repo: IPatientReader,
        bill_factory: BillFactory,
        strategy_registry: BillingStrategyRegistry,
    ):
        self.bill_repo = bill_repo
        self.appointment_repo = appointment_repo
        self.doctor_repo = doctor_repo
        self.patient_repo = patient_repo
        self.bill_factory = bill_factory
        self.strategy_registry = strategy_registry

    def generate_bill(
        self,
        appointment_id: str,
        bill_type: Union[str, BillType, BillTypeTag, None] = BillType.STANDARD,
    ) -> Bill:
        """Generate and persist a bill for an appointment.

        Raises:
            AppointmentNotFoundError: the appointment does not exist
            InvalidDataError: the appointment's doctor or patient does not exist
        """
        started = time.perf_counter()
        tag = BillTypeTag.parse(bill_type)

        appointment = self.appointment_repo.get_by_id(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)

        doctor = self.doctor_repo.get_by_id(appointment.doctor_id)
        if doctor is None:
            raise InvalidDataError(
                "doctor_id", f"Doctor not found: {appointment.doctor_id}"
            )
        patient = self.patient_repo.get_by_id(appointment.patient_id)
        if patient is None:
            raise InvalidDataError(
                "patient_id", f"Patient not found: {appointment.patient_id}"
            )

        bill = self.bill_factory.create_bill(tag, appointment, doctor, patient)
        self.strategy_registry.resolve(tag).calculate(bill)

        saved = self.bill_repo.create(bill)
        log_performance(
            "generate_bill",
            (time.perf_counter() - started) * 1000,
            bill_id=saved.id,
            appointment_id=appointment_id,
            bill_type=saved.bill_type,
            total_amount=saved.total_amount,
        )
        return saved

    def get_bill_by_id(self, bill_id: str) -> Optional[Bill]:
        return self.bill_repo.get_by_id(bill_id)

    def get_all_bills(self) -> List[Bill]:
        return self.bill_repo.get_all()

    def get_bills_by_patient(self, patient_id: str) -> List[Bill]:
        return self.bill_repo.get_by_patient_id(patient_id)

    def get_bills_by_appointment(self, appointment_id: str) -> List[Bill]:
        return self.bill_repo.get_by_appointment_id(appointment_id)

    def get_bill_summary(self, bill_id: str) -> BillSummary:
        bill = self.bill_repo.get_by_id(bill_id)
        if bill is None:
            raise BillNotFoundError(bill_id)
        return bill.to_summary()

    # --- Analytics ---

    def get_total_revenue(self) -> float:
        return sum(bill.total_amount for bill in self.bill_repo.get_all())

    def get_revenue_by_bill_type(self) -> Dict[str, float]:
        revenue: Dict[str, float] = defaultdict(float)
        for bill in self.bill_repo.get_all():
            revenue[bill.bill_type] += bill.total_amount
        return dict(revenue)
