"""
Bill factory: builds an unpersisted, pre-priced Bill for an appointment.

The base fee depends on the bill type: emergency bills carry a fixed 50%
surcharge on the doctor's consultation fee, every other type (including
unrecognised ones) uses the fee unchanged. Each new bill is priced once
with the standard tax rule so it never has an undefined tax; the
BillingService then re-prices it with the rule for its type.
"""

import logging
from typing import Callable, Dict, Optional, Union

from clinic.core import config
from clinic.domain.billing_types import BillType, BillTypeTag
from clinic.domain.entities import Appointment, Bill, Doctor, Patient
from clinic.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class BillFactory:
    def __init__(self, id_generator: IdGenerator, tax_rate: Optional[float] = None):
        self.id_generator = id_generator
        self.tax_rate = config.TAX_RATE if tax_rate is None else tax_rate
        self._builders: Dict[BillType, Callable[[Appointment, Doctor, Patient], Bill]] = {
            BillType.STANDARD: self.create_standard_bill,
            BillType.INSURANCE: self.create_insurance_bill,
            BillType.EMERGENCY: self.create_emergency_bill,
        }

    def create_bill(
        self,
        bill_type: Union[str, BillType, BillTypeTag, None],
        appointment: Appointment,
        doctor: Doctor,
        patient: Patient,
    ) -> Bill:
        """Build a bill of the given type; unknown types build a standard bill."""
        tag = BillTypeTag.parse(bill_type)
        return self._builders[tag.effective](appointment, doctor, patient)

    def create_standard_bill(
        self, appointment: Appointment, doctor: Doctor, patient: Patient
    ) -> Bill:
        return self._build(
            appointment, doctor, patient, doctor.consultation_fee, BillType.STANDARD
        )

    def create_insurance_bill(
        self, appointment: Appointment, doctor: Doctor, patient: Patient
    ) -> Bill:
        return self._build(
            appointment, doctor, patient, doctor.consultation_fee, BillType.INSURANCE
        )

    def create_emergency_bill(
        self, appointment: Appointment, doctor: Doctor, patient: Patient
    ) -> Bill:
        emergency_fee = doctor.consultation_fee * config.EMERGENCY_SURCHARGE_MULTIPLIER
        return self._build(appointment, doctor, patient, emergency_fee, BillType.EMERGENCY)

    def _build(
        self,
        appointment: Appointment,
        doctor: Doctor,
        patient: Patient,
        fee: float,
        bill_type: BillType,
    ) -> Bill:
        bill = Bill(
            id=self.id_generator.next_bill_id(),
            appointment_id=appointment.id,
            patient_id=patient.id,
            patient_name=patient.name,
            doctor_name=doctor.name,
            consultation_fee=fee,
            discount=0.0,
            bill_type=bill_type.value,
        )
        bill.calculate_total(self.tax_rate)
        logger.debug(
            "Bill constructed",
            extra={
                "context": {
                    "bill_id": bill.id,
                    "appointment_id": appointment.id,
                    "bill_type": bill.bill_type,
                    "base_fee": fee,
                }
            },
        )
        return bill
