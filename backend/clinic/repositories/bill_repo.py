"""Bill repository implementation following SOLID principles."""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from clinic.db.base import Bill as DbBill
from clinic.domain.entities import Bill as DomainBill
from clinic.domain.interfaces import IBillRepository


class BillRepository(IBillRepository):
    """Repository for Bill persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, bill_id: str) -> Optional[DomainBill]:
        db_bill = self.db.query(DbBill).filter_by(id=bill_id).first()
        return self._to_domain(db_bill) if db_bill else None

    def get_all(self) -> List[DomainBill]:
        rows = self.db.query(DbBill).order_by(DbBill.id).all()
        return [self._to_domain(row) for row in rows]

    def get_by_patient_id(self, patient_id: str) -> List[DomainBill]:
        rows = (
            self.db.query(DbBill)
            .filter_by(patient_id=patient_id)
            .order_by(DbBill.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def get_by_appointment_id(self, appointment_id: str) -> List[DomainBill]:
        rows = (
            self.db.query(DbBill)
            .filter_by(appointment_id=appointment_id)
            .order_by(DbBill.id)
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def create(self, bill: DomainBill) -> DomainBill:
        db_bill = DbBill(
            id=bill.id,
            appointment_id=bill.appointment_id,
            patient_id=bill.patient_id,
            patient_name=bill.patient_name,
            doctor_name=bill.doctor_name,
            consultation_fee=bill.consultation_fee,
            tax_amount=bill.tax_amount,
            discount=bill.discount,
            total_amount=bill.total_amount,
            bill_type=bill.bill_type,
            billed_at=bill.billed_at,
        )
        try:
            self.db.add(db_bill)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_bill)
        return self._to_domain(db_bill)

    def _to_domain(self, db_bill: DbBill) -> DomainBill:
        """Convert database model to domain entity."""
        return DomainBill(
            id=db_bill.id,
            appointment_id=db_bill.appointment_id,
            patient_id=db_bill.patient_id or "",
            patient_name=db_bill.patient_name or "",
            doctor_name=db_bill.doctor_name or "",
            consultation_fee=db_bill.consultation_fee,
            discount=db_bill.discount,
            tax_amount=db_bill.tax_amount,
            total_amount=db_bill.total_amount,
            bill_type=db_bill.bill_type,
            billed_at=db_bill.billed_at,
        )
