"""Doctor repository implementation following SOLID principles."""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from clinic.db.base import Doctor as DbDoctor
from clinic.domain.entities import Doctor as DomainDoctor
from clinic.domain.entities import Specialization
from clinic.domain.interfaces import IDoctorRepository


class DoctorRepository(IDoctorRepository):
    """Repository for Doctor persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, doctor_id: str) -> Optional[DomainDoctor]:
        db_doctor = self.db.query(DbDoctor).filter_by(id=doctor_id).first()
        return self._to_domain(db_doctor) if db_doctor else None

    def get_all(self) -> List[DomainDoctor]:
        db_doctors = self.db.query(DbDoctor).order_by(DbDoctor.id).all()
        return [self._to_domain(d) for d in db_doctors]

    def create(self, doctor: DomainDoctor) -> DomainDoctor:
        db_doctor = DbDoctor(
            id=doctor.id,
            name=doctor.name,
            age=doctor.age,
            gender=doctor.gender,
            phone=doctor.phone,
            email=doctor.email,
            specialization=doctor.specialization.name,
            consultation_fee=doctor.consultation_fee,
            years_of_experience=doctor.years_of_experience,
            available_slots=list(doctor.available_slots),
        )
        try:
            self.db.add(db_doctor)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_doctor)
        return self._to_domain(db_doctor)

    def _to_domain(self, db_doctor: DbDoctor) -> DomainDoctor:
        """Convert database model to domain entity."""
        return DomainDoctor(
            id=db_doctor.id,
            name=db_doctor.name,
            age=db_doctor.age,
            gender=db_doctor.gender,
            phone=db_doctor.phone,
            email=db_doctor.email,
            specialization=Specialization[db_doctor.specialization],
            consultation_fee=db_doctor.consultation_fee,
            years_of_experience=db_doctor.years_of_experience,
            available_slots=list(db_doctor.available_slots or []),
        )
