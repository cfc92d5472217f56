"""Patient repository implementation following SOLID principles."""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from clinic.db.base import Patient as DbPatient
from clinic.domain.entities import Patient as DomainPatient
from clinic.domain.interfaces import IPatientRepository


class PatientRepository(IPatientRepository):
    """Repository for Patient persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, patient_id: str) -> Optional[DomainPatient]:
        db_patient = self.db.query(DbPatient).filter_by(id=patient_id).first()
        return self._to_domain(db_patient) if db_patient else None

    def get_all(self) -> List[DomainPatient]:
        db_patients = self.db.query(DbPatient).order_by(DbPatient.id).all()
        return [self._to_domain(p) for p in db_patients]

    def create(self, patient: DomainPatient) -> DomainPatient:
        db_patient = DbPatient(
            id=patient.id,
            name=patient.name,
            age=patient.age,
            gender=patient.gender,
            phone=patient.phone,
            email=patient.email,
            blood_group=patient.blood_group,
            allergies=list(patient.allergies),
            medical_history=list(patient.medical_history),
        )
        try:
            self.db.add(db_patient)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_patient)
        return self._to_domain(db_patient)

    def _to_domain(self, db_patient: DbPatient) -> DomainPatient:
        """Convert database model to domain entity."""
        return DomainPatient(
            id=db_patient.id,
            name=db_patient.name,
            age=db_patient.age,
            gender=db_patient.gender,
            phone=db_patient.phone,
            email=db_patient.email,
            blood_group=db_patient.blood_group,
            allergies=list(db_patient.allergies or []),
            medical_history=list(db_patient.medical_history or []),
        )
