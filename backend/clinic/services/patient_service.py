"""Patient registration and lookup."""

import logging
from typing import List, Optional

from clinic.domain.entities import Patient
from clinic.domain.interfaces import IPatientRepository
from clinic.schemas.dtos import PatientCreateRequest
from clinic.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, patient_repo: IPatientRepository, id_generator: IdGenerator):
        self.patient_repo = patient_repo
        self.id_generator = id_generator

    def register_patient(self, request: PatientCreateRequest) -> Patient:
        request.validate()

        patient = Patient(
            id=self.id_generator.next_patient_id(),
            name=request.name.strip(),
            age=request.age,
            gender=request.gender,
            phone=request.phone,
            email=request.email,
            blood_group=request.blood_group,
            allergies=list(request.allergies),
            medical_history=list(request.medical_history),
        )
        saved = self.patient_repo.create(patient)
        logger.info("Patient registered", extra={"context": {"patient_id": saved.id}})
        return saved

    def get_patient_by_id(self, patient_id: str) -> Optional[Patient]:
        return self.patient_repo.get_by_id(patient_id)

    def get_all_patients(self) -> List[Patient]:
        return self.patient_repo.get_all()
