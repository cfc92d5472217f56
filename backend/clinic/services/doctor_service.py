"""Doctor registration and lookup."""

import logging
from typing import List, Optional

from clinic.domain.entities import Doctor
from clinic.domain.interfaces import IDoctorRepository
from clinic.schemas.dtos import DoctorCreateRequest
from clinic.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class DoctorService:
    def __init__(self, doctor_repo: IDoctorRepository, id_generator: IdGenerator):
        self.doctor_repo = doctor_repo
        self.id_generator = id_generator

    def register_doctor(self, request: DoctorCreateRequest) -> Doctor:
        request.validate()

        doctor = Doctor(
            id=self.id_generator.next_doctor_id(),
            name=request.name.strip(),
            age=request.age,
            gender=request.gender,
            phone=request.phone,
            email=request.email,
            specialization=request.specialization,
            consultation_fee=request.consultation_fee,
            years_of_experience=request.years_of_experience,
        )
        saved = self.doctor_repo.create(doctor)
        logger.info(
            "Doctor registered",
            extra={
                "context": {
                    "doctor_id": saved.id,
                    "specialization": saved.specialization.name,
                }
            },
        )
        return saved

    def get_doctor_by_id(self, doctor_id: str) -> Optional[Doctor]:
        return self.doctor_repo.get_by_id(doctor_id)

    def get_all_doctors(self) -> List[Doctor]:
        return self.doctor_repo.get_all()
