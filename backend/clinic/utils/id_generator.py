"""
Identifier issuance for doctors, patients, appointments and bills.

One IdGenerator is built at process start and handed to every component
that mints identifiers. Each entity kind has its own counter, so issuing
a bill id never contends with issuing an appointment id.
"""

import threading
from typing import Dict


class _Counter:
    """Monotonically increasing counter, safe under concurrent callers."""

    def __init__(self, prefix: str, seed: int):
        self.prefix = prefix
        self._value = seed
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            self._value += 1
            value = self._value
        return f"{self.prefix}{value}"

    @property
    def current(self) -> int:
        with self._lock:
            return self._value


class IdGenerator:
    """Prefixed string ids (DOC-, PAT-, APT-, BILL-), never reused or reset."""

    DEFAULT_SEEDS: Dict[str, int] = {
        "doctor": 1000,
        "patient": 2000,
        "appointment": 3000,
        "bill": 4000,
    }

    def __init__(
        self,
        doctor_seed: int = DEFAULT_SEEDS["doctor"],
        patient_seed: int = DEFAULT_SEEDS["patient"],
        appointment_seed: int = DEFAULT_SEEDS["appointment"],
        bill_seed: int = DEFAULT_SEEDS["bill"],
    ):
        self._doctor = _Counter("DOC-", doctor_seed)
        self._patient = _Counter("PAT-", patient_seed)
        self._appointment = _Counter("APT-", appointment_seed)
        self._bill = _Counter("BILL-", bill_seed)

    def next_doctor_id(self) -> str:
        return self._doctor.next_id()

    def next_patient_id(self) -> str:
        return self._patient.next_id()

    def next_appointment_id(self) -> str:
        return self._appointment.next_id()

    def next_bill_id(self) -> str:
        return self._bill.next_id()

    def snapshot(self) -> Dict[str, int]:
        """Last value issued per counter (the seed if nothing was issued yet)."""
        return {
            "doctor": self._doctor.current,
            "patient": self._patient.current,
            "appointment": self._appointment.current,
            "bill": self._bill.current,
        }
