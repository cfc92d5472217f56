"""
Bill-type tags.

A bill-type tag is a free, case-insensitive label supplied by callers. It is
parsed once into a closed ``BillType`` kind; anything unrecognised becomes
``BillType.UNKNOWN`` (keeping the raw text for diagnostics), and UNKNOWN is
priced exactly like STANDARD everywhere.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class BillType(str, Enum):
    STANDARD = "STANDARD"
    INSURANCE = "INSURANCE"
    EMERGENCY = "EMERGENCY"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class BillTypeTag:
    """A parsed bill-type tag: the recognised kind plus the caller's raw text."""

    kind: BillType
    raw: str = ""

    @classmethod
    def parse(cls, raw: Union[str, BillType, "BillTypeTag", None]) -> "BillTypeTag":
        if isinstance(raw, BillTypeTag):
            return raw
        if isinstance(raw, BillType):
            return cls(raw, raw.value)
        if raw is None or raw == "":
            return cls(BillType.STANDARD, "")

        # Exact match on the upper-cased text; padded tags are not recognised
        text = str(raw)
        normalized = text.upper()
        if normalized == BillType.UNKNOWN.value:
            return cls(BillType.UNKNOWN, text)
        try:
            return cls(BillType(normalized), text)
        except ValueError:
            return cls(BillType.UNKNOWN, text)

    @property
    def effective(self) -> BillType:
        """The kind used for pricing: UNKNOWN falls back to STANDARD."""
        if self.kind is BillType.UNKNOWN:
            return BillType.STANDARD
        return self.kind

    @property
    def is_fallback(self) -> bool:
        return self.kind is BillType.UNKNOWN
