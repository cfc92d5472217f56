"""
Billing calculation rules and the registry that selects them by bill type.

Each rule mutates a Bill's discount, tax and total in place and returns the
total. The registry is a fixed mapping from BillType to rule; EMERGENCY and
UNKNOWN both use the standard rule (the emergency surcharge is applied to the
base fee by the BillFactory, before any rule runs).
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

from clinic.core import config
from clinic.domain.billing_types import BillType, BillTypeTag
from clinic.domain.entities import Bill
from clinic.domain.tax_rules import apply_discount, calculate_tax

logger = logging.getLogger(__name__)


class BillingStrategy(ABC):
    """A pricing rule for one bill type."""

    name: str = ""

    @abstractmethod
    def calculate(self, bill: Bill) -> float:
        """Set discount/tax/total on ``bill`` and return the total."""
        pass


class StandardBillingStrategy(BillingStrategy):
    """Full tax on the fee, no discount."""

    name = BillType.STANDARD.value

    def __init__(self, tax_rate: Optional[float] = None):
        self.tax_rate = config.TAX_RATE if tax_rate is None else tax_rate

    def calculate(self, bill: Bill) -> float:
        fee = bill.consultation_fee
        tax = calculate_tax(fee, self.tax_rate)
        bill.discount = 0.0
        bill.tax_amount = tax
        bill.total_amount = fee + tax
        return bill.total_amount


class InsuranceBillingStrategy(BillingStrategy):
    """Insurance discount on the fee, then tax on the discounted amount."""

    name = BillType.INSURANCE.value

    def __init__(
        self,
        tax_rate: Optional[float] = None,
        discount_rate: Optional[float] = None,
    ):
        self.tax_rate = config.TAX_RATE if tax_rate is None else tax_rate
        self.discount_rate = (
            config.INSURANCE_DISCOUNT_RATE if discount_rate is None else discount_rate
        )

    def calculate(self, bill: Bill) -> float:
        fee = bill.consultation_fee
        discount = apply_discount(fee, self.discount_rate)
        after_discount = fee - discount
        tax = calculate_tax(after_discount, self.tax_rate)
        bill.discount = discount
        bill.tax_amount = tax
        bill.total_amount = after_discount + tax
        return bill.total_amount


class BillingStrategyRegistry:
    """Resolves a bill-type tag to its pricing rule.

    Lookup is case-insensitive; unrecognised tags resolve to the standard
    rule rather than failing.
    """

    def __init__(
        self,
        tax_rate: Optional[float] = None,
        insurance_discount_rate: Optional[float] = None,
    ):
        standard = StandardBillingStrategy(tax_rate)
        insurance = InsuranceBillingStrategy(tax_rate, insurance_discount_rate)
        self._strategies: Dict[BillType, BillingStrategy] = {
            BillType.STANDARD: standard,
            BillType.INSURANCE: insurance,
            BillType.EMERGENCY: standard,
            BillType.UNKNOWN: standard,
        }

    @property
    def default(self) -> BillingStrategy:
        return self._strategies[BillType.STANDARD]

    @property
    def tax_rate(self) -> float:
        return self._strategies[BillType.STANDARD].tax_rate

    @property
    def insurance_discount_rate(self) -> float:
        return self._strategies[BillType.INSURANCE].discount_rate

    def resolve(
        self, bill_type: Union[str, BillType, BillTypeTag, None]
    ) -> BillingStrategy:
        tag = BillTypeTag.parse(bill_type)
        if tag.is_fallback:
            logger.info(
                "Unrecognised bill type, using standard billing rule",
                extra={"context": {"bill_type": tag.raw}},
            )
        return self._strategies[tag.kind]

    def apply(
        self, bill: Bill, bill_type: Union[str, BillType, BillTypeTag, None]
    ) -> float:
        """Resolve the rule for ``bill_type`` and price ``bill`` with it."""
        return self.resolve(bill_type).calculate(bill)
