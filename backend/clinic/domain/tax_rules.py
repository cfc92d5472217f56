"""Pure money rules. No rounding happens here; amounts are rounded only for display."""

from clinic.core.validation import validate_non_negative


def calculate_tax(amount: float, rate: float) -> float:
    """Return the tax due on ``amount`` at ``rate`` (e.g. 0.18)."""
    validate_non_negative(amount, "amount")
    validate_non_negative(rate, "tax_rate")
    return amount * rate


def apply_discount(fee: float, discount_fraction: float) -> float:
    """Return the discount amount (not the discounted fee) for ``fee``."""
    validate_non_negative(fee, "consultation_fee")
    validate_non_negative(discount_fraction, "discount_rate")
    return fee * discount_fraction
