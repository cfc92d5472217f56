"""Unit tests for the pure money rules."""

import pytest

from clinic.core.exceptions import InvalidDataError
from clinic.domain.tax_rules import apply_discount, calculate_tax


@pytest.mark.billing
class TestCalculateTax:
    def test_tax_is_amount_times_rate(self):
        assert calculate_tax(1000.0, 0.18) == pytest.approx(180.0)

    def test_tax_on_discounted_amount(self):
        assert calculate_tax(850.0, 0.18) == pytest.approx(153.0)

    def test_zero_amount_or_rate_gives_zero(self):
        assert calculate_tax(0.0, 0.18) == 0.0
        assert calculate_tax(1000.0, 0.0) == 0.0

    def test_result_is_not_rounded(self):
        """Amounts keep full precision; rounding is a display concern."""
        assert calculate_tax(10.01, 0.18) == 10.01 * 0.18

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidDataError) as exc_info:
            calculate_tax(-1.0, 0.18)
        assert exc_info.value.field_name == "amount"

    def test_negative_rate_rejected(self):
        with pytest.raises(InvalidDataError) as exc_info:
            calculate_tax(100.0, -0.1)
        assert exc_info.value.field_name == "tax_rate"

    def test_non_finite_amount_rejected(self):
        with pytest.raises(InvalidDataError):
            calculate_tax(float("nan"), 0.18)


@pytest.mark.billing
class TestApplyDiscount:
    def test_discount_is_fee_times_fraction(self):
        """Returns the discount amount, not the discounted fee."""
        assert apply_discount(1000.0, 0.15) == pytest.approx(150.0)

    def test_zero_fraction(self):
        assert apply_discount(1000.0, 0.0) == 0.0

    def test_negative_fee_rejected(self):
        with pytest.raises(InvalidDataError) as exc_info:
            apply_discount(-5.0, 0.15)
        assert exc_info.value.field_name == "consultation_fee"

    def test_negative_fraction_rejected(self):
        with pytest.raises(InvalidDataError) as exc_info:
            apply_discount(1000.0, -0.15)
        assert exc_info.value.field_name == "discount_rate"
