"""Tests for rs_common.cents — integer arithmetic utilities."""

import pytest

from src.rs_common.cents import cents_to_display, line_total, validate_amount
from src.rs_common.errors import NegativeAmountError


class TestValidateAmount:
    def test_zero_is_valid(self) -> None:
        validate_amount("cost_labor", 0)  # Should not raise

    def test_positive_is_valid(self) -> None:
        validate_amount("cost_labor", 150000)

    def test_negative_raises_with_field(self) -> None:
        with pytest.raises(NegativeAmountError) as exc_info:
            validate_amount("cost_pending", -1)
        assert exc_info.value.field == "cost_pending"


class TestCentsToDisplay:
    def test_basic(self) -> None:
        assert cents_to_display(6500) == "$65.00"

    def test_zero(self) -> None:
        assert cents_to_display(0) == "$0.00"

    def test_one_cent(self) -> None:
        assert cents_to_display(1) == "$0.01"

    def test_thousands_separator(self) -> None:
        assert cents_to_display(12345678) == "$123,456.78"

    def test_negative(self) -> None:
        assert cents_to_display(-1200) == "-$12.00"


class TestLineTotal:
    def test_multiplies(self) -> None:
        assert line_total(2, 5000) == 10000

    def test_zero_price(self) -> None:
        assert line_total(3, 0) == 0
