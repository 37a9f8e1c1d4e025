"""
Tests for PoolUnits module

Проверка конвертеров bps / fee units и валидации сумм.
"""

import pytest

from src.core.domain.units import (
    FEE_DENOMINATOR,
    FEE_SCALE,
    MAX_UINT112,
    amount_after_fee,
    apply_bps,
    from_fee_units,
    to_fee_units,
    validate_amount,
    validate_fee_bps,
    validate_non_negative_amount,
)
from src.core.errors import (
    AmountTooLargeError,
    InputValidationError,
    PoolError,
    ZeroAmountError,
)


class TestConstants:
    def test_denominator(self):
        assert FEE_DENOMINATOR == 10_000
        assert FEE_SCALE == FEE_DENOMINATOR

    def test_uint112(self):
        assert MAX_UINT112 == 5192296858534827628530496329220095


class TestConverters:
    def test_apply_bps_floor(self):
        assert apply_bps(1_000_000, 300) == 30_000
        assert apply_bps(999, 100) == 9
        assert apply_bps(0, 100) == 0

    def test_amount_after_fee(self):
        """Комиссия округляется в пользу пула."""
        assert amount_after_fee(10, 30) == 9
        assert amount_after_fee(10_000, 30) == 9_970
        assert amount_after_fee(1, 30) == 0

    def test_fee_units_truncate(self):
        assert to_fee_units(3) == 30_000
        assert from_fee_units(29_999) == 2
        assert from_fee_units(to_fee_units(7)) == 7


class TestValidateAmount:
    def test_valid(self):
        validate_amount("amount", 1)
        validate_amount("amount", MAX_UINT112, max_value=MAX_UINT112)

    def test_zero(self):
        with pytest.raises(ZeroAmountError) as exc_info:
            validate_amount("amount_in", 0)
        assert exc_info.value.context == {"amount_in": 0}

    def test_negative(self):
        with pytest.raises(InputValidationError):
            validate_amount("amount", -5)

    def test_not_int(self):
        with pytest.raises(InputValidationError):
            validate_amount("amount", 1.5)
        with pytest.raises(InputValidationError):
            validate_amount("amount", True)

    def test_above_ceiling(self):
        with pytest.raises(AmountTooLargeError) as exc_info:
            validate_amount("amount_a", MAX_UINT112 + 1, max_value=MAX_UINT112)
        assert exc_info.value.context["max_value"] == MAX_UINT112

    def test_input_errors_are_value_errors(self):
        """InputValidationError совместим с ValueError."""
        with pytest.raises(ValueError):
            validate_amount("amount", 0)

    def test_non_negative_allows_zero(self):
        validate_non_negative_amount("min_out", 0)
        with pytest.raises(InputValidationError):
            validate_non_negative_amount("min_out", -1)


class TestValidateFee:
    @pytest.mark.parametrize("fee", [1, 30, 1_000])
    def test_in_range(self, fee):
        validate_fee_bps(fee)

    @pytest.mark.parametrize("fee", [0, 1_001, -1])
    def test_out_of_range(self, fee):
        with pytest.raises(InputValidationError):
            validate_fee_bps(fee)


class TestPoolErrorContext:
    def test_str_includes_context(self):
        err = PoolError("deadline exceeded", deadline=5, timestamp=7)
        assert str(err) == "deadline exceeded (deadline=5, timestamp=7)"
        assert err.context == {"deadline": 5, "timestamp": 7}

    def test_str_without_context(self):
        assert str(PoolError("boom")) == "boom"
