"""
AMM Math — целочисленные формулы constant-product пула

Модуль содержит чистые функции без состояния:
- Эмиссия claim-токенов (первый и последующие депозиты)
- Полоса допуска соотношения при депозите
- Выкуп claim-токенов пропорционально резервам
- Цена сделки по формуле constant-product с комиссией во входе
- Ограничение размера сделки долей входного резерва

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все деления — floor, результат никогда не округляется в пользу вызывающего
2. reserve_in * reserve_out не убывает после сделки
3. Float не используется ни в одной денежной формуле
"""

import math
from dataclasses import dataclass
from decimal import Decimal

from src.core.domain.units import amount_after_fee, apply_bps
from src.core.errors import InsufficientLiquidityError, RatioMismatchError


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class SwapQuote:
    """Результат расчёта сделки."""

    amount_in: int
    net_in: int  # вход после удержания комиссии, идёт в резерв
    fee: int  # amount_in - net_in, идёт в Fee Accountant
    amount_out: int
    reserve_in: int
    reserve_out: int


@dataclass(frozen=True)
class RedemptionAmounts:
    """Суммы выкупа claim-токенов."""

    amount_a: int
    amount_b: int


# =============================================================================
# ЭМИССИЯ
# =============================================================================


def initial_issuance(amount_a: int, amount_b: int, minimum_liquidity: int) -> tuple[int, int]:
    """
    Эмиссия при первом депозите в пустой пул.

    issuance = floor(sqrt(amount_a * amount_b)), должна строго превышать
    minimum_liquidity. minimum_liquidity навсегда уходит в sink.

    Args:
        amount_a: Депозит актива A
        amount_b: Депозит актива B
        minimum_liquidity: Неизымаемый минимум для sink

    Returns:
        (to_caller, to_sink)

    Raises:
        InsufficientLiquidityError: Если issuance <= minimum_liquidity
    """
    issuance = math.isqrt(amount_a * amount_b)
    if issuance <= minimum_liquidity:
        raise InsufficientLiquidityError(
            "initial issuance does not exceed minimum liquidity",
            issuance=issuance,
            minimum_liquidity=minimum_liquidity,
        )
    return issuance - minimum_liquidity, minimum_liquidity


def proportional_issuance(amount_a: int, reserve_a: int, total_supply: int) -> int:
    """
    Эмиссия при депозите в непустой пул.

    issuance = floor(total_supply * amount_a / reserve_a)
    """
    return total_supply * amount_a // reserve_a


def expected_counter_amount(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Ожидаемый amount_b по текущему соотношению резервов (floor)."""
    return amount_a * reserve_b // reserve_a


def check_ratio_band(expected_b: int, provided_b: int, tolerance_bps: int) -> None:
    """
    Проверка, что provided_b в симметричной полосе вокруг expected_b.

    |provided_b - expected_b| <= floor(expected_b * tolerance_bps / 10_000)

    Raises:
        RatioMismatchError: С expected/provided в контексте
    """
    tolerance = apply_bps(expected_b, tolerance_bps)
    if abs(provided_b - expected_b) > tolerance:
        raise RatioMismatchError(
            "amount_b outside ratio tolerance band",
            expected_b=expected_b,
            provided_b=provided_b,
            tolerance=tolerance,
            tolerance_bps=tolerance_bps,
        )


# =============================================================================
# ВЫКУП
# =============================================================================


def pro_rata(amount: int, part: int, whole: int) -> int:
    """floor(amount * part / whole); whole обязан быть > 0."""
    return amount * part // whole


def redemption_amounts(
    claim_amount: int, reserve_a: int, reserve_b: int, total_supply: int
) -> RedemptionAmounts:
    """
    Суммы выкупа claim-токенов.

    amount_x = floor(claim_amount * reserve_x / total_supply)
    """
    return RedemptionAmounts(
        amount_a=pro_rata(reserve_a, claim_amount, total_supply),
        amount_b=pro_rata(reserve_b, claim_amount, total_supply),
    )


def meets_liquidity_floor(reserve_a: int, reserve_b: int, minimum_liquidity: int) -> bool:
    """
    Проверка пола ликвидности для остатка резервов после выкупа.

    Остаток не опускается ниже порога манипуляции: isqrt(a*b) >= minimum.
    Полностью пустой остаток недостижим, т.к. sink не выкупается.
    """
    return math.isqrt(reserve_a * reserve_b) >= minimum_liquidity


# =============================================================================
# СДЕЛКА
# =============================================================================


def max_swap_input(reserve_in: int, max_swap_fraction_bps: int) -> int:
    """Максимальный вход сделки: floor(reserve_in * fraction_bps / 10_000)."""
    return apply_bps(reserve_in, max_swap_fraction_bps)


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int) -> SwapQuote:
    """
    Расчёт выхода сделки по формуле constant-product.

    net_in = floor(amount_in * (FEE_DENOMINATOR - fee) / FEE_DENOMINATOR)
    amount_out = floor(net_in * reserve_out / (reserve_in + net_in))

    Args:
        amount_in: Вход сделки
        reserve_in: Tracked резерв входного актива
        reserve_out: Tracked резерв выходного актива
        fee_bps: Swap fee (bps)

    Returns:
        SwapQuote (amount_out может быть 0 — проверяет вызывающий)

    Raises:
        InsufficientLiquidityError: Если какой-либо резерв пуст

    Examples:
        >>> get_amount_out(10, 1_000_000, 1_000_000, 30).amount_out
        8
    """
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError(
            "pool has no liquidity", reserve_in=reserve_in, reserve_out=reserve_out
        )

    net_in = amount_after_fee(amount_in, fee_bps)
    amount_out = net_in * reserve_out // (reserve_in + net_in)

    return SwapQuote(
        amount_in=amount_in,
        net_in=net_in,
        fee=amount_in - net_in,
        amount_out=amount_out,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
    )


def spot_price(reserve_base: int, reserve_quote: int) -> Decimal:
    """
    Спот-цена base в единицах quote (только для отображения).

    Returns:
        reserve_quote / reserve_base как Decimal, Decimal(0) для пустого пула
    """
    if reserve_base <= 0 or reserve_quote <= 0:
        return Decimal(0)
    return Decimal(reserve_quote) / Decimal(reserve_base)


def constant_product(reserve_a: int, reserve_b: int) -> int:
    return reserve_a * reserve_b
