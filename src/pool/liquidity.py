"""
Liquidity Engine — эмиссия и выкуп claim-токенов

Первый депозит (оба tracked резерва нулевые):
- issuance = floor(sqrt(amount_a * amount_b)), обязана превышать MINIMUM_LIQUIDITY
- MINIMUM_LIQUIDITY минтится в sink, остаток — вызывающему

Последующие депозиты:
- issuance = floor(total_supply * amount_a / tracked_a)
- amount_b в симметричной полосе ±ratio_tolerance_bps вокруг
  amount_a * tracked_b / tracked_a

Выкуп:
- amount_x = floor(claim * tracked_x / total_supply)
- минимумы вызывающего (slippage) и пол ликвидности для остатка

Движок только планирует: он не мутирует состояние и не вызывает леджеры.
Порядок побочных эффектов задаёт ExchangePool.
"""

from dataclasses import dataclass

from src.core.config.schema import PoolConfig
from src.core.domain.units import validate_amount, validate_non_negative_amount
from src.core.errors import InsufficientLiquidityError, InsufficientOutputError, SlippageError
from src.core.math.amm_math import (
    check_ratio_band,
    expected_counter_amount,
    initial_issuance,
    meets_liquidity_floor,
    proportional_issuance,
    redemption_amounts,
)
from src.pool.reserves import ReserveLedger


@dataclass(frozen=True)
class AddLiquidityPlan:
    """План депозита."""

    amount_a: int
    amount_b: int
    claim_to_caller: int
    claim_to_sink: int  # > 0 только при первом депозите
    expected_b: int | None  # None при первом депозите
    is_initial: bool


@dataclass(frozen=True)
class RemoveLiquidityPlan:
    """План выкупа."""

    claim_amount: int
    amount_a: int
    amount_b: int
    remaining_a: int
    remaining_b: int


class LiquidityEngine:
    def __init__(self, config: PoolConfig):
        self.config = config

    def plan_add(
        self,
        reserves: ReserveLedger,
        total_supply: int,
        amount_a: int,
        amount_b: int,
    ) -> AddLiquidityPlan:
        """
        Расчёт депозита.

        Raises:
            ZeroAmountError / AmountTooLargeError: Невалидные суммы
            InsufficientLiquidityError: Первый депозит не превышает минимум
                или эмиссия округляется до нуля
            RatioMismatchError: amount_b вне полосы допуска
        """
        ceiling = self.config.max_deposit_amount
        validate_amount("amount_a", amount_a, max_value=ceiling)
        validate_amount("amount_b", amount_b, max_value=ceiling)

        if reserves.is_empty():
            to_caller, to_sink = initial_issuance(
                amount_a, amount_b, self.config.minimum_liquidity
            )
            return AddLiquidityPlan(
                amount_a=amount_a,
                amount_b=amount_b,
                claim_to_caller=to_caller,
                claim_to_sink=to_sink,
                expected_b=None,
                is_initial=True,
            )

        expected_b = expected_counter_amount(amount_a, reserves.tracked_a, reserves.tracked_b)
        check_ratio_band(expected_b, amount_b, self.config.ratio_tolerance_bps)

        issuance = proportional_issuance(amount_a, reserves.tracked_a, total_supply)
        if issuance == 0:
            raise InsufficientLiquidityError(
                "deposit too small, issuance rounds to zero",
                amount_a=amount_a,
                reserve_a=reserves.tracked_a,
                total_supply=total_supply,
            )

        return AddLiquidityPlan(
            amount_a=amount_a,
            amount_b=amount_b,
            claim_to_caller=issuance,
            claim_to_sink=0,
            expected_b=expected_b,
            is_initial=False,
        )

    def plan_remove(
        self,
        reserves: ReserveLedger,
        total_supply: int,
        claim_amount: int,
        min_a: int,
        min_b: int,
    ) -> RemoveLiquidityPlan:
        """
        Расчёт выкупа.

        Raises:
            ZeroAmountError: claim_amount == 0
            InsufficientOutputError: Выкуп округляется до нуля по одному из активов
            SlippageError: Сумма ниже минимума вызывающего
            InsufficientLiquidityError: Остаток ниже пола ликвидности
        """
        validate_amount("claim_amount", claim_amount)
        validate_non_negative_amount("min_a", min_a)
        validate_non_negative_amount("min_b", min_b)

        if total_supply == 0 or claim_amount > total_supply:
            raise InsufficientLiquidityError(
                "claim amount exceeds supply", claim_amount=claim_amount, total_supply=total_supply
            )

        amounts = redemption_amounts(
            claim_amount, reserves.tracked_a, reserves.tracked_b, total_supply
        )
        if amounts.amount_a == 0 or amounts.amount_b == 0:
            raise InsufficientOutputError(
                "redemption rounds to zero",
                claim_amount=claim_amount,
                amount_a=amounts.amount_a,
                amount_b=amounts.amount_b,
            )

        if amounts.amount_a < min_a or amounts.amount_b < min_b:
            raise SlippageError(
                "redemption below caller minimums",
                amount_a=amounts.amount_a,
                amount_b=amounts.amount_b,
                min_a=min_a,
                min_b=min_b,
            )

        remaining_a = reserves.tracked_a - amounts.amount_a
        remaining_b = reserves.tracked_b - amounts.amount_b
        if not meets_liquidity_floor(remaining_a, remaining_b, self.config.minimum_liquidity):
            raise InsufficientLiquidityError(
                "remaining reserves below minimum liquidity floor",
                remaining_a=remaining_a,
                remaining_b=remaining_b,
                minimum_liquidity=self.config.minimum_liquidity,
            )

        return RemoveLiquidityPlan(
            claim_amount=claim_amount,
            amount_a=amounts.amount_a,
            amount_b=amounts.amount_b,
            remaining_a=remaining_a,
            remaining_b=remaining_b,
        )
