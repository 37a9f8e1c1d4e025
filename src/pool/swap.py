"""
Swap Engine — цена сделки по формуле constant-product

net_in = amount_in * (FEE_DENOMINATOR - fee) / FEE_DENOMINATOR
amount_out = floor(net_in * reserve_out / (reserve_in + net_in))

Ограничения:
- amount_in > 0
- amount_in <= floor(reserve_in * max_swap_fraction_bps / 10_000)
- amount_out > 0 (сделка, округлившаяся до нуля, отклоняется)
- amount_out >= min_out (slippage)

Цена считается только по tracked резервам.
"""

from dataclasses import dataclass

from src.core.config.schema import PoolConfig
from src.core.domain.pool_state import SwapDirection
from src.core.domain.units import validate_amount, validate_non_negative_amount
from src.core.errors import (
    InsufficientLiquidityError,
    InsufficientOutputError,
    SlippageError,
    SwapTooLargeError,
)
from src.core.math.amm_math import SwapQuote, get_amount_out, max_swap_input
from src.pool.reserves import ReserveLedger


@dataclass(frozen=True)
class SwapPlan:
    """План сделки."""

    direction: SwapDirection
    quote: SwapQuote
    min_out: int


class SwapEngine:
    def __init__(self, config: PoolConfig):
        self.config = config

    def validate_input(self, amount_in: int, min_out: int) -> None:
        """Проверка входа до чтения состояния."""
        validate_amount("amount_in", amount_in)
        validate_non_negative_amount("min_out", min_out)

    def max_input(self, reserves: ReserveLedger, direction: SwapDirection) -> int:
        return max_swap_input(reserves.get(direction.side_in), self.config.max_swap_fraction_bps)

    def quote(
        self,
        reserves: ReserveLedger,
        fee_bps: int,
        amount_in: int,
        direction: SwapDirection,
    ) -> SwapQuote:
        """Расчёт без проверок размера и slippage."""
        return get_amount_out(
            amount_in,
            reserves.get(direction.side_in),
            reserves.get(direction.side_out),
            fee_bps,
        )

    def plan(
        self,
        reserves: ReserveLedger,
        fee_bps: int,
        amount_in: int,
        direction: SwapDirection,
        min_out: int,
    ) -> SwapPlan:
        """
        Расчёт сделки со всеми проверками.

        Raises:
            SwapTooLargeError: amount_in больше MAX_SWAP_FRACTION входного резерва
            InsufficientLiquidityError: Пул пуст
            InsufficientOutputError: amount_out == 0
            SlippageError: amount_out < min_out
        """
        if reserves.is_empty():
            raise InsufficientLiquidityError("pool has no liquidity", amount_in=amount_in)

        cap = self.max_input(reserves, direction)
        if amount_in > cap:
            raise SwapTooLargeError(
                "amount_in exceeds max swap fraction of input reserve",
                amount_in=amount_in,
                max_amount_in=cap,
                max_swap_fraction_bps=self.config.max_swap_fraction_bps,
            )

        quote = self.quote(reserves, fee_bps, amount_in, direction)

        if quote.amount_out == 0:
            raise InsufficientOutputError(
                "trade output rounds to zero", amount_in=amount_in, net_in=quote.net_in
            )

        if quote.amount_out < min_out:
            raise SlippageError(
                "trade output below min_out", amount_out=quote.amount_out, min_out=min_out
            )

        return SwapPlan(direction=direction, quote=quote, min_out=min_out)
