"""
Reserve Ledger — собственный учёт резервов пула

Tracked резервы ведутся пулом и меняются только его собственными
операциями. При расчёте цены внешний леджер НЕ читается: реальные балансы
сравниваются с tracked только в Reconciliation Guard.

Инвариант: tracked_a > 0 ⇔ tracked_b > 0 после первого депозита.
"""

from dataclasses import dataclass

from src.core.domain.pool_state import AssetSide
from src.core.errors import InsufficientLiquidityError


@dataclass
class ReserveLedger:
    tracked_a: int = 0
    tracked_b: int = 0

    def get(self, side: AssetSide) -> int:
        return self.tracked_a if side is AssetSide.A else self.tracked_b

    def credit(self, side: AssetSide, amount: int) -> None:
        if side is AssetSide.A:
            self.tracked_a += amount
        else:
            self.tracked_b += amount

    def debit(self, side: AssetSide, amount: int) -> None:
        current = self.get(side)
        if amount > current:
            raise InsufficientLiquidityError(
                "debit exceeds tracked reserve", side=side.value, reserve=current, amount=amount
            )
        if side is AssetSide.A:
            self.tracked_a -= amount
        else:
            self.tracked_b -= amount

    def is_empty(self) -> bool:
        return self.tracked_a == 0 and self.tracked_b == 0

    def is_consistent(self) -> bool:
        """tracked_a > 0 ⇔ tracked_b > 0."""
        return (self.tracked_a > 0) == (self.tracked_b > 0)
