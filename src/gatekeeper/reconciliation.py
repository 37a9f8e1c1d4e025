"""
Reconciliation Guard — сверка tracked резервов с реальными балансами

Перед каждым мутирующим вызовом, зависящим от резервов (remove_liquidity,
swap), и по запросу (verify_reserves):

    expected = tracked + fee_vault
    drift    = |actual - expected|
    PASS     ⇔ drift <= floor(expected * reserve_drift_tolerance_bps / 10_000)

по каждому активу отдельно. Пустой пул (tracked = 0) проходит всегда.

Guard ничего не исправляет: tracked резервы не перезаписываются реальными
балансами. Устойчивый drift снимается только recovery или emergency unwind.
"""

import logging
from dataclasses import dataclass

from src.core.config.schema import PoolConfig
from src.core.domain.pool_state import AssetSide
from src.core.domain.units import apply_bps
from src.core.errors import ReserveDriftError
from src.pool.fees import FeeBook
from src.pool.reserves import ReserveLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetReconciliation:
    """Сверка одного актива."""

    side: AssetSide
    asset: str
    tracked: int
    fee_vault: int
    expected: int  # tracked + fee_vault
    actual: int
    drift: int
    tolerance: int
    within_tolerance: bool


@dataclass(frozen=True)
class ReconciliationResult:
    """Результат Reconciliation Guard."""

    passed: bool
    block_reason: str

    asset_a: AssetReconciliation
    asset_b: AssetReconciliation

    # Детали
    details: str

    def first_failure(self) -> AssetReconciliation | None:
        for check in (self.asset_a, self.asset_b):
            if not check.within_tolerance:
                return check
        return None


class ReconciliationGuard:
    """
    Guard расхождения резервов.

    Stateless: все входные данные передаются в evaluate(), реальные балансы
    читает вызывающая сторона (пул) через AssetLedger.balance_of.
    """

    def __init__(self, config: PoolConfig):
        self.config = config

    def _check(
        self,
        side: AssetSide,
        asset: str,
        tracked: int,
        fee_vault: int,
        actual: int,
        empty_pool: bool,
    ) -> AssetReconciliation:
        expected = tracked + fee_vault
        drift = abs(actual - expected)
        tolerance = apply_bps(expected, self.config.reserve_drift_tolerance_bps)
        return AssetReconciliation(
            side=side,
            asset=asset,
            tracked=tracked,
            fee_vault=fee_vault,
            expected=expected,
            actual=actual,
            drift=drift,
            tolerance=tolerance,
            within_tolerance=empty_pool or drift <= tolerance,
        )

    def evaluate(
        self,
        reserves: ReserveLedger,
        fee_book: FeeBook,
        actual_a: int,
        actual_b: int,
        asset_a: str = "A",
        asset_b: str = "B",
    ) -> ReconciliationResult:
        """
        Оценка расхождения по обоим активам.

        Args:
            reserves: Tracked резервы пула
            fee_book: FeeBook пула (fee vault вне tracked резервов)
            actual_a: Реальный баланс пула в активе A
            actual_b: Реальный баланс пула в активе B
            asset_a: Символ актива A (для диагностики)
            asset_b: Символ актива B (для диагностики)

        Returns:
            ReconciliationResult; не бросает исключений
        """
        empty_pool = reserves.is_empty()
        check_a = self._check(
            AssetSide.A, asset_a, reserves.tracked_a, fee_book.vault_a, actual_a, empty_pool
        )
        check_b = self._check(
            AssetSide.B, asset_b, reserves.tracked_b, fee_book.vault_b, actual_b, empty_pool
        )

        if empty_pool:
            return ReconciliationResult(
                passed=True,
                block_reason="",
                asset_a=check_a,
                asset_b=check_b,
                details="PASS: empty pool",
            )

        for check in (check_a, check_b):
            if not check.within_tolerance:
                return ReconciliationResult(
                    passed=False,
                    block_reason=f"reserve_drift_{check.side.value.lower()}",
                    asset_a=check_a,
                    asset_b=check_b,
                    details=(
                        f"{check.asset}: drift={check.drift} > tolerance={check.tolerance} "
                        f"(tracked={check.tracked}, fee_vault={check.fee_vault}, "
                        f"actual={check.actual})"
                    ),
                )

        return ReconciliationResult(
            passed=True,
            block_reason="",
            asset_a=check_a,
            asset_b=check_b,
            details=(
                f"PASS: drift_a={check_a.drift}/{check_a.tolerance}, "
                f"drift_b={check_b.drift}/{check_b.tolerance}"
            ),
        )

    def require(self, result: ReconciliationResult) -> None:
        """
        Превращение отрицательного результата в отказ вызова.

        Raises:
            ReserveDriftError: Если хотя бы один актив вне допуска
        """
        if result.passed:
            return

        failure = result.first_failure()
        logger.warning("reconciliation guard blocked call: %s", result.details)
        raise ReserveDriftError(
            "tracked reserve diverges from true balance",
            asset=failure.asset,
            tracked=failure.tracked,
            actual=failure.actual,
            tolerance=failure.tolerance,
        )
