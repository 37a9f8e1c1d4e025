"""Тесты для Reconciliation Guard.

Coverage:
- PASS при совпадении и в пределах допуска
- BLOCK при drift выше допуска в любую сторону
- fee vault входит в ожидаемый баланс
- Пустой пул проходит всегда
- require() → ReserveDriftError с контекстом
"""

import pytest

from src.core.config.schema import PoolConfig
from src.core.domain.pool_state import AssetSide
from src.core.errors import ReserveDriftError
from src.gatekeeper.reconciliation import ReconciliationGuard
from src.pool.fees import FeeBook
from src.pool.reserves import ReserveLedger


@pytest.fixture
def guard():
    return ReconciliationGuard(PoolConfig())


@pytest.fixture
def reserves():
    return ReserveLedger(tracked_a=1_000_000, tracked_b=500_000)


class TestReconciliationGuard:
    """Тесты Reconciliation Guard."""

    def test_exact_match_passes(self, guard, reserves):
        result = guard.evaluate(reserves, FeeBook(), 1_000_000, 500_000)
        assert result.passed
        assert result.block_reason == ""
        assert result.asset_a.drift == 0

    def test_within_tolerance(self, guard, reserves):
        """Допуск 1%: 10_000 для A, 5_000 для B."""
        result = guard.evaluate(reserves, FeeBook(), 1_010_000, 495_000)
        assert result.passed
        assert result.asset_a.tolerance == 10_000
        assert result.asset_b.tolerance == 5_000

    def test_surplus_above_tolerance_blocks(self, guard, reserves):
        result = guard.evaluate(reserves, FeeBook(), 1_010_001, 500_000)
        assert not result.passed
        assert result.block_reason == "reserve_drift_a"
        assert result.first_failure().side is AssetSide.A

    def test_deficit_above_tolerance_blocks(self, guard, reserves):
        result = guard.evaluate(reserves, FeeBook(), 1_000_000, 494_999)
        assert not result.passed
        assert result.block_reason == "reserve_drift_b"

    def test_fee_vault_counts_as_expected(self, guard, reserves):
        """Комиссия лежит на балансе пула вне tracked резервов."""
        book = FeeBook(vault_a=50_000)
        assert guard.evaluate(reserves, book, 1_050_000, 500_000).passed
        result = guard.evaluate(reserves, book, 1_000_000, 500_000)
        assert result.asset_a.expected == 1_050_000
        assert result.asset_a.tolerance == 10_500
        assert not result.passed

    def test_empty_pool_passes(self, guard):
        result = guard.evaluate(ReserveLedger(), FeeBook(), 12_345, 0)
        assert result.passed
        assert "empty pool" in result.details

    def test_evaluate_is_idempotent(self, guard, reserves):
        first = guard.evaluate(reserves, FeeBook(), 1_003_000, 500_000)
        second = guard.evaluate(reserves, FeeBook(), 1_003_000, 500_000)
        assert first == second

    def test_require_raises_with_context(self, guard, reserves):
        result = guard.evaluate(reserves, FeeBook(), 2_000_000, 500_000, asset_a="TKA")
        with pytest.raises(ReserveDriftError) as exc_info:
            guard.require(result)
        assert exc_info.value.context == {
            "asset": "TKA",
            "tracked": 1_000_000,
            "actual": 2_000_000,
            "tolerance": 10_000,
        }

    def test_require_passes_silently(self, guard, reserves):
        guard.require(guard.evaluate(reserves, FeeBook(), 1_000_000, 500_000))

    def test_zero_tolerance(self, reserves):
        guard = ReconciliationGuard(PoolConfig(reserve_drift_tolerance_bps=0))
        assert not guard.evaluate(reserves, FeeBook(), 1_000_001, 500_000).passed
