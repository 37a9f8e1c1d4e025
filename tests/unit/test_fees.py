"""Тесты для Fee Accountant.

Coverage:
- Разделение комиссии протокол / LP
- Пропорциональное начисление держателям на момент сделки
- Порог выплаты и сохранение дробных начислений
- Сбор доли протокола
"""

import pytest

from src.core.config.schema import PoolConfig
from src.core.domain.pool_state import AssetSide
from src.core.errors import FeeBelowThresholdError
from src.pool.claim_token import CLAIM_SINK
from src.pool.fees import FeeAccountant, FeeBook


@pytest.fixture
def accountant():
    return FeeAccountant(PoolConfig())


@pytest.fixture
def holders():
    return {"alice": 900, CLAIM_SINK: 100}


class TestSplit:
    def test_default_protocol_share(self, accountant):
        """10% протоколу, 90% LP (в fee units)."""
        assert accountant.split(10) == (10_000, 90_000)

    def test_zero_protocol_share(self):
        accountant = FeeAccountant(PoolConfig(protocol_fee_share_bps=0))
        assert accountant.split(7) == (0, 70_000)


class TestAccrue:
    def test_distribution(self, accountant, holders):
        book = FeeBook()
        result = accountant.accrue(book, AssetSide.A, 10, holders, 1_000)

        assert book.vault_a == 10
        assert book.protocol.units_a == 10_000
        assert book.accruals["alice"].units_a == 81_000
        assert book.accruals[CLAIM_SINK].units_a == 9_000
        assert result.distributed_units == 90_000

    def test_snapshot_at_trade_time(self, accountant):
        """Держатель, появившийся после сделки, ничего не получает."""
        book = FeeBook()
        accountant.accrue(book, AssetSide.B, 10, {"alice": 1_000}, 1_000)
        assert accountant.owed(book, "bob").amount_b == 0
        assert accountant.owed(book, "alice").amount_b == 9

    def test_distributed_never_exceeds_lp_units(self, accountant):
        book = FeeBook()
        result = accountant.accrue(book, AssetSide.A, 1, {"a": 1, "b": 1, "c": 1}, 3)
        assert result.distributed_units <= result.lp_units


class TestCollect:
    def test_collect_pays_and_zeroes(self, accountant, holders):
        book = FeeBook()
        accountant.accrue(book, AssetSide.A, 10, holders, 1_000)

        payout = accountant.collect(book, "alice")

        assert (payout.amount_a, payout.amount_b) == (8, 0)
        assert "alice" not in book.accruals
        assert book.vault_a == 2

    def test_threshold(self, holders):
        accountant = FeeAccountant(PoolConfig(min_fee_collection=10))
        book = FeeBook()
        accountant.accrue(book, AssetSide.A, 10, holders, 1_000)
        with pytest.raises(FeeBelowThresholdError) as exc_info:
            accountant.collect(book, "alice")
        assert exc_info.value.context["owed_a"] == 8
        assert book.accruals["alice"].units_a == 81_000

    def test_fractional_side_retained(self, accountant, holders):
        """Актив с нулевой целой частью не обнуляется при выплате другого."""
        book = FeeBook()
        accountant.accrue(book, AssetSide.A, 10, holders, 1_000)
        accountant.accrue(book, AssetSide.B, 1, holders, 1_000)

        payout = accountant.collect(book, "alice")

        assert (payout.amount_a, payout.amount_b) == (8, 0)
        assert book.accruals["alice"].units_a == 0
        assert book.accruals["alice"].units_b == 8_100

    def test_nothing_owed(self, accountant):
        with pytest.raises(FeeBelowThresholdError):
            accountant.collect(FeeBook(), "nobody")

    def test_collect_protocol(self, accountant, holders):
        book = FeeBook()
        accountant.accrue(book, AssetSide.A, 10, holders, 1_000)
        accountant.accrue(book, AssetSide.B, 25, holders, 1_000)

        payout = accountant.collect_protocol(book)

        assert (payout.amount_a, payout.amount_b) == (1, 2)
        assert book.protocol.is_empty()
        assert (book.vault_a, book.vault_b) == (9, 23)
