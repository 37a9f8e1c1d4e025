"""
Fee Accountant — распределение торговых комиссий

Комиссия каждой сделки (в активе входа):
- protocol_fee_share_bps → общий счётчик протокола
- остаток → всем текущим держателям claim-токенов пропорционально доле
  в supply НА МОМЕНТ СДЕЛКИ (последующие держатели ничего не получают
  ретроактивно)

Начисления хранятся в дробных fee units (amount × FEE_SCALE), чтобы не
терять округление при пропорциональном делении. В целые единицы актива
переводятся только при выплате, с усечением к нулю.

Физически комиссия лежит в fee vault — вне tracked резервов. Reconciliation
Guard сравнивает реальный баланс с tracked + vault.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping

from src.core.config.schema import PoolConfig
from src.core.domain.pool_state import AssetSide
from src.core.domain.units import apply_bps, from_fee_units, to_fee_units
from src.core.errors import FeeBelowThresholdError

logger = logging.getLogger(__name__)


# =============================================================================
# STATE
# =============================================================================


@dataclass
class FeeAccrual:
    """Начисление по двум активам в fee units."""

    units_a: int = 0
    units_b: int = 0

    def get(self, side: AssetSide) -> int:
        return self.units_a if side is AssetSide.A else self.units_b

    def add(self, side: AssetSide, units: int) -> None:
        if side is AssetSide.A:
            self.units_a += units
        else:
            self.units_b += units

    def zero(self, side: AssetSide) -> None:
        if side is AssetSide.A:
            self.units_a = 0
        else:
            self.units_b = 0

    def is_empty(self) -> bool:
        return self.units_a == 0 and self.units_b == 0


@dataclass
class FeeBook:
    """Fee Accrual Records всех держателей, счётчик протокола и fee vault."""

    accruals: Dict[str, FeeAccrual] = field(default_factory=dict)
    protocol: FeeAccrual = field(default_factory=FeeAccrual)
    vault_a: int = 0
    vault_b: int = 0

    def vault(self, side: AssetSide) -> int:
        return self.vault_a if side is AssetSide.A else self.vault_b

    def vault_add(self, side: AssetSide, amount: int) -> None:
        if side is AssetSide.A:
            self.vault_a += amount
        else:
            self.vault_b += amount

    def record_for(self, holder: str) -> FeeAccrual:
        return self.accruals.setdefault(holder, FeeAccrual())


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class FeeDistribution:
    """Результат распределения одной комиссии."""

    side: AssetSide
    fee: int
    protocol_units: int
    lp_units: int
    distributed_units: int  # сумма долей держателей, <= lp_units


@dataclass(frozen=True)
class FeePayout:
    """Выплата в целых единицах актива."""

    amount_a: int
    amount_b: int


# =============================================================================
# ACCOUNTANT
# =============================================================================


class FeeAccountant:
    def __init__(self, config: PoolConfig):
        self.config = config

    def split(self, fee: int) -> tuple[int, int]:
        """
        Разделение комиссии на долю протокола и долю LP в fee units.

        Returns:
            (protocol_units, lp_units)
        """
        total_units = to_fee_units(fee)
        protocol_units = apply_bps(total_units, self.config.protocol_fee_share_bps)
        return protocol_units, total_units - protocol_units

    def accrue(
        self,
        book: FeeBook,
        side: AssetSide,
        fee: int,
        holders: Mapping[str, int],
        total_supply: int,
    ) -> FeeDistribution:
        """
        Начисление комиссии одной сделки.

        Args:
            book: FeeBook пула
            side: Актив, в котором взята комиссия (вход сделки)
            fee: Комиссия в целых единицах
            holders: Балансы claim-токенов на момент сделки
            total_supply: Supply claim-токенов на момент сделки
        """
        protocol_units, lp_units = self.split(fee)
        book.vault_add(side, fee)
        book.protocol.add(side, protocol_units)

        distributed = 0
        if total_supply > 0 and lp_units > 0:
            for holder, balance in holders.items():
                share = lp_units * balance // total_supply
                if share:
                    book.record_for(holder).add(side, share)
                    distributed += share

        logger.debug(
            "fee accrued: side=%s fee=%d protocol_units=%d lp_units=%d distributed=%d holders=%d",
            side.value, fee, protocol_units, lp_units, distributed, len(holders),
        )

        return FeeDistribution(
            side=side,
            fee=fee,
            protocol_units=protocol_units,
            lp_units=lp_units,
            distributed_units=distributed,
        )

    def owed(self, book: FeeBook, holder: str) -> FeePayout:
        """Сколько держатель получил бы сейчас (целые единицы, усечение)."""
        record = book.accruals.get(holder)
        if record is None:
            return FeePayout(amount_a=0, amount_b=0)
        return FeePayout(
            amount_a=from_fee_units(record.units_a),
            amount_b=from_fee_units(record.units_b),
        )

    def collect(self, book: FeeBook, holder: str) -> FeePayout:
        """
        Выплата начислений держателя.

        Выплата происходит только если хотя бы по одному активу усечённая
        сумма >= min_fee_collection. Обнуляются только реально выплаченные
        активы; актив с нулевой целой частью сохраняет дробное начисление.

        Raises:
            FeeBelowThresholdError: Если ни один актив не достиг порога
        """
        payout = self.owed(book, holder)
        threshold = self.config.min_fee_collection
        if max(payout.amount_a, payout.amount_b) < threshold:
            raise FeeBelowThresholdError(
                "owed fees below collection threshold",
                holder=holder,
                owed_a=payout.amount_a,
                owed_b=payout.amount_b,
                threshold=threshold,
            )

        record = book.accruals[holder]
        for side, amount in ((AssetSide.A, payout.amount_a), (AssetSide.B, payout.amount_b)):
            if amount > 0:
                record.zero(side)
                book.vault_add(side, -amount)

        if record.is_empty():
            del book.accruals[holder]

        return payout

    def collect_protocol(self, book: FeeBook) -> FeePayout:
        """Выплата всего начисления протокола; обнуляется безусловно."""
        payout = FeePayout(
            amount_a=from_fee_units(book.protocol.units_a),
            amount_b=from_fee_units(book.protocol.units_b),
        )
        book.protocol = FeeAccrual()
        book.vault_add(AssetSide.A, -payout.amount_a)
        book.vault_add(AssetSide.B, -payout.amount_b)
        return payout
