"""Emergency Unwind State Machine — необратимая остановка пула.

Состояния:
- ACTIVE: нормальная работа
- HALTED: терминальное; add/remove/swap/сбор комиссий запрещены навсегда,
  доступен только emergency-выкуп claim-токенов

Переход ACTIVE → HALTED фиксирует снапшот РЕАЛЬНЫХ балансов пула
(claim_supply, balance_a, balance_b). Каждый выкуп платит

    amount_x = floor(snapshot_balance_x * claim / snapshot_supply)

поэтому сумма всех выкупов никогда не превышает снапшот, независимо от
порядка выкупов и от поступлений на баланс пула после halt.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.pool_state import EmergencySnapshot, EmergencyState
from src.core.domain.units import validate_amount
from src.core.errors import InsufficientLiquidityError, InsufficientOutputError, PoolHaltedError
from src.core.math.amm_math import RedemptionAmounts, redemption_amounts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmergencyTransitionResult:
    """Результат попытки перехода в HALTED."""

    new_state: EmergencyState
    previous_state: EmergencyState
    snapshot: Optional[EmergencySnapshot]

    # Диагностика
    transition_occurred: bool
    transition_reason: str

    # Для отладки
    details: str


class EmergencyStateMachine:
    """Latch ACTIVE → HALTED и расчёт emergency-выкупа.

    Stateless: текущее состояние и снапшот хранит пул, машина только
    оценивает переходы и считает выплаты.
    """

    def evaluate_initiation(
        self,
        current_state: EmergencyState,
        claim_supply: int,
        balance_a: int,
        balance_b: int,
        now: int,
    ) -> EmergencyTransitionResult:
        """Оценка перехода в HALTED.

        Args:
            current_state: Текущее состояние пула
            claim_supply: Текущий supply claim-токенов
            balance_a: Реальный баланс пула в активе A
            balance_b: Реальный баланс пула в активе B
            now: Timestamp леджера

        Returns:
            EmergencyTransitionResult; transition_occurred=False при отказе
        """
        if current_state == EmergencyState.HALTED:
            return EmergencyTransitionResult(
                new_state=current_state,
                previous_state=current_state,
                snapshot=None,
                transition_occurred=False,
                transition_reason="already_halted",
                details="Pool already HALTED, snapshot is immutable",
            )

        if claim_supply == 0:
            return EmergencyTransitionResult(
                new_state=current_state,
                previous_state=current_state,
                snapshot=None,
                transition_occurred=False,
                transition_reason="no_claim_supply",
                details="Nothing to unwind: claim supply is zero",
            )

        snapshot = EmergencySnapshot(
            claim_supply=claim_supply,
            balance_a=balance_a,
            balance_b=balance_b,
            taken_at=now,
        )
        return EmergencyTransitionResult(
            new_state=EmergencyState.HALTED,
            previous_state=current_state,
            snapshot=snapshot,
            transition_occurred=True,
            transition_reason="emergency_unwind",
            details=(
                f"ACTIVE → HALTED: supply={claim_supply}, "
                f"balance_a={balance_a}, balance_b={balance_b}"
            ),
        )

    def initiate(
        self,
        current_state: EmergencyState,
        claim_supply: int,
        balance_a: int,
        balance_b: int,
        now: int,
    ) -> EmergencySnapshot:
        """Переход в HALTED или отказ.

        Raises:
            PoolHaltedError: Пул уже HALTED
            InsufficientLiquidityError: Supply claim-токенов нулевой
        """
        result = self.evaluate_initiation(current_state, claim_supply, balance_a, balance_b, now)
        if result.transition_reason == "already_halted":
            raise PoolHaltedError("emergency unwind already initiated")
        if not result.transition_occurred:
            raise InsufficientLiquidityError(
                "cannot unwind a pool without claim supply", claim_supply=claim_supply
            )

        logger.info("emergency unwind: %s", result.details)
        return result.snapshot

    def redemption(self, snapshot: EmergencySnapshot, claim_amount: int) -> RedemptionAmounts:
        """Выплата за claim_amount по снапшоту.

        Raises:
            ZeroAmountError: claim_amount == 0
            InsufficientOutputError: Выплата нулевая по обоим активам
        """
        validate_amount("claim_amount", claim_amount)

        amounts = redemption_amounts(
            claim_amount, snapshot.balance_a, snapshot.balance_b, snapshot.claim_supply
        )
        if amounts.amount_a == 0 and amounts.amount_b == 0:
            raise InsufficientOutputError(
                "emergency redemption rounds to zero",
                claim_amount=claim_amount,
                claim_supply=snapshot.claim_supply,
            )
        return amounts
