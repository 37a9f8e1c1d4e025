"""
Exchange Pool — двухактивный constant-product пул

Открытый интерфейс пула. Связывает движки и guards:
- LiquidityEngine: эмиссия и выкуп claim-токенов
- SwapEngine: цена сделки
- FeeAccountant: распределение комиссии между LP и протоколом
- ReconciliationGuard: сверка tracked резервов с реальными балансами
- EmergencyStateMachine: необратимый halt и выкуп по снапшоту
- RoleRegistry / FeeTimelock: роли и отложенное изменение fee

Каждая мутирующая точка входа:
1. захватывает ReentrancyGuard (вложенный вход отклоняется сразу)
2. выполняется внутри HostLedger.atomic() (отказ откатывает всё:
   состояние пула, балансы in-memory леджеров, события)

Порядок проверок внутри точки входа: роль → валидация входа →
состояние (halt/pause) → deadline → Reconciliation Guard → инварианты → мутация.
"""

import copy
import functools
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, TypeVar

from src.core.config.loader import load_config
from src.core.config.schema import PoolConfig
from src.core.contracts.validators import validate_pool_event
from src.core.domain.events import EventLog, EventType, PoolEvent
from src.core.domain.pool_state import (
    AssetSide,
    EmergencySnapshot,
    EmergencyState,
    Reserves,
    SwapDirection,
    TimelockProposal,
)
from src.core.domain.units import from_fee_units, validate_amount, validate_non_negative_amount
from src.core.errors import (
    InputValidationError,
    InsufficientLiquidityError,
    InvalidAssetError,
    PoolHaltedError,
    PoolNotHaltedError,
    PoolPausedError,
    ReentrancyError,
    StaleDeadlineError,
    TransferFailedError,
)
from src.core.math.amm_math import constant_product, spot_price
from src.emergency.state_machine import EmergencyStateMachine
from src.gatekeeper.reconciliation import ReconciliationGuard, ReconciliationResult
from src.gatekeeper.reentrancy import ReentrancyGuard
from src.governance.roles import Role, RoleRegistry
from src.governance.timelock import FeeTimelock
from src.ledger.host import HostLedger
from src.ledger.interface import AssetLedger
from src.pool.claim_token import CLAIM_SINK, ClaimToken
from src.pool.fees import FeeAccountant, FeeBook, FeePayout
from src.pool.liquidity import AddLiquidityPlan, LiquidityEngine, RemoveLiquidityPlan
from src.pool.reserves import ReserveLedger
from src.pool.swap import SwapEngine, SwapPlan

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# STATE
# =============================================================================


@dataclass
class PoolState:
    """Изменяемое состояние пула (единица checkpoint/restore), кроме журнала событий."""

    reserves: ReserveLedger
    claims: ClaimToken
    fees: FeeBook
    roles: RoleRegistry
    timelock: FeeTimelock
    swap_fee_bps: int
    paused: bool = False
    emergency_state: EmergencyState = EmergencyState.ACTIVE
    snapshot: Optional[EmergencySnapshot] = None


def _entry_point(method: F) -> F:
    """Мутирующая точка входа: reentrancy lock + атомарный вызов."""

    @functools.wraps(method)
    def wrapper(self: "ExchangePool", *args: Any, **kwargs: Any) -> Any:
        with self._reentrancy.enter(method.__name__):
            with self.host.atomic():
                return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class ExchangePool:
    def __init__(
        self,
        pool_id: str,
        asset_a: AssetLedger,
        asset_b: AssetLedger,
        host: HostLedger,
        admin: str,
        timelock_executor: str,
        config: Optional[PoolConfig] = None,
        roles: Optional[Dict[Role, Iterable[str]]] = None,
    ) -> None:
        """
        Args:
            pool_id: Идентичность пула на леджерах активов
            asset_a: Леджер актива A (base)
            asset_b: Леджер актива B (quote)
            host: Хостинг-леджер (время, атомарность вызовов)
            admin: Получает ADMIN и, если roles не заданы, все остальные роли
            timelock_executor: Единственная идентичность, исполняющая fee proposals
            config: Параметры пула; по умолчанию defaults.yaml
            roles: Явное распределение операционных ролей
        """
        if not pool_id:
            raise InputValidationError("pool_id must be non-empty", pool_id=pool_id)
        if not admin:
            raise InputValidationError("admin must be non-empty", admin=admin)
        if asset_a is None or asset_b is None:
            raise InvalidAssetError("both assets are required")
        if not asset_a.symbol or not asset_b.symbol:
            raise InvalidAssetError(
                "asset identifiers must be non-empty", asset_a=asset_a.symbol, asset_b=asset_b.symbol
            )
        if asset_a is asset_b or asset_a.symbol == asset_b.symbol:
            raise InvalidAssetError("pool assets must be distinct", asset=asset_a.symbol)

        self.pool_id = pool_id
        self.asset_a = asset_a
        self.asset_b = asset_b
        self.host = host
        self.config = config if config is not None else load_config()

        self._liquidity = LiquidityEngine(self.config)
        self._swap = SwapEngine(self.config)
        self._fees = FeeAccountant(self.config)
        self._guard = ReconciliationGuard(self.config)
        self._emergency = EmergencyStateMachine()
        self._reentrancy = ReentrancyGuard()

        if roles is None:
            roles = {role: [admin] for role in Role}
        registry = RoleRegistry(roles)
        registry.grant(Role.ADMIN, admin)

        pair = f"{asset_a.symbol}-{asset_b.symbol}"
        self.state = PoolState(
            reserves=ReserveLedger(),
            claims=ClaimToken(
                name=f"{pair} LP", symbol=f"{pair}-LP", decimals=self.config.claim_decimals
            ),
            fees=FeeBook(),
            roles=registry,
            timelock=FeeTimelock(timelock_executor, self.config.timelock_delay_seconds),
            swap_fee_bps=self.config.initial_fee_bps,
        )
        self._events = EventLog()
        host.register(self)

        logger.info(
            "pool %s created: pair=%s fee_bps=%d admin=%s",
            pool_id, pair, self.state.swap_fee_bps, admin,
        )

    def __repr__(self) -> str:
        return f"ExchangePool({self.pool_id!r}, {self.asset_a.symbol}/{self.asset_b.symbol})"

    # -------------------------------------------------------------------------
    # Checkpointable
    # -------------------------------------------------------------------------

    def checkpoint(self) -> Tuple[PoolState, int]:
        # Журнал только дописывается: для отката хватает номера следующего события
        return copy.deepcopy(self.state), self._events.next_sequence

    def restore(self, saved: Tuple[PoolState, int]) -> None:
        state, next_sequence = saved
        self.state = state
        self._events.truncate(next_sequence)

    # =========================================================================
    # LIQUIDITY
    # =========================================================================

    @_entry_point
    def add_liquidity(self, caller: str, amount_a: int, amount_b: int) -> AddLiquidityPlan:
        """
        Депозит обоих активов в обмен на claim-токены.

        Порядок: суммы → pause/halt → Reconciliation Guard → инварианты →
        mint → перевод активов в пул → рост tracked резервов.

        Returns:
            AddLiquidityPlan с фактической эмиссией

        Raises:
            PoolHaltedError / PoolPausedError: Торговля запрещена
            ZeroAmountError / AmountTooLargeError: Невалидные суммы
            ReserveDriftError: Guard не пройден
            RatioMismatchError: amount_b вне полосы допуска
            InsufficientLiquidityError: Первый депозит не превышает минимум
            TransferFailedError: Леджер актива отказал
        """
        ceiling = self.config.max_deposit_amount
        validate_amount("amount_a", amount_a, max_value=ceiling)
        validate_amount("amount_b", amount_b, max_value=ceiling)
        self._require_trading()
        self._require_reconciled()

        state = self.state
        plan = self._liquidity.plan_add(
            state.reserves, state.claims.total_supply, amount_a, amount_b
        )

        if plan.claim_to_sink:
            state.claims.mint(CLAIM_SINK, plan.claim_to_sink)
        state.claims.mint(caller, plan.claim_to_caller)

        self._pull(AssetSide.A, caller, plan.amount_a)
        self._pull(AssetSide.B, caller, plan.amount_b)

        state.reserves.credit(AssetSide.A, plan.amount_a)
        state.reserves.credit(AssetSide.B, plan.amount_b)

        self._emit(
            EventType.LIQUIDITY_ADDED,
            caller,
            provider=caller,
            amount_a=plan.amount_a,
            amount_b=plan.amount_b,
            claim_minted=plan.claim_to_caller,
            sink_minted=plan.claim_to_sink,
        )
        logger.info(
            "liquidity added: pool=%s provider=%s a=%d b=%d minted=%d initial=%s",
            self.pool_id, caller, plan.amount_a, plan.amount_b, plan.claim_to_caller, plan.is_initial,
        )
        return plan

    @_entry_point
    def remove_liquidity(
        self,
        caller: str,
        claim_amount: int,
        min_a: int,
        min_b: int,
        deadline: int,
    ) -> RemoveLiquidityPlan:
        """
        Выкуп claim-токенов за пропорциональную долю tracked резервов.

        Порядок: deadline → Reconciliation Guard → расчёт → burn →
        уменьшение tracked резервов → перевод активов вызывающему.

        Raises:
            PoolHaltedError: Пул в HALTED
            StaleDeadlineError: timestamp > deadline
            ReserveDriftError: Guard не пройден
            SlippageError: Суммы ниже min_a/min_b
            InsufficientLiquidityError: Остаток ниже пола ликвидности
            InsufficientBalanceError: У вызывающего меньше claim_amount
        """
        validate_amount("claim_amount", claim_amount)
        validate_non_negative_amount("min_a", min_a)
        validate_non_negative_amount("min_b", min_b)
        self._require_not_halted()
        self._check_deadline(deadline)
        self._require_reconciled()

        state = self.state
        plan = self._liquidity.plan_remove(
            state.reserves, state.claims.total_supply, claim_amount, min_a, min_b
        )

        state.claims.burn(caller, plan.claim_amount)
        state.reserves.debit(AssetSide.A, plan.amount_a)
        state.reserves.debit(AssetSide.B, plan.amount_b)

        self._push(AssetSide.A, caller, plan.amount_a)
        self._push(AssetSide.B, caller, plan.amount_b)

        self._emit(
            EventType.LIQUIDITY_REMOVED,
            caller,
            provider=caller,
            amount_a=plan.amount_a,
            amount_b=plan.amount_b,
            claim_burned=plan.claim_amount,
        )
        logger.info(
            "liquidity removed: pool=%s provider=%s burned=%d a=%d b=%d",
            self.pool_id, caller, plan.claim_amount, plan.amount_a, plan.amount_b,
        )
        return plan

    # =========================================================================
    # SWAP
    # =========================================================================

    @_entry_point
    def swap(
        self,
        caller: str,
        amount_in: int,
        direction: SwapDirection,
        min_out: int,
        deadline: int,
    ) -> SwapPlan:
        """
        Сделка по constant-product формуле.

        Порядок отказов: нулевой вход → deadline → Reconciliation Guard →
        лимит размера → цена → нулевой выход / min_out.

        Мутация: вход переводится в пул, tracked входа растёт на net_in,
        комиссия уходит в fee vault через FeeAccountant, затем выход
        переводится вызывающему и tracked выхода уменьшается.

        Raises:
            PoolHaltedError / PoolPausedError: Торговля запрещена
            ZeroAmountError: amount_in == 0
            StaleDeadlineError: timestamp > deadline
            ReserveDriftError: Guard не пройден
            SwapTooLargeError: amount_in больше доли резерва
            InsufficientOutputError: Выход округлился до нуля
            SlippageError: Выход ниже min_out
        """
        direction = self._parse_direction(direction)
        self._swap.validate_input(amount_in, min_out)
        self._require_trading()
        self._check_deadline(deadline)
        self._require_reconciled()

        state = self.state
        plan = self._swap.plan(state.reserves, state.swap_fee_bps, amount_in, direction, min_out)
        quote = plan.quote
        side_in, side_out = direction.side_in, direction.side_out
        k_before = constant_product(state.reserves.tracked_a, state.reserves.tracked_b)

        self._pull(side_in, caller, quote.amount_in)
        state.reserves.credit(side_in, quote.net_in)
        if quote.fee:
            self._fees.accrue(
                state.fees,
                side_in,
                quote.fee,
                state.claims.holders(),
                state.claims.total_supply,
            )

        state.reserves.debit(side_out, quote.amount_out)
        self._push(side_out, caller, quote.amount_out)

        logger.debug(
            "swap k: before=%d after=%d",
            k_before, constant_product(state.reserves.tracked_a, state.reserves.tracked_b),
        )
        self._emit(
            EventType.TRADE_EXECUTED,
            caller,
            trader=caller,
            direction=direction.value,
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            fee=quote.fee,
        )
        logger.info(
            "trade executed: pool=%s trader=%s %s in=%d out=%d fee=%d",
            self.pool_id, caller, direction.value, quote.amount_in, quote.amount_out, quote.fee,
        )
        return plan

    def swap_a_to_b(
        self, caller: str, amount_in: int, min_out: int, deadline: int
    ) -> SwapPlan:
        """Продажа base (A) за quote (B)."""
        return self.swap(caller, amount_in, SwapDirection.A_TO_B, min_out, deadline)

    def swap_b_to_a(
        self, caller: str, amount_in: int, min_out: int, deadline: int
    ) -> SwapPlan:
        """Продажа quote (B) за base (A)."""
        return self.swap(caller, amount_in, SwapDirection.B_TO_A, min_out, deadline)

    def quote(self, amount_in: int, direction: SwapDirection) -> int:
        """
        Выход сделки по текущим tracked резервам (только чтение).

        Лимит размера и min_out не проверяются.

        Raises:
            ZeroAmountError: amount_in == 0
            InsufficientLiquidityError: Пул пуст
        """
        direction = self._parse_direction(direction)
        validate_amount("amount_in", amount_in)
        if self.state.reserves.is_empty():
            raise InsufficientLiquidityError("pool has no liquidity", amount_in=amount_in)
        return self._swap.quote(
            self.state.reserves, self.state.swap_fee_bps, amount_in, direction
        ).amount_out

    # =========================================================================
    # FEES
    # =========================================================================

    @_entry_point
    def collect_fees(self, caller: str) -> FeePayout:
        """
        Выплата начисленных LP-комиссий вызывающему.

        Raises:
            PoolHaltedError: Пул в HALTED
            FeeBelowThresholdError: Ни один актив не достиг min_fee_collection
        """
        self._require_not_halted()
        if caller == CLAIM_SINK:
            raise InputValidationError("sink accruals are not collectable", caller=caller)

        payout = self._fees.collect(self.state.fees, caller)
        if payout.amount_a:
            self._push(AssetSide.A, caller, payout.amount_a)
        if payout.amount_b:
            self._push(AssetSide.B, caller, payout.amount_b)

        self._emit(
            EventType.FEES_COLLECTED,
            caller,
            recipient=caller,
            amount_a=payout.amount_a,
            amount_b=payout.amount_b,
        )
        logger.info(
            "fees collected: pool=%s holder=%s a=%d b=%d",
            self.pool_id, caller, payout.amount_a, payout.amount_b,
        )
        return payout

    @_entry_point
    def collect_protocol_fees(self, caller: str, recipient: str) -> FeePayout:
        """
        Выплата всей доли протокола получателю (FEE_COLLECTOR).

        Raises:
            MissingRoleError: Нет роли FEE_COLLECTOR
            PoolHaltedError: Пул в HALTED
        """
        self.state.roles.require(Role.FEE_COLLECTOR, caller)
        self._require_not_halted()
        self._require_account("recipient", recipient)

        payout = self._fees.collect_protocol(self.state.fees)
        if payout.amount_a:
            self._push(AssetSide.A, recipient, payout.amount_a)
        if payout.amount_b:
            self._push(AssetSide.B, recipient, payout.amount_b)

        self._emit(
            EventType.PROTOCOL_FEES_COLLECTED,
            caller,
            recipient=recipient,
            amount_a=payout.amount_a,
            amount_b=payout.amount_b,
        )
        logger.info(
            "protocol fees collected: pool=%s recipient=%s a=%d b=%d",
            self.pool_id, recipient, payout.amount_a, payout.amount_b,
        )
        return payout

    def owed_fees(self, holder: str) -> FeePayout:
        """Начисления держателя в целых единицах (усечение)."""
        return self._fees.owed(self.state.fees, holder)

    def protocol_fees(self) -> FeePayout:
        return FeePayout(
            amount_a=from_fee_units(self.state.fees.protocol.units_a),
            amount_b=from_fee_units(self.state.fees.protocol.units_b),
        )

    # =========================================================================
    # RECONCILIATION
    # =========================================================================

    def reconcile(self) -> ReconciliationResult:
        """Полный результат Reconciliation Guard (только чтение)."""
        return self._guard.evaluate(
            self.state.reserves,
            self.state.fees,
            self.get_base_token_balance(),
            self.get_quote_token_balance(),
            asset_a=self.asset_a.symbol,
            asset_b=self.asset_b.symbol,
        )

    def verify_reserves(self) -> bool:
        """True, если tracked резервы сходятся с реальными балансами в пределах допуска."""
        return self.reconcile().passed

    # =========================================================================
    # EMERGENCY UNWIND
    # =========================================================================

    @_entry_point
    def initiate_emergency_unwind(self, caller: str) -> EmergencySnapshot:
        """
        Необратимый halt со снапшотом реальных балансов.

        Raises:
            MissingRoleError: Нет роли EMERGENCY
            PoolHaltedError: Уже HALTED
            InsufficientLiquidityError: Supply claim-токенов нулевой
        """
        self.state.roles.require(Role.EMERGENCY, caller)

        snapshot = self._emergency.initiate(
            self.state.emergency_state,
            self.state.claims.total_supply,
            self.get_base_token_balance(),
            self.get_quote_token_balance(),
            self.host.timestamp,
        )
        self.state.snapshot = snapshot
        self.state.emergency_state = EmergencyState.HALTED

        self._emit(
            EventType.EMERGENCY_INITIATED,
            caller,
            claim_supply=snapshot.claim_supply,
            balance_a=snapshot.balance_a,
            balance_b=snapshot.balance_b,
        )
        return snapshot

    @_entry_point
    def redeem_emergency(self, caller: str) -> FeePayout:
        """
        Сжигание всего баланса claim-токенов вызывающего и выплата по снапшоту.

        Raises:
            PoolNotHaltedError: Пул не в HALTED
            ZeroAmountError: Баланс вызывающего нулевой
            InputValidationError: Вызов от имени sink
        """
        state = self.state
        if state.emergency_state != EmergencyState.HALTED or state.snapshot is None:
            raise PoolNotHaltedError("emergency redemption requires a halted pool")
        if caller == CLAIM_SINK:
            raise InputValidationError("sink claim tokens are not redeemable", caller=caller)

        claim_amount = state.claims.balance_of(caller)
        amounts = self._emergency.redemption(state.snapshot, claim_amount)

        state.claims.burn(caller, claim_amount)
        if amounts.amount_a:
            self._push(AssetSide.A, caller, amounts.amount_a)
        if amounts.amount_b:
            self._push(AssetSide.B, caller, amounts.amount_b)

        self._emit(
            EventType.EMERGENCY_REDEEMED,
            caller,
            holder=caller,
            claim_burned=claim_amount,
            amount_a=amounts.amount_a,
            amount_b=amounts.amount_b,
        )
        logger.info(
            "emergency redemption: pool=%s holder=%s burned=%d a=%d b=%d",
            self.pool_id, caller, claim_amount, amounts.amount_a, amounts.amount_b,
        )
        return FeePayout(amount_a=amounts.amount_a, amount_b=amounts.amount_b)

    # =========================================================================
    # GOVERNANCE
    # =========================================================================

    @_entry_point
    def pause(self, caller: str) -> None:
        """Остановка add_liquidity и swap (PAUSER)."""
        self.state.roles.require(Role.PAUSER, caller)
        self.state.paused = True
        self._emit(EventType.PAUSED, caller)
        logger.info("pool %s paused by %s", self.pool_id, caller)

    @_entry_point
    def unpause(self, caller: str) -> None:
        self.state.roles.require(Role.PAUSER, caller)
        self.state.paused = False
        self._emit(EventType.UNPAUSED, caller)
        logger.info("pool %s unpaused by %s", self.pool_id, caller)

    @_entry_point
    def propose_fee(self, caller: str, new_fee_bps: int) -> TimelockProposal:
        """
        Предложение новой swap fee; исполнимо не раньше eta.

        Raises:
            MissingRoleError: Нет роли FEE_SETTER
            InputValidationError: new_fee_bps вне [1, 1000]
        """
        self.state.roles.require(Role.FEE_SETTER, caller)
        proposal = self.state.timelock.propose(caller, new_fee_bps, self.host.timestamp)
        self._emit(
            EventType.FEE_PROPOSED,
            caller,
            proposal_id=proposal.proposal_id,
            new_fee_bps=proposal.new_fee_bps,
            eta=proposal.eta,
        )
        logger.info(
            "fee proposed: pool=%s id=%d new_fee_bps=%d eta=%d",
            self.pool_id, proposal.proposal_id, proposal.new_fee_bps, proposal.eta,
        )
        return proposal

    @_entry_point
    def execute_fee(self, caller: str, proposal_id: int) -> TimelockProposal:
        """
        Исполнение созревшего предложения (только timelock executor).

        Raises:
            NotTimelockExecutorError: caller не executor
            UnknownProposalError: Нет такого предложения
            TimelockNotReadyError: timestamp < eta
        """
        proposal = self.state.timelock.execute(caller, proposal_id, self.host.timestamp)
        old_fee_bps = self.state.swap_fee_bps
        self.state.swap_fee_bps = proposal.new_fee_bps

        self._emit(
            EventType.FEE_UPDATED,
            caller,
            proposal_id=proposal.proposal_id,
            old_fee_bps=old_fee_bps,
            new_fee_bps=proposal.new_fee_bps,
        )
        logger.info(
            "fee updated: pool=%s %d -> %d bps", self.pool_id, old_fee_bps, proposal.new_fee_bps
        )
        return proposal

    @_entry_point
    def cancel_fee(self, caller: str, proposal_id: int) -> TimelockProposal:
        self.state.roles.require(Role.FEE_SETTER, caller)
        proposal = self.state.timelock.cancel(proposal_id)
        self._emit(EventType.FEE_PROPOSAL_CANCELLED, caller, proposal_id=proposal_id)
        logger.info("fee proposal cancelled: pool=%s id=%d", self.pool_id, proposal_id)
        return proposal

    @_entry_point
    def recover_foreign_asset(
        self, caller: str, ledger: AssetLedger, to: str, amount: int
    ) -> None:
        """
        Возврат постороннего актива, ошибочно отправленного на адрес пула.

        Raises:
            MissingRoleError: Нет роли RECOVERY
            InvalidAssetError: ledger — один из торгуемых активов
            TransferFailedError: Леджер отказал
        """
        self.state.roles.require(Role.RECOVERY, caller)
        if ledger is self.asset_a or ledger is self.asset_b or ledger.symbol in (
            self.asset_a.symbol,
            self.asset_b.symbol,
        ):
            raise InvalidAssetError("pool assets cannot be recovered", asset=ledger.symbol)
        self._require_account("to", to)
        validate_amount("amount", amount)

        self._transfer(ledger, "transfer", self.pool_id, to, amount)

        self._emit(
            EventType.FOREIGN_ASSET_RECOVERED, caller, asset=ledger.symbol, to=to, amount=amount
        )
        logger.info(
            "foreign asset recovered: pool=%s asset=%s to=%s amount=%d",
            self.pool_id, ledger.symbol, to, amount,
        )

    @_entry_point
    def grant_role(self, caller: str, role: Role, account: str) -> bool:
        self.state.roles.require(Role.ADMIN, caller)
        role = Role(role)
        changed = self.state.roles.grant(role, account)
        if changed:
            self._emit(EventType.ROLE_GRANTED, caller, role=role.value, account=account)
            logger.info("role granted: pool=%s %s -> %s", self.pool_id, role.value, account)
        return changed

    @_entry_point
    def revoke_role(self, caller: str, role: Role, account: str) -> bool:
        self.state.roles.require(Role.ADMIN, caller)
        role = Role(role)
        changed = self.state.roles.revoke(role, account)
        if changed:
            self._emit(EventType.ROLE_REVOKED, caller, role=role.value, account=account)
            logger.info("role revoked: pool=%s %s from %s", self.pool_id, role.value, account)
        return changed

    @_entry_point
    def transfer_admin(self, caller: str, new_admin: str) -> None:
        """
        Передача роли ADMIN.

        Raises:
            MissingRoleError: Нет роли ADMIN
            InputValidationError: new_admin пустой или совпадает с caller
        """
        self.state.roles.require(Role.ADMIN, caller)
        self._require_account("new_admin", new_admin)
        if new_admin == caller:
            raise InputValidationError("new admin must differ from caller", new_admin=new_admin)

        self.state.roles.grant(Role.ADMIN, new_admin)
        self.state.roles.revoke(Role.ADMIN, caller)
        self._emit(
            EventType.ADMIN_TRANSFERRED, caller, previous_admin=caller, new_admin=new_admin
        )
        logger.info("admin transferred: pool=%s %s -> %s", self.pool_id, caller, new_admin)

    def has_role(self, role: Role, account: str) -> bool:
        return self.state.roles.has_role(role, account)

    def pending_proposals(self) -> Dict[int, TimelockProposal]:
        return self.state.timelock.pending()

    # =========================================================================
    # CLAIM TOKEN
    # =========================================================================

    @property
    def claim_name(self) -> str:
        return self.state.claims.name

    @property
    def claim_symbol(self) -> str:
        return self.state.claims.symbol

    @property
    def claim_decimals(self) -> int:
        return self.state.claims.decimals

    def total_supply(self) -> int:
        return self.state.claims.total_supply

    def balance_of(self, account: str) -> int:
        """Баланс claim-токенов."""
        return self.state.claims.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        return self.state.claims.allowance(owner, spender)

    @_entry_point
    def transfer(self, caller: str, to: str, amount: int) -> bool:
        """Перевод claim-токенов. Начисленные комиссии остаются у отправителя."""
        self.state.claims.transfer(caller, to, amount)
        self._emit(EventType.CLAIM_TRANSFER, caller, sender=caller, recipient=to, amount=amount)
        return True

    @_entry_point
    def approve(self, caller: str, spender: str, amount: int) -> bool:
        self._require_account("spender", spender)
        self.state.claims.approve(caller, spender, amount)
        self._emit(EventType.CLAIM_APPROVAL, caller, owner=caller, spender=spender, amount=amount)
        return True

    @_entry_point
    def transfer_from(self, caller: str, owner: str, to: str, amount: int) -> bool:
        self.state.claims.transfer_from(caller, owner, to, amount)
        self._emit(EventType.CLAIM_TRANSFER, caller, sender=owner, recipient=to, amount=amount)
        return True

    # =========================================================================
    # VIEWS
    # =========================================================================

    def get_reserves(self) -> Reserves:
        return Reserves(
            reserve_a=self.state.reserves.tracked_a,
            reserve_b=self.state.reserves.tracked_b,
            timestamp=self.host.timestamp,
        )

    def get_base_token_balance(self) -> int:
        """Реальный баланс пула в активе A."""
        return self.asset_a.balance_of(self.pool_id)

    def get_quote_token_balance(self) -> int:
        """Реальный баланс пула в активе B."""
        return self.asset_b.balance_of(self.pool_id)

    def price_a_in_b(self) -> Decimal:
        """Спот-цена одной единицы A в единицах B (только для отображения)."""
        return spot_price(self.state.reserves.tracked_a, self.state.reserves.tracked_b)

    def price_b_in_a(self) -> Decimal:
        return spot_price(self.state.reserves.tracked_b, self.state.reserves.tracked_a)

    @property
    def swap_fee_bps(self) -> int:
        return self.state.swap_fee_bps

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def emergency_state(self) -> EmergencyState:
        return self.state.emergency_state

    @property
    def emergency_snapshot(self) -> Optional[EmergencySnapshot]:
        return self.state.snapshot

    @property
    def events(self) -> EventLog:
        return self._events

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _ledger(self, side: AssetSide) -> AssetLedger:
        return self.asset_a if side is AssetSide.A else self.asset_b

    def _require_not_halted(self) -> None:
        if self.state.emergency_state == EmergencyState.HALTED:
            raise PoolHaltedError("pool is halted", pool_id=self.pool_id)

    def _require_trading(self) -> None:
        self._require_not_halted()
        if self.state.paused:
            raise PoolPausedError("pool is paused", pool_id=self.pool_id)

    def _require_account(self, name: str, account: str) -> None:
        if not account:
            raise InputValidationError(f"{name} must be non-empty", **{name: account})

    def _parse_direction(self, direction: SwapDirection) -> SwapDirection:
        try:
            return SwapDirection(direction)
        except ValueError as e:
            raise InputValidationError("unknown swap direction", direction=direction) from e

    def _check_deadline(self, deadline: int) -> None:
        now = self.host.timestamp
        if now > deadline:
            raise StaleDeadlineError("deadline exceeded", deadline=deadline, timestamp=now)

    def _require_reconciled(self) -> None:
        self._guard.require(self.reconcile())

    def _pull(self, side: AssetSide, owner: str, amount: int) -> None:
        self._transfer(self._ledger(side), "transfer_from", self.pool_id, owner, self.pool_id, amount)

    def _push(self, side: AssetSide, to: str, amount: int) -> None:
        self._transfer(self._ledger(side), "transfer", self.pool_id, to, amount)

    def _transfer(self, ledger: AssetLedger, operation: str, *args: Any) -> None:
        """
        Вызов внешнего леджера; False или исключение — отказ всего вызова.

        Raises:
            TransferFailedError: Леджер вернул False или бросил исключение
            ReentrancyError: Леджер попытался повторно войти в пул
        """
        try:
            ok = getattr(ledger, operation)(*args)
        except ReentrancyError:
            raise
        except Exception as e:
            raise TransferFailedError(
                "asset ledger raised", asset=ledger.symbol, operation=operation, args=args
            ) from e
        if not ok:
            raise TransferFailedError(
                "asset ledger rejected transfer", asset=ledger.symbol, operation=operation, args=args
            )

    def _emit(self, event_type: EventType, actor: str, **data: Any) -> PoolEvent:
        """Событие валидируется по контракту до записи в лог."""
        log = self._events
        event = PoolEvent(
            event_type=event_type,
            pool_id=self.pool_id,
            sequence=log.next_sequence,
            timestamp=self.host.timestamp,
            actor=actor,
            data=data,
        )
        validate_pool_event(event.to_dict())
        log.add(event)
        return event
