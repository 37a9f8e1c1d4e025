"""
Pool Events — уведомления для внешнего индексатора

Каждое событие несёт точные целочисленные суммы, участника и timestamp.
Пул никогда не читает события обратно: они существуют только для
наблюдаемости вне пула. События отменённого вызова откатываются вместе
с состоянием пула.
"""

from collections import deque
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Типы уведомлений пула (contracts/schema/pool_event.json)."""

    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    TRADE_EXECUTED = "TradeExecuted"
    FEE_PROPOSED = "FeeProposed"
    FEE_PROPOSAL_CANCELLED = "FeeProposalCancelled"
    FEE_UPDATED = "FeeUpdated"
    FEES_COLLECTED = "FeesCollected"
    PROTOCOL_FEES_COLLECTED = "ProtocolFeesCollected"
    PAUSED = "Paused"
    UNPAUSED = "Unpaused"
    FOREIGN_ASSET_RECOVERED = "ForeignAssetRecovered"
    ROLE_GRANTED = "RoleGranted"
    ROLE_REVOKED = "RoleRevoked"
    ADMIN_TRANSFERRED = "AdminTransferred"
    EMERGENCY_INITIATED = "EmergencyInitiated"
    EMERGENCY_REDEEMED = "EmergencyRedeemed"
    CLAIM_TRANSFER = "ClaimTransfer"
    CLAIM_APPROVAL = "ClaimApproval"


class PoolEvent(BaseModel):
    """Одно уведомление пула."""

    event_type: EventType = Field(..., description="Тип события")
    pool_id: str = Field(..., min_length=1, description="Идентификатор пула")
    sequence: int = Field(..., ge=0, description="Порядковый номер в логе пула")
    timestamp: int = Field(..., ge=0, description="Timestamp леджера")
    actor: str = Field(..., min_length=1, description="Инициатор вызова")
    data: Dict[str, Any] = Field(default_factory=dict, description="Payload события")

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class EventLog:
    def __init__(self, maxlen: Optional[int] = None) -> None:
        self.events: deque = deque(maxlen=maxlen)
        self.next_sequence = 0

    def add(self, e: PoolEvent) -> None:
        self.events.append(e)
        self.next_sequence += 1

    def truncate(self, sequence: int) -> int:
        """
        Отброс событий с номером >= sequence (откат вызова).

        Args:
            sequence: next_sequence, сохранённый при входе в вызов

        Returns:
            Количество отброшенных событий
        """
        if sequence < 0 or sequence > self.next_sequence:
            raise ValueError(f"sequence {sequence} outside [0, {self.next_sequence}]")
        dropped = 0
        while self.events and self.events[-1].sequence >= sequence:
            self.events.pop()
            dropped += 1
        self.next_sequence = sequence
        return dropped

    def tail(self, n: int = 200) -> List[PoolEvent]:
        if n <= 0:
            return []
        if n >= len(self.events):
            return list(self.events)
        return list(self.events)[-n:]

    def of_type(self, event_type: EventType) -> List[PoolEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def __len__(self) -> int:
        return len(self.events)
