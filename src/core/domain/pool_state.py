"""
Pool State Models — перечисления и снапшоты пула

Immutable Pydantic модели для значений, которые выходят наружу
(get_reserves, emergency snapshot, timelock proposal), и перечисления
сторон/направлений сделки.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class AssetSide(str, Enum):
    """Сторона пула: A (base) или B (quote)."""

    A = "A"
    B = "B"

    @property
    def other(self) -> "AssetSide":
        return AssetSide.B if self is AssetSide.A else AssetSide.A


class SwapDirection(str, Enum):
    """Направление сделки."""

    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"

    @property
    def side_in(self) -> AssetSide:
        return AssetSide.A if self is SwapDirection.A_TO_B else AssetSide.B

    @property
    def side_out(self) -> AssetSide:
        return self.side_in.other


class EmergencyState(str, Enum):
    """
    Состояние emergency unwind.

    ACTIVE → HALTED, HALTED терминальное (обратного перехода нет).
    """

    ACTIVE = "ACTIVE"
    HALTED = "HALTED"


# =============================================================================
# SNAPSHOT MODELS
# =============================================================================


class Reserves(BaseModel):
    """Tracked резервы пула на момент чтения."""

    reserve_a: int = Field(..., ge=0, description="Tracked резерв актива A")
    reserve_b: int = Field(..., ge=0, description="Tracked резерв актива B")
    timestamp: int = Field(..., ge=0, description="Timestamp леджера на момент чтения")

    model_config = {"frozen": True}


class EmergencySnapshot(BaseModel):
    """
    Снапшот emergency unwind.

    Фиксируется один раз из РЕАЛЬНЫХ балансов (не tracked), после чего
    неизменен и используется каждым emergency-выкупом.
    """

    claim_supply: int = Field(..., gt=0, description="Supply claim-токенов на момент halt")
    balance_a: int = Field(..., ge=0, description="Реальный баланс актива A")
    balance_b: int = Field(..., ge=0, description="Реальный баланс актива B")
    taken_at: int = Field(..., ge=0, description="Timestamp леджера")

    model_config = {"frozen": True}


class TimelockProposal(BaseModel):
    """Ожидающее изменение swap fee."""

    proposal_id: int = Field(..., ge=1, description="Монотонный идентификатор")
    new_fee_bps: int = Field(..., ge=1, le=1_000, description="Новая swap fee (bps)")
    proposer: str = Field(..., min_length=1)
    proposed_at: int = Field(..., ge=0)
    eta: int = Field(..., ge=0, description="Timestamp, начиная с которого исполнимо")

    model_config = {"frozen": True}

    def is_mature(self, now: int) -> bool:
        return now >= self.eta
