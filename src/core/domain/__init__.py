"""
Domain models and value objects.

Contains integer units, pool enums and snapshots, and pool events.
"""

from src.core.domain.events import EventLog, EventType, PoolEvent
from src.core.domain.pool_state import (
    AssetSide,
    EmergencySnapshot,
    EmergencyState,
    Reserves,
    SwapDirection,
    TimelockProposal,
)
from src.core.domain.units import (
    FEE_DENOMINATOR,
    FEE_SCALE,
    MAX_SWAP_FEE_BPS,
    MAX_UINT112,
    MIN_SWAP_FEE_BPS,
    amount_after_fee,
    apply_bps,
    from_fee_units,
    to_fee_units,
    validate_amount,
    validate_fee_bps,
    validate_non_negative_amount,
)

__all__ = [
    # Units module
    "FEE_DENOMINATOR",
    "FEE_SCALE",
    "MIN_SWAP_FEE_BPS",
    "MAX_SWAP_FEE_BPS",
    "MAX_UINT112",
    "apply_bps",
    "amount_after_fee",
    "to_fee_units",
    "from_fee_units",
    "validate_amount",
    "validate_non_negative_amount",
    "validate_fee_bps",
    # Pool state
    "AssetSide",
    "SwapDirection",
    "EmergencyState",
    "Reserves",
    "EmergencySnapshot",
    "TimelockProposal",
    # Events
    "EventType",
    "PoolEvent",
    "EventLog",
]
