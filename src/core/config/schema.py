"""
PoolConfig — параметры пула

Все пороги, которые в разных ревизиях пула менялись (полоса допуска
соотношения, доля протокола в комиссии, максимальный размер сделки,
допуск расхождения резервов), задаются конфигурацией, а не константами.

Immutable Pydantic модель (frozen=True).
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.units import FEE_DENOMINATOR, MAX_SWAP_FEE_BPS, MAX_UINT112, MIN_SWAP_FEE_BPS


class PoolConfig(BaseModel):
    """Конфигурация одного пула."""

    # Liquidity Engine
    minimum_liquidity: int = Field(
        1_000, gt=0, description="Неизымаемый минимум claim-токенов, минтится в sink"
    )
    max_deposit_amount: int = Field(
        MAX_UINT112, gt=0, description="Потолок суммы одного актива за вызов"
    )
    ratio_tolerance_bps: int = Field(
        100, ge=0, le=FEE_DENOMINATOR, description="Полоса допуска amount_b (bps), 100 = ±1.0%"
    )

    # Swap Engine
    initial_fee_bps: int = Field(30, description="Начальная swap fee (bps), 30 = 0.3%")
    max_swap_fraction_bps: int = Field(
        300, gt=0, le=FEE_DENOMINATOR, description="Максимальный вход сделки как доля резерва (bps)"
    )

    # Fee Accountant
    protocol_fee_share_bps: int = Field(
        1_000, ge=0, le=FEE_DENOMINATOR, description="Доля протокола в каждой комиссии (bps)"
    )
    min_fee_collection: int = Field(
        1, ge=1, description="Минимальная целая сумма хотя бы по одному активу для collect_fees"
    )

    # Reconciliation Guard
    reserve_drift_tolerance_bps: int = Field(
        100, ge=0, le=FEE_DENOMINATOR, description="Допуск |true - expected| от expected (bps)"
    )

    # Governance Gate
    timelock_delay_seconds: int = Field(
        2 * 24 * 60 * 60, gt=0, description="Задержка между propose_fee и execute_fee"
    )

    # Claim token metadata
    claim_decimals: int = Field(18, ge=0, le=36, description="Decimals claim-токена")

    model_config = {"frozen": True}

    @field_validator("initial_fee_bps")
    @classmethod
    def validate_fee_range(cls, v: int) -> int:
        """Swap fee в диапазоне [1, 1000] bps."""
        if not MIN_SWAP_FEE_BPS <= v <= MAX_SWAP_FEE_BPS:
            raise ValueError(
                f"initial_fee_bps {v} outside [{MIN_SWAP_FEE_BPS}, {MAX_SWAP_FEE_BPS}]"
            )
        return v

    @model_validator(mode="after")
    def validate_deposit_ceiling(self):
        """Потолок депозита должен допускать первый депозит выше минимума."""
        if self.max_deposit_amount <= self.minimum_liquidity:
            raise ValueError("max_deposit_amount must exceed minimum_liquidity")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoolConfig":
        """Создание из словаря (секция ``pool`` или плоский словарь)."""
        if data is None:
            return cls()
        return cls(**data.get("pool", data))
