"""
Core math modules пула

Целочисленные формулы constant-product AMM: эмиссия и выкуп claim-токенов,
цена сделки, лимиты. Все деления — с округлением вниз.
"""

# AMM Math
from src.core.math.amm_math import (
    # Results
    RedemptionAmounts,
    SwapQuote,
    # Liquidity
    check_ratio_band,
    expected_counter_amount,
    initial_issuance,
    meets_liquidity_floor,
    pro_rata,
    proportional_issuance,
    redemption_amounts,
    # Swap
    get_amount_out,
    max_swap_input,
    # Views
    constant_product,
    spot_price,
)

__all__ = [
    "SwapQuote",
    "RedemptionAmounts",
    "initial_issuance",
    "proportional_issuance",
    "expected_counter_amount",
    "check_ratio_band",
    "pro_rata",
    "redemption_amounts",
    "meets_liquidity_floor",
    "max_swap_input",
    "get_amount_out",
    "spot_price",
    "constant_product",
]
