"""
Tests for PoolConfig and YAML loader.
"""

import pytest
from pydantic import ValidationError

from src.core.config import PoolConfig, config_from_dict, load_config
from src.core.domain.units import MAX_UINT112


class TestPoolConfigDefaults:
    def test_defaults(self):
        config = PoolConfig()
        assert config.minimum_liquidity == 1_000
        assert config.max_deposit_amount == MAX_UINT112
        assert config.ratio_tolerance_bps == 100
        assert config.initial_fee_bps == 30
        assert config.max_swap_fraction_bps == 300
        assert config.protocol_fee_share_bps == 1_000
        assert config.min_fee_collection == 1
        assert config.reserve_drift_tolerance_bps == 100
        assert config.timelock_delay_seconds == 172_800
        assert config.claim_decimals == 18

    def test_frozen(self):
        config = PoolConfig()
        with pytest.raises(ValidationError):
            config.initial_fee_bps = 50


class TestPoolConfigValidation:
    @pytest.mark.parametrize("fee", [0, 1_001])
    def test_fee_out_of_range(self, fee):
        with pytest.raises(ValidationError):
            PoolConfig(initial_fee_bps=fee)

    def test_fraction_above_denominator(self):
        with pytest.raises(ValidationError):
            PoolConfig(max_swap_fraction_bps=10_001)

    def test_deposit_ceiling_must_exceed_minimum(self):
        with pytest.raises(ValidationError):
            PoolConfig(minimum_liquidity=1_000, max_deposit_amount=1_000)


class TestLoader:
    def test_defaults_yaml_matches_model_defaults(self):
        """defaults.yaml и значения по умолчанию модели согласованы."""
        assert load_config() == PoolConfig()

    def test_custom_yaml(self, tmp_path):
        path = tmp_path / "pool.yaml"
        path.write_text(
            "pool:\n  initial_fee_bps: 5\n  max_swap_fraction_bps: 1000\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.initial_fee_bps == 5
        assert config.max_swap_fraction_bps == 1_000
        assert config.minimum_liquidity == 1_000

    def test_from_dict_section_or_flat(self):
        assert config_from_dict({"pool": {"min_fee_collection": 10}}).min_fee_collection == 10
        assert config_from_dict({"min_fee_collection": 10}).min_fee_collection == 10

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == PoolConfig()
