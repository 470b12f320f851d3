"""Tests for RouterConfig."""

import pytest

from feerouter.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from feerouter.errors import InvalidConfiguration


class TestRouterConfig:
    def test_defaults(self):
        assert DEFAULT_ROUTER_CONFIG.default_slippage_bps == 50
        assert DEFAULT_ROUTER_CONFIG.max_slippage_bps == 10_000
        assert DEFAULT_ROUTER_CONFIG.fee_tiers == (500, 3000, 10000)
        assert DEFAULT_ROUTER_CONFIG.enforce_tolerance_bounds

    def test_fee_tiers_sorted(self):
        assert RouterConfig(fee_tiers=(10000, 100, 3000)).fee_tiers == (100, 3000, 10000)

    @pytest.mark.parametrize("fee_tiers", [(), (0, 500), (500, 500), (-1,)])
    def test_invalid_fee_tiers(self, fee_tiers):
        with pytest.raises(InvalidConfiguration):
            RouterConfig(fee_tiers=fee_tiers)

    def test_default_above_maximum(self):
        with pytest.raises(InvalidConfiguration):
            RouterConfig(default_slippage_bps=600, max_slippage_bps=500)

    def test_maximum_above_full_range(self):
        with pytest.raises(InvalidConfiguration):
            RouterConfig(max_slippage_bps=10_001)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_ROUTER_CONFIG.default_slippage_bps = 1  # type: ignore[misc]


class TestFromEnv:
    def test_no_variables_gives_defaults(self, monkeypatch):
        for name in (
            "FEEROUTER_DEFAULT_SLIPPAGE_BPS",
            "FEEROUTER_MAX_SLIPPAGE_BPS",
            "FEEROUTER_FEE_TIERS",
        ):
            monkeypatch.delenv(name, raising=False)

        assert RouterConfig.from_env() == DEFAULT_ROUTER_CONFIG

    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("FEEROUTER_DEFAULT_SLIPPAGE_BPS", "25")
        monkeypatch.setenv("FEEROUTER_MAX_SLIPPAGE_BPS", "1000")
        monkeypatch.setenv("FEEROUTER_FEE_TIERS", "3000,100,500")

        config = RouterConfig.from_env()

        assert config.default_slippage_bps == 25
        assert config.max_slippage_bps == 1000
        assert config.fee_tiers == (100, 500, 3000)

    def test_malformed_value(self, monkeypatch):
        monkeypatch.setenv("FEEROUTER_DEFAULT_SLIPPAGE_BPS", "half")

        with pytest.raises(InvalidConfiguration):
            RouterConfig.from_env()
