"""Router configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from feerouter.constants import DEFAULT_SLIPPAGE_BPS, MAX_SLIPPAGE_BPS
from feerouter.errors import InvalidConfiguration
from feerouter.protocol.constants import FEE_TIERS


@dataclass(frozen=True)
class RouterConfig:
    """Centralized configuration for routing and slippage enforcement.

    Attributes:
        default_slippage_bps: Tolerance used for callers without an explicit
            setting (default: 50 = 0.5%)
        max_slippage_bps: Largest tolerance set_tolerance accepts (default: 10,000)
        fee_tiers: Fee tiers probed by the quote comparator, in Uniswap units
            (hundredths of a basis point). Always scanned in ascending order.
        enforce_tolerance_bounds: If True, set_tolerance rejects values outside
            [0, max_slippage_bps]. If False, any non-negative value is stored.
    """

    default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    max_slippage_bps: int = MAX_SLIPPAGE_BPS
    fee_tiers: tuple[int, ...] = FEE_TIERS
    enforce_tolerance_bounds: bool = True

    def __post_init__(self) -> None:
        if not self.fee_tiers:
            raise InvalidConfiguration("At least one fee tier is required")
        if any(fee <= 0 for fee in self.fee_tiers):
            raise InvalidConfiguration(f"Fee tiers must be positive: {self.fee_tiers}")
        if len(set(self.fee_tiers)) != len(self.fee_tiers):
            raise InvalidConfiguration(f"Duplicate fee tiers: {self.fee_tiers}")
        if not 0 <= self.max_slippage_bps <= MAX_SLIPPAGE_BPS:
            raise InvalidConfiguration(
                f"max_slippage_bps must be within [0, {MAX_SLIPPAGE_BPS}]: {self.max_slippage_bps}"
            )
        if not 0 <= self.default_slippage_bps <= self.max_slippage_bps:
            raise InvalidConfiguration(
                f"default_slippage_bps {self.default_slippage_bps} "
                f"outside [0, {self.max_slippage_bps}]"
            )
        # Normalize to ascending order so tier scans are deterministic
        object.__setattr__(self, "fee_tiers", tuple(sorted(self.fee_tiers)))

    @classmethod
    def from_env(cls) -> RouterConfig:
        """Build a config from environment variables.

        - FEEROUTER_DEFAULT_SLIPPAGE_BPS: default tolerance in bps
        - FEEROUTER_MAX_SLIPPAGE_BPS: upper bound for tolerance updates
        - FEEROUTER_FEE_TIERS: comma-separated fee tiers (e.g. "500,3000,10000")
        """
        kwargs: dict[str, object] = {}
        try:
            if "FEEROUTER_DEFAULT_SLIPPAGE_BPS" in os.environ:
                kwargs["default_slippage_bps"] = int(os.environ["FEEROUTER_DEFAULT_SLIPPAGE_BPS"])
            if "FEEROUTER_MAX_SLIPPAGE_BPS" in os.environ:
                kwargs["max_slippage_bps"] = int(os.environ["FEEROUTER_MAX_SLIPPAGE_BPS"])
            if os.environ.get("FEEROUTER_FEE_TIERS"):
                kwargs["fee_tiers"] = tuple(
                    int(part) for part in os.environ["FEEROUTER_FEE_TIERS"].split(",") if part
                )
        except ValueError as err:
            raise InvalidConfiguration(f"Invalid router environment setting: {err}") from err
        return cls(**kwargs)  # type: ignore[arg-type]


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()
