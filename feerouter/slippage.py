"""Per-caller slippage tolerance and threshold enforcement.

Thresholds combine the caller's own bound with the comparator's quote:

- exact input: floor = min_out * 10000 / (10000 - tolerance);
  threshold = max(floor, quoted_out). The quote can only raise the floor.
- exact output: ceiling = max_in * 10000 / (10000 + tolerance);
  threshold = min(ceiling, quoted_in). The quote can only lower the ceiling.

After the swap, the realized amount is compared to the threshold and the
relative deviation (in bps of the threshold) must not exceed the tolerance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from feerouter.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from feerouter.constants import BPS_DENOMINATOR
from feerouter.errors import InvalidSlippageTolerance, SlippageExceeded
from feerouter.events import EventLog, ToleranceUpdated
from feerouter.models.types import UINT256_MAX, normalize_address
from feerouter.safe_int import S

if TYPE_CHECKING:
    from feerouter.execution.guard import OperationGuard

logger = structlog.get_logger()


def exact_input_threshold(amount_out_minimum: int, quoted_out: int, tolerance_bps: int) -> int:
    """Minimum acceptable output for an exact-input swap."""
    if tolerance_bps >= BPS_DENOMINATOR:
        # Tolerance of 100% leaves no tolerance-derived floor
        floor = S(0)
    else:
        floor = S(amount_out_minimum).mul_div(BPS_DENOMINATOR, BPS_DENOMINATOR - tolerance_bps)
    return floor.max(quoted_out).to_uint256()


def exact_output_threshold(amount_in_maximum: int, quoted_in: int, tolerance_bps: int) -> int:
    """Input amount beyond which an exact-output swap counts as slipped."""
    ceiling = S(amount_in_maximum).mul_div(BPS_DENOMINATOR, BPS_DENOMINATOR + tolerance_bps)
    return ceiling.min(quoted_in).to_uint256()


def slippage_bps(deviation: int, base: int) -> int:
    """Deviation expressed in basis points of base.

    A positive deviation from a zero base is unbounded and reported as UINT256_MAX.
    """
    if deviation == 0:
        return 0
    result = (S(deviation) * BPS_DENOMINATOR).checked_div(base)
    if result is None:
        return UINT256_MAX
    return result.value


def check_exact_input(actual_out: int, threshold: int, tolerance_bps: int) -> int:
    """Enforce the tolerance on a realized exact-input output.

    Returns:
        Realized slippage in bps (0 when the output met the threshold)

    Raises:
        SlippageExceeded: If the shortfall exceeds the tolerance
    """
    if actual_out >= threshold:
        return 0
    actual_bps = slippage_bps(threshold - actual_out, threshold)
    if actual_bps > tolerance_bps:
        raise SlippageExceeded(actual_bps, tolerance_bps)
    return actual_bps


def check_exact_output(actual_in: int, threshold: int, tolerance_bps: int) -> int:
    """Enforce the tolerance on a realized exact-output input.

    Returns:
        Realized slippage in bps (0 when the input stayed within the threshold)

    Raises:
        SlippageExceeded: If the overspend exceeds the tolerance
    """
    if actual_in <= threshold:
        return 0
    actual_bps = slippage_bps(actual_in - threshold, threshold)
    if actual_bps > tolerance_bps:
        raise SlippageExceeded(actual_bps, tolerance_bps)
    return actual_bps


def check_quote_within_ceiling(quoted_in: int, amount_in_maximum: int, tolerance_bps: int) -> None:
    """Reject an exact-output swap whose quote already exceeds the caller's ceiling.

    Raises:
        SlippageExceeded: If quoted_in > amount_in_maximum
    """
    if quoted_in > amount_in_maximum:
        actual_bps = slippage_bps(quoted_in - amount_in_maximum, amount_in_maximum)
        raise SlippageExceeded(actual_bps, tolerance_bps)


class SlippagePolicy:
    """Per-caller tolerance store with a system-wide default.

    An explicit setting is tracked by presence in the store, so a caller who
    sets 0 bps gets 0 bps rather than the default.
    """

    def __init__(
        self,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
        events: EventLog | None = None,
        guard: OperationGuard | None = None,
    ) -> None:
        from feerouter.execution.guard import OperationGuard

        self.config = config
        self.events = events if events is not None else EventLog()
        self.guard = guard if guard is not None else OperationGuard(self.events)
        self._tolerances: dict[str, int] = {}

    @property
    def default_bps(self) -> int:
        return self.config.default_slippage_bps

    def is_configured(self, caller: str) -> bool:
        return normalize_address(caller) in self._tolerances

    def effective_tolerance(self, caller: str) -> int:
        """Tolerance in bps for caller, falling back to the default."""
        return self._tolerances.get(normalize_address(caller), self.config.default_slippage_bps)

    def set_tolerance(self, caller: str, bps: int) -> ToleranceUpdated:
        """Overwrite caller's tolerance and emit the old and new values.

        Raises:
            InvalidSlippageTolerance: If bps is outside [0, max_slippage_bps]
                (negative values are always rejected)
        """
        with self.guard.operation("set_tolerance"):
            caller = normalize_address(caller)
            if isinstance(bps, bool) or not isinstance(bps, int) or bps < 0:
                raise InvalidSlippageTolerance(bps, self.config.max_slippage_bps)
            if self.config.enforce_tolerance_bounds and bps > self.config.max_slippage_bps:
                logger.debug(
                    "slippage_tolerance_rejected",
                    caller=caller,
                    bps=bps,
                    max_bps=self.config.max_slippage_bps,
                )
                raise InvalidSlippageTolerance(bps, self.config.max_slippage_bps)

            old_bps = self.effective_tolerance(caller)
            self._tolerances[caller] = bps
            event = ToleranceUpdated(caller=caller, old_bps=old_bps, new_bps=bps)
            self.events.emit(event)
            logger.info("slippage_tolerance_updated", caller=caller, old_bps=old_bps, new_bps=bps)
            return event

    def reset_tolerance(self, caller: str) -> ToleranceUpdated:
        """Drop caller's explicit setting so the default applies again."""
        with self.guard.operation("reset_tolerance"):
            caller = normalize_address(caller)
            old_bps = self.effective_tolerance(caller)
            self._tolerances.pop(caller, None)
            event = ToleranceUpdated(
                caller=caller, old_bps=old_bps, new_bps=self.config.default_slippage_bps
            )
            self.events.emit(event)
            logger.info(
                "slippage_tolerance_reset",
                caller=caller,
                old_bps=old_bps,
                new_bps=self.config.default_slippage_bps,
            )
            return event


__all__ = [
    "SlippagePolicy",
    "check_exact_input",
    "check_exact_output",
    "check_quote_within_ceiling",
    "exact_input_threshold",
    "exact_output_threshold",
    "slippage_bps",
]
