"""Type definitions for the routing module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TierProbe:
    """Outcome of asking one fee tier for a quote.

    amount is None when the tier is unavailable (no pool, or the quote failed).
    """

    fee: int
    amount: int | None
    has_pool: bool = True

    @property
    def available(self) -> bool:
        return self.amount is not None


@dataclass(frozen=True)
class TierQuote:
    """Best tier selected for a swap.

    Attributes:
        fee: Selected fee tier
        amount: Quoted output (exact input) or quoted input (exact output)
        is_exact_input: Direction the quote was taken for
        probes: Every tier probed, in scan order
    """

    fee: int
    amount: int
    is_exact_input: bool
    probes: tuple[TierProbe, ...] = ()


__all__ = ["TierProbe", "TierQuote"]
