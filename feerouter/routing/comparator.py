"""Best fee tier selection across the pools of a single token pair.

Every configured tier is probed in ascending order. A probe is a plain
result value (TierProbe). A tier with no pool, or whose quote returned None
or raised, has no amount. The probes are folded with a deterministic reducer:

- exact input keeps the strictly greatest output, so the lowest tier wins ties
- exact output keeps the strictly smallest input, starting unbounded
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

from feerouter.constants import NO_PRICE_LIMIT
from feerouter.errors import NoPoolAvailable
from feerouter.protocol.constants import FEE_TIERS
from feerouter.protocol.factory import PoolFactory
from feerouter.protocol.quoter import Quoter

from .types import TierProbe, TierQuote

logger = structlog.get_logger()


def best_exact_input(probes: Iterable[TierProbe]) -> TierProbe | None:
    """Pick the probe with the strictly greatest quoted output.

    A later tier must exceed (not merely equal) the current best, and a
    zero output never becomes a candidate.
    """
    best: TierProbe | None = None
    best_amount = 0
    for probe in probes:
        if probe.amount is None:
            continue
        if probe.amount > best_amount:
            best, best_amount = probe, probe.amount
    return best


def best_exact_output(probes: Iterable[TierProbe]) -> TierProbe | None:
    """Pick the probe with the strictly smallest quoted input.

    The first available tier is always accepted as the initial candidate.
    A zero input quote is treated as unavailable.
    """
    best: TierProbe | None = None
    for probe in probes:
        if not probe.amount:
            continue
        if best is None or probe.amount < best.amount:  # type: ignore[operator]
            best = probe
    return best


class QuoteComparator:
    """Select the best fee tier for a swap using the factory and a quoter."""

    def __init__(
        self,
        factory: PoolFactory,
        quoter: Quoter,
        fee_tiers: Iterable[int] = FEE_TIERS,
    ) -> None:
        self.factory = factory
        self.quoter = quoter
        self.fee_tiers = tuple(sorted(fee_tiers))

    def _probe_tiers(
        self,
        quote: Callable[[str, str, int, int, int], int | None],
        token_in: str,
        token_out: str,
        amount: int,
        sqrt_price_limit_x96: int,
    ) -> list[TierProbe]:
        probes = []
        for fee in self.fee_tiers:
            if self.factory.get_pool(token_in, token_out, fee) is None:
                probes.append(TierProbe(fee=fee, amount=None, has_pool=False))
                continue
            try:
                quoted = quote(token_in, token_out, fee, amount, sqrt_price_limit_x96)
                error = None
            except Exception as e:
                # A reverting quoter only takes its own tier out of the running
                quoted, error = None, str(e)
            if quoted is None:
                logger.debug(
                    "quote_tier_unavailable",
                    token_in=token_in,
                    token_out=token_out,
                    fee=fee,
                    amount=amount,
                    error=error,
                )
            probes.append(TierProbe(fee=fee, amount=quoted))
        return probes

    def probe_exact_input(
        self,
        token_in: str,
        token_out: str,
        amount_in: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> list[TierProbe]:
        """Quote amount_in at every tier that has a pool."""
        return self._probe_tiers(
            self.quoter.quote_exact_input, token_in, token_out, amount_in, sqrt_price_limit_x96
        )

    def probe_exact_output(
        self,
        token_in: str,
        token_out: str,
        amount_out: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> list[TierProbe]:
        """Quote the input needed for amount_out at every tier that has a pool."""
        return self._probe_tiers(
            self.quoter.quote_exact_output, token_in, token_out, amount_out, sqrt_price_limit_x96
        )

    def select_best_tier_exact_input(
        self,
        token_in: str,
        token_out: str,
        amount_in: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> TierQuote:
        """Select the tier giving the most output for amount_in.

        Raises:
            NoPoolAvailable: If no tier produced a positive quote
        """
        probes = self.probe_exact_input(token_in, token_out, amount_in, sqrt_price_limit_x96)
        best = best_exact_input(probes)
        if best is None or best.amount is None:
            logger.debug(
                "no_pool_available",
                token_in=token_in,
                token_out=token_out,
                fee_tiers=self.fee_tiers,
            )
            raise NoPoolAvailable(token_in, token_out, self.fee_tiers)

        return TierQuote(
            fee=best.fee, amount=best.amount, is_exact_input=True, probes=tuple(probes)
        )

    def select_best_tier_exact_output(
        self,
        token_in: str,
        token_out: str,
        amount_out: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> TierQuote:
        """Select the tier needing the least input for amount_out.

        Raises:
            NoPoolAvailable: If no tier produced a positive quote
        """
        probes = self.probe_exact_output(token_in, token_out, amount_out, sqrt_price_limit_x96)
        best = best_exact_output(probes)
        if best is None or best.amount is None:
            logger.debug(
                "no_pool_available",
                token_in=token_in,
                token_out=token_out,
                fee_tiers=self.fee_tiers,
            )
            raise NoPoolAvailable(token_in, token_out, self.fee_tiers)

        return TierQuote(
            fee=best.fee, amount=best.amount, is_exact_input=False, probes=tuple(probes)
        )


__all__ = ["QuoteComparator", "best_exact_input", "best_exact_output"]
