"""Append-only per-caller history of swaps and liquidity actions.

Each caller has two ordered sequences, one per record kind. Global counters
are incremented together with every append (never recomputed by summing),
so total_swaps always equals the sum of per-caller swap counts.

Entries are never edited or removed.
"""

from __future__ import annotations

from collections import defaultdict

import structlog

from feerouter.errors import IndexOutOfBounds, NoLiquidityActionsFound, NoSwapsFound
from feerouter.models.history import LiquidityAction, SwapAction
from feerouter.models.types import normalize_address

logger = structlog.get_logger()


class HistoryLedger:
    """Audit trail of completed router operations."""

    def __init__(self) -> None:
        self._swaps: dict[str, list[SwapAction]] = defaultdict(list)
        self._liquidity_actions: dict[str, list[LiquidityAction]] = defaultdict(list)
        self._total_swaps = 0
        self._total_liquidity_actions = 0

    # --- Global counters ---

    @property
    def total_swaps(self) -> int:
        return self._total_swaps

    @property
    def total_liquidity_actions(self) -> int:
        return self._total_liquidity_actions

    # --- Appends ---

    def record_swap(
        self,
        caller: str,
        *,
        timestamp: int,
        token_in: str,
        token_out: str,
        amount_in: int,
        amount_out: int,
        fee: int,
        is_exact_input: bool,
    ) -> SwapAction:
        """Append a swap for caller and bump the global swap counter."""
        entries = self._swaps[normalize_address(caller)]
        if entries:
            # Never let a clock step backwards reorder a caller's history
            timestamp = max(timestamp, entries[-1].timestamp)

        self._total_swaps += 1
        action = SwapAction(
            timestamp=timestamp,
            sequence=self._total_swaps,
            token_in=normalize_address(token_in),
            token_out=normalize_address(token_out),
            amount_in=amount_in,
            amount_out=amount_out,
            fee=fee,
            is_exact_input=is_exact_input,
        )
        entries.append(action)
        logger.debug("swap_recorded", caller=caller, sequence=action.sequence)
        return action

    def record_liquidity_action(
        self,
        caller: str,
        *,
        timestamp: int,
        token_id: int,
        is_increase: bool,
        liquidity: int,
        amount0: int,
        amount1: int,
    ) -> LiquidityAction:
        """Append a liquidity action for caller and bump the global counter."""
        entries = self._liquidity_actions[normalize_address(caller)]
        if entries:
            timestamp = max(timestamp, entries[-1].timestamp)

        self._total_liquidity_actions += 1
        action = LiquidityAction(
            timestamp=timestamp,
            sequence=self._total_liquidity_actions,
            token_id=token_id,
            is_increase=is_increase,
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        entries.append(action)
        logger.debug("liquidity_action_recorded", caller=caller, sequence=action.sequence)
        return action

    # --- Swap lookups ---

    def swap_count(self, caller: str) -> int:
        return len(self._swaps.get(normalize_address(caller), ()))

    def swaps(self, caller: str) -> tuple[SwapAction, ...]:
        return tuple(self._swaps.get(normalize_address(caller), ()))

    def get_swap(self, caller: str, index: int) -> SwapAction:
        """Swap number `index` (0-based) of caller.

        Raises:
            IndexOutOfBounds: If index is negative or >= the caller's swap count
        """
        entries = self._swaps.get(normalize_address(caller), [])
        if index < 0 or index >= len(entries):
            raise IndexOutOfBounds(index, len(entries))
        return entries[index]

    def last_swap(self, caller: str) -> SwapAction:
        """Most recent swap of caller.

        Raises:
            NoSwapsFound: If caller has never swapped
        """
        entries = self._swaps.get(normalize_address(caller))
        if not entries:
            raise NoSwapsFound(normalize_address(caller))
        return entries[-1]

    # --- Liquidity lookups ---

    def liquidity_action_count(self, caller: str) -> int:
        return len(self._liquidity_actions.get(normalize_address(caller), ()))

    def liquidity_actions(self, caller: str) -> tuple[LiquidityAction, ...]:
        return tuple(self._liquidity_actions.get(normalize_address(caller), ()))

    def get_liquidity_action(self, caller: str, index: int) -> LiquidityAction:
        """Liquidity action number `index` (0-based) of caller.

        Raises:
            IndexOutOfBounds: If index is negative or >= the caller's action count
        """
        entries = self._liquidity_actions.get(normalize_address(caller), [])
        if index < 0 or index >= len(entries):
            raise IndexOutOfBounds(index, len(entries))
        return entries[index]

    def last_liquidity_action(self, caller: str) -> LiquidityAction:
        """Most recent liquidity action of caller.

        Raises:
            NoLiquidityActionsFound: If caller has no liquidity history
        """
        entries = self._liquidity_actions.get(normalize_address(caller))
        if not entries:
            raise NoLiquidityActionsFound(normalize_address(caller))
        return entries[-1]


__all__ = ["HistoryLedger"]
