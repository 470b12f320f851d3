"""Liquidity increase/decrease on positions held in the external position manager.

Ownership is never cached: every call asks the position manager who owns the
position right now, so a transfer takes effect on the very next call.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from contextlib import ExitStack

import structlog

from feerouter.errors import InvalidAmount, NotPositionOwner, ZeroLiquidity
from feerouter.events import EventLog, LiquidityDecreased, LiquidityIncreased
from feerouter.history import HistoryLedger
from feerouter.models.requests import (
    DecreaseLiquidityRequest,
    IncreaseLiquidityRequest,
    LiquidityOutcome,
)
from feerouter.models.types import is_uint256, normalize_address
from feerouter.protocol.positions import (
    DecreaseLiquidityParams,
    IncreaseLiquidityParams,
    PositionManager,
)
from feerouter.protocol.tokens import TokenService
from feerouter.safe_int import S

from .custody import Custodian
from .guard import OperationGuard
from .swap import check_deadline

logger = structlog.get_logger()


class LiquidityManager:
    """Adjusts liquidity of caller-owned positions."""

    def __init__(
        self,
        *,
        address: str,
        tokens: TokenService,
        position_manager: PositionManager,
        history: HistoryLedger,
        events: EventLog,
        guard: OperationGuard,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.address = normalize_address(address)
        self.position_manager = position_manager
        self.history = history
        self.events = events
        self.guard = guard
        self.clock = clock
        self.custodian = Custodian(tokens, self.address)

    def _require_owner(self, caller: str, token_id: int) -> None:
        owner = normalize_address(self.position_manager.owner_of(token_id))
        if owner != caller:
            logger.warning("not_position_owner", caller=caller, token_id=token_id, owner=owner)
            raise NotPositionOwner(token_id, caller, owner)

    def increase_liquidity(
        self, caller: str, request: IncreaseLiquidityRequest
    ) -> LiquidityOutcome:
        """Add liquidity to a position owned by caller.

        Each non-zero desired amount is pulled into custody and approved to the
        position manager for exactly that amount; any part the position
        manager did not consume is refunded.

        Raises:
            DeadlineExpired: The deadline has passed
            NotPositionOwner: caller does not own the position
            InvalidAmount: Both desired amounts are zero
        """
        with self.guard.operation("increase_liquidity"):
            return self._increase_liquidity(normalize_address(caller), request)

    def decrease_liquidity(
        self, caller: str, request: DecreaseLiquidityRequest
    ) -> LiquidityOutcome:
        """Remove liquidity from a position owned by caller.

        No caller funds move: the released amounts stay credited to the
        position and are collected through the position manager.

        Raises:
            DeadlineExpired: The deadline has passed
            NotPositionOwner: caller does not own the position
            ZeroLiquidity: request.liquidity is zero
        """
        with self.guard.operation("decrease_liquidity"):
            return self._decrease_liquidity(normalize_address(caller), request)

    def _increase_liquidity(
        self, caller: str, request: IncreaseLiquidityRequest
    ) -> LiquidityOutcome:
        now = int(self.clock())
        check_deadline(request.deadline, now)
        self._require_owner(caller, request.token_id)
        for name in ("amount0_desired", "amount1_desired"):
            if not is_uint256(getattr(request, name)):
                raise InvalidAmount(f"{name} must be a uint256")
        if request.amount0_desired == 0 and request.amount1_desired == 0:
            raise InvalidAmount("amount0_desired and amount1_desired are both zero")

        token0, token1 = self.position_manager.position_tokens(request.token_id)
        params = IncreaseLiquidityParams(
            token_id=request.token_id,
            amount0_desired=request.amount0_desired,
            amount1_desired=request.amount1_desired,
            amount0_min=request.amount0_min,
            amount1_min=request.amount1_min,
            deadline=request.deadline,
        )
        spender = self.position_manager.address
        with ExitStack() as custody:
            custody.enter_context(self.custodian.holding(token0, caller, request.amount0_desired))
            custody.enter_context(self.custodian.holding(token1, caller, request.amount1_desired))
            with ExitStack() as approvals:
                approvals.enter_context(
                    self.custodian.approval(token0, spender, request.amount0_desired)
                )
                approvals.enter_context(
                    self.custodian.approval(token1, spender, request.amount1_desired)
                )
                liquidity, amount0, amount1 = self.position_manager.increase_liquidity(
                    params, payer=self.address
                )

            refund0 = (S(request.amount0_desired) - amount0).value
            refund1 = (S(request.amount1_desired) - amount1).value
            self.custodian.release(token0, caller, refund0)
            self.custodian.release(token1, caller, refund1)

        record = self.history.record_liquidity_action(
            caller,
            timestamp=now,
            token_id=request.token_id,
            is_increase=True,
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        self.events.emit(
            LiquidityIncreased(
                caller=caller,
                token_id=request.token_id,
                liquidity=liquidity,
                amount0=amount0,
                amount1=amount1,
            )
        )
        logger.info(
            "liquidity_increased",
            caller=caller,
            token_id=request.token_id,
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
            refund0=refund0,
            refund1=refund1,
        )
        return LiquidityOutcome(
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
            record=record,
            refund0=refund0,
            refund1=refund1,
        )

    def _decrease_liquidity(
        self, caller: str, request: DecreaseLiquidityRequest
    ) -> LiquidityOutcome:
        now = int(self.clock())
        check_deadline(request.deadline, now)
        self._require_owner(caller, request.token_id)
        if request.liquidity == 0:
            raise ZeroLiquidity(request.token_id)

        params = DecreaseLiquidityParams(
            token_id=request.token_id,
            liquidity=request.liquidity,
            amount0_min=request.amount0_min,
            amount1_min=request.amount1_min,
            deadline=request.deadline,
        )
        amount0, amount1 = self.position_manager.decrease_liquidity(params)

        record = self.history.record_liquidity_action(
            caller,
            timestamp=now,
            token_id=request.token_id,
            is_increase=False,
            liquidity=request.liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        self.events.emit(
            LiquidityDecreased(
                caller=caller,
                token_id=request.token_id,
                liquidity=request.liquidity,
                amount0=amount0,
                amount1=amount1,
            )
        )
        logger.info(
            "liquidity_decreased",
            caller=caller,
            token_id=request.token_id,
            liquidity=request.liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        return LiquidityOutcome(
            liquidity=request.liquidity, amount0=amount0, amount1=amount1, record=record
        )


__all__ = ["LiquidityManager"]
