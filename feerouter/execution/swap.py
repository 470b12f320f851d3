"""Exact-input and exact-output swap execution.

Per call: validate -> select tier -> take custody -> approve + call router
-> reconcile slippage -> refund (exact output) -> record. Local state (the
history ledger) is only touched after every external call has returned.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from feerouter.errors import (
    DeadlineExpired,
    InvalidAmount,
    InvalidTokenAddress,
    SlippageExceeded,
)
from feerouter.events import EventLog, ExactInputSwapped, ExactOutputSwapped, TierSelected
from feerouter.history import HistoryLedger
from feerouter.models.requests import ExactInputRequest, ExactOutputRequest, SwapOutcome
from feerouter.models.types import is_uint256, is_zero_address, normalize_address
from feerouter.protocol.swap_router import (
    ExactInputSingleParams,
    ExactOutputSingleParams,
    SwapRouter,
)
from feerouter.protocol.tokens import TokenService
from feerouter.routing.comparator import QuoteComparator
from feerouter.safe_int import S
from feerouter.slippage import (
    SlippagePolicy,
    check_exact_input,
    check_exact_output,
    check_quote_within_ceiling,
    exact_input_threshold,
    exact_output_threshold,
)

from .custody import Custodian
from .guard import OperationGuard

logger = structlog.get_logger()


def validate_tokens(token_in: str | None, token_out: str | None) -> tuple[str, str]:
    """Normalize both token addresses.

    Raises:
        InvalidTokenAddress: If either token is missing or the null address
    """
    for token in (token_in, token_out):
        if is_zero_address(token):
            raise InvalidTokenAddress(token)
    return normalize_address(token_in), normalize_address(token_out)  # type: ignore[arg-type]


def validate_amount(amount: int, name: str) -> None:
    """Reject zero or out-of-range driving amounts.

    Raises:
        InvalidAmount: If amount is zero, negative, or above uint256
    """
    if not is_uint256(amount):
        raise InvalidAmount(f"{name} must be a uint256, got {amount!r}")
    if amount == 0:
        raise InvalidAmount(f"{name} must be greater than zero")


def check_deadline(deadline: int, now: int) -> None:
    """Raise DeadlineExpired if now is past deadline."""
    if now > deadline:
        raise DeadlineExpired(deadline, now)


class SwapExecutor:
    """Routes swaps through the best fee tier of the external router."""

    def __init__(
        self,
        *,
        address: str,
        tokens: TokenService,
        swap_router: SwapRouter,
        comparator: QuoteComparator,
        slippage: SlippagePolicy,
        history: HistoryLedger,
        events: EventLog,
        guard: OperationGuard,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.address = normalize_address(address)
        self.swap_router = swap_router
        self.comparator = comparator
        self.slippage = slippage
        self.history = history
        self.events = events
        self.guard = guard
        self.clock = clock
        self.custodian = Custodian(tokens, self.address)

    def _now(self) -> int:
        return int(self.clock())

    def swap_exact_input(self, caller: str, request: ExactInputRequest) -> SwapOutcome:
        """Swap exactly request.amount_in, routed through the tier with the best output.

        Raises:
            InvalidTokenAddress: A token is the null address
            InvalidAmount: amount_in is zero
            DeadlineExpired: The deadline has passed
            NoPoolAvailable: No tier produced a quote
            SlippageExceeded: Realized output fell short by more than the tolerance
        """
        with self.guard.operation("swap_exact_input"):
            return self._swap_exact_input(normalize_address(caller), request)

    def swap_exact_output(self, caller: str, request: ExactOutputRequest) -> SwapOutcome:
        """Buy exactly request.amount_out through the tier needing the least input.

        Custody takes the full amount_in_maximum; whatever the router does not
        spend is refunded, so refund + amount_in == amount_in_maximum.

        Raises:
            InvalidTokenAddress: A token is the null address
            InvalidAmount: amount_out is zero
            DeadlineExpired: The deadline has passed
            NoPoolAvailable: No tier produced a quote
            SlippageExceeded: The quote exceeds amount_in_maximum, or the realized
                input overshot the threshold by more than the tolerance
        """
        with self.guard.operation("swap_exact_output"):
            return self._swap_exact_output(normalize_address(caller), request)

    def _swap_exact_input(self, caller: str, request: ExactInputRequest) -> SwapOutcome:
        token_in, token_out = validate_tokens(request.token_in, request.token_out)
        validate_amount(request.amount_in, "amount_in")
        now = self._now()
        check_deadline(request.deadline, now)
        recipient = normalize_address(request.recipient or caller)

        tier = self.comparator.select_best_tier_exact_input(
            token_in, token_out, request.amount_in, request.sqrt_price_limit_x96
        )
        self.events.emit(
            TierSelected(
                token_in=token_in,
                token_out=token_out,
                fee=tier.fee,
                quoted_amount=tier.amount,
                is_exact_input=True,
            )
        )
        logger.debug("tier_selected", token_in=token_in, token_out=token_out, fee=tier.fee)

        tolerance = self.slippage.effective_tolerance(caller)
        threshold = exact_input_threshold(request.amount_out_minimum, tier.amount, tolerance)

        params = ExactInputSingleParams(
            token_in=token_in,
            token_out=token_out,
            fee=tier.fee,
            recipient=recipient,
            deadline=request.deadline,
            amount_in=request.amount_in,
            amount_out_minimum=request.amount_out_minimum,
            sqrt_price_limit_x96=request.sqrt_price_limit_x96,
        )
        with self.custodian.holding(token_in, caller, request.amount_in):
            with self.custodian.approval(token_in, self.swap_router.address, request.amount_in):
                amount_out = self.swap_router.exact_input_single(params, payer=self.address)

            try:
                actual_bps = check_exact_input(amount_out, threshold, tolerance)
            except SlippageExceeded:
                logger.warning(
                    "swap_exact_input_slippage_exceeded",
                    caller=caller,
                    fee=tier.fee,
                    threshold=threshold,
                    amount_out=amount_out,
                    tolerance_bps=tolerance,
                )
                raise

        record = self.history.record_swap(
            caller,
            timestamp=now,
            token_in=token_in,
            token_out=token_out,
            amount_in=request.amount_in,
            amount_out=amount_out,
            fee=tier.fee,
            is_exact_input=True,
        )
        self.events.emit(
            ExactInputSwapped(
                caller=caller,
                recipient=recipient,
                token_in=token_in,
                token_out=token_out,
                amount_in=request.amount_in,
                amount_out=amount_out,
                fee=tier.fee,
            )
        )
        logger.info(
            "swap_exact_input_executed",
            caller=caller,
            token_in=token_in,
            token_out=token_out,
            fee=tier.fee,
            amount_in=request.amount_in,
            amount_out=amount_out,
            slippage_bps=actual_bps,
        )
        return SwapOutcome(amount=amount_out, fee=tier.fee, refund=0, record=record)

    def _swap_exact_output(self, caller: str, request: ExactOutputRequest) -> SwapOutcome:
        token_in, token_out = validate_tokens(request.token_in, request.token_out)
        validate_amount(request.amount_out, "amount_out")
        if not is_uint256(request.amount_in_maximum):
            raise InvalidAmount(
                f"amount_in_maximum must be a uint256, got {request.amount_in_maximum!r}"
            )
        now = self._now()
        check_deadline(request.deadline, now)
        recipient = normalize_address(request.recipient or caller)

        tier = self.comparator.select_best_tier_exact_output(
            token_in, token_out, request.amount_out, request.sqrt_price_limit_x96
        )
        self.events.emit(
            TierSelected(
                token_in=token_in,
                token_out=token_out,
                fee=tier.fee,
                quoted_amount=tier.amount,
                is_exact_input=False,
            )
        )
        logger.debug("tier_selected", token_in=token_in, token_out=token_out, fee=tier.fee)

        tolerance = self.slippage.effective_tolerance(caller)
        try:
            check_quote_within_ceiling(tier.amount, request.amount_in_maximum, tolerance)
        except SlippageExceeded:
            logger.warning(
                "swap_exact_output_quote_above_maximum",
                caller=caller,
                fee=tier.fee,
                quoted_in=tier.amount,
                amount_in_maximum=request.amount_in_maximum,
            )
            raise
        threshold = exact_output_threshold(request.amount_in_maximum, tier.amount, tolerance)

        params = ExactOutputSingleParams(
            token_in=token_in,
            token_out=token_out,
            fee=tier.fee,
            recipient=recipient,
            deadline=request.deadline,
            amount_out=request.amount_out,
            amount_in_maximum=request.amount_in_maximum,
            sqrt_price_limit_x96=request.sqrt_price_limit_x96,
        )
        with self.custodian.holding(token_in, caller, request.amount_in_maximum):
            with self.custodian.approval(
                token_in, self.swap_router.address, request.amount_in_maximum
            ):
                amount_in = self.swap_router.exact_output_single(params, payer=self.address)

            try:
                actual_bps = check_exact_output(amount_in, threshold, tolerance)
            except SlippageExceeded:
                logger.warning(
                    "swap_exact_output_slippage_exceeded",
                    caller=caller,
                    fee=tier.fee,
                    threshold=threshold,
                    amount_in=amount_in,
                    tolerance_bps=tolerance,
                )
                raise

            refund = (S(request.amount_in_maximum) - amount_in).value
            self.custodian.release(token_in, caller, refund)

        record = self.history.record_swap(
            caller,
            timestamp=now,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=request.amount_out,
            fee=tier.fee,
            is_exact_input=False,
        )
        self.events.emit(
            ExactOutputSwapped(
                caller=caller,
                recipient=recipient,
                token_in=token_in,
                token_out=token_out,
                amount_in=amount_in,
                amount_out=request.amount_out,
                fee=tier.fee,
                refund=refund,
            )
        )
        logger.info(
            "swap_exact_output_executed",
            caller=caller,
            token_in=token_in,
            token_out=token_out,
            fee=tier.fee,
            amount_in=amount_in,
            amount_out=request.amount_out,
            refund=refund,
            slippage_bps=actual_bps,
        )
        return SwapOutcome(amount=amount_in, fee=tier.fee, refund=refund, record=record)


__all__ = ["SwapExecutor", "check_deadline", "validate_amount", "validate_tokens"]
