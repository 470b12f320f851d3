"""Error classes raised by the router.

Every failure aborts the whole enclosing operation. Errors are grouped by
kind (validation, routing, economic, authorization, configuration,
execution) and carry the numeric or identity context that caused them.
"""

from __future__ import annotations


class RouterError(Exception):
    """Base error for all router operations."""


# --- Input validation ---


class ValidationError(RouterError):
    """Caller-supplied input was rejected before any external call."""


class InvalidTokenAddress(ValidationError):
    """A token identity is missing or the null address."""

    def __init__(self, token: str | None) -> None:
        self.token = token
        super().__init__(f"Invalid token address: {token!r}")


class InvalidAmount(ValidationError):
    """A driving amount is zero or outside the uint256 range."""

    def __init__(self, message: str = "Amount must be greater than zero") -> None:
        super().__init__(message)


class DeadlineExpired(ValidationError):
    """The current time is past the caller-supplied deadline."""

    def __init__(self, deadline: int, now: int) -> None:
        self.deadline = deadline
        self.now = now
        super().__init__(f"Deadline {deadline} expired (now={now})")


class ZeroLiquidity(ValidationError):
    """A liquidity decrease requested zero liquidity."""

    def __init__(self, token_id: int) -> None:
        self.token_id = token_id
        super().__init__(f"Liquidity to remove must be non-zero (position {token_id})")


class InvalidSlippageTolerance(ValidationError):
    """A tolerance update fell outside the accepted basis-point range."""

    def __init__(self, bps: int, max_bps: int) -> None:
        self.bps = bps
        self.max_bps = max_bps
        super().__init__(f"Slippage tolerance {bps} bps outside [0, {max_bps}]")


class IndexOutOfBounds(ValidationError):
    """A history lookup used an index past the caller's entry count."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(f"Index {index} out of bounds (count={count})")


class NoSwapsFound(ValidationError):
    """The caller has no swap history."""

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__(f"No swaps found for {caller}")


class NoLiquidityActionsFound(ValidationError):
    """The caller has no liquidity history."""

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__(f"No liquidity actions found for {caller}")


# --- Routing ---


class RoutingError(RouterError):
    """No usable route exists."""


class NoPoolAvailable(RoutingError):
    """None of the configured fee tiers produced a quote."""

    def __init__(self, token_in: str, token_out: str, fee_tiers: tuple[int, ...]) -> None:
        self.token_in = token_in
        self.token_out = token_out
        self.fee_tiers = fee_tiers
        super().__init__(f"No pool available for {token_in} -> {token_out} at tiers {fee_tiers}")


# --- Economic ---


class EconomicError(RouterError):
    """The realized trade violates the caller's economic bounds."""


class SlippageExceeded(EconomicError):
    """Realized (or quoted) amount deviates from the threshold by more than the tolerance."""

    def __init__(self, actual_bps: int, tolerance_bps: int) -> None:
        self.actual_bps = actual_bps
        self.tolerance_bps = tolerance_bps
        super().__init__(f"Slippage {actual_bps} bps exceeds tolerance {tolerance_bps} bps")


# --- Authorization ---


class AuthorizationError(RouterError):
    """The caller is not allowed to act on the target resource."""


class NotPositionOwner(AuthorizationError):
    """The caller does not currently own the liquidity position."""

    def __init__(self, token_id: int, caller: str, owner: str) -> None:
        self.token_id = token_id
        self.caller = caller
        self.owner = owner
        super().__init__(f"{caller} is not the owner of position {token_id} (owner={owner})")


# --- Construction ---


class ConfigurationError(RouterError):
    """The router was constructed with unusable collaborators or settings."""


class InvalidConfiguration(ConfigurationError):
    """A required collaborator or setting is missing or invalid."""


# --- Execution ---


class ExecutionError(RouterError):
    """An operation could not run to completion."""


class ReentrantCall(ExecutionError):
    """An operation was entered again while already running on this thread."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Reentrant call into {operation}")


class TokenTransferFailed(ExecutionError):
    """The token service reported a failed transfer or approval."""

    def __init__(self, action: str, token: str, amount: int) -> None:
        self.action = action
        self.token = token
        self.amount = amount
        super().__init__(f"Token {action} of {amount} {token} failed")
