"""Token custody and one-shot approvals.

The router takes custody of caller tokens only for the duration of one
operation, and a failed operation returns what custody still holds.
Approvals to external contracts are granted for exactly the custodied
amount right before the single call that needs them and reset to zero on
every exit path of that call.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from feerouter.errors import TokenTransferFailed
from feerouter.models.types import normalize_address
from feerouter.protocol.tokens import TokenService

logger = structlog.get_logger()


def _require_success(result: bool | None, action: str, token: str, amount: int) -> None:
    # ERC20s that return nothing count as success
    if result is False:
        raise TokenTransferFailed(action, token, amount)


class Custodian:
    """Moves tokens in and out of the router's own account."""

    def __init__(self, tokens: TokenService, address: str) -> None:
        self.tokens = tokens
        self.address = normalize_address(address)

    def take(self, token: str, owner: str, amount: int) -> None:
        """Pull amount of token from owner into custody (requires owner's allowance)."""
        if amount == 0:
            return
        result = self.tokens.transfer_from(token, self.address, owner, self.address, amount)
        _require_success(result, "transfer_from", token, amount)
        logger.debug("custody_taken", token=token, owner=owner, amount=amount)

    def release(self, token: str, recipient: str, amount: int) -> None:
        """Send amount of token out of custody to recipient."""
        if amount == 0:
            return
        result = self.tokens.transfer(token, self.address, recipient, amount)
        _require_success(result, "transfer", token, amount)
        logger.debug("custody_released", token=token, recipient=recipient, amount=amount)

    @contextmanager
    def holding(self, token: str, owner: str, amount: int) -> Iterator[None]:
        """Take custody of amount for the body of the block.

        If the block raises, whatever part of the deposit the router still
        holds goes back to owner before the error propagates. Amounts already
        spent by an external contract stay spent unless a Substrate reverts
        the whole operation.
        """
        if amount == 0:
            yield
            return

        before = self.tokens.balance_of(token, self.address)
        self.take(token, owner, amount)
        try:
            yield
        except BaseException:
            still_held = min(self.tokens.balance_of(token, self.address) - before, amount)
            if still_held > 0:
                self.release(token, owner, still_held)
                logger.warning(
                    "custody_returned_after_failure",
                    token=token,
                    owner=owner,
                    amount=still_held,
                )
            raise

    @contextmanager
    def approval(self, token: str, spender: str, amount: int) -> Iterator[None]:
        """Grant spender exactly amount for the body of the block, then revoke to zero."""
        if amount == 0:
            yield
            return

        result = self.tokens.approve(token, self.address, spender, amount)
        _require_success(result, "approve", token, amount)
        logger.debug("approval_granted", token=token, spender=spender, amount=amount)
        try:
            yield
        finally:
            revoked = self.tokens.approve(token, self.address, spender, 0)
            _require_success(revoked, "approve", token, 0)
            logger.debug("approval_revoked", token=token, spender=spender)


__all__ = ["Custodian"]
