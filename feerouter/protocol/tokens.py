"""Token transfer service protocol.

The router never holds balances itself; it asks a token service to move
ERC20-style balances between accounts. Implementations raise (or return
False) on insufficient balance or allowance, which aborts the enclosing
operation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class TokenService(Protocol):
    """ERC20 operations addressed by token address."""

    def balance_of(self, token: str, account: str) -> int: ...

    def allowance(self, token: str, owner: str, spender: str) -> int: ...

    def transfer(self, token: str, sender: str, recipient: str, amount: int) -> bool | None:
        """Move amount from sender's own balance to recipient."""
        ...

    def transfer_from(
        self,
        token: str,
        spender: str,
        owner: str,
        recipient: str,
        amount: int,
    ) -> bool | None:
        """Move amount from owner to recipient, consuming spender's allowance."""
        ...

    def approve(self, token: str, owner: str, spender: str, amount: int) -> bool | None:
        """Set spender's allowance over owner's balance to exactly amount."""
        ...


@runtime_checkable
class Substrate(Protocol):
    """Execution substrate able to roll back every effect since a snapshot.

    Token services backed by a node that supports state snapshots (or an
    in-memory ledger) implement this so router operations are all-or-nothing.
    """

    def snapshot(self) -> int: ...

    def revert(self, snapshot_id: int) -> None:
        """Restore the state captured by snapshot_id and drop it."""
        ...

    def discard(self, snapshot_id: int) -> None:
        """Drop snapshot_id once its operation has succeeded."""
        ...


__all__ = ["TokenService", "Substrate"]
