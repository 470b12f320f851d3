"""Serialization, reentrancy protection, and rollback for router operations.

Every public mutating operation runs inside OperationGuard.operation():

- operations are serialized by a single lock
- re-entering any guarded operation from the thread already running one
  raises ReentrantCall (an external contract calling back mid-swap)
- if the token service is a Substrate, a snapshot is taken on entry,
  reverted when the operation raises and discarded when it succeeds
- events emitted during the operation are buffered and published only
  after it completes successfully
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from feerouter.errors import ReentrantCall
from feerouter.events import EventLog
from feerouter.protocol.tokens import Substrate

logger = structlog.get_logger()


class OperationGuard:
    """Run operations one at a time with all-or-nothing semantics."""

    def __init__(self, events: EventLog, substrate: Substrate | None = None) -> None:
        self.events = events
        self.substrate = substrate
        self._lock = threading.Lock()
        self._owner: int | None = None
        self._operation: str | None = None

    @property
    def active_operation(self) -> str | None:
        """Name of the operation currently running, if any."""
        return self._operation

    @contextmanager
    def operation(self, name: str) -> Iterator[None]:
        """Guard one operation.

        Raises:
            ReentrantCall: If the current thread is already inside an operation
        """
        if self._owner == threading.get_ident():
            logger.warning("reentrant_call_rejected", operation=name, active=self._operation)
            raise ReentrantCall(name)

        with self._lock:
            # Nothing is claimed until the snapshot exists
            snapshot_id = self.substrate.snapshot() if self.substrate is not None else None
            self._owner = threading.get_ident()
            self._operation = name
            try:
                self.events.begin()
                yield
            except BaseException:
                self.events.end()
                if self.substrate is not None and snapshot_id is not None:
                    self.substrate.revert(snapshot_id)
                    logger.debug("operation_reverted", operation=name, snapshot=snapshot_id)
                raise
            else:
                batch = self.events.end()
                if self.substrate is not None and snapshot_id is not None:
                    self.substrate.discard(snapshot_id)
            finally:
                self._owner = None
                self._operation = None

        # Subscribers may call back into the router
        self.events.publish(batch)


__all__ = ["OperationGuard"]
