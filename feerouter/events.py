"""Domain events published by router operations.

Each successful operation publishes its events exactly once. Events emitted
while an operation is running are buffered and only published after the
operation commits, so a failed operation never leaks an event.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class TierSelected:
    """The quote comparator picked a fee tier for a swap."""

    token_in: str
    token_out: str
    fee: int
    quoted_amount: int
    is_exact_input: bool


@dataclass(frozen=True)
class ExactInputSwapped:
    caller: str
    recipient: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    fee: int


@dataclass(frozen=True)
class ExactOutputSwapped:
    caller: str
    recipient: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    fee: int
    refund: int


@dataclass(frozen=True)
class ToleranceUpdated:
    caller: str
    old_bps: int
    new_bps: int


@dataclass(frozen=True)
class LiquidityIncreased:
    caller: str
    token_id: int
    liquidity: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class LiquidityDecreased:
    caller: str
    token_id: int
    liquidity: int
    amount0: int
    amount1: int


Event = (
    TierSelected
    | ExactInputSwapped
    | ExactOutputSwapped
    | ToleranceUpdated
    | LiquidityIncreased
    | LiquidityDecreased
)

Subscriber = Callable[[Event], None]


class EventLog:
    """Ordered log of published events with synchronous subscribers.

    Usage:
        log = EventLog()
        unsubscribe = log.subscribe(print)

        log.begin()
        log.emit(ToleranceUpdated(caller, 50, 100))
        batch = log.end()
        log.publish(batch)
    """

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._subscribers: list[Subscriber] = []
        self._pending: list[Event] | None = None

    @property
    def events(self) -> tuple[Event, ...]:
        """All published events, oldest first."""
        return tuple(self._events)

    def of_type(self, event_type: type) -> list[Event]:
        """Published events of a given class."""
        return [event for event in self._events if isinstance(event, event_type)]

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def begin(self) -> None:
        """Start buffering emitted events."""
        self._pending = []

    def end(self) -> list[Event]:
        """Stop buffering and return the buffered events without publishing them."""
        batch = self._pending or []
        self._pending = None
        return batch

    def emit(self, event: Event) -> None:
        """Buffer the event if a batch is open, otherwise publish it now."""
        if self._pending is not None:
            self._pending.append(event)
        else:
            self.publish([event])

    def publish(self, batch: list[Event]) -> None:
        for event in batch:
            self._events.append(event)
            for subscriber in list(self._subscribers):
                try:
                    subscriber(event)
                except Exception:
                    # Operation already committed
                    logger.exception("event_subscriber_failed", event=type(event).__name__)
