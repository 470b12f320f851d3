"""Tests for operation serialization, reentrancy rejection, and rollback."""

import threading

import pytest

from feerouter.errors import ReentrantCall
from feerouter.events import EventLog, ToleranceUpdated
from feerouter.execution.guard import OperationGuard
from tests.helpers import ALICE, WETH, InMemoryChain


def make_event(new_bps: int = 1) -> ToleranceUpdated:
    return ToleranceUpdated(caller=ALICE, old_bps=0, new_bps=new_bps)


class TestOperationGuard:
    def test_events_published_after_success(self):
        events = EventLog()
        guard = OperationGuard(events)

        with guard.operation("op"):
            events.emit(make_event())
            assert events.events == ()

        assert events.events == (make_event(),)

    def test_events_dropped_on_failure(self):
        events = EventLog()
        guard = OperationGuard(events)

        with pytest.raises(ValueError):
            with guard.operation("op"):
                events.emit(make_event())
                raise ValueError("boom")

        assert events.events == ()

    def test_reentrant_call_rejected(self):
        guard = OperationGuard(EventLog())

        with guard.operation("outer"):
            with pytest.raises(ReentrantCall) as exc_info:
                with guard.operation("inner"):
                    pass

        assert exc_info.value.operation == "inner"

    def test_guard_usable_after_reentrancy_failure(self):
        guard = OperationGuard(EventLog())

        with pytest.raises(ReentrantCall):
            with guard.operation("outer"):
                with guard.operation("inner"):
                    pass

        with guard.operation("again"):
            assert guard.active_operation == "again"
        assert guard.active_operation is None

    def test_substrate_reverted_on_failure(self):
        chain = InMemoryChain()
        chain.mint(WETH, ALICE, 100)
        guard = OperationGuard(EventLog(), chain)

        with pytest.raises(ValueError):
            with guard.operation("op"):
                chain.mint(WETH, ALICE, 50)
                raise ValueError("boom")

        assert chain.balance_of(WETH, ALICE) == 100

    def test_substrate_kept_on_success(self):
        chain = InMemoryChain()
        guard = OperationGuard(EventLog(), chain)

        with guard.operation("op"):
            chain.mint(WETH, ALICE, 50)

        assert chain.balance_of(WETH, ALICE) == 50

    def test_snapshot_discarded_on_success(self):
        chain = InMemoryChain()
        guard = OperationGuard(EventLog(), chain)

        for _ in range(3):
            with guard.operation("op"):
                chain.mint(WETH, ALICE, 1)

        assert chain.open_snapshots == 0

    def test_snapshot_dropped_on_failure(self):
        chain = InMemoryChain()
        guard = OperationGuard(EventLog(), chain)

        with pytest.raises(ValueError):
            with guard.operation("op"):
                raise ValueError("boom")

        assert chain.open_snapshots == 0

    def test_failed_snapshot_releases_guard(self):
        """A substrate that cannot snapshot fails the operation, not the next one."""

        class FlakySnapshots(InMemoryChain):
            failures = 1

            def snapshot(self) -> int:
                if self.failures:
                    self.failures -= 1
                    raise RuntimeError("rpc timeout")
                return super().snapshot()

        chain = FlakySnapshots()
        guard = OperationGuard(EventLog(), chain)

        with pytest.raises(RuntimeError):
            with guard.operation("first"):
                pass

        assert guard.active_operation is None
        with guard.operation("second"):
            chain.mint(WETH, ALICE, 5)
        assert chain.balance_of(WETH, ALICE) == 5

    def test_subscriber_may_call_back_in(self):
        """Events are published outside the lock."""
        events = EventLog()
        guard = OperationGuard(events)
        nested = []

        def on_event(event):
            if len(nested) == 0:
                with guard.operation("from_subscriber"):
                    nested.append(event)

        events.subscribe(on_event)
        with guard.operation("op"):
            events.emit(make_event())

        assert nested == [make_event()]

    def test_other_threads_are_serialized(self):
        guard = OperationGuard(EventLog())
        entered = threading.Event()
        release = threading.Event()
        order = []

        def first():
            with guard.operation("first"):
                entered.set()
                release.wait(timeout=5)
                order.append("first")

        def second():
            with guard.operation("second"):
                order.append("second")

        t1 = threading.Thread(target=first)
        t1.start()
        entered.wait(timeout=5)
        t2 = threading.Thread(target=second)
        t2.start()
        release.set()
        t1.join(timeout=5)
        t2.join(timeout=5)

        assert order == ["first", "second"]


class TestEventLog:
    def test_emit_without_batch_publishes(self):
        events = EventLog()
        events.emit(make_event())

        assert events.events == (make_event(),)

    def test_subscribe_and_unsubscribe(self):
        events = EventLog()
        received = []
        unsubscribe = events.subscribe(received.append)

        events.emit(make_event(1))
        unsubscribe()
        events.emit(make_event(2))

        assert received == [make_event(1)]

    def test_failing_subscriber_does_not_block_others(self):
        events = EventLog()
        received = []

        def explode(_event):
            raise RuntimeError("subscriber bug")

        events.subscribe(explode)
        events.subscribe(received.append)
        events.emit(make_event())

        assert received == [make_event()]
        assert events.events == (make_event(),)

    def test_of_type(self):
        events = EventLog()
        events.emit(make_event())

        assert events.of_type(ToleranceUpdated) == [make_event()]
        assert events.of_type(int) == []
