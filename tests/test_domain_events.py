from __future__ import annotations

import pytest

from conftest import bounds, d, span_of

from core.events.domain_events import domain_events
from core.events.signal import Signal


def test_signal_connect_emit_disconnect():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    def _handler(payload: str) -> None:
        seen.append(payload)

    signal.connect(_handler)
    signal.connect(_handler)
    signal.emit("a-1")
    signal.disconnect(_handler)
    signal.emit("a-2")

    assert seen == ["a-1"]
    assert signal.subscriber_count() == 0


def test_signal_prunes_dead_weakref_callbacks():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    class _DeadProxy:
        calls = 0

        def __call__(self, _payload: str) -> None:
            _DeadProxy.calls += 1
            raise ReferenceError("weakly-referenced object no longer exists")

    signal.connect(_DeadProxy())
    signal.connect(seen.append)
    signal.emit("a-1")
    signal.emit("a-2")

    assert _DeadProxy.calls == 1
    assert seen == ["a-1", "a-2"]


def test_signal_keeps_other_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)
    try:
        signal.emit("x")
    except RuntimeError as exc:
        assert str(exc) == "boom"
    else:
        raise AssertionError("RuntimeError was swallowed")
    assert signal.subscriber_count() == 1


def test_schedule_changes_emit_day_and_group_events(services, seed):
    ss = services["schedule_service"]
    pa = seed.assignment()
    days_seen: list[str] = []
    groups_seen: list[str] = []
    domain_events.days_changed.connect(days_seen.append)
    domain_events.groups_changed.connect(groups_seen.append)
    try:
        ss.add_days(pa.id, [d(1), d(2)])
    finally:
        domain_events.days_changed.disconnect(days_seen.append)
        domain_events.groups_changed.disconnect(groups_seen.append)

    assert days_seen == [pa.id]
    assert pa.id in groups_seen


def test_absorbed_assignments_are_announced(services, seed):
    gs = services["group_service"]
    pa1 = seed.assignment()
    pa2 = seed.assignment()
    seed.days(pa1.id, 1)
    seed.days(pa2.id, 2)
    seen: list[str] = []
    domain_events.assignment_changed.connect(seen.append)
    try:
        gs.reconcile(pa1.id, [d(1)], expand_adjacent=True)
    finally:
        domain_events.assignment_changed.disconnect(seen.append)

    assert seen == [pa2.id]


def test_nested_events_wait_for_the_outer_commit(services, seed):
    ss = services["schedule_service"]
    session = services["session"]
    pa = seed.assignment()
    seen: list[tuple[str, bool]] = []

    def _record(assignment_id: str) -> None:
        seen.append((assignment_id, session.in_transaction()))

    domain_events.groups_changed.connect(_record)
    try:
        ss.add_days(pa.id, [d(1), d(2), d(3)])
    finally:
        domain_events.groups_changed.disconnect(_record)

    assert seen == [(pa.id, False)]


def test_rolled_back_units_announce_nothing(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    seed.days(pa.id, 1, 2, 3)
    seed.group(pa.id, 1, 2)
    fired: list[str] = []
    domain_events.groups_changed.connect(fired.append)
    try:
        with pytest.raises(RuntimeError):
            with gs.consolidating(pa.id):
                gs.on_day_added(pa.id, d(3))
                raise RuntimeError("storage failed")
        assert fired == []

        gs.on_day_added(pa.id, d(3))
    finally:
        domain_events.groups_changed.disconnect(fired.append)

    assert fired == [pa.id]
    assert bounds(services, pa.id) == [span_of(1, 3)]
