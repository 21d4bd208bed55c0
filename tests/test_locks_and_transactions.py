from __future__ import annotations

import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker

from conftest import d

from core.exceptions import ConcurrencyError
from core.models import DayAssignment, ProjectAssignment
from core.services.grouping import AssignmentLockRegistry
from infra.db.base import Base
from infra.db.repositories import SqlAlchemyDayAssignmentRepository
from infra.services import build_service_graph


def test_registry_returns_one_lock_per_key():
    registry = AssignmentLockRegistry()

    assert registry.lock_for(("p", "m")) is registry.lock_for(("p", "m"))
    assert registry.lock_for(("p", "m")) is not registry.lock_for(("p", "other"))


def test_hold_is_reentrant_and_accepts_several_keys():
    registry = AssignmentLockRegistry()

    with registry.hold(("p", "m")):
        with registry.hold(("p", "m"), ("p", "n")):
            pass


def test_hold_serialises_threads_on_the_same_key():
    registry = AssignmentLockRegistry()
    order: list[str] = []
    entered = threading.Event()
    release = threading.Event()

    def _first() -> None:
        with registry.hold(("p", "m")):
            entered.set()
            release.wait(2)
            order.append("first")

    def _second() -> None:
        entered.wait(2)
        with registry.hold(("p", "m")):
            order.append("second")

    threads = [threading.Thread(target=_first), threading.Thread(target=_second)]
    for thread in threads:
        thread.start()
    entered.wait(2)
    release.set()
    for thread in threads:
        thread.join(5)

    assert order == ["first", "second"]


def test_different_keys_do_not_block_each_other():
    registry = AssignmentLockRegistry()
    acquired = threading.Event()

    def _other() -> None:
        with registry.hold(("p", "other")):
            acquired.set()

    with registry.hold(("p", "m")):
        thread = threading.Thread(target=_other)
        thread.start()
        assert acquired.wait(2)
    thread.join(2)


def test_failed_operation_rolls_back_the_whole_unit(services, seed):
    ss = services["schedule_service"]
    pa = seed.assignment()
    group = seed.group(pa.id, 1, 2, comment="before")

    with pytest.raises(ConcurrencyError):
        ss.update_group(group.id, comment="after", expected_version=7)

    # the session is usable again and nothing leaked
    assert services["group_repo"].get(group.id).comment == "before"
    ss.add_day(pa.id, d(5))
    assert [row.date for row in ss.list_days(pa.id)] == [d(5)]


def test_nested_units_commit_once(services, seed):
    gs = services["group_service"]
    session = services["session"]
    pa = seed.assignment()
    seed.days(pa.id, 1, 2)

    with gs.consolidating(pa.id):
        with gs.consolidating(pa.id):
            gs.rebuild_from_scratch(pa.id)
        assert session.in_transaction() is True

    assert session.in_transaction() is False
    assert len(services["group_repo"].list_by_assignment(pa.id)) == 1


def test_failure_in_a_nested_unit_discards_the_outer_work(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    seed.days(pa.id, 1, 2)

    with pytest.raises(RuntimeError):
        with gs.consolidating(pa.id):
            gs.rebuild_from_scratch(pa.id)
            with gs.consolidating(pa.id):
                raise RuntimeError("storage failed")

    assert services["group_repo"].list_by_assignment(pa.id) == []


def test_units_on_different_keys_commit_independently_across_threads(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'schedule.db'}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    sessions = scoped_session(sessionmaker(bind=engine, autoflush=False, autocommit=False))
    graph = build_service_graph(sessions, locks=AssignmentLockRegistry())
    gs = graph.group_service
    first = ProjectAssignment.create("proj-1", "member-1")
    second = ProjectAssignment.create("proj-2", "member-2")
    gs._assignment_repo.add(first)
    gs._assignment_repo.add(second)
    sessions.commit()

    entered = threading.Event()
    release = threading.Event()
    outcome: list[str] = []

    def _failing_unit() -> None:
        try:
            with gs.consolidating(first.id):
                entered.set()
                release.wait(5)
                gs._day_repo.add(DayAssignment.create(first.id, d(1)))
                raise RuntimeError("storage failed")
        except RuntimeError:
            outcome.append("rolled back")
        finally:
            sessions.remove()

    thread = threading.Thread(target=_failing_unit)
    thread.start()
    try:
        assert entered.wait(5)
        with gs.consolidating(second.id):
            gs._day_repo.add(DayAssignment.create(second.id, d(1)))
        assert sessions.in_transaction() is False
    finally:
        release.set()
        thread.join(10)
        sessions.remove()

    with sessionmaker(bind=engine)() as fresh:
        check = SqlAlchemyDayAssignmentRepository(fresh)
        assert outcome == ["rolled back"]
        assert [row.date for row in check.list_by_assignment(second.id)] == [d(1)]
        assert check.list_by_assignment(first.id) == []
    engine.dispose()


def test_unit_depth_is_tracked_per_thread(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    depths: list[int] = []

    def _read_depth() -> None:
        depths.append(gs._unit().depth)

    with gs.consolidating(pa.id):
        thread = threading.Thread(target=_read_depth)
        thread.start()
        thread.join(5)
        depths.append(gs._unit().depth)

    assert depths == [0, 1]
    assert gs._unit().depth == 0
