# tests/conftest.py
import os

os.environ.setdefault("TS_DB_URL", "sqlite:///:memory:")

from datetime import date, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.models import AssignmentGroup, DayAssignment, ProjectAssignment
from core.services.grouping import AssignmentLockRegistry
from infra.db.base import Base
from infra.services import build_service_graph


D0 = date(2026, 3, 1)


def d(offset: int) -> date:
    """Day `offset` of the test calendar (d(1) is 2026-03-01)."""
    return D0 + timedelta(days=offset - 1)


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    # Same wiring as main.build_services(), on the test session with private locks
    graph = build_service_graph(session, locks=AssignmentLockRegistry())
    services = graph.as_dict()
    services["graph"] = graph
    services["assignment_repo"] = graph.group_service._assignment_repo
    services["day_repo"] = graph.group_service._day_repo
    services["group_repo"] = graph.group_service._group_repo
    return services


@pytest.fixture
def seed(services):
    """
    Write rows straight through the repositories, bypassing the engine, so
    tests can start from any (possibly inconsistent) state.
    """
    session = services["session"]

    class _Seed:
        def assignment(self, project_id="proj-1", member_id="member-1") -> ProjectAssignment:
            assignment = ProjectAssignment.create(project_id, member_id)
            services["assignment_repo"].add(assignment)
            session.commit()
            return assignment

        def days(self, assignment_id, *offsets, comment=None) -> list[DayAssignment]:
            rows = []
            for offset in offsets:
                row = DayAssignment.create(assignment_id, d(offset), comment)
                services["day_repo"].add(row)
                rows.append(row)
            session.commit()
            return rows

        def group(self, assignment_id, start, end, **kwargs) -> AssignmentGroup:
            group = AssignmentGroup.create(assignment_id, d(start), d(end), **kwargs)
            services["group_repo"].add(group)
            session.commit()
            return group

    return _Seed()


def bounds(services, assignment_id) -> list[tuple[date, date]]:
    groups = services["group_repo"].list_by_assignment(assignment_id)
    return [(g.start_date, g.end_date) for g in groups]


def span_of(start: int, end: int) -> tuple[date, date]:
    return (d(start), d(end))
