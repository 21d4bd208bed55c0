from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session, scoped_session

from core.services.grouping import AssignmentGroupService, AssignmentLockRegistry
from core.services.schedule import ScheduleService
from infra.db.repositories import (
    SqlAlchemyAssignmentGroupRepository,
    SqlAlchemyDayAssignmentRepository,
    SqlAlchemyProjectAssignmentRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session | scoped_session
    group_service: AssignmentGroupService
    schedule_service: ScheduleService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "group_service": self.group_service,
            "schedule_service": self.schedule_service,
        }


def build_service_graph(
    session: Session | scoped_session,
    locks: AssignmentLockRegistry | None = None,
) -> ServiceGraph:
    """
    Wire repositories and services on one session. Pass a `scoped_session`
    when the graph is shared between threads so each thread works on its own
    session and transaction.
    """
    assignment_repo = SqlAlchemyProjectAssignmentRepository(session)
    day_repo = SqlAlchemyDayAssignmentRepository(session)
    group_repo = SqlAlchemyAssignmentGroupRepository(session)

    group_service = AssignmentGroupService(
        session,
        assignment_repo,
        day_repo,
        group_repo,
        locks=locks,
    )
    schedule_service = ScheduleService(
        session,
        assignment_repo,
        day_repo,
        group_repo,
        group_service,
    )
    return ServiceGraph(
        session=session,
        group_service=group_service,
        schedule_service=schedule_service,
    )


__all__ = ["ServiceGraph", "build_service_graph"]
