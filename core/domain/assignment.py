from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4

from core.domain.enums import GroupPriority


def generate_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class ProjectAssignment:
    """Links one project to one team member; owns day assignments and groups."""

    id: str
    project_id: str
    member_id: str
    created_at: datetime = field(default_factory=_utc_now)

    @property
    def lock_key(self) -> tuple[str, str]:
        return (self.project_id, self.member_id)

    @staticmethod
    def create(project_id: str, member_id: str) -> "ProjectAssignment":
        return ProjectAssignment(
            id=generate_id(),
            project_id=project_id,
            member_id=member_id,
        )


@dataclass
class DayAssignment:
    """Scheduled work of one assignment on one calendar date."""

    assignment_id: str
    date: date
    comment: Optional[str] = None
    # assigned by the store on insert
    id: Optional[int] = None

    @staticmethod
    def create(assignment_id: str, day: date, comment: Optional[str] = None) -> "DayAssignment":
        return DayAssignment(assignment_id=assignment_id, date=day, comment=comment)


@dataclass
class AssignmentGroup:
    """
    Contiguous run of an assignment's days carrying priority/comment metadata.
    Bounds are inclusive.
    """

    assignment_id: str
    start_date: date
    end_date: date
    priority: GroupPriority = GroupPriority.NORMAL
    comment: Optional[str] = None
    id: Optional[int] = None
    version: int = 1

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @staticmethod
    def create(
        assignment_id: str,
        start_date: date,
        end_date: date,
        priority: GroupPriority = GroupPriority.NORMAL,
        comment: Optional[str] = None,
    ) -> "AssignmentGroup":
        return AssignmentGroup(
            assignment_id=assignment_id,
            start_date=start_date,
            end_date=end_date,
            priority=priority,
            comment=comment,
        )


__all__ = ["ProjectAssignment", "DayAssignment", "AssignmentGroup", "generate_id"]
