from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from core.interfaces import (
    AssignmentGroupRepository,
    DayAssignmentRepository,
    ProjectAssignmentRepository,
)
from core.models import AssignmentGroup, DayAssignment, ProjectAssignment
from infra.db.assignment.mapper import (
    day_assignment_from_orm,
    day_assignment_to_orm,
    group_from_orm,
    group_to_orm,
    project_assignment_from_orm,
    project_assignment_to_orm,
)
from infra.db.models import AssignmentGroupORM, DayAssignmentORM, ProjectAssignmentORM
from infra.db.optimistic import bump_version


class SqlAlchemyProjectAssignmentRepository(ProjectAssignmentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, assignment: ProjectAssignment) -> None:
        self.session.add(project_assignment_to_orm(assignment))
        self.session.flush()

    def get(self, assignment_id: str) -> Optional[ProjectAssignment]:
        obj = self.session.get(ProjectAssignmentORM, assignment_id)
        return project_assignment_from_orm(obj) if obj else None

    def delete(self, assignment_id: str) -> None:
        # SQLite only cascades with PRAGMA foreign_keys, so children go explicitly
        self.session.execute(delete(DayAssignmentORM).where(DayAssignmentORM.assignment_id == assignment_id))
        self.session.execute(delete(AssignmentGroupORM).where(AssignmentGroupORM.assignment_id == assignment_id))
        self.session.query(ProjectAssignmentORM).filter_by(id=assignment_id).delete()

    def list_all(
        self, project_id: Optional[str] = None, member_id: Optional[str] = None
    ) -> List[ProjectAssignment]:
        stmt = select(ProjectAssignmentORM)
        if project_id is not None:
            stmt = stmt.where(ProjectAssignmentORM.project_id == project_id)
        if member_id is not None:
            stmt = stmt.where(ProjectAssignmentORM.member_id == member_id)
        stmt = stmt.order_by(ProjectAssignmentORM.created_at, ProjectAssignmentORM.id)
        rows = self.session.execute(stmt).scalars().all()
        return [project_assignment_from_orm(row) for row in rows]

    def list_by_project_member(self, project_id: str, member_id: str) -> List[ProjectAssignment]:
        stmt = (
            select(ProjectAssignmentORM)
            .where(
                ProjectAssignmentORM.project_id == project_id,
                ProjectAssignmentORM.member_id == member_id,
            )
            .order_by(ProjectAssignmentORM.created_at, ProjectAssignmentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [project_assignment_from_orm(row) for row in rows]


class SqlAlchemyDayAssignmentRepository(DayAssignmentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, day: DayAssignment) -> int:
        obj = day_assignment_to_orm(day)
        self.session.add(obj)
        self.session.flush()
        day.id = obj.id
        return obj.id

    def get(self, day_id: int) -> Optional[DayAssignment]:
        obj = self.session.get(DayAssignmentORM, day_id)
        return day_assignment_from_orm(obj) if obj else None

    def update(self, day: DayAssignment) -> None:
        self.session.execute(
            update(DayAssignmentORM)
            .where(DayAssignmentORM.id == day.id)
            .values(date=day.date, comment=day.comment)
        )

    def delete_many(self, day_ids: Iterable[int]) -> None:
        ids = list(day_ids)
        if not ids:
            return
        self.session.execute(delete(DayAssignmentORM).where(DayAssignmentORM.id.in_(ids)))

    def list_by_assignment(self, assignment_id: str) -> List[DayAssignment]:
        stmt = (
            select(DayAssignmentORM)
            .where(DayAssignmentORM.assignment_id == assignment_id)
            .order_by(DayAssignmentORM.date, DayAssignmentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [day_assignment_from_orm(row) for row in rows]

    def find(self, assignment_id: str, day: date) -> Optional[DayAssignment]:
        stmt = (
            select(DayAssignmentORM)
            .where(DayAssignmentORM.assignment_id == assignment_id, DayAssignmentORM.date == day)
            .order_by(DayAssignmentORM.id)
            .limit(1)
        )
        obj = self.session.execute(stmt).scalars().first()
        return day_assignment_from_orm(obj) if obj else None

    def list_between(self, assignment_id: str, start: date, end: date) -> List[DayAssignment]:
        stmt = (
            select(DayAssignmentORM)
            .where(
                DayAssignmentORM.assignment_id == assignment_id,
                DayAssignmentORM.date >= start,
                DayAssignmentORM.date <= end,
            )
            .order_by(DayAssignmentORM.date, DayAssignmentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [day_assignment_from_orm(row) for row in rows]

    def list_window(self, start: date, end: date) -> List[DayAssignment]:
        stmt = (
            select(DayAssignmentORM)
            .where(DayAssignmentORM.date >= start, DayAssignmentORM.date <= end)
            .order_by(DayAssignmentORM.date, DayAssignmentORM.assignment_id, DayAssignmentORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [day_assignment_from_orm(row) for row in rows]


class SqlAlchemyAssignmentGroupRepository(AssignmentGroupRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, group: AssignmentGroup) -> int:
        obj = group_to_orm(group)
        self.session.add(obj)
        self.session.flush()
        group.id = obj.id
        group.version = obj.version
        return obj.id

    def get(self, group_id: int) -> Optional[AssignmentGroup]:
        obj = self.session.get(AssignmentGroupORM, group_id)
        return group_from_orm(obj) if obj else None

    def update(self, group: AssignmentGroup) -> None:
        group.version = bump_version(
            self.session,
            AssignmentGroupORM,
            group.id,
            group.version,
            {
                "start_date": group.start_date,
                "end_date": group.end_date,
                "priority": group.priority,
                "comment": group.comment,
            },
            label="Assignment group",
            not_found_code="GROUP_NOT_FOUND",
        )

    def delete_many(self, group_ids: Iterable[int]) -> None:
        ids = list(group_ids)
        if not ids:
            return
        self.session.execute(delete(AssignmentGroupORM).where(AssignmentGroupORM.id.in_(ids)))

    def list_by_assignment(self, assignment_id: str) -> List[AssignmentGroup]:
        stmt = (
            select(AssignmentGroupORM)
            .where(AssignmentGroupORM.assignment_id == assignment_id)
            .order_by(AssignmentGroupORM.start_date, AssignmentGroupORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [group_from_orm(row) for row in rows]

    def list_overlapping(self, start: date, end: date) -> List[AssignmentGroup]:
        stmt = (
            select(AssignmentGroupORM)
            .where(AssignmentGroupORM.start_date <= end, AssignmentGroupORM.end_date >= start)
            .order_by(AssignmentGroupORM.start_date, AssignmentGroupORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [group_from_orm(row) for row in rows]


__all__ = [
    "SqlAlchemyProjectAssignmentRepository",
    "SqlAlchemyDayAssignmentRepository",
    "SqlAlchemyAssignmentGroupRepository",
]
