from __future__ import annotations

from core.models import AssignmentGroup, DayAssignment, ProjectAssignment
from infra.db.models import AssignmentGroupORM, DayAssignmentORM, ProjectAssignmentORM


def project_assignment_to_orm(assignment: ProjectAssignment) -> ProjectAssignmentORM:
    return ProjectAssignmentORM(
        id=assignment.id,
        project_id=assignment.project_id,
        member_id=assignment.member_id,
        created_at=assignment.created_at,
    )


def project_assignment_from_orm(obj: ProjectAssignmentORM) -> ProjectAssignment:
    return ProjectAssignment(
        id=obj.id,
        project_id=obj.project_id,
        member_id=obj.member_id,
        created_at=obj.created_at,
    )


def day_assignment_to_orm(day: DayAssignment) -> DayAssignmentORM:
    return DayAssignmentORM(
        id=day.id,
        assignment_id=day.assignment_id,
        date=day.date,
        comment=day.comment,
    )


def day_assignment_from_orm(obj: DayAssignmentORM) -> DayAssignment:
    return DayAssignment(
        id=obj.id,
        assignment_id=obj.assignment_id,
        date=obj.date,
        comment=obj.comment,
    )


def group_to_orm(group: AssignmentGroup) -> AssignmentGroupORM:
    return AssignmentGroupORM(
        id=group.id,
        assignment_id=group.assignment_id,
        start_date=group.start_date,
        end_date=group.end_date,
        priority=group.priority,
        comment=group.comment,
        version=getattr(group, "version", 1),
    )


def group_from_orm(obj: AssignmentGroupORM) -> AssignmentGroup:
    return AssignmentGroup(
        id=obj.id,
        assignment_id=obj.assignment_id,
        start_date=obj.start_date,
        end_date=obj.end_date,
        priority=obj.priority,
        comment=obj.comment,
        version=getattr(obj, "version", 1),
    )


__all__ = [
    "project_assignment_to_orm",
    "project_assignment_from_orm",
    "day_assignment_to_orm",
    "day_assignment_from_orm",
    "group_to_orm",
    "group_from_orm",
]
