from infra.db.assignment.mapper import (
    day_assignment_from_orm,
    day_assignment_to_orm,
    group_from_orm,
    group_to_orm,
    project_assignment_from_orm,
    project_assignment_to_orm,
)
from infra.db.assignment.repository import (
    SqlAlchemyAssignmentGroupRepository,
    SqlAlchemyDayAssignmentRepository,
    SqlAlchemyProjectAssignmentRepository,
)

__all__ = [
    "project_assignment_to_orm",
    "project_assignment_from_orm",
    "day_assignment_to_orm",
    "day_assignment_from_orm",
    "group_to_orm",
    "group_from_orm",
    "SqlAlchemyProjectAssignmentRepository",
    "SqlAlchemyDayAssignmentRepository",
    "SqlAlchemyAssignmentGroupRepository",
]
