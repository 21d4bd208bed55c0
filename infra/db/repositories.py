# infra/db/repositories.py
from infra.db.assignment.repository import (
    SqlAlchemyAssignmentGroupRepository,
    SqlAlchemyDayAssignmentRepository,
    SqlAlchemyProjectAssignmentRepository,
)

__all__ = [
    "SqlAlchemyProjectAssignmentRepository",
    "SqlAlchemyDayAssignmentRepository",
    "SqlAlchemyAssignmentGroupRepository",
]
