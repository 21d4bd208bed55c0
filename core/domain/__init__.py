from core.domain.assignment import AssignmentGroup, DayAssignment, ProjectAssignment, generate_id
from core.domain.enums import GroupPriority

__all__ = [
    "generate_id",
    "GroupPriority",
    "ProjectAssignment",
    "DayAssignment",
    "AssignmentGroup",
]
