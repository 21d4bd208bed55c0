from .grouping import AssignmentGroupService, AssignmentLockRegistry
from .schedule import DayChange, MoveOutcome, ScheduleService

__all__ = [
    "AssignmentGroupService",
    "AssignmentLockRegistry",
    "ScheduleService",
    "DayChange",
    "MoveOutcome",
]
