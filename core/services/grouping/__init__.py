from core.services.grouping.locks import AssignmentLockRegistry, assignment_locks
from core.services.grouping.results import (
    GroupBounds,
    MergeOutcome,
    RebuildOutcome,
    ReconcileOutcome,
    SplitOutcome,
)
from core.services.grouping.service import AssignmentGroupService

__all__ = [
    "AssignmentGroupService",
    "AssignmentLockRegistry",
    "assignment_locks",
    "GroupBounds",
    "MergeOutcome",
    "RebuildOutcome",
    "ReconcileOutcome",
    "SplitOutcome",
]
