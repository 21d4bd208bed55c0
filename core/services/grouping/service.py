from __future__ import annotations

import threading

from sqlalchemy.orm import Session

from core.interfaces import (
    AssignmentGroupRepository,
    DayAssignmentRepository,
    ProjectAssignmentRepository,
)
from core.services.grouping.cleanup import GroupCleanupMixin
from core.services.grouping.locks import AssignmentLockRegistry, assignment_locks
from core.services.grouping.merge import GroupMergeMixin
from core.services.grouping.rebuild import GroupRebuildMixin
from core.services.grouping.reconcile import GroupReconcileMixin
from core.services.grouping.split import GroupSplitMixin


class AssignmentGroupService(
    GroupReconcileMixin,
    GroupRebuildMixin,
    GroupMergeMixin,
    GroupSplitMixin,
    GroupCleanupMixin,
):
    """Keeps each assignment's groups aligned with its scheduled days."""

    def __init__(
        self,
        session: Session,
        assignment_repo: ProjectAssignmentRepository,
        day_repo: DayAssignmentRepository,
        group_repo: AssignmentGroupRepository,
        locks: AssignmentLockRegistry | None = None,
    ):
        self._session: Session = session
        self._assignment_repo: ProjectAssignmentRepository = assignment_repo
        self._day_repo: DayAssignmentRepository = day_repo
        self._group_repo: AssignmentGroupRepository = group_repo
        self._locks: AssignmentLockRegistry = locks or assignment_locks
        self._unit_state = threading.local()
