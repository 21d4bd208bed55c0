from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from core.events.domain_events import domain_events
from core.exceptions import OverlappingGroupError
from core.interfaces import AssignmentGroupRepository
from core.models import AssignmentGroup, GroupPriority
from core.services.grouping import AssignmentGroupService
from core.services.grouping.intervals import DateLike, as_date, overlaps

logger = logging.getLogger(__name__)


class ScheduleGroupMixin:
    _group_repo: AssignmentGroupRepository
    _groups: AssignmentGroupService

    def create_group(
        self,
        assignment_id: str,
        start: DateLike,
        end: DateLike,
        priority: GroupPriority | str = GroupPriority.NORMAL,
        comment: Optional[str] = None,
    ) -> AssignmentGroup:
        start, end = as_date(start), as_date(end)
        self._validate_range(start, end)
        priority = self._coerce_priority(priority)
        with self._groups.consolidating(assignment_id):
            existing = self._overlapping_group(assignment_id, start, end)
            if existing is not None:
                raise OverlappingGroupError(
                    f"Group {existing.id} already covers part of {start}..{end}.",
                    existing_group_id=existing.id,
                )
            group = AssignmentGroup.create(
                assignment_id, start, end, priority=priority, comment=(comment or "").strip() or None
            )
            self._group_repo.add(group)
        logger.info("Created group %s for assignment %s (%s..%s)", group.id, assignment_id, start, end)
        self._groups.publish(domain_events.groups_changed, assignment_id)
        return group

    def update_group(
        self,
        group_id: int,
        priority: GroupPriority | str | None = None,
        comment: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> AssignmentGroup:
        """
        Change a group's metadata. `comment=None` leaves it as is; an empty
        string clears it. Bounds are owned by the days and cannot be edited.
        """
        group = self._require_group(group_id)
        with self._groups.consolidating(group.assignment_id):
            if expected_version is not None:
                group.version = expected_version
            if priority is not None:
                group.priority = self._coerce_priority(priority)
            if comment is not None:
                group.comment = comment.strip() or None
            self._group_repo.update(group)
        self._groups.publish(domain_events.groups_changed, group.assignment_id)
        return group

    def delete_group(self, group_id: int) -> None:
        group = self._require_group(group_id)
        with self._groups.consolidating(group.assignment_id):
            self._group_repo.delete_many([group.id])
        logger.info("Deleted group %s of assignment %s", group.id, group.assignment_id)
        self._groups.publish(domain_events.groups_changed, group.assignment_id)

    def save_group(
        self,
        assignment_id: str,
        start: DateLike,
        end: DateLike,
        priority: GroupPriority | str = GroupPriority.NORMAL,
        comment: Optional[str] = None,
    ) -> AssignmentGroup:
        """Update the metadata of the group overlapping [start, end], or create one."""
        start, end = as_date(start), as_date(end)
        self._validate_range(start, end)
        with self._groups.consolidating(assignment_id):
            existing = self._overlapping_group(assignment_id, start, end)
            if existing is None:
                return self.create_group(assignment_id, start, end, priority, comment)
            return self.update_group(existing.id, priority=priority, comment=comment or "")

    def list_groups(self, start: DateLike, end: DateLike) -> List[AssignmentGroup]:
        start, end = as_date(start), as_date(end)
        self._validate_range(start, end)
        return self._group_repo.list_overlapping(start, end)

    def list_assignment_groups(self, assignment_id: str) -> List[AssignmentGroup]:
        self._groups.require_assignment(assignment_id)
        return self._group_repo.list_by_assignment(assignment_id)

    def _overlapping_group(self, assignment_id: str, start: date, end: date) -> Optional[AssignmentGroup]:
        return next(
            (
                g
                for g in self._group_repo.list_by_assignment(assignment_id)
                if overlaps(g.start_date, g.end_date, start, end)
            ),
            None,
        )
