from __future__ import annotations

import logging
from datetime import date

from core.events.domain_events import domain_events
from core.models import AssignmentGroup
from core.services.grouping.intervals import DateLike, as_date, next_day, prev_day
from core.services.grouping.results import GroupBounds, SplitOutcome
from core.services.grouping.store import GroupStoreMixin

logger = logging.getLogger(__name__)


class GroupSplitMixin(GroupStoreMixin):
    def on_day_deleted(self, assignment_id: str, day: DateLike) -> SplitOutcome:
        day = as_date(day)
        with self.consolidating(assignment_id):
            outcome = self._split_on_day_deleted(assignment_id, day)
        if outcome.split or outcome.deleted_group_id or outcome.resized_group_id:
            self.publish(domain_events.groups_changed, assignment_id)
        return outcome

    def _split_on_day_deleted(self, assignment_id: str, day: date) -> SplitOutcome:
        group = next((g for g in self._sorted_groups(assignment_id) if g.contains(day)), None)
        if group is None:
            return SplitOutcome()
        if self._day_repo.find(assignment_id, day) is not None:
            # another row still schedules this date
            logger.warning("Day %s of assignment %s is still scheduled; group %s kept", day, assignment_id, group.id)
            return SplitOutcome()

        if group.start_date == group.end_date:
            self._delete_groups([group.id])
            logger.info("Deleted single-day group %s of assignment %s", group.id, assignment_id)
            return SplitOutcome(deleted_group_id=group.id)

        if day == group.start_date:
            self._resize(group, next_day(day), group.end_date)
            return SplitOutcome(resized_group_id=group.id)
        if day == group.end_date:
            self._resize(group, group.start_date, prev_day(day))
            return SplitOutcome(resized_group_id=group.id)

        left_end = prev_day(day)
        right_start = next_day(day)
        right = AssignmentGroup.create(
            assignment_id=assignment_id,
            start_date=right_start,
            end_date=group.end_date,
            priority=group.priority,
            comment=group.comment,
        )
        self._resize(group, group.start_date, left_end)
        self._group_repo.add(right)
        logger.info(
            "Split group %s of assignment %s at %s; new group %s",
            group.id, assignment_id, day, right.id,
        )
        return SplitOutcome(
            split=True,
            original_group_id=group.id,
            new_groups=[
                GroupBounds(group.id, group.start_date, left_end),
                GroupBounds(right.id, right_start, right.end_date),
            ],
        )


__all__ = ["GroupSplitMixin"]
