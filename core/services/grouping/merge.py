from __future__ import annotations

import logging
from datetime import date
from typing import List

from core.events.domain_events import domain_events
from core.models import AssignmentGroup
from core.services.grouping.intervals import DateLike, as_date, next_day, prev_day, run_containing
from core.services.grouping.results import MergeOutcome
from core.services.grouping.store import GroupStoreMixin, pick_survivor

logger = logging.getLogger(__name__)


class GroupMergeMixin(GroupStoreMixin):
    def on_day_added(self, assignment_id: str, day: DateLike) -> MergeOutcome:
        """
        Extend or bridge the groups around a newly scheduled day.

        A day with no group on either side stays ungrouped; only a batch
        reconcile or a rebuild creates default groups.
        """
        day = as_date(day)
        with self.consolidating(assignment_id):
            outcome = self._merge_on_day_added(assignment_id, day)
        self.publish(domain_events.groups_changed, assignment_id)
        return outcome

    def merge_adjacent_groups(self, assignment_id: str) -> List[int]:
        with self.consolidating(assignment_id):
            deleted = self._merge_adjacent_groups(assignment_id)
        if deleted:
            self.publish(domain_events.groups_changed, assignment_id)
        return deleted

    def expand_to_contiguous_days(self, group_id: int) -> bool:
        group = self._group_repo.get(group_id)
        if group is None:
            return False
        with self.consolidating(group.assignment_id):
            group = self._group_repo.get(group_id)
            changed = group is not None and self._expand_to_contiguous_days(group)
        if changed:
            self.publish(domain_events.groups_changed, group.assignment_id)
        return changed

    def _merge_on_day_added(self, assignment_id: str, day: date) -> MergeOutcome:
        groups = self._sorted_groups(assignment_id)
        if not groups:
            return MergeOutcome()

        containing = next((g for g in groups if g.contains(day)), None)
        if containing is not None:
            self._expand_to_contiguous_days(containing)
            swept = self._merge_adjacent_groups(assignment_id)
            return self._outcome_for(assignment_id, day, swept)

        before = next((g for g in groups if g.end_date == prev_day(day)), None)
        after = next((g for g in groups if g.start_date == next_day(day)), None)

        if before is not None and after is not None and before.id != after.id:
            survivor = pick_survivor([before, after])
            loser = after if survivor is before else before
            self._delete_groups([loser.id])
            self._resize(survivor, before.start_date, after.end_date)
            logger.info(
                "Bridged groups %s and %s of assignment %s at %s; %s survives",
                before.id, after.id, assignment_id, day, survivor.id,
            )
            self._expand_to_contiguous_days(survivor)
            swept = self._merge_adjacent_groups(assignment_id)
            outcome = self._outcome_for(assignment_id, day, swept)
            outcome.merged = True
            outcome.deleted_group_id = loser.id
            return outcome

        target = before or after
        if target is None:
            logger.debug("Day %s of assignment %s has no neighbouring group", day, assignment_id)
            return MergeOutcome()

        if target is before:
            self._resize(target, target.start_date, day)
        else:
            self._resize(target, day, target.end_date)
        self._expand_to_contiguous_days(target)
        swept = self._merge_adjacent_groups(assignment_id)
        return self._outcome_for(assignment_id, day, swept)

    def _outcome_for(self, assignment_id: str, day: date, swept: List[int]) -> MergeOutcome:
        final = next((g for g in self._sorted_groups(assignment_id) if g.contains(day)), None)
        outcome = MergeOutcome(merged=bool(swept), deleted_group_id=swept[0] if swept else None)
        if final is not None:
            outcome.surviving_group_id = final.id
            outcome.new_start_date = final.start_date
            outcome.new_end_date = final.end_date
        return outcome

    def _expand_to_contiguous_days(self, group: AssignmentGroup) -> bool:
        """Snap the group to the contiguous run(s) of live days it intersects."""
        bounds = run_containing(self._live_dates(group.assignment_id), group.start_date, group.end_date)
        if bounds is None:
            # orphaned; left for cleanup
            return False
        return self._resize(group, *bounds)

    def _merge_adjacent_groups(self, assignment_id: str) -> List[int]:
        """Merge touching or overlapping groups until none remain. Returns deleted ids."""
        deleted: List[int] = []
        while True:
            groups = self._sorted_groups(assignment_id)
            pair = next(
                (
                    (current, following)
                    for current, following in zip(groups, groups[1:])
                    if next_day(current.end_date) >= following.start_date
                ),
                None,
            )
            if pair is None:
                return deleted
            current, following = pair
            survivor = pick_survivor([current, following])
            loser = following if survivor is current else current
            start = min(current.start_date, following.start_date)
            end = max(current.end_date, following.end_date)
            self._delete_groups([loser.id])
            self._resize(survivor, start, end)
            logger.info(
                "Merged group %s into %s for assignment %s (%s..%s)",
                loser.id, survivor.id, assignment_id, start, end,
            )
            deleted.append(loser.id)


__all__ = ["GroupMergeMixin"]
