from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List

from core.events.domain_events import domain_events
from core.models import DayAssignment, ProjectAssignment
from core.services.grouping.intervals import DateLike, as_date, contiguous_runs, next_day, prev_day
from core.services.grouping.results import ReconcileOutcome
from core.services.grouping.store import GroupStoreMixin

logger = logging.getLogger(__name__)


class GroupReconcileMixin(GroupStoreMixin):
    def reconcile(
        self,
        assignment_id: str,
        touched_dates: Iterable[DateLike],
        expand_adjacent: bool = False,
    ) -> ReconcileOutcome:
        """
        Bring an assignment back to a consistent state after a batch change.

        With `expand_adjacent`, other assignments of the same project and
        member that hold days within one day of the touched dates are folded
        into this one first.
        """
        touched = sorted({as_date(d) for d in touched_dates})
        with self.consolidating(assignment_id) as (assignment,):
            outcome = self._reconcile(assignment, touched, expand_adjacent)
        for absorbed_id in outcome.absorbed_assignment_ids:
            self.publish(domain_events.assignment_changed, absorbed_id)
        self.publish(domain_events.groups_changed, assignment_id)
        return outcome

    def _reconcile(
        self,
        assignment: ProjectAssignment,
        touched: List[date],
        expand_adjacent: bool,
    ) -> ReconcileOutcome:
        outcome = ReconcileOutcome(assignment_id=assignment.id)
        outcome.duplicates_removed = self._remove_duplicate_days(assignment.id)

        if expand_adjacent and touched:
            transferred = self._absorb_siblings(assignment, touched, outcome)
            if transferred:
                touched = sorted(set(touched) | set(transferred))
                outcome.duplicates_removed += self._remove_duplicate_days(assignment.id)

        live = set(self._live_dates(assignment.id))
        for run_start, _ in contiguous_runs(d for d in touched if d in live):
            merge = self._merge_on_day_added(assignment.id, run_start)
            if merge.merged and merge.deleted_group_id is not None:
                outcome.merged_group_ids.append(merge.deleted_group_id)
        outcome.merged_group_ids.extend(self._merge_adjacent_groups(assignment.id))

        rebuild = self._rebuild(assignment.id)
        outcome.created_group_ids.extend(rebuild.created_group_ids)
        outcome.merged_group_ids.extend(rebuild.merged_group_ids)
        outcome.deleted_group_ids.extend(rebuild.deleted_group_ids)
        logger.info(
            "Reconciled assignment %s: %s duplicates, %s absorbed, %s groups created, %s merged, %s deleted",
            assignment.id,
            outcome.duplicates_removed,
            len(outcome.absorbed_assignment_ids),
            len(outcome.created_group_ids),
            len(outcome.merged_group_ids),
            len(outcome.deleted_group_ids),
        )
        return outcome

    def _absorb_siblings(
        self,
        assignment: ProjectAssignment,
        touched: List[date],
        outcome: ReconcileOutcome,
    ) -> List[date]:
        """Move every day of nearby sibling assignments into `assignment`, then drop the siblings."""
        window_start = prev_day(touched[0])
        window_end = next_day(touched[-1])
        transferred: List[date] = []
        siblings = self._assignment_repo.list_by_project_member(assignment.project_id, assignment.member_id)
        for sibling in siblings:
            if sibling.id == assignment.id:
                continue
            if not self._day_repo.list_between(sibling.id, window_start, window_end):
                continue
            days = self._day_repo.list_by_assignment(sibling.id)
            for day in days:
                self._day_repo.add(DayAssignment.create(assignment.id, day.date, day.comment))
                transferred.append(day.date)
            self._assignment_repo.delete(sibling.id)
            outcome.absorbed_assignment_ids.append(sibling.id)
            outcome.transferred_days += len(days)
            logger.info(
                "Absorbed assignment %s (%s days) into %s", sibling.id, len(days), assignment.id
            )
        return transferred


__all__ = ["GroupReconcileMixin"]
