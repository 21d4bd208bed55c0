from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError
from core.models import AssignmentGroup
from core.services.grouping.intervals import contiguous_runs, overlaps
from core.services.grouping.results import RebuildOutcome
from core.services.grouping.store import GroupStoreMixin, pick_survivor

logger = logging.getLogger(__name__)


class GroupRebuildMixin(GroupStoreMixin):
    def rebuild_from_scratch(self, assignment_id: str) -> RebuildOutcome:
        """
        Recompute the assignment's groups from its live days.

        Every maximal run of days ends up covered by exactly one group. Where
        existing groups touch a run the largest one is kept (and its priority
        and comment with it); runs no group touches get a default group.
        """
        with self.consolidating(assignment_id):
            outcome = self._rebuild(assignment_id)
        if outcome.changed:
            self.publish(domain_events.groups_changed, assignment_id)
        return outcome

    def rebuild_all(self) -> Dict[str, RebuildOutcome]:
        """Deduplicate and rebuild every assignment, one transaction each."""
        results: Dict[str, RebuildOutcome] = {}
        for assignment in self._assignment_repo.list_all():
            try:
                with self.consolidating(assignment.id):
                    removed = self._remove_duplicate_days(assignment.id)
                    outcome = self._rebuild(assignment.id)
            except NotFoundError:
                logger.info("Assignment %s vanished before its rebuild", assignment.id)
                continue
            if removed or outcome.changed:
                self.publish(domain_events.groups_changed, assignment.id)
            results[assignment.id] = outcome
        logger.info("Rebuilt groups for %s assignments", len(results))
        return results

    def _remove_duplicate_days(self, assignment_id: str) -> int:
        """Keep the lowest-id row for every date; returns the number removed."""
        seen = set()
        duplicates: List[int] = []
        for day in self._day_repo.list_by_assignment(assignment_id):
            if day.date in seen:
                duplicates.append(day.id)
            else:
                seen.add(day.date)
        if duplicates:
            logger.warning(
                "Removing %s duplicate day rows from assignment %s", len(duplicates), assignment_id
            )
            self._day_repo.delete_many(duplicates)
        return len(duplicates)

    def _rebuild(self, assignment_id: str) -> RebuildOutcome:
        outcome = RebuildOutcome()
        runs = contiguous_runs(self._live_dates(assignment_id))
        groups = self._sorted_groups(assignment_id)

        # decide against the bounds as loaded, before anything is resized
        plan: List[Tuple[Tuple, Optional[AssignmentGroup]]] = []
        touching_any = set()
        for run_start, run_end in runs:
            touching = [g for g in groups if overlaps(g.start_date, g.end_date, run_start, run_end)]
            touching_any.update(g.id for g in touching)
            plan.append(((run_start, run_end), pick_survivor(touching) if touching else None))

        kept = {survivor.id for _, survivor in plan if survivor is not None}
        outcome.merged_group_ids = self._delete_groups(
            g.id for g in groups if g.id in touching_any and g.id not in kept
        )

        claimed = set()
        for (run_start, run_end), survivor in plan:
            if survivor is None:
                created = AssignmentGroup.create(assignment_id, run_start, run_end)
                outcome.created_group_ids.append(self._group_repo.add(created))
            elif survivor.id in claimed:
                # one group spanned several runs; later runs get a copy
                copy = AssignmentGroup.create(
                    assignment_id,
                    run_start,
                    run_end,
                    priority=survivor.priority,
                    comment=survivor.comment,
                )
                outcome.created_group_ids.append(self._group_repo.add(copy))
            else:
                claimed.add(survivor.id)
                if self._resize(survivor, run_start, run_end):
                    outcome.resized_group_ids.append(survivor.id)

        outcome.deleted_group_ids = self._cleanup_orphans(assignment_id)
        if outcome.changed:
            logger.info(
                "Rebuilt assignment %s: created=%s resized=%s merged=%s deleted=%s",
                assignment_id,
                outcome.created_group_ids,
                outcome.resized_group_ids,
                outcome.merged_group_ids,
                outcome.deleted_group_ids,
            )
        return outcome


__all__ = ["GroupRebuildMixin"]
