from __future__ import annotations

import logging
from typing import Optional

from core.events.domain_events import domain_events
from core.interfaces import AssignmentGroupRepository, DayAssignmentRepository
from core.models import AssignmentGroup, DayAssignment
from core.services.grouping import AssignmentGroupService
from core.services.grouping.intervals import DateLike, as_date
from core.services.schedule.models import MoveOutcome

logger = logging.getLogger(__name__)


class ScheduleMoveMixin:
    _day_repo: DayAssignmentRepository
    _group_repo: AssignmentGroupRepository
    _groups: AssignmentGroupService

    def move_range(
        self,
        assignment_id: str,
        start: DateLike,
        end: DateLike,
        new_start: DateLike,
        target_assignment_id: Optional[str] = None,
    ) -> MoveOutcome:
        """
        Shift the days in [start, end] so the range begins at `new_start`,
        optionally onto another assignment. Groups lying wholly inside the
        range travel with their priority and comment.
        """
        start, end, new_start = as_date(start), as_date(end), as_date(new_start)
        self._validate_range(start, end)
        target_id = target_assignment_id or assignment_id
        offset = new_start - start
        outcome = MoveOutcome(source_assignment_id=assignment_id, target_assignment_id=target_id)

        with self._groups.consolidating(assignment_id, target_id):
            days = self._day_repo.list_between(assignment_id, start, end)
            if not days or (not offset and target_id == assignment_id):
                return outcome

            moving_groups = [
                g
                for g in self._group_repo.list_by_assignment(assignment_id)
                if start <= g.start_date and g.end_date <= end
            ]
            self._group_repo.delete_many(g.id for g in moving_groups)
            self._day_repo.delete_many(d.id for d in days)

            occupied = {d.date for d in self._day_repo.list_by_assignment(target_id)}
            old_dates = sorted({d.date for d in days})
            new_dates = []
            for day in days:
                shifted = day.date + offset
                if shifted in occupied:
                    outcome.skipped_dates.append(shifted)
                    continue
                occupied.add(shifted)
                self._day_repo.add(DayAssignment.create(target_id, shifted, day.comment))
                new_dates.append(shifted)
            outcome.moved_days = len(new_dates)

            for group in moving_groups:
                moved = AssignmentGroup.create(
                    target_id,
                    group.start_date + offset,
                    group.end_date + offset,
                    priority=group.priority,
                    comment=group.comment,
                )
                outcome.moved_group_ids.append(self._group_repo.add(moved))

            if target_id == assignment_id:
                outcome.target = self._groups.reconcile(
                    target_id, old_dates + new_dates, expand_adjacent=True
                )
            else:
                outcome.source = self._groups.reconcile(assignment_id, old_dates, expand_adjacent=False)
                outcome.target = self._groups.reconcile(target_id, new_dates, expand_adjacent=True)

        logger.info(
            "Moved %s days of assignment %s from %s..%s to %s on assignment %s",
            outcome.moved_days, assignment_id, start, end, new_start, target_id,
        )
        self._groups.publish(domain_events.days_changed, assignment_id)
        if target_id != assignment_id:
            self._groups.publish(domain_events.days_changed, target_id)
        return outcome
