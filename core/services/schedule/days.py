from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import ValidationError
from core.interfaces import DayAssignmentRepository
from core.models import DayAssignment
from core.services.grouping import AssignmentGroupService, ReconcileOutcome, SplitOutcome
from core.services.grouping.intervals import DateLike, as_date
from core.services.schedule.models import DayChange

logger = logging.getLogger(__name__)


class ScheduleDayMixin:
    _session: Session
    _day_repo: DayAssignmentRepository
    _groups: AssignmentGroupService

    def add_day(self, assignment_id: str, day: DateLike, comment: Optional[str] = None) -> DayChange:
        day = as_date(day)
        with self._groups.consolidating(assignment_id):
            row = self._day_repo.find(assignment_id, day)
            created = row is None
            if created:
                row = DayAssignment.create(assignment_id, day, comment)
                self._day_repo.add(row)
                logger.info("Scheduled assignment %s on %s", assignment_id, day)
            merge = self._groups.on_day_added(assignment_id, day)
        self._groups.publish(domain_events.days_changed, assignment_id)
        return DayChange(day=row, created=created, merge=merge)

    def remove_day(self, day_id: int) -> SplitOutcome:
        day = self._require_day(day_id)
        with self._groups.consolidating(day.assignment_id):
            self._day_repo.delete_many([day.id])
            outcome = self._groups.on_day_deleted(day.assignment_id, day.date)
        logger.info("Removed day %s (%s) from assignment %s", day.id, day.date, day.assignment_id)
        self._groups.publish(domain_events.days_changed, day.assignment_id)
        return outcome

    def update_day_comment(self, day_id: int, comment: Optional[str]) -> DayAssignment:
        day = self._require_day(day_id)
        day.comment = (comment or "").strip() or None
        with self._groups.consolidating(day.assignment_id):
            self._day_repo.update(day)
        self._groups.publish(domain_events.days_changed, day.assignment_id)
        return day

    def add_days(
        self,
        assignment_id: str,
        days: Iterable[DateLike],
        comment: Optional[str] = None,
    ) -> ReconcileOutcome:
        dates = sorted({as_date(d) for d in days})
        if not dates:
            raise ValidationError("At least one date is required.")
        with self._groups.consolidating(assignment_id):
            existing = {d.date for d in self._day_repo.list_by_assignment(assignment_id)}
            added = [d for d in dates if d not in existing]
            for day in added:
                self._day_repo.add(DayAssignment.create(assignment_id, day, comment))
            logger.info("Scheduled %s new days on assignment %s", len(added), assignment_id)
            outcome = self._groups.reconcile(assignment_id, dates, expand_adjacent=True)
        self._groups.publish(domain_events.days_changed, assignment_id)
        return outcome

    def remove_days(self, day_ids: Iterable[int]) -> Dict[str, ReconcileOutcome]:
        rows = [self._require_day(day_id) for day_id in dict.fromkeys(day_ids)]
        by_assignment: Dict[str, List[DayAssignment]] = defaultdict(list)
        for row in rows:
            by_assignment[row.assignment_id].append(row)

        results: Dict[str, ReconcileOutcome] = {}
        for assignment_id, assignment_rows in by_assignment.items():
            with self._groups.consolidating(assignment_id):
                self._day_repo.delete_many(r.id for r in assignment_rows)
                results[assignment_id] = self._groups.reconcile(
                    assignment_id, [r.date for r in assignment_rows], expand_adjacent=False
                )
            logger.info("Removed %s days from assignment %s", len(assignment_rows), assignment_id)
            self._groups.publish(domain_events.days_changed, assignment_id)
        return results

    def list_days(self, assignment_id: str) -> List[DayAssignment]:
        self._groups.require_assignment(assignment_id)
        return self._day_repo.list_by_assignment(assignment_id)

    def list_days_between(self, start: DateLike, end: DateLike) -> List[DayAssignment]:
        start, end = as_date(start), as_date(end)
        self._validate_range(start, end)
        return self._day_repo.list_window(start, end)
