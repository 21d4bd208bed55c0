from __future__ import annotations

import logging
import threading
from bisect import bisect_left
from contextlib import contextmanager
from datetime import date
from typing import Any, Iterable, Iterator, List, Sequence

from sqlalchemy.orm import Session

from core.events.signal import Signal
from core.exceptions import NotFoundError
from core.interfaces import (
    AssignmentGroupRepository,
    DayAssignmentRepository,
    ProjectAssignmentRepository,
)
from core.models import AssignmentGroup, ProjectAssignment
from core.services.grouping.intervals import day_count
from core.services.grouping.locks import AssignmentLockRegistry

logger = logging.getLogger(__name__)


def pick_survivor(groups: Sequence[AssignmentGroup]) -> AssignmentGroup:
    """Most days wins; ties go to the earlier group, then to the lower id."""
    return min(
        groups,
        key=lambda g: (-day_count(g.start_date, g.end_date), g.start_date, g.id or 0),
    )


def covers_any(live_dates: Sequence[date], start: date, end: date) -> bool:
    """`live_dates` must be sorted."""
    idx = bisect_left(live_dates, start)
    return idx < len(live_dates) and live_dates[idx] <= end


class GroupStoreMixin:
    _session: Session
    _assignment_repo: ProjectAssignmentRepository
    _day_repo: DayAssignmentRepository
    _group_repo: AssignmentGroupRepository
    _locks: AssignmentLockRegistry
    _unit_state: threading.local

    def require_assignment(self, assignment_id: str) -> ProjectAssignment:
        assignment = self._assignment_repo.get(assignment_id)
        if assignment is None:
            raise NotFoundError("Project assignment not found.", code="ASSIGNMENT_NOT_FOUND")
        return assignment

    def member_lock(self, project_id: str, member_id: str):
        return self._locks.hold((project_id, member_id))

    def _unit(self) -> threading.local:
        state = self._unit_state
        if not hasattr(state, "depth"):
            state.depth = 0
            state.pending = []
        return state

    def publish(self, signal: Signal, *args: Any) -> None:
        """
        Emit a domain event, or hold it until the calling thread's outermost
        unit of work has committed. Held events are dropped on rollback.
        """
        unit = self._unit()
        if unit.depth == 0:
            signal.emit(*args)
            return
        if (signal, args) not in unit.pending:
            unit.pending.append((signal, args))

    @contextmanager
    def consolidating(self, *assignment_ids: str) -> Iterator[List[ProjectAssignment]]:
        """
        Lock the given assignments and run the block as one transaction.
        Nested use within a thread is allowed; only the outermost block
        commits, and a failure at any depth rolls the whole transaction back.
        """
        assignments = [self.require_assignment(aid) for aid in dict.fromkeys(assignment_ids)]
        unit = self._unit()
        outermost = unit.depth == 0
        with self._locks.hold(*(a.lock_key for a in assignments)):
            unit.depth += 1
            try:
                yield assignments
                if outermost:
                    self._session.commit()
            except Exception:
                self._session.rollback()
                unit.pending.clear()
                raise
            finally:
                unit.depth -= 1
        if outermost:
            pending, unit.pending = unit.pending, []
            for signal, args in pending:
                signal.emit(*args)

    def _live_dates(self, assignment_id: str) -> List[date]:
        return sorted({day.date for day in self._day_repo.list_by_assignment(assignment_id)})

    def _sorted_groups(self, assignment_id: str) -> List[AssignmentGroup]:
        groups = self._group_repo.list_by_assignment(assignment_id)
        return sorted(groups, key=lambda g: (g.start_date, g.id or 0))

    def _resize(self, group: AssignmentGroup, start: date, end: date) -> bool:
        if group.start_date == start and group.end_date == end:
            return False
        logger.debug(
            "Resizing group %s from %s..%s to %s..%s",
            group.id, group.start_date, group.end_date, start, end,
        )
        group.start_date = start
        group.end_date = end
        self._group_repo.update(group)
        return True

    def _delete_groups(self, group_ids: Iterable[int]) -> List[int]:
        ids = [gid for gid in group_ids if gid is not None]
        if ids:
            self._group_repo.delete_many(ids)
        return ids


__all__ = ["GroupStoreMixin", "pick_survivor", "covers_any"]
