from __future__ import annotations

from datetime import date

from core.exceptions import InvalidRangeError, NotFoundError, ValidationError
from core.interfaces import AssignmentGroupRepository, DayAssignmentRepository
from core.models import AssignmentGroup, DayAssignment, GroupPriority


class ScheduleValidationMixin:
    _day_repo: DayAssignmentRepository
    _group_repo: AssignmentGroupRepository

    def _validate_range(self, start: date, end: date) -> None:
        if start > end:
            raise InvalidRangeError(
                f"Start date {start} is after end date {end}.", code="INVALID_RANGE"
            )

    def _validate_identity(self, value: str, label: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValidationError(f"{label} is required.")
        return value

    def _coerce_priority(self, priority: GroupPriority | str) -> GroupPriority:
        try:
            return GroupPriority(priority)
        except ValueError as exc:
            raise ValidationError(f"Unknown group priority: {priority!r}.") from exc

    def _require_day(self, day_id: int) -> DayAssignment:
        day = self._day_repo.get(day_id)
        if day is None:
            raise NotFoundError("Day assignment not found.", code="DAY_NOT_FOUND")
        return day

    def _require_group(self, group_id: int) -> AssignmentGroup:
        group = self._group_repo.get(group_id)
        if group is None:
            raise NotFoundError("Assignment group not found.", code="GROUP_NOT_FOUND")
        return group
