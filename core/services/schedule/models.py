from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from core.models import DayAssignment
from core.services.grouping.results import MergeOutcome, ReconcileOutcome


@dataclass
class DayChange:
    day: DayAssignment
    created: bool
    merge: MergeOutcome


@dataclass
class MoveOutcome:
    source_assignment_id: str
    target_assignment_id: str
    moved_days: int = 0
    skipped_dates: list[date] = field(default_factory=list)
    moved_group_ids: list[int] = field(default_factory=list)
    source: Optional[ReconcileOutcome] = None
    target: Optional[ReconcileOutcome] = None


__all__ = ["DayChange", "MoveOutcome"]
