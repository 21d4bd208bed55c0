from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass
class MergeOutcome:
    merged: bool = False
    surviving_group_id: Optional[int] = None
    deleted_group_id: Optional[int] = None
    new_start_date: Optional[date] = None
    new_end_date: Optional[date] = None


@dataclass
class GroupBounds:
    id: int
    start_date: date
    end_date: date


@dataclass
class SplitOutcome:
    split: bool = False
    original_group_id: Optional[int] = None
    new_groups: list[GroupBounds] = field(default_factory=list)
    deleted_group_id: Optional[int] = None
    resized_group_id: Optional[int] = None


@dataclass
class RebuildOutcome:
    created_group_ids: list[int] = field(default_factory=list)
    resized_group_ids: list[int] = field(default_factory=list)
    merged_group_ids: list[int] = field(default_factory=list)
    deleted_group_ids: list[int] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(
            self.created_group_ids
            or self.resized_group_ids
            or self.merged_group_ids
            or self.deleted_group_ids
        )


@dataclass
class ReconcileOutcome:
    assignment_id: str
    duplicates_removed: int = 0
    absorbed_assignment_ids: list[str] = field(default_factory=list)
    transferred_days: int = 0
    merged_group_ids: list[int] = field(default_factory=list)
    created_group_ids: list[int] = field(default_factory=list)
    deleted_group_ids: list[int] = field(default_factory=list)


__all__ = [
    "MergeOutcome",
    "GroupBounds",
    "SplitOutcome",
    "RebuildOutcome",
    "ReconcileOutcome",
]
