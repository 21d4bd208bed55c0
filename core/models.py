# core/models.py
from __future__ import annotations

from core.domain import (
    AssignmentGroup,
    DayAssignment,
    GroupPriority,
    ProjectAssignment,
    generate_id,
)

__all__ = [
    "generate_id",
    "GroupPriority",
    "ProjectAssignment",
    "DayAssignment",
    "AssignmentGroup",
]
