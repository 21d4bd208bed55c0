from __future__ import annotations

from enum import Enum


class GroupPriority(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


__all__ = ["GroupPriority"]
