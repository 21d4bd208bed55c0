# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from core.models import AssignmentGroup, DayAssignment, ProjectAssignment


class ProjectAssignmentRepository(ABC):
    @abstractmethod
    def add(self, assignment: ProjectAssignment) -> None: ...

    @abstractmethod
    def get(self, assignment_id: str) -> Optional[ProjectAssignment]: ...

    @abstractmethod
    def delete(self, assignment_id: str) -> None: ...

    @abstractmethod
    def list_all(
        self, project_id: Optional[str] = None, member_id: Optional[str] = None
    ) -> List[ProjectAssignment]: ...

    @abstractmethod
    def list_by_project_member(self, project_id: str, member_id: str) -> List[ProjectAssignment]: ...


class DayAssignmentRepository(ABC):
    @abstractmethod
    def add(self, day: DayAssignment) -> int:
        """Insert the row and return the id assigned by the store."""

    @abstractmethod
    def get(self, day_id: int) -> Optional[DayAssignment]: ...

    @abstractmethod
    def update(self, day: DayAssignment) -> None: ...

    @abstractmethod
    def delete_many(self, day_ids: Iterable[int]) -> None: ...

    @abstractmethod
    def list_by_assignment(self, assignment_id: str) -> List[DayAssignment]: ...

    @abstractmethod
    def find(self, assignment_id: str, day: date) -> Optional[DayAssignment]: ...

    @abstractmethod
    def list_between(self, assignment_id: str, start: date, end: date) -> List[DayAssignment]: ...

    @abstractmethod
    def list_window(self, start: date, end: date) -> List[DayAssignment]:
        """Days of every assignment falling in [start, end]."""


class AssignmentGroupRepository(ABC):
    @abstractmethod
    def add(self, group: AssignmentGroup) -> int:
        """Insert the row and return the id assigned by the store."""

    @abstractmethod
    def get(self, group_id: int) -> Optional[AssignmentGroup]: ...

    @abstractmethod
    def update(self, group: AssignmentGroup) -> None: ...

    @abstractmethod
    def delete_many(self, group_ids: Iterable[int]) -> None: ...

    @abstractmethod
    def list_by_assignment(self, assignment_id: str) -> List[AssignmentGroup]: ...

    @abstractmethod
    def list_overlapping(self, start: date, end: date) -> List[AssignmentGroup]: ...


__all__ = [
    "ProjectAssignmentRepository",
    "DayAssignmentRepository",
    "AssignmentGroupRepository",
]
