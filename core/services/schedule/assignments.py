from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError
from core.interfaces import ProjectAssignmentRepository
from core.models import ProjectAssignment
from core.services.grouping import AssignmentGroupService

logger = logging.getLogger(__name__)


class ScheduleAssignmentMixin:
    _session: Session
    _assignment_repo: ProjectAssignmentRepository
    _groups: AssignmentGroupService

    def assign_member(self, project_id: str, member_id: str) -> ProjectAssignment:
        project_id = self._validate_identity(project_id, "Project id")
        member_id = self._validate_identity(member_id, "Member id")
        assignment = ProjectAssignment.create(project_id, member_id)
        with self._groups.member_lock(project_id, member_id):
            if self._assignment_repo.list_by_project_member(project_id, member_id):
                raise BusinessRuleError(
                    "Member is already assigned to this project.", code="ASSIGNMENT_EXISTS"
                )
            try:
                self._assignment_repo.add(assignment)
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise
        logger.info("Assigned member %s to project %s (%s)", member_id, project_id, assignment.id)
        self._groups.publish(domain_events.assignment_changed, assignment.id)
        return assignment

    def unassign(self, assignment_id: str) -> None:
        with self._groups.consolidating(assignment_id):
            self._assignment_repo.delete(assignment_id)
        logger.info("Removed assignment %s with its days and groups", assignment_id)
        self._groups.publish(domain_events.assignment_changed, assignment_id)

    def get_assignment(self, assignment_id: str) -> ProjectAssignment:
        return self._groups.require_assignment(assignment_id)

    def list_assignments(
        self, project_id: Optional[str] = None, member_id: Optional[str] = None
    ) -> List[ProjectAssignment]:
        """All assignments, optionally narrowed to one project and/or one member."""
        if project_id is not None:
            project_id = self._validate_identity(project_id, "Project id")
        if member_id is not None:
            member_id = self._validate_identity(member_id, "Member id")
        return self._assignment_repo.list_all(project_id=project_id, member_id=member_id)
