from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import (
    AssignmentGroupRepository,
    DayAssignmentRepository,
    ProjectAssignmentRepository,
)
from core.services.grouping import AssignmentGroupService
from core.services.schedule.assignments import ScheduleAssignmentMixin
from core.services.schedule.days import ScheduleDayMixin
from core.services.schedule.groups import ScheduleGroupMixin
from core.services.schedule.move import ScheduleMoveMixin
from core.services.schedule.validation import ScheduleValidationMixin


class ScheduleService(
    ScheduleDayMixin,
    ScheduleMoveMixin,
    ScheduleGroupMixin,
    ScheduleAssignmentMixin,
    ScheduleValidationMixin,
):
    def __init__(
        self,
        session: Session,
        assignment_repo: ProjectAssignmentRepository,
        day_repo: DayAssignmentRepository,
        group_repo: AssignmentGroupRepository,
        group_service: AssignmentGroupService,
    ):
        self._session: Session = session
        self._assignment_repo: ProjectAssignmentRepository = assignment_repo
        self._day_repo: DayAssignmentRepository = day_repo
        self._group_repo: AssignmentGroupRepository = group_repo
        self._groups: AssignmentGroupService = group_service
