from core.services.schedule.models import DayChange, MoveOutcome
from core.services.schedule.service import ScheduleService

__all__ = ["ScheduleService", "DayChange", "MoveOutcome"]
