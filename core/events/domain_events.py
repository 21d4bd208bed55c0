
""" Track changes to assignments, day rows and assignment groups."""
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.assignment_changed: Signal[str] = Signal()  # assignment_id
        self.days_changed: Signal[str] = Signal()        # assignment_id
        self.groups_changed: Signal[str] = Signal()      # assignment_id


# SINGLE global instance
domain_events = DomainEvents()
