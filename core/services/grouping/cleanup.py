from __future__ import annotations

import logging
from typing import List

from core.events.domain_events import domain_events
from core.services.grouping.store import GroupStoreMixin, covers_any

logger = logging.getLogger(__name__)


class GroupCleanupMixin(GroupStoreMixin):
    def cleanup_orphans(self, assignment_id: str) -> List[int]:
        """Delete groups whose interval holds no live day. Returns deleted ids."""
        with self.consolidating(assignment_id):
            deleted = self._cleanup_orphans(assignment_id)
        if deleted:
            self.publish(domain_events.groups_changed, assignment_id)
        return deleted

    def _cleanup_orphans(self, assignment_id: str) -> List[int]:
        live = self._live_dates(assignment_id)
        orphaned = [
            g.id
            for g in self._sorted_groups(assignment_id)
            if not covers_any(live, g.start_date, g.end_date)
        ]
        if orphaned:
            logger.info("Removing orphaned groups %s of assignment %s", orphaned, assignment_id)
        return self._delete_groups(orphaned)


__all__ = ["GroupCleanupMixin"]
