# main.py
import logging
import sys

from infra.db.base import ScopedSession, db_url
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import bind_trace_id, get_operational_support
from infra.services import build_service_graph

logger = logging.getLogger(__name__)


def build_services():
    run_migrations(db_url=db_url)
    return build_service_graph(ScopedSession)


def heal_all(services) -> dict:
    """Deduplicate days and rebuild groups for every assignment."""
    results = services.group_service.rebuild_all()
    changed = {aid: outcome for aid, outcome in results.items() if outcome.changed}
    summary = {
        "assignments": len(results),
        "changed": len(changed),
        "created_groups": sum(len(o.created_group_ids) for o in changed.values()),
        "merged_groups": sum(len(o.merged_group_ids) for o in changed.values()),
        "deleted_groups": sum(len(o.deleted_group_ids) for o in changed.values()),
    }
    logger.info(
        "Maintenance pass over %s assignments: %s changed (%s created, %s merged, %s deleted)",
        summary["assignments"],
        summary["changed"],
        summary["created_groups"],
        summary["merged_groups"],
        summary["deleted_groups"],
    )
    get_operational_support().emit_event(
        event_type="schedule.heal",
        message="Group maintenance pass finished",
        data=summary,
    )
    return summary


def main() -> int:
    setup_logging()
    with bind_trace_id():
        services = build_services()
        try:
            heal_all(services)
        finally:
            services.session.remove()
    return 0


if __name__ == "__main__":
    sys.exit(main())
