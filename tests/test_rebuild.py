from __future__ import annotations

from conftest import bounds, d, span_of

from core.models import GroupPriority


def test_rebuild_creates_default_groups_for_uncovered_runs(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    seed.days(pa.id, 1, 2, 4)

    outcome = gs.rebuild_from_scratch(pa.id)

    assert len(outcome.created_group_ids) == 2
    assert bounds(services, pa.id) == [span_of(1, 2), span_of(4, 4)]
    assert {g.priority for g in services["group_repo"].list_by_assignment(pa.id)} == {GroupPriority.NORMAL}


def test_rebuild_keeps_largest_touching_group(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    seed.days(pa.id, 1, 2, 3, 4, 5, 6)
    small = seed.group(pa.id, 1, 1, comment="small")
    large = seed.group(pa.id, 3, 5, comment="large")

    outcome = gs.rebuild_from_scratch(pa.id)

    groups = services["group_repo"].list_by_assignment(pa.id)
    assert [g.id for g in groups] == [large.id]
    assert (groups[0].start_date, groups[0].end_date) == span_of(1, 6)
    assert outcome.merged_group_ids == [small.id]
    assert outcome.resized_group_ids == [large.id]


def test_rebuild_copies_a_group_spanning_a_gap(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    seed.days(pa.id, 1, 2, 5, 6)
    group = seed.group(pa.id, 1, 6, priority=GroupPriority.LOW, comment="span")

    outcome = gs.rebuild_from_scratch(pa.id)

    groups = services["group_repo"].list_by_assignment(pa.id)
    assert [(g.start_date, g.end_date) for g in groups] == [span_of(1, 2), span_of(5, 6)]
    assert groups[0].id == group.id
    assert groups[1].id in outcome.created_group_ids
    assert all(g.priority == GroupPriority.LOW and g.comment == "span" for g in groups)


def test_rebuild_deletes_orphans_and_is_stable(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    seed.days(pa.id, 1, 2)
    seed.group(pa.id, 1, 2)
    orphan = seed.group(pa.id, 8, 9)

    outcome = gs.rebuild_from_scratch(pa.id)

    assert outcome.deleted_group_ids == [orphan.id]
    assert bounds(services, pa.id) == [span_of(1, 2)]
    assert gs.rebuild_from_scratch(pa.id).changed is False


def test_rebuild_of_assignment_without_days_removes_everything(services, seed):
    gs = services["group_service"]
    pa = seed.assignment()
    seed.group(pa.id, 1, 3)

    gs.rebuild_from_scratch(pa.id)

    assert services["group_repo"].list_by_assignment(pa.id) == []


def test_rebuild_all_heals_every_assignment(services, seed):
    gs = services["group_service"]
    first = seed.assignment(member_id="member-1")
    second = seed.assignment(member_id="member-2")
    seed.days(first.id, 1, 2, 2, 3)
    seed.group(first.id, 1, 1)
    seed.group(first.id, 2, 3)
    seed.days(second.id, 5)

    results = gs.rebuild_all()

    assert set(results) == {first.id, second.id}
    assert bounds(services, first.id) == [span_of(1, 3)]
    assert bounds(services, second.id) == [span_of(5, 5)]
    assert len(services["day_repo"].list_by_assignment(first.id)) == 3
    assert all(not outcome.changed for outcome in gs.rebuild_all().values())
