# tests/test_end_to_end.py
from __future__ import annotations

from sheettracker.app_context import AppContext
from sheettracker.models.children import count, merged_sorted_by_creation
from sheettracker.tools.seed_demo import build_demo


def test_project_task_event_lifecycle(ctx, when):
    h = ctx.hierarchy
    p = h.add_project({"name": "P", "expect_time_spent": 10})
    t = h.add_task({"name": "T", "expect_time_spent": 3, "parent_id": p.id})
    e = h.add_event({"name": "E", "parent_id": t.id, "event_start": when(0), "event_end": when(2)})
    assert p and t and e

    descendants = h.get_all_descendants_by_parent_id(p.id)
    assert descendants.projects == ()
    assert [x.id for x in descendants.tasks] == [t.id]
    assert count(descendants) == 1

    assert h.delete_project(p.id) is True
    assert ctx.projects.get_by_id(p.id) is None
    assert ctx.tasks.get_by_id(t.id) is None
    assert ctx.events.get_by_id(e.id) is None


def test_sqlite_data_survives_reopen(tmp_path, clock):
    path = tmp_path / "persist.db"
    first = AppContext.create(path, clock=clock)
    try:
        made = build_demo(first)
    finally:
        first.close()

    second = AppContext.create(path)
    try:
        root = made["root"]
        assert second.projects.get_by_id(root.id) == root
        names = [i.name for i in merged_sorted_by_creation(second.hierarchy.get_all_descendants_by_parent_id(root.id))]
        assert names == ["Kitchen", "Paint walls", "Order tiles", "Garden clean-up"]
        assert [e.name for e in second.events.get_by_parent_id(made["tiles"].id)] == ["Tile shop visit"]
    finally:
        second.close()
