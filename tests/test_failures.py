# tests/test_failures.py
# Backend errors never cross the store / service boundary
from __future__ import annotations

import sqlite3

import pytest

from sheettracker.app_context import AppContext
from sheettracker.models.children import Children
from sheettracker.models.entities import EVENT_COLUMNS, WORK_ITEM_COLUMNS
from sheettracker.repositories.row_store import InMemoryRowStore


class BrokenRowStore:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise sqlite3.OperationalError("disk I/O error")
        return fail


class FlakyDeleteRowStore(InMemoryRowStore):
    """Deletes fail for chosen ids."""

    def __init__(self, columns, failing_ids):
        super().__init__(columns)
        self.failing_ids = set(failing_ids)

    def delete_by_id(self, row_id):
        if row_id in self.failing_ids:
            raise OSError("sheet locked")
        return super().delete_by_id(row_id)


@pytest.fixture()
def broken():
    return AppContext.from_row_stores(BrokenRowStore(), BrokenRowStore(), BrokenRowStore())


def test_reads_fail_open(broken):
    assert broken.projects.get_all() == []
    assert broken.tasks.get_by_parent_id("P-1") == []
    assert broken.projects.get_by_status("Stuck") == []
    assert broken.events.get_by_id("CE-1") is None


def test_writes_return_sentinels(broken, when):
    assert broken.projects.add({"name": "p", "expect_time_spent": 1}) is None
    assert broken.tasks.update("T-1", {"name": "x"}) is None
    assert broken.events.add({"name": "e", "event_start": when(0), "event_end": when(1)}) is None
    assert broken.events.delete("CE-1") is False


def test_hierarchy_fails_open(broken):
    h = broken.hierarchy
    assert h.get_children_by_parent_id("P-1") == Children()
    assert h.get_all_descendants_by_parent_id("P-1") == Children()
    assert h.delete_project("P-1") is False
    assert h.remove_task("T-1") is False
    assert h.add_task({"name": "t", "expect_time_spent": 1, "parent_id": "P-1"}) is None


def test_cascade_is_best_effort_below_root(clock, when):
    project_rows = InMemoryRowStore(WORK_ITEM_COLUMNS)
    task_rows = FlakyDeleteRowStore(WORK_ITEM_COLUMNS, failing_ids=())
    ctx = AppContext.from_row_stores(project_rows, task_rows, InMemoryRowStore(EVENT_COLUMNS), clock=clock)
    h = ctx.hierarchy
    root = h.add_project({"name": "root", "expect_time_spent": 1})
    stuck = h.add_task({"name": "stuck", "expect_time_spent": 1, "parent_id": root.id})
    fine = h.add_task({"name": "fine", "expect_time_spent": 1, "parent_id": root.id})
    task_rows.failing_ids.add(stuck.id)

    assert h.delete_project(root.id) is True
    assert ctx.projects.get_by_id(root.id) is None
    assert ctx.tasks.get_by_id(fine.id) is None
    # the leaked descendant is still there; the result does not say so
    assert ctx.tasks.get_by_id(stuck.id) is not None


def test_root_delete_failure_reports_false(clock):
    project_rows = FlakyDeleteRowStore(WORK_ITEM_COLUMNS, failing_ids=())
    ctx = AppContext.from_row_stores(project_rows, InMemoryRowStore(WORK_ITEM_COLUMNS), InMemoryRowStore(EVENT_COLUMNS), clock=clock)
    root = ctx.hierarchy.add_project({"name": "root", "expect_time_spent": 1})
    project_rows.failing_ids.add(root.id)
    assert ctx.hierarchy.delete_project(root.id) is False
    assert ctx.hierarchy.remove_project(root.id) is False
    assert ctx.projects.get_by_id(root.id) is not None
