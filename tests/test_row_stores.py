# tests/test_row_stores.py
# Both row store implementations against the same contract
from __future__ import annotations

import sqlite3

import pytest

from sheettracker.models.entities import EVENT_COLUMNS, WORK_ITEM_COLUMNS
from sheettracker.repositories.row_store import InMemoryRowStore
from sheettracker.repositories.sqlite_row_store import SQLiteRowStore


def _row(row_id: str, parent_id=None, status="On track") -> dict:
    return {
        "id": row_id,
        "parent_id": parent_id,
        "name": f"name {row_id}",
        "description": "",
        "status": status,
        "expect_time_spent": 1.0,
        "total_time_spent": 0.0,
        "created_at": "2024-01-01T00:00:00+00:00",
    }


@pytest.fixture(params=["memory", "sqlite"])
def rows(request, db):
    if request.param == "memory":
        return InMemoryRowStore(WORK_ITEM_COLUMNS)
    return SQLiteRowStore(db, "tasks", WORK_ITEM_COLUMNS)


def test_append_and_find_by_id(rows):
    rows.append(_row("T-1"))
    assert rows.find_by_id("T-1") == _row("T-1")
    assert rows.find_by_id("T-missing") is None


def test_find_all_keeps_insertion_order(rows):
    for rid in ("T-3", "T-1", "T-2"):
        rows.append(_row(rid))
    assert [r["id"] for r in rows.find_all()] == ["T-3", "T-1", "T-2"]


def test_find_by_field(rows):
    rows.append(_row("T-1", parent_id="P-1"))
    rows.append(_row("T-2", parent_id="P-2"))
    rows.append(_row("T-3", parent_id="P-1"))
    rows.append(_row("T-4"))
    assert [r["id"] for r in rows.find_by_field("parent_id", "P-1")] == ["T-1", "T-3"]
    assert [r["id"] for r in rows.find_by_field("parent_id", None)] == ["T-4"]
    assert rows.find_by_field("status", "Stuck") == []


def test_find_by_unknown_field_raises(rows):
    with pytest.raises(KeyError):
        rows.find_by_field("owner", "x")


def test_update_by_id(rows):
    rows.append(_row("T-1"))
    assert rows.update_by_id("T-1", {"name": "renamed", "parent_id": "P-7"}) is True
    row = rows.find_by_id("T-1")
    assert row["name"] == "renamed"
    assert row["parent_id"] == "P-7"
    assert row["status"] == "On track"
    assert rows.update_by_id("T-missing", {"name": "x"}) is False


def test_delete_by_id(rows):
    rows.append(_row("T-1"))
    rows.append(_row("T-2"))
    assert rows.delete_by_id("T-1") is True
    assert rows.delete_by_id("T-1") is False
    assert [r["id"] for r in rows.find_all()] == ["T-2"]


def test_returned_rows_are_copies():
    rows = InMemoryRowStore(WORK_ITEM_COLUMNS)
    rows.append(_row("T-1"))
    found = rows.find_by_id("T-1")
    found["name"] = "mutated"
    assert rows.find_by_id("T-1")["name"] == "name T-1"


def test_in_memory_rejects_duplicate_ids():
    rows = InMemoryRowStore(WORK_ITEM_COLUMNS)
    rows.append(_row("T-1"))
    with pytest.raises(ValueError):
        rows.append(_row("T-1"))
    assert len(rows) == 1


def test_sqlite_duplicate_id_raises(db):
    rows = SQLiteRowStore(db, "projects", WORK_ITEM_COLUMNS)
    rows.append(_row("P-1"))
    with pytest.raises(sqlite3.IntegrityError):
        rows.append(_row("P-1"))


def test_sqlite_accepts_raw_connection(db):
    rows = SQLiteRowStore(db.conn, "calendar_events", EVENT_COLUMNS)
    assert rows.find_all() == []


def test_sqlite_rejects_unusable_handle():
    rows = SQLiteRowStore(object(), "projects", WORK_ITEM_COLUMNS)
    with pytest.raises(RuntimeError):
        rows.find_all()
