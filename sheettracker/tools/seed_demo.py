# Rev 1.0.0
"""
Developer seed: builds a small project/task/event hierarchy in the SQLite
database and prints children and descendants.

Usage:
    python -m sheettracker.tools.seed_demo [--db PATH]
"""
from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from sheettracker.app_context import AppContext
from sheettracker.models.children import count, merged_sorted_by_creation
from sheettracker.utils.config import resolve_db_path
from sheettracker.utils.logging_setup import setup_logging


def build_demo(ctx: AppContext) -> dict:
    h = ctx.hierarchy
    root = h.add_project({"name": "Home renovation", "expect_time_spent": 120, "description": "Demo root project."})
    kitchen = h.add_project({"name": "Kitchen", "expect_time_spent": 60, "parent_id": root.id, "status": "On track"})
    paint = h.add_task({"name": "Paint walls", "expect_time_spent": 8, "parent_id": kitchen.id})
    tiles = h.add_task({"name": "Order tiles", "expect_time_spent": 1, "parent_id": kitchen.id, "status": "Completed"})
    garden = h.add_task({"name": "Garden clean-up", "expect_time_spent": 6, "parent_id": root.id})
    start = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0) + timedelta(days=1)
    visit = h.add_event({
        "name": "Tile shop visit",
        "parent_id": tiles.id,
        "event_start": start,
        "event_end": start + timedelta(hours=1),
    })
    return {"root": root, "kitchen": kitchen, "paint": paint, "tiles": tiles, "garden": garden, "visit": visit}


def run_seed(db_path: Optional[Path] = None) -> None:
    ctx = AppContext.create(db_path or resolve_db_path())
    try:
        print("=== Creating demo hierarchy ===")
        made = build_demo(ctx)
        root = made["root"]

        print("=== Direct children of root ===")
        for item in merged_sorted_by_creation(ctx.hierarchy.get_children_by_parent_id(root.id)):
            print(f" - {item.id} {item.name} [{item.status}]")

        print("=== Descendants of root ===")
        descendants = ctx.hierarchy.get_all_descendants_by_parent_id(root.id)
        for item in merged_sorted_by_creation(descendants):
            print(f" - {item.id} {item.name} (parent {item.parent_id})")
        print(f"Descendant count: {count(descendants)}")

        print("=== Events under 'Order tiles' ===")
        for ev in ctx.events.get_by_parent_id(made["tiles"].id):
            print(f" - {ev.id} {ev.name} {ev.event_start:%Y-%m-%d %H:%M} → {ev.event_end:%H:%M}")
        print("=== Seed complete ===")
    finally:
        ctx.close()


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="sheettracker-seed", description="Seed a demo hierarchy")
    p.add_argument("--db", type=Path, default=None, help="Path to SQLite DB")
    ns = p.parse_args(argv)
    run_seed(ns.db)
    return 0


def run() -> int:
    """Console entry point: configure logging, then dispatch."""
    setup_logging()
    return main()


if __name__ == "__main__":
    raise SystemExit(run())
