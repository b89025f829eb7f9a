# Rev 1.0.0
from __future__ import annotations
from typing import Any, Optional

from sheettracker.models.entities import WorkItem
from sheettracker.models.refs import EntityRef, is_valid_id


def resolve_parent(parent_id: Any, projects, tasks) -> Optional[WorkItem]:
    """Find the project or task ``parent_id`` points at; events never qualify."""
    if not is_valid_id(parent_id):
        return None
    ref = EntityRef.parse(parent_id)
    if ref is None:
        # unprefixed ids (imported rows): try both tables
        return projects.get_by_id(parent_id) or tasks.get_by_id(parent_id)
    if ref.kind == "project":
        return projects.get_by_id(parent_id)
    if ref.kind == "task":
        return tasks.get_by_id(parent_id)
    return None
