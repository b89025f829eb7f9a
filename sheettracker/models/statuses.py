# Rev 1.0.0
"""Status sets shared by projects and tasks."""
from __future__ import annotations
from typing import Any, FrozenSet

DEFAULT_STATUS = "Not yet started"

_WORK_STATUSES = (
    "Not yet started",
    "Ahead of schedule",
    "On track",
    "Behind schedule",
    "Stuck",
    "Paused",
    "Completed",
)

VALID_PROJECT_STATUSES: FrozenSet[str] = frozenset(_WORK_STATUSES)
VALID_TASK_STATUSES: FrozenSet[str] = frozenset(_WORK_STATUSES)


def _is_member(value: Any, statuses: FrozenSet[str]) -> bool:
    return isinstance(value, str) and value in statuses


def is_valid_project_status(value: Any) -> bool:
    return _is_member(value, VALID_PROJECT_STATUSES)


def is_valid_task_status(value: Any) -> bool:
    return _is_member(value, VALID_TASK_STATUSES)
