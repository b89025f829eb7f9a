# Rev 1.0.0
"""Entities and their row mapping.

Rows are plain dicts keyed by column name; timestamps travel as ISO-8601
strings so any tabular backend can hold them.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from .statuses import DEFAULT_STATUS

WORK_ITEM_COLUMNS: Tuple[str, ...] = (
    "id",
    "parent_id",
    "name",
    "description",
    "status",
    "expect_time_spent",
    "total_time_spent",
    "created_at",
)

EVENT_COLUMNS: Tuple[str, ...] = (
    "id",
    "parent_id",
    "name",
    "description",
    "event_start",
    "event_end",
    "created_at",
)


def to_timestamp(value: Union[datetime, str, None]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def from_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parent_from_row(value: Any) -> Optional[str]:
    # blank cells come back as "" from spreadsheet-like stores
    return value if value else None


@dataclass
class WorkItem:
    """Shared shape of projects and tasks; each kind lives in its own table."""

    id: str
    name: str
    expect_time_spent: float
    created_at: datetime
    parent_id: Optional[str] = None
    description: str = ""
    status: str = DEFAULT_STATUS
    total_time_spent: float = 0

    def to_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "expect_time_spent": self.expect_time_spent,
            "total_time_spent": self.total_time_spent,
            "created_at": from_timestamp(self.created_at),
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "WorkItem":
        return cls(
            id=row["id"],
            parent_id=_parent_from_row(row.get("parent_id")),
            name=row["name"],
            description=row.get("description") or "",
            status=row.get("status") or DEFAULT_STATUS,
            expect_time_spent=row["expect_time_spent"],
            total_time_spent=row.get("total_time_spent") or 0,
            created_at=to_timestamp(row["created_at"]),
        )


@dataclass
class Project(WorkItem):
    """Top-level or nested container, ``P-`` id."""


@dataclass
class Task(WorkItem):
    """Unit of work, ``T-`` id."""


@dataclass
class CalendarEvent:
    id: str
    name: str
    event_start: datetime
    event_end: datetime
    created_at: datetime
    parent_id: Optional[str] = None
    description: str = ""

    def to_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "name": self.name,
            "description": self.description,
            "event_start": from_timestamp(self.event_start),
            "event_end": from_timestamp(self.event_end),
            "created_at": from_timestamp(self.created_at),
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "CalendarEvent":
        return cls(
            id=row["id"],
            parent_id=_parent_from_row(row.get("parent_id")),
            name=row["name"],
            description=row.get("description") or "",
            event_start=to_timestamp(row["event_start"]),
            event_end=to_timestamp(row["event_end"]),
            created_at=to_timestamp(row["created_at"]),
        )
