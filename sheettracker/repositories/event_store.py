# Rev 1.0.0
"""Calendar event store.

Events hang off a project or a task and never have children of their own.
Unlike the project/task stores this one resolves the parent itself before
writing, since no hierarchy rule beyond "parent exists" applies to a leaf.
"""
from __future__ import annotations
import dataclasses
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from sheettracker.models.entities import CalendarEvent
from sheettracker.models.refs import is_valid_id
from sheettracker.models.types import ID_PREFIXES
from sheettracker.repositories.base_store import EntityStore, is_non_blank
from sheettracker.repositories.parents import resolve_parent

UPDATABLE_FIELDS = ("name", "description", "event_start", "event_end", "parent_id")


def is_ordered(start: datetime, end: datetime) -> bool:
    """start <= end; a naive/aware mix cannot be ordered and counts as invalid."""
    try:
        return start <= end
    except TypeError:
        return False


class EventStore(EntityStore[CalendarEvent]):
    kind = "event"
    id_prefix = ID_PREFIXES["event"]
    entity_cls = CalendarEvent

    def __init__(self, rows, projects, tasks, **kwargs):
        super().__init__(rows, **kwargs)
        self._projects = projects
        self._tasks = tasks

    def _parent_exists(self, parent_id: Optional[str], action: str) -> bool:
        if parent_id is None:
            return True
        if resolve_parent(parent_id, self._projects, self._tasks) is None:
            self._log.warning(
                "Failed to %s event: parent with ID '%s' does not exist in either projects or tasks.",
                action, parent_id,
            )
            return False
        return True

    def add(self, data: Any) -> Optional[CalendarEvent]:
        if (
            not isinstance(data, Mapping)
            or not is_non_blank(data.get("name"))
            or not isinstance(data.get("event_start"), datetime)
            or not isinstance(data.get("event_end"), datetime)
        ):
            self._log.warning("Failed to add event: required fields (name, event_start, event_end) are missing or invalid.")
            return None
        # equal start and end is a valid zero-length event
        if not is_ordered(data["event_start"], data["event_end"]):
            self._log.warning("Failed to add event: event_start is later than event_end.")
            return None
        if not self._check_parent_shape(data, "add"):
            return None
        if not self._parent_exists(data.get("parent_id"), "add"):
            return None

        description = ""
        if "description" in data:
            if isinstance(data["description"], str):
                description = data["description"]
            else:
                self._log.warning("Invalid description provided, using empty string.")

        event = CalendarEvent(
            id=self._ids.new_id(self.id_prefix),
            parent_id=data.get("parent_id"),
            name=data["name"],
            description=description,
            event_start=data["event_start"],
            event_end=data["event_end"],
            created_at=self._clock.now(),
        )
        if self._append(event) is None:
            return None
        self._log.info(
            "Event added: ID = %s, Name = %s, Start = %s, End = %s",
            event.id, event.name, event.event_start, event.event_end,
        )
        return event

    def update(self, event_id: Any, patch: Any) -> Optional[CalendarEvent]:
        if not is_valid_id(event_id):
            self._log.warning("Invalid event id provided for update: %r", event_id)
            return None
        if not isinstance(patch, Mapping):
            self._log.warning("Invalid update data for event %s: it must be a mapping.", event_id)
            return None
        if "name" in patch and not is_non_blank(patch["name"]):
            self._log.warning("Failed to update event: invalid name %r.", patch["name"])
            return None
        if "description" in patch and not isinstance(patch["description"], str):
            self._log.warning("Failed to update event: invalid description %r.", patch["description"])
            return None
        for name in ("event_start", "event_end"):
            if name in patch and not isinstance(patch[name], datetime):
                self._log.warning("Failed to update event: %s must be a datetime.", name)
                return None
        if not self._check_parent_shape(patch, "update"):
            return None
        if "parent_id" in patch and not self._parent_exists(patch["parent_id"], "update"):
            return None

        current = self.get_by_id(event_id)
        if current is None:
            self._log.warning("Event with ID '%s' not found.", event_id)
            return None

        changes = {name: patch[name] for name in UPDATABLE_FIELDS if name in patch}
        updated = dataclasses.replace(current, **changes)
        # checked on the merged values so a one-sided patch cannot invert the range
        if not is_ordered(updated.event_start, updated.event_end):
            self._log.warning("Failed to update event %s: event_start is later than event_end.", event_id)
            return None
        row = updated.to_row()
        if not self._write_changes(event_id, {name: row[name] for name in changes}):
            return None
        self._log.info("Event updated: ID = %s (%s)", event_id, ", ".join(changes) or "no fields")
        return updated
