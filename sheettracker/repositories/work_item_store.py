# Rev 1.0.0
"""Project and task stores.

Both kinds share one row shape. Parent ids are only checked for shape here;
whether the parent exists (and whether a re-parent would close a loop) is
decided by the hierarchy service before it calls in.
"""
from __future__ import annotations
import dataclasses
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

from sheettracker.models.entities import Project, Task, WorkItem
from sheettracker.models.refs import is_valid_id
from sheettracker.models.types import ID_PREFIXES
from sheettracker.models.statuses import (
    DEFAULT_STATUS,
    is_valid_project_status,
    is_valid_task_status,
)
from sheettracker.repositories.base_store import EntityStore, is_non_blank, is_time_amount

UPDATABLE_FIELDS = (
    "name",
    "description",
    "status",
    "expect_time_spent",
    "total_time_spent",
    "parent_id",
)


class WorkItemStore(EntityStore[WorkItem]):
    @staticmethod
    def _is_valid_status(value: Any) -> bool:
        raise NotImplementedError

    # ---------- create ----------

    def add(self, data: Any) -> Optional[WorkItem]:
        """
        Create a row from ``data``.

        Required: ``name`` (non-blank str), ``expect_time_spent`` (number >= 0).
        Optional: ``parent_id``, ``description`` (default ""), ``status``
        (default "Not yet started"), ``total_time_spent`` (default 0).
        A bad optional value falls back to its default with a warning; a bad
        required value or parent id rejects the whole add.
        """
        if (
            not isinstance(data, Mapping)
            or not is_non_blank(data.get("name"))
            or not is_time_amount(data.get("expect_time_spent"))
        ):
            self._log.warning(
                "Failed to add %s: required fields (name, expect_time_spent) are missing or invalid.",
                self.kind,
            )
            return None
        if not self._check_parent_shape(data, "add"):
            return None

        description = ""
        if "description" in data:
            if isinstance(data["description"], str):
                description = data["description"]
            else:
                self._log.warning("Invalid description provided, using empty string.")

        status = DEFAULT_STATUS
        if "status" in data:
            if self._is_valid_status(data["status"]):
                status = data["status"]
            else:
                self._log.warning("Invalid status provided (%r), using %r.", data["status"], DEFAULT_STATUS)

        total_time_spent = 0
        if "total_time_spent" in data:
            if is_time_amount(data["total_time_spent"]):
                total_time_spent = data["total_time_spent"]
            else:
                self._log.warning("Invalid total_time_spent provided (%r), using 0.", data["total_time_spent"])

        item = self.entity_cls(
            id=self._ids.new_id(self.id_prefix),
            parent_id=data.get("parent_id"),
            name=data["name"],
            description=description,
            status=status,
            expect_time_spent=data["expect_time_spent"],
            total_time_spent=total_time_spent,
            created_at=self._clock.now(),
        )
        if self._append(item) is None:
            return None
        self._log.info(
            "%s added: ID = %s, Name = %s, Status = %s, Parent = %s",
            self.kind.capitalize(), item.id, item.name, item.status, item.parent_id,
        )
        return item

    # ---------- reads ----------

    def get_by_status(self, status: Any) -> List[WorkItem]:
        if not self._is_valid_status(status):
            self._log.error("Invalid %s status provided: %r", self.kind, status)
            return []
        return self._read_many(
            lambda: self._rows.find_by_field("status", status),
            f"get {self.kind}s by status",
        )

    # ---------- update ----------

    def _validate_patch(self, patch: Mapping) -> bool:
        checks: dict[str, Callable[[Any], bool]] = {
            "name": is_non_blank,
            "description": lambda v: isinstance(v, str),
            "status": self._is_valid_status,
            "expect_time_spent": is_time_amount,
            "total_time_spent": is_time_amount,
            "parent_id": lambda v: v is None or is_valid_id(v),
        }
        for name, check in checks.items():
            if name in patch and not check(patch[name]):
                self._log.warning("Failed to update %s: invalid %s %r.", self.kind, name, patch[name])
                return False
        return True

    def update(self, item_id: Any, patch: Any) -> Optional[WorkItem]:
        """Partial update; any invalid field rejects the whole patch. Unknown keys are ignored."""
        if not is_valid_id(item_id):
            self._log.warning("Invalid %s id provided for update: %r", self.kind, item_id)
            return None
        if not isinstance(patch, Mapping):
            self._log.warning("Invalid update data for %s %s: it must be a mapping.", self.kind, item_id)
            return None
        if not self._validate_patch(patch):
            return None

        current = self.get_by_id(item_id)
        if current is None:
            self._log.warning("%s with ID '%s' not found.", self.kind.capitalize(), item_id)
            return None

        changes = {name: patch[name] for name in UPDATABLE_FIELDS if name in patch}
        updated = dataclasses.replace(current, **changes)
        row = updated.to_row()
        if not self._write_changes(item_id, {name: row[name] for name in changes}):
            return None
        self._log.info("%s updated: ID = %s (%s)", self.kind.capitalize(), item_id, ", ".join(changes) or "no fields")
        return updated


class ProjectStore(WorkItemStore):
    kind = "project"
    id_prefix = ID_PREFIXES["project"]
    entity_cls = Project
    _is_valid_status = staticmethod(is_valid_project_status)


class TaskStore(WorkItemStore):
    kind = "task"
    id_prefix = ID_PREFIXES["task"]
    entity_cls = Task
    _is_valid_status = staticmethod(is_valid_task_status)
