# Rev 1.0.0

"""Hierarchy service (Rev 1.0.0)
Parent/child rules across the project, task and event tables:
- parent validation on create/update, cycle rejection on re-parent
- direct children and descendant closure (projects + tasks only)
- three delete modes: cascade, orphan-preserving remove, remove with events

Every public method returns a sentinel (None / False / empty Children) on
failure; nothing raised by a store escapes.
"""
from __future__ import annotations
from collections import deque
from collections.abc import Mapping
from typing import Any, List, Optional, Set

from sheettracker.models.children import EMPTY_CHILDREN, Children
from sheettracker.models.entities import CalendarEvent, Project, Task, WorkItem
from sheettracker.models.refs import is_valid_id
from sheettracker.repositories.event_store import EventStore
from sheettracker.repositories.parents import resolve_parent
from sheettracker.repositories.work_item_store import ProjectStore, TaskStore, WorkItemStore
from sheettracker.utils.logging_setup import get_logger


class HierarchyService:
    def __init__(self, projects: ProjectStore, tasks: TaskStore, events: EventStore):
        self.projects = projects
        self.tasks = tasks
        self.events = events
        self._log = get_logger("HierarchyService")

    # ---------- lookups ----------

    def find_parent(self, parent_id: Any) -> Optional[WorkItem]:
        return resolve_parent(parent_id, self.projects, self.tasks)

    def _store_for(self, item: WorkItem) -> WorkItemStore:
        return self.tasks if isinstance(item, Task) else self.projects

    def _parent_exists(self, parent_id: Any) -> bool:
        if self.find_parent(parent_id) is None:
            self._log.warning(
                "Parent with ID '%s' does not exist in either projects or tasks.", parent_id
            )
            return False
        return True

    def _creates_cycle(self, item_id: str, parent: WorkItem) -> bool:
        """True when ``item_id`` is ``parent`` or one of its ancestors."""
        seen: Set[str] = set()
        current: Optional[WorkItem] = parent
        while current is not None:
            if current.id == item_id:
                return True
            if current.id in seen:
                # the store already holds a loop that does not pass through item_id
                self._log.error("Existing parent loop detected at %s while checking %s.", current.id, item_id)
                return True
            seen.add(current.id)
            if not current.parent_id:
                return False
            current = self.find_parent(current.parent_id)
        return False

    # ---------- create ----------

    def _add_work_item(self, store: WorkItemStore, data: Any) -> Optional[WorkItem]:
        parent_id = data.get("parent_id") if isinstance(data, Mapping) else None
        if is_valid_id(parent_id) and not self._parent_exists(parent_id):
            return None
        return store.add(data)

    def add_project(self, data: Any) -> Optional[Project]:
        return self._add_work_item(self.projects, data)

    def add_task(self, data: Any) -> Optional[Task]:
        return self._add_work_item(self.tasks, data)

    def add_event(self, data: Any) -> Optional[CalendarEvent]:
        return self.events.add(data)

    # ---------- update ----------

    def _update_work_item(self, store: WorkItemStore, item_id: Any, patch: Any) -> Optional[WorkItem]:
        parent_id = patch.get("parent_id") if isinstance(patch, Mapping) else None
        if is_valid_id(item_id) and is_valid_id(parent_id):
            if parent_id == item_id:
                self._log.warning("A %s cannot be its own parent: %s", store.kind, item_id)
                return None
            parent = self.find_parent(parent_id)
            if parent is None:
                self._log.warning(
                    "Parent with ID '%s' does not exist in either projects or tasks.", parent_id
                )
                return None
            if self._creates_cycle(item_id, parent):
                self._log.warning(
                    "Circular reference detected: %s cannot move under %s.", item_id, parent_id
                )
                return None
        return store.update(item_id, patch)

    def update_project(self, project_id: Any, patch: Any) -> Optional[Project]:
        return self._update_work_item(self.projects, project_id, patch)

    def update_task(self, task_id: Any, patch: Any) -> Optional[Task]:
        return self._update_work_item(self.tasks, task_id, patch)

    def update_event(self, event_id: Any, patch: Any) -> Optional[CalendarEvent]:
        return self.events.update(event_id, patch)

    # ---------- traversal ----------

    def get_children_by_parent_id(self, parent_id: Any) -> Children:
        """Direct child projects and tasks of ``parent_id``; empty for unknown or childless ids."""
        try:
            return Children(
                projects=tuple(self.projects.get_by_parent_id(parent_id)),
                tasks=tuple(self.tasks.get_by_parent_id(parent_id)),
            )
        except Exception:
            self._log.exception("Failed to get children of %s", parent_id)
            return EMPTY_CHILDREN

    def get_all_descendants_by_parent_id(self, parent_id: Any) -> Children:
        """
        Every project and task reachable below ``parent_id``. Events are not
        descendants. A node reached twice (only possible in a corrupted store)
        is logged and not expanded again.
        """
        try:
            projects: List[Project] = []
            tasks: List[Task] = []
            seen: Set[str] = {parent_id} if is_valid_id(parent_id) else set()
            pending = deque([parent_id])
            while pending:
                children = self.get_children_by_parent_id(pending.popleft())
                for item in (*children.projects, *children.tasks):
                    if item.id in seen:
                        self._log.error("Parent loop detected at %s below %s; not expanding again.", item.id, parent_id)
                        continue
                    seen.add(item.id)
                    (tasks if isinstance(item, Task) else projects).append(item)
                    pending.append(item.id)
            return Children(projects=tuple(projects), tasks=tuple(tasks))
        except Exception:
            self._log.exception("Failed to get descendants of %s", parent_id)
            return EMPTY_CHILDREN

    # ---------- delete ----------

    def _target(self, store: WorkItemStore, item_id: Any) -> Optional[WorkItem]:
        if not is_valid_id(item_id):
            self._log.warning("Invalid %s id provided: %r", store.kind, item_id)
            return None
        item = store.get_by_id(item_id)
        if item is None:
            self._log.warning("%s with ID '%s' not found.", store.kind.capitalize(), item_id)
        return item

    def _delete_events_of(self, parent_id: str) -> None:
        for event in self.events.get_by_parent_id(parent_id):
            if not self.events.delete(event.id):
                self._log.warning("Could not delete event %s attached to %s", event.id, parent_id)

    def _detach_children(self, parent_id: str) -> None:
        children = self.get_children_by_parent_id(parent_id)
        for item in (*children.projects, *children.tasks):
            if self._store_for(item).update(item.id, {"parent_id": None}) is None:
                self._log.warning("Could not detach %s from removed parent %s", item.id, parent_id)

    def _cascade_delete(self, store: WorkItemStore, item_id: Any) -> bool:
        target = self._target(store, item_id)
        if target is None:
            return False
        try:
            descendants = self.get_all_descendants_by_parent_id(target.id)
            nodes = (*descendants.projects, *descendants.tasks)
            for node_id in (target.id, *(n.id for n in nodes)):
                self._delete_events_of(node_id)
            for node in nodes:
                if not self._store_for(node).delete(node.id):
                    self._log.warning("Could not delete descendant %s of %s", node.id, target.id)
        except Exception:
            # best effort below the target; the target row still goes
            self._log.exception("Cascade below %s stopped early", target.id)
        deleted = store.delete(target.id)
        if deleted:
            self._log.info("%s and all its descendants deleted: ID = %s", store.kind.capitalize(), target.id)
        return deleted

    def _remove(self, store: WorkItemStore, item_id: Any, *, with_events: bool) -> bool:
        target = self._target(store, item_id)
        if target is None:
            return False
        try:
            self._detach_children(target.id)
            if with_events:
                self._delete_events_of(target.id)
        except Exception:
            self._log.exception("Re-parenting below %s stopped early", target.id)
        deleted = store.delete(target.id)
        if deleted:
            self._log.info(
                "%s removed (children preserved%s): ID = %s",
                store.kind.capitalize(), ", events deleted" if with_events else "", target.id,
            )
        return deleted

    def delete_project(self, project_id: Any) -> bool:
        """Delete the project, every project/task below it, and every event attached to any of them."""
        return self._cascade_delete(self.projects, project_id)

    def delete_task(self, task_id: Any) -> bool:
        return self._cascade_delete(self.tasks, task_id)

    def remove_project(self, project_id: Any) -> bool:
        """Delete only the project; direct children become roots, attached events are left as they are."""
        return self._remove(self.projects, project_id, with_events=False)

    def remove_task(self, task_id: Any) -> bool:
        return self._remove(self.tasks, task_id, with_events=False)

    def remove_project_with_events(self, project_id: Any) -> bool:
        """Like remove_project, and also delete events attached directly to the project."""
        return self._remove(self.projects, project_id, with_events=True)

    def remove_task_with_events(self, task_id: Any) -> bool:
        return self._remove(self.tasks, task_id, with_events=True)

    def delete_event(self, event_id: Any) -> bool:
        return self.events.delete(event_id)
