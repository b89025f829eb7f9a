# sheettracker application context
# Rev 1.0.0

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models.entities import EVENT_COLUMNS, WORK_ITEM_COLUMNS
from .repositories.db import Database
from .repositories.event_store import EventStore
from .repositories.row_store import InMemoryRowStore, RowStore
from .repositories.sqlite_row_store import SQLiteRowStore
from .repositories.work_item_store import ProjectStore, TaskStore
from .services.hierarchy_service import HierarchyService
from .utils.clock import UtcClock, UuidGenerator
from .utils.config import resolve_db_path
from .utils.logging_setup import get_logger

PROJECTS_TABLE = "projects"
TASKS_TABLE = "tasks"
EVENTS_TABLE = "calendar_events"


@dataclass
class AppContext:
    """Central container for the stores and the hierarchy service."""
    projects: ProjectStore
    tasks: TaskStore
    events: EventStore
    hierarchy: HierarchyService
    db: Optional[Database] = None

    @classmethod
    def from_row_stores(
        cls,
        project_rows: RowStore,
        task_rows: RowStore,
        event_rows: RowStore,
        *,
        clock: Optional[UtcClock] = None,
        ids: Optional[UuidGenerator] = None,
        db: Optional[Database] = None,
    ) -> "AppContext":
        # one clock for all three stores keeps created_at comparable across tables
        clock = clock or UtcClock()
        ids = ids or UuidGenerator()
        projects = ProjectStore(project_rows, clock=clock, ids=ids)
        tasks = TaskStore(task_rows, clock=clock, ids=ids)
        events = EventStore(event_rows, projects, tasks, clock=clock, ids=ids)
        hierarchy = HierarchyService(projects, tasks, events)
        return cls(projects=projects, tasks=tasks, events=events, hierarchy=hierarchy, db=db)

    @classmethod
    def create(cls, db_path: Optional[Path | str] = None, **kwargs) -> "AppContext":
        """Open the SQLite DB (default from config), migrate it, and wire the stores."""
        log = get_logger("AppContext")
        db = Database(db_path or resolve_db_path())
        applied = db.run_migrations()
        ctx = cls.from_row_stores(
            SQLiteRowStore(db, PROJECTS_TABLE, WORK_ITEM_COLUMNS),
            SQLiteRowStore(db, TASKS_TABLE, WORK_ITEM_COLUMNS),
            SQLiteRowStore(db, EVENTS_TABLE, EVENT_COLUMNS),
            db=db,
            **kwargs,
        )
        log.info("AppContext initialized with DB=%s (%d migrations applied)", db.path, len(applied))
        return ctx

    @classmethod
    def in_memory(cls, **kwargs) -> "AppContext":
        return cls.from_row_stores(
            InMemoryRowStore(WORK_ITEM_COLUMNS),
            InMemoryRowStore(WORK_ITEM_COLUMNS),
            InMemoryRowStore(EVENT_COLUMNS),
            **kwargs,
        )

    def close(self) -> None:
        if self.db is not None:
            self.db.close()
