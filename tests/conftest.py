# Rev 1.0.0

"""Pytest fixtures for sheettracker (Rev 1.0.0)"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from sheettracker.app_context import AppContext
from sheettracker.repositories.db import Database


class StepClock:
    """Deterministic clock: one second further on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self._next = start

    def now(self) -> datetime:
        current = self._next
        self._next += timedelta(seconds=1)
        return current


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture(params=["memory", "sqlite"])
def ctx(request, tmp_path: Path, clock: StepClock):
    if request.param == "memory":
        context = AppContext.in_memory(clock=clock)
    else:
        context = AppContext.create(tmp_path / "ctx.db", clock=clock)
    try:
        yield context
    finally:
        context.close()


@pytest.fixture()
def hierarchy(ctx: AppContext):
    return ctx.hierarchy


@pytest.fixture()
def when():
    base = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    return lambda hours: base + timedelta(hours=hours)
