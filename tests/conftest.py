"""Shared test fixtures for habitcore tests."""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import yaml

from habitcore.clock import Calendar
from habitcore.repository import FocusSessionRepository, GoalRepository, HabitRepository
from habitcore.store import FileBlobStore

UTC = ZoneInfo("UTC")
# Wednesday
NOW = datetime(2026, 2, 11, 10, 0, tzinfo=UTC)


class FakeClock:
    """Settable stand-in for datetime.now."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def calendar(clock: FakeClock) -> Calendar:
    return Calendar(UTC, now_fn=clock)


@pytest.fixture
def store(tmp_path: Path) -> FileBlobStore:
    return FileBlobStore(tmp_path / "store")


@pytest.fixture
def habits(store, calendar) -> HabitRepository:
    return HabitRepository(store, calendar)


@pytest.fixture
def goals(store, calendar) -> GoalRepository:
    return GoalRepository(store, calendar)


@pytest.fixture
def sessions(store, calendar) -> FocusSessionRepository:
    return FocusSessionRepository(store, calendar)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary data root with a settings file."""
    root = tmp_path / "workspace"
    root.mkdir()
    settings = {
        "timezone": "UTC",
        "log_file": "logs/test.log",
        "achievements": [
            {"title": "First Step", "metric": "total_completions", "threshold": 1, "icon": "star"},
            {"title": "Hour of Focus", "metric": "total_focus_minutes", "threshold": 60},
        ],
    }
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    os.environ["HABITCORE_ROOT"] = str(root)
    yield root
    if "HABITCORE_ROOT" in os.environ:
        del os.environ["HABITCORE_ROOT"]
