"""Typed dataclasses for the habitcore data model.

All persisted models use from_dict/to_dict for JSON serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored. Missing required keys raise KeyError and
unparseable values raise ValueError/TypeError; the repositories treat
both as a decode failure.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any


def new_id() -> str:
    return str(uuid.uuid4())


def _parse_ts(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _format_ts(value: datetime) -> str:
    return value.isoformat()


# ── Habit ─────────────────────────────────────────────────────


@dataclass
class Habit:
    id: str
    name: str
    icon: str
    created_at: datetime
    completed_dates: list[str] = field(default_factory=list)  # day-keys, no duplicates

    def __post_init__(self) -> None:
        self.completed_dates = list(dict.fromkeys(self.completed_dates))

    def is_completed_on(self, day_key: str) -> bool:
        return day_key in self.completed_dates

    def toggled(self, day_key: str) -> Habit:
        """Return a copy with *day_key* removed if present, otherwise added."""
        if day_key in self.completed_dates:
            dates = [d for d in self.completed_dates if d != day_key]
        else:
            dates = self.completed_dates + [day_key]
        return replace(self, completed_dates=dates)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Habit:
        dates = d.get("completedDates") or []
        if not isinstance(dates, list):
            raise TypeError(f"completedDates must be a list, got {type(dates).__name__}")
        return cls(
            id=str(d["id"]),
            name=str(d["name"]),
            icon=str(d.get("icon", "")),
            created_at=_parse_ts(d["createdAt"]),
            completed_dates=[str(x) for x in dates],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "completedDates": list(self.completed_dates),
            "createdAt": _format_ts(self.created_at),
        }


# ── Goal ──────────────────────────────────────────────────────


@dataclass
class Goal:
    id: str
    title: str
    description: str
    target_value: int
    unit: str
    created_at: datetime
    current_value: int = 0

    @property
    def progress(self) -> float:
        if self.target_value <= 0:
            return 0.0
        return self.current_value / self.target_value

    @property
    def is_completed(self) -> bool:
        return self.current_value >= self.target_value

    def clamped(self) -> Goal:
        """Return a copy with current_value forced into [0, target_value]."""
        value = min(self.current_value, self.target_value)
        return replace(self, current_value=max(0, value))

    def with_increment(self, amount: int) -> Goal:
        return replace(self, current_value=self.current_value + amount).clamped()

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Goal:
        return cls(
            id=str(d["id"]),
            title=str(d["title"]),
            description=str(d.get("description", "")),
            target_value=int(d["targetValue"]),
            current_value=int(d.get("currentValue", 0)),
            unit=str(d.get("unit", "")),
            created_at=_parse_ts(d["createdAt"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "targetValue": self.target_value,
            "currentValue": self.current_value,
            "unit": self.unit,
            "createdAt": _format_ts(self.created_at),
        }


# ── Focus Session ─────────────────────────────────────────────


@dataclass
class FocusSession:
    id: str
    duration: int  # minutes
    completed_at: datetime

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> FocusSession:
        return cls(
            id=str(d["id"]),
            duration=int(d["duration"]),
            completed_at=_parse_ts(d["completedAt"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "duration": self.duration,
            "completedAt": _format_ts(self.completed_at),
        }


# ── App settings ──────────────────────────────────────────────


@dataclass
class AppSettings:
    has_completed_onboarding: bool = False
    is_dark_mode: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AppSettings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            has_completed_onboarding=bool(d.get("hasCompletedOnboarding", False)),
            is_dark_mode=bool(d.get("isDarkMode", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasCompletedOnboarding": self.has_completed_onboarding,
            "isDarkMode": self.is_dark_mode,
        }


# ── Derived values ────────────────────────────────────────────


@dataclass
class DayBucket:
    """One day of a rolling-window chart."""

    label: str = ""
    day_key: str = ""
    value: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "dayKey": self.day_key, "value": self.value}


@dataclass(frozen=True)
class Achievement:
    title: str
    icon: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "icon": self.icon}


@dataclass
class StatsSnapshot:
    """Aggregate counters over one snapshot of all three repositories."""

    total_habits: int = 0
    completed_today: int = 0
    completion_rate: float = 0.0
    total_completions: int = 0
    best_streak: int = 0
    longest_streak: int = 0
    goals_set: int = 0
    active_goals: int = 0
    completed_goals: int = 0
    total_focus_minutes: int = 0
    focus_minutes_today: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalHabits": self.total_habits,
            "completedToday": self.completed_today,
            "completionRate": round(self.completion_rate, 3),
            "totalCompletions": self.total_completions,
            "bestStreak": self.best_streak,
            "longestStreak": self.longest_streak,
            "goalsSet": self.goals_set,
            "activeGoals": self.active_goals,
            "completedGoals": self.completed_goals,
            "totalFocusMinutes": self.total_focus_minutes,
            "focusMinutesToday": self.focus_minutes_today,
        }
