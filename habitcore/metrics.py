"""Derived-metrics engine for habitcore.

Pure functions over repository snapshots: streaks, rolling 7-day buckets,
and aggregate counters. Nothing here is cached; call again after a
mutation to see the new state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable

from habitcore.clock import Calendar
from habitcore.models import DayBucket, FocusSession, Goal, Habit, StatsSnapshot

logger = logging.getLogger(__name__)

WINDOW_DAYS = 7


# ── Streaks ───────────────────────────────────────────────────


def current_streak(habit: Habit, calendar: Calendar, today: datetime | None = None) -> int:
    """Count consecutive completed days walking backward from today.

    Today missing means 0. Stops early if the calendar cannot produce the
    previous day.
    """
    completed = set(habit.completed_dates)
    day: datetime | None = today if today is not None else calendar.now()
    streak = 0
    while day is not None and calendar.day_key(day) in completed:
        streak += 1
        day = calendar.add_days(day, -1)
        if day is None:
            logger.debug("Streak scan for %s stopped at calendar edge", habit.id)
    return streak


def longest_streak(habit: Habit, calendar: Calendar) -> int:
    """Longest run of consecutive completed days anywhere in the history."""
    days = sorted({d for d in (calendar.parse_day_key(k) for k in habit.completed_dates) if d})
    if not days:
        return 0
    longest = run = 1
    for prev, cur in zip(days, days[1:]):
        if cur == prev + timedelta(days=1):
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    return max(longest, run)


def best_streak(habits: Iterable[Habit], calendar: Calendar, today: datetime | None = None) -> int:
    return max((current_streak(h, calendar, today) for h in habits), default=0)


# ── Rolling window ────────────────────────────────────────────


def window_days(
    calendar: Calendar, today: datetime | None = None, days: int = WINDOW_DAYS
) -> list[datetime | None]:
    """The last *days* calendar days ending today, oldest first."""
    if today is None:
        today = calendar.now()
    return [calendar.add_days(today, -offset) for offset in range(days - 1, -1, -1)]


def _bucket(calendar: Calendar, day: datetime, value: int) -> DayBucket:
    return DayBucket(label=calendar.weekday_label(day), day_key=calendar.day_key(day), value=value)


def habit_activity_window(
    habits: list[Habit], calendar: Calendar, today: datetime | None = None
) -> list[DayBucket]:
    """Number of habits completed on each of the last seven days."""
    buckets = []
    for day in window_days(calendar, today):
        if day is None:
            buckets.append(DayBucket())
            continue
        key = calendar.day_key(day)
        count = sum(1 for h in habits if key in h.completed_dates)
        buckets.append(_bucket(calendar, day, count))
    return buckets


def focus_time_window(
    sessions: list[FocusSession], calendar: Calendar, today: datetime | None = None
) -> list[DayBucket]:
    """Focus minutes logged on each of the last seven days."""
    buckets = []
    for day in window_days(calendar, today):
        if day is None:
            buckets.append(DayBucket())
            continue
        minutes = sum(s.duration for s in sessions if calendar.is_same_day(s.completed_at, day))
        buckets.append(_bucket(calendar, day, minutes))
    return buckets


# ── Aggregate counters ────────────────────────────────────────


def completed_today_count(habits: Iterable[Habit], calendar: Calendar, today: datetime | None = None) -> int:
    key = calendar.day_key(today if today is not None else calendar.now())
    return sum(1 for h in habits if key in h.completed_dates)


def completion_rate(habits: list[Habit], calendar: Calendar, today: datetime | None = None) -> float:
    if not habits:
        return 0.0
    return completed_today_count(habits, calendar, today) / len(habits)


def total_completions(habits: Iterable[Habit]) -> int:
    return sum(len(h.completed_dates) for h in habits)


def partition_goals(goals: Iterable[Goal]) -> tuple[list[Goal], list[Goal]]:
    """Split goals into (active, completed), keeping their order."""
    active: list[Goal] = []
    completed: list[Goal] = []
    for g in goals:
        (completed if g.is_completed else active).append(g)
    return active, completed


def total_focus_minutes(sessions: Iterable[FocusSession]) -> int:
    return sum(s.duration for s in sessions)


def sessions_today(
    sessions: Iterable[FocusSession], calendar: Calendar, today: datetime | None = None
) -> list[FocusSession]:
    if today is None:
        today = calendar.now()
    return [s for s in sessions if calendar.is_same_day(s.completed_at, today)]


def focus_minutes_today(
    sessions: Iterable[FocusSession], calendar: Calendar, today: datetime | None = None
) -> int:
    return total_focus_minutes(sessions_today(sessions, calendar, today))


def compute_stats(
    habits: list[Habit],
    goals: list[Goal],
    sessions: list[FocusSession],
    calendar: Calendar,
    today: datetime | None = None,
) -> StatsSnapshot:
    """Compute every aggregate counter from one snapshot of the repositories."""
    if today is None:
        today = calendar.now()
    active, completed = partition_goals(goals)
    return StatsSnapshot(
        total_habits=len(habits),
        completed_today=completed_today_count(habits, calendar, today),
        completion_rate=completion_rate(habits, calendar, today),
        total_completions=total_completions(habits),
        best_streak=best_streak(habits, calendar, today),
        longest_streak=max((longest_streak(h, calendar) for h in habits), default=0),
        goals_set=len(goals),
        active_goals=len(active),
        completed_goals=len(completed),
        total_focus_minutes=total_focus_minutes(sessions),
        focus_minutes_today=focus_minutes_today(sessions, calendar, today),
    )
