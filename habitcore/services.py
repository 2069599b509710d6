"""Composition root: one instance of each collaborator, built at startup.

Callers construct a :class:`Tracker` once and pass it (or its parts) to
whatever needs them instead of reaching for module-level singletons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from habitcore.achievements import DEFAULT_RULES, AchievementRule, evaluate_achievements, load_rules
from habitcore.app_state import AppStateStore
from habitcore.clock import Calendar
from habitcore.logger import setup_logger
from habitcore.metrics import compute_stats, focus_time_window, habit_activity_window, partition_goals
from habitcore.models import Achievement, AppSettings, DayBucket, Goal, StatsSnapshot
from habitcore.repository import FocusSessionRepository, GoalRepository, HabitRepository, Repository
from habitcore.store import BlobStore, FileBlobStore
from habitcore.workspace import log_path, store_dir, workspace_root

logger = logging.getLogger(__name__)


@dataclass
class Tracker:
    calendar: Calendar
    store: BlobStore
    habits: HabitRepository
    goals: GoalRepository
    sessions: FocusSessionRepository
    app_state: AppStateStore
    rules: list[AchievementRule] = field(default_factory=lambda: list(DEFAULT_RULES))

    @property
    def repositories(self) -> list[Repository[Any]]:
        return [self.habits, self.goals, self.sessions]

    def stats(self) -> StatsSnapshot:
        return compute_stats(self.habits.items, self.goals.items, self.sessions.items, self.calendar)

    def achievements(self) -> list[Achievement]:
        return evaluate_achievements(self.stats(), self.rules)

    def habit_activity(self) -> list[DayBucket]:
        return habit_activity_window(self.habits.items, self.calendar)

    def focus_time(self) -> list[DayBucket]:
        return focus_time_window(self.sessions.items, self.calendar)

    def goal_partition(self) -> tuple[list[Goal], list[Goal]]:
        return partition_goals(self.goals.items)

    def clear_all_data(self) -> None:
        """Clear habits, goals, then sessions. No rollback if a later clear fails."""
        for repo in self.repositories:
            repo.clear_all()
        logger.info("Cleared all tracker data")

    def reset_app(self) -> AppSettings:
        settings = self.app_state.reset_app(self.repositories)
        logger.info("App reset to onboarding")
        return settings


def build_tracker(
    root: Path | None = None,
    calendar: Calendar | None = None,
    store: BlobStore | None = None,
    configure_logging: bool = False,
) -> Tracker:
    """Wire up a Tracker from the data root's settings."""
    if root is None:
        root = workspace_root()
    if configure_logging:
        setup_logger(log_path(root))
    if calendar is None:
        calendar = Calendar.from_settings(root)
    if store is None:
        store = FileBlobStore(store_dir(root))
    return Tracker(
        calendar=calendar,
        store=store,
        habits=HabitRepository(store, calendar),
        goals=GoalRepository(store, calendar),
        sessions=FocusSessionRepository(store, calendar),
        app_state=AppStateStore(store),
        rules=load_rules(root),
    )
