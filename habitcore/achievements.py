"""Achievement rules evaluated against aggregate stats.

Rules are an ordered list of (predicate, label). Every rule whose
predicate holds fires; rules are independent, so a user past 50
completions gets both the 10 and the 50 badge.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from habitcore.models import Achievement, StatsSnapshot
from habitcore.workspace import load_settings

Predicate = Callable[[StatsSnapshot], bool]

# Metric names usable from settings.yaml.
METRICS: dict[str, Callable[[StatsSnapshot], float]] = {
    "total_completions": lambda s: s.total_completions,
    "best_streak": lambda s: s.best_streak,
    "total_focus_minutes": lambda s: s.total_focus_minutes,
    "focus_minutes_today": lambda s: s.focus_minutes_today,
    "completed_today": lambda s: s.completed_today,
    "completed_goals": lambda s: s.completed_goals,
    "goals_set": lambda s: s.goals_set,
}


@dataclass(frozen=True)
class AchievementRule:
    title: str
    predicate: Predicate
    icon: str = ""

    def achievement(self) -> Achievement:
        return Achievement(title=self.title, icon=self.icon)


def threshold_rule(title: str, metric: str, threshold: float, icon: str = "") -> AchievementRule:
    """Rule that fires once *metric* reaches *threshold*."""
    if metric not in METRICS:
        raise ValueError(f"Unknown achievement metric: {metric!r}")
    getter = METRICS[metric]
    return AchievementRule(title=title, icon=icon, predicate=lambda s: getter(s) >= threshold)


DEFAULT_RULES: list[AchievementRule] = [
    threshold_rule("10 Day Champion", "total_completions", 10, icon="star.fill"),
    threshold_rule("50 Day Master", "total_completions", 50, icon="crown.fill"),
    threshold_rule("7 Day Streak", "best_streak", 7, icon="flame.fill"),
    threshold_rule("2 Hour Focus", "total_focus_minutes", 120, icon="clock.fill"),
]


def evaluate_achievements(
    stats: StatsSnapshot, rules: list[AchievementRule] | None = None
) -> list[Achievement]:
    """Return the achievements of every rule that holds, in rule order."""
    if rules is None:
        rules = DEFAULT_RULES
    return [r.achievement() for r in rules if r.predicate(stats)]


def rules_from_config(entries: list[dict[str, Any]]) -> list[AchievementRule]:
    """Build rules from ``[{title, metric, threshold, icon}]`` config entries."""
    rules = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Achievement #{i} must be a mapping")
        missing = [k for k in ("title", "metric", "threshold") if k not in entry]
        if missing:
            raise ValueError(f"Achievement #{i} missing: {', '.join(missing)}")
        rules.append(
            threshold_rule(
                str(entry["title"]),
                str(entry["metric"]),
                float(entry["threshold"]),
                icon=str(entry.get("icon", "")),
            )
        )
    return rules


def load_rules(root: Path | None = None) -> list[AchievementRule]:
    """Rules from settings.yaml ``achievements:``, else the defaults."""
    entries = load_settings(root).get("achievements")
    if not entries:
        return list(DEFAULT_RULES)
    if not isinstance(entries, list):
        raise ValueError("settings.yaml 'achievements' must be a list")
    return rules_from_config(entries)
