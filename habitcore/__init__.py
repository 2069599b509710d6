"""habitcore: persisted habit/goal/focus store and derived-metrics engine.

Public API re-exports for convenient imports:
    from habitcore import build_tracker, current_streak, ...
"""

# Workspace & paths
from habitcore.workspace import (
    workspace_root,
    load_settings,
    save_settings,
    get_user_timezone,
    settings_path,
    store_dir,
    log_path,
)

# Clock
from habitcore.clock import Calendar

# Storage
from habitcore.store import BlobStore, FileBlobStore, MemoryBlobStore

# Models
from habitcore.models import (
    Habit,
    Goal,
    FocusSession,
    AppSettings,
    DayBucket,
    Achievement,
    StatsSnapshot,
)

# Repositories
from habitcore.repository import (
    Repository,
    HabitRepository,
    GoalRepository,
    FocusSessionRepository,
    DEFAULT_HABITS,
)

# Metrics
from habitcore.metrics import (
    current_streak,
    longest_streak,
    best_streak,
    window_days,
    habit_activity_window,
    focus_time_window,
    completed_today_count,
    completion_rate,
    total_completions,
    partition_goals,
    total_focus_minutes,
    sessions_today,
    focus_minutes_today,
    compute_stats,
)

# Achievements
from habitcore.achievements import (
    AchievementRule,
    DEFAULT_RULES,
    threshold_rule,
    evaluate_achievements,
    rules_from_config,
    load_rules,
)

# Timer, app state, wiring
from habitcore.timer import FocusTimer, DURATION_PRESETS, record_completed, recording_timer
from habitcore.app_state import AppStateStore
from habitcore.logger import setup_logger
from habitcore.services import Tracker, build_tracker
