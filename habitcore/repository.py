"""Persisted entity repositories for habitcore.

One repository instance per entity kind owns the authoritative in-memory
list. The list is loaded lazily from the blob store (seeding defaults when
the blob is absent or undecodable) and the full list is written back after
every mutation. Reads hand out deep copies.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Generic, Iterator, TypeVar

from habitcore.clock import Calendar
from habitcore.models import FocusSession, Goal, Habit, new_id
from habitcore.store import BlobStore

logger = logging.getLogger(__name__)

T = TypeVar("T", Habit, Goal, FocusSession)

Listener = Callable[["Repository[Any]"], None]


class Repository(Generic[T]):
    """Generic list repository; subclasses set ``storage_key`` and ``model``."""

    storage_key: str = ""
    model: Any = None
    persist_seed: bool = True

    def __init__(self, store: BlobStore, calendar: Calendar | None = None):
        self.store = store
        self.calendar = calendar or Calendar()
        self._items: list[T] | None = None
        self._listeners: list[Listener] = []

    # ── Loading ───────────────────────────────────────────────

    def default_seed(self) -> list[T]:
        return []

    def _decode(self, text: str) -> list[T]:
        data = json.loads(text)
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON list, got {type(data).__name__}")
        return [self.model.from_dict(d) for d in data]

    def _encode(self) -> str:
        return json.dumps([e.to_dict() for e in self._entries()], indent=2, ensure_ascii=False) + "\n"

    def _load(self) -> list[T]:
        try:
            text = self.store.read(self.storage_key)
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read %s, reseeding", self.storage_key, exc_info=True)
            text = None
        else:
            if text is None:
                logger.debug("No stored %s, seeding defaults", self.storage_key)
        if text is not None:
            try:
                return self._decode(text)
            except (ValueError, KeyError, TypeError) as e:
                logger.warning("Could not decode %s (%s), reseeding", self.storage_key, e)

        self._items = self.default_seed()
        if self.persist_seed:
            self._persist()
        return self._items

    def _entries(self) -> list[T]:
        if self._items is None:
            self._items = self._load()
        return self._items

    def reload(self) -> None:
        """Discard in-memory state and load again from the store."""
        self._items = None
        self._entries()

    # ── Persistence & notification ────────────────────────────

    def _persist(self) -> bool:
        """Overwrite the stored blob with the full list. Failures are logged, not raised."""
        try:
            self.store.write(self.storage_key, self._encode())
        except OSError:
            logger.error("Failed to persist %s; in-memory state is ahead of storage",
                         self.storage_key, exc_info=True)
            return False
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener(repo)* after every mutation. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self._persist()
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Listener failed for %s", self.storage_key)

    # ── Reads ─────────────────────────────────────────────────

    @property
    def items(self) -> list[T]:
        return copy.deepcopy(self._entries())

    def get(self, entity_id: str) -> T | None:
        found = self._find(entity_id)
        return copy.deepcopy(found) if found is not None else None

    def _find(self, entity_id: str) -> T | None:
        for e in self._entries():
            if e.id == entity_id:
                return e
        return None

    def __len__(self) -> int:
        return len(self._entries())

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    # ── Mutations ─────────────────────────────────────────────

    def _append(self, entity: T) -> T:
        self._entries().append(entity)
        self._changed()
        return copy.deepcopy(entity)

    def _prepare_update(self, current: T, entity: T) -> T:
        return copy.deepcopy(entity)

    def update(self, entity: T) -> T | None:
        """Replace the record with the same id in place. Unknown ids are a no-op."""
        entries = self._entries()
        for i, e in enumerate(entries):
            if e.id == entity.id:
                entries[i] = self._prepare_update(e, entity)
                self._changed()
                return copy.deepcopy(entries[i])
        logger.debug("update: %s has no record %s", self.storage_key, entity.id)
        return None

    def delete(self, entity_id: str) -> int:
        """Remove every record with *entity_id*. Returns the number removed."""
        entries = self._entries()
        remaining = [e for e in entries if e.id != entity_id]
        removed = len(entries) - len(remaining)
        if not removed:
            logger.debug("delete: %s has no record %s", self.storage_key, entity_id)
            return 0
        self._items = remaining
        self._changed()
        return removed

    def clear_all(self) -> None:
        """Empty the list and persist the empty list. Does not reseed."""
        self._entries()
        self._items = []
        self._changed()


# ── Habits ────────────────────────────────────────────────────


DEFAULT_HABITS = [
    ("Morning Exercise", "figure.run"),
    ("Read 30 Minutes", "book.fill"),
    ("Meditation", "leaf.fill"),
    ("Drink Water", "drop.fill"),
]


class HabitRepository(Repository[Habit]):
    storage_key = "saved_habits"
    model = Habit

    def default_seed(self) -> list[Habit]:
        now = self.calendar.now()
        return [Habit(id=new_id(), name=name, icon=icon, created_at=now) for name, icon in DEFAULT_HABITS]

    def add(self, name: str, icon: str = "") -> Habit:
        if not name or not name.strip():
            raise ValueError("Habit name must not be empty")
        return self._append(Habit(id=new_id(), name=name, icon=icon, created_at=self.calendar.now()))

    def _prepare_update(self, current: Habit, entity: Habit) -> Habit:
        return replace(copy.deepcopy(entity), created_at=current.created_at)

    def toggle_completion(self, habit_id: str, day_key: str) -> Habit | None:
        """Add *day_key* to the habit's completions, or remove it if already there."""
        current = self._find(habit_id)
        if current is None:
            logger.debug("toggle_completion: no habit %s", habit_id)
            return None
        return self.update(current.toggled(day_key))

    def toggle_today(self, habit_id: str) -> Habit | None:
        return self.toggle_completion(habit_id, self.calendar.today_key())


# ── Goals ─────────────────────────────────────────────────────


class GoalRepository(Repository[Goal]):
    storage_key = "saved_goals"
    model = Goal

    def default_seed(self) -> list[Goal]:
        return [
            Goal(
                id=new_id(),
                title="Complete 30 Days Challenge",
                description="Build consistency for 30 consecutive days",
                target_value=30,
                current_value=0,
                unit="days",
                created_at=self.calendar.now(),
            )
        ]

    def add(
        self,
        title: str,
        description: str,
        target_value: int,
        unit: str,
        current_value: int = 0,
    ) -> Goal:
        if target_value < 0:
            raise ValueError(f"targetValue must be >= 0, got {target_value}")
        goal = Goal(
            id=new_id(),
            title=title,
            description=description,
            target_value=int(target_value),
            current_value=int(current_value),
            unit=unit,
            created_at=self.calendar.now(),
        )
        return self._append(goal.clamped())

    def _prepare_update(self, current: Goal, entity: Goal) -> Goal:
        if entity.target_value < 0:
            raise ValueError(f"targetValue must be >= 0, got {entity.target_value}")
        return replace(entity, created_at=current.created_at).clamped()

    def increment(self, goal_id: str, amount: int) -> Goal | None:
        """Add *amount* to the goal's progress, clamped to the target."""
        current = self._find(goal_id)
        if current is None:
            logger.debug("increment: no goal %s", goal_id)
            return None
        return self.update(current.with_increment(amount))


# ── Focus sessions ────────────────────────────────────────────


class FocusSessionRepository(Repository[FocusSession]):
    storage_key = "saved_focus_sessions"
    model = FocusSession
    persist_seed = False

    def add(self, duration: int) -> FocusSession:
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")
        return self._append(FocusSession(id=new_id(), duration=int(duration), completed_at=self.calendar.now()))

    def _prepare_update(self, current: FocusSession, entity: FocusSession) -> FocusSession:
        return replace(copy.deepcopy(entity), completed_at=current.completed_at)

    def sessions_on(self, day: datetime) -> list[FocusSession]:
        return [s for s in self.items if self.calendar.is_same_day(s.completed_at, day)]
