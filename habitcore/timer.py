"""Pomodoro-style focus countdown.

The timer does not own a thread: the caller drives it with tick() once per
elapsed second (or in bigger steps). When the countdown reaches zero the
timer completes and fires ``on_complete``.
"""

from __future__ import annotations

from typing import Callable

from habitcore.models import FocusSession
from habitcore.repository import FocusSessionRepository

DEFAULT_DURATION = 1500  # 25 minutes, in seconds

DURATION_PRESETS: list[tuple[str, int]] = [
    ("5 min", 300),
    ("15 min", 900),
    ("25 min", 1500),
    ("50 min", 3000),
]


class FocusTimer:
    def __init__(
        self,
        duration: int = DEFAULT_DURATION,
        on_complete: Callable[[FocusTimer], None] | None = None,
    ):
        if duration < 0:
            raise ValueError(f"duration must be >= 0, got {duration}")
        self.selected_duration = duration
        self.time_remaining = duration
        self.is_running = False
        self.on_complete = on_complete

    @property
    def progress(self) -> float:
        if self.selected_duration <= 0:
            return 0.0
        return (self.selected_duration - self.time_remaining) / self.selected_duration

    @property
    def formatted_time(self) -> str:
        minutes, seconds = divmod(self.time_remaining, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def elapsed_seconds(self) -> int:
        return self.selected_duration - self.time_remaining

    def start(self) -> None:
        """Run the countdown; a finished timer starts over from the full duration."""
        if self.time_remaining == 0:
            self.reset()
        self.is_running = True

    def pause(self) -> None:
        self.is_running = False

    def reset(self) -> None:
        self.pause()
        self.time_remaining = self.selected_duration

    def complete(self) -> None:
        self.pause()
        self.time_remaining = 0
        if self.on_complete is not None:
            self.on_complete(self)

    def set_duration(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError(f"duration must be >= 0, got {seconds}")
        self.selected_duration = seconds
        self.time_remaining = seconds
        self.pause()

    def tick(self, seconds: int = 1) -> None:
        """Advance a running timer by *seconds*. No-op while paused."""
        if not self.is_running:
            return
        self.time_remaining = max(0, self.time_remaining - seconds)
        if self.time_remaining == 0:
            self.complete()


def record_completed(timer: FocusTimer, sessions: FocusSessionRepository) -> FocusSession:
    """Store the timer's elapsed whole minutes as a focus session."""
    return sessions.add(timer.elapsed_seconds // 60)


def recording_timer(sessions: FocusSessionRepository, duration: int = DEFAULT_DURATION) -> FocusTimer:
    """A timer that logs a focus session each time its countdown finishes."""
    return FocusTimer(duration, on_complete=lambda t: record_completed(t, sessions))
