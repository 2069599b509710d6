"""Clock and calendar arithmetic in a single fixed timezone.

Every day-boundary decision in habitcore (streaks, 7-day windows, "today")
goes through a :class:`Calendar`, so the whole system agrees on what a
calendar day is. Day identity is the ``YYYY-MM-DD`` day-key.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Callable
from zoneinfo import ZoneInfo

from habitcore.workspace import get_user_timezone

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class Calendar:
    """Supplies "now" and day arithmetic for one timezone.

    ``now_fn`` lets callers pin the clock (tests, replays). It must return a
    datetime; naive values are taken to be in ``tz``.
    """

    def __init__(self, tz: ZoneInfo | None = None, now_fn: Callable[[], datetime] | None = None):
        self.tz = tz or ZoneInfo("UTC")
        self._now_fn = now_fn

    @classmethod
    def from_settings(cls, root: Path | None = None) -> Calendar:
        return cls(get_user_timezone(root))

    def localize(self, ts: datetime) -> datetime:
        if ts.tzinfo is None:
            return ts.replace(tzinfo=self.tz)
        return ts.astimezone(self.tz)

    def now(self) -> datetime:
        if self._now_fn is not None:
            return self.localize(self._now_fn())
        return datetime.now(self.tz)

    def day_key(self, ts: datetime) -> str:
        return self.localize(ts).date().isoformat()

    def today_key(self) -> str:
        return self.day_key(self.now())

    def is_same_day(self, a: datetime, b: datetime) -> bool:
        return self.localize(a).date() == self.localize(b).date()

    def add_days(self, ts: datetime, delta: int) -> datetime | None:
        """Shift by whole calendar days; None when the result is out of range."""
        local = self.localize(ts)
        try:
            shifted = local.date() + timedelta(days=delta)
        except OverflowError:
            logger.debug("Cannot shift %s by %d days", local.isoformat(), delta)
            return None
        return datetime.combine(shifted, local.timetz().replace(tzinfo=None), tzinfo=self.tz)

    def weekday_label(self, ts: datetime) -> str:
        return WEEKDAY_LABELS[self.localize(ts).weekday()]

    def parse_day_key(self, key: str) -> date | None:
        try:
            return date.fromisoformat(key)
        except (TypeError, ValueError):
            return None
