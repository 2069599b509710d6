"""Persisted app-level flags: onboarding and theme."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Iterable

from habitcore.models import AppSettings
from habitcore.repository import Repository
from habitcore.store import BlobStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "app_state"


class AppStateStore:
    def __init__(self, store: BlobStore):
        self.store = store
        self._settings: AppSettings | None = None

    def _load(self) -> AppSettings:
        if self._settings is None:
            self._settings = AppSettings()
            try:
                text = self.store.read(STORAGE_KEY)
                if text is not None:
                    self._settings = AppSettings.from_dict(json.loads(text))
            except (OSError, ValueError):
                logger.warning("Could not load %s, using defaults", STORAGE_KEY, exc_info=True)
        return self._settings

    def _save(self) -> None:
        try:
            self.store.write(STORAGE_KEY, json.dumps(self._load().to_dict(), indent=2) + "\n")
        except OSError:
            logger.error("Failed to persist %s", STORAGE_KEY, exc_info=True)

    @property
    def settings(self) -> AppSettings:
        return replace(self._load())

    def _set(self, **changes: Any) -> AppSettings:
        self._settings = replace(self._load(), **changes)
        self._save()
        return self.settings

    def complete_onboarding(self) -> AppSettings:
        return self._set(has_completed_onboarding=True)

    def toggle_theme(self) -> AppSettings:
        return self._set(is_dark_mode=not self._load().is_dark_mode)

    def reset_app(self, repositories: Iterable[Repository[Any]]) -> AppSettings:
        """Return to onboarding and clear every given repository, in order."""
        settings = self._set(has_completed_onboarding=False)
        for repo in repositories:
            repo.clear_all()
        return settings
