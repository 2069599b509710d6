"""Tests for habitcore/app_state.py: onboarding and theme flags."""

from habitcore.app_state import AppStateStore
from habitcore.store import MemoryBlobStore


def test_defaults(store):
    s = AppStateStore(store).settings
    assert s.has_completed_onboarding is False
    assert s.is_dark_mode is False


def test_complete_onboarding_persists(store):
    AppStateStore(store).complete_onboarding()
    assert AppStateStore(store).settings.has_completed_onboarding is True


def test_toggle_theme(store):
    app = AppStateStore(store)
    assert app.toggle_theme().is_dark_mode is True
    assert app.toggle_theme().is_dark_mode is False


def test_settings_is_a_copy(store):
    app = AppStateStore(store)
    app.settings.is_dark_mode = True
    assert app.settings.is_dark_mode is False


def test_corrupt_blob_uses_defaults():
    app = AppStateStore(MemoryBlobStore({"app_state": "<<<"}))
    assert app.settings.has_completed_onboarding is False


def test_reset_app_clears_repositories(store, habits, goals, sessions):
    app = AppStateStore(store)
    app.complete_onboarding()
    sessions.add(25)
    settings = app.reset_app([habits, goals, sessions])
    assert settings.has_completed_onboarding is False
    assert habits.items == [] and goals.items == [] and sessions.items == []
