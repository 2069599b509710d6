"""Tests for habitcore/timer.py: focus countdown."""

import pytest

from habitcore.timer import DURATION_PRESETS, FocusTimer, record_completed, recording_timer


def test_defaults():
    t = FocusTimer()
    assert t.time_remaining == 1500
    assert t.formatted_time == "25:00"
    assert t.progress == 0.0
    assert t.is_running is False


def test_tick_only_while_running():
    t = FocusTimer(120)
    t.tick(10)
    assert t.time_remaining == 120
    t.start()
    t.tick(30)
    assert t.time_remaining == 90
    assert t.formatted_time == "01:30"
    assert t.progress == 0.25
    t.pause()
    t.tick(30)
    assert t.time_remaining == 90


def test_countdown_completes():
    finished = []
    t = FocusTimer(60, on_complete=finished.append)
    t.start()
    t.tick(100)
    assert t.time_remaining == 0
    assert t.is_running is False
    assert finished == [t]


def test_start_after_completion_restarts():
    t = FocusTimer(60)
    t.complete()
    t.start()
    assert t.time_remaining == 60
    assert t.is_running is True


def test_reset_and_set_duration():
    t = FocusTimer(300)
    t.start()
    t.tick(100)
    t.reset()
    assert t.time_remaining == 300
    assert t.is_running is False
    t.start()
    t.set_duration(900)
    assert (t.selected_duration, t.time_remaining, t.is_running) == (900, 900, False)


def test_invalid_duration():
    with pytest.raises(ValueError):
        FocusTimer(-1)
    with pytest.raises(ValueError):
        FocusTimer().set_duration(-60)


def test_zero_duration_progress():
    assert FocusTimer(0).progress == 0.0


def test_presets():
    assert [seconds for _, seconds in DURATION_PRESETS] == [300, 900, 1500, 3000]


def test_record_completed(sessions):
    t = FocusTimer(1500)
    t.start()
    t.tick(600)
    t.pause()
    session = record_completed(t, sessions)
    assert session.duration == 10


def test_recording_timer_logs_session(sessions):
    t = recording_timer(sessions, duration=300)
    t.start()
    for _ in range(300):
        t.tick()
    assert [s.duration for s in sessions.items] == [5]
