from datetime import datetime, timedelta

import pytest

from mentorme.models.base import ValidationError
from mentorme.models.fasting import (
    FastingEntry,
    FastingGoal,
    FastingPhase,
    FastingProtocol,
    FastingSummary,
    TimeOfDay,
)


def test_protocol_table():
    assert FastingProtocol.FASTING_16_8.display_name == "16:8"
    assert FastingProtocol.FASTING_23_1.target_hours == 23
    assert FastingProtocol.FASTING_16_8.value == "fasting16_8"


def test_active_fast(frozen_now):
    entry = FastingEntry(start_time=frozen_now - timedelta(hours=12), target_hours=16)
    assert entry.is_active
    assert entry.duration == timedelta(hours=12)
    assert entry.progress == 0.75
    assert not entry.goal_met
    assert entry.time_remaining == timedelta(hours=4)


def test_completed_fast(frozen_now):
    start = frozen_now - timedelta(hours=18)
    entry = FastingEntry(start_time=start, target_hours=16).complete()
    assert not entry.is_active
    assert entry.end_time == frozen_now
    assert entry.goal_met
    assert entry.time_remaining == timedelta(hours=-2)


def test_validation(frozen_now):
    with pytest.raises(ValidationError):
        FastingEntry(start_time=frozen_now, target_hours=0)
    with pytest.raises(ValidationError):
        FastingEntry(start_time=frozen_now, end_time=frozen_now - timedelta(minutes=1), target_hours=16)


def test_entry_json(frozen_now):
    entry = FastingEntry(start_time=frozen_now - timedelta(hours=16), end_time=frozen_now, target_hours=16,
                         protocol=FastingProtocol.FASTING_16_8, note="easy")
    data = entry.to_dict()
    assert data["protocol"] == "fasting16_8"
    assert FastingEntry.from_dict(data) == entry


def test_time_of_day():
    assert TimeOfDay(12, 0).format() == "12:00 PM"
    assert TimeOfDay(0, 5).format() == "12:05 AM"
    assert TimeOfDay(20, 30).minutes == 1230
    with pytest.raises(ValidationError):
        TimeOfDay(24, 0)


class TestFastingGoal:

    def test_target_hours(self):
        assert FastingGoal().target_hours == 16
        assert FastingGoal().eating_window_hours == 8
        assert FastingGoal(protocol=FastingProtocol.CUSTOM, custom_target_hours=15).target_hours == 15

    def test_weekly_days_range(self):
        with pytest.raises(ValidationError):
            FastingGoal(weekly_fasting_days=8)

    def test_phase_with_daytime_window(self):
        goal = FastingGoal(eating_window_start=TimeOfDay(12, 0), eating_window_end=TimeOfDay(20, 0))
        assert goal.get_current_phase(datetime(2026, 3, 18, 13, 0)) == FastingPhase.EATING_WINDOW
        assert goal.get_current_phase(datetime(2026, 3, 18, 20, 0)) == FastingPhase.FASTING
        assert goal.get_time_until_next_phase(datetime(2026, 3, 18, 10, 30)) == timedelta(minutes=90)
        assert goal.get_time_until_next_phase(datetime(2026, 3, 18, 21, 0)) == timedelta(hours=15)

    def test_phase_with_window_crossing_midnight(self):
        goal = FastingGoal(eating_window_start=TimeOfDay(20, 0), eating_window_end=TimeOfDay(2, 0))
        assert goal.get_current_phase(datetime(2026, 3, 18, 23, 0)) == FastingPhase.EATING_WINDOW
        assert goal.get_current_phase(datetime(2026, 3, 18, 1, 0)) == FastingPhase.EATING_WINDOW
        assert goal.get_current_phase(datetime(2026, 3, 18, 12, 0)) == FastingPhase.FASTING
        assert goal.get_time_until_next_phase(datetime(2026, 3, 18, 23, 0)) == timedelta(hours=3)

    def test_no_window_means_fasting(self):
        assert FastingGoal().get_current_phase(datetime(2026, 3, 18, 13, 0)) == FastingPhase.FASTING
        assert FastingGoal().get_time_until_next_phase(datetime(2026, 3, 18, 13, 0)) == timedelta(0)

    def test_default_windows(self):
        assert FastingGoal.default_eating_window_start(FastingProtocol.FASTING_16_8) == TimeOfDay(12, 0)
        assert FastingGoal.default_eating_window_end(FastingProtocol.FASTING_16_8) == TimeOfDay(20, 0)
        assert FastingGoal.default_eating_window_end(FastingProtocol.FASTING_23_1) == TimeOfDay(19, 0)
        assert FastingGoal.default_eating_window_start(FastingProtocol.FASTING_48) == TimeOfDay(12, 0)

    def test_json(self):
        goal = FastingGoal(protocol=FastingProtocol.FASTING_18_6, weekly_fasting_days=5,
                           eating_window_start=TimeOfDay(13, 0), eating_window_end=TimeOfDay(19, 0))
        data = goal.to_dict()
        assert data["eatingWindowStart"] == {"hour": 13, "minute": 0}
        assert FastingGoal.from_dict(data) == goal


def _fast(end, hours, target=16):
    return FastingEntry(start_time=end - timedelta(hours=hours), end_time=end, target_hours=target)


def test_summary(frozen_now, days_ago):
    entries = [
        _fast(days_ago(0), 16),
        _fast(days_ago(1), 17),
        _fast(days_ago(2), 12),   # missed
        _fast(days_ago(3), 16),
        _fast(days_ago(4), 16),
        _fast(days_ago(5), 16),
        FastingEntry(start_time=frozen_now - timedelta(hours=2), target_hours=16),  # running
    ]
    summary = FastingSummary.from_entries(entries)
    assert summary.total_fasts == 6
    assert summary.completed_fasts == 5
    assert summary.current_streak == 2
    assert summary.longest_streak == 3
    assert summary.longest_fast_duration == timedelta(hours=17)
    assert summary.average_fast_duration == timedelta(hours=93 / 6)
    assert summary.completion_rate == pytest.approx(5 / 6)


def test_summary_streak_lapses(days_ago):
    summary = FastingSummary.from_entries([_fast(days_ago(3), 16), _fast(days_ago(4), 16)])
    assert summary.current_streak == 0
    assert summary.longest_streak == 2


def test_empty_summary(frozen_now):
    summary = FastingSummary.from_entries([])
    assert summary.completion_rate == 0.0
    assert summary.average_fast_duration == timedelta(0)
