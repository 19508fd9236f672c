from datetime import timedelta

import pytest

from mentorme.models.habit import Habit, HabitFrequency, HabitMaturity, HabitStatus
from mentorme.services.habit_service import HabitService


def make_habit(**kwargs):
    return Habit(title="Journal", description="", **kwargs)


class TestStreaks:

    def test_empty(self, frozen_now):
        assert HabitService.calculate_streak([]) == 0
        assert HabitService.calculate_longest_streak([]) == 0

    def test_streak_ending_today(self, days_ago):
        dates = [days_ago(0), days_ago(1), days_ago(2), days_ago(4)]
        assert HabitService.calculate_streak(dates) == 3

    def test_streak_ending_yesterday_still_counts(self, days_ago):
        assert HabitService.calculate_streak([days_ago(1), days_ago(2)]) == 2

    def test_streak_broken_after_two_days(self, days_ago):
        assert HabitService.calculate_streak([days_ago(2), days_ago(3)]) == 0

    def test_same_day_duplicates_ignored(self, days_ago):
        dates = [days_ago(0, hour=7), days_ago(0, hour=20), days_ago(1)]
        assert HabitService.calculate_streak(dates) == 2

    def test_unsorted_input(self, days_ago):
        assert HabitService.calculate_streak([days_ago(2), days_ago(0), days_ago(1)]) == 3

    def test_longest_streak(self, days_ago):
        dates = [days_ago(n) for n in (0, 1, 5, 6, 7, 8, 20)]
        assert HabitService.calculate_longest_streak(dates) == 4

    def test_longest_streak_single_day(self, days_ago):
        assert HabitService.calculate_longest_streak([days_ago(3), days_ago(3, hour=18)]) == 1


def test_week_progress(days_ago):
    habit = make_habit(
        frequency=HabitFrequency.THREE_TIMES,
        completion_dates=[days_ago(0), days_ago(1), days_ago(7)],
    )
    assert HabitService.get_week_progress(habit) == {"completed": 2, "target": 3, "percentage": 67}


def test_should_show_reminder(days_ago):
    assert HabitService.should_show_reminder(make_habit())
    assert not HabitService.should_show_reminder(make_habit(completion_dates=[days_ago(0)]))
    assert not HabitService.should_show_reminder(make_habit(status=HabitStatus.BACKLOG))


@pytest.mark.parametrize("frequency,target_count,completions,expected", [
    (HabitFrequency.DAILY, 1, 15, 50),
    (HabitFrequency.THREE_TIMES, 1, 6, 50),
    (HabitFrequency.FIVE_TIMES, 1, 25, 100),
    (HabitFrequency.CUSTOM, 2, 3, 38),
])
def test_completion_rate(days_ago, frequency, target_count, completions, expected):
    habit = make_habit(
        frequency=frequency,
        target_count=target_count,
        completion_dates=[days_ago(n + 1) for n in range(completions)],
    )
    assert HabitService.get_completion_rate(habit) == expected


def test_completion_rate_ignores_old_completions(days_ago):
    habit = make_habit(completion_dates=[days_ago(31), days_ago(45)])
    assert HabitService.get_completion_rate(habit) == 0


def test_record_completion_updates_streaks(frozen_now, days_ago):
    habit = make_habit(completion_dates=[days_ago(1), days_ago(2)], current_streak=2, longest_streak=2)
    updated = HabitService.record_completion(habit)
    assert updated.completion_dates[-1] == frozen_now
    assert updated.current_streak == 3
    assert updated.longest_streak == 3
    assert updated.updated_at == frozen_now
    assert len(habit.completion_dates) == 2


def test_record_completion_keeps_previous_longest(days_ago):
    habit = make_habit(longest_streak=12)
    updated = HabitService.record_completion(habit, days_ago(0))
    assert updated.current_streak == 1
    assert updated.longest_streak == 12


def test_record_completion_caps_streak_until_graduation(days_ago):
    dates = [days_ago(n) for n in range(1, 10)]
    habit = make_habit(completion_dates=dates, days_to_formation=5)
    updated = HabitService.record_completion(habit, days_ago(0))
    assert updated.current_streak == 5
    assert updated.longest_streak == 10
    assert updated.can_graduate
    assert updated.maturity == HabitMaturity.FORMING


def test_record_completion_uncapped_when_ingrained(days_ago):
    dates = [days_ago(n) for n in range(1, 10)]
    habit = make_habit(completion_dates=dates, days_to_formation=5, maturity=HabitMaturity.INGRAINED)
    assert HabitService.record_completion(habit, days_ago(0)).current_streak == 10


def test_module_level_aliases(days_ago):
    from mentorme.services import habit_service
    assert habit_service.calculate_streak([days_ago(0)]) == 1
    assert habit_service.record_completion(make_habit(), days_ago(0)).current_streak == 1
