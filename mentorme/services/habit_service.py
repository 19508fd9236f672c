# mentorme/services/habit_service.py

import logging
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from mentorme.utils import datetime_utils
from mentorme.models.habit import Habit, HabitFrequency, HabitMaturity

logger = logging.getLogger(__name__)

# Expected completions over a 30 day window (~4 weeks)
_EXPECTED_MONTHLY = {
    HabitFrequency.DAILY: 30,
    HabitFrequency.THREE_TIMES: 12,
    HabitFrequency.FIVE_TIMES: 20,
}


class HabitService:
    """
    Stateless streak and progress calculations for habits

    All "today" comparisons use calendar days in the configured timezone.
    """

    @staticmethod
    def calculate_streak(dates: Iterable[datetime]) -> int:
        """Current streak: consecutive days ending at the latest completion.

        Broken (0) when the latest completion is older than yesterday.
        """
        days = sorted({d.date() for d in dates}, reverse=True)
        if not days:
            return 0

        if datetime_utils.days_between(days[0], datetime_utils.today()) > 1:
            return 0

        streak = 1
        for previous, current in zip(days, days[1:]):
            if previous - current != timedelta(days=1):
                break
            streak += 1
        return streak

    @staticmethod
    def calculate_longest_streak(dates: Iterable[datetime]) -> int:
        runs = datetime_utils.consecutive_day_runs(d.date() for d in dates)
        return max(runs) if runs else 0

    @staticmethod
    def get_week_progress(habit: Habit) -> Dict[str, int]:
        completed = habit.weekly_progress()
        target = habit.frequency.weekly_target
        return {
            "completed": completed,
            "target": target,
            "percentage": _round_half_up(completed / target * 100) if target > 0 else 0,
        }

    @staticmethod
    def should_show_reminder(habit: Habit) -> bool:
        return bool(habit.is_active) and not habit.is_completed_today

    @staticmethod
    def get_completion_rate(habit: Habit) -> int:
        """Percentage of expected completions achieved in the last 30 days"""
        now = datetime_utils.now()
        window_start = now - timedelta(days=30)
        recent = sum(1 for d in habit.completion_dates if window_start < d < now)

        expected = _EXPECTED_MONTHLY.get(habit.frequency, habit.target_count * 4)
        if expected <= 0:
            return 0
        return _round_half_up(min(max(recent / expected * 100, 0.0), 100.0))

    @classmethod
    def record_completion(cls, habit: Habit, when: Optional[datetime] = None) -> Habit:
        """Append a completion and recompute both streak counters.

        Until a habit is graduated its current streak never exceeds
        days_to_formation.
        """
        when = when or datetime_utils.now()
        dates: List[datetime] = list(habit.completion_dates) + [when]

        current = cls.calculate_streak(dates)
        if habit.maturity != HabitMaturity.INGRAINED:
            current = min(current, habit.days_to_formation)
        longest = max(cls.calculate_longest_streak(dates), habit.longest_streak, current)

        updated = habit.copy_with(
            completion_dates=dates,
            current_streak=current,
            longest_streak=longest,
        )
        if updated.can_graduate:
            logger.info(f"Habit {habit.id} reached {current} days and can graduate")
        else:
            logger.debug(f"Habit {habit.id} completion recorded, streak {current}")
        return updated


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


calculate_streak = HabitService.calculate_streak
calculate_longest_streak = HabitService.calculate_longest_streak
get_week_progress = HabitService.get_week_progress
should_show_reminder = HabitService.should_show_reminder
get_completion_rate = HabitService.get_completion_rate
record_completion = HabitService.record_completion
