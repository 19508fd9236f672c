from datetime import timedelta

import pytest

from mentorme.models.base import ValidationError
from mentorme.models.hydration import DailyHydration, HydrationEntry


def test_entry_defaults(frozen_now):
    entry = HydrationEntry()
    assert entry.glasses == 1
    assert entry.timestamp == frozen_now
    with pytest.raises(ValidationError):
        HydrationEntry(glasses=0)


def test_for_day(frozen_now):
    entries = [
        HydrationEntry(timestamp=frozen_now, glasses=2),
        HydrationEntry(timestamp=frozen_now - timedelta(hours=3)),
        HydrationEntry(timestamp=frozen_now - timedelta(days=1), glasses=5),
    ]
    day = DailyHydration.for_day(entries, frozen_now.date())
    assert day.goal == 8
    assert day.total_glasses == 3
    assert len(day.entries) == 2
    assert day.progress == 3 / 8
    assert day.remaining == 5
    assert not day.goal_met


def test_goal_exceeded(frozen_now):
    day = DailyHydration.for_day([HydrationEntry(glasses=10)], frozen_now.date(), goal=6)
    assert day.progress == 1.0
    assert day.remaining == 0
    assert day.goal_met


def test_entry_json(frozen_now):
    entry = HydrationEntry(glasses=2)
    assert HydrationEntry.from_dict(entry.to_dict()) == entry
