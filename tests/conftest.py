from datetime import datetime, timedelta

import pytest

from mentorme.utils import datetime_utils

# Wednesday
FIXED_NOW = datetime(2026, 3, 18, 10, 30)


@pytest.fixture
def frozen_now(monkeypatch):
    """Pin datetime_utils.now() to FIXED_NOW"""
    monkeypatch.setattr(datetime_utils, "now", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def days_ago(frozen_now):
    """Datetime n calendar days before the frozen now, at the given hour"""
    def _days_ago(n: int, hour: int = 9) -> datetime:
        return frozen_now.replace(hour=hour, minute=0) - timedelta(days=n)
    return _days_ago
