from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Dict, Any, List, Optional

from mentorme.config import config
from mentorme.utils import datetime_utils
from mentorme.models.base import Record, ValidationError, decoding, new_id


@dataclass(frozen=True)
class HydrationEntry(Record):
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=lambda: datetime_utils.now())
    glasses: int = 1  # usually 1, more when batch-adding

    def __post_init__(self):
        if self.glasses < 1:
            raise ValidationError("glasses must be at least 1")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": datetime_utils.to_iso(self.timestamp),
            "glasses": self.glasses,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HydrationEntry":
        with decoding("HydrationEntry"):
            return cls(
                id=data.get("id") or new_id(),
                timestamp=datetime_utils.parse_datetime(data["timestamp"]),
                glasses=int(data.get("glasses") or 1),
            )


@dataclass(frozen=True)
class DailyHydration:
    """Water intake for one day against the glasses goal"""
    date: date
    total_glasses: int
    goal: int
    entries: List[HydrationEntry]

    @property
    def progress(self) -> float:
        if self.goal <= 0:
            return 0.0
        return min(max(self.total_glasses / self.goal, 0.0), 1.0)

    @property
    def goal_met(self) -> bool:
        return self.total_glasses >= self.goal

    @property
    def remaining(self) -> int:
        return min(max(self.goal - self.total_glasses, 0), max(self.goal, 0))

    @classmethod
    def for_day(cls, entries: List[HydrationEntry], day: date, goal: Optional[int] = None) -> "DailyHydration":
        if goal is None:
            goal = config.defaults.hydration_daily_goal
        todays = [e for e in entries if e.timestamp.date() == day]
        return cls(
            date=day,
            total_glasses=sum(e.glasses for e in todays),
            goal=goal,
            entries=todays,
        )
