#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Fasting
Intermittent fasting protocols, fasts, eating-window goals and summaries

Version: 3.0.0
Date: 2026-10-18
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.models.base import Record, ValidationError, decoding, new_id, parse_enum

MINUTES_PER_DAY = 24 * 60


class FastingProtocol(Enum):
    CUSTOM = "custom"
    FASTING_12_12 = "fasting12_12"
    FASTING_14_10 = "fasting14_10"
    FASTING_16_8 = "fasting16_8"  # most popular
    FASTING_18_6 = "fasting18_6"
    FASTING_20_4 = "fasting20_4"  # warrior diet
    FASTING_23_1 = "fasting23_1"  # one meal a day
    FASTING_24 = "fasting24"
    FASTING_36 = "fasting36"
    FASTING_48 = "fasting48"

    @property
    def display_name(self) -> str:
        return _PROTOCOL_INFO[self][0]

    @property
    def description(self) -> str:
        return _PROTOCOL_INFO[self][1]

    @property
    def target_hours(self) -> int:
        return _PROTOCOL_INFO[self][2]


_PROTOCOL_INFO = {
    FastingProtocol.CUSTOM: ("Custom", "Set your own fasting duration", 16),
    FastingProtocol.FASTING_12_12: ("12:12", "12 hours fasting, 12 hours eating", 12),
    FastingProtocol.FASTING_14_10: ("14:10", "14 hours fasting, 10 hours eating", 14),
    FastingProtocol.FASTING_16_8: ("16:8", "16 hours fasting, 8 hours eating window", 16),
    FastingProtocol.FASTING_18_6: ("18:6", "18 hours fasting, 6 hours eating window", 18),
    FastingProtocol.FASTING_20_4: ("20:4", "20 hours fasting, 4 hours eating (Warrior Diet)", 20),
    FastingProtocol.FASTING_23_1: ("OMAD (23:1)", "23 hours fasting, one meal per day", 23),
    FastingProtocol.FASTING_24: ("24 Hour", "Full day fast (dinner to dinner)", 24),
    FastingProtocol.FASTING_36: ("36 Hour", "Extended fast for deeper benefits", 36),
    FastingProtocol.FASTING_48: ("48 Hour", "Extended fast - consult healthcare provider", 48),
}


class FastingPhase(Enum):
    FASTING = "fasting"
    EATING_WINDOW = "eatingWindow"


@dataclass(frozen=True)
class FastingEntry(Record):
    """One fast. end_time stays None while the fast is running."""
    start_time: datetime
    target_hours: int
    id: str = field(default_factory=new_id)
    end_time: Optional[datetime] = None
    protocol: FastingProtocol = FastingProtocol.FASTING_16_8
    note: Optional[str] = None

    def __post_init__(self):
        if self.target_hours <= 0:
            raise ValidationError("target_hours must be positive")
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValidationError("end_time cannot be before start_time")

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def duration(self) -> timedelta:
        end = self.end_time if self.end_time is not None else datetime_utils.now()
        return end - self.start_time

    @property
    def target_duration(self) -> timedelta:
        return timedelta(hours=self.target_hours)

    @property
    def progress(self) -> float:
        """Elapsed share of the target, may exceed 1.0"""
        return self.duration / self.target_duration

    @property
    def goal_met(self) -> bool:
        return self.duration >= self.target_duration

    @property
    def time_remaining(self) -> timedelta:
        """Negative once the target has been passed"""
        return self.target_duration - self.duration

    def complete(self, at: Optional[datetime] = None) -> "FastingEntry":
        return dataclasses.replace(self, end_time=at or datetime_utils.now())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "startTime": datetime_utils.to_iso(self.start_time),
            "endTime": datetime_utils.to_optional_iso(self.end_time),
            "targetHours": self.target_hours,
            "protocol": self.protocol.value,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FastingEntry":
        with decoding("FastingEntry"):
            return cls(
                id=data.get("id") or new_id(),
                start_time=datetime_utils.parse_datetime(data["startTime"]),
                end_time=datetime_utils.parse_optional_datetime(data.get("endTime")),
                target_hours=int(data["targetHours"]),
                protocol=parse_enum(FastingProtocol, data.get("protocol"), FastingProtocol.FASTING_16_8),
                note=data.get("note"),
            )


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour <= 23 or not 0 <= self.minute <= 59:
            raise ValidationError(f"Invalid time of day {self.hour}:{self.minute}")

    @property
    def minutes(self) -> int:
        """Minutes since midnight"""
        return self.hour * 60 + self.minute

    def format(self) -> str:
        """'12:00 PM'"""
        return datetime_utils.format_time_12h(self.hour, self.minute)

    def to_dict(self) -> Dict[str, Any]:
        return {"hour": self.hour, "minute": self.minute}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeOfDay":
        with decoding("TimeOfDay"):
            return cls(hour=int(data["hour"]), minute=int(data["minute"]))


def _optional_time(raw: Any) -> Optional[TimeOfDay]:
    return TimeOfDay.from_dict(raw) if raw is not None else None


_DEFAULT_WINDOW_STARTS = {
    FastingProtocol.FASTING_12_12: TimeOfDay(8, 0),
    FastingProtocol.FASTING_14_10: TimeOfDay(10, 0),
    FastingProtocol.FASTING_16_8: TimeOfDay(12, 0),
    FastingProtocol.FASTING_18_6: TimeOfDay(13, 0),
    FastingProtocol.FASTING_20_4: TimeOfDay(14, 0),
    FastingProtocol.FASTING_23_1: TimeOfDay(18, 0),  # dinner
}


@dataclass(frozen=True)
class FastingGoal(Record):
    """User's fasting plan and daily eating window"""
    protocol: FastingProtocol = FastingProtocol.FASTING_16_8
    custom_target_hours: int = 16  # used by the custom protocol
    weekly_fasting_days: int = 7
    preferred_start_time: Optional[TimeOfDay] = None
    eating_window_start: Optional[TimeOfDay] = None
    eating_window_end: Optional[TimeOfDay] = None

    def __post_init__(self):
        if not 0 <= self.weekly_fasting_days <= 7:
            raise ValidationError("weekly_fasting_days must be between 0 and 7")

    @property
    def target_hours(self) -> int:
        if self.protocol == FastingProtocol.CUSTOM:
            return self.custom_target_hours
        return self.protocol.target_hours

    @property
    def eating_window_hours(self) -> int:
        return 24 - self.target_hours

    @property
    def _has_window(self) -> bool:
        return self.eating_window_start is not None and self.eating_window_end is not None

    def get_current_phase(self, now: Optional[datetime] = None) -> FastingPhase:
        """Fasting unless now falls in the eating window, which may cross midnight"""
        if not self._has_window:
            return FastingPhase.FASTING

        now = now or datetime_utils.now()
        current = now.hour * 60 + now.minute
        start = self.eating_window_start.minutes
        end = self.eating_window_end.minutes

        if start > end:
            eating = current >= start or current < end
        else:
            eating = start <= current < end
        return FastingPhase.EATING_WINDOW if eating else FastingPhase.FASTING

    def get_time_until_next_phase(self, now: Optional[datetime] = None) -> timedelta:
        if not self._has_window:
            return timedelta(0)

        now = now or datetime_utils.now()
        current = now.hour * 60 + now.minute
        if self.get_current_phase(now) == FastingPhase.FASTING:
            target = self.eating_window_start.minutes
        else:
            target = self.eating_window_end.minutes

        if target > current:
            return timedelta(minutes=target - current)
        return timedelta(minutes=MINUTES_PER_DAY - current + target)

    @staticmethod
    def default_eating_window_start(protocol: FastingProtocol) -> TimeOfDay:
        return _DEFAULT_WINDOW_STARTS.get(protocol, TimeOfDay(12, 0))

    @staticmethod
    def default_eating_window_end(protocol: FastingProtocol) -> TimeOfDay:
        start = FastingGoal.default_eating_window_start(protocol)
        eating_hours = 24 - protocol.target_hours
        return TimeOfDay((start.hour + eating_hours) % 24, start.minute)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "protocol": self.protocol.value,
            "customTargetHours": self.custom_target_hours,
            "weeklyFastingDays": self.weekly_fasting_days,
            "preferredStartTime": self.preferred_start_time.to_dict() if self.preferred_start_time else None,
            "eatingWindowStart": self.eating_window_start.to_dict() if self.eating_window_start else None,
            "eatingWindowEnd": self.eating_window_end.to_dict() if self.eating_window_end else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FastingGoal":
        with decoding("FastingGoal"):
            return cls(
                protocol=parse_enum(FastingProtocol, data.get("protocol"), FastingProtocol.FASTING_16_8),
                custom_target_hours=int(data.get("customTargetHours") or 16),
                weekly_fasting_days=int(data.get("weeklyFastingDays", 7)),
                preferred_start_time=_optional_time(data.get("preferredStartTime")),
                eating_window_start=_optional_time(data.get("eatingWindowStart")),
                eating_window_end=_optional_time(data.get("eatingWindowEnd")),
            )


@dataclass(frozen=True)
class FastingSummary:
    total_fasts: int
    completed_fasts: int  # fasts that met their goal
    current_streak: int   # consecutive days with a successful fast
    longest_streak: int
    average_fast_duration: timedelta
    longest_fast_duration: timedelta

    @property
    def completion_rate(self) -> float:
        return self.completed_fasts / self.total_fasts if self.total_fasts else 0.0

    @classmethod
    def from_entries(cls, entries: List[FastingEntry]) -> "FastingSummary":
        """Summary over finished fasts. Running fasts are ignored."""
        finished = [e for e in entries if not e.is_active]
        durations = [e.duration for e in finished]
        success_days = sorted({e.end_time.date() for e in finished if e.goal_met})

        runs = datetime_utils.consecutive_day_runs(success_days)
        current = 0
        if success_days and (datetime_utils.today() - success_days[-1]).days <= 1:
            current = runs[-1]

        return cls(
            total_fasts=len(finished),
            completed_fasts=sum(1 for e in finished if e.goal_met),
            current_streak=current,
            longest_streak=max(runs, default=0),
            average_fast_duration=sum(durations, timedelta(0)) / len(durations) if durations else timedelta(0),
            longest_fast_duration=max(durations, default=timedelta(0)),
        )
