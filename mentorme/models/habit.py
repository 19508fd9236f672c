#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Habits
Habit records with frequency, streak counters and the maturity lifecycle

Habits take ~66 days to form on average, so a habit moves from forming to
ingrained once its streak reaches days_to_formation and the user graduates it.

Version: 3.0.0
Date: 2026-10-18
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.config import config
from mentorme.utils import datetime_utils
from mentorme.models.base import (
    Record,
    ValidationError,
    decoding,
    enum_to_legacy,
    new_id,
    parse_enum,
    validate_text,
)

logger = logging.getLogger(__name__)

# ===== ENUMS =====


class HabitStatus(Enum):
    """Habit lifecycle status"""
    ACTIVE = "active"        # Currently working on
    BACKLOG = "backlog"      # Planning to do later
    COMPLETED = "completed"  # Established as routine
    ABANDONED = "abandoned"  # Decided not to pursue


class HabitMaturity(Enum):
    """Progression from a new habit to ingrained behavior"""
    FORMING = "forming"          # 0-21 days
    ESTABLISHED = "established"  # 22-65 days
    INGRAINED = "ingrained"      # 66+ days, graduated

    @property
    def display_name(self) -> str:
        return _MATURITY_NAMES[self]

    @property
    def description(self) -> str:
        return _MATURITY_DESCRIPTIONS[self]

    @classmethod
    def for_streak(cls, days: int) -> "HabitMaturity":
        """Label for a streak length. Descriptive only, never applied to a habit."""
        if days >= 66:
            return cls.INGRAINED
        if days >= 22:
            return cls.ESTABLISHED
        return cls.FORMING


class HabitFrequency(Enum):
    DAILY = "daily"
    THREE_TIMES = "threeTimes"  # 3x per week
    FIVE_TIMES = "fiveTimes"    # 5x per week
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return _FREQUENCY_NAMES[self]

    @property
    def weekly_target(self) -> int:
        return _FREQUENCY_WEEKLY_TARGETS[self]


_MATURITY_NAMES = {
    HabitMaturity.FORMING: "Forming",
    HabitMaturity.ESTABLISHED: "Established",
    HabitMaturity.INGRAINED: "Ingrained",
}

_MATURITY_DESCRIPTIONS = {
    HabitMaturity.FORMING: "Building this habit - keep tracking!",
    HabitMaturity.ESTABLISHED: "Getting consistent - almost there!",
    HabitMaturity.INGRAINED: "This habit is now automatic",
}

_FREQUENCY_NAMES = {
    HabitFrequency.DAILY: "Daily",
    HabitFrequency.THREE_TIMES: "3x per week",
    HabitFrequency.FIVE_TIMES: "5x per week",
    HabitFrequency.CUSTOM: "Custom",
}

_FREQUENCY_WEEKLY_TARGETS = {
    HabitFrequency.DAILY: 7,
    HabitFrequency.THREE_TIMES: 3,
    HabitFrequency.FIVE_TIMES: 5,
    HabitFrequency.CUSTOM: 1,
}

# ===== MODELS =====


@dataclass(frozen=True)
class Habit(Record):
    """A recurring habit with completion history"""
    title: str
    description: str
    id: str = field(default_factory=new_id)
    linked_goal_id: Optional[str] = None
    frequency: HabitFrequency = HabitFrequency.DAILY
    target_count: int = 1  # e.g. 3 times per week
    completion_dates: List[datetime] = field(default_factory=list)
    current_streak: int = 0
    longest_streak: int = 0
    is_active: Optional[bool] = None  # deprecated, mirrors status
    status: HabitStatus = HabitStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    updated_at: Optional[datetime] = None
    is_system_created: bool = False
    system_type: Optional[str] = None  # e.g. 'daily_reflection'
    sort_order: int = 0
    maturity: HabitMaturity = HabitMaturity.FORMING
    days_to_formation: int = field(default_factory=lambda: config.defaults.habit_days_to_formation)
    graduated_at: Optional[datetime] = None
    is_focused: bool = False

    def __post_init__(self):
        object.__setattr__(self, "title", validate_text(self.title, max_length=200, field_name="title"))

        if self.is_active is None:
            object.__setattr__(self, "is_active", self.status == HabitStatus.ACTIVE)
        if self.updated_at is None:
            object.__setattr__(self, "updated_at", self.created_at)

        if self.target_count < 1:
            raise ValidationError("target_count must be at least 1")
        if self.days_to_formation <= 0:
            raise ValidationError("days_to_formation must be positive")
        if self.current_streak < 0 or self.longest_streak < 0:
            raise ValidationError("streaks cannot be negative")

        # current streak stops at days_to_formation until the habit graduates
        if self.maturity != HabitMaturity.INGRAINED and self.current_streak > self.days_to_formation:
            logger.debug(f"Capping streak {self.current_streak} of habit {self.id} at {self.days_to_formation}")
            object.__setattr__(self, "current_streak", self.days_to_formation)

    def copy_with(self, **changes) -> "Habit":
        if "id" in changes:
            raise TypeError("Habit id cannot be changed")
        # keep the deprecated flag in sync when only status is given
        if "status" in changes and "is_active" not in changes:
            changes["is_active"] = changes["status"] == HabitStatus.ACTIVE
        changes["updated_at"] = datetime_utils.now()
        return dataclasses.replace(self, **changes)

    # ===== MATURITY =====

    def graduate(self) -> "Habit":
        """Mark the habit as ingrained"""
        logger.info(f"Habit {self.id} graduated after {self.current_streak} day streak")
        return self.copy_with(
            maturity=HabitMaturity.INGRAINED,
            graduated_at=datetime_utils.now(),
        )

    @property
    def can_graduate(self) -> bool:
        return self.current_streak >= self.days_to_formation and self.maturity != HabitMaturity.INGRAINED

    @property
    def formation_progress(self) -> float:
        """Progress toward graduation (0.0 to 1.0)"""
        return min(max(self.current_streak / self.days_to_formation, 0.0), 1.0)

    @property
    def days_until_graduation(self) -> int:
        return min(max(self.days_to_formation - self.current_streak, 0), self.days_to_formation)

    # ===== COMPLETIONS =====

    @property
    def is_completed_today(self) -> bool:
        today = datetime_utils.today()
        return any(d.date() == today for d in self.completion_dates)

    def weekly_progress(self) -> int:
        """Completions in the current Monday-Sunday week"""
        week_start = datetime_utils.start_of_week(datetime_utils.today())
        week_end = week_start + timedelta(days=7)
        return sum(1 for d in self.completion_dates if week_start <= d.date() < week_end)

    def last_7_days(self) -> List[bool]:
        """Completion flags for the last 7 days, oldest first"""
        today = datetime_utils.today()
        completed_days = {d.date() for d in self.completion_dates}
        return [(today - timedelta(days=i)) in completed_days for i in range(6, -1, -1)]

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "linkedGoalId": self.linked_goal_id,
            "frequency": enum_to_legacy(self.frequency),
            "targetCount": self.target_count,
            "completionDates": [datetime_utils.to_iso(d) for d in self.completion_dates],
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "isActive": self.is_active,
            "status": enum_to_legacy(self.status),
            "createdAt": datetime_utils.to_iso(self.created_at),
            "updatedAt": datetime_utils.to_iso(self.updated_at),
            "isSystemCreated": self.is_system_created,
            "systemType": self.system_type,
            "sortOrder": self.sort_order,
            "maturity": enum_to_legacy(self.maturity),
            "daysToFormation": self.days_to_formation,
            "graduatedAt": datetime_utils.to_optional_iso(self.graduated_at),
            "isFocused": self.is_focused,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        with decoding("Habit"):
            created_at = datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now()
            return cls(
                id=data.get("id") or new_id(),
                title=data["title"],
                description=data.get("description") or "",
                linked_goal_id=data.get("linkedGoalId"),
                frequency=parse_enum(HabitFrequency, data.get("frequency"), HabitFrequency.DAILY),
                target_count=int(data.get("targetCount") or 1),
                completion_dates=[
                    datetime_utils.parse_datetime(d) for d in data.get("completionDates") or []
                ],
                current_streak=int(data.get("currentStreak") or 0),
                longest_streak=int(data.get("longestStreak") or 0),
                is_active=data.get("isActive"),
                status=parse_enum(HabitStatus, data.get("status"), HabitStatus.ACTIVE),
                created_at=created_at,
                updated_at=datetime_utils.parse_optional_datetime(data.get("updatedAt")),
                is_system_created=bool(data.get("isSystemCreated", False)),
                system_type=data.get("systemType"),
                sort_order=int(data.get("sortOrder") or 0),
                maturity=parse_enum(HabitMaturity, data.get("maturity"), HabitMaturity.FORMING),
                days_to_formation=int(data.get("daysToFormation") or config.defaults.habit_days_to_formation),
                graduated_at=datetime_utils.parse_optional_datetime(data.get("graduatedAt")),
                is_focused=bool(data.get("isFocused", False)),
            )
