#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Wins
Small accomplishments captured manually or from goals, habits and reflections

Version: 3.0.0
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional

from mentorme.utils import datetime_utils
from mentorme.models.base import Record, decoding, new_id, parse_enum, parse_optional_enum, validate_text


class WinSource(Enum):
    REFLECTION = "reflection"
    JOURNAL = "journal"
    MANUAL = "manual"
    GOAL_COMPLETE = "goalComplete"
    MILESTONE_COMPLETE = "milestoneComplete"
    STREAK_MILESTONE = "streakMilestone"

    @property
    def display_name(self) -> str:
        return _SOURCE_INFO[self][0]

    @property
    def emoji(self) -> str:
        return _SOURCE_INFO[self][1]

    @property
    def is_automatic(self) -> bool:
        return self in (WinSource.GOAL_COMPLETE, WinSource.MILESTONE_COMPLETE, WinSource.STREAK_MILESTONE)


class WinCategory(Enum):
    HEALTH = "health"
    FITNESS = "fitness"
    CAREER = "career"
    LEARNING = "learning"
    RELATIONSHIPS = "relationships"
    FINANCE = "finance"
    PERSONAL = "personal"
    HABIT = "habit"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _CATEGORY_INFO[self][0]

    @property
    def emoji(self) -> str:
        return _CATEGORY_INFO[self][1]


_SOURCE_INFO = {
    WinSource.REFLECTION: ("Reflection", "💭"),
    WinSource.JOURNAL: ("Journal", "📝"),
    WinSource.MANUAL: ("Manual", "✨"),
    WinSource.GOAL_COMPLETE: ("Goal Completed", "🎯"),
    WinSource.MILESTONE_COMPLETE: ("Milestone Completed", "🏆"),
    WinSource.STREAK_MILESTONE: ("Streak Milestone", "🔥"),
}

_CATEGORY_INFO = {
    WinCategory.HEALTH: ("Health & Wellness", "❤️"),
    WinCategory.FITNESS: ("Fitness", "💪"),
    WinCategory.CAREER: ("Career", "💼"),
    WinCategory.LEARNING: ("Learning", "📚"),
    WinCategory.RELATIONSHIPS: ("Relationships", "👥"),
    WinCategory.FINANCE: ("Finance", "💰"),
    WinCategory.PERSONAL: ("Personal", "🌟"),
    WinCategory.HABIT: ("Habit", "🔄"),
    WinCategory.OTHER: ("Other", "✨"),
}


@dataclass(frozen=True)
class Win(Record):
    description: str
    source: WinSource
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    category: Optional[WinCategory] = None
    linked_goal_id: Optional[str] = None
    linked_habit_id: Optional[str] = None
    linked_milestone_id: Optional[str] = None
    source_session_id: Optional[str] = None  # reflection/journal session that captured it

    def __post_init__(self):
        object.__setattr__(self, "description", validate_text(self.description, field_name="description"))

    @property
    def emoji(self) -> str:
        """Category emoji when categorized, otherwise the source emoji"""
        return self.category.emoji if self.category else self.source.emoji

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "createdAt": datetime_utils.to_iso(self.created_at),
            "source": self.source.value,
            "category": self.category.value if self.category else None,
            "linkedGoalId": self.linked_goal_id,
            "linkedHabitId": self.linked_habit_id,
            "linkedMilestoneId": self.linked_milestone_id,
            "sourceSessionId": self.source_session_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Win":
        with decoding("Win"):
            return cls(
                id=data.get("id") or new_id(),
                description=data["description"],
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                source=parse_enum(WinSource, data.get("source"), WinSource.MANUAL),
                category=parse_optional_enum(WinCategory, data.get("category"), WinCategory.OTHER),
                linked_goal_id=data.get("linkedGoalId"),
                linked_habit_id=data.get("linkedHabitId"),
                linked_milestone_id=data.get("linkedMilestoneId"),
                source_session_id=data.get("sourceSessionId"),
            )
