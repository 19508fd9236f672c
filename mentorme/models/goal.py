#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Goals
Goals with categories, status and detailed milestones

Version: 3.0.0
Date: 2026-10-18
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Optional

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
from mentorme.models.milestone import Milestone

logger = logging.getLogger(__name__)


class GoalStatus(Enum):
    ACTIVE = "active"        # Currently working on
    BACKLOG = "backlog"      # Planning to do later
    COMPLETED = "completed"  # Successfully finished
    ABANDONED = "abandoned"  # Decided not to pursue


class GoalCategory(Enum):
    HEALTH = "health"
    FITNESS = "fitness"
    CAREER = "career"
    LEARNING = "learning"
    RELATIONSHIPS = "relationships"
    FINANCE = "finance"
    PERSONAL = "personal"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]


_CATEGORY_NAMES = {
    GoalCategory.HEALTH: "Health & Wellness",
    GoalCategory.FITNESS: "Fitness",
    GoalCategory.CAREER: "Career",
    GoalCategory.LEARNING: "Learning",
    GoalCategory.RELATIONSHIPS: "Relationships",
    GoalCategory.FINANCE: "Finance",
    GoalCategory.PERSONAL: "Personal Development",
    GoalCategory.OTHER: "Other",
}


@dataclass(frozen=True)
class Goal(Record):
    """A user goal"""
    title: str
    description: str
    category: GoalCategory
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    target_date: Optional[datetime] = None
    milestones: List[str] = field(default_factory=list)
    milestones_detailed: List[Milestone] = field(default_factory=list)
    current_progress: int = 0
    is_active: Optional[bool] = None  # deprecated, mirrors status
    status: GoalStatus = GoalStatus.ACTIVE
    sort_order: int = 0
    linked_value_ids: Optional[List[str]] = None

    def __post_init__(self):
        object.__setattr__(self, "title", validate_text(self.title, max_length=200, field_name="title"))
        if self.is_active is None:
            object.__setattr__(self, "is_active", self.status == GoalStatus.ACTIVE)
        if not 0 <= self.current_progress <= 100:
            raise ValidationError("current_progress must be between 0 and 100")

    def copy_with(self, **changes) -> "Goal":
        if "id" in changes or "created_at" in changes:
            raise TypeError("Goal id and created_at cannot be changed")
        if "status" in changes and "is_active" not in changes:
            changes["is_active"] = changes["status"] == GoalStatus.ACTIVE
        return dataclasses.replace(self, **changes)

    @property
    def completed_milestone_count(self) -> int:
        return sum(1 for m in self.milestones_detailed if m.is_completed)

    @property
    def milestone_progress(self) -> float:
        """Share of detailed milestones completed (0.0 to 1.0)"""
        if not self.milestones_detailed:
            return 0.0
        return self.completed_milestone_count / len(self.milestones_detailed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": enum_to_legacy(self.category),
            "createdAt": datetime_utils.to_iso(self.created_at),
            "targetDate": datetime_utils.to_optional_iso(self.target_date),
            "milestones": list(self.milestones),
            "milestonesDetailed": [m.to_dict() for m in self.milestones_detailed],
            "currentProgress": self.current_progress,
            "isActive": self.is_active,
            "status": enum_to_legacy(self.status),
            "sortOrder": self.sort_order,
            "linkedValueIds": list(self.linked_value_ids) if self.linked_value_ids is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        with decoding("Goal"):
            linked = data.get("linkedValueIds")
            return cls(
                id=data.get("id") or new_id(),
                title=data["title"],
                description=data.get("description") or "",
                category=parse_enum(GoalCategory, data.get("category"), GoalCategory.OTHER),
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                target_date=datetime_utils.parse_optional_datetime(data.get("targetDate")),
                milestones=[str(m) for m in data.get("milestones") or []],
                milestones_detailed=[Milestone.from_dict(m) for m in data.get("milestonesDetailed") or []],
                current_progress=int(data.get("currentProgress") or 0),
                is_active=data.get("isActive"),
                status=parse_enum(GoalStatus, data.get("status"), GoalStatus.ACTIVE),
                sort_order=int(data.get("sortOrder") or 0),
                linked_value_ids=[str(v) for v in linked] if linked is not None else None,
            )
