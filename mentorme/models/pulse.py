#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Pulse check-ins
Quick wellness check-ins with user-defined 1-5 metrics

Older check-ins stored a single MoodRating plus an energy level. They are
converted to the metric map when loaded and never written back.

Version: 3.0.0
Date: 2026-10-18
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.utils.validators import is_valid_hex_color
from mentorme.models.base import Record, ValidationError, decoding, new_id, parse_enum, validate_scale, validate_text

logger = logging.getLogger(__name__)


class MoodRating(Enum):
    NOT_SET = "notSet"
    VERY_BAD = "veryBad"
    BAD = "bad"
    NEUTRAL = "neutral"
    GOOD = "good"
    EXCELLENT = "excellent"

    @property
    def emoji(self) -> str:
        return _MOOD_INFO[self][0]

    @property
    def display_name(self) -> str:
        return _MOOD_INFO[self][1]

    @property
    def is_set(self) -> bool:
        return self != MoodRating.NOT_SET

    @property
    def score(self) -> int:
        """Position on the 1-5 scale, 0 when not set"""
        return list(MoodRating).index(self)


_MOOD_INFO = {
    MoodRating.NOT_SET: ("—", "Not Set"),
    MoodRating.VERY_BAD: ("😞", "Very Bad"),
    MoodRating.BAD: ("😕", "Bad"),
    MoodRating.NEUTRAL: ("😐", "Neutral"),
    MoodRating.GOOD: ("🙂", "Good"),
    MoodRating.EXCELLENT: ("😄", "Excellent"),
}


def _legacy_metrics(data: Dict[str, Any]) -> Dict[str, int]:
    """Build customMetrics from the old mood / energyLevel fields"""
    metrics = {}
    mood = parse_enum(MoodRating, data.get("mood"), MoodRating.NOT_SET)
    if mood.is_set:
        metrics["Mood"] = mood.score
    energy = data.get("energyLevel")
    if energy is not None and int(energy) > 0:
        metrics["Energy"] = int(energy)
    if metrics:
        logger.debug(f"Migrated legacy pulse entry {data.get('id')} to metrics {metrics}")
    return metrics


@dataclass(frozen=True)
class PulseEntry(Record):
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=lambda: datetime_utils.now())
    custom_metrics: Dict[str, int] = field(default_factory=dict)  # metric name -> 1-5
    journal_entry_id: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        for name, value in self.custom_metrics.items():
            validate_scale(value, f"metric {name!r}")

    @property
    def has_valid_data(self) -> bool:
        return bool(self.custom_metrics)

    @property
    def date_display(self) -> str:
        """'Today', 'Yesterday' or M/D/YYYY"""
        today = datetime_utils.today()
        day = self.timestamp.date()
        if day == today:
            return "Today"
        if day == today - timedelta(days=1):
            return "Yesterday"
        return f"{day.month}/{day.day}/{day.year}"

    @property
    def time_display(self) -> str:
        return datetime_utils.format_time_12h(self.timestamp.hour, self.timestamp.minute)

    @property
    def check_in_type_name(self) -> str:
        if not self.custom_metrics:
            return "Pulse Check"
        if len(self.custom_metrics) == 1:
            return f"{next(iter(self.custom_metrics))} Check"
        return "Wellness Check"

    def get_metric(self, name: str) -> Optional[int]:
        return self.custom_metrics.get(name)

    def has_metric(self, name: str) -> bool:
        return name in self.custom_metrics

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": datetime_utils.to_iso(self.timestamp),
            "customMetrics": dict(self.custom_metrics),
            "journalEntryId": self.journal_entry_id,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PulseEntry":
        with decoding("PulseEntry"):
            metrics = data.get("customMetrics")
            if metrics is None:
                metrics = _legacy_metrics(data)
            return cls(
                id=data.get("id") or new_id(),
                timestamp=datetime_utils.parse_optional_datetime(data.get("timestamp")) or datetime_utils.now(),
                custom_metrics={str(k): int(v) for k, v in metrics.items()},
                journal_entry_id=data.get("journalEntryId"),
                notes=data.get("notes"),
            )


@dataclass(frozen=True)
class PulseType(Record):
    """A user-defined metric tracked in pulse check-ins"""
    name: str
    icon_name: str  # e.g. 'mood', 'bolt'
    color_hex: str  # AARRGGBB
    id: str = field(default_factory=new_id)
    is_active: bool = True
    order: int = 0
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "name", validate_text(self.name, max_length=50, field_name="name"))
        if not is_valid_hex_color(self.color_hex):
            raise ValidationError(f"Invalid color {self.color_hex!r}")

    def copy_with(self, **changes) -> "PulseType":
        if "id" in changes or "created_at" in changes:
            raise TypeError("PulseType id and created_at cannot be changed")
        changes.setdefault("updated_at", datetime_utils.now())
        return dataclasses.replace(self, **changes)

    @staticmethod
    def get_defaults() -> List["PulseType"]:
        return [
            PulseType(name="Mood", icon_name="mood", color_hex="FFE91E63", order=1),
            PulseType(name="Energy", icon_name="bolt", color_hex="FFFFB300", order=2),
            PulseType(name="Wellness", icon_name="favorite", color_hex="FF2196F3", order=3),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "iconName": self.icon_name,
            "colorHex": self.color_hex,
            "isActive": self.is_active,
            "order": self.order,
            "createdAt": datetime_utils.to_iso(self.created_at),
            "updatedAt": datetime_utils.to_optional_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PulseType":
        with decoding("PulseType"):
            if data.get("iconName") is not None:
                icon_name = data["iconName"]
            elif data.get("iconCodePoint") is not None:
                # Icons used to be stored as Material code points
                icon_name = "mood"
            else:
                raise KeyError("iconName")
            return cls(
                id=data.get("id") or new_id(),
                name=data["name"],
                icon_name=icon_name,
                color_hex=data["colorHex"],
                is_active=bool(data.get("isActive", True)),
                order=int(data.get("order") or 0),
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                updated_at=datetime_utils.parse_optional_datetime(data.get("updatedAt")),
            )
