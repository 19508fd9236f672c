#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Weight
Weight log entries, goals and weekly summaries with kg / lbs / stone conversion

Stone entries may carry exact integer stones and pounds ("10 st 7 lbs"); when
present every conversion goes through those integers instead of the float.

Version: 3.0.0
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.models.base import Record, ValidationError, decoding, new_id, optional_int, parse_enum

# ===== CONVERSION CONSTANTS =====
LBS_PER_KG = 2.20462
KG_PER_LB = 0.453592
KG_PER_STONE = 6.35029
STONE_PER_KG = 0.157473
LBS_PER_STONE = 14


class WeightUnit(Enum):
    KG = "kg"
    LBS = "lbs"
    STONE = "stone"

    @property
    def display_name(self) -> str:
        return _UNIT_LABELS[self]

    @property
    def full_name(self) -> str:
        return _UNIT_FULL_NAMES[self]


_UNIT_LABELS = {
    WeightUnit.KG: "kg",
    WeightUnit.LBS: "lbs",
    WeightUnit.STONE: "st",
}

_UNIT_FULL_NAMES = {
    WeightUnit.KG: "Kilograms",
    WeightUnit.LBS: "Pounds",
    WeightUnit.STONE: "Stone",
}


@dataclass(frozen=True)
class WeightEntry(Record):
    """Single weigh-in, stored in the unit the user entered"""
    weight: float
    unit: WeightUnit
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=lambda: datetime_utils.now())
    note: Optional[str] = None
    stones: Optional[int] = None
    pounds: Optional[int] = None  # 0-13, remainder after stones

    def __post_init__(self):
        if self.weight < 0:
            raise ValidationError("weight cannot be negative")
        if self.pounds is not None and not 0 <= self.pounds < LBS_PER_STONE:
            raise ValidationError("pounds must be between 0 and 13")

    @property
    def _has_exact_stone(self) -> bool:
        return self.unit == WeightUnit.STONE and self.stones is not None

    @property
    def _total_lbs(self) -> float:
        if self._has_exact_stone:
            return float(self.stones * LBS_PER_STONE + (self.pounds or 0))
        if self.unit == WeightUnit.LBS:
            return self.weight
        if self.unit == WeightUnit.KG:
            return self.weight * LBS_PER_KG
        return self.weight * LBS_PER_STONE

    @property
    def weight_in_kg(self) -> float:
        if self._has_exact_stone:
            return self._total_lbs * KG_PER_LB
        if self.unit == WeightUnit.KG:
            return self.weight
        if self.unit == WeightUnit.LBS:
            return self.weight * KG_PER_LB
        return self.weight * KG_PER_STONE

    @property
    def weight_in_lbs(self) -> float:
        return self._total_lbs

    @property
    def weight_in_stone(self) -> float:
        if self._has_exact_stone:
            return self.stones + (self.pounds or 0) / LBS_PER_STONE
        if self.unit == WeightUnit.STONE:
            return self.weight
        if self.unit == WeightUnit.KG:
            return self.weight * STONE_PER_KG
        return self.weight / LBS_PER_STONE

    @property
    def _rounded_total_lbs(self) -> int:
        return int(self._total_lbs + 0.5)

    @property
    def exact_stones(self) -> int:
        if self._has_exact_stone:
            return self.stones
        return self._rounded_total_lbs // LBS_PER_STONE

    @property
    def exact_pounds(self) -> int:
        if self._has_exact_stone:
            return self.pounds or 0
        return self._rounded_total_lbs % LBS_PER_STONE

    def weight_in(self, target: WeightUnit) -> float:
        if target == self.unit and target != WeightUnit.STONE:
            return self.weight
        if target == WeightUnit.KG:
            return self.weight_in_kg
        if target == WeightUnit.LBS:
            return self.weight_in_lbs
        return self.weight_in_stone

    @property
    def weight_in_stone_formatted(self) -> str:
        """'10 st 7 lbs', or '10 st' when there is no remainder"""
        st, lbs = self.exact_stones, self.exact_pounds
        if lbs == 0:
            return f"{st} st"
        return f"{st} st {lbs} lbs"

    @property
    def date(self) -> date:
        return self.timestamp.date()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": datetime_utils.to_iso(self.timestamp),
            "weight": self.weight,
            "unit": self.unit.value,
            "note": self.note,
            "stones": self.stones,
            "pounds": self.pounds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeightEntry":
        with decoding("WeightEntry"):
            return cls(
                id=data.get("id") or new_id(),
                timestamp=datetime_utils.parse_optional_datetime(data.get("timestamp")) or datetime_utils.now(),
                weight=float(data["weight"]),
                unit=parse_enum(WeightUnit, data.get("unit"), WeightUnit.KG),
                note=data.get("note"),
                stones=optional_int(data.get("stones")),
                pounds=optional_int(data.get("pounds")),
            )


@dataclass(frozen=True)
class WeightGoal(Record):
    """Target weight, expressed in the goal's own unit"""
    target_weight: float
    start_weight: float
    unit: WeightUnit
    id: str = field(default_factory=new_id)
    start_date: datetime = field(default_factory=lambda: datetime_utils.now())
    target_date: Optional[datetime] = None
    is_active: bool = True

    @property
    def is_weight_loss(self) -> bool:
        return self.target_weight < self.start_weight

    @property
    def total_change(self) -> float:
        return self.start_weight - self.target_weight

    def progress_with(self, current_weight: float) -> float:
        """Fraction of the planned change achieved, up to 2.0 for overshoot"""
        if self.total_change == 0:
            return 1.0
        change = self.start_weight - current_weight
        return min(max(change / self.total_change, 0.0), 2.0)

    def remaining_with(self, current_weight: float) -> float:
        if self.is_weight_loss:
            return max(current_weight - self.target_weight, 0.0)
        return max(self.target_weight - current_weight, 0.0)

    def is_achieved_with(self, current_weight: float) -> bool:
        if self.is_weight_loss:
            return current_weight <= self.target_weight
        return current_weight >= self.target_weight

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "targetWeight": self.target_weight,
            "startWeight": self.start_weight,
            "unit": self.unit.value,
            "startDate": datetime_utils.to_iso(self.start_date),
            "targetDate": datetime_utils.to_optional_iso(self.target_date),
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeightGoal":
        with decoding("WeightGoal"):
            return cls(
                id=data.get("id") or new_id(),
                target_weight=float(data["targetWeight"]),
                start_weight=float(data["startWeight"]),
                unit=parse_enum(WeightUnit, data.get("unit"), WeightUnit.KG),
                start_date=datetime_utils.parse_optional_datetime(data.get("startDate")) or datetime_utils.now(),
                target_date=datetime_utils.parse_optional_datetime(data.get("targetDate")),
                is_active=bool(data.get("isActive", True)),
            )


@dataclass(frozen=True)
class WeeklyWeightSummary:
    week_start: date
    entries: List[WeightEntry]
    display_unit: WeightUnit

    @property
    def average_weight(self) -> Optional[float]:
        if not self.entries:
            return None
        return sum(e.weight_in(self.display_unit) for e in self.entries) / len(self.entries)

    @property
    def lowest_weight(self) -> Optional[float]:
        if not self.entries:
            return None
        return min(e.weight_in(self.display_unit) for e in self.entries)

    @property
    def highest_weight(self) -> Optional[float]:
        if not self.entries:
            return None
        return max(e.weight_in(self.display_unit) for e in self.entries)

    @property
    def days_logged(self) -> int:
        return len({e.timestamp.date() for e in self.entries})
