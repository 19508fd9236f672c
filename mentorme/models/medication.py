#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Medication
Medications, intake logs, dosage constraints and adherence summaries

Dosage constraints are descriptive: they are stored and shown to the user but
nothing here enforces them.

Version: 3.0.0
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.utils.validators import is_valid_time_of_day
from mentorme.models.base import (
    Record,
    ValidationError,
    decoding,
    new_id,
    optional_float,
    optional_int,
    parse_enum,
    parse_optional_enum,
    validate_text,
)

# ===== ENUMS =====


class MedicationFrequency(Enum):
    AS_NEEDED = "asNeeded"
    ONCE_DAILY = "onceDaily"
    TWICE_DAILY = "twiceDaily"
    THREE_TIMES_DAILY = "threeTimesDaily"
    FOUR_TIMES_DAILY = "fourTimesDaily"
    EVERY_OTHER_DAY = "everyOtherDay"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _FREQUENCY_INFO[self][0]

    @property
    def short_name(self) -> str:
        """Prescription abbreviation (BID, TID, ...)"""
        return _FREQUENCY_INFO[self][1]


_FREQUENCY_INFO = {
    MedicationFrequency.AS_NEEDED: ("As needed", "PRN"),
    MedicationFrequency.ONCE_DAILY: ("Once daily", "QD"),
    MedicationFrequency.TWICE_DAILY: ("Twice daily", "BID"),
    MedicationFrequency.THREE_TIMES_DAILY: ("3 times daily", "TID"),
    MedicationFrequency.FOUR_TIMES_DAILY: ("4 times daily", "QID"),
    MedicationFrequency.EVERY_OTHER_DAY: ("Every other day", "QOD"),
    MedicationFrequency.WEEKLY: ("Weekly", "Weekly"),
    MedicationFrequency.MONTHLY: ("Monthly", "Monthly"),
    MedicationFrequency.OTHER: ("Other", "Other"),
}


class MedicationCategory(Enum):
    PRESCRIPTION = "prescription"
    OVER_THE_COUNTER = "overTheCounter"
    VITAMIN = "vitamin"
    SUPPLEMENT = "supplement"
    HERBAL = "herbal"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _CATEGORY_INFO[self][0]

    @property
    def emoji(self) -> str:
        return _CATEGORY_INFO[self][1]


_CATEGORY_INFO = {
    MedicationCategory.PRESCRIPTION: ("Prescription", "💊"),
    MedicationCategory.OVER_THE_COUNTER: ("Over the Counter", "🏪"),
    MedicationCategory.VITAMIN: ("Vitamin", "🌟"),
    MedicationCategory.SUPPLEMENT: ("Supplement", "💪"),
    MedicationCategory.HERBAL: ("Herbal", "🌿"),
    MedicationCategory.OTHER: ("Other", "📦"),
}


class MedicationLogStatus(Enum):
    TAKEN = "taken"
    SKIPPED = "skipped"
    DELAYED = "delayed"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def emoji(self) -> str:
        return _LOG_STATUS_EMOJI[self]


_LOG_STATUS_EMOJI = {
    MedicationLogStatus.TAKEN: "✅",
    MedicationLogStatus.SKIPPED: "⏭️",
    MedicationLogStatus.DELAYED: "⏰",
}


class DosageConstraintType(Enum):
    MIN_TIME_BETWEEN = "minTimeBetween"            # e.g. at least 4h between doses
    MAX_PER_PERIOD = "maxPerPeriod"                # e.g. at most 6 doses per 24h
    MAX_CUMULATIVE_AMOUNT = "maxCumulativeAmount"  # e.g. at most 4000mg per day
    TIME_WINDOW = "timeWindow"
    CUSTOM = "custom"

# ===== MODELS =====


@dataclass(frozen=True)
class DosageConstraint(Record):
    type: DosageConstraintType
    description: str
    duration_minutes: Optional[int] = None
    max_count: Optional[int] = None
    period_hours: Optional[int] = None
    max_amount: Optional[float] = None
    unit: Optional[str] = None
    params: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "durationMinutes": self.duration_minutes,
            "maxCount": self.max_count,
            "periodHours": self.period_hours,
            "maxAmount": self.max_amount,
            "unit": self.unit,
            "params": dict(self.params) if self.params is not None else None,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DosageConstraint":
        with decoding("DosageConstraint"):
            params = data.get("params")
            return cls(
                type=parse_enum(DosageConstraintType, data.get("type"), DosageConstraintType.CUSTOM),
                description=str(data["description"]),
                duration_minutes=optional_int(data.get("durationMinutes")),
                max_count=optional_int(data.get("maxCount")),
                period_hours=optional_int(data.get("periodHours")),
                max_amount=optional_float(data.get("maxAmount")),
                unit=data.get("unit"),
                params=dict(params) if params is not None else None,
            )


@dataclass(frozen=True)
class Medication(Record):
    name: str
    id: str = field(default_factory=new_id)
    dosage: Optional[str] = None        # e.g. "500mg"
    instructions: Optional[str] = None  # e.g. "Take with food"
    frequency: MedicationFrequency = MedicationFrequency.ONCE_DAILY
    category: MedicationCategory = MedicationCategory.PRESCRIPTION
    prescribed_by: Optional[str] = None
    purpose: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    is_active: bool = True  # False once discontinued
    reminder_times: Optional[List[str]] = None  # "HH:MM"
    dosage_constraints: Optional[List[DosageConstraint]] = None

    def __post_init__(self):
        object.__setattr__(self, "name", validate_text(self.name, max_length=200, field_name="name"))
        for t in self.reminder_times or []:
            if not is_valid_time_of_day(t):
                raise ValidationError(f"Invalid reminder time {t!r}, expected HH:MM")

    @property
    def display_string(self) -> str:
        return f"{self.name} {self.dosage}" if self.dosage else self.name

    @property
    def summary(self) -> str:
        """'500mg · Twice daily'"""
        parts = [self.dosage] if self.dosage else []
        parts.append(self.frequency.display_name)
        return " · ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dosage": self.dosage,
            "instructions": self.instructions,
            "frequency": self.frequency.value,
            "category": self.category.value,
            "prescribedBy": self.prescribed_by,
            "purpose": self.purpose,
            "notes": self.notes,
            "createdAt": datetime_utils.to_iso(self.created_at),
            "isActive": self.is_active,
            "reminderTimes": list(self.reminder_times) if self.reminder_times is not None else None,
            "dosageConstraints": (
                [c.to_dict() for c in self.dosage_constraints] if self.dosage_constraints is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Medication":
        with decoding("Medication"):
            reminders = data.get("reminderTimes")
            constraints = data.get("dosageConstraints")
            # missing -> app default, unrecognised -> other
            frequency = parse_optional_enum(MedicationFrequency, data.get("frequency"), MedicationFrequency.OTHER)
            category = parse_optional_enum(MedicationCategory, data.get("category"), MedicationCategory.OTHER)
            return cls(
                id=data.get("id") or new_id(),
                name=data["name"],
                dosage=data.get("dosage"),
                instructions=data.get("instructions"),
                frequency=frequency or MedicationFrequency.ONCE_DAILY,
                category=category or MedicationCategory.PRESCRIPTION,
                prescribed_by=data.get("prescribedBy"),
                purpose=data.get("purpose"),
                notes=data.get("notes"),
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                is_active=bool(data.get("isActive", True)),
                reminder_times=[str(t) for t in reminders] if reminders is not None else None,
                dosage_constraints=(
                    [DosageConstraint.from_dict(c) for c in constraints] if constraints is not None else None
                ),
            )


@dataclass(frozen=True)
class MedicationLog(Record):
    medication_id: str
    medication_name: str  # denormalized for display
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=lambda: datetime_utils.now())
    status: MedicationLogStatus = MedicationLogStatus.TAKEN
    notes: Optional[str] = None
    skip_reason: Optional[str] = None

    @property
    def date(self) -> date:
        return self.timestamp.date()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "medicationId": self.medication_id,
            "medicationName": self.medication_name,
            "timestamp": datetime_utils.to_iso(self.timestamp),
            "status": self.status.value,
            "notes": self.notes,
            "skipReason": self.skip_reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MedicationLog":
        with decoding("MedicationLog"):
            return cls(
                id=data.get("id") or new_id(),
                medication_id=data["medicationId"],
                medication_name=data["medicationName"],
                timestamp=datetime_utils.parse_optional_datetime(data.get("timestamp")) or datetime_utils.now(),
                status=parse_enum(MedicationLogStatus, data.get("status"), MedicationLogStatus.TAKEN),
                notes=data.get("notes"),
                skip_reason=data.get("skipReason"),
            )


@dataclass(frozen=True)
class MedicationAdherenceSummary:
    start_date: date
    end_date: date
    total_expected: int
    total_taken: int
    total_skipped: int
    total_missed: int

    @property
    def adherence_rate(self) -> float:
        """Percentage of expected doses taken, 100 when nothing was due"""
        if self.total_expected == 0:
            return 100.0
        return self.total_taken / self.total_expected * 100

    @classmethod
    def from_logs(cls, logs: List[MedicationLog], start_date: date, end_date: date,
                  expected_per_day: int) -> "MedicationAdherenceSummary":
        """Count logs whose calendar day falls within start_date..end_date inclusive"""
        if isinstance(start_date, datetime):
            start_date = start_date.date()
        if isinstance(end_date, datetime):
            end_date = end_date.date()

        days_in_range = datetime_utils.days_between(start_date, end_date) + 1
        total_expected = max(days_in_range, 0) * expected_per_day

        in_range = [log for log in logs if start_date <= log.date <= end_date]
        taken = sum(1 for log in in_range if log.status == MedicationLogStatus.TAKEN)
        skipped = sum(1 for log in in_range if log.status == MedicationLogStatus.SKIPPED)

        return cls(
            start_date=start_date,
            end_date=end_date,
            total_expected=total_expected,
            total_taken=taken,
            total_skipped=skipped,
            total_missed=max(total_expected - taken - skipped, 0),
        )
