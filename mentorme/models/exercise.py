#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Exercise
Exercise catalogue, workout plans and logged workouts

Strength exercises are measured in sets x reps x weight, timed exercises by
duration only, cardio by duration plus level and/or distance.

Version: 3.0.0
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple

from mentorme.utils import datetime_utils
from mentorme.utils.text_utils import format_fixed
from mentorme.models.base import (
    Record,
    ValidationError,
    decoding,
    new_id,
    optional_float,
    optional_int,
    parse_enum,
    validate_scale,
    validate_text,
)


class ExerciseType(Enum):
    STRENGTH = "strength"
    TIMED = "timed"
    CARDIO = "cardio"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _TYPE_INFO[self][0]

    @property
    def emoji(self) -> str:
        return _TYPE_INFO[self][1]


_TYPE_INFO = {
    ExerciseType.STRENGTH: ("Sets × Reps × Weight", "🏋️"),
    ExerciseType.TIMED: ("Duration", "⏱️"),
    ExerciseType.CARDIO: ("Duration + Level/Distance", "🏃"),
}


class ExerciseCategory(Enum):
    UPPER_BODY = "upperBody"
    LOWER_BODY = "lowerBody"
    CORE = "core"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    FULL_BODY = "fullBody"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _CATEGORY_INFO[self][0]

    @property
    def emoji(self) -> str:
        return _CATEGORY_INFO[self][1]


_CATEGORY_INFO = {
    ExerciseCategory.UPPER_BODY: ("Upper Body", "💪"),
    ExerciseCategory.LOWER_BODY: ("Lower Body", "🦶"),
    ExerciseCategory.CORE: ("Core", "🎯"),
    ExerciseCategory.CARDIO: ("Cardio", "🏃"),
    ExerciseCategory.FLEXIBILITY: ("Flexibility", "🧘"),
    ExerciseCategory.FULL_BODY: ("Full Body", "🏋️"),
    ExerciseCategory.OTHER: ("Other", "⚡"),
}


def _weight_suffix(weight: Optional[float]) -> str:
    return f" @ {format_fixed(weight)}" if weight is not None else ""


# ===== CATALOGUE =====


@dataclass(frozen=True)
class Exercise(Record):
    name: str
    category: ExerciseCategory
    id: str = field(default_factory=new_id)
    exercise_type: ExerciseType = ExerciseType.STRENGTH
    notes: Optional[str] = None
    # strength defaults
    default_sets: int = 3
    default_reps: int = 10
    default_weight: Optional[float] = None
    # cardio / timed defaults
    default_duration_minutes: Optional[int] = None
    default_level: Optional[int] = None  # machine resistance, 1-20
    default_distance: Optional[float] = None  # km
    is_custom: bool = True

    def __post_init__(self):
        object.__setattr__(self, "name", validate_text(self.name, max_length=100, field_name="name"))

    @property
    def default_settings_summary(self) -> str:
        """'3 × 10 @ 20.0', '3 × 1m' or '30m · L5 · 5.0km'"""
        if self.exercise_type == ExerciseType.STRENGTH:
            return f"{self.default_sets} × {self.default_reps}{_weight_suffix(self.default_weight)}"

        minutes = self.default_duration_minutes or 0
        if self.exercise_type == ExerciseType.TIMED:
            return f"{self.default_sets} × {minutes}m" if self.default_sets > 1 else f"{minutes}m"

        parts = [f"{minutes}m"]
        if self.default_level is not None:
            parts.append(f"L{self.default_level}")
        if self.default_distance is not None:
            parts.append(f"{format_fixed(self.default_distance)}km")
        return " · ".join(parts)

    @staticmethod
    def presets() -> List["Exercise"]:
        return list(PRESET_EXERCISES)

    @staticmethod
    def find_preset(exercise_id: str) -> Optional["Exercise"]:
        return next((e for e in PRESET_EXERCISES if e.id == exercise_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "exerciseType": self.exercise_type.value,
            "notes": self.notes,
            "defaultSets": self.default_sets,
            "defaultReps": self.default_reps,
            "defaultWeight": self.default_weight,
            "defaultDurationMinutes": self.default_duration_minutes,
            "defaultLevel": self.default_level,
            "defaultDistance": self.default_distance,
            "isCustom": self.is_custom,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Exercise":
        with decoding("Exercise"):
            return cls(
                id=data["id"],
                name=data["name"],
                category=parse_enum(ExerciseCategory, data.get("category"), ExerciseCategory.OTHER),
                exercise_type=parse_enum(ExerciseType, data.get("exerciseType"), ExerciseType.STRENGTH),
                notes=data.get("notes"),
                default_sets=int(data.get("defaultSets") or 3),
                default_reps=int(data.get("defaultReps") or 10),
                default_weight=optional_float(data.get("defaultWeight")),
                default_duration_minutes=optional_int(data.get("defaultDurationMinutes")),
                default_level=optional_int(data.get("defaultLevel")),
                default_distance=optional_float(data.get("defaultDistance")),
                is_custom=bool(data.get("isCustom", True)),
            )


def _strength(id: str, name: str, category: ExerciseCategory, sets: int, reps: int,
              notes: Optional[str] = None) -> Exercise:
    return Exercise(id=id, name=name, category=category, default_sets=sets, default_reps=reps,
                    notes=notes, is_custom=False)


def _timed(id: str, name: str, category: ExerciseCategory, minutes: int, sets: int = 3,
           notes: Optional[str] = None) -> Exercise:
    return Exercise(id=id, name=name, category=category, exercise_type=ExerciseType.TIMED,
                    default_sets=sets, default_duration_minutes=minutes, notes=notes, is_custom=False)


def _cardio(id: str, name: str, minutes: int, level: Optional[int] = None, distance: Optional[float] = None,
            notes: Optional[str] = None) -> Exercise:
    return Exercise(id=id, name=name, category=ExerciseCategory.CARDIO, exercise_type=ExerciseType.CARDIO,
                    default_duration_minutes=minutes, default_level=level, default_distance=distance,
                    notes=notes, is_custom=False)


_UPPER = ExerciseCategory.UPPER_BODY
_LOWER = ExerciseCategory.LOWER_BODY
_CORE = ExerciseCategory.CORE
_FLEX = ExerciseCategory.FLEXIBILITY

PRESET_EXERCISES: Tuple[Exercise, ...] = (
    # Upper body
    _strength("preset_pushups", "Push-ups", _UPPER, 3, 15),
    _strength("preset_pullups", "Pull-ups", _UPPER, 3, 8),
    _strength("preset_dumbbell_rows", "Dumbbell Rows", _UPPER, 3, 12),
    _strength("preset_shoulder_press", "Shoulder Press", _UPPER, 3, 10),
    _strength("preset_bicep_curls", "Bicep Curls", _UPPER, 3, 12),
    _strength("preset_tricep_dips", "Tricep Dips", _UPPER, 3, 12),
    _strength("preset_bench_press", "Bench Press", _UPPER, 3, 10),
    # Lower body
    _strength("preset_squats", "Squats", _LOWER, 3, 15),
    _strength("preset_lunges", "Lunges", _LOWER, 3, 12),
    _strength("preset_deadlifts", "Deadlifts", _LOWER, 3, 10),
    _strength("preset_leg_press", "Leg Press", _LOWER, 3, 12),
    _strength("preset_calf_raises", "Calf Raises", _LOWER, 3, 15),
    _strength("preset_glute_bridges", "Glute Bridges", _LOWER, 3, 15),
    # Core
    _timed("preset_planks", "Planks", _CORE, 1, notes="Hold for 30-60 seconds per set"),
    _strength("preset_crunches", "Crunches", _CORE, 3, 20),
    _strength("preset_russian_twists", "Russian Twists", _CORE, 3, 20),
    _strength("preset_leg_raises", "Leg Raises", _CORE, 3, 12),
    _strength("preset_mountain_climbers", "Mountain Climbers", _CORE, 3, 20),
    # HIIT, still counted in reps
    _strength("preset_jumping_jacks", "Jumping Jacks", ExerciseCategory.CARDIO, 3, 30),
    _strength("preset_burpees", "Burpees", ExerciseCategory.CARDIO, 3, 10),
    _strength("preset_high_knees", "High Knees", ExerciseCategory.CARDIO, 3, 30),
    # Machines and outdoor cardio
    _cardio("preset_treadmill", "Treadmill", 30, level=5, notes="Level = speed or incline"),
    _cardio("preset_stationary_bike", "Stationary Bike", 30, level=5, notes="Level = resistance"),
    _cardio("preset_elliptical", "Elliptical", 30, level=5, notes="Level = resistance"),
    _cardio("preset_rowing", "Rowing Machine", 20, level=5, notes="Level = resistance"),
    _cardio("preset_stair_climber", "Stair Climber", 20, level=5, notes="Level = speed/resistance"),
    _cardio("preset_outdoor_run", "Outdoor Run", 30, distance=5.0, notes="Track your distance"),
    _cardio("preset_outdoor_walk", "Outdoor Walk", 30, distance=3.0),
    _cardio("preset_cycling", "Cycling", 45, distance=15.0),
    _cardio("preset_swimming", "Swimming", 30, notes="Track laps or distance"),
    _cardio("preset_jump_rope", "Jump Rope", 15, notes="Great for intervals"),
    _cardio("preset_skiing", "Skiing", 60, notes="Downhill or cross-country"),
    _cardio("preset_cross_country_skiing", "Cross-Country Skiing", 45, distance=5.0,
            notes="Great full-body workout"),
    # Flexibility
    _timed("preset_stretching", "Full Body Stretch", _FLEX, 10, notes="Hold each stretch for 30 seconds"),
    _timed("preset_yoga_flow", "Yoga Flow", _FLEX, 15),
    _timed("preset_foam_rolling", "Foam Rolling", _FLEX, 10, notes="Target sore muscles"),
    # Warm-up and cool-down stretches
    _timed("preset_chest_doorway_stretch", "Chest/Doorway Stretch", _FLEX, 1, sets=2,
           notes="Hold 30s each side. Great before upper body work"),
    _timed("preset_hip_flexor_stretch", "Hip Flexor Stretch", _FLEX, 1, sets=2,
           notes="Hold 30s each side. Essential for desk workers"),
    _timed("preset_hamstring_stretch", "Hamstring Stretch", _FLEX, 1, sets=2, notes="Hold 30s each leg"),
    _timed("preset_shoulder_stretch", "Shoulder/Cross-Body Stretch", _FLEX, 1, sets=2, notes="Hold 30s each arm"),
    _timed("preset_neck_stretch", "Neck Stretches", _FLEX, 2, sets=1,
           notes="Gentle tilts and rotations. Good between desk sessions"),
    _strength("preset_cat_cow", "Cat-Cow Stretch", _FLEX, 1, 10,
              notes="Slow, controlled movements. Great for spine mobility"),
    _timed("preset_childs_pose", "Child's Pose", _FLEX, 1, sets=1, notes="Relax and breathe deeply"),
    _timed("preset_quad_stretch", "Standing Quad Stretch", _FLEX, 1, sets=2,
           notes="Hold 30s each leg. Good before/after lower body work"),
    _timed("preset_pigeon_pose", "Pigeon Pose", _FLEX, 1, sets=2, notes="Hold 30s each side. Deep hip opener"),
    _timed("preset_wrist_forearm_stretch", "Wrist & Forearm Stretch", _FLEX, 1, sets=2,
           notes="Essential for desk workers. Extend and flex wrists"),
    _strength("preset_thoracic_rotation", "Thoracic Spine Rotation", _FLEX, 2, 8,
              notes="Slow rotations each side. Counters desk posture"),
    _strength("preset_band_pull_aparts", "Band Pull-Aparts", _UPPER, 2, 15,
              notes="Great warm-up for shoulders and upper back"),
)

# ===== PLANS =====


@dataclass(frozen=True)
class PlanExercise(Record):
    """An exercise inside a plan with plan-specific settings"""
    exercise_id: str
    name: str  # denormalized for display
    order: int
    exercise_type: ExerciseType = ExerciseType.STRENGTH
    notes: Optional[str] = None
    sets: int = 3
    reps: int = 10
    weight: Optional[float] = None
    duration_minutes: Optional[int] = None
    level: Optional[int] = None
    target_distance: Optional[float] = None  # km

    @classmethod
    def strength(cls, exercise_id: str, name: str, order: int, sets: int = 3, reps: int = 10,
                 weight: Optional[float] = None, notes: Optional[str] = None) -> "PlanExercise":
        return cls(exercise_id=exercise_id, name=name, order=order, exercise_type=ExerciseType.STRENGTH,
                   sets=sets, reps=reps, weight=weight, notes=notes)

    @classmethod
    def cardio(cls, exercise_id: str, name: str, order: int, duration_minutes: int,
               level: Optional[int] = None, target_distance: Optional[float] = None,
               notes: Optional[str] = None) -> "PlanExercise":
        return cls(exercise_id=exercise_id, name=name, order=order, exercise_type=ExerciseType.CARDIO,
                   duration_minutes=duration_minutes, level=level, target_distance=target_distance, notes=notes)

    @classmethod
    def timed(cls, exercise_id: str, name: str, order: int, duration_minutes: int, sets: int = 1,
              notes: Optional[str] = None) -> "PlanExercise":
        return cls(exercise_id=exercise_id, name=name, order=order, exercise_type=ExerciseType.TIMED,
                   sets=sets, duration_minutes=duration_minutes, notes=notes)

    @property
    def settings_summary(self) -> str:
        if self.exercise_type == ExerciseType.STRENGTH:
            return f"{self.sets} × {self.reps}{_weight_suffix(self.weight)}"

        if self.exercise_type == ExerciseType.TIMED:
            minutes = self.duration_minutes or 0
            return f"{self.sets} × {minutes}m" if self.sets > 1 else f"{minutes}m"

        parts = []
        if self.duration_minutes:
            parts.append(f"{self.duration_minutes}m")
        if self.level is not None:
            parts.append(f"L{self.level}")
        if self.target_distance is not None:
            parts.append(f"{format_fixed(self.target_distance)}km")
        return " · ".join(parts) if parts else "Not set"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exerciseId": self.exercise_id,
            "name": self.name,
            "exerciseType": self.exercise_type.value,
            "order": self.order,
            "notes": self.notes,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "durationMinutes": self.duration_minutes,
            "level": self.level,
            "targetDistance": self.target_distance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanExercise":
        with decoding("PlanExercise"):
            return cls(
                exercise_id=data["exerciseId"],
                name=data["name"],
                order=int(data["order"]),
                exercise_type=parse_enum(ExerciseType, data.get("exerciseType"), ExerciseType.STRENGTH),
                notes=data.get("notes"),
                sets=int(data.get("sets") or 3),
                reps=int(data.get("reps") or 10),
                weight=optional_float(data.get("weight")),
                duration_minutes=optional_int(data.get("durationMinutes")),
                level=optional_int(data.get("level")),
                target_distance=optional_float(data.get("targetDistance")),
            )


@dataclass(frozen=True)
class ExercisePlan(Record):
    name: str
    primary_category: ExerciseCategory
    exercises: List[PlanExercise]
    id: str = field(default_factory=new_id)
    description: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    last_used: Optional[datetime] = None
    is_preset: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "primaryCategory": self.primary_category.value,
            "exercises": [e.to_dict() for e in self.exercises],
            "createdAt": datetime_utils.to_iso(self.created_at),
            "lastUsed": datetime_utils.to_optional_iso(self.last_used),
            "isPreset": self.is_preset,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExercisePlan":
        with decoding("ExercisePlan"):
            return cls(
                id=data["id"],
                name=data["name"],
                description=data.get("description"),
                primary_category=parse_enum(ExerciseCategory, data.get("primaryCategory"), ExerciseCategory.OTHER),
                exercises=[PlanExercise.from_dict(e) for e in data["exercises"]],
                created_at=datetime_utils.parse_datetime(data["createdAt"]),
                last_used=datetime_utils.parse_optional_datetime(data.get("lastUsed")),
                is_preset=bool(data.get("isPreset", False)),
            )

# ===== WORKOUT LOGS =====


def _format_duration(d: Optional[timedelta]) -> str:
    """'1h 5m', '2:30' or '3m'"""
    if d is None:
        return "0:00"
    total_seconds = int(d.total_seconds())
    minutes, seconds = divmod(total_seconds, 60)
    if minutes >= 60:
        return f"{minutes // 60}h {minutes % 60}m"
    return f"{minutes}:{seconds:02d}" if seconds > 0 else f"{minutes}m"


@dataclass(frozen=True)
class ExerciseSet(Record):
    reps: int = 0
    weight: Optional[float] = None
    completed: bool = True
    duration: Optional[timedelta] = None  # timed and cardio sets
    level: Optional[int] = None
    distance: Optional[float] = None  # km

    @classmethod
    def strength(cls, reps: int, weight: Optional[float] = None, completed: bool = True) -> "ExerciseSet":
        return cls(reps=reps, weight=weight, completed=completed)

    @classmethod
    def timed(cls, duration: timedelta, completed: bool = True) -> "ExerciseSet":
        return cls(duration=duration, completed=completed)

    @classmethod
    def cardio(cls, duration: timedelta, level: Optional[int] = None, distance: Optional[float] = None,
               completed: bool = True) -> "ExerciseSet":
        return cls(duration=duration, level=level, distance=distance, completed=completed)

    def format_for_display(self, exercise_type: ExerciseType) -> str:
        if exercise_type == ExerciseType.STRENGTH:
            return f"{self.reps} reps{_weight_suffix(self.weight)}"
        if exercise_type == ExerciseType.TIMED:
            return _format_duration(self.duration)

        parts = [_format_duration(self.duration)]
        if self.level is not None:
            parts.append(f"Level {self.level}")
        if self.distance is not None:
            parts.append(f"{format_fixed(self.distance)} km")
        return " · ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reps": self.reps,
            "weight": self.weight,
            "completed": self.completed,
            "durationSeconds": int(self.duration.total_seconds()) if self.duration is not None else None,
            "level": self.level,
            "distance": self.distance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExerciseSet":
        with decoding("ExerciseSet"):
            seconds = optional_int(data.get("durationSeconds"))
            return cls(
                reps=int(data.get("reps") or 0),
                weight=optional_float(data.get("weight")),
                completed=bool(data.get("completed", True)),
                duration=timedelta(seconds=seconds) if seconds is not None else None,
                level=optional_int(data.get("level")),
                distance=optional_float(data.get("distance")),
            )


@dataclass(frozen=True)
class LoggedExercise(Record):
    exercise_id: str
    name: str
    completed_sets: List[ExerciseSet]
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exerciseId": self.exercise_id,
            "name": self.name,
            "completedSets": [s.to_dict() for s in self.completed_sets],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggedExercise":
        with decoding("LoggedExercise"):
            return cls(
                exercise_id=data["exerciseId"],
                name=data["name"],
                completed_sets=[ExerciseSet.from_dict(s) for s in data["completedSets"]],
                notes=data.get("notes"),
            )


@dataclass(frozen=True)
class WorkoutLog(Record):
    start_time: datetime
    exercises: List[LoggedExercise]
    id: str = field(default_factory=new_id)
    plan_id: Optional[str] = None  # None for freestyle workouts
    plan_name: Optional[str] = None
    end_time: Optional[datetime] = None
    notes: Optional[str] = None
    rating: Optional[int] = None  # 1-5
    calories_burned: Optional[int] = None

    def __post_init__(self):
        validate_scale(self.rating, "rating")
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValidationError("end_time cannot be before start_time")

    @property
    def duration(self) -> Optional[timedelta]:
        if self.end_time is None:
            return None
        return self.end_time - self.start_time

    @property
    def total_sets_completed(self) -> int:
        return sum(len(ex.completed_sets) for ex in self.exercises)

    @property
    def total_reps_completed(self) -> int:
        return sum(s.reps for ex in self.exercises for s in ex.completed_sets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "planId": self.plan_id,
            "planName": self.plan_name,
            "startTime": datetime_utils.to_iso(self.start_time),
            "endTime": datetime_utils.to_optional_iso(self.end_time),
            "exercises": [e.to_dict() for e in self.exercises],
            "notes": self.notes,
            "rating": self.rating,
            "caloriesBurned": self.calories_burned,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkoutLog":
        with decoding("WorkoutLog"):
            return cls(
                id=data["id"],
                plan_id=data.get("planId"),
                plan_name=data.get("planName"),
                start_time=datetime_utils.parse_datetime(data["startTime"]),
                end_time=datetime_utils.parse_optional_datetime(data.get("endTime")),
                exercises=[LoggedExercise.from_dict(e) for e in data["exercises"]],
                notes=data.get("notes"),
                rating=optional_int(data.get("rating")),
                calories_burned=optional_int(data.get("caloriesBurned")),
            )
