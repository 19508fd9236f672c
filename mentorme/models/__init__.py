#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Models Package
Enums, records and derived helpers for every tracker

Version: 3.0.0
Date: 2026-10-18
"""

from .base import (
    ValidationError,
    Record,
    enum_to_legacy,
    parse_enum,
)

from .habit import (
    HabitStatus,
    HabitMaturity,
    HabitFrequency,
    Habit
)

from .goal import (
    GoalStatus,
    GoalCategory,
    Goal
)
from .milestone import Milestone
from .todo import (
    TodoStatus,
    TodoPriority,
    Todo
)

from .weight import (
    WeightUnit,
    WeightEntry,
    WeightGoal,
    WeeklyWeightSummary
)

from .nutrition import (
    MealType,
    NutritionEstimate,
    FoodEntry,
    NutritionGoal,
    NutritionSummary,
    MoodOption,
    MealMoodPresets
)

from .food_template import (
    FoodCategory,
    ServingUnit,
    NutritionSource,
    FoodTemplate,
    SimilarTemplateResult
)

from .fasting import (
    FastingProtocol,
    FastingPhase,
    FastingEntry,
    TimeOfDay,
    FastingGoal,
    FastingSummary
)

from .hydration import (
    HydrationEntry,
    DailyHydration
)

from .medication import (
    MedicationFrequency,
    MedicationCategory,
    MedicationLogStatus,
    DosageConstraintType,
    DosageConstraint,
    Medication,
    MedicationLog,
    MedicationAdherenceSummary
)

from .meditation import (
    MeditationType,
    MeditationSession,
    MeditationStats
)

from .exercise import (
    ExerciseType,
    ExerciseCategory,
    Exercise,
    PlanExercise,
    ExercisePlan,
    ExerciseSet,
    LoggedExercise,
    WorkoutLog
)

from .journal import (
    JournalEntryType,
    QAPair,
    JournalEntry
)

from .pulse import (
    MoodRating,
    PulseEntry,
    PulseType
)

from .win import (
    WinSource,
    WinCategory,
    Win
)

from .backup import ExportEnvelope

__all__ = [
    # Base
    'ValidationError',
    'Record',
    'enum_to_legacy',
    'parse_enum',

    # Habits and goals
    'HabitStatus',
    'HabitMaturity',
    'HabitFrequency',
    'Habit',
    'GoalStatus',
    'GoalCategory',
    'Goal',
    'Milestone',
    'TodoStatus',
    'TodoPriority',
    'Todo',

    # Body and nutrition
    'WeightUnit',
    'WeightEntry',
    'WeightGoal',
    'WeeklyWeightSummary',
    'MealType',
    'NutritionEstimate',
    'FoodEntry',
    'NutritionGoal',
    'NutritionSummary',
    'MoodOption',
    'MealMoodPresets',
    'FoodCategory',
    'ServingUnit',
    'NutritionSource',
    'FoodTemplate',
    'SimilarTemplateResult',
    'FastingProtocol',
    'FastingPhase',
    'FastingEntry',
    'TimeOfDay',
    'FastingGoal',
    'FastingSummary',
    'HydrationEntry',
    'DailyHydration',

    # Health
    'MedicationFrequency',
    'MedicationCategory',
    'MedicationLogStatus',
    'DosageConstraintType',
    'DosageConstraint',
    'Medication',
    'MedicationLog',
    'MedicationAdherenceSummary',
    'MeditationType',
    'MeditationSession',
    'MeditationStats',
    'ExerciseType',
    'ExerciseCategory',
    'Exercise',
    'PlanExercise',
    'ExercisePlan',
    'ExerciseSet',
    'LoggedExercise',
    'WorkoutLog',

    # Reflection
    'JournalEntryType',
    'QAPair',
    'JournalEntry',
    'MoodRating',
    'PulseEntry',
    'PulseType',
    'WinSource',
    'WinCategory',
    'Win',

    # Backup
    'ExportEnvelope'
]
