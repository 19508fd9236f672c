#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Nutrition
Food log entries, nutrition estimates, daily goals and summaries

Version: 3.0.0
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.utils.text_utils import format_number
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


class MealType(Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def emoji(self) -> str:
        return _MEAL_EMOJI[self]


_MEAL_EMOJI = {
    MealType.BREAKFAST: "🌅",
    MealType.LUNCH: "☀️",
    MealType.DINNER: "🌙",
    MealType.SNACK: "🍎",
}

# Optional nutrient fields, in wire order, with their JSON names
_OPTIONAL_NUTRIENTS = {
    "saturated_fat_grams": "saturatedFatGrams",
    "unsaturated_fat_grams": "unsaturatedFatGrams",
    "mono_fat_grams": "monoFatGrams",
    "poly_fat_grams": "polyFatGrams",
    "trans_fat_grams": "transFatGrams",
    "fiber_grams": "fiberGrams",
    "sugar_grams": "sugarGrams",
    "sodium_mg": "sodiumMg",
    "potassium_mg": "potassiumMg",
    "cholesterol_mg": "cholesterolMg",
}


def _add_optional(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None and b is None:
        return None
    return (a or 0.0) + (b or 0.0)


@dataclass(frozen=True)
class NutritionEstimate(Record):
    """Macros and micronutrients for one food item or portion"""
    calories: float
    protein_grams: float
    carbs_grams: float
    fat_grams: float
    saturated_fat_grams: Optional[float] = None
    unsaturated_fat_grams: Optional[float] = None  # mono + poly combined
    mono_fat_grams: Optional[float] = None
    poly_fat_grams: Optional[float] = None
    trans_fat_grams: Optional[float] = None
    fiber_grams: Optional[float] = None
    sugar_grams: Optional[float] = None
    sodium_mg: Optional[float] = None
    potassium_mg: Optional[float] = None
    cholesterol_mg: Optional[float] = None
    confidence: Optional[str] = None  # 'high', 'medium', 'low'
    notes: Optional[str] = None

    def __post_init__(self):
        for name in ("calories", "protein_grams", "carbs_grams", "fat_grams"):
            if getattr(self, name) < 0:
                raise ValidationError(f"{name} cannot be negative")

    def scaled(self, multiplier: float) -> "NutritionEstimate":
        """Every amount multiplied, missing values stay missing"""
        if multiplier < 0:
            raise ValidationError("multiplier cannot be negative")
        optional = {
            name: getattr(self, name) * multiplier if getattr(self, name) is not None else None
            for name in _OPTIONAL_NUTRIENTS
        }
        return NutritionEstimate(
            calories=self.calories * multiplier,
            protein_grams=self.protein_grams * multiplier,
            carbs_grams=self.carbs_grams * multiplier,
            fat_grams=self.fat_grams * multiplier,
            confidence=self.confidence,
            notes=self.notes,
            **optional,
        )

    def __add__(self, other: "NutritionEstimate") -> "NutritionEstimate":
        if not isinstance(other, NutritionEstimate):
            return NotImplemented
        optional = {
            name: _add_optional(getattr(self, name), getattr(other, name))
            for name in _OPTIONAL_NUTRIENTS
        }
        return NutritionEstimate(
            calories=self.calories + other.calories,
            protein_grams=self.protein_grams + other.protein_grams,
            carbs_grams=self.carbs_grams + other.carbs_grams,
            fat_grams=self.fat_grams + other.fat_grams,
            **optional,
        )

    @property
    def summary(self) -> str:
        """'20g P · 30g C · 10g F'"""
        parts = [
            f"{format_number(self.protein_grams)}g P",
            f"{format_number(self.carbs_grams)}g C",
            f"{format_number(self.fat_grams)}g F",
        ]
        if self.fiber_grams:
            parts.append(f"{format_number(self.fiber_grams)}g fiber")
        if self.sugar_grams:
            parts.append(f"{format_number(self.sugar_grams)}g sugar")
        return " · ".join(parts)

    @property
    def detailed_summary(self) -> str:
        text = (
            f"{format_number(self.calories)} cal · "
            f"{format_number(self.protein_grams)}g protein · "
            f"{format_number(self.carbs_grams)}g carbs"
        )
        if self.fiber_grams:
            text += f" · {format_number(self.fiber_grams)}g fiber"
        if self.sugar_grams:
            text += f" · {format_number(self.sugar_grams)}g sugar"
        text += f" · {format_number(self.fat_grams)}g fat"

        fat_parts = []
        if self.saturated_fat_grams:
            fat_parts.append(f"{format_number(self.saturated_fat_grams)}g sat")
        if self.unsaturated_fat_grams:
            fat_parts.append(f"{format_number(self.unsaturated_fat_grams)}g unsat")
        if fat_parts:
            text += f" ({', '.join(fat_parts)})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "calories": self.calories,
            "proteinGrams": self.protein_grams,
            "carbsGrams": self.carbs_grams,
            "fatGrams": self.fat_grams,
        }
        for name, key in _OPTIONAL_NUTRIENTS.items():
            data[key] = getattr(self, name)
        data["confidence"] = self.confidence
        data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NutritionEstimate":
        with decoding("NutritionEstimate"):
            return cls(
                calories=float(data["calories"]),
                protein_grams=float(data["proteinGrams"]),
                carbs_grams=float(data["carbsGrams"]),
                fat_grams=float(data["fatGrams"]),
                confidence=data.get("confidence"),
                notes=data.get("notes"),
                **{name: optional_float(data.get(key)) for name, key in _OPTIONAL_NUTRIENTS.items()},
            )


_PLURAL_PORTION_UNITS = {
    "serving": "servings",
    "piece": "pieces",
    "slice": "slices",
    "cup": "cups",
    "scoop": "scoops",
}


@dataclass(frozen=True)
class FoodEntry(Record):
    """A logged meal or snack"""
    meal_type: MealType
    description: str
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=lambda: datetime_utils.now())
    nutrition: Optional[NutritionEstimate] = None
    notes: Optional[str] = None
    energy_after_meal: Optional[int] = None  # legacy 1-5
    is_manual_entry: bool = False
    image_path: Optional[str] = None
    template_id: Optional[str] = None
    overridden_fields: Optional[Dict[str, bool]] = None
    # Mindful eating
    hunger_before: Optional[int] = None  # 1=not hungry, 5=starving
    mood_before: Optional[List[str]] = None
    fullness_after: Optional[int] = None  # 1=still hungry, 5=overfull
    mood_after: Optional[List[str]] = None
    # Portions, when created from a food template
    portion_size: Optional[float] = None
    portion_unit: Optional[str] = None
    grams_consumed: Optional[float] = None
    default_serving_size: Optional[float] = None
    grams_per_serving: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "description", validate_text(self.description, max_length=2000, field_name="description"))
        validate_scale(self.hunger_before, "hunger_before")
        validate_scale(self.fullness_after, "fullness_after")
        validate_scale(self.energy_after_meal, "energy_after_meal")

    def is_field_overridden(self, field_name: str) -> bool:
        return bool((self.overridden_fields or {}).get(field_name, False))

    @property
    def has_overrides(self) -> bool:
        return any((self.overridden_fields or {}).values())

    @property
    def date(self) -> date:
        return self.timestamp.date()

    @property
    def portion_info(self) -> Optional[str]:
        """'1.5 servings (150g)'"""
        if self.portion_size is None or self.portion_unit is None:
            return None

        unit = self.portion_unit
        if self.portion_size != 1:
            unit = _PLURAL_PORTION_UNITS.get(unit, unit)

        result = f"{format_number(self.portion_size)} {unit}"
        if self.grams_consumed is not None and self.portion_unit != "g":
            result += f" ({format_number(self.grams_consumed)}g)"
        return result

    @property
    def has_portion_data(self) -> bool:
        return self.portion_size is not None and self.portion_unit is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": datetime_utils.to_iso(self.timestamp),
            "mealType": self.meal_type.value,
            "description": self.description,
            "nutrition": self.nutrition.to_dict() if self.nutrition else None,
            "notes": self.notes,
            "energyAfterMeal": self.energy_after_meal,
            "isManualEntry": self.is_manual_entry,
            "imagePath": self.image_path,
            "templateId": self.template_id,
            "overriddenFields": dict(self.overridden_fields) if self.overridden_fields is not None else None,
            "hungerBefore": self.hunger_before,
            "moodBefore": list(self.mood_before) if self.mood_before is not None else None,
            "fullnessAfter": self.fullness_after,
            "moodAfter": list(self.mood_after) if self.mood_after is not None else None,
            "portionSize": self.portion_size,
            "portionUnit": self.portion_unit,
            "gramsConsumed": self.grams_consumed,
            "defaultServingSize": self.default_serving_size,
            "gramsPerServing": self.grams_per_serving,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FoodEntry":
        with decoding("FoodEntry"):
            nutrition = data.get("nutrition")
            overridden = data.get("overriddenFields")
            mood_before = data.get("moodBefore")
            mood_after = data.get("moodAfter")
            return cls(
                id=data.get("id") or new_id(),
                timestamp=datetime_utils.parse_optional_datetime(data.get("timestamp")) or datetime_utils.now(),
                meal_type=parse_enum(MealType, data.get("mealType"), MealType.SNACK),
                description=data["description"],
                nutrition=NutritionEstimate.from_dict(nutrition) if nutrition else None,
                notes=data.get("notes"),
                energy_after_meal=optional_int(data.get("energyAfterMeal")),
                is_manual_entry=bool(data.get("isManualEntry", False)),
                image_path=data.get("imagePath"),
                template_id=data.get("templateId"),
                overridden_fields={k: bool(v) for k, v in overridden.items()} if overridden is not None else None,
                hunger_before=optional_int(data.get("hungerBefore")),
                mood_before=[str(m) for m in mood_before] if mood_before is not None else None,
                fullness_after=optional_int(data.get("fullnessAfter")),
                mood_after=[str(m) for m in mood_after] if mood_after is not None else None,
                portion_size=optional_float(data.get("portionSize")),
                portion_unit=data.get("portionUnit"),
                grams_consumed=optional_float(data.get("gramsConsumed")),
                default_serving_size=optional_float(data.get("defaultServingSize")),
                grams_per_serving=optional_float(data.get("gramsPerServing")),
            )


@dataclass(frozen=True)
class NutritionGoal(Record):
    """Daily nutrition targets. max_* are upper limits, min_* are floors."""
    target_calories: int
    target_protein_grams: Optional[int] = None
    target_carbs_grams: Optional[int] = None
    target_fat_grams: Optional[int] = None
    max_saturated_fat_grams: Optional[int] = None
    max_trans_fat_grams: Optional[int] = None
    min_unsaturated_fat_grams: Optional[int] = None
    max_sodium_mg: Optional[int] = None
    max_sugar_grams: Optional[int] = None
    min_fiber_grams: Optional[int] = None
    max_cholesterol_mg: Optional[int] = None
    min_potassium_mg: Optional[int] = None
    health_concerns: Optional[str] = None
    ai_reasoning: Optional[str] = None
    is_ai_generated: bool = False
    generated_at: Optional[datetime] = None
    activity_level: Optional[str] = None  # 'sedentary' ... 'very_active'

    @property
    def has_fat_breakdown_targets(self) -> bool:
        return any(v is not None for v in (
            self.max_saturated_fat_grams,
            self.max_trans_fat_grams,
            self.min_unsaturated_fat_grams,
        ))

    @property
    def has_micronutrient_targets(self) -> bool:
        return any(v is not None for v in (
            self.max_sodium_mg,
            self.max_sugar_grams,
            self.min_fiber_grams,
            self.max_cholesterol_mg,
            self.min_potassium_mg,
        ))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targetCalories": self.target_calories,
            "targetProteinGrams": self.target_protein_grams,
            "targetCarbsGrams": self.target_carbs_grams,
            "targetFatGrams": self.target_fat_grams,
            "maxSaturatedFatGrams": self.max_saturated_fat_grams,
            "maxTransFatGrams": self.max_trans_fat_grams,
            "minUnsaturatedFatGrams": self.min_unsaturated_fat_grams,
            "maxSodiumMg": self.max_sodium_mg,
            "maxSugarGrams": self.max_sugar_grams,
            "minFiberGrams": self.min_fiber_grams,
            "maxCholesterolMg": self.max_cholesterol_mg,
            "minPotassiumMg": self.min_potassium_mg,
            "healthConcerns": self.health_concerns,
            "aiReasoning": self.ai_reasoning,
            "isAiGenerated": self.is_ai_generated,
            "generatedAt": datetime_utils.to_optional_iso(self.generated_at),
            "activityLevel": self.activity_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NutritionGoal":
        with decoding("NutritionGoal"):
            return cls(
                target_calories=int(data["targetCalories"]),
                target_protein_grams=optional_int(data.get("targetProteinGrams")),
                target_carbs_grams=optional_int(data.get("targetCarbsGrams")),
                target_fat_grams=optional_int(data.get("targetFatGrams")),
                max_saturated_fat_grams=optional_int(data.get("maxSaturatedFatGrams")),
                max_trans_fat_grams=optional_int(data.get("maxTransFatGrams")),
                min_unsaturated_fat_grams=optional_int(data.get("minUnsaturatedFatGrams")),
                max_sodium_mg=optional_int(data.get("maxSodiumMg")),
                max_sugar_grams=optional_int(data.get("maxSugarGrams")),
                min_fiber_grams=optional_int(data.get("minFiberGrams")),
                max_cholesterol_mg=optional_int(data.get("maxCholesterolMg")),
                min_potassium_mg=optional_int(data.get("minPotassiumMg")),
                health_concerns=data.get("healthConcerns"),
                ai_reasoning=data.get("aiReasoning"),
                is_ai_generated=bool(data.get("isAiGenerated", False)),
                generated_at=datetime_utils.parse_optional_datetime(data.get("generatedAt")),
                activity_level=data.get("activityLevel"),
            )


NutritionGoal.DEFAULT = NutritionGoal(
    target_calories=2000,
    target_protein_grams=50,
    target_carbs_grams=250,
    target_fat_grams=65,
    max_saturated_fat_grams=20,
    max_trans_fat_grams=2,
    max_sodium_mg=2300,
    max_sugar_grams=50,
    min_fiber_grams=25,
)


def _ratio(total: float, target: Optional[int]) -> float:
    return total / target if target else 0.0


@dataclass(frozen=True)
class NutritionSummary:
    """Totals for a set of food entries"""
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    entry_count: int
    total_saturated_fat: float = 0.0
    total_unsaturated_fat: float = 0.0
    total_trans_fat: float = 0.0
    total_sugar: float = 0.0
    total_fiber: float = 0.0

    @classmethod
    def from_entries(cls, entries: List[FoodEntry]) -> "NutritionSummary":
        estimates = [e.nutrition for e in entries if e.nutrition is not None]
        return cls(
            total_calories=sum(n.calories for n in estimates),
            total_protein=sum(n.protein_grams for n in estimates),
            total_carbs=sum(n.carbs_grams for n in estimates),
            total_fat=sum(n.fat_grams for n in estimates),
            total_saturated_fat=sum(n.saturated_fat_grams or 0.0 for n in estimates),
            total_unsaturated_fat=sum(n.unsaturated_fat_grams or 0.0 for n in estimates),
            total_trans_fat=sum(n.trans_fat_grams or 0.0 for n in estimates),
            total_sugar=sum(n.sugar_grams or 0.0 for n in estimates),
            total_fiber=sum(n.fiber_grams or 0.0 for n in estimates),
            entry_count=len(entries),
        )

    def calorie_progress(self, goal: NutritionGoal) -> float:
        return _ratio(self.total_calories, goal.target_calories)

    def protein_progress(self, goal: NutritionGoal) -> float:
        return _ratio(self.total_protein, goal.target_protein_grams)

    def carbs_progress(self, goal: NutritionGoal) -> float:
        return _ratio(self.total_carbs, goal.target_carbs_grams)

    def fat_progress(self, goal: NutritionGoal) -> float:
        return _ratio(self.total_fat, goal.target_fat_grams)


# ===== MINDFUL EATING PRESETS =====

@dataclass(frozen=True)
class MoodOption:
    id: str
    label: str
    emoji: str


class MealMoodPresets:
    BEFORE_MEAL = (
        MoodOption("hungry", "Hungry", "🍽️"),
        MoodOption("stressed", "Stressed", "😰"),
        MoodOption("anxious", "Anxious", "😟"),
        MoodOption("bored", "Bored", "😑"),
        MoodOption("tired", "Tired", "😴"),
        MoodOption("happy", "Happy", "😊"),
        MoodOption("sad", "Sad", "😢"),
        MoodOption("neutral", "Neutral", "😐"),
    )

    AFTER_MEAL = (
        MoodOption("satisfied", "Satisfied", "😌"),
        MoodOption("energized", "Energized", "⚡"),
        MoodOption("sluggish", "Sluggish", "🥱"),
        MoodOption("guilty", "Guilty", "😣"),
        MoodOption("content", "Content", "😊"),
        MoodOption("still_hungry", "Still Hungry", "🍽️"),
        MoodOption("overfull", "Overfull", "🫃"),
        MoodOption("neutral", "Neutral", "😐"),
    )

    HUNGER_LABELS = ("Not hungry", "Slightly hungry", "Hungry", "Very hungry", "Starving")
    FULLNESS_LABELS = ("Still hungry", "Not quite full", "Satisfied", "Full", "Overfull")

    @classmethod
    def find(cls, mood_id: str) -> Optional[MoodOption]:
        for option in cls.BEFORE_MEAL + cls.AFTER_MEAL:
            if option.id == mood_id:
                return option
        return None

    @classmethod
    def hunger_label(cls, level: int) -> str:
        validate_scale(level, "hunger level")
        return cls.HUNGER_LABELS[level - 1]

    @classmethod
    def fullness_label(cls, level: int) -> str:
        validate_scale(level, "fullness level")
        return cls.FULLNESS_LABELS[level - 1]
