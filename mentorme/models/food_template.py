#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MentorMe Models v3 - Food library
Reusable food templates with serving units and unit-aware nutrition scaling

Version: 3.0.0
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Optional

from mentorme.utils import datetime_utils
from mentorme.utils.text_utils import format_number
from mentorme.models.base import Record, ValidationError, decoding, new_id, optional_float, parse_enum, validate_text
from mentorme.models.nutrition import FoodEntry, MealType, NutritionEstimate

logger = logging.getLogger(__name__)

# ===== ENUMS =====


class FoodCategory(Enum):
    PROTEIN = "protein"
    DAIRY = "dairy"
    GRAIN = "grain"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    FAT = "fat"
    BEVERAGE = "beverage"
    SNACK = "snack"
    CONDIMENT = "condiment"
    PREPARED = "prepared"
    SUPPLEMENT = "supplement"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _CATEGORY_INFO[self][0]

    @property
    def emoji(self) -> str:
        return _CATEGORY_INFO[self][1]


_CATEGORY_INFO = {
    FoodCategory.PROTEIN: ("Protein", "🥩"),
    FoodCategory.DAIRY: ("Dairy", "🧀"),
    FoodCategory.GRAIN: ("Grains", "🍞"),
    FoodCategory.VEGETABLE: ("Vegetables", "🥬"),
    FoodCategory.FRUIT: ("Fruits", "🍎"),
    FoodCategory.FAT: ("Fats & Oils", "🥑"),
    FoodCategory.BEVERAGE: ("Beverages", "🥤"),
    FoodCategory.SNACK: ("Snacks", "🍿"),
    FoodCategory.CONDIMENT: ("Condiments", "🧂"),
    FoodCategory.PREPARED: ("Prepared Meals", "🍱"),
    FoodCategory.SUPPLEMENT: ("Supplements", "💊"),
    FoodCategory.OTHER: ("Other", "🍽️"),
}


class ServingUnit(Enum):
    # Weight
    GRAM = "gram"
    OUNCE = "ounce"
    POUND = "pound"
    KILOGRAM = "kilogram"
    # Volume
    CUP = "cup"
    TABLESPOON = "tablespoon"
    TEASPOON = "teaspoon"
    FLUID_OUNCE = "fluidOunce"
    MILLILITER = "milliliter"
    LITER = "liter"
    # Count
    PIECE = "piece"
    SLICE = "slice"
    SERVING = "serving"
    CONTAINER = "container"
    PACKET = "packet"
    SCOOP = "scoop"
    BAR = "bar"
    PATTY = "patty"
    FILLET = "fillet"
    BREAST = "breast"
    THIGH = "thigh"
    EGG = "egg"
    STRIP = "strip"
    LINK = "link"
    BOWL = "bowl"
    PLATE = "plate"
    SANDWICH = "sandwich"
    WRAP = "wrap"
    BURRITO = "burrito"
    TACO = "taco"

    @property
    def display_name(self) -> str:
        return _UNIT_LABELS.get(self, self.value)

    @property
    def plural_name(self) -> str:
        if self in _UNIT_PLURALS:
            return _UNIT_PLURALS[self]
        if self.is_count_unit:
            return self.value + "s"
        return self.display_name

    @property
    def is_weight_unit(self) -> bool:
        return self in _GRAMS_PER_UNIT

    @property
    def is_volume_unit(self) -> bool:
        return self in _ML_PER_UNIT

    @property
    def is_count_unit(self) -> bool:
        return not self.is_weight_unit and not self.is_volume_unit

    def to_grams(self, value: float) -> float:
        if not self.is_weight_unit:
            raise ValueError(f"Cannot convert {self.value} to grams")
        return value * _GRAMS_PER_UNIT[self]

    def from_grams(self, grams: float) -> float:
        if not self.is_weight_unit:
            raise ValueError(f"Cannot convert grams to {self.value}")
        return grams / _GRAMS_PER_UNIT[self]

    def to_milliliters(self, value: float) -> float:
        if not self.is_volume_unit:
            raise ValueError(f"Cannot convert {self.value} to milliliters")
        return value * _ML_PER_UNIT[self]

    def from_milliliters(self, ml: float) -> float:
        if not self.is_volume_unit:
            raise ValueError(f"Cannot convert milliliters to {self.value}")
        return ml / _ML_PER_UNIT[self]

    @classmethod
    def weight_units(cls) -> List["ServingUnit"]:
        return [u for u in cls if u.is_weight_unit]

    @classmethod
    def volume_units(cls) -> List["ServingUnit"]:
        return [u for u in cls if u.is_volume_unit]

    @classmethod
    def count_units(cls) -> List["ServingUnit"]:
        return [u for u in cls if u.is_count_unit]


_GRAMS_PER_UNIT = {
    ServingUnit.GRAM: 1.0,
    ServingUnit.OUNCE: 28.3495,
    ServingUnit.POUND: 453.592,
    ServingUnit.KILOGRAM: 1000.0,
}

_ML_PER_UNIT = {
    ServingUnit.CUP: 236.588,
    ServingUnit.TABLESPOON: 14.7868,
    ServingUnit.TEASPOON: 4.92892,
    ServingUnit.FLUID_OUNCE: 29.5735,
    ServingUnit.MILLILITER: 1.0,
    ServingUnit.LITER: 1000.0,
}

# Count units not listed here display as their value
_UNIT_LABELS = {
    ServingUnit.GRAM: "g",
    ServingUnit.OUNCE: "oz",
    ServingUnit.POUND: "lb",
    ServingUnit.KILOGRAM: "kg",
    ServingUnit.TABLESPOON: "tbsp",
    ServingUnit.TEASPOON: "tsp",
    ServingUnit.FLUID_OUNCE: "fl oz",
    ServingUnit.MILLILITER: "ml",
    ServingUnit.LITER: "L",
}

# Irregular plurals; other count units add an "s"
_UNIT_PLURALS = {
    ServingUnit.POUND: "lbs",
    ServingUnit.CUP: "cups",
    ServingUnit.PATTY: "patties",
    ServingUnit.SANDWICH: "sandwiches",
}


class NutritionSource(Enum):
    AI_ESTIMATED = "aiEstimated"
    MANUAL = "manual"
    VERIFIED = "verified"
    WEB_SEARCH = "webSearch"
    IMPORTED = "imported"
    PRE_POPULATED = "prePopulated"

    @property
    def display_name(self) -> str:
        return _SOURCE_INFO[self][0]

    @property
    def emoji(self) -> str:
        return _SOURCE_INFO[self][1]

    @property
    def is_reliable(self) -> bool:
        return self in (NutritionSource.VERIFIED, NutritionSource.WEB_SEARCH, NutritionSource.PRE_POPULATED)


_SOURCE_INFO = {
    NutritionSource.AI_ESTIMATED: ("AI Estimated", "🤖"),
    NutritionSource.MANUAL: ("Manual Entry", "✏️"),
    NutritionSource.VERIFIED: ("Verified", "✓"),
    NutritionSource.WEB_SEARCH: ("Web Search", "🔍"),
    NutritionSource.IMPORTED: ("Imported", "📥"),
    NutritionSource.PRE_POPULATED: ("Pre-populated", "📚"),
}

# ===== MODELS =====


@dataclass(frozen=True)
class FoodTemplate(Record):
    """A saved food with nutrition for one default serving"""
    name: str
    category: FoodCategory
    nutrition_per_serving: NutritionEstimate
    default_serving_size: float
    serving_unit: ServingUnit
    id: str = field(default_factory=new_id)
    brand: Optional[str] = None
    description: Optional[str] = None
    serving_description: Optional[str] = None  # e.g. "1 medium breast"
    grams_per_serving: Optional[float] = None
    ml_per_serving: Optional[float] = None
    source: NutritionSource = NutritionSource.MANUAL
    source_notes: Optional[str] = None
    source_url: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime_utils.now())
    last_used: Optional[datetime] = None
    use_count: int = 0
    barcode: Optional[str] = None
    image_path: Optional[str] = None
    is_favorite: bool = False
    tags: Optional[List[str]] = None

    def __post_init__(self):
        object.__setattr__(self, "name", validate_text(self.name, max_length=200, field_name="name"))
        if self.default_serving_size <= 0:
            raise ValidationError("default_serving_size must be positive")

    # ===== NUTRITION SCALING =====

    def nutrition_for_amount(self, amount: float) -> NutritionEstimate:
        """Nutrition for an amount given in the template's own serving unit"""
        return self.nutrition_per_serving.scaled(amount / self.default_serving_size)

    def nutrition_for_amount_in_unit(self, amount: float, unit: ServingUnit) -> NutritionEstimate:
        if unit == self.serving_unit:
            return self.nutrition_for_amount(amount)

        if self.serving_unit.is_weight_unit and unit.is_weight_unit:
            serving_grams = self.grams_per_serving or self.serving_unit.to_grams(self.default_serving_size)
            multiplier = unit.to_grams(amount) / serving_grams
        elif self.serving_unit.is_volume_unit and unit.is_volume_unit:
            serving_ml = self.ml_per_serving or self.serving_unit.to_milliliters(self.default_serving_size)
            multiplier = unit.to_milliliters(amount) / serving_ml
        elif self.grams_per_serving and unit.is_weight_unit:
            multiplier = unit.to_grams(amount) / self.grams_per_serving
        elif self.ml_per_serving and unit.is_volume_unit:
            multiplier = unit.to_milliliters(amount) / self.ml_per_serving
        else:
            logger.debug(f"No conversion from {unit.value} to {self.serving_unit.value}, treating as servings")
            multiplier = amount / self.default_serving_size

        return self.nutrition_per_serving.scaled(multiplier)

    # ===== DISPLAY =====

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.brand})" if self.brand else self.name

    def _unit_text(self, amount: float) -> str:
        return self.serving_unit.display_name if amount == 1 else self.serving_unit.plural_name

    @property
    def serving_text(self) -> str:
        if self.serving_description:
            return self.serving_description
        return f"{format_number(self.default_serving_size)} {self._unit_text(self.default_serving_size)}"

    @property
    def calories_per_serving_text(self) -> str:
        return f"{format_number(self.nutrition_per_serving.calories)} cal"

    # ===== SEARCH =====

    def matches_search(self, query: str) -> bool:
        q = query.lower()
        candidates = [self.name, self.brand, self.description] + list(self.tags or [])
        return any(q in c.lower() for c in candidates if c)

    def similarity_to(self, other: "FoodTemplate") -> float:
        """Rough duplicate score, 0.0 to 1.0"""
        score = 0.0
        name, other_name = self.name.lower(), other.name.lower()
        if name == other_name:
            score += 0.5
        elif name in other_name or other_name in name:
            score += 0.3

        if self.brand and other.brand and self.brand.lower() == other.brand.lower():
            score += 0.3

        if self.category == other.category:
            score += 0.1

        cal_a = self.nutrition_per_serving.calories
        cal_b = other.nutrition_per_serving.calories
        avg_cal = (cal_a + cal_b) / 2
        if avg_cal > 0 and abs(cal_a - cal_b) / avg_cal < 0.1:
            score += 0.1

        return score

    def to_food_entry(self, meal_type: MealType, serving_multiplier: float = 1.0,
                      timestamp: Optional[datetime] = None, notes: Optional[str] = None) -> FoodEntry:
        """Log this template as a food entry"""
        amount = self.default_serving_size * serving_multiplier
        if serving_multiplier == 1:
            description = self.display_name
        else:
            description = f"{self.display_name} ({format_number(amount)} {self._unit_text(amount)})"

        grams_consumed = None
        if self.grams_per_serving is not None:
            grams_consumed = self.grams_per_serving * serving_multiplier
        elif self.serving_unit.is_weight_unit:
            grams_consumed = self.serving_unit.to_grams(amount)

        return FoodEntry(
            timestamp=timestamp or datetime_utils.now(),
            meal_type=meal_type,
            description=description,
            nutrition=self.nutrition_for_amount(amount),
            notes=notes,
            is_manual_entry=False,
            template_id=self.id,
            portion_size=serving_multiplier,
            portion_unit=self.serving_unit.display_name,
            grams_consumed=grams_consumed,
            default_serving_size=self.default_serving_size,
            grams_per_serving=self.grams_per_serving,
        )

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "description": self.description,
            "category": self.category.value,
            "nutritionPerServing": self.nutrition_per_serving.to_dict(),
            "defaultServingSize": self.default_serving_size,
            "servingUnit": self.serving_unit.value,
            "servingDescription": self.serving_description,
            "gramsPerServing": self.grams_per_serving,
            "mlPerServing": self.ml_per_serving,
            "source": self.source.value,
            "sourceNotes": self.source_notes,
            "sourceUrl": self.source_url,
            "createdAt": datetime_utils.to_iso(self.created_at),
            "lastUsed": datetime_utils.to_optional_iso(self.last_used),
            "useCount": self.use_count,
            "barcode": self.barcode,
            "imagePath": self.image_path,
            "isFavorite": self.is_favorite,
            "tags": list(self.tags) if self.tags is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FoodTemplate":
        with decoding("FoodTemplate"):
            tags = data.get("tags")
            return cls(
                id=data.get("id") or new_id(),
                name=data["name"],
                brand=data.get("brand"),
                description=data.get("description"),
                category=parse_enum(FoodCategory, data.get("category"), FoodCategory.OTHER),
                nutrition_per_serving=NutritionEstimate.from_dict(data["nutritionPerServing"]),
                default_serving_size=float(data["defaultServingSize"]),
                serving_unit=parse_enum(ServingUnit, data.get("servingUnit"), ServingUnit.SERVING),
                serving_description=data.get("servingDescription"),
                grams_per_serving=optional_float(data.get("gramsPerServing")),
                ml_per_serving=optional_float(data.get("mlPerServing")),
                source=parse_enum(NutritionSource, data.get("source"), NutritionSource.MANUAL),
                source_notes=data.get("sourceNotes"),
                source_url=data.get("sourceUrl"),
                created_at=datetime_utils.parse_optional_datetime(data.get("createdAt")) or datetime_utils.now(),
                last_used=datetime_utils.parse_optional_datetime(data.get("lastUsed")),
                use_count=int(data.get("useCount") or 0),
                barcode=data.get("barcode"),
                image_path=data.get("imagePath"),
                is_favorite=bool(data.get("isFavorite", False)),
                tags=[str(t) for t in tags] if tags is not None else None,
            )


@dataclass(frozen=True)
class SimilarTemplateResult:
    template: FoodTemplate
    similarity: float
