"""
In-memory planning types.

These exist only for the duration of one plan-generation call. Only the final
DailyMealPlan is flattened into UserMealPlanEntry rows.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from domain.enums import MealLabel


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Candidate:
    """A recipe with every numeric field coerced to float"""

    id: int
    name: str
    diet: str
    calories: float
    protein: float
    fat: float
    carbs: float
    prep_time: float
    cook_time: float
    makes_x_servings: float = 1.0
    image: Optional[str] = None
    health_score: Optional[float] = None
    cost: Optional[float] = None
    allergies: Optional[str] = None

    @property
    def has_usable_calories(self) -> bool:
        return math.isfinite(self.calories) and self.calories > 0


@dataclass(frozen=True)
class IngredientLine:
    ingredient_id: int
    name: str
    unit: Optional[str]
    quantity: float


@dataclass
class ScaledMeal:
    """A candidate multiplied by a whole number of servings"""

    candidate: Candidate
    servings: int
    scaled_calories: float
    scaled_protein: float
    scaled_fat: float
    scaled_carbs: float
    ingredients: List[IngredientLine] = field(default_factory=list)

    @property
    def recipe_id(self) -> int:
        return self.candidate.id


@dataclass
class MealEvent:
    """One eating occasion made of exactly two dishes"""

    label: MealLabel
    meals: Tuple[ScaledMeal, ScaledMeal]

    @property
    def total_calories(self) -> float:
        return sum(meal.scaled_calories for meal in self.meals)


@dataclass(frozen=True)
class MacroTotals:
    calories: int
    protein: int
    carbs: int
    fat: int

    @classmethod
    def from_meals(cls, meals: List[ScaledMeal]) -> "MacroTotals":
        return cls(
            calories=round_half_up(sum(m.scaled_calories for m in meals)),
            protein=round_half_up(sum(m.scaled_protein for m in meals)),
            carbs=round_half_up(sum(m.scaled_carbs for m in meals)),
            fat=round_half_up(sum(m.scaled_fat for m in meals)),
        )


@dataclass
class DailyMealPlan:
    events: List[MealEvent]
    target_per_meal: float

    @property
    def meals(self) -> List[ScaledMeal]:
        return [meal for event in self.events for meal in event.meals]

    @property
    def totals(self) -> MacroTotals:
        return MacroTotals.from_meals(self.meals)


@dataclass(frozen=True)
class Accepted:
    """A sampling attempt passed validation"""

    plan: DailyMealPlan
    attempts: int


@dataclass(frozen=True)
class Exhausted:
    """Every sampling attempt failed validation"""

    attempts: int


AssemblyResult = Union[Accepted, Exhausted]
