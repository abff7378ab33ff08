"""
Domain enums for the MacroPlate application.
Contains the fixed vocabularies used by requests, models and the planner.
"""

import enum
from typing import Dict, List


class Diet(str, enum.Enum):
    """Diet tags a recipe can carry, plus the 'anything' selection"""

    ANYTHING = "anything"
    VEGAN = "vegan"
    KETO = "keto"
    PALEO = "paleo"


class MealCount(int, enum.Enum):
    """Number of meal events in a generated day"""

    ONE = 1
    TWO = 2
    THREE = 3


class MealLabel(str, enum.Enum):
    """Eating occasions of a day"""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


MEAL_LABELS: Dict[int, List[MealLabel]] = {
    1: [MealLabel.DINNER],
    2: [MealLabel.BREAKFAST, MealLabel.LUNCH],
    3: [MealLabel.BREAKFAST, MealLabel.LUNCH, MealLabel.DINNER],
}


def labels_for(meal_count: int) -> List[MealLabel]:
    """Meal labels for a day with ``meal_count`` events."""
    try:
        return MEAL_LABELS[int(meal_count)]
    except KeyError:
        raise ValueError(f"meal_count must be 1, 2 or 3, got {meal_count}") from None
