from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.enums import Diet, MealCount, MealLabel


def _normalize_diet(v):
    if isinstance(v, str):
        return v.strip().lower()
    return v


class GenerateMealPlanRequest(BaseModel):
    """Body of POST /api/data"""

    model_config = ConfigDict(populate_by_name=True)

    diet: Diet = Diet.ANYTHING
    total_calories: float = Field(..., alias="totalCalories", gt=0, le=20000)
    time: float = Field(
        ..., gt=0, le=1440, description="Max prep time and max cook time per dish, minutes"
    )
    meal_count: MealCount = Field(default=MealCount.THREE, alias="mealCount")
    clerk_id: Optional[str] = Field(default=None, min_length=1)
    plan_date: Optional[date] = Field(default=None, alias="date")

    normalize_diet = field_validator("diet", mode="before")(_normalize_diet)


class RefreshMealRequest(BaseModel):
    """Body of POST /api/refresh: swap one dish of a meal event"""

    model_config = ConfigDict(populate_by_name=True)

    diet: Diet = Diet.ANYTHING
    time: float = Field(..., gt=0, le=1440)
    target_calories: float = Field(
        ..., alias="targetCalories", gt=0, le=20000, description="Calorie target of the whole meal event"
    )
    clerk_id: Optional[str] = Field(default=None, min_length=1)
    group_index: int = Field(default=0, alias="groupIndex", ge=0, le=2)
    meal_index: int = Field(default=0, alias="mealIndex", ge=0, le=1)
    exclude_ids: List[int] = Field(default_factory=list, alias="excludeIds")
    meal_label: Optional[MealLabel] = Field(default=None, alias="mealLabel")
    replace_recipe_id: Optional[int] = Field(default=None, alias="replaceRecipeId")
    plan_date: Optional[date] = Field(default=None, alias="date")

    normalize_diet = field_validator("diet", mode="before")(_normalize_diet)

    @field_validator("meal_label", mode="before")
    @classmethod
    def normalize_label(cls, v):
        if isinstance(v, str):
            return v.strip().capitalize()
        return v


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngredientLineResponse(CamelModel):
    ingredient_id: int
    name: str
    unit: Optional[str] = None
    quantity: float


class MealResponse(CamelModel):
    id: int
    name: str
    image: Optional[str] = None
    diet: str
    calories: float
    protein: float
    fat: float
    carbs: float
    prep_time: float
    cook_time: float
    servings: int
    scaled_calories: float
    scaled_protein: float
    scaled_fat: float
    scaled_carbs: float
    ingredients: List[IngredientLineResponse] = Field(default_factory=list)


class MealGroupResponse(CamelModel):
    label: MealLabel
    total_calories: int
    meals: List[MealResponse]


class MacroTotalsResponse(CamelModel):
    calories: int
    protein: int
    carbs: int
    fat: int


class MealPlanResponse(CamelModel):
    target_per_meal: float
    totals: MacroTotalsResponse
    groups: List[MealGroupResponse]
    attempts: int
    saved: bool = False


class RefreshMealResponse(MealResponse):
    recipe_id: int
    group_index: int
    meal_index: int


class StoredMealResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    recipe_id: int
    meal_type: str
    servings: int
    plan_date: date
    scaled_calories: float
    scaled_protein: float
    scaled_carbs: float
    scaled_fat: float


class GroceryListResponse(BaseModel):
    clerk_id: str
    plan_date: date
    items: List[IngredientLineResponse]
