"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.plan_schemas import (
    GenerateMealPlanRequest,
    RefreshMealRequest,
    IngredientLineResponse,
    MealResponse,
    MealGroupResponse,
    MacroTotalsResponse,
    MealPlanResponse,
    RefreshMealResponse,
    StoredMealResponse,
    GroceryListResponse,
)
from domain.schemas.user_schemas import UserCreate, UserCreatedResponse, UserResponse
from domain.schemas.recipe_schemas import (
    RecipeDetailRequest,
    RecipeDetailResponse,
    RecipeOriginal,
    RecipeScaled,
)

__all__ = [
    # Plan schemas
    "GenerateMealPlanRequest",
    "RefreshMealRequest",
    "IngredientLineResponse",
    "MealResponse",
    "MealGroupResponse",
    "MacroTotalsResponse",
    "MealPlanResponse",
    "RefreshMealResponse",
    "StoredMealResponse",
    "GroceryListResponse",
    # User schemas
    "UserCreate",
    "UserCreatedResponse",
    "UserResponse",
    # Recipe schemas
    "RecipeDetailRequest",
    "RecipeDetailResponse",
    "RecipeOriginal",
    "RecipeScaled",
]
