"""Pydantic schemas for the recipe detail view."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.schemas.plan_schemas import CamelModel, IngredientLineResponse

MAX_SERVINGS = 100


class RecipeDetailRequest(BaseModel):
    """Body of POST /api/recipes"""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., ge=1)
    servings: Optional[int] = Field(default=None, ge=1, le=MAX_SERVINGS)
    scaled_recipe: Optional[Dict[str, Any]] = Field(default=None, alias="scaledRecipe")

    def resolved_servings(self) -> int:
        """Explicit servings win, then the servings carried by the scaled recipe.

        The scaled recipe is client data; unreadable values give 1 serving and the
        result is clamped to 1..MAX_SERVINGS.
        """
        if self.servings is not None:
            return self.servings
        if not self.scaled_recipe:
            return 1
        try:
            servings = int(self.scaled_recipe.get("servings") or 1)
        except (TypeError, ValueError, OverflowError):
            return 1
        return min(MAX_SERVINGS, max(1, servings))


class RecipeOriginal(BaseModel):
    id: int
    name: str
    image: Optional[str] = None
    diet: str
    prep_time: float
    cook_time: float
    makes_x_servings: float
    health_score: Optional[float] = None
    cost: Optional[float] = None
    allergies: Optional[str] = None
    instructions: Optional[str] = None
    calories: float
    protein: float
    carbs: float
    fat: float
    ingredients: List[IngredientLineResponse]


class RecipeScaled(CamelModel):
    servings: int
    scaled_calories: float
    scaled_protein: float
    scaled_carbs: float
    scaled_fat: float
    ingredients: List[IngredientLineResponse]


class RecipeDetailResponse(BaseModel):
    original: RecipeOriginal
    scaled: RecipeScaled
