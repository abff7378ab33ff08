"""Recipe detail: per-serving view next to the scaled view of one recipe."""

import logging
import math

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import NotFoundError
from domain.mappers import PlanMapper
from domain.schemas.recipe_schemas import (
    RecipeDetailResponse,
    RecipeOriginal,
    RecipeScaled,
)
from repositories import RecipeRepository
from services.candidate_filter import to_candidate
from services.ingredient_aggregator import IngredientAggregator
from services.meal_plan_assembler import scale_by_servings

logger = logging.getLogger("macroplate.recipes")


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


class RecipeService:
    """Business logic for recipe lookups"""

    @staticmethod
    def get_recipe_detail(db: Session, recipe_id: int, servings: int = 1) -> RecipeDetailResponse:
        """
        Build the original and scaled views of a recipe.

        Args:
            db: Database session
            recipe_id: Recipe id
            servings: Serving multiplier for the scaled view

        Raises:
            NotFoundError: recipe does not exist
        """
        repo = RecipeRepository(db)
        recipe = repo.get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")

        candidate = to_candidate(recipe)
        scaled = scale_by_servings(candidate, servings)

        aggregator = IngredientAggregator(repo, placeholder=settings.ingredient_placeholder)
        lines = aggregator.lines_for({recipe.id: 1})[recipe.id]
        scaled_lines = aggregator.lines_for({recipe.id: scaled.servings})[recipe.id]

        logger.info(
            "recipe_detail id=%s servings=%d ingredients=%d", recipe_id, scaled.servings, len(lines)
        )

        return RecipeDetailResponse(
            original=RecipeOriginal(
                id=candidate.id,
                name=candidate.name,
                image=candidate.image,
                diet=candidate.diet,
                prep_time=candidate.prep_time,
                cook_time=candidate.cook_time,
                makes_x_servings=candidate.makes_x_servings,
                health_score=candidate.health_score,
                cost=candidate.cost,
                allergies=candidate.allergies,
                instructions=recipe.instructions,
                calories=_finite(candidate.calories),
                protein=candidate.protein,
                carbs=candidate.carbs,
                fat=candidate.fat,
                ingredients=PlanMapper.lines_to_response(lines),
            ),
            scaled=RecipeScaled(
                servings=scaled.servings,
                scaled_calories=scaled.scaled_calories,
                scaled_protein=scaled.scaled_protein,
                scaled_carbs=scaled.scaled_carbs,
                scaled_fat=scaled.scaled_fat,
                ingredients=PlanMapper.lines_to_response(scaled_lines),
            ),
        )
