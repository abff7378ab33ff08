"""Ingredient aggregation for chosen, scaled recipes."""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Sequence, Tuple

from domain.planning import IngredientLine, ScaledMeal
from repositories import RecipeRepository
from services.candidate_filter import coerce_number

logger = logging.getLogger("macroplate.ingredients")

DEFAULT_PLACEHOLDER = "Unknown ingredient"


class IngredientAggregator:
    """Expands recipes into ingredient lines scaled by their chosen servings."""

    def __init__(self, recipes: RecipeRepository, placeholder: str = DEFAULT_PLACEHOLDER):
        self.recipes = recipes
        self.placeholder = placeholder

    def lines_for(self, servings_by_recipe: Dict[int, int]) -> Dict[int, List[IngredientLine]]:
        """
        Build scaled ingredient lines for each recipe id.

        Two repository round trips: one for the ingredient rows of every recipe and
        one for the names of every distinct ingredient. A missing name falls back to
        the placeholder instead of failing the request.

        Args:
            servings_by_recipe: recipe id -> serving multiplier

        Returns:
            recipe id -> ingredient lines (recipes without rows map to an empty list)
        """
        result: Dict[int, List[IngredientLine]] = {rid: [] for rid in servings_by_recipe}
        if not servings_by_recipe:
            return result

        rows = self.recipes.get_ingredient_rows(servings_by_recipe.keys())
        names = self.recipes.get_ingredient_names(r.ingredient_id for r in rows)

        misses = 0
        for row in rows:
            name = names.get(row.ingredient_id)
            if name is None:
                misses += 1
                name = self.placeholder
            result.setdefault(row.recipe_id, []).append(
                IngredientLine(
                    ingredient_id=row.ingredient_id,
                    name=name,
                    unit=row.unit,
                    quantity=coerce_number(row.quantity)
                    * servings_by_recipe.get(row.recipe_id, 1),
                )
            )

        if misses:
            logger.warning("ingredient_name_misses count=%d", misses)
        return result

    def build(self, meals: Sequence[ScaledMeal]) -> Dict[int, List[IngredientLine]]:
        """Attach scaled ingredient lines to every meal and return them by recipe id"""
        servings = {meal.recipe_id: meal.servings for meal in meals}
        by_recipe = self.lines_for(servings)
        for meal in meals:
            meal.ingredients = list(by_recipe.get(meal.recipe_id, []))
        logger.info(
            "ingredients_attached recipes=%d lines=%d",
            len(by_recipe),
            sum(len(v) for v in by_recipe.values()),
        )
        return by_recipe


def consolidate(lines: Iterable[IngredientLine]) -> List[IngredientLine]:
    """Sum quantities of lines sharing ingredient and unit, ordered by name."""
    merged: "OrderedDict[Tuple[int, str], IngredientLine]" = OrderedDict()
    for line in lines:
        key = (line.ingredient_id, line.unit or "")
        existing = merged.get(key)
        if existing is None:
            merged[key] = line
        else:
            merged[key] = IngredientLine(
                ingredient_id=existing.ingredient_id,
                name=existing.name,
                unit=existing.unit,
                quantity=existing.quantity + line.quantity,
            )
    return sorted(merged.values(), key=lambda l: (l.name.lower(), l.unit or ""))
