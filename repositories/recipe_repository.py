"""
Recipe Repository - Data access layer for recipe reference data
"""

from typing import Dict, Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from domain.models import Ingredient, Recipe, RecipeIngredient
from repositories.base import BaseRepository


class RecipeRepository(BaseRepository[Recipe]):
    """Read-only queries over recipes, their ingredient rows and ingredient names"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def find_by_diets_and_time(
        self, diets: Iterable[str], max_prep_time: float, max_cook_time: float
    ) -> List[Recipe]:
        """Recipes tagged with one of ``diets`` whose prep and cook times fit the limits.

        Ordered by id so repeated calls over the same data return the same list.
        """
        diet_list = sorted({d.lower() for d in diets})
        if not diet_list:
            return []
        return (
            self.db.query(Recipe)
            .filter(
                func.lower(Recipe.diet).in_(diet_list),
                Recipe.prep_time <= max_prep_time,
                Recipe.cook_time <= max_cook_time,
            )
            .order_by(Recipe.id)
            .all()
        )

    def get_ingredient_rows(self, recipe_ids: Iterable[int]) -> List[RecipeIngredient]:
        """All per-serving ingredient rows for the given recipes"""
        ids = sorted(set(recipe_ids))
        if not ids:
            return []
        return (
            self.db.query(RecipeIngredient)
            .filter(RecipeIngredient.recipe_id.in_(ids))
            .order_by(RecipeIngredient.recipe_id, RecipeIngredient.id)
            .all()
        )

    def get_ingredient_names(self, ingredient_ids: Iterable[int]) -> Dict[int, str]:
        """Map ingredient id -> display name; unknown ids are simply absent"""
        ids = sorted(set(ingredient_ids))
        if not ids:
            return {}
        rows = (
            self.db.query(Ingredient.id, Ingredient.name)
            .filter(Ingredient.id.in_(ids))
            .all()
        )
        return {row.id: row.name for row in rows}
