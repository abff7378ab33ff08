"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.recipe_repository import RecipeRepository
from repositories.user_repository import UserRepository
from repositories.meal_plan_repository import MealPlanRepository

__all__ = [
    "BaseRepository",
    "RecipeRepository",
    "UserRepository",
    "MealPlanRepository",
]
