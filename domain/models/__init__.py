"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import Base, Database, get_db_session
from domain.models.ingredient import Ingredient
from domain.models.recipe import Recipe, RecipeIngredient
from domain.models.user import AppUser
from domain.models.meal_plan import UserMealPlanEntry

__all__ = [
    # Database
    "Base",
    "Database",
    "get_db_session",
    # Recipe models
    "Recipe",
    "RecipeIngredient",
    "Ingredient",
    # User models
    "AppUser",
    "UserMealPlanEntry",
]
