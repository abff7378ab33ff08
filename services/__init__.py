"""Services package - Business logic layer"""

from services.candidate_filter import CandidateFilter
from services.meal_plan_assembler import MealPlanAssembler
from services.ingredient_aggregator import IngredientAggregator
from services.meal_plan_service import MealPlanService
from services.recipe_service import RecipeService
from services.user_service import UserService

__all__ = [
    "CandidateFilter",
    "MealPlanAssembler",
    "IngredientAggregator",
    "MealPlanService",
    "RecipeService",
    "UserService",
]
