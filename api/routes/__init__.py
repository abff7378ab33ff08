"""API routes package"""

from . import health, meal_plans, recipes, users

__all__ = ["health", "meal_plans", "recipes", "users"]
