"""
API dependencies for dependency injection
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from domain.models import get_db_session
from services.meal_plan_service import MealPlanService


def get_meal_plan_service(db: Session = Depends(get_db_session)) -> MealPlanService:
    """
    Meal plan service bound to the request's session.

    Usage:
        @router.post("/example")
        def example(service: MealPlanService = Depends(get_meal_plan_service)):
            ...
    """
    return MealPlanService(db)
