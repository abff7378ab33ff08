from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_meal_plan_service
from api.responses import PLAN_ERROR_RESPONSES
from domain.mappers import PlanMapper
from domain.schemas.plan_schemas import (
    GenerateMealPlanRequest,
    GroceryListResponse,
    MealPlanResponse,
    RefreshMealRequest,
    RefreshMealResponse,
    StoredMealResponse,
)
from services.meal_plan_service import MealPlanService, PlanRequest, RefreshRequest

router = APIRouter(tags=["Meal Planning"])
logger = logging.getLogger("macroplate.api.meal_plans")


@router.post("/data", response_model=MealPlanResponse, responses=PLAN_ERROR_RESPONSES)
def generate_meal_plan(
    body: GenerateMealPlanRequest,
    service: MealPlanService = Depends(get_meal_plan_service),
):
    """
    Generate a one-day meal plan scaled to a calorie target.

    This endpoint:
    1. Filters recipes by diet ("anything" covers every planned diet) and max time per dish
    2. Samples two dishes per meal event and scales each to a whole number of servings
    3. Retries with a fresh shuffle until every event is within the calorie margin
    4. Attaches scaled ingredient lists
    5. Stores the plan when a clerk_id is given (a failed save does not fail the request)

    Returns:
        MealPlanResponse with target per meal, daily totals and meal groups
    """
    generated = service.generate(
        PlanRequest(
            diet=body.diet,
            total_calories=body.total_calories,
            max_time=body.time,
            meal_count=int(body.meal_count),
            clerk_id=body.clerk_id,
            plan_date=body.plan_date,
        )
    )
    return PlanMapper.to_response(generated.plan, generated.attempts, generated.saved)


@router.post("/refresh", response_model=RefreshMealResponse, responses=PLAN_ERROR_RESPONSES)
def refresh_meal(
    body: RefreshMealRequest,
    service: MealPlanService = Depends(get_meal_plan_service),
):
    """Swap one dish of a meal event for another recipe scaled to half the event's target."""
    meal = service.refresh_meal(
        RefreshRequest(
            diet=body.diet,
            max_time=body.time,
            target_calories=body.target_calories,
            exclude_ids=body.exclude_ids,
            clerk_id=body.clerk_id,
            meal_label=body.meal_label,
            replace_recipe_id=body.replace_recipe_id,
            plan_date=body.plan_date,
        )
    )
    return RefreshMealResponse(
        **PlanMapper.meal_fields(meal),
        recipe_id=meal.recipe_id,
        group_index=body.group_index,
        meal_index=body.meal_index,
    )


@router.get("/plans/{clerk_id}", response_model=List[StoredMealResponse])
def get_stored_plan(
    clerk_id: str,
    plan_date: Optional[date] = Query(None, alias="date", description="Defaults to today"),
    service: MealPlanService = Depends(get_meal_plan_service),
):
    """List the stored dishes of a user's day, one row per recipe and meal."""
    rows = service.get_stored_day(clerk_id, plan_date or date.today())
    return [StoredMealResponse.model_validate(r) for r in rows]


@router.get("/plans/{clerk_id}/grocery", response_model=GroceryListResponse)
def get_grocery_list(
    clerk_id: str,
    plan_date: Optional[date] = Query(None, alias="date", description="Defaults to today"),
    service: MealPlanService = Depends(get_meal_plan_service),
):
    """Consolidated ingredient list for a user's stored day."""
    day = plan_date or date.today()
    lines = service.grocery_list(clerk_id, day)
    logger.info("Grocery list for user %s on %s: %d items", clerk_id, day, len(lines))
    return GroceryListResponse(
        clerk_id=clerk_id,
        plan_date=day,
        items=PlanMapper.lines_to_response(lines),
    )
