"""
Plan domain mappers.
Handles transformation between in-memory planning types and response DTOs.
"""

import math
from typing import List

from domain.planning import DailyMealPlan, IngredientLine, ScaledMeal, round_half_up
from domain.schemas.plan_schemas import (
    IngredientLineResponse,
    MacroTotalsResponse,
    MealGroupResponse,
    MealPlanResponse,
    MealResponse,
)


class PlanMapper:
    """Mapper for plan-related transformations."""

    @staticmethod
    def line_to_response(line: IngredientLine) -> IngredientLineResponse:
        return IngredientLineResponse(
            ingredient_id=line.ingredient_id,
            name=line.name,
            unit=line.unit,
            quantity=line.quantity,
        )

    @staticmethod
    def lines_to_response(lines: List[IngredientLine]) -> List[IngredientLineResponse]:
        return [PlanMapper.line_to_response(line) for line in lines]

    @staticmethod
    def meal_fields(meal: ScaledMeal) -> dict:
        """Keyword arguments shared by every meal-shaped response"""
        c = meal.candidate
        return dict(
            id=c.id,
            name=c.name,
            image=c.image,
            diet=c.diet,
            calories=c.calories if math.isfinite(c.calories) else 0.0,
            protein=c.protein,
            fat=c.fat,
            carbs=c.carbs,
            prep_time=c.prep_time,
            cook_time=c.cook_time,
            servings=meal.servings,
            scaled_calories=meal.scaled_calories,
            scaled_protein=meal.scaled_protein,
            scaled_fat=meal.scaled_fat,
            scaled_carbs=meal.scaled_carbs,
            ingredients=PlanMapper.lines_to_response(meal.ingredients),
        )

    @staticmethod
    def meal_to_response(meal: ScaledMeal) -> MealResponse:
        return MealResponse(**PlanMapper.meal_fields(meal))

    @staticmethod
    def to_response(plan: DailyMealPlan, attempts: int, saved: bool = False) -> MealPlanResponse:
        """
        Convert an accepted DailyMealPlan to the MealPlanResponse DTO.

        Args:
            plan: accepted plan with ingredients already attached
            attempts: sampling attempts it took
            saved: whether the plan was written for the user

        Returns:
            MealPlanResponse DTO
        """
        totals = plan.totals
        return MealPlanResponse(
            target_per_meal=plan.target_per_meal,
            totals=MacroTotalsResponse(
                calories=totals.calories,
                protein=totals.protein,
                carbs=totals.carbs,
                fat=totals.fat,
            ),
            groups=[
                MealGroupResponse(
                    label=event.label,
                    total_calories=round_half_up(event.total_calories),
                    meals=[PlanMapper.meal_to_response(m) for m in event.meals],
                )
                for event in plan.events
            ],
            attempts=attempts,
            saved=saved,
        )
