"""
Meal Plan Repository - persistence sink for generated daily plans
"""

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from domain.models import UserMealPlanEntry
from domain.planning import DailyMealPlan, ScaledMeal
from repositories.base import BaseRepository


class MealPlanRepository(BaseRepository[UserMealPlanEntry]):
    """One row per (user, date, meal label, recipe)"""

    def __init__(self, db: Session):
        super().__init__(db, UserMealPlanEntry)

    @staticmethod
    def to_row(
        clerk_id: str, plan_date: date, meal_label: str, meal: ScaledMeal
    ) -> UserMealPlanEntry:
        return UserMealPlanEntry(
            clerk_id=clerk_id,
            recipe_id=meal.recipe_id,
            meal_type=meal_label.lower(),
            servings=meal.servings,
            plan_date=plan_date,
            scaled_calories=meal.scaled_calories,
            scaled_protein=meal.scaled_protein,
            scaled_carbs=meal.scaled_carbs,
            scaled_fat=meal.scaled_fat,
        )

    def replace_day(
        self, clerk_id: str, plan_date: date, plan: DailyMealPlan
    ) -> List[UserMealPlanEntry]:
        """Overwrite the stored plan of ``clerk_id`` for ``plan_date`` and commit"""
        self.delete_day(clerk_id, plan_date)
        rows = [
            self.to_row(clerk_id, plan_date, event.label.value, meal)
            for event in plan.events
            for meal in event.meals
        ]
        self.db.add_all(rows)
        self.db.commit()
        return rows

    def replace_meal(
        self,
        clerk_id: str,
        plan_date: date,
        meal_label: str,
        old_recipe_id: int,
        meal: ScaledMeal,
    ) -> UserMealPlanEntry:
        """Swap one stored dish for another and commit"""
        (
            self.db.query(UserMealPlanEntry)
            .filter(
                UserMealPlanEntry.clerk_id == clerk_id,
                UserMealPlanEntry.plan_date == plan_date,
                UserMealPlanEntry.meal_type == meal_label.lower(),
                UserMealPlanEntry.recipe_id == old_recipe_id,
            )
            .delete(synchronize_session=False)
        )
        row = self.to_row(clerk_id, plan_date, meal_label, meal)
        self.db.add(row)
        self.db.commit()
        return row

    def delete_day(self, clerk_id: str, plan_date: date) -> int:
        return (
            self.db.query(UserMealPlanEntry)
            .filter(
                UserMealPlanEntry.clerk_id == clerk_id,
                UserMealPlanEntry.plan_date == plan_date,
            )
            .delete(synchronize_session=False)
        )

    def delete_for_user(self, clerk_id: str) -> int:
        return (
            self.db.query(UserMealPlanEntry)
            .filter(UserMealPlanEntry.clerk_id == clerk_id)
            .delete(synchronize_session=False)
        )

    def get_day(
        self, clerk_id: str, plan_date: date, meal_types: Optional[Iterable[str]] = None
    ) -> List[UserMealPlanEntry]:
        """Stored rows of a day, in insertion order"""
        query = self.db.query(UserMealPlanEntry).filter(
            UserMealPlanEntry.clerk_id == clerk_id,
            UserMealPlanEntry.plan_date == plan_date,
        )
        if meal_types:
            query = query.filter(
                UserMealPlanEntry.meal_type.in_([m.lower() for m in meal_types])
            )
        return query.order_by(UserMealPlanEntry.id).all()
