from __future__ import annotations

import logging
import random
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings, settings as default_settings
from app.exceptions import ConstraintUnsatisfiableError, InsufficientCandidatesError
from domain.enums import MealLabel, labels_for
from domain.models import UserMealPlanEntry
from domain.planning import DailyMealPlan, Exhausted, IngredientLine, ScaledMeal
from repositories import MealPlanRepository, RecipeRepository
from services.candidate_filter import CandidateFilter, DietSelection
from services.ingredient_aggregator import IngredientAggregator, consolidate
from services.meal_plan_assembler import (
    MEALS_PER_EVENT,
    MealPlanAssembler,
    scale_meal_to_target,
)


logger = logging.getLogger("macroplate.planner")


@dataclass
class PlanRequest:
    diet: DietSelection
    total_calories: float
    max_time: float
    meal_count: int
    clerk_id: Optional[str] = None
    plan_date: Optional[date] = None


@dataclass
class RefreshRequest:
    diet: DietSelection
    max_time: float
    target_calories: float
    exclude_ids: List[int] = field(default_factory=list)
    clerk_id: Optional[str] = None
    meal_label: Optional[MealLabel] = None
    replace_recipe_id: Optional[int] = None
    plan_date: Optional[date] = None


@dataclass
class GeneratedPlan:
    plan: DailyMealPlan
    attempts: int
    saved: bool = False


class MealPlanService:
    """
    Daily plan generation:
    - filters the recipe store by diet and time (fails fast on too few recipes)
    - caps dishes to half a meal event's calories, unless that leaves too few
    - samples and scales pairs per meal event with bounded retries
    - attaches scaled ingredient lists
    - optionally stores the plan for the user; a failed save never fails the request
    """

    def __init__(
        self,
        db: Session,
        config: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.db: Session = db
        self.settings = config or default_settings
        self.rng = rng or random.Random()

        self.recipes = RecipeRepository(db)
        self.plans = MealPlanRepository(db)
        self.candidate_filter = CandidateFilter(
            self.recipes,
            anything_diets=self.settings.anything_diets,
            min_candidates=self.settings.min_candidates,
        )
        self.assembler = MealPlanAssembler(
            calorie_margin=self.settings.calorie_margin,
            max_attempts=self.settings.max_attempts,
            rng=self.rng,
        )
        self.aggregator = IngredientAggregator(
            self.recipes, placeholder=self.settings.ingredient_placeholder
        )

    # ---------- generation ----------

    def generate(self, req: PlanRequest) -> GeneratedPlan:
        meal_count = len(labels_for(req.meal_count))
        needed = meal_count * MEALS_PER_EVENT
        target = self.assembler.target_per_meal(req.total_calories, meal_count)

        logger.info(
            "Generating plan: diet=%s kcal=%s time=%s meal_count=%d user=%s",
            req.diet,
            req.total_calories,
            req.max_time,
            meal_count,
            req.clerk_id,
        )

        candidates = self.candidate_filter.fetch(req.diet, req.max_time, req.max_time)
        pool = self.candidate_filter.cap_by_calories(candidates, target, needed)

        result = self.assembler.assemble(pool, meal_count, req.total_calories)
        if isinstance(result, Exhausted):
            raise ConstraintUnsatisfiableError(
                attempts=result.attempts,
                details={
                    "attempts": result.attempts,
                    "target_per_meal": round(target, 1),
                    "calorie_margin": self.settings.calorie_margin,
                    "pool_size": len(pool),
                },
            )

        plan = result.plan
        self.aggregator.build(plan.meals)

        saved = False
        if req.clerk_id:
            saved = self.save_plan(req.clerk_id, req.plan_date or date.today(), plan)

        return GeneratedPlan(plan=plan, attempts=result.attempts, saved=saved)

    def save_plan(self, clerk_id: str, plan_date: date, plan: DailyMealPlan) -> bool:
        """Store the plan; failures are logged and reported as False"""
        try:
            rows = self.plans.replace_day(clerk_id, plan_date, plan)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(
                "Failed to save meal plan for user %s on %s", clerk_id, plan_date
            )
            return False
        logger.info("Saved %d meal plan rows for user %s on %s", len(rows), clerk_id, plan_date)
        return True

    # ---------- single dish refresh ----------

    def refresh_meal(self, req: RefreshRequest) -> ScaledMeal:
        """Pick one new dish for a meal event and scale it to half its target"""
        # one new dish is enough for a swap
        candidates = self.candidate_filter.fetch(
            req.diet, req.max_time, req.max_time, min_candidates=1
        )
        excluded = set(req.exclude_ids)
        if req.replace_recipe_id is not None:
            excluded.add(req.replace_recipe_id)

        capped = self.candidate_filter.cap_by_calories(candidates, req.target_calories, 1)
        pool = [c for c in capped if c.id not in excluded]
        if not pool:
            pool = [c for c in candidates if c.id not in excluded]
        if not pool:
            raise InsufficientCandidatesError(found=0, required=1)

        pick = self.rng.choice(pool)
        meal = scale_meal_to_target(pick, req.target_calories / MEALS_PER_EVENT)
        self.aggregator.build([meal])
        logger.info(
            "Refreshed dish: recipe=%s servings=%d pool=%d", meal.recipe_id, meal.servings, len(pool)
        )

        if req.clerk_id and req.meal_label and req.replace_recipe_id is not None:
            plan_date = req.plan_date or date.today()
            try:
                self.plans.replace_meal(
                    req.clerk_id, plan_date, req.meal_label.value, req.replace_recipe_id, meal
                )
            except SQLAlchemyError:
                self.db.rollback()
                logger.exception(
                    "Failed to store refreshed dish for user %s on %s", req.clerk_id, plan_date
                )
        return meal

    # ---------- queries for API ----------

    def get_stored_day(self, clerk_id: str, plan_date: date) -> List[UserMealPlanEntry]:
        rows = self.plans.get_day(clerk_id, plan_date)
        logger.info("Found %d stored rows for user %s on %s", len(rows), clerk_id, plan_date)
        return rows

    def grocery_list(self, clerk_id: str, plan_date: date) -> List[IngredientLine]:
        """Consolidated ingredients of a stored day"""
        servings: Dict[int, int] = defaultdict(int)
        for row in self.plans.get_day(clerk_id, plan_date):
            servings[row.recipe_id] += int(row.servings or 1)
        by_recipe = self.aggregator.lines_for(dict(servings))
        return consolidate(line for lines in by_recipe.values() for line in lines)
