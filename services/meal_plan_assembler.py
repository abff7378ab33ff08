"""
Meal plan assembler.

Builds a day out of shuffled candidate pairs, scaling every dish to a whole number of
servings, and retries with a fresh shuffle until each meal event lands inside the
calorie margin or the attempt budget runs out. Pure in-memory work: no I/O happens
inside the retry loop.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, TypeVar

from domain.enums import MealLabel, labels_for
from domain.planning import (
    Accepted,
    AssemblyResult,
    Candidate,
    DailyMealPlan,
    Exhausted,
    MealEvent,
    ScaledMeal,
    round_half_up,
)

logger = logging.getLogger("macroplate.assembler")

MEALS_PER_EVENT = 2
DEFAULT_CALORIE_MARGIN = 330.0
DEFAULT_MAX_ATTEMPTS = 7

T = TypeVar("T")


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random) -> List[T]:
    """Uniform random permutation of ``items`` as a new list."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def scale_by_servings(meal: Candidate, servings: int) -> ScaledMeal:
    """Multiply every per-serving macro by ``servings``; bad calorie data scales to zero."""
    if not meal.has_usable_calories:
        return ScaledMeal(
            candidate=meal,
            servings=max(1, int(servings)),
            scaled_calories=0.0,
            scaled_protein=0.0,
            scaled_fat=0.0,
            scaled_carbs=0.0,
        )
    return ScaledMeal(
        candidate=meal,
        servings=servings,
        scaled_calories=servings * meal.calories,
        scaled_protein=servings * meal.protein,
        scaled_fat=servings * meal.fat,
        scaled_carbs=servings * meal.carbs,
    )


def scale_meal_to_target(meal: Candidate, target_calories: float) -> ScaledMeal:
    """Scale a dish to the whole number of servings closest to ``target_calories``.

    Dishes with missing, zero, negative or non-finite calories get one serving and
    zeroed macros. A dish is never split, so at least one serving is always used.
    """
    if not meal.has_usable_calories:
        return scale_by_servings(meal, 1)

    servings = max(1, round_half_up(target_calories / meal.calories))
    return scale_by_servings(meal, servings)


class MealPlanAssembler:
    """Monte-Carlo search for a day whose meal events all meet the calorie target."""

    def __init__(
        self,
        calorie_margin: float = DEFAULT_CALORIE_MARGIN,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: Optional[random.Random] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.calorie_margin = calorie_margin
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()

    @staticmethod
    def target_per_meal(total_calories: float, meal_count: int) -> float:
        return total_calories / meal_count

    def assemble(
        self, candidates: Sequence[Candidate], meal_count: int, total_calories: float
    ) -> AssemblyResult:
        """Try up to ``max_attempts`` shuffles; return the first day that validates."""
        labels = labels_for(meal_count)
        target = self.target_per_meal(total_calories, len(labels))

        for attempt in range(1, self.max_attempts + 1):
            plan = self._sample(candidates, labels, target)
            if plan is not None and self.is_valid(plan):
                logger.info(
                    "plan_accepted attempt=%d meal_count=%d target_per_meal=%.1f",
                    attempt,
                    len(labels),
                    target,
                )
                return Accepted(plan=plan, attempts=attempt)
            logger.debug("plan_rejected attempt=%d", attempt)

        logger.warning(
            "plan_exhausted attempts=%d pool=%d target_per_meal=%.1f margin=%.1f",
            self.max_attempts,
            len(candidates),
            target,
            self.calorie_margin,
        )
        return Exhausted(attempts=self.max_attempts)

    def _sample(
        self, candidates: Sequence[Candidate], labels: List[MealLabel], target: float
    ) -> Optional[DailyMealPlan]:
        needed = len(labels) * MEALS_PER_EVENT
        picks = fisher_yates_shuffle(candidates, self.rng)[:needed]
        if len(picks) < needed:
            return None

        per_dish = target / MEALS_PER_EVENT
        events = []
        for index, label in enumerate(labels):
            first, second = picks[index * 2], picks[index * 2 + 1]
            events.append(
                MealEvent(
                    label=label,
                    meals=(
                        scale_meal_to_target(first, per_dish),
                        scale_meal_to_target(second, per_dish),
                    ),
                )
            )
        return DailyMealPlan(events=events, target_per_meal=target)

    def is_valid(self, plan: DailyMealPlan) -> bool:
        """Both dishes present and every event within the margin of its target"""
        for event in plan.events:
            if len(event.meals) != MEALS_PER_EVENT or any(m is None for m in event.meals):
                return False
            if abs(event.total_calories - plan.target_per_meal) > self.calorie_margin:
                return False
        return True
