"""Candidate filter: narrows the recipe store to recipes a plan may use."""

from __future__ import annotations

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Sequence, Set, Union

from app.exceptions import InsufficientCandidatesError
from domain.enums import Diet
from domain.models import Recipe
from domain.planning import Candidate
from repositories import RecipeRepository

logger = logging.getLogger("macroplate.candidates")

DietSelection = Union[str, Diet, Iterable[Union[str, Diet]]]


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Best-effort conversion of a stored value to float.

    ``None``, blanks and unparseable strings give ``default``. Non-finite values are
    kept as they are so callers can decide what bad data means for them.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Decimal):
        return float(value)
    text = str(value).strip()
    if not text:
        return default
    try:
        return float(Decimal(text))
    except (InvalidOperation, ValueError):
        try:
            return float(text)
        except ValueError:
            return default


def _finite_number(value: Any, default: float = 0.0) -> float:
    number = coerce_number(value, default=default)
    return number if math.isfinite(number) else default


def _optional_number(value: Any) -> Optional[float]:
    number = coerce_number(value, default=math.nan)
    return number if math.isfinite(number) else None


def to_candidate(recipe: Recipe) -> Candidate:
    """Coerce a recipe row into a Candidate.

    Calories that cannot be read become NaN, which the scaling rule treats as bad data.
    """
    return Candidate(
        id=int(recipe.id),
        name=recipe.name or "",
        diet=(recipe.diet or "").lower(),
        calories=coerce_number(recipe.calories, default=math.nan),
        protein=_finite_number(recipe.protein),
        fat=_finite_number(recipe.fat),
        carbs=_finite_number(recipe.carbs),
        prep_time=_finite_number(recipe.prep_time),
        cook_time=_finite_number(recipe.cook_time),
        makes_x_servings=_finite_number(recipe.makes_x_servings, default=1.0),
        image=recipe.image,
        health_score=_optional_number(recipe.health_score),
        cost=_optional_number(recipe.cost),
        allergies=recipe.allergies,
    )


def expand_diets(selection: DietSelection, anything_diets: Sequence[str]) -> Set[str]:
    """Turn a diet selection into the set of tags to query.

    ``"anything"`` stands for ``anything_diets``; any other tag stands for itself.
    """
    if isinstance(selection, (str, Diet)):
        selection = [selection]

    tags: Set[str] = set()
    for item in selection:
        tag = item.value if isinstance(item, Diet) else str(item).strip().lower()
        if tag == Diet.ANYTHING.value:
            tags.update(t.lower() for t in anything_diets)
        elif tag:
            tags.add(tag)
    return tags


class CandidateFilter:
    """Pure, deterministic filtering over one repository snapshot."""

    def __init__(
        self,
        recipes: RecipeRepository,
        anything_diets: Sequence[str],
        min_candidates: int = 3,
    ):
        self.recipes = recipes
        self.anything_diets = list(anything_diets)
        self.min_candidates = min_candidates

    def fetch(
        self,
        diet: DietSelection,
        max_prep_time: float,
        max_cook_time: Optional[float] = None,
        min_candidates: Optional[int] = None,
    ) -> List[Candidate]:
        """Every recipe matching the diet set and both time limits.

        ``min_candidates`` overrides the filter-wide minimum for this call.

        Raises:
            InsufficientCandidatesError: fewer than the minimum recipes match
        """
        required = self.min_candidates if min_candidates is None else min_candidates
        if max_cook_time is None:
            max_cook_time = max_prep_time
        diets = expand_diets(diet, self.anything_diets)

        rows = self.recipes.find_by_diets_and_time(diets, max_prep_time, max_cook_time)
        candidates = [to_candidate(r) for r in rows]
        logger.info(
            "candidates_fetched diets=%s prep<=%s cook<=%s count=%d",
            sorted(diets),
            max_prep_time,
            max_cook_time,
            len(candidates),
        )

        if len(candidates) < required:
            raise InsufficientCandidatesError(found=len(candidates), required=required)
        return candidates

    @staticmethod
    def cap_by_calories(
        candidates: List[Candidate], target_per_meal: float, needed: int
    ) -> List[Candidate]:
        """Keep dishes that fit in half a meal event, unless too few would remain.

        Falls back to the uncapped list when the capped one holds fewer than ``needed``.
        """
        ceiling = target_per_meal / 2
        capped = [
            c for c in candidates if math.isfinite(c.calories) and c.calories <= ceiling
        ]
        if len(capped) < needed:
            logger.info(
                "calorie_cap_fallback ceiling=%.1f capped=%d needed=%d",
                ceiling,
                len(capped),
                needed,
            )
            return list(candidates)
        return capped
