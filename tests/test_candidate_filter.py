"""
Tests for CandidateFilter: diet expansion, time limits, minimum pool size and
the calorie cap with its fallback.
"""

import math
from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.exceptions import InsufficientCandidatesError
from domain.enums import Diet
from repositories import RecipeRepository
from services.candidate_filter import (
    CandidateFilter,
    coerce_number,
    expand_diets,
    to_candidate,
)
from test_fixtures import FakeRecipeRepository, KETO_IDS, make_candidate

ANYTHING = ["vegan", "keto", "paleo"]


def make_recipe_row(rid, diet="keto", calories="400", prep=5, cook=5):
    return SimpleNamespace(
        id=rid,
        name=f"Recipe {rid}",
        diet=diet,
        calories=calories,
        protein="20",
        fat="10",
        carbs="30",
        prep_time=prep,
        cook_time=cook,
        makes_x_servings=None,
        image=None,
        health_score=None,
        cost=None,
        allergies=None,
    )


# =============================================================================
# DIET EXPANSION
# =============================================================================


def test_anything_expands_to_every_planned_diet():
    assert expand_diets(Diet.ANYTHING, ANYTHING) == {"vegan", "keto", "paleo"}
    assert expand_diets("Anything", ANYTHING) == {"vegan", "keto", "paleo"}


def test_specific_diet_stands_for_itself():
    assert expand_diets("keto", ANYTHING) == {"keto"}
    assert expand_diets(["vegan", Diet.PALEO], ANYTHING) == {"vegan", "paleo"}


def test_anything_selection_queries_expanded_set():
    repo = FakeRecipeRepository(
        [make_recipe_row(1, "vegan"), make_recipe_row(2, "keto"), make_recipe_row(3, "paleo")]
    )
    candidate_filter = CandidateFilter(repo, anything_diets=ANYTHING)

    candidates = candidate_filter.fetch(Diet.ANYTHING, 10)

    assert repo.calls == [({"vegan", "keto", "paleo"}, 10, 10)]
    assert [c.id for c in candidates] == [1, 2, 3]


# =============================================================================
# FETCH AGAINST THE DATABASE
# =============================================================================


def test_fetch_applies_diet_and_both_time_limits(seeded_session):
    candidate_filter = CandidateFilter(RecipeRepository(seeded_session), anything_diets=ANYTHING)

    candidates = candidate_filter.fetch("keto", 10)

    assert [c.id for c in candidates] == KETO_IDS
    assert all(c.prep_time <= 10 and c.cook_time <= 10 for c in candidates)
    assert all(isinstance(c.calories, float) for c in candidates)


def test_fetch_is_idempotent(seeded_session):
    candidate_filter = CandidateFilter(RecipeRepository(seeded_session), anything_diets=ANYTHING)

    first = candidate_filter.fetch("anything", 10)
    second = candidate_filter.fetch("anything", 10)

    assert first == second
    # keto 1-6, vegan 7-8, paleo 9; 10 and 11 are too slow
    assert [c.id for c in first] == list(range(1, 10))


def test_fetch_raises_when_too_few_recipes_match(seeded_session):
    candidate_filter = CandidateFilter(RecipeRepository(seeded_session), anything_diets=ANYTHING)

    with pytest.raises(InsufficientCandidatesError) as exc_info:
        candidate_filter.fetch("vegan", 10)

    assert exc_info.value.found == 2
    assert exc_info.value.required == 3
    assert exc_info.value.code == "INSUFFICIENT_CANDIDATES"


def test_fetch_uses_separate_cook_limit_when_given(seeded_session):
    candidate_filter = CandidateFilter(RecipeRepository(seeded_session), anything_diets=ANYTHING)

    candidates = candidate_filter.fetch("anything", 5, max_cook_time=10)

    assert 9 in [c.id for c in candidates]


# =============================================================================
# CALORIE CAP
# =============================================================================


def test_cap_keeps_dishes_within_half_a_meal():
    candidates = [make_candidate(i, calories=kcal) for i, kcal in enumerate([200, 450, 460, 700], 1)]

    capped = CandidateFilter.cap_by_calories(candidates, target_per_meal=900, needed=2)

    assert [c.id for c in capped] == [1, 2]


def test_cap_falls_back_to_uncapped_list_when_too_few_remain():
    candidates = [make_candidate(i, calories=kcal) for i, kcal in enumerate([200, 800, 900, 700], 1)]

    capped = CandidateFilter.cap_by_calories(candidates, target_per_meal=900, needed=4)

    assert capped == candidates


def test_cap_drops_unreadable_calories():
    candidates = [make_candidate(1, calories=math.nan), make_candidate(2, calories=300)]

    capped = CandidateFilter.cap_by_calories(candidates, target_per_meal=900, needed=1)

    assert [c.id for c in capped] == [2]


# =============================================================================
# COERCION
# =============================================================================


@pytest.mark.parametrize(
    "value,expected",
    [(Decimal("12.50"), 12.5), ("7", 7.0), (" 3.25 ", 3.25), (4, 4.0), (None, 0.0), ("", 0.0), ("abc", 0.0)],
)
def test_coerce_number(value, expected):
    assert coerce_number(value) == expected


def test_to_candidate_marks_missing_calories_as_unusable():
    candidate = to_candidate(make_recipe_row(5, calories=None))

    assert math.isnan(candidate.calories)
    assert not candidate.has_usable_calories
    assert candidate.protein == 20.0
    assert candidate.makes_x_servings == 1.0
