"""
Tests for MealPlanAssembler: labels, pairing, the calorie margin and the bounded
retry loop.
"""

import random

import pytest

from domain.enums import MealLabel
from domain.planning import Accepted, Exhausted
from services.meal_plan_assembler import MealPlanAssembler, fisher_yates_shuffle
from test_fixtures import CountingRandom, make_candidate


def keto_pool():
    """Six dishes whose every pairing lands near a 933 kcal meal"""
    return [
        make_candidate(i, calories=kcal)
        for i, kcal in enumerate([466, 233, 450, 155, 300, 400], 1)
    ]


def test_three_meal_day_has_labeled_pairs_within_margin():
    assembler = MealPlanAssembler(rng=random.Random(42))

    result = assembler.assemble(keto_pool(), meal_count=3, total_calories=2800)

    assert isinstance(result, Accepted)
    plan = result.plan
    assert [e.label for e in plan.events] == [MealLabel.BREAKFAST, MealLabel.LUNCH, MealLabel.DINNER]
    assert all(len(e.meals) == 2 for e in plan.events)
    assert plan.target_per_meal == pytest.approx(2800 / 3)
    for event in plan.events:
        assert abs(event.total_calories - plan.target_per_meal) <= 330


def test_picks_are_distinct_within_a_day():
    result = MealPlanAssembler(rng=random.Random(7)).assemble(keto_pool(), 3, 2800)

    ids = [m.recipe_id for m in result.plan.meals]
    assert sorted(ids) == [1, 2, 3, 4, 5, 6]


def test_single_meal_is_dinner_with_full_target():
    pool = [make_candidate(i, calories=kcal) for i, kcal in enumerate([1000, 950, 1100], 1)]

    result = MealPlanAssembler(rng=random.Random(1)).assemble(pool, meal_count=1, total_calories=2000)

    assert isinstance(result, Accepted)
    assert [e.label for e in result.plan.events] == [MealLabel.DINNER]
    assert result.plan.target_per_meal == pytest.approx(2000)


def test_two_meal_day_is_breakfast_and_lunch():
    pool = [make_candidate(i, calories=500) for i in range(1, 5)]

    result = MealPlanAssembler(rng=random.Random(3)).assemble(pool, meal_count=2, total_calories=2000)

    assert [e.label for e in result.plan.events] == [MealLabel.BREAKFAST, MealLabel.LUNCH]


def test_zero_calorie_dishes_fail_validation_without_crashing():
    pool = [make_candidate(1, calories=0), make_candidate(2, calories=0), make_candidate(3, calories=0)]

    result = MealPlanAssembler(rng=random.Random(5)).assemble(pool, meal_count=1, total_calories=1500)

    assert isinstance(result, Exhausted)
    assert result.attempts == 7


def test_exhausts_after_configured_attempts():
    rng = CountingRandom(seed=11)
    assembler = MealPlanAssembler(calorie_margin=1, max_attempts=4, rng=rng)
    # 700 kcal dishes can only make 1400 or 2100 kcal meals, never 1000 +- 1
    pool = [make_candidate(i, calories=700) for i in range(1, 4)]

    result = assembler.assemble(pool, meal_count=1, total_calories=1000)

    assert result == Exhausted(attempts=4)
    # one Fisher-Yates pass of len(pool) - 1 swaps per attempt
    assert rng.randint_calls == 4 * (len(pool) - 1)


def test_never_more_than_seven_attempts_by_default():
    rng = CountingRandom(seed=2)
    pool = [make_candidate(i, calories=3000) for i in range(1, 7)]

    result = MealPlanAssembler(rng=rng).assemble(pool, meal_count=3, total_calories=1500)

    assert isinstance(result, Exhausted)
    assert rng.randint_calls == 7 * (len(pool) - 1)


def test_short_pool_exhausts_instead_of_raising():
    pool = [make_candidate(i, calories=400) for i in range(1, 4)]

    result = MealPlanAssembler(rng=random.Random(0)).assemble(pool, meal_count=3, total_calories=2400)

    assert isinstance(result, Exhausted)


@pytest.mark.parametrize("seed", range(20))
def test_accepted_plans_always_respect_margin(seed):
    rng = random.Random(seed)
    pool = [make_candidate(i, calories=rng.uniform(80, 900)) for i in range(1, 16)]
    assembler = MealPlanAssembler(calorie_margin=330, rng=random.Random(seed))

    result = assembler.assemble(pool, meal_count=3, total_calories=2400)

    if isinstance(result, Accepted):
        assert 1 <= result.attempts <= 7
        for event in result.plan.events:
            assert abs(event.total_calories - 800) <= 330
    else:
        assert result.attempts == 7


def test_rejects_invalid_attempt_budget():
    with pytest.raises(ValueError):
        MealPlanAssembler(max_attempts=0)


def test_fisher_yates_returns_permutation_without_mutating_input():
    items = list(range(10))

    shuffled = fisher_yates_shuffle(items, random.Random(9))

    assert sorted(shuffled) == items
    assert items == list(range(10))


def test_fisher_yates_is_reproducible_with_seed():
    items = list(range(10))

    assert fisher_yates_shuffle(items, random.Random(4)) == fisher_yates_shuffle(items, random.Random(4))
