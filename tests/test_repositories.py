"""
Tests for the repository classes against a real (in-memory SQLite) session.

- RecipeRepository: diet/time filtering, ingredient rows and names
- UserRepository: create, lookup, duplicate handling, delete
- MealPlanRepository: day replacement, single dish swap, per-user delete
"""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from app.exceptions import ConflictError
from domain.enums import MealLabel
from domain.models import Recipe, UserMealPlanEntry
from domain.planning import DailyMealPlan, MealEvent
from repositories import MealPlanRepository, RecipeRepository, UserRepository
from services.meal_plan_assembler import scale_by_servings
from test_fixtures import add_plan_row, make_candidate

PLAN_DATE = date(2026, 10, 19)


# =============================================================================
# RECIPE REPOSITORY TESTS
# =============================================================================


def test_recipe_repository_filters_by_diet_and_time(seeded_session: Session):
    repo = RecipeRepository(seeded_session)

    rows = repo.find_by_diets_and_time({"vegan", "paleo"}, 10, 10)

    assert [r.id for r in rows] == [7, 8, 9]


def test_recipe_repository_empty_diet_set(seeded_session: Session):
    assert RecipeRepository(seeded_session).find_by_diets_and_time(set(), 60, 60) == []


def test_recipe_repository_ingredient_lookups(seeded_session: Session):
    repo = RecipeRepository(seeded_session)

    rows = repo.get_ingredient_rows([1, 2, 2])
    names = repo.get_ingredient_names(r.ingredient_id for r in rows)

    assert [(r.recipe_id, r.ingredient_id) for r in rows] == [(1, 1), (1, 3), (2, 2), (2, 1)]
    assert names == {1: "Egg", 2: "Avocado", 3: "Bacon"}
    assert repo.get_ingredient_names([99]) == {}


def test_recipe_repository_get_by_id(seeded_session: Session):
    repo = RecipeRepository(seeded_session)

    assert repo.get_by_id(3).name == "Salmon Lettuce Wraps"
    assert repo.get_by_id(404) is None


def test_recipe_repository_matches_diet_tags_case_insensitively(seeded_session: Session):
    seeded_session.add(Recipe(id=12, name="Herb Omelette", diet="Keto", prep_time=5, cook_time=5, calories=320))
    seeded_session.commit()

    rows = RecipeRepository(seeded_session).find_by_diets_and_time({"keto"}, 10, 10)

    assert [r.id for r in rows] == [1, 2, 3, 4, 5, 6, 12]


# =============================================================================
# USER REPOSITORY TESTS
# =============================================================================


def test_user_repository_create_and_get(db_session: Session):
    repo = UserRepository(db_session)

    user = repo.create_user("user_2abc", email="sarah@example.com", provider="google")

    assert user.id is not None
    assert repo.get_by_clerk_id("user_2abc").email == "sarah@example.com"
    assert repo.get_by_clerk_id("missing") is None


def test_user_repository_duplicate_clerk_id(db_session: Session):
    repo = UserRepository(db_session)
    repo.create_user("user_dup")

    with pytest.raises(ConflictError):
        repo.create_user("user_dup")

    # session is usable again after the rollback
    assert repo.get_by_clerk_id("user_dup") is not None


def test_user_repository_delete(db_session: Session):
    repo = UserRepository(db_session)
    repo.create_user("user_gone")

    assert repo.delete_user("user_gone") is True
    db_session.commit()
    assert repo.get_by_clerk_id("user_gone") is None
    assert repo.delete_user("user_gone") is False


# =============================================================================
# MEAL PLAN REPOSITORY TESTS
# =============================================================================


def make_plan(*recipe_ids):
    meals = [scale_by_servings(make_candidate(rid, calories=400), 1) for rid in recipe_ids]
    return DailyMealPlan(
        events=[MealEvent(label=MealLabel.DINNER, meals=(meals[0], meals[1]))],
        target_per_meal=800,
    )


def test_replace_day_overwrites_previous_rows(db_session: Session):
    repo = MealPlanRepository(db_session)
    repo.replace_day("user_abc", PLAN_DATE, make_plan(1, 2))
    repo.replace_day("user_abc", PLAN_DATE, make_plan(3, 4))

    rows = repo.get_day("user_abc", PLAN_DATE)

    assert [(r.recipe_id, r.meal_type) for r in rows] == [(3, "dinner"), (4, "dinner")]
    assert float(rows[0].scaled_calories) == pytest.approx(400)


def test_replace_day_leaves_other_days_alone(db_session: Session):
    repo = MealPlanRepository(db_session)
    other_day = date(2026, 10, 20)
    repo.replace_day("user_abc", other_day, make_plan(5, 6))

    repo.replace_day("user_abc", PLAN_DATE, make_plan(1, 2))

    assert len(repo.get_day("user_abc", other_day)) == 2


def test_replace_meal_swaps_one_row(db_session: Session):
    repo = MealPlanRepository(db_session)
    add_plan_row(db_session, "user_abc", 1, 1, meal_type="lunch", plan_date=PLAN_DATE)
    add_plan_row(db_session, "user_abc", 2, 1, meal_type="lunch", plan_date=PLAN_DATE)

    repo.replace_meal("user_abc", PLAN_DATE, "Lunch", 1, scale_by_servings(make_candidate(7), 2))

    rows = repo.get_day("user_abc", PLAN_DATE, meal_types=["Lunch"])
    assert sorted(r.recipe_id for r in rows) == [2, 7]
    assert [r.servings for r in rows if r.recipe_id == 7] == [2]


def test_delete_for_user(db_session: Session):
    repo = MealPlanRepository(db_session)
    add_plan_row(db_session, "user_abc", 1, 1, plan_date=PLAN_DATE)
    add_plan_row(db_session, "user_abc", 2, 1, plan_date=date(2026, 10, 21))
    add_plan_row(db_session, "user_xyz", 1, 1, plan_date=PLAN_DATE)

    assert repo.delete_for_user("user_abc") == 2
    db_session.commit()
    assert db_session.query(UserMealPlanEntry).count() == 1
