"""
Tests for IngredientAggregator and the grocery-list consolidation.
"""

import pytest

from domain.planning import IngredientLine
from repositories import RecipeRepository
from services.ingredient_aggregator import IngredientAggregator, consolidate
from services.meal_plan_assembler import scale_by_servings
from test_fixtures import make_candidate


def test_lines_are_scaled_by_servings(seeded_session):
    aggregator = IngredientAggregator(RecipeRepository(seeded_session))

    lines = aggregator.lines_for({1: 3})[1]

    by_name = {line.name: line for line in lines}
    assert set(by_name) == {"Egg", "Bacon"}
    assert by_name["Egg"].quantity == pytest.approx(6)
    assert by_name["Egg"].unit == "pcs"
    assert by_name["Bacon"].quantity == pytest.approx(90)


def test_missing_ingredient_name_uses_placeholder(seeded_session):
    aggregator = IngredientAggregator(RecipeRepository(seeded_session), placeholder="Mystery item")

    lines = aggregator.lines_for({3: 2})[3]

    assert len(lines) == 1
    assert lines[0].ingredient_id == 99
    assert lines[0].name == "Mystery item"
    assert lines[0].quantity == pytest.approx(200)


def test_recipe_without_ingredient_rows_maps_to_empty_list(seeded_session):
    aggregator = IngredientAggregator(RecipeRepository(seeded_session))

    assert aggregator.lines_for({6: 1}) == {6: []}
    assert aggregator.lines_for({}) == {}


def test_build_attaches_lines_to_meals(seeded_session):
    aggregator = IngredientAggregator(RecipeRepository(seeded_session))
    meals = [
        scale_by_servings(make_candidate(1, calories=466), 1),
        scale_by_servings(make_candidate(2, calories=233), 2),
    ]

    aggregator.build(meals)

    assert {line.name for line in meals[0].ingredients} == {"Egg", "Bacon"}
    avocado = [line for line in meals[1].ingredients if line.name == "Avocado"][0]
    assert avocado.quantity == pytest.approx(1.0)


def test_build_uses_two_repository_calls():
    class CountingRepository:
        def __init__(self):
            self.calls = []

        def get_ingredient_rows(self, recipe_ids):
            self.calls.append("rows")
            return []

        def get_ingredient_names(self, ingredient_ids):
            self.calls.append("names")
            return {}

    repo = CountingRepository()
    meals = [scale_by_servings(make_candidate(i), 1) for i in range(1, 7)]

    IngredientAggregator(repo).build(meals)

    assert repo.calls == ["rows", "names"]


def test_consolidate_sums_same_ingredient_and_unit():
    lines = [
        IngredientLine(1, "Egg", "pcs", 2),
        IngredientLine(2, "Avocado", "pcs", 0.5),
        IngredientLine(1, "Egg", "pcs", 3),
        IngredientLine(1, "Egg", "g", 50),
    ]

    merged = consolidate(lines)

    assert [(l.name, l.unit, l.quantity) for l in merged] == [
        ("Avocado", "pcs", 0.5),
        ("Egg", "g", 50),
        ("Egg", "pcs", 5),
    ]
