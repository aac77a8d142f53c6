"""Tests for the health score calculator."""

import itertools

import pytest

from labelguard.data_layer.models import NutritionFacts
from labelguard.scoring.health_score import (
    HealthScoreCalculator,
    HealthScoreRules,
    calculate_health_score,
)


class TestHealthScoreRules:
    """Test HealthScoreRules validation."""

    def test_defaults(self):
        rules = HealthScoreRules()
        assert rules.base_score == 50.0
        assert rules.additive_penalty == 5.0
        assert rules.allergen_penalty == 2.0

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            HealthScoreRules(additive_penalty=-5)

    def test_base_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="base_score"):
            HealthScoreRules(base_score=150)


class TestHealthScoreCalculator:
    """Test HealthScoreCalculator with default rules."""

    @pytest.fixture
    def calculator(self):
        return HealthScoreCalculator()

    def test_base_score(self, calculator):
        assert calculator.calculate(None, [], []) == 50

    def test_healthy_nutrition(self, calculator):
        nutrition = NutritionFacts(
            protein=12, fiber=5, calories=150, sugar=5, sodium=200, fat=10
        )
        assert calculator.calculate(nutrition, [], []) == 90

    def test_all_penalties(self, calculator):
        nutrition = NutritionFacts(
            protein=2, fiber=1, calories=450, sugar=30, sodium=700, fat=25
        )
        assert calculator.calculate(nutrition) == 5

    def test_unknown_nutrients_do_not_fire(self, calculator):
        assert calculator.calculate(NutritionFacts()) == 50

    def test_known_zero_calories_earns_bonus(self, calculator):
        assert calculator.calculate(NutritionFacts(calories=0)) == 60

    def test_thresholds_are_exclusive(self, calculator):
        nutrition = NutritionFacts(
            protein=10, fiber=3, calories=200, sugar=15, sodium=600, fat=20
        )
        assert calculator.calculate(nutrition) == 50

    def test_additive_and_allergen_penalties(self, calculator):
        score = calculator.calculate(None, ["e322", "e330"], ["milk", "soy", "nuts"])
        assert score == 34

    def test_clamped_at_zero(self, calculator):
        assert calculator.calculate(None, ["additive"] * 20, []) == 0

    def test_clamped_at_hundred(self):
        calculator = HealthScoreCalculator(HealthScoreRules(base_score=95))
        nutrition = NutritionFacts(protein=20, fiber=10, calories=50)
        assert calculator.calculate(nutrition) == 100

    def test_rounds_half_up(self):
        calculator = HealthScoreCalculator(HealthScoreRules(allergen_penalty=2.5))
        # 50 - 2.5 = 47.5
        assert calculator.calculate(None, [], ["milk"]) == 48

    def test_nutrition_adjustment(self, calculator):
        nutrition = NutritionFacts(protein=11, sugar=16)
        assert calculator.nutrition_adjustment(nutrition) == -5.0
        assert calculator.nutrition_adjustment(None) == 0.0

    def test_score_always_in_range(self, calculator):
        profiles = [
            None,
            NutritionFacts(),
            NutritionFacts(protein=50, fiber=20, calories=10),
            NutritionFacts(sugar=90, sodium=2000, fat=80, calories=900),
        ]
        for nutrition, additives, allergens in itertools.product(
            profiles, [0, 3, 30], [0, 5, 60]
        ):
            score = calculator.calculate(
                nutrition, ["a"] * additives, ["b"] * allergens
            )
            assert 0 <= score <= 100


def test_calculate_health_score_wrapper():
    assert calculate_health_score() == 50
