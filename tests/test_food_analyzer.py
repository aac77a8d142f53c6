"""Tests for the analysis orchestrator."""

import dataclasses

import pytest

from labelguard.analysis.food_analyzer import (
    DEFAULT_ANALYZER,
    FoodAnalyzer,
    analyze,
    as_nutrition,
    get_default_analyzer,
)
from labelguard.data_layer.models import (
    FoodAnalysisResult,
    NutritionFacts,
    ProductInput,
    RegistryEntry,
    RiskCategory,
    RiskLevel,
    Severity,
)
from labelguard.scoring.health_score import HealthScoreRules
from labelguard.scoring.safety_analyzer import RiskThresholds


@pytest.fixture
def analyzer():
    return FoodAnalyzer()


class TestAsNutrition:
    """Tests for nutrition input coercion."""

    def test_none(self):
        assert as_nutrition(None) is None

    def test_facts_pass_through(self):
        facts = NutritionFacts(fat=3)
        assert as_nutrition(facts) is facts

    def test_mapping(self):
        assert as_nutrition({"fat": 3, "sugar": "n/a"}) == NutritionFacts(fat=3.0)


class TestAnalyze:
    """Tests for FoodAnalyzer.analyze."""

    def test_builds_result(self, analyzer):
        nutrition = {"protein": 12, "fiber": 5, "calories": 150, "sugar": 5, "sodium": 200, "fat": 10}
        result = analyzer.analyze(
            "Granola",
            ["oats", "honey", "almonds"],
            nutrition=nutrition,
        )

        assert isinstance(result, FoodAnalysisResult)
        assert result.name == "Granola"
        assert result.ingredients == ("oats", "honey", "almonds")
        assert result.nutrition.protein == 12.0
        assert result.health_score == 90
        assert result.dietary_info.vegan is False
        assert result.dietary_info.vegetarian is True

    def test_empty_ingredients_are_neutral(self, analyzer):
        result = analyzer.analyze("Mystery", [], additives=["e102"], allergens=["nuts"])

        flags = result.dietary_info
        assert flags.vegan and flags.vegetarian and flags.gluten_free and flags.dairy_free
        assert flags.keto is False
        assert result.health_score == 43

    def test_defaults_for_optional_inputs(self, analyzer):
        result = analyzer.analyze("Water", ["water"])
        assert result.nutrition is None
        assert result.additives == ()
        assert result.allergens == ()
        assert result.health_score == 50

    def test_missing_nutrients_stay_unknown(self, analyzer):
        result = analyzer.analyze("Bar", ["oats"], nutrition={"calories": 120})
        assert result.nutrition.calories == 120.0
        assert result.nutrition.sugar is None

    def test_result_is_immutable(self, analyzer):
        result = analyzer.analyze("Bar", ["oats"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.health_score = 100

    def test_caller_list_not_shared(self, analyzer):
        ingredients = ["oats"]
        result = analyzer.analyze("Bar", ingredients)
        ingredients.append("cheese")
        assert result.ingredients == ("oats",)

    def test_keto_with_nutrition(self, analyzer):
        result = analyzer.analyze("Cheese", ["cheese"], nutrition={"carbs": 1, "fat": 33})
        assert result.dietary_info.keto is True

    def test_module_level_analyze(self):
        result = analyze("Crisps", ["potatoes", "palm oil", "salt"])
        assert result.health_score == 50

    def test_default_analyzer_built_at_import(self):
        assert get_default_analyzer() is DEFAULT_ANALYZER
        assert get_default_analyzer() is get_default_analyzer()


class TestAnalyzeIngredientList:
    """Tests for hand-entered lists."""

    def test_detects_allergens_and_additives(self, analyzer):
        ingredients = ["wheat flour", "milk", "artificial colors", "preservatives (E250)", "sugar"]
        result = analyzer.analyze_ingredient_list(ingredients)

        assert result.name == "Recipe with 5 ingredients"
        assert result.allergens == ("milk",)
        assert result.additives == ("artificial colors", "preservatives (E250)")
        assert result.health_score == 38
        assert result.dietary_info.gluten_free is False

    def test_custom_name(self, analyzer):
        assert analyzer.analyze_ingredient_list(["oats"], name="Porridge").name == "Porridge"


class TestSafetyAndFullReport:
    """Tests for the safety view and combined report."""

    def test_safety(self, analyzer):
        safety = analyzer.safety(["sugar", "palm oil", "cocoa powder", "milk powder"])
        assert safety.safety_score == 94

    def test_analyze_full(self, analyzer):
        ingredients = ["wheat flour", "milk", "artificial colors", "preservatives (E250)", "sugar"]
        report = analyzer.analyze_full("Cake", ingredients)

        assert report.result.name == "Cake"
        assert [risk.canonical_name for risk in report.safety.matched_risks] == ["Sodium Nitrite"]
        assert report.safety.safety_score == 90
        assert report.safety.overall_risk is RiskLevel.LOW

        data = report.to_dict()
        assert data["safety"]["safety_score"] == 90
        assert data["health_score"] == 50

    def test_custom_registry_and_rules(self):
        entry = RegistryEntry(
            canonical_name="Test Gum",
            aliases=("E999",),
            severity=Severity.HIGH,
            category=RiskCategory.ADDITIVE,
        )
        analyzer = FoodAnalyzer(
            registry=(entry,),
            thresholds=RiskThresholds(medium_above=2, high_above=5),
            health_rules=HealthScoreRules(base_score=60),
        )
        report = analyzer.analyze_full("Jelly", ["water", "e999"])

        assert report.safety.overall_risk is RiskLevel.MEDIUM
        assert report.safety.safety_score == 63
        assert report.result.health_score == 60


class TestProducts:
    """Tests for ProductInput analysis."""

    def test_analyze_product(self, analyzer):
        product = ProductInput(
            name="Cola",
            ingredients=("carbonated water", "high fructose corn syrup", "caramel color"),
            nutrition=NutritionFacts(calories=42, sugar=10.6, sodium=4),
            additives=("e150d", "e338"),
        )
        result = analyzer.analyze_product(product)

        assert result.name == "Cola"
        assert result.additives == ("e150d", "e338")
        assert result.health_score == 50

    def test_analyze_many_preserves_order(self, analyzer):
        products = [ProductInput(name="A"), ProductInput(name="B", ingredients=("cheese",))]
        results = analyzer.analyze_many(products)

        assert [result.name for result in results] == ["A", "B"]
        assert results[1].dietary_info.vegan is False

    def test_repeated_analysis_identical(self, analyzer):
        first = analyzer.analyze_full("Bar", ["oats", "E129"], {"sugar": 20})
        second = analyzer.analyze_full("Bar", ["oats", "E129"], {"sugar": 20})
        assert first == second
