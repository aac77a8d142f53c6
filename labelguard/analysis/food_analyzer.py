"""Food analysis orchestration.

FoodAnalyzer is the entry point used by product lookup, text extraction
and manual entry collaborators. It takes an already-tokenized ingredient
list and builds a FoodAnalysisResult. The dietary classifier and health
score calculator read the same inputs independently. The registry safety
view is available separately via safety() or together via analyze_full().
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from labelguard.data_layer.models import (
    FoodAnalysisResult,
    FullReport,
    NutritionFacts,
    ProductInput,
    SafetyAnalysis,
)
from labelguard.data_layer.risk_registry import Registry
from labelguard.ingestion.ingredient_detector import detect_additives, detect_allergens
from labelguard.scoring.dietary_classifier import DietaryClassifier
from labelguard.scoring.health_score import HealthScoreCalculator, HealthScoreRules
from labelguard.scoring.safety_analyzer import RiskThresholds, SafetyAnalyzer

logger = logging.getLogger(__name__)

NutritionInput = Union[NutritionFacts, Mapping[str, Any], None]


def as_nutrition(nutrition: NutritionInput) -> Optional[NutritionFacts]:
    """Accept NutritionFacts or a nutrient-name -> amount mapping."""
    if nutrition is None or isinstance(nutrition, NutritionFacts):
        return nutrition
    return NutritionFacts.from_mapping(nutrition)


class FoodAnalyzer:
    """Builds food analysis results from normalized label inputs.

    Holds no per-request state, so one instance can serve concurrent
    callers.
    """

    def __init__(self,
                 registry: Optional[Registry] = None,
                 thresholds: Optional[RiskThresholds] = None,
                 health_rules: Optional[HealthScoreRules] = None):
        """Initialize analyzer.

        Args:
            registry: Risk registry for safety analysis (defaults to built-in)
            thresholds: Optional custom risk tier thresholds
            health_rules: Optional custom health score rules
        """
        self.safety_analyzer = SafetyAnalyzer(registry, thresholds)
        self.dietary_classifier = DietaryClassifier()
        self.health_calculator = HealthScoreCalculator(health_rules)

    def analyze(self,
                name: str,
                ingredients: Sequence[str],
                nutrition: NutritionInput = None,
                allergens: Optional[Sequence[str]] = None,
                additives: Optional[Sequence[str]] = None) -> FoodAnalysisResult:
        """Analyze one product.

        Args:
            name: Display name
            ingredients: Tokenized ingredient list, display order
            nutrition: Optional nutrition facts (unknown nutrients stay unknown)
            allergens: Pre-identified allergens (default none)
            additives: Pre-identified additives (default none)

        Returns:
            FoodAnalysisResult
        """
        ingredients = tuple(ingredients)
        allergens = tuple(allergens or ())
        additives = tuple(additives or ())
        facts = as_nutrition(nutrition)

        dietary_info = self.dietary_classifier.classify(ingredients, allergens, facts)
        health_score = self.health_calculator.calculate(facts, additives, allergens)

        logger.debug("Analyzed %r: health_score=%d", name, health_score)
        return FoodAnalysisResult(
            name=name,
            ingredients=ingredients,
            nutrition=facts,
            additives=additives,
            allergens=allergens,
            dietary_info=dietary_info,
            health_score=health_score,
        )

    def analyze_product(self, product: ProductInput) -> FoodAnalysisResult:
        """Analyze a product mapped from a lookup record."""
        return self.analyze(
            name=product.name,
            ingredients=product.ingredients,
            nutrition=product.nutrition,
            allergens=product.allergens,
            additives=product.additives,
        )

    def analyze_ingredient_list(self,
                                ingredients: Sequence[str],
                                name: Optional[str] = None,
                                nutrition: NutritionInput = None) -> FoodAnalysisResult:
        """Analyze a hand-entered list, detecting allergens and additives from it."""
        ingredients = list(ingredients)
        return self.analyze(
            name=name or f"Recipe with {len(ingredients)} ingredients",
            ingredients=ingredients,
            nutrition=nutrition,
            allergens=detect_allergens(ingredients),
            additives=detect_additives(ingredients),
        )

    def safety(self, ingredients: Sequence[str]) -> SafetyAnalysis:
        """Registry safety view of an ingredient list, independent of nutrition."""
        return self.safety_analyzer.analyze(ingredients)

    def analyze_full(self,
                     name: str,
                     ingredients: Sequence[str],
                     nutrition: NutritionInput = None,
                     allergens: Optional[Sequence[str]] = None,
                     additives: Optional[Sequence[str]] = None) -> FullReport:
        """Food analysis and safety analysis of the same inputs."""
        result = self.analyze(name, ingredients, nutrition, allergens, additives)
        return FullReport(result=result, safety=self.safety(result.ingredients))

    def analyze_many(self, products: Iterable[ProductInput]) -> List[FoodAnalysisResult]:
        """Analyze several products, results in input order."""
        return [self.analyze_product(product) for product in products]


DEFAULT_ANALYZER = FoodAnalyzer()


def get_default_analyzer() -> FoodAnalyzer:
    """Shared analyzer over the built-in registry and default rules."""
    return DEFAULT_ANALYZER


def analyze(name: str,
            ingredients: Sequence[str],
            nutrition: NutritionInput = None,
            allergens: Optional[Sequence[str]] = None,
            additives: Optional[Sequence[str]] = None) -> FoodAnalysisResult:
    """Analyze one product with the default analyzer."""
    return get_default_analyzer().analyze(name, ingredients, nutrition, allergens, additives)
