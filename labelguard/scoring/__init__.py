"""Scoring module: registry matching, safety, dietary flags and health score."""

from .ingredient_matcher import IngredientMatcher, match_ingredient
from .safety_analyzer import SafetyAnalyzer, RiskThresholds, analyze_safety
from .dietary_classifier import DietaryClassifier, classify_diet
from .health_score import HealthScoreCalculator, HealthScoreRules, calculate_health_score

__all__ = [
    "IngredientMatcher",
    "match_ingredient",
    "SafetyAnalyzer",
    "RiskThresholds",
    "analyze_safety",
    "DietaryClassifier",
    "classify_diet",
    "HealthScoreCalculator",
    "HealthScoreRules",
    "calculate_health_score",
]
