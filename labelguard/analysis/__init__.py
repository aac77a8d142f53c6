"""Analysis orchestration for food labels."""

from .food_analyzer import FoodAnalyzer, analyze, get_default_analyzer

__all__ = [
    "FoodAnalyzer",
    "analyze",
    "get_default_analyzer",
]
