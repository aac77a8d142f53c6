"""Health score: nutrition facts plus additive and allergen penalties."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from labelguard.data_layer.models import NutritionFacts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthScoreRules:
    """Rule values for the health score, per reference serving.

    Each nutrition rule fires only when its nutrient is known. A known zero
    counts: calories of 0 earns the low-calorie bonus.
    """
    base_score: float = 50.0

    # Bonuses
    high_protein_above: float = 10.0
    high_protein_bonus: float = 15.0
    high_fiber_above: float = 3.0
    high_fiber_bonus: float = 15.0
    low_calories_below: float = 200.0
    low_calories_bonus: float = 10.0

    # Penalties
    high_sugar_above: float = 15.0
    high_sugar_penalty: float = 20.0
    high_sodium_above: float = 600.0
    high_sodium_penalty: float = 15.0
    high_fat_above: float = 20.0
    high_fat_penalty: float = 10.0

    additive_penalty: float = 5.0
    allergen_penalty: float = 2.0  # Allergens are noted, lightly weighted

    def __post_init__(self):
        amounts = [
            self.high_protein_bonus, self.high_fiber_bonus, self.low_calories_bonus,
            self.high_sugar_penalty, self.high_sodium_penalty, self.high_fat_penalty,
            self.additive_penalty, self.allergen_penalty,
        ]
        if any(amount < 0 for amount in amounts):
            raise ValueError("Health score bonuses and penalties must be non-negative")
        if not 0 <= self.base_score <= 100:
            raise ValueError(f"base_score must be within 0-100, got {self.base_score}")


def _above(value: Optional[float], threshold: float) -> bool:
    return value is not None and value > threshold


def _below(value: Optional[float], threshold: float) -> bool:
    return value is not None and value < threshold


class HealthScoreCalculator:
    """Computes the 0-100 health score."""

    def __init__(self, rules: Optional[HealthScoreRules] = None):
        self.rules = rules or HealthScoreRules()

    def nutrition_adjustment(self, nutrition: Optional[NutritionFacts]) -> float:
        """Sum of the nutrition bonuses and penalties that fire."""
        if nutrition is None:
            return 0.0

        rules = self.rules
        adjustment = 0.0
        if _above(nutrition.protein, rules.high_protein_above):
            adjustment += rules.high_protein_bonus
        if _above(nutrition.fiber, rules.high_fiber_above):
            adjustment += rules.high_fiber_bonus
        if _below(nutrition.calories, rules.low_calories_below):
            adjustment += rules.low_calories_bonus

        if _above(nutrition.sugar, rules.high_sugar_above):
            adjustment -= rules.high_sugar_penalty
        if _above(nutrition.sodium, rules.high_sodium_above):
            adjustment -= rules.high_sodium_penalty
        if _above(nutrition.fat, rules.high_fat_above):
            adjustment -= rules.high_fat_penalty
        return adjustment

    def calculate(self,
                  nutrition: Optional[NutritionFacts] = None,
                  additives: Sequence[str] = (),
                  allergens: Sequence[str] = ()) -> int:
        """Calculate the health score.

        Args:
            nutrition: Optional nutrition facts
            additives: Additives present (each costs additive_penalty)
            allergens: Allergens present (each costs allergen_penalty)

        Returns:
            Integer score clamped to 0-100
        """
        rules = self.rules
        score = rules.base_score + self.nutrition_adjustment(nutrition)
        score -= rules.additive_penalty * len(additives)
        score -= rules.allergen_penalty * len(allergens)

        clamped = max(0.0, min(100.0, score))
        result = int(clamped + 0.5)
        logger.debug("Health score: raw=%.1f, final=%d", score, result)
        return result


def calculate_health_score(nutrition: Optional[NutritionFacts] = None,
                           additives: Sequence[str] = (),
                           allergens: Sequence[str] = ()) -> int:
    """Calculate the health score with default rules."""
    return HealthScoreCalculator().calculate(nutrition, additives, allergens)
