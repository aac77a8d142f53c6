"""Dietary compatibility flags from ingredient keywords and nutrition facts.

Keyword tests are plain substring checks over the whole normalized label,
not whole-word matches: "buttermilk" trips both "butter" and "milk", and
"eggplant" trips "egg". Each flag is computed on its own; nothing forces
the flags to agree with each other.
"""

import logging
from typing import Optional, Sequence, Tuple

from labelguard.data_layer.models import DietaryFlags, NutritionFacts
from labelguard.ingestion.ingredient_normalizer import build_text_blob

logger = logging.getLogger(__name__)

NON_VEGAN_KEYWORDS: Tuple[str, ...] = (
    "meat", "chicken", "beef", "pork", "fish", "milk", "egg", "honey",
    "cheese", "butter", "cream", "whey", "casein", "gelatin",
)
NON_VEGETARIAN_KEYWORDS: Tuple[str, ...] = (
    "meat", "chicken", "beef", "pork", "fish", "gelatin",
)
GLUTEN_KEYWORDS: Tuple[str, ...] = ("gluten", "wheat", "barley", "rye", "spelt")
DAIRY_KEYWORDS: Tuple[str, ...] = (
    "milk", "dairy", "lactose", "cheese", "butter", "cream", "whey", "casein",
)

# Per reference serving
KETO_MAX_CARBS = 10.0
KETO_MIN_FAT = 15.0


def contains_any(blob: str, keywords: Sequence[str]) -> bool:
    return any(keyword in blob for keyword in keywords)


def is_keto(nutrition: Optional[NutritionFacts]) -> bool:
    """Low carb and high fat. Unknown carbs or fat means not keto."""
    if nutrition is None or nutrition.carbs is None or nutrition.fat is None:
        return False
    return nutrition.carbs < KETO_MAX_CARBS and nutrition.fat > KETO_MIN_FAT


class DietaryClassifier:
    """Derives DietaryFlags for a product."""

    def classify(self,
                 ingredients: Sequence[str],
                 allergens: Sequence[str] = (),
                 nutrition: Optional[NutritionFacts] = None) -> DietaryFlags:
        """Classify a product.

        Vegan and vegetarian look at ingredients only. Gluten-free and
        dairy-free also look at the allergen list. Keto looks at nutrition
        only.

        Args:
            ingredients: Ingredient strings
            allergens: Allergen strings, already normalized by the caller
            nutrition: Optional nutrition facts

        Returns:
            DietaryFlags
        """
        ingredient_blob = build_text_blob(ingredients)
        label_blob = build_text_blob(allergens, ingredients)

        flags = DietaryFlags(
            vegan=not contains_any(ingredient_blob, NON_VEGAN_KEYWORDS),
            vegetarian=not contains_any(ingredient_blob, NON_VEGETARIAN_KEYWORDS),
            gluten_free=not contains_any(label_blob, GLUTEN_KEYWORDS),
            dairy_free=not contains_any(label_blob, DAIRY_KEYWORDS),
            keto=is_keto(nutrition),
        )
        logger.debug("Dietary flags: %s", flags.to_dict())
        return flags


def classify_diet(ingredients: Sequence[str],
                  allergens: Sequence[str] = (),
                  nutrition: Optional[NutritionFacts] = None) -> DietaryFlags:
    """Classify a product (convenience wrapper around DietaryClassifier)."""
    return DietaryClassifier().classify(ingredients, allergens, nutrition)
