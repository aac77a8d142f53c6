"""Allergen and additive detection for hand-entered ingredient lists.

Lookup records come with allergen and additive tags. A list typed in by
hand does not, so these keyword checks pick out the ingredients that look
like common allergens or additives.
"""

from typing import List, Sequence, Tuple

from labelguard.ingestion.ingredient_normalizer import normalize_ingredient

COMMON_ALLERGENS: Tuple[str, ...] = ("gluten", "milk", "eggs", "nuts", "soy")

COMMON_ADDITIVES: Tuple[str, ...] = (
    "artificial colors", "preservatives", "artificial flavors",
)

# Additives are recognized by the leading word of each name.
ADDITIVE_KEYWORDS: Tuple[str, ...] = tuple(
    dict.fromkeys(additive.split(" ")[0] for additive in COMMON_ADDITIVES)
)


def _containing(ingredients: Sequence[str], keywords: Sequence[str]) -> List[str]:
    found = []
    for ingredient in ingredients:
        text = normalize_ingredient(ingredient)
        if text and any(keyword in text for keyword in keywords):
            found.append(ingredient)
    return found


def detect_allergens(ingredients: Sequence[str]) -> List[str]:
    """Return the ingredients that mention a common allergen, in order."""
    return _containing(ingredients, COMMON_ALLERGENS)


def detect_additives(ingredients: Sequence[str]) -> List[str]:
    """Return the ingredients that look like additives, in order."""
    return _containing(ingredients, ADDITIVE_KEYWORDS)
