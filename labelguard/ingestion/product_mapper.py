"""Map product-lookup records onto analyzer inputs.

A product lookup returns a loosely structured record: a product name, an
ingredients string, a nutriments block keyed per 100 g, and allergen and
additive tags. map_product() turns that record into a ProductInput the
analyzer can consume. It does no network access of its own.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from labelguard.data_layer.exceptions import ProductDataError
from labelguard.data_layer.models import NutritionFacts, ProductInput
from labelguard.ingestion.ingredient_parser import normalize_tags, split_ingredient_text

logger = logging.getLogger(__name__)


# Nutriment field -> NutritionFacts field. Several spellings of the energy
# field are in circulation; the first one present wins.
NUTRIMENT_FIELD_MAP: Dict[str, Tuple[str, ...]] = {
    "calories": ("energy_kcal_100g", "energy-kcal_100g"),
    "fat": ("fat_100g",),
    "carbs": ("carbohydrates_100g",),
    "protein": ("proteins_100g",),
    "fiber": ("fiber_100g",),
    "sugar": ("sugars_100g",),
    "sodium": ("sodium_100g",),
}


def _tag_list(record: Mapping[str, Any], key: str) -> List[str]:
    tags = record.get(key)
    if tags is not None and not isinstance(tags, (list, tuple)):
        raise ProductDataError(
            f"'{key}' must be a list of tags",
            field=key, received=type(tags).__name__,
        )
    return normalize_tags(tags)


def map_nutriments(nutriments: Optional[Mapping[str, Any]]) -> Optional[NutritionFacts]:
    """Convert a nutriments block into NutritionFacts.

    Returns:
        NutritionFacts with absent fields left unknown, or None when the
        record has no nutriments block at all
    """
    if nutriments is None:
        return None
    if not isinstance(nutriments, Mapping):
        logger.debug("Ignoring nutriments block of type %s", type(nutriments).__name__)
        return None

    values: Dict[str, Any] = {}
    for nutrient, source_keys in NUTRIMENT_FIELD_MAP.items():
        for key in source_keys:
            if key in nutriments:
                values[nutrient] = nutriments[key]
                break
    return NutritionFacts.from_mapping(values)


def map_product(record: Mapping[str, Any], query: str = "") -> ProductInput:
    """Build a ProductInput from a product-lookup record.

    Args:
        record: Product record as returned by the lookup service
        query: The search text or barcode used, name of last resort

    Raises:
        ProductDataError: If record is not a mapping, or a field has the
            wrong type
    """
    if not isinstance(record, Mapping):
        raise ProductDataError(
            "Product record must be a mapping",
            received=type(record).__name__,
        )

    name = record.get("product_name") or query
    ingredients_text = record.get("ingredients_text")
    if ingredients_text is not None and not isinstance(ingredients_text, str):
        raise ProductDataError(
            "'ingredients_text' must be a string",
            received=type(ingredients_text).__name__,
        )

    product = ProductInput(
        name=str(name),
        ingredients=tuple(split_ingredient_text(ingredients_text)),
        nutrition=map_nutriments(record.get("nutriments")),
        allergens=tuple(_tag_list(record, "allergens_tags")),
        additives=tuple(_tag_list(record, "additives_tags")),
    )
    logger.debug(
        "Mapped product %r: %d ingredients, %d allergens, %d additives",
        product.name, len(product.ingredients),
        len(product.allergens), len(product.additives),
    )
    return product
