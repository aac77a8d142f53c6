"""Ingestion layer: normalizing and preparing label data for analysis."""

from labelguard.ingestion.ingredient_normalizer import (
    normalize_ingredient,
    build_text_blob,
)

from labelguard.ingestion.ingredient_parser import (
    split_ingredient_text,
    normalize_tag,
    normalize_tags,
)

from labelguard.ingestion.ingredient_detector import (
    detect_allergens,
    detect_additives,
    COMMON_ALLERGENS,
    COMMON_ADDITIVES,
)

from labelguard.ingestion.product_mapper import (
    map_product,
    map_nutriments,
    NUTRIMENT_FIELD_MAP,
)

__all__ = [
    # Normalization
    "normalize_ingredient",
    "build_text_blob",
    # Free-text and tag parsing
    "split_ingredient_text",
    "normalize_tag",
    "normalize_tags",
    # Manual list detection
    "detect_allergens",
    "detect_additives",
    "COMMON_ALLERGENS",
    "COMMON_ADDITIVES",
    # Product-lookup records
    "map_product",
    "map_nutriments",
    "NUTRIMENT_FIELD_MAP",
]
