"""Resolve label ingredient text to registry entries.

Matching rule, on normalized text (trimmed, case-folded):
- the canonical name contains the ingredient, or
- an alias contains the ingredient, or
- the ingredient contains an alias.

The canonical name is never searched for inside the ingredient, so
"red 40" does not match "Red Dye 40" while "allura red" does. The first
entry in registry order that satisfies the rule wins.
"""

import logging
from typing import Optional

from labelguard.data_layer.models import RegistryEntry
from labelguard.data_layer.risk_registry import DEFAULT_REGISTRY, Registry
from labelguard.ingestion.ingredient_normalizer import normalize_ingredient

logger = logging.getLogger(__name__)


def canonical_contains(entry: RegistryEntry, ingredient: str) -> bool:
    """True if the normalized canonical name contains the normalized ingredient."""
    return ingredient in normalize_ingredient(entry.canonical_name)


def alias_contains(entry: RegistryEntry, ingredient: str) -> bool:
    """True if any normalized alias contains the normalized ingredient."""
    return any(ingredient in normalize_ingredient(alias) for alias in entry.aliases)


def contains_alias(entry: RegistryEntry, ingredient: str) -> bool:
    """True if the normalized ingredient contains any normalized alias."""
    return any(normalize_ingredient(alias) in ingredient for alias in entry.aliases)


def entry_matches(entry: RegistryEntry, ingredient: str) -> bool:
    """Apply the matching rule to an already-normalized ingredient."""
    return (
        canonical_contains(entry, ingredient)
        or alias_contains(entry, ingredient)
        or contains_alias(entry, ingredient)
    )


class IngredientMatcher:
    """Matches ingredient strings against a risk registry.

    Usage:
        matcher = IngredientMatcher()
        entry = matcher.match("Hydrogenated Vegetable Oil (cottonseed)")
    """

    def __init__(self, registry: Optional[Registry] = None):
        """Initialize matcher.

        Args:
            registry: Registry to match against (defaults to the built-in catalog)
        """
        self.registry = registry if registry is not None else DEFAULT_REGISTRY

    def match(self, raw: str) -> Optional[RegistryEntry]:
        """Return the first registry entry matching raw, or None.

        No match is the common case and is not an error. Blank input never
        matches.
        """
        ingredient = normalize_ingredient(raw)
        if not ingredient:
            return None

        for entry in self.registry:
            if entry_matches(entry, ingredient):
                logger.debug("Ingredient %r matched %r", raw, entry.canonical_name)
                return entry
        return None


def match_ingredient(raw: str, registry: Optional[Registry] = None) -> Optional[RegistryEntry]:
    """Match one ingredient string (convenience wrapper around IngredientMatcher)."""
    return IngredientMatcher(registry).match(raw)
