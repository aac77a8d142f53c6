"""Data models for food label analysis."""
import logging
import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Ordinal harm classification for a registry entry.

    The value is the weight the entry contributes to the severity sum.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def weight(self) -> int:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "Severity":
        """Look up a severity by its lowercase label ("low", "critical", ...).

        Raises:
            ValueError: If the label is not a known severity
        """
        try:
            return cls[str(label).strip().upper()]
        except KeyError:
            raise ValueError(
                f"Unknown severity '{label}'. "
                f"Expected one of: {[s.label for s in cls]}"
            ) from None


class RiskCategory(Enum):
    """Kind of harmful or controversial ingredient."""

    ADDITIVE = "additive"
    PRESERVATIVE = "preservative"
    COLORING = "coloring"
    SWEETENER = "sweetener"
    OIL = "oil"
    ALLERGEN = "allergen"


class RiskLevel(Enum):
    """Overall risk tier derived from the raw severity sum."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class RegistryEntry:
    """A known harmful or controversial ingredient."""

    canonical_name: str  # e.g. "Red Dye 40"
    aliases: Tuple[str, ...]  # Alternate names and E-numbers, declaration order kept
    severity: Severity
    category: RiskCategory
    warnings: Tuple[str, ...] = ()  # Informational only, never scored
    banned_regions: FrozenSet[str] = frozenset()  # Informational only
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.canonical_name,
            "aliases": list(self.aliases),
            "severity": self.severity.label,
            "category": self.category.value,
            "warnings": list(self.warnings),
            "banned_regions": sorted(self.banned_regions),
            "description": self.description,
        }


# Nutrient keys recognized in nutrition facts, per reference serving.
NUTRIENT_KEYS: Tuple[str, ...] = (
    "calories", "fat", "carbs", "protein", "fiber", "sugar", "sodium",
)


def _coerce_amount(key: str, value: Any) -> Optional[float]:
    """Convert a raw nutrient amount to float, or None when it is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric %s value %r", key, value)
        return None
    if not math.isfinite(amount):
        logger.debug("Ignoring non-finite %s value %r", key, value)
        return None
    return amount


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrient amounts per reference serving.

    A field left as None is unknown. Unknown is not the same as zero: rules
    that depend on an unknown nutrient never fire, while a present zero does.
    """

    calories: Optional[float] = None
    fat: Optional[float] = None
    carbs: Optional[float] = None
    protein: Optional[float] = None
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    sodium: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NutritionFacts":
        """Build nutrition facts from a nutrient-name -> amount mapping.

        Unrecognized keys are ignored. Values that are not numbers become
        unknown rather than raising.
        """
        kwargs = {}
        for key in NUTRIENT_KEYS:
            if key in data:
                kwargs[key] = _coerce_amount(key, data[key])
        return cls(**kwargs)

    def get(self, key: str) -> Optional[float]:
        """Return the amount for a nutrient, None if unknown."""
        if key not in NUTRIENT_KEYS:
            raise KeyError(f"Unknown nutrient '{key}'")
        return getattr(self, key)

    def to_dict(self) -> Dict[str, Optional[float]]:
        """Return every recognized nutrient, unknown ones as None."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SafetyAnalysis:
    """Registry matches over an ingredient list with the resulting score."""

    matched_risks: Tuple[RegistryEntry, ...]
    safety_score: int  # 0-100, higher is safer
    overall_risk: RiskLevel
    total_severity: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risks": [risk.to_dict() for risk in self.matched_risks],
            "safety_score": self.safety_score,
            "overall_risk": self.overall_risk.value,
            "total_severity": self.total_severity,
        }


@dataclass(frozen=True)
class DietaryFlags:
    """Compatibility with common diets."""

    vegan: bool
    vegetarian: bool
    gluten_free: bool
    dairy_free: bool
    keto: bool

    def to_dict(self) -> Dict[str, bool]:
        return {
            "vegan": self.vegan,
            "vegetarian": self.vegetarian,
            "glutenFree": self.gluten_free,
            "dairyFree": self.dairy_free,
            "keto": self.keto,
        }


@dataclass(frozen=True)
class FoodAnalysisResult:
    """Complete analysis of one product, built fresh per request."""

    name: str
    ingredients: Tuple[str, ...]  # Display order, as supplied
    nutrition: Optional[NutritionFacts]
    additives: Tuple[str, ...]
    allergens: Tuple[str, ...]
    dietary_info: DietaryFlags
    health_score: int  # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ingredients": list(self.ingredients),
            "nutrition": self.nutrition.to_dict() if self.nutrition is not None else None,
            "additives": list(self.additives),
            "allergens": list(self.allergens),
            "dietary_info": self.dietary_info.to_dict(),
            "health_score": self.health_score,
        }


@dataclass(frozen=True)
class FullReport:
    """Food analysis paired with the registry safety view of the same list."""

    result: FoodAnalysisResult
    safety: SafetyAnalysis

    def to_dict(self) -> Dict[str, Any]:
        data = self.result.to_dict()
        data["safety"] = self.safety.to_dict()
        return data


@dataclass(frozen=True)
class ProductInput:
    """Normalized inputs for one product, as handed over by a collaborator."""

    name: str
    ingredients: Tuple[str, ...] = ()
    nutrition: Optional[NutritionFacts] = None
    allergens: Tuple[str, ...] = ()
    additives: Tuple[str, ...] = ()
