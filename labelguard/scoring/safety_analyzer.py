"""Safety analysis: aggregate registry matches over an ingredient list."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from labelguard.data_layer.models import RiskLevel, SafetyAnalysis
from labelguard.data_layer.risk_registry import Registry
from labelguard.scoring.ingredient_matcher import IngredientMatcher

logger = logging.getLogger(__name__)

# Weight of a hypothetical all-critical ingredient, used for the denominator.
MAX_SEVERITY_WEIGHT = 4


@dataclass(frozen=True)
class RiskThresholds:
    """Raw severity-sum thresholds for the overall risk tier.

    A sum strictly above high_above is high, strictly above medium_above is
    medium, anything else is low. Thresholds ignore list length, so a single
    critical hit (sum 4) on a one-item list is still low.
    """
    medium_above: int = 4
    high_above: int = 8

    def __post_init__(self):
        if self.medium_above < 0 or self.high_above < 0:
            raise ValueError("Risk thresholds must be non-negative")
        if self.medium_above > self.high_above:
            raise ValueError(
                f"medium_above ({self.medium_above}) must not exceed "
                f"high_above ({self.high_above})"
            )

    def classify(self, total_severity: int) -> RiskLevel:
        if total_severity > self.high_above:
            return RiskLevel.HIGH
        if total_severity > self.medium_above:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


def compute_safety_score(total_severity: int, ingredient_count: int) -> int:
    """Score 0-100 from the severity sum relative to an all-critical list.

    The denominator counts every ingredient, matched or not, so one risky
    ingredient in a long list scores safer than the same one in a short list.
    An empty list scores 100.
    """
    max_possible = MAX_SEVERITY_WEIGHT * ingredient_count
    if max_possible == 0:
        return 100
    percentage = max(0.0, (max_possible - total_severity) / max_possible * 100)
    # Half-up rounding, not Python's banker's rounding
    return int(percentage + 0.5)


class SafetyAnalyzer:
    """Scores ingredient lists against the risk registry."""

    def __init__(self,
                 registry: Optional[Registry] = None,
                 thresholds: Optional[RiskThresholds] = None):
        """Initialize safety analyzer.

        Args:
            registry: Registry to match against (defaults to the built-in catalog)
            thresholds: Optional custom risk tier thresholds
        """
        self.matcher = IngredientMatcher(registry)
        self.thresholds = thresholds or RiskThresholds()

    def analyze(self, ingredients: Sequence[str]) -> SafetyAnalysis:
        """Analyze an ingredient list.

        Every ingredient is matched independently. Matches keep input order
        and are not deduplicated, so a risky ingredient listed twice counts
        twice.

        Args:
            ingredients: Ingredient strings as printed on the label

        Returns:
            SafetyAnalysis with matched risks, safety score and risk tier
        """
        matched = []
        for ingredient in ingredients:
            entry = self.matcher.match(ingredient)
            if entry is not None:
                matched.append(entry)

        total_severity = sum(entry.severity.weight for entry in matched)
        safety_score = compute_safety_score(total_severity, len(ingredients))
        overall_risk = self.thresholds.classify(total_severity)

        logger.debug(
            "Safety: %d/%d ingredients matched, severity=%d, score=%d, risk=%s",
            len(matched), len(ingredients), total_severity,
            safety_score, overall_risk.value,
        )
        return SafetyAnalysis(
            matched_risks=tuple(matched),
            safety_score=safety_score,
            overall_risk=overall_risk,
            total_severity=total_severity,
        )


def analyze_safety(ingredients: Sequence[str],
                   registry: Optional[Registry] = None) -> SafetyAnalysis:
    """Analyze an ingredient list with default thresholds."""
    return SafetyAnalyzer(registry).analyze(ingredients)
