"""Formatters for analysis output (JSON and Markdown)."""

import json
from typing import Any, Dict, Optional, Union

from labelguard.data_layer.models import (
    FoodAnalysisResult,
    FullReport,
    NutritionFacts,
    NUTRIENT_KEYS,
    SafetyAnalysis,
)

NUTRIENT_UNITS = {
    "calories": "kcal",
    "fat": "g",
    "carbs": "g",
    "protein": "g",
    "fiber": "g",
    "sugar": "g",
    "sodium": "mg",
}

DIET_LABELS = {
    "vegan": "Vegan",
    "vegetarian": "Vegetarian",
    "glutenFree": "Gluten-free",
    "dairyFree": "Dairy-free",
    "keto": "Keto",
}

Report = Union[FoodAnalysisResult, FullReport, SafetyAnalysis]


def format_amount(nutrient: str, value: Optional[float]) -> str:
    """Format a nutrient amount, "unknown" when absent (never "0")."""
    if value is None:
        return "unknown"
    if value == int(value):
        amount = str(int(value))
    else:
        amount = f"{value:.1f}"
    return f"{amount} {NUTRIENT_UNITS.get(nutrient, '')}".rstrip()


def format_nutrition_breakdown(nutrition: Optional[NutritionFacts], indent: str = "") -> str:
    """Format nutrition facts as a readable breakdown.

    Args:
        nutrition: NutritionFacts, or None when not available
        indent: Optional indentation prefix

    Returns:
        One line per recognized nutrient
    """
    if nutrition is None:
        return f"{indent}_No nutrition facts available_"
    lines = []
    for key in NUTRIENT_KEYS:
        label = key.capitalize()
        lines.append(f"{indent}**{label}:** {format_amount(key, nutrition.get(key))}")
    return "\n".join(lines)


def format_safety_markdown(safety: SafetyAnalysis) -> str:
    """Format a SafetyAnalysis as Markdown."""
    lines = [
        "## Ingredient Safety",
        f"**Safety Score:** {safety.safety_score}/100",
        f"**Overall Risk:** {safety.overall_risk.value.capitalize()}",
        "",
    ]
    if not safety.matched_risks:
        lines.append("No flagged ingredients found.")
        return "\n".join(lines)

    lines.append("### Flagged Ingredients")
    for risk in safety.matched_risks:
        lines.append(
            f"- **{risk.canonical_name}** ({risk.severity.label}, {risk.category.value})"
        )
        for warning in risk.warnings:
            lines.append(f"  - {warning}")
        if risk.banned_regions:
            lines.append(f"  - Restricted in: {', '.join(sorted(risk.banned_regions))}")
    return "\n".join(lines)


def format_result_markdown(result: FoodAnalysisResult,
                           safety: Optional[SafetyAnalysis] = None) -> str:
    """Format a FoodAnalysisResult (and optional safety view) as Markdown."""
    lines = [f"# {result.name}\n", f"**Health Score:** {result.health_score}/100", ""]

    lines.append("## Dietary Compatibility")
    for key, compatible in result.dietary_info.to_dict().items():
        mark = "✅" if compatible else "❌"
        lines.append(f"- {mark} {DIET_LABELS[key]}")
    lines.append("")

    lines.append("## Ingredients")
    if result.ingredients:
        for ingredient in result.ingredients:
            lines.append(f"- {ingredient}")
    else:
        lines.append("_No ingredients listed_")
    lines.append("")

    if result.allergens:
        lines.append("## Allergens")
        lines.extend(f"- {allergen}" for allergen in result.allergens)
        lines.append("")

    if result.additives:
        lines.append("## Additives")
        lines.extend(f"- {additive}" for additive in result.additives)
        lines.append("")

    lines.append("## Nutrition (per serving)")
    lines.append(format_nutrition_breakdown(result.nutrition))
    lines.append("")

    if safety is not None:
        lines.append(format_safety_markdown(safety))
        lines.append("")

    return "\n".join(lines)


def format_report_markdown(report: Report) -> str:
    """Format any analysis output as Markdown."""
    if isinstance(report, FullReport):
        return format_result_markdown(report.result, report.safety)
    if isinstance(report, SafetyAnalysis):
        return format_safety_markdown(report) + "\n"
    return format_result_markdown(report)


def format_report_json(report: Report) -> Dict[str, Any]:
    """Convert any analysis output to a JSON-serializable dictionary."""
    return report.to_dict()


def format_report_json_string(report: Report, indent: int = 2) -> str:
    """Format any analysis output as a JSON string."""
    return json.dumps(format_report_json(report), indent=indent, ensure_ascii=False)
