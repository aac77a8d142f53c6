"""Output formatting for analysis results."""

from labelguard.output.formatters import (
    format_report_json,
    format_report_json_string,
    format_report_markdown,
    format_result_markdown,
    format_safety_markdown,
    format_nutrition_breakdown,
)

__all__ = [
    "format_report_json",
    "format_report_json_string",
    "format_report_markdown",
    "format_result_markdown",
    "format_safety_markdown",
    "format_nutrition_breakdown",
]
