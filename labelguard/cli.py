#!/usr/bin/env python3
"""Command-line interface for the labelguard food label analyzer."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from labelguard.config import (
    DEFAULT_CONFIG_PATH,
    AnalyzerSettings,
    SettingsLoader,
    build_analyzer,
    configure_logging,
)
from labelguard.data_layer.exceptions import LabelGuardError
from labelguard.data_layer.models import NutritionFacts
from labelguard.ingestion.ingredient_detector import detect_additives, detect_allergens
from labelguard.ingestion.ingredient_parser import split_ingredient_text
from labelguard.output.formatters import format_report_json_string, format_report_markdown


def read_ingredients(args: argparse.Namespace) -> List[str]:
    """Collect ingredients from --ingredients text or --ingredients-file.

    The file may hold one ingredient per line or comma-separated text.
    """
    if args.ingredients_file:
        text = Path(args.ingredients_file).read_text(encoding="utf-8")
        return split_ingredient_text(text.replace("\n", ","))
    return split_ingredient_text(args.ingredients)


def read_nutrition(path: Optional[str]) -> Optional[NutritionFacts]:
    """Load nutrition facts from a YAML or JSON mapping file."""
    if not path:
        return None
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Nutrition file must contain a mapping: {path}")
    return NutritionFacts.from_mapping(data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="labelguard",
        description="Analyze food label ingredients for risk, health score and diets"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG_PATH} if present)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_ingredient_args(sub: argparse.ArgumentParser) -> None:
        source = sub.add_mutually_exclusive_group(required=True)
        source.add_argument(
            "--ingredients",
            type=str,
            help='Comma-separated ingredients, e.g. "sugar, palm oil, milk powder"'
        )
        source.add_argument(
            "--ingredients-file",
            type=str,
            help="File with one ingredient per line or comma-separated text"
        )
        sub.add_argument(
            "--output",
            type=str,
            choices=["markdown", "json"],
            default="markdown",
            help="Output format: markdown (default) or json"
        )

    analyze = subparsers.add_parser("analyze", help="Full food analysis")
    add_ingredient_args(analyze)
    analyze.add_argument("--name", type=str, default=None, help="Product name")
    analyze.add_argument(
        "--nutrition",
        type=str,
        help="YAML/JSON file mapping nutrients (calories, fat, carbs, ...) to amounts"
    )
    analyze.add_argument(
        "--allergen",
        action="append",
        default=None,
        help="Known allergen (repeatable)"
    )
    analyze.add_argument(
        "--additive",
        action="append",
        default=None,
        help="Known additive (repeatable)"
    )
    analyze.add_argument(
        "--detect",
        action="store_true",
        help="Detect allergens and additives from the ingredients when not given"
    )
    analyze.add_argument(
        "--no-safety",
        action="store_true",
        help="Leave out the ingredient safety section"
    )

    safety = subparsers.add_parser("safety", help="Ingredient safety analysis only")
    add_ingredient_args(safety)

    return parser


def load_settings(config: Optional[str]) -> AnalyzerSettings:
    if config:
        return SettingsLoader(config).load()
    if Path(DEFAULT_CONFIG_PATH).exists():
        return SettingsLoader(DEFAULT_CONFIG_PATH).load()
    return AnalyzerSettings()


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config and not Path(args.config).exists():
        print(f"Error: Settings file not found: {args.config}", file=sys.stderr)
        return 1
    if args.ingredients_file and not Path(args.ingredients_file).exists():
        print(f"Error: Ingredients file not found: {args.ingredients_file}", file=sys.stderr)
        return 1
    if getattr(args, "nutrition", None) and not Path(args.nutrition).exists():
        print(f"Error: Nutrition file not found: {args.nutrition}", file=sys.stderr)
        return 1

    try:
        settings = load_settings(args.config)
        configure_logging("DEBUG" if args.verbose else settings.log_level)
        analyzer = build_analyzer(settings)
        ingredients = read_ingredients(args)
        print(f"Analyzing {len(ingredients)} ingredients...", file=sys.stderr)

        if args.command == "safety":
            report = analyzer.safety(ingredients)
        else:
            allergens = args.allergen
            additives = args.additive
            if args.detect:
                if allergens is None:
                    allergens = detect_allergens(ingredients)
                if additives is None:
                    additives = detect_additives(ingredients)
            name = args.name or f"Recipe with {len(ingredients)} ingredients"
            nutrition = read_nutrition(args.nutrition)
            if args.no_safety:
                report = analyzer.analyze(name, ingredients, nutrition, allergens, additives)
            else:
                report = analyzer.analyze_full(name, ingredients, nutrition, allergens, additives)
    except (LabelGuardError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output == "json":
        print(format_report_json_string(report))
    else:
        print(format_report_markdown(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
