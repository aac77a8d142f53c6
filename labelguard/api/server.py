"""FastAPI server for the labelguard food label analyzer."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from labelguard.analysis.food_analyzer import FoodAnalyzer
from labelguard.config import (
    DEFAULT_CONFIG_PATH,
    SettingsLoader,
    build_analyzer,
    configure_logging,
)
from labelguard.data_layer.exceptions import LabelGuardError
from labelguard.data_layer.risk_registry import registry_summary
from labelguard.ingestion.ingredient_detector import detect_additives, detect_allergens
from labelguard.ingestion.ingredient_parser import split_ingredient_text
from labelguard.ingestion.product_mapper import map_product
from labelguard.output.formatters import format_report_json

logger = logging.getLogger(__name__)

config_path = os.environ.get("LABELGUARD_CONFIG", DEFAULT_CONFIG_PATH)


class AnalyzeRequest(BaseModel):
    name: str = ""
    ingredients: List[str] = Field(default_factory=list)
    ingredients_text: Optional[str] = None  # Comma-separated alternative to ingredients
    nutrition: Optional[Dict[str, Any]] = None
    allergens: Optional[List[str]] = None
    additives: Optional[List[str]] = None
    detect: bool = False  # Detect allergens/additives from the list when not given
    include_safety: bool = True


class SafetyRequest(BaseModel):
    ingredients: List[str] = Field(default_factory=list)
    ingredients_text: Optional[str] = None


class ProductRequest(BaseModel):
    product: Dict[str, Any]
    query: str = ""
    include_safety: bool = True


def _request_ingredients(ingredients: List[str], ingredients_text: Optional[str]) -> List[str]:
    if ingredients:
        return list(ingredients)
    return split_ingredient_text(ingredients_text)


def load_default_analyzer() -> FoodAnalyzer:
    """Build the analyzer from LABELGUARD_CONFIG when that file exists."""
    path = Path(config_path)
    if not path.exists():
        return FoodAnalyzer()
    settings = SettingsLoader(path).load()
    configure_logging(settings.log_level)
    logger.info("Loaded settings from %s", path)
    return build_analyzer(settings)


def create_app(analyzer: Optional[FoodAnalyzer] = None) -> FastAPI:
    """Create the API application around an analyzer."""
    analyzer = analyzer or load_default_analyzer()
    registry = analyzer.safety_analyzer.matcher.registry

    app = FastAPI(title="labelguard API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Local development
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/analyze")
    def analyze(request: AnalyzeRequest) -> Dict[str, Any]:
        try:
            ingredients = _request_ingredients(request.ingredients, request.ingredients_text)
            allergens = request.allergens
            additives = request.additives
            if request.detect:
                if allergens is None:
                    allergens = detect_allergens(ingredients)
                if additives is None:
                    additives = detect_additives(ingredients)

            name = request.name or f"Recipe with {len(ingredients)} ingredients"
            if request.include_safety:
                report = analyzer.analyze_full(
                    name, ingredients, request.nutrition, allergens, additives
                )
            else:
                report = analyzer.analyze(
                    name, ingredients, request.nutrition, allergens, additives
                )
            return format_report_json(report)
        except LabelGuardError as exc:
            raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
        except Exception as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @app.post("/api/safety")
    def safety(request: SafetyRequest) -> Dict[str, Any]:
        ingredients = _request_ingredients(request.ingredients, request.ingredients_text)
        return format_report_json(analyzer.safety(ingredients))

    @app.post("/api/analyze/product")
    def analyze_product(request: ProductRequest) -> Dict[str, Any]:
        try:
            product = map_product(request.product, query=request.query)
            if request.include_safety:
                report = analyzer.analyze_full(
                    product.name, product.ingredients, product.nutrition,
                    product.allergens, product.additives,
                )
            else:
                report = analyzer.analyze_product(product)
            return format_report_json(report)
        except LabelGuardError as exc:
            raise HTTPException(status_code=400, detail=exc.to_dict()) from exc

    @app.get("/api/registry")
    def list_registry() -> Dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in registry],
            "severity_counts": registry_summary(registry),
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
