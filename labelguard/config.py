"""Settings loader for labelguard from YAML."""
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from labelguard.analysis.food_analyzer import FoodAnalyzer
from labelguard.data_layer.exceptions import ConfigError
from labelguard.data_layer.risk_registry import load_registry
from labelguard.scoring.health_score import HealthScoreRules
from labelguard.scoring.safety_analyzer import RiskThresholds

DEFAULT_CONFIG_PATH = "config/labelguard.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AnalyzerSettings:
    """Runtime settings.

    registry_path: custom registry YAML, None for the built-in catalog
    log_level: level for the labelguard loggers
    risk_thresholds: overrides for RiskThresholds fields
    health_rules: overrides for HealthScoreRules fields
    """
    registry_path: Optional[str] = None
    log_level: str = "WARNING"
    risk_thresholds: Dict[str, int] = field(default_factory=dict)
    health_rules: Dict[str, float] = field(default_factory=dict)


def _check_overrides(section: str, values: Any, allowed: set, path: str) -> Dict[str, Any]:
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ConfigError(f"'{section}' must be a mapping", path=path)
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ConfigError(f"Unknown keys in '{section}': {unknown}", path=path)
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'{section}.{key}' must be a number", path=path)
    return dict(values)


class SettingsLoader:
    """Loader for analyzer settings from YAML."""

    def __init__(self, yaml_path: Union[str, Path]):
        """Initialize settings loader.

        Args:
            yaml_path: Path to YAML settings file
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> AnalyzerSettings:
        """Load settings from the YAML file.

        An empty file yields the defaults.

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ConfigError: If keys are unknown or values have the wrong type
        """
        path = str(self.yaml_path)
        with open(self.yaml_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Settings file is not valid YAML: {e}", path=path) from e

        if not isinstance(data, dict):
            raise ConfigError("Settings file must contain a mapping", path=path)

        known = {f.name for f in fields(AnalyzerSettings)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown settings: {unknown}", path=path)

        registry_path = data.get("registry_path")
        if registry_path is not None:
            if not isinstance(registry_path, str):
                raise ConfigError("'registry_path' must be a string", path=path)
            # Relative registry paths are resolved against the settings file
            candidate = Path(registry_path)
            if not candidate.is_absolute():
                candidate = self.yaml_path.parent / candidate
            registry_path = str(candidate)

        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"'log_level' must be one of {list(LOG_LEVELS)}, got {log_level!r}",
                path=path,
            )

        return AnalyzerSettings(
            registry_path=registry_path,
            log_level=log_level,
            risk_thresholds=_check_overrides(
                "risk_thresholds", data.get("risk_thresholds"),
                {f.name for f in fields(RiskThresholds)}, path,
            ),
            health_rules=_check_overrides(
                "health_rules", data.get("health_rules"),
                {f.name for f in fields(HealthScoreRules)}, path,
            ),
        )


def build_analyzer(settings: Optional[AnalyzerSettings] = None) -> FoodAnalyzer:
    """Create a FoodAnalyzer configured from settings.

    Raises:
        RegistryError: If the configured registry is malformed
        ConfigError: If rule overrides fail validation
    """
    settings = settings or AnalyzerSettings()
    registry = load_registry(settings.registry_path) if settings.registry_path else None
    try:
        thresholds = RiskThresholds(**settings.risk_thresholds)
        health_rules = HealthScoreRules(**settings.health_rules)
    except ValueError as e:
        raise ConfigError(str(e)) from e
    return FoodAnalyzer(registry=registry, thresholds=thresholds, health_rules=health_rules)


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
