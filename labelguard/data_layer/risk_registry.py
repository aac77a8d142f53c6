"""Ingredient risk registry: the static catalog of harmful ingredients.

The catalog lives in data/harmful_ingredients.yaml inside the package and is
loaded once at import time into DEFAULT_REGISTRY, an immutable tuple of
RegistryEntry in declaration order. Declaration order matters: the matcher
returns the first entry that matches.

A malformed catalog is a configuration defect. load_registry() raises
RegistryError so it surfaces at startup, never in the middle of an analysis.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Set, Tuple, Union

import yaml

from labelguard.data_layer.exceptions import RegistryError
from labelguard.data_layer.models import RegistryEntry, RiskCategory, Severity

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = Path(__file__).resolve().parent.parent / "data" / "harmful_ingredients.yaml"

REQUIRED_KEYS = ("name", "severity", "category")

Registry = Tuple[RegistryEntry, ...]


def _string_list(raw: Any, key: str, source: str, name: str) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise RegistryError(
            f"'{key}' of entry '{name}' must be a list of strings",
            source=source, entry=name,
        )
    items = tuple(item.strip() for item in raw)
    if not all(items):
        raise RegistryError(
            f"'{key}' of entry '{name}' must not contain blank strings",
            source=source, entry=name,
        )
    return items


def _parse_entry(raw: Any, source: str, index: int) -> RegistryEntry:
    """Build one RegistryEntry from its YAML mapping."""
    if not isinstance(raw, dict):
        raise RegistryError(f"Entry #{index} is not a mapping", source=source, index=index)

    missing = [key for key in REQUIRED_KEYS if not raw.get(key)]
    if missing:
        raise RegistryError(
            f"Entry #{index} is missing required keys: {missing}",
            source=source, index=index,
        )

    name = str(raw["name"]).strip()
    try:
        severity = Severity.from_label(raw["severity"])
        category = RiskCategory(str(raw["category"]).strip().lower())
    except ValueError as e:
        raise RegistryError(f"Entry '{name}': {e}", source=source, entry=name) from e

    return RegistryEntry(
        canonical_name=name,
        aliases=_string_list(raw.get("aliases"), "aliases", source, name),
        severity=severity,
        category=category,
        warnings=_string_list(raw.get("warnings"), "warnings", source, name),
        banned_regions=frozenset(
            _string_list(raw.get("banned_regions"), "banned_regions", source, name)
        ),
        description=str(raw.get("description") or "").strip(),
    )


def build_registry(raw_entries: Iterable[Any], source: str = "<memory>") -> Registry:
    """Validate raw entry mappings and return them as an immutable registry.

    Raises:
        RegistryError: If an entry is malformed, a canonical name repeats,
            or an alias belongs to more than one entry
    """
    entries = []
    seen: Set[str] = set()
    alias_owners: Dict[str, str] = {}
    for index, raw in enumerate(raw_entries):
        entry = _parse_entry(raw, source, index)
        key = entry.canonical_name.casefold()
        if key in seen:
            raise RegistryError(
                f"Duplicate canonical name '{entry.canonical_name}'",
                source=source, entry=entry.canonical_name,
            )
        seen.add(key)
        for alias in (alias.casefold() for alias in entry.aliases):
            owner = alias_owners.get(alias, entry.canonical_name)
            if owner != entry.canonical_name:
                raise RegistryError(
                    f"Alias '{alias}' of '{entry.canonical_name}' is already an alias of '{owner}'",
                    source=source, entry=entry.canonical_name,
                )
            alias_owners[alias] = entry.canonical_name
        entries.append(entry)

    if not entries:
        raise RegistryError("Registry contains no entries", source=source)

    return tuple(entries)


def load_registry(yaml_path: Union[str, Path] = DEFAULT_REGISTRY_PATH) -> Registry:
    """Load and validate a registry YAML file.

    Args:
        yaml_path: Path to a YAML file with a top-level 'ingredients' list

    Returns:
        Tuple of RegistryEntry in declaration order

    Raises:
        RegistryError: If the file is missing, unparsable or malformed
    """
    path = Path(yaml_path)
    source = str(path)
    if not path.exists():
        raise RegistryError(f"Registry file not found: {path}", source=source)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RegistryError(f"Registry file is not valid YAML: {e}", source=source) from e

    if not isinstance(data, dict) or not isinstance(data.get("ingredients"), list):
        raise RegistryError("Registry must define an 'ingredients' list", source=source)

    registry = build_registry(data["ingredients"], source=source)
    logger.info("Loaded %d registry entries from %s", len(registry), path)
    return registry


def get_entry(name: str, registry: Optional[Registry] = None) -> Optional[RegistryEntry]:
    """Return the entry whose canonical name equals name (case-insensitive)."""
    target = name.strip().casefold()
    for entry in registry if registry is not None else DEFAULT_REGISTRY:
        if entry.canonical_name.casefold() == target:
            return entry
    return None


def entries_by_category(
    category: Union[RiskCategory, str],
    registry: Optional[Registry] = None,
) -> Registry:
    """Return entries of one category, in declaration order."""
    category = RiskCategory(category) if isinstance(category, str) else category
    entries = registry if registry is not None else DEFAULT_REGISTRY
    return tuple(entry for entry in entries if entry.category is category)


def entries_banned_in(region: str, registry: Optional[Registry] = None) -> Registry:
    """Return entries restricted in a jurisdiction (case-insensitive)."""
    target = region.strip().casefold()
    entries = registry if registry is not None else DEFAULT_REGISTRY
    return tuple(
        entry for entry in entries
        if any(banned.casefold() == target for banned in entry.banned_regions)
    )


def registry_summary(registry: Optional[Registry] = None) -> Dict[str, int]:
    """Count entries per severity label."""
    entries = registry if registry is not None else DEFAULT_REGISTRY
    counts = {severity.label: 0 for severity in Severity}
    for entry in entries:
        counts[entry.severity.label] += 1
    return counts


DEFAULT_REGISTRY: Registry = load_registry(DEFAULT_REGISTRY_PATH)
