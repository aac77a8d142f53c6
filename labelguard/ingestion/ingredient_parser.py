"""Helpers for collaborators that hand raw label text to the analyzer.

The scoring modules only ever see pre-split ingredient lists. Splitting
free text and cleaning up lookup tags happens here, before analysis.
"""

import re
from typing import Iterable, List, Optional

TAG_LANGUAGE_PREFIX = "en:"


def split_ingredient_text(text: Optional[str]) -> List[str]:
    """Split a comma-separated ingredients string into trimmed tokens.

    Empty tokens are dropped; order is preserved.

    Example:
        >>> split_ingredient_text("sugar, palm oil,, cocoa powder ")
        ['sugar', 'palm oil', 'cocoa powder']
    """
    if not text:
        return []
    return [token.strip() for token in text.split(",") if token.strip()]


def normalize_tag(tag: str) -> str:
    """Turn a lookup tag into readable text.

    Strips the first "en:" prefix and replaces hyphens with spaces, e.g.
    "en:soy-lecithin" -> "soy lecithin".
    """
    return tag.replace(TAG_LANGUAGE_PREFIX, "", 1).replace("-", " ")


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Normalize every tag, skipping non-strings and blanks."""
    if not tags:
        return []
    normalized = []
    for tag in tags:
        if not isinstance(tag, str):
            continue
        cleaned = re.sub(r"\s+", " ", normalize_tag(tag)).strip()
        if cleaned:
            normalized.append(cleaned)
    return normalized
