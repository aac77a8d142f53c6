"""Ingredient text normalization for matching.

Every comparison between label text and registry or keyword data goes
through normalize_ingredient(), so matching is case- and
whitespace-insensitive while the caller's original strings are kept for
display.
"""

import re
from typing import Iterable

_WHITESPACE = re.compile(r"\s+")


def normalize_ingredient(raw: str) -> str:
    """Trim, case-fold and collapse internal whitespace.

    Args:
        raw: Ingredient text as printed on the label

    Returns:
        Normalized text ("" for blank input)
    """
    if not raw:
        return ""
    return _WHITESPACE.sub(" ", raw).strip().casefold()


def build_text_blob(*parts: Iterable[str]) -> str:
    """Join several string sequences into one normalized, space-separated blob.

    Used for keyword-presence tests that look at a whole label at once.
    """
    words = []
    for part in parts:
        for text in part:
            normalized = normalize_ingredient(text)
            if normalized:
                words.append(normalized)
    return " ".join(words)
