"""
Coral type keywords for title-based type filtering.

The torch list is intentionally loose: it mixes the coral name with
common color-morph names ("banana", "joker", "gold"), so some
cross-category matches are expected.
"""

from typing import Iterable

from ..common.text_utils import norm_space

CORAL_TYPE_KEYWORDS = {
    "zoa": ["zoa"],
    "acro": ["acro"],
    "torch": [
        "torch",
        "rapunzel",
        "holy grail",
        "indo",
        "gold",
        "austie",
        "dragon soul",
        "tips",
        "joker",
        "banana",
    ],
}


def matches_coral_type(title: str, coral_type: str) -> bool:
    """True when the normalized title contains one of the type's keywords."""
    keywords = CORAL_TYPE_KEYWORDS.get((coral_type or "").lower())
    if not keywords:
        return False
    hay = norm_space(title)
    return any(norm_space(k) in hay for k in keywords)


def matches_any_type(title: str, coral_types: Iterable[str]) -> bool:
    """
    Filter predicate for a set of checked types.

    An empty selection matches everything.
    """
    selected = [t for t in coral_types if t]
    if not selected:
        return True
    return any(matches_coral_type(title, t) for t in selected)
