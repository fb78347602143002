"""
Category classification rules.

Modules:
    torch       - Torch sale-mode enforcement and named-variant matching
    coral_types - Title keyword predicates for zoa / acro / torch filtering
"""

from .coral_types import CORAL_TYPE_KEYWORDS, matches_any_type, matches_coral_type
from .torch import (
    TORCH_VARIANTS,
    count_by_variant,
    enforce_torch,
    needles_for_variant,
    slug_to_variant,
    torch_passes_filter,
    variant_to_slug,
)

__all__ = [
    'enforce_torch',
    'torch_passes_filter',
    'needles_for_variant',
    'count_by_variant',
    'variant_to_slug',
    'slug_to_variant',
    'TORCH_VARIANTS',
    'CORAL_TYPE_KEYWORDS',
    'matches_coral_type',
    'matches_any_type',
]
