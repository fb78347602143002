"""
Torch Coral Classification

Two rule sets for the "torch" category:

- enforce_torch(): sale-mode normalization applied as the last step on
  every constructed listing. Torch listings are priced per head unless the
  title says the pictured specimen is sold as-is (WYSIWYG).
- torch_passes_filter() and friends: keyword matching of listings to the
  named torch color variants ("Dragon Soul", "Holy Grail", ...).

All keyword lists are module-level tables so the rules can be tested
without HTTP or DOM concerns.
"""

import re
from typing import Dict, Iterable, List, Optional

from ..common.text_utils import norm_compact, norm_space
from ..models import Listing

TORCH_CATEGORY = "torch"
WYSIWYG_TOKEN = "wysiwyg"

# Named torch variants in display order; names double as URL slugs
TORCH_VARIANTS: List[str] = [
    "Dragon Soul",
    "Indo",
    "Jester",
    "Hellfire",
    "NY Knicks",
    "Dragon Tamer",
    "24K Gold",
    "Sun God",
    "Holy Grail",
    "Master Torch",
    "Rapunzel",
    "Banana",
    "Green",
    "Black",
    "Cotton Candy",
    "Grim Reaper",
    "Rasta",
    "Miami",
    "Joker",
    "Tiger",
]

# Alternative spellings seen in shop titles, keyed by lower-case variant name
VARIANT_ALIASES: Dict[str, List[str]] = {
    "hellfire": ["hell fire"],
    "holy grail": ["holygrail"],
    "dragon soul": ["dragonsoul"],
    "dragon tamer": ["dragontamer"],
    "indo": ["indo gold", "indogold"],
    "master torch": ["master"],
    "ny knicks": ["nyknicks", "knicks"],
    "24k gold": ["24k", "24 k", "24kgold"],
    "sun god": ["sungod"],
    "cotton candy": ["cottoncandy"],
    "grim reaper": ["grimreaper"],
}

TORCH_INCLUDE_WORDS = ["torch", "torche", "glabrescens"]

# Checked before any inclusion: these mark another coral or livestock
TORCH_EXCLUDE_WORDS = [
    "zoa",
    "zoanthid",
    "zoanthids",
    "zoanthus",
    "acro",
    "acropora",
    "hammer",
    "frogspawn",
    "octospawn",
    "snail",
    "fish",
    "crab",
    "urchin",
]


def is_wysiwyg_title(title: str) -> bool:
    return WYSIWYG_TOKEN in (title or "").lower()


def enforce_torch(listing: Listing) -> Listing:
    """
    Normalize sale mode for torch listings (no-op for other categories).

    WYSIWYG in the title -> sale_mode "wysiwyg".
    Otherwise -> sale_mode "per_unit", unit_type "head"; unit_count is
    left as found (None means one or more heads, unspecified).
    """
    if (listing.category or "").lower() != TORCH_CATEGORY:
        return listing

    if is_wysiwyg_title(listing.title_raw):
        listing.sale_mode = "wysiwyg"
    else:
        listing.sale_mode = "per_unit"
        listing.unit_type = "head"
    return listing


def needles_for_variant(name: str) -> List[str]:
    """Search strings for one variant: as written, spaced, compact, aliases."""
    n = (name or "").strip().lower()
    if not n:
        return []
    out = [n, norm_space(n), norm_compact(n)] + VARIANT_ALIASES.get(n, [])
    # dedupe, keep order
    return [s for i, s in enumerate(out) if s and s not in out[:i]]


def all_torch_needles() -> List[str]:
    """Include words plus every variant needle ("All" torch page)."""
    out = list(TORCH_INCLUDE_WORDS)
    for variant in TORCH_VARIANTS:
        for needle in needles_for_variant(variant):
            if needle not in out:
                out.append(needle)
    return out


def _includes_any(haystack: str, needles: Iterable[str]) -> bool:
    for needle in needles:
        s = (needle or "").lower().strip()
        if s and s in haystack:
            return True
    return False


def text_for_match(title: str, variant: Optional[str] = None) -> str:
    return f"{title or ''} {variant or ''}".lower()


def is_blacklisted(title: str, variant: Optional[str] = None) -> bool:
    return _includes_any(text_for_match(title, variant), TORCH_EXCLUDE_WORDS)


def torch_passes_filter(title: str, variant: Optional[str] = None,
                        variant_name: Optional[str] = None) -> bool:
    """
    Decide whether a listing belongs on a torch page.

    Args:
        title: Listing raw title
        variant: Listing variant label
        variant_name: A TORCH_VARIANTS entry, or None for the "All" page

    Exclusion words win over everything. The "All" page accepts the torch
    include words or any variant needle; a variant page accepts only that
    variant's needles (not the generic "torch").
    """
    hay = text_for_match(title, variant)
    if _includes_any(hay, TORCH_EXCLUDE_WORDS):
        return False

    if variant_name is None:
        return _includes_any(hay, all_torch_needles())

    needles = needles_for_variant(variant_name)
    if not needles:
        return False
    return _includes_any(hay, needles)


def count_by_variant(listings: Iterable[Listing]) -> Dict[str, int]:
    """Listing counts for the "All" page and each named variant."""
    torch_only = [item for item in listings if torch_passes_filter(item.title_raw, item.variant)]
    counts = {"All": len(torch_only)}
    for name in TORCH_VARIANTS:
        needles = needles_for_variant(name)
        counts[name] = sum(
            1 for item in torch_only if _includes_any(text_for_match(item.title_raw, item.variant), needles)
        )
    return counts


def variant_to_slug(name: str) -> str:
    """Slugify a variant name ("24K Gold" -> "24k-gold")."""
    s = re.sub(r'[^a-z0-9\s-]', '', (name or '').lower().strip())
    return re.sub(r'\s+', '-', s)


def slug_to_variant(slug: str) -> Optional[str]:
    """Resolve a URL slug back to its TORCH_VARIANTS entry."""
    for name in TORCH_VARIANTS:
        if variant_to_slug(name) == (slug or '').lower().strip():
            return name
    return None


def pretty_variant_name(name: str) -> str:
    """Short names upper-cased ("24K"), others title-cased ("Dragon Soul")."""
    raw = (name or "").strip()
    if not raw:
        return ""
    compact = "".join(raw.split())
    if len(compact) <= 4:
        return compact.upper()
    return " ".join(w.capitalize() for w in raw.lower().split())
