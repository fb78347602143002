"""
Listing data models.

Pure data classes for the normalized catalog row, the crawl source
configuration record and the per-run report. No business logic beyond
serialization.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..common.constants import STATUS_AVAILABLE


@dataclass
class Listing:
    """
    One normalized product record scraped from a shop.

    Keyed by (shop_id, url) where url is the canonical product URL.
    Prices are CAD floats; sale_price_cad is only meaningful when it is
    strictly below price_cad (ListingValidator enforces this).
    """

    shop_id: str
    category: str
    title_raw: str
    url: str
    image_url: Optional[str] = None
    price_cad: Optional[float] = None
    sale_price_cad: Optional[float] = None
    status: str = STATUS_AVAILABLE   # "available" | "sold_out"
    variant: Optional[str] = None
    sale_mode: Optional[str] = None   # "wysiwyg" | "per_unit"
    unit_type: Optional[str] = None   # "head" | "polyp" | "frag"
    unit_count: Optional[int] = None

    @property
    def key(self) -> tuple:
        """Dedup key used by listing stores."""
        return (self.shop_id, self.url)

    def to_record(self) -> Dict[str, Any]:
        """Row dict with exactly the persisted listing columns."""
        return asdict(self)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Listing":
        """Build a listing from a store row, ignoring store-managed columns."""
        names = cls.__dataclass_fields__.keys()
        return cls(**{k: v for k, v in record.items() if k in names})


@dataclass
class SourceRow:
    """An origin to crawl, as configured outside the pipeline."""

    url: str
    shop_id: str
    category: str
    is_active: bool = True
    id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "SourceRow":
        """Build from a config/store record; tolerates missing optional keys."""
        return cls(
            url=str(record.get("url") or "").strip(),
            shop_id=str(record.get("shop_id") or "").strip(),
            category=str(record.get("category") or "").strip().lower(),
            is_active=bool(record.get("is_active", True)),
            id=str(record["id"]) if record.get("id") is not None else None,
        )


@dataclass
class SourceReport:
    """Outcome of crawling one source."""

    source: str
    found: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"source": self.source, "found": self.found}
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class RunReport:
    """Aggregate report returned by one full scrape run."""

    sources: List[SourceReport] = field(default_factory=list)
    ok: bool = True

    @property
    def total(self) -> int:
        return sum(s.found for s in self.sources)

    @property
    def failed_sources(self) -> List[SourceReport]:
        return [s for s in self.sources if s.error]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "total": self.total,
            "debug": [s.to_dict() for s in self.sources],
        }
