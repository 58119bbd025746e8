from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from services.geo.distance import format_distance
from services.listings.models import Listing


@dataclass(frozen=True)
class EligibleCandidate:
    listing: Listing
    distance_km: float


@dataclass(frozen=True)
class ScoredCandidate:
    listing: Listing
    distance_km: float
    distance_score: float
    recency_score: float
    random_component: float
    score: float

    @property
    def listing_id(self) -> str:
        return self.listing.listing_id


@dataclass(frozen=True)
class ResultEntry:
    listing: Listing
    distance_km: Optional[float]
    featured: bool

    @property
    def listing_id(self) -> str:
        return self.listing.listing_id

    def to_payload(self) -> Dict[str, object]:
        payload = self.listing.to_payload()
        payload["featured"] = self.featured
        payload["distance_value"] = self.distance_km
        payload["distance"] = format_distance(self.distance_km)
        return payload


@dataclass(frozen=True)
class RankedPage:
    page: int
    page_size: int
    total_count: int
    total_pages: int
    featured_count: int
    results: List[ResultEntry] = field(default_factory=list)

    def to_payload(self) -> Dict[str, object]:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
            "featured_count": self.featured_count,
            "results": [entry.to_payload() for entry in self.results],
        }
