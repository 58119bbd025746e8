from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Listing:
    listing_id: str
    owner_id: str
    name: str
    price: float
    category: str
    created_at: datetime
    sub_category: Optional[str] = None
    author_or_publication: Optional[str] = None
    description: Optional[str] = None
    is_boosted: bool = False
    boost_radius_km: Optional[float] = None
    boost_expires_on: Optional[date] = None
    is_sold: bool = False
    views: int = 0

    def to_payload(self) -> Dict[str, object]:
        return {
            "id": self.listing_id,
            "owner_id": self.owner_id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "sub_category": self.sub_category,
            "author_or_publication": self.author_or_publication,
            "description": self.description,
            "is_boosted": self.is_boosted,
            "is_sold": self.is_sold,
            "views": self.views,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ViewerLocation:
    user_id: str
    latitude: float
    longitude: float
    recorded_at: datetime


@dataclass(frozen=True)
class OrganicResult:
    listing: Listing
    distance_km: Optional[float] = None


@dataclass(frozen=True)
class OrganicPage:
    results: List[OrganicResult] = field(default_factory=list)
    total_count: int = 0
