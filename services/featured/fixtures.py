from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from services.listings.errors import CollaboratorFetchError
from services.listings.models import Listing, OrganicPage, OrganicResult, ViewerLocation


@dataclass
class FixtureCollaborators:
    """Fixed-fixture stand-in for the listing store, with per-fetch failure switches."""

    candidates: List[Listing] = field(default_factory=list)
    locations: Dict[str, ViewerLocation] = field(default_factory=dict)
    organic: List[OrganicResult] = field(default_factory=list)
    fail_candidates: bool = False
    fail_locations: bool = False
    fail_organic: bool = False
    calls: List[Tuple[str, object]] = field(default_factory=list)

    def fetch_boosted_candidates(self, viewer_id: str) -> List[Listing]:
        self.calls.append(("candidates", viewer_id))
        if self.fail_candidates:
            raise CollaboratorFetchError("candidate store unavailable", source="candidates")
        return list(self.candidates)

    def fetch_latest_location(self, user_id: str) -> Optional[ViewerLocation]:
        self.calls.append(("location", user_id))
        if self.fail_locations:
            raise CollaboratorFetchError("location store unavailable", source="locations")
        return self.locations.get(user_id)

    def fetch_organic_ranked_results(
        self,
        viewer_id: str,
        page: int,
        page_size: int,
        *,
        exclude_ids: Iterable[str] = (),
    ) -> OrganicPage:
        excluded = set(exclude_ids)
        self.calls.append(("organic", (viewer_id, page, page_size, tuple(sorted(excluded)))))
        if self.fail_organic:
            raise CollaboratorFetchError("organic ranking unavailable", source="organic")
        remaining = [result for result in self.organic if result.listing.listing_id not in excluded]
        start = (page - 1) * page_size
        return OrganicPage(results=remaining[start : start + page_size], total_count=len(remaining))


def make_listing(
    listing_id: str,
    *,
    owner_id: Optional[str] = None,
    created_at: datetime,
    boost_radius_km: Optional[float] = 10.0,
    boost_expires_on: Optional[date] = None,
    is_boosted: bool = True,
    is_sold: bool = False,
    price: float = 100.0,
    category: str = "books",
) -> Listing:
    return Listing(
        listing_id=listing_id,
        owner_id=owner_id or f"owner-{listing_id}",
        name=f"Listing {listing_id}",
        price=price,
        category=category,
        created_at=created_at,
        is_boosted=is_boosted,
        boost_radius_km=boost_radius_km,
        boost_expires_on=boost_expires_on if boost_expires_on is not None else (created_at + timedelta(days=30)).date(),
        is_sold=is_sold,
    )


def make_location(user_id: str, latitude: float, longitude: float, *, recorded_at: datetime) -> ViewerLocation:
    return ViewerLocation(user_id=user_id, latitude=latitude, longitude=longitude, recorded_at=recorded_at)
