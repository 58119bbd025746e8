from __future__ import annotations

from typing import Iterable, Optional, Tuple

from services.geo.distance import distance_km
from services.listings.models import Listing, OrganicPage, OrganicResult, ViewerLocation
from services.listings.repository import ListingRepository, LocationRepository


class OrganicRankingService:
    """Nearest-first browse order over every unsold listing.

    A listing is placed at its owner's latest known location. Listings whose owner
    has no location sort after every located listing; without a viewer location the
    whole stream falls back to newest first.
    """

    def __init__(self, listings: ListingRepository, locations: LocationRepository) -> None:
        self._listings = listings
        self._locations = locations

    def fetch_ranked(
        self,
        viewer_id: str,
        page: int,
        page_size: int,
        *,
        exclude_ids: Iterable[str] = (),
    ) -> OrganicPage:
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be >= 1")
        excluded = set(exclude_ids)
        viewer = self._locations.latest(viewer_id)
        ranked = [
            OrganicResult(listing=listing, distance_km=self._distance(viewer, listing))
            for listing in self._listings.unsold()
            if listing.listing_id not in excluded
        ]
        ranked.sort(key=_browse_key)
        start = (page - 1) * page_size
        return OrganicPage(results=ranked[start : start + page_size], total_count=len(ranked))

    def _distance(self, viewer: Optional[ViewerLocation], listing: Listing) -> Optional[float]:
        if viewer is None:
            return None
        owner = self._locations.latest(listing.owner_id)
        if owner is None:
            return None
        return distance_km(viewer.latitude, viewer.longitude, owner.latitude, owner.longitude)


def _browse_key(result: OrganicResult) -> Tuple[int, float, float, str]:
    known = result.distance_km is not None
    return (
        0 if known else 1,
        result.distance_km if known else 0.0,
        -result.listing.created_at.timestamp(),
        result.listing.listing_id,
    )
