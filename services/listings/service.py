from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta
from typing import Iterable, List, Optional

from services.common.clock import Clock
from services.listings.config import BoostConfig
from services.listings.errors import (
    BoostNotAllowedError,
    BoostValidationError,
    ListingNotFoundError,
    ListingStateError,
)
from services.listings.models import Listing, OrganicPage, ViewerLocation
from services.listings.organic import OrganicRankingService
from services.listings.repository import ListingRepository, LocationRepository


logger = logging.getLogger(__name__)


class ListingService:
    def __init__(
        self,
        repository: ListingRepository,
        *,
        config: Optional[BoostConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._repository = repository
        self._config = config or BoostConfig()
        self._clock = clock or Clock()

    def get(self, listing_id: str) -> Listing:
        listing = self._repository.get(listing_id)
        if listing is None:
            raise ListingNotFoundError(listing_id)
        return listing

    def boost(self, owner_id: str, listing_id: str, radius_km: float) -> Listing:
        if not self._config.min_radius_km <= radius_km <= self._config.max_radius_km:
            raise BoostValidationError(
                f"Boosting distance must be between {self._config.min_radius_km:g} "
                f"and {self._config.max_radius_km:g} km."
            )
        listing = self.get(listing_id)
        if listing.owner_id != owner_id:
            raise BoostNotAllowedError("You can only boost your own listings.")
        if listing.is_sold:
            raise BoostValidationError("Cannot boost a sold listing.")
        boosted = replace(
            listing,
            is_boosted=True,
            boost_radius_km=float(radius_km),
            boost_expires_on=self._clock.today() + timedelta(days=self._config.duration_days),
        )
        self._repository.add(boosted)
        logger.info("listing %s boosted by %s within %s km", listing_id, owner_id, radius_km)
        return boosted

    def mark_sold(self, listing_id: str) -> Listing:
        listing = self.get(listing_id)
        if listing.is_sold:
            raise ListingStateError("This listing is already marked as sold.")
        updated = replace(listing, is_sold=True)
        self._repository.add(updated)
        return updated

    def mark_unsold(self, listing_id: str) -> Listing:
        listing = self.get(listing_id)
        if not listing.is_sold:
            raise ListingStateError("This listing is already marked as unsold.")
        updated = replace(listing, is_sold=False)
        self._repository.add(updated)
        return updated


class LocationService:
    def __init__(self, repository: LocationRepository, *, clock: Optional[Clock] = None) -> None:
        self._repository = repository
        self._clock = clock or Clock()

    def sync(self, user_id: str, latitude: float, longitude: float) -> ViewerLocation:
        location = ViewerLocation(
            user_id=user_id,
            latitude=latitude,
            longitude=longitude,
            recorded_at=self._clock.now(),
        )
        self._repository.add(location)
        return location

    def latest(self, user_id: str) -> Optional[ViewerLocation]:
        return self._repository.latest(user_id)

    def history(self, user_id: str) -> List[ViewerLocation]:
        return self._repository.history(user_id)


class ListingStore:
    """Storage-backed collaborator consumed by the featured ranking pipeline."""

    def __init__(self, listings: ListingRepository, locations: LocationRepository) -> None:
        self._listings = listings
        self._locations = locations
        self._organic = OrganicRankingService(listings, locations)

    def fetch_boosted_candidates(self, viewer_id: str) -> List[Listing]:
        return self._listings.boosted()

    def fetch_latest_location(self, user_id: str) -> Optional[ViewerLocation]:
        return self._locations.latest(user_id)

    def fetch_organic_ranked_results(
        self,
        viewer_id: str,
        page: int,
        page_size: int,
        *,
        exclude_ids: Iterable[str] = (),
    ) -> OrganicPage:
        return self._organic.fetch_ranked(viewer_id, page, page_size, exclude_ids=exclude_ids)
