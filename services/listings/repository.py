from __future__ import annotations

from typing import Dict, List, Optional

from services.listings.models import Listing, ViewerLocation


class ListingRepository:
    def __init__(self) -> None:
        self._listings: Dict[str, Listing] = {}

    def add(self, listing: Listing) -> None:
        self._listings[listing.listing_id] = listing

    def get(self, listing_id: str) -> Optional[Listing]:
        return self._listings.get(listing_id)

    def list(self) -> List[Listing]:
        return list(self._listings.values())

    def unsold(self) -> List[Listing]:
        return [listing for listing in self._listings.values() if not listing.is_sold]

    def boosted(self) -> List[Listing]:
        return [
            listing
            for listing in self._listings.values()
            if listing.is_boosted and not listing.is_sold
        ]


class LocationRepository:
    def __init__(self) -> None:
        self._history: Dict[str, List[ViewerLocation]] = {}

    def add(self, location: ViewerLocation) -> None:
        self._history.setdefault(location.user_id, []).append(location)

    def history(self, user_id: str) -> List[ViewerLocation]:
        entries = self._history.get(user_id, [])
        return sorted(reversed(entries), key=lambda entry: entry.recorded_at, reverse=True)

    def latest(self, user_id: str) -> Optional[ViewerLocation]:
        entries = self._history.get(user_id)
        if not entries:
            return None
        return max(reversed(entries), key=lambda entry: entry.recorded_at)
