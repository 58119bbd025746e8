from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from services.common.enums import ExclusionReason
from services.featured.models import EligibleCandidate
from services.geo.distance import distance_km
from services.listings.models import Listing, ViewerLocation


OwnerLocationLookup = Callable[[str], Optional[ViewerLocation]]


@dataclass(frozen=True)
class EligibilityOutcome:
    eligible: List[EligibleCandidate] = field(default_factory=list)
    excluded: Dict[str, ExclusionReason] = field(default_factory=dict)


def resolve_boost_radius(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        radius = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(radius) or radius <= 0:
        return None
    return radius


class EligibilityFilter:
    """Keeps the boosted listings a viewer may be shown as featured.

    A listing sits at its owner's latest location and must be boosted, unexpired as of
    ``today``, unsold, carry a usable boost radius, and lie within that radius of the
    viewer. Both boundaries are inclusive. Nothing here raises: a listing that fails a
    predicate, or whose data is malformed, is reported in ``excluded`` instead.
    """

    def filter(
        self,
        viewer: Optional[ViewerLocation],
        candidates: Iterable[Listing],
        *,
        owner_location: OwnerLocationLookup,
        today: date,
    ) -> EligibilityOutcome:
        if viewer is None:
            return EligibilityOutcome()
        eligible: List[EligibleCandidate] = []
        excluded: Dict[str, ExclusionReason] = {}
        seen = set()
        for listing in candidates:
            if listing.listing_id in seen:
                continue
            seen.add(listing.listing_id)
            distance, reason = self.evaluate(viewer, listing, owner_location=owner_location, today=today)
            if reason is not None:
                excluded[listing.listing_id] = reason
            elif distance is not None:
                eligible.append(EligibleCandidate(listing=listing, distance_km=distance))
        return EligibilityOutcome(eligible=eligible, excluded=excluded)

    def evaluate(
        self,
        viewer: ViewerLocation,
        listing: Listing,
        *,
        owner_location: OwnerLocationLookup,
        today: date,
    ) -> Tuple[Optional[float], Optional[ExclusionReason]]:
        if not listing.is_boosted:
            return None, ExclusionReason.not_boosted
        if listing.boost_expires_on is None or listing.boost_expires_on < today:
            return None, ExclusionReason.expired
        if listing.is_sold:
            return None, ExclusionReason.sold
        radius = resolve_boost_radius(listing.boost_radius_km)
        if radius is None:
            return None, ExclusionReason.invalid_radius
        owner = owner_location(listing.owner_id)
        if owner is None:
            return None, ExclusionReason.owner_location_missing
        distance = distance_km(viewer.latitude, viewer.longitude, owner.latitude, owner.longitude)
        if distance > radius:
            return None, ExclusionReason.out_of_radius
        return distance, None
