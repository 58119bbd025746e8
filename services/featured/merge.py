from __future__ import annotations

from typing import List, Sequence

from services.featured.models import ResultEntry, ScoredCandidate
from services.listings.models import OrganicResult


class ResultMerger:
    def merge(
        self,
        featured: Sequence[ScoredCandidate],
        organic: Sequence[OrganicResult],
    ) -> List[ResultEntry]:
        merged: List[ResultEntry] = []
        seen = set()
        for candidate in featured:
            if candidate.listing_id in seen:
                continue
            seen.add(candidate.listing_id)
            merged.append(ResultEntry(listing=candidate.listing, distance_km=candidate.distance_km, featured=True))
        for result in organic:
            listing_id = result.listing.listing_id
            if listing_id in seen:
                continue
            seen.add(listing_id)
            merged.append(ResultEntry(listing=result.listing, distance_km=result.distance_km, featured=False))
        return merged
