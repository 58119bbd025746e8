from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from services.common.clock import ensure_utc
from services.featured.config import FeaturedRankingConfig
from services.featured.determinism import stable_unit_value
from services.featured.eligibility import resolve_boost_radius
from services.featured.models import EligibleCandidate, ScoredCandidate


SECONDS_PER_DAY = 86400.0


class FairnessScorer:
    """Weighted blend of proximity, recency and a stable per-listing tie-break.

    With the default weights a score is ``0.5 * distance + 0.3 * recency + 0.2 * random``,
    every component is clamped to [0, 1], and the random component depends on the
    listing id alone, so repeated calls at the same ``now`` agree exactly.
    """

    def __init__(self, config: Optional[FeaturedRankingConfig] = None) -> None:
        self._config = config or FeaturedRankingConfig()

    def score(self, candidate: EligibleCandidate, *, now: datetime) -> ScoredCandidate:
        listing = candidate.listing
        distance_score = self.distance_score(candidate.distance_km, listing.boost_radius_km)
        recency_score = self.recency_score(listing.created_at, now=now)
        random_component = stable_unit_value(listing.listing_id)
        config = self._config
        total = (
            config.distance_weight * distance_score
            + config.recency_weight * recency_score
            + config.random_weight * random_component
        )
        return ScoredCandidate(
            listing=listing,
            distance_km=candidate.distance_km,
            distance_score=distance_score,
            recency_score=recency_score,
            random_component=random_component,
            score=_clamp(total),
        )

    def score_all(self, candidates: Iterable[EligibleCandidate], *, now: datetime) -> List[ScoredCandidate]:
        return [self.score(candidate, now=now) for candidate in candidates]

    def distance_score(self, distance: float, boost_radius_km: object) -> float:
        radius = resolve_boost_radius(boost_radius_km)
        if radius is None:
            return 0.0
        return _clamp(1.0 - distance / radius)

    def recency_score(self, created_at: datetime, *, now: datetime) -> float:
        window = self._config.recency_window_days
        age_days = (ensure_utc(now) - ensure_utc(created_at)).total_seconds() / SECONDS_PER_DAY
        return _clamp((window - age_days) / window)


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))
