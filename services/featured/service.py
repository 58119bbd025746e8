from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol

from services.common.clock import Clock
from services.common.enums import DegradationReason, ExclusionReason
from services.featured.config import FeaturedRankingConfig
from services.featured.eligibility import EligibilityFilter
from services.featured.merge import ResultMerger
from services.featured.models import RankedPage, ScoredCandidate
from services.featured.pagination import Paginator
from services.featured.scoring import FairnessScorer
from services.featured.selection import Selector
from services.listings.errors import PageRequestError
from services.listings.models import Listing, OrganicPage, ViewerLocation


logger = logging.getLogger(__name__)


class CandidateSource(Protocol):
    def fetch_boosted_candidates(self, viewer_id: str) -> List[Listing]: ...


class LocationSource(Protocol):
    def fetch_latest_location(self, user_id: str) -> Optional[ViewerLocation]: ...


class OrganicSource(Protocol):
    def fetch_organic_ranked_results(
        self,
        viewer_id: str,
        page: int,
        page_size: int,
        *,
        exclude_ids: Iterable[str] = (),
    ) -> OrganicPage: ...


@dataclass(frozen=True)
class RankingObservabilityEvent:
    event_type: str
    details: Dict[str, object]


class RankingObservability:
    def __init__(self) -> None:
        self._events: List[RankingObservabilityEvent] = []

    def record(self, event_type: str, **details: object) -> None:
        self._events.append(RankingObservabilityEvent(event_type=event_type, details=details))

    def events(self) -> List[RankingObservabilityEvent]:
        return list(self._events)

    def of_type(self, event_type: str) -> List[RankingObservabilityEvent]:
        return [event for event in self._events if event.event_type == event_type]


class FeaturedRankingService:
    def __init__(
        self,
        *,
        candidates: CandidateSource,
        locations: LocationSource,
        organic: OrganicSource,
        config: Optional[FeaturedRankingConfig] = None,
        clock: Optional[Clock] = None,
        observability: Optional[RankingObservability] = None,
    ) -> None:
        self._candidates = candidates
        self._locations = locations
        self._organic = organic
        self._config = config or FeaturedRankingConfig()
        self._clock = clock or Clock()
        self._observability = observability or RankingObservability()
        self._eligibility = EligibilityFilter()
        self._scorer = FairnessScorer(self._config)
        self._selector = Selector(self._config.max_featured)
        self._merger = ResultMerger()
        self._paginator = Paginator()

    @property
    def observability(self) -> RankingObservability:
        return self._observability

    @property
    def config(self) -> FeaturedRankingConfig:
        return self._config

    def get_ranked_page(self, viewer_id: str, page: int = 1, page_size: Optional[int] = None) -> RankedPage:
        size = self._config.default_page_size if page_size is None else page_size
        if page < 1:
            raise PageRequestError("page must be >= 1")
        if not 1 <= size <= self._config.max_page_size:
            raise PageRequestError(f"page_size must be between 1 and {self._config.max_page_size}")

        now = self._clock.now()
        viewer = self._fetch_viewer_location(viewer_id)
        featured = self.select_featured(viewer_id, viewer, now=now)

        # The organic window covers every position up to the end of the requested page.
        organic = self._fetch_organic(
            viewer_id,
            page_size=page * size,
            exclude_ids=[candidate.listing_id for candidate in featured],
        )
        merged = self._merger.merge(featured, organic.results)
        duplicates = len(featured) + len(organic.results) - len(merged)
        total = len(featured) + organic.total_count - duplicates
        ranked_page = self._paginator.paginate(merged, page, size, total_count=total)
        self._observability.record(
            "page",
            viewer_id=viewer_id,
            page=page,
            page_size=size,
            total_count=ranked_page.total_count,
            featured_count=ranked_page.featured_count,
            duplicates_removed=duplicates,
        )
        return ranked_page

    def select_featured(
        self,
        viewer_id: str,
        viewer: Optional[ViewerLocation],
        *,
        now: Optional[datetime] = None,
    ) -> List[ScoredCandidate]:
        if viewer is None:
            return []
        now = now or self._clock.now()
        pool = self._fetch_candidates(viewer_id)
        self._observability.record("candidates", viewer_id=viewer_id, candidate_count=len(pool))
        if not pool:
            return []

        owner_cache: Dict[str, Optional[ViewerLocation]] = {}

        def owner_location(owner_id: str) -> Optional[ViewerLocation]:
            if owner_id not in owner_cache:
                owner_cache[owner_id] = self._safe_location(owner_id)
            return owner_cache[owner_id]

        outcome = self._eligibility.filter(viewer, pool, owner_location=owner_location, today=now.date())
        invalid = sorted(
            listing_id
            for listing_id, reason in outcome.excluded.items()
            if reason == ExclusionReason.invalid_radius
        )
        if invalid:
            logger.warning("excluded boosted listings with unusable boost radius: %s", invalid)
        self._observability.record(
            "eligibility",
            viewer_id=viewer_id,
            eligible=[candidate.listing.listing_id for candidate in outcome.eligible],
            excluded={listing_id: reason.value for listing_id, reason in sorted(outcome.excluded.items())},
        )

        scored = self._scorer.score_all(outcome.eligible, now=now)
        selected = self._selector.select(scored)
        self._observability.record(
            "selection",
            viewer_id=viewer_id,
            scores={candidate.listing_id: candidate.score for candidate in scored},
            selected=[candidate.listing_id for candidate in selected],
        )
        return selected

    def _fetch_viewer_location(self, viewer_id: str) -> Optional[ViewerLocation]:
        try:
            viewer = self._locations.fetch_latest_location(viewer_id)
        except Exception as exc:
            self._degrade(DegradationReason.viewer_location_fetch_failed, viewer_id, exc)
            return None
        if viewer is None:
            logger.info("no location for viewer %s; serving without featured listings", viewer_id)
            self._observability.record(
                "degraded",
                viewer_id=viewer_id,
                reason=DegradationReason.missing_viewer_location.value,
            )
        return viewer

    def _fetch_candidates(self, viewer_id: str) -> List[Listing]:
        try:
            return list(self._candidates.fetch_boosted_candidates(viewer_id))
        except Exception as exc:
            self._degrade(DegradationReason.candidate_fetch_failed, viewer_id, exc)
            return []

    def _fetch_organic(self, viewer_id: str, *, page_size: int, exclude_ids: List[str]) -> OrganicPage:
        try:
            return self._organic.fetch_organic_ranked_results(viewer_id, 1, page_size, exclude_ids=exclude_ids)
        except Exception as exc:
            self._degrade(DegradationReason.organic_fetch_failed, viewer_id, exc)
            return OrganicPage()

    def _safe_location(self, user_id: str) -> Optional[ViewerLocation]:
        try:
            return self._locations.fetch_latest_location(user_id)
        except Exception as exc:
            logger.warning("owner location lookup failed for %s: %s", user_id, exc)
            return None

    def _degrade(self, reason: DegradationReason, viewer_id: str, exc: Exception) -> None:
        logger.warning("%s for viewer %s: %s", reason.value, viewer_id, exc)
        self._observability.record(
            "degraded",
            viewer_id=viewer_id,
            reason=reason.value,
            error_class=type(exc).__name__,
        )
