from __future__ import annotations

from typing import Iterable, List

from services.featured.config import HARD_FEATURED_CAP
from services.featured.models import ScoredCandidate


class Selector:
    def __init__(self, max_featured: int = HARD_FEATURED_CAP) -> None:
        self._cap = max(0, min(max_featured, HARD_FEATURED_CAP))

    @property
    def cap(self) -> int:
        return self._cap

    def select(self, scored: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
        # sorted() is stable, so equal scores keep their arrival order
        ranked = sorted(scored, key=lambda candidate: -candidate.score)
        return ranked[: self._cap]
