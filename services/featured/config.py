from __future__ import annotations

import math
import os
from dataclasses import dataclass


HARD_FEATURED_CAP = 2


@dataclass(frozen=True)
class FeaturedRankingConfig:
    max_featured: int = HARD_FEATURED_CAP
    distance_weight: float = 0.5
    recency_weight: float = 0.3
    random_weight: float = 0.2
    recency_window_days: float = 30.0
    default_page_size: int = 50
    max_page_size: int = 200

    def __post_init__(self) -> None:
        if not 0 <= self.max_featured <= HARD_FEATURED_CAP:
            raise ValueError(f"max_featured must be between 0 and {HARD_FEATURED_CAP}")
        weights = (self.distance_weight, self.recency_weight, self.random_weight)
        if any(weight < 0 for weight in weights):
            raise ValueError("score weights must be non-negative")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise ValueError("score weights must sum to 1")
        if self.recency_window_days <= 0:
            raise ValueError("recency_window_days must be positive")
        if self.default_page_size < 1 or self.max_page_size < self.default_page_size:
            raise ValueError("page sizes must satisfy 1 <= default_page_size <= max_page_size")


def load_featured_config() -> FeaturedRankingConfig:
    defaults = FeaturedRankingConfig()
    return FeaturedRankingConfig(
        max_featured=int(os.getenv("FEATURED_MAX_SLOTS", str(defaults.max_featured))),
        distance_weight=float(os.getenv("FEATURED_WEIGHT_DISTANCE", str(defaults.distance_weight))),
        recency_weight=float(os.getenv("FEATURED_WEIGHT_RECENCY", str(defaults.recency_weight))),
        random_weight=float(os.getenv("FEATURED_WEIGHT_RANDOM", str(defaults.random_weight))),
        recency_window_days=float(os.getenv("FEATURED_RECENCY_WINDOW_DAYS", str(defaults.recency_window_days))),
        default_page_size=int(os.getenv("RANKING_DEFAULT_PAGE_SIZE", str(defaults.default_page_size))),
        max_page_size=int(os.getenv("RANKING_MAX_PAGE_SIZE", str(defaults.max_page_size))),
    )
