from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class BoostConfig:
    min_radius_km: float = 1.0
    max_radius_km: float = 500.0
    duration_days: int = 30

    def __post_init__(self) -> None:
        if self.min_radius_km <= 0:
            raise ValueError("min_radius_km must be positive")
        if self.max_radius_km < self.min_radius_km:
            raise ValueError("max_radius_km must be >= min_radius_km")
        if self.duration_days < 1:
            raise ValueError("duration_days must be >= 1")


def load_boost_config() -> BoostConfig:
    return BoostConfig(
        min_radius_km=float(os.getenv("BOOST_MIN_RADIUS_KM", str(BoostConfig.min_radius_km))),
        max_radius_km=float(os.getenv("BOOST_MAX_RADIUS_KM", str(BoostConfig.max_radius_km))),
        duration_days=int(os.getenv("BOOST_DURATION_DAYS", str(BoostConfig.duration_days))),
    )
