from datetime import datetime, timezone

import pytest

from services.common.clock import FrozenClock
from services.featured.fixtures import FixtureCollaborators, make_listing, make_location
from services.featured.service import FeaturedRankingService
from services.listings.models import OrganicResult


FIXED_TIME = datetime(2026, 1, 28, 12, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FrozenClock(FIXED_TIME)


@pytest.fixture
def collaborators():
    near = make_listing("A", owner_id="owner-a", created_at=FIXED_TIME, boost_radius_km=10)
    far = make_listing("B", owner_id="owner-b", created_at=FIXED_TIME, boost_radius_km=10)
    plain = make_listing("C", owner_id="owner-c", created_at=FIXED_TIME, is_boosted=False)
    return FixtureCollaborators(
        candidates=[near, far],
        locations={
            "viewer": make_location("viewer", 0.0, 0.0, recorded_at=FIXED_TIME),
            "owner-a": make_location("owner-a", 0.0, 0.05, recorded_at=FIXED_TIME),
            "owner-b": make_location("owner-b", 0.0, 0.2, recorded_at=FIXED_TIME),
            "owner-c": make_location("owner-c", 0.0, 0.01, recorded_at=FIXED_TIME),
        },
        organic=[
            OrganicResult(listing=plain, distance_km=1.11),
            OrganicResult(listing=near, distance_km=5.56),
            OrganicResult(listing=far, distance_km=22.24),
        ],
    )


@pytest.fixture
def service(collaborators, clock):
    return FeaturedRankingService(
        candidates=collaborators,
        locations=collaborators,
        organic=collaborators,
        clock=clock,
    )
