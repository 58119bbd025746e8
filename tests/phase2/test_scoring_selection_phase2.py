from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from services.featured.config import FeaturedRankingConfig, load_featured_config
from services.featured.determinism import stable_unit_value
from services.featured.fixtures import make_listing
from services.featured.models import EligibleCandidate, ScoredCandidate
from services.featured.scoring import FairnessScorer
from services.featured.selection import Selector
from services.geo.distance import distance_km


FIXED_TIME = datetime(2026, 1, 28, 12, tzinfo=timezone.utc)


def _candidate(listing_id: str, *, distance: float, radius: float = 10.0, age_days: float = 0.0) -> EligibleCandidate:
    listing = make_listing(
        listing_id,
        created_at=FIXED_TIME - timedelta(days=age_days),
        boost_radius_km=radius,
    )
    return EligibleCandidate(listing=listing, distance_km=distance)


def _scored(listing_id: str, score: float) -> ScoredCandidate:
    return ScoredCandidate(
        listing=make_listing(listing_id, created_at=FIXED_TIME),
        distance_km=1.0,
        distance_score=0.0,
        recency_score=0.0,
        random_component=0.0,
        score=score,
    )


def test_stable_unit_value_is_repeatable_and_in_range():
    values = [stable_unit_value(f"listing-{idx}") for idx in range(500)]
    assert all(0.0 <= value < 1.0 for value in values)
    assert stable_unit_value("listing-7") == values[7]
    assert len(set(values)) == len(values)


def test_scenario_near_fresh_listing_score():
    distance = distance_km(0.0, 0.0, 0.0, 0.05)
    scored = FairnessScorer().score(_candidate("A", distance=distance), now=FIXED_TIME)
    assert scored.distance_score == pytest.approx(0.444, abs=1e-3)
    assert scored.recency_score == 1.0
    assert scored.random_component == stable_unit_value("A")
    expected = 0.5 * scored.distance_score + 0.3 * 1.0 + 0.2 * scored.random_component
    assert scored.score == pytest.approx(expected)


def test_boundary_distance_scores_zero():
    radius = distance_km(0.0, 0.0, 0.0, 0.05)
    scored = FairnessScorer().score(_candidate("edge", distance=radius, radius=radius), now=FIXED_TIME)
    assert scored.distance_score == 0.0


@pytest.mark.parametrize(
    "age_days, expected",
    [(0, 1.0), (15, 0.5), (30, 0.0), (45, 0.0), (-2, 1.0)],
)
def test_recency_decays_linearly_and_clamps(age_days, expected):
    scored = FairnessScorer().score(_candidate("r", distance=1.0, age_days=age_days), now=FIXED_TIME)
    assert scored.recency_score == pytest.approx(expected)


def test_naive_creation_timestamp_is_treated_as_utc():
    listing = make_listing("naive", created_at=datetime(2026, 1, 28, 12), boost_radius_km=10.0)
    scored = FairnessScorer().score(EligibleCandidate(listing=listing, distance_km=1.0), now=FIXED_TIME)
    assert scored.recency_score == 1.0


def test_scores_stay_within_unit_interval():
    scorer = FairnessScorer()
    for idx in range(200):
        radius = 1.0 + (idx % 50)
        distance = radius * ((idx * 7) % 11) / 10.0
        scored = scorer.score(
            _candidate(f"c-{idx}", distance=distance, radius=radius, age_days=idx % 40),
            now=FIXED_TIME,
        )
        assert 0.0 <= scored.score <= 1.0


def test_scoring_is_deterministic_for_a_frozen_now():
    scorer = FairnessScorer()
    candidate = _candidate("same", distance=3.0, age_days=4)
    first = scorer.score(candidate, now=FIXED_TIME)
    second = FairnessScorer().score(candidate, now=FIXED_TIME)
    assert first == second


@pytest.mark.parametrize("count", [0, 1, 2, 3, 5, 12])
def test_selector_never_exceeds_cap(count):
    scored = [_scored(f"s-{idx}", score=idx / 20) for idx in range(count)]
    selected = Selector().select(scored)
    assert len(selected) == min(count, 2)
    if count:
        assert selected[0].score == max(item.score for item in scored)


def test_selector_keeps_arrival_order_on_equal_scores():
    scored = [_scored("first", 0.5), _scored("second", 0.5), _scored("third", 0.5)]
    assert [item.listing_id for item in Selector().select(scored)] == ["first", "second"]


def test_dense_area_tie_break_is_reproducible():
    scorer = FairnessScorer()
    candidates = [_candidate(f"dense-{idx}", distance=2.0) for idx in range(5)]
    first = Selector().select(scorer.score_all(candidates, now=FIXED_TIME))
    second = Selector().select(scorer.score_all(candidates, now=FIXED_TIME))
    expected = sorted(candidates, key=lambda c: -stable_unit_value(c.listing.listing_id))[:2]
    assert [item.listing_id for item in first] == [c.listing.listing_id for c in expected]
    assert [item.listing_id for item in first] == [item.listing_id for item in second]


def test_selector_cap_is_bounded_by_hard_cap():
    assert Selector(max_featured=5).cap == 2
    assert Selector(max_featured=1).cap == 1


def test_config_validation():
    with pytest.raises(ValueError):
        FeaturedRankingConfig(max_featured=3)
    with pytest.raises(ValueError):
        FeaturedRankingConfig(distance_weight=0.6)
    with pytest.raises(ValueError):
        FeaturedRankingConfig(distance_weight=1.2, recency_weight=-0.4, random_weight=0.2)
    with pytest.raises(ValueError):
        FeaturedRankingConfig(recency_window_days=0)


def test_load_config_from_environment(monkeypatch):
    monkeypatch.setenv("FEATURED_MAX_SLOTS", "1")
    monkeypatch.setenv("FEATURED_WEIGHT_DISTANCE", "0.6")
    monkeypatch.setenv("FEATURED_WEIGHT_RECENCY", "0.2")
    monkeypatch.setenv("FEATURED_RECENCY_WINDOW_DAYS", "14")
    config = load_featured_config()
    assert config.max_featured == 1
    assert config.distance_weight == 0.6
    assert config.random_weight == 0.2
    assert config.recency_window_days == 14.0


def test_custom_weights_flow_into_score():
    config = FeaturedRankingConfig(distance_weight=1.0, recency_weight=0.0, random_weight=0.0)
    scored = FairnessScorer(config).score(_candidate("w", distance=2.5, radius=10.0, age_days=40), now=FIXED_TIME)
    assert scored.score == pytest.approx(0.75)
