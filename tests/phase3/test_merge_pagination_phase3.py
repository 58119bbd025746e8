from __future__ import annotations

from datetime import datetime, timezone

import pytest

from services.featured.fixtures import make_listing
from services.featured.merge import ResultMerger
from services.featured.models import ResultEntry, ScoredCandidate
from services.featured.pagination import Paginator, total_pages
from services.listings.models import OrganicResult


FIXED_TIME = datetime(2026, 1, 28, 12, tzinfo=timezone.utc)


def _featured(listing_id: str, distance: float = 1.0) -> ScoredCandidate:
    return ScoredCandidate(
        listing=make_listing(listing_id, created_at=FIXED_TIME),
        distance_km=distance,
        distance_score=0.5,
        recency_score=1.0,
        random_component=0.5,
        score=0.7,
    )


def _organic(listing_id: str, distance=None) -> OrganicResult:
    return OrganicResult(listing=make_listing(listing_id, created_at=FIXED_TIME, is_boosted=False), distance_km=distance)


def _entries(count: int, featured: int = 0):
    return [
        ResultEntry(
            listing=make_listing(f"e-{idx}", created_at=FIXED_TIME),
            distance_km=float(idx),
            featured=idx < featured,
        )
        for idx in range(count)
    ]


def test_merge_places_featured_first_and_tags_entries():
    merged = ResultMerger().merge(
        [_featured("f1", 3.0), _featured("f2", 0.4)],
        [_organic("o1", 0.2), _organic("o2", 0.9)],
    )
    assert [entry.listing_id for entry in merged] == ["f1", "f2", "o1", "o2"]
    assert [entry.featured for entry in merged] == [True, True, False, False]
    assert merged[1].distance_km == 0.4


def test_merge_removes_organic_duplicates_of_featured():
    merged = ResultMerger().merge(
        [_featured("shared")],
        [_organic("o1", 0.1), _organic("shared", 0.5), _organic("o1", 0.1), _organic("o2", 0.7)],
    )
    ids = [entry.listing_id for entry in merged]
    assert ids == ["shared", "o1", "o2"]
    assert len(ids) == len(set(ids))
    assert merged[0].featured is True


def test_merge_with_no_featured_keeps_organic_order():
    organic = [_organic("o3", 2.0), _organic("o1", 0.5), _organic("o2", None)]
    merged = ResultMerger().merge([], organic)
    assert [entry.listing_id for entry in merged] == ["o3", "o1", "o2"]
    assert not any(entry.featured for entry in merged)


def test_result_entry_payload_carries_flag_and_formatted_distance():
    near = ResultEntry(listing=make_listing("n", created_at=FIXED_TIME), distance_km=0.25, featured=True)
    unknown = ResultEntry(listing=make_listing("u", created_at=FIXED_TIME), distance_km=None, featured=False)
    payload = near.to_payload()
    assert payload["id"] == "n"
    assert payload["featured"] is True
    assert payload["distance"] == "250 m"
    assert payload["distance_value"] == 0.25
    assert unknown.to_payload()["distance"] == "N/A"


def test_paginator_slices_and_counts():
    merged = _entries(7, featured=2)
    paginator = Paginator()

    first = paginator.paginate(merged, 1, 3)
    assert [entry.listing_id for entry in first.results] == ["e-0", "e-1", "e-2"]
    assert first.total_count == 7
    assert first.total_pages == 3
    assert first.featured_count == 2

    third = paginator.paginate(merged, 3, 3)
    assert [entry.listing_id for entry in third.results] == ["e-6"]
    assert third.featured_count == 0

    beyond = paginator.paginate(merged, 4, 3)
    assert beyond.results == []
    assert beyond.total_pages == 3


def test_featured_entries_are_not_repeated_on_later_pages():
    merged = _entries(10, featured=2)
    paginator = Paginator()
    seen = []
    for page in range(1, 5):
        seen.extend(entry.listing_id for entry in paginator.paginate(merged, page, 3).results)
    assert seen == [entry.listing_id for entry in merged]
    assert sum(1 for entry_id in seen if entry_id in {"e-0", "e-1"}) == 2


def test_paginator_uses_full_total_for_prefix_input():
    page = Paginator().paginate(_entries(4), 1, 2, total_count=25)
    assert page.total_count == 25
    assert page.total_pages == 13
    assert len(page.results) == 2


def test_paginator_rejects_invalid_arguments():
    with pytest.raises(ValueError):
        Paginator().paginate(_entries(2), 0, 10)
    with pytest.raises(ValueError):
        Paginator().paginate(_entries(2), 1, 0)


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2


def test_ranked_page_payload_shape():
    payload = Paginator().paginate(_entries(3, featured=1), 1, 2).to_payload()
    assert set(payload) == {"page", "page_size", "total_count", "total_pages", "featured_count", "results"}
    assert payload["results"][0]["featured"] is True
    assert payload["results"][1]["distance"] == "1 km"
