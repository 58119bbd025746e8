from enum import Enum


class DegradationReason(str, Enum):
    missing_viewer_location = "missing_viewer_location"
    viewer_location_fetch_failed = "viewer_location_fetch_failed"
    candidate_fetch_failed = "candidate_fetch_failed"
    organic_fetch_failed = "organic_fetch_failed"


class ExclusionReason(str, Enum):
    not_boosted = "not_boosted"
    expired = "expired"
    sold = "sold"
    invalid_radius = "invalid_radius"
    owner_location_missing = "owner_location_missing"
    out_of_radius = "out_of_radius"
