from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from services.common.api import error_response, ok_response
from services.common.clock import Clock
from services.featured.config import load_featured_config
from services.featured.service import FeaturedRankingService
from services.listings.api_models import BoostRequestModel, LocationSyncRequestModel
from services.listings.config import load_boost_config
from services.listings.errors import (
    BoostNotAllowedError,
    BoostValidationError,
    ListingNotFoundError,
    ListingStateError,
    PageRequestError,
)
from services.listings.models import Listing, ViewerLocation
from services.listings.repository import ListingRepository, LocationRepository
from services.listings.service import ListingService, ListingStore, LocationService

app = FastAPI(title="Featured Ranking", docs_url=None, redoc_url=None)

_clock = Clock()
_listing_repo = ListingRepository()
_location_repo = LocationRepository()
_listing_service = ListingService(_listing_repo, config=load_boost_config(), clock=_clock)
_location_service = LocationService(_location_repo, clock=_clock)
_store = ListingStore(_listing_repo, _location_repo)
_service = FeaturedRankingService(
    candidates=_store,
    locations=_store,
    organic=_store,
    config=load_featured_config(),
    clock=_clock,
)


def _validation_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=error_response("VALIDATION_ERROR", message))


def _listing_not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content=error_response("NOT_FOUND", "Listing not found"))


def _serialize_listing(listing: Listing) -> dict:
    payload = listing.to_payload()
    payload["boost_radius_km"] = listing.boost_radius_km
    payload["boost_expires_on"] = listing.boost_expires_on.isoformat() if listing.boost_expires_on else None
    return payload


def _serialize_location(location: ViewerLocation) -> dict:
    return {
        "user_id": location.user_id,
        "latitude": location.latitude,
        "longitude": location.longitude,
        "recorded_at": location.recorded_at.isoformat(),
    }


@app.get("/listings/ranked/{viewer_id}")
def ranked_listings(viewer_id: str, page: int = 1, page_size: Optional[int] = None):
    try:
        ranked_page = _service.get_ranked_page(viewer_id, page=page, page_size=page_size)
    except PageRequestError as exc:
        return _validation_error(str(exc))
    return ok_response(ranked_page.to_payload())


@app.put("/listings/{listing_id}/boost")
def boost_listing(listing_id: str, request: BoostRequestModel):
    if request.schema_version != "v1":
        return _validation_error("schema_version must be v1")
    try:
        listing = _listing_service.boost(request.owner_id, listing_id, request.radius_km)
    except ListingNotFoundError:
        return _listing_not_found()
    except BoostNotAllowedError as exc:
        return JSONResponse(status_code=403, content=error_response("FORBIDDEN", str(exc)))
    except BoostValidationError as exc:
        return _validation_error(str(exc))
    return ok_response({"listing": _serialize_listing(listing)})


@app.patch("/listings/{listing_id}/sold")
def mark_sold(listing_id: str):
    try:
        listing = _listing_service.mark_sold(listing_id)
    except ListingNotFoundError:
        return _listing_not_found()
    except ListingStateError as exc:
        return _validation_error(str(exc))
    return ok_response({"listing": _serialize_listing(listing)})


@app.patch("/listings/{listing_id}/unsold")
def mark_unsold(listing_id: str):
    try:
        listing = _listing_service.mark_unsold(listing_id)
    except ListingNotFoundError:
        return _listing_not_found()
    except ListingStateError as exc:
        return _validation_error(str(exc))
    return ok_response({"listing": _serialize_listing(listing)})


@app.post("/locations/sync")
def sync_location(request: LocationSyncRequestModel):
    if request.schema_version != "v1":
        return _validation_error("schema_version must be v1")
    location = _location_service.sync(request.user_id, request.latitude, request.longitude)
    return ok_response({"location": _serialize_location(location)})


@app.get("/locations/{user_id}")
def location_history(user_id: str):
    history = _location_service.history(user_id)
    if not history:
        return JSONResponse(
            status_code=404,
            content=error_response("NOT_FOUND", "No locations found for this user"),
        )
    return ok_response({"locations": [_serialize_location(location) for location in history]})
