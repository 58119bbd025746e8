from __future__ import annotations

from pydantic import BaseModel, Field


class BoostRequestModel(BaseModel):
    schema_version: str
    owner_id: str
    radius_km: float


class LocationSyncRequestModel(BaseModel):
    schema_version: str
    user_id: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
