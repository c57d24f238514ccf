"""Pydantic models for route search entities.

Field aliases match the camelCase JSON returned by the route-search API.
Models also accept the Python field names.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TransportationType(str, Enum):
    """Mode of a single transportation leg."""

    FLIGHT = "FLIGHT"
    BUS = "BUS"
    SUBWAY = "SUBWAY"
    UBER = "UBER"


class SegmentType(str, Enum):
    """Structural role of a segment relative to the route's flight leg."""

    BEFORE_FLIGHT = "BEFORE_FLIGHT"
    FLIGHT = "FLIGHT"
    AFTER_FLIGHT = "AFTER_FLIGHT"


class Location(BaseModel):
    """An airport, station, or other place a transportation can connect."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: int | None = None  # unset until persisted
    name: str
    country: str
    city: str
    location_code: str = Field(alias="locationCode", min_length=3)


class Segment(BaseModel):
    """One leg of a route.

    `type` keeps unrecognized transport modes as the raw string so newer
    server-side modes still parse.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    transportation_id: int | None = Field(default=None, alias="transportationId")
    type: TransportationType | str = Field(union_mode="left_to_right")
    from_location: Location = Field(alias="from")
    to_location: Location = Field(alias="to")
    segment_type: SegmentType = Field(alias="segmentType")


class Route(BaseModel):
    """An ordered chain of segments from the search origin to its destination."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    segments: list[Segment] = []


class AuthResult(BaseModel):
    """Response body of the login endpoint."""

    model_config = ConfigDict(extra="ignore")

    token: str
    username: str
    role: str
