from enum import Enum

from pydantic import BaseModel, Field

from aviation_mcp.models.domain import Location, Route, TransportationType


class SearchStatus(str, Enum):
    """Tag of the current search state, used for conditional rendering."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


class RouteGroup(BaseModel):
    """Routes sharing the same via-stop label, in search order."""

    via_label: str = Field(description="e.g. 'Via Istanbul Airport (IST)' or 'Direct'")
    routes: list[Route]


class Stop(BaseModel):
    """One node of a route's travel chain."""

    location: Location
    transport_after: TransportationType | str | None = Field(
        default=None,
        union_mode="left_to_right",
        description="Mode used to reach the next stop (None for the final stop)",
    )


class LocationOption(BaseModel):
    id: int | None = None
    name: str
    city: str
    country: str
    location_code: str
    label: str = Field(description="Display label, e.g. 'Istanbul Airport (IST)'")


class ListLocationsResponse(BaseModel):
    locations: list[LocationOption]
    count: int = Field(description="Number of locations returned")


class SearchCriteriaInfo(BaseModel):
    origin_id: int | None = None
    destination_id: int | None = None
    date: str | None = Field(default=None, description="Travel date in YYYY-MM-DD format")
    complete: bool = Field(
        default=False, description="True when origin, destination and date are all set"
    )


class RouteCard(BaseModel):
    """Compact list entry for one route."""

    route_index: int = Field(description="Position of the route within its group")
    summary: str = Field(description="Transport types, e.g. 'BUS → FLIGHT → UBER'")
    path: str = Field(description="Stops interleaved with transport labels")
    segment_count: int


class RouteGroupResult(BaseModel):
    group_index: int
    via_label: str
    routes: list[RouteCard]


class SearchRoutesResponse(BaseModel):
    """Search outcome shaped for grouped presentation."""

    status: SearchStatus
    criteria: SearchCriteriaInfo
    groups: list[RouteGroupResult] = []
    route_count: int = Field(default=0, description="Total routes across all groups")
    message: str | None = Field(
        default=None, description="Validation prompt or user-facing error message"
    )


class StopDetail(BaseModel):
    name: str
    location_code: str
    city: str
    country: str
    transport_after: str | None = Field(
        default=None, description="Display label of the mode to the next stop"
    )
    segment_role: str | None = Field(
        default=None, description="e.g. 'Before Flight Transfer' (None for the final stop)"
    )
    ground_transfer: bool | None = Field(
        default=None, description="True when the mode to the next stop is a ground transfer"
    )


class RouteDetailResponse(BaseModel):
    """Stop-by-stop view of the selected route."""

    group_index: int
    route_index: int
    via_label: str
    summary: str
    stops: list[StopDetail]


class SessionInfo(BaseModel):
    authenticated: bool
    username: str | None = None
    role: str | None = None
    is_admin: bool = False
