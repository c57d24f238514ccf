"""Pure transformations from search results to presentable itineraries.

Routes come from the route-search service as finished segment chains.
These helpers group them by the airport the flight departs from and turn
a segment chain (edges) into a list of stops (nodes) for detail views.

Nothing here catches exceptions: functions either return a value or raise
on a contract violation.
"""

from enum import Enum

from aviation_mcp.errors import EmptyRouteError
from aviation_mcp.models.domain import Route, Segment, SegmentType, TransportationType
from aviation_mcp.models.responses import RouteGroup, Stop

DIRECT_LABEL = "Direct"
SUMMARY_SEPARATOR = " → "

TYPE_LABELS: dict[TransportationType, str] = {
    TransportationType.FLIGHT: "Flight",
    TransportationType.BUS: "Bus",
    TransportationType.SUBWAY: "Subway",
    TransportationType.UBER: "Uber",
}

SEGMENT_ROLE_LABELS: dict[SegmentType, str] = {
    SegmentType.BEFORE_FLIGHT: "Before Flight Transfer",
    SegmentType.FLIGHT: "Flight",
    SegmentType.AFTER_FLIGHT: "After Flight Transfer",
}

GROUND_TRANSPORT_TYPES = frozenset({
    TransportationType.BUS,
    TransportationType.SUBWAY,
    TransportationType.UBER,
})


def _raw_type(value: Enum | str) -> str:
    """Return the wire value of an enum member or raw string."""
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _flight_segment(route: Route) -> Segment | None:
    for segment in route.segments:
        if segment.segment_type == SegmentType.FLIGHT:
            return segment
    return None


def via_label(route: Route) -> str:
    """Label a route by the departure location of its flight leg.

    Example: "Via Istanbul Airport (IST)". Routes without a flight segment
    (including malformed routes with no segments) are labelled "Direct".
    """
    flight = _flight_segment(route)
    if flight is None:
        return DIRECT_LABEL
    origin = flight.from_location
    return f"Via {origin.name} ({origin.location_code})"


def group_routes_by_via(routes: list[Route]) -> list[RouteGroup]:
    """Group routes by their via-stop label.

    Groups appear in the order their label is first seen, and routes keep
    their relative input order within a group.

    The key is the label text, not the location id: two different locations
    with the same name and code end up in one group.
    """
    grouped: dict[str, list[Route]] = {}
    for route in routes:
        grouped.setdefault(via_label(route), []).append(route)

    return [RouteGroup(via_label=label, routes=members) for label, members in grouped.items()]


def build_stops(segments: list[Segment]) -> list[Stop]:
    """Turn a segment chain into its ordered stops.

    Each segment contributes its departure location annotated with the mode
    used to leave it; the last segment's arrival location closes the list
    with no onward transport. The result always has len(segments) + 1 stops.

    Raises:
        EmptyRouteError: If segments is empty.
    """
    if not segments:
        raise EmptyRouteError("Cannot build stops for a route with no segments")

    stops = [
        Stop(location=segment.from_location, transport_after=segment.type)
        for segment in segments
    ]
    stops.append(Stop(location=segments[-1].to_location))
    return stops


def route_summary(route: Route) -> str:
    """Join segment transport types, e.g. "BUS → FLIGHT → UBER"."""
    return SUMMARY_SEPARATOR.join(_raw_type(segment.type) for segment in route.segments)


def type_label(transport_type: TransportationType | str) -> str:
    """Display label for a transport type.

    Unrecognized values are returned unchanged.
    """
    label = TYPE_LABELS.get(transport_type)
    if label is None:
        return _raw_type(transport_type)
    return label


def segment_role_label(segment_type: SegmentType) -> str:
    """Display label for a segment's role, e.g. "Before Flight Transfer"."""
    label = SEGMENT_ROLE_LABELS.get(segment_type)
    if label is None:
        return _raw_type(segment_type)
    return label


def is_ground_transport(transport_type: TransportationType | str) -> bool:
    """True for bus, subway and Uber transfers; unknown types are not ground transport."""
    return transport_type in GROUND_TRANSPORT_TYPES


def route_path(route: Route) -> str:
    """One-line view of a route: stop names interleaved with transport labels.

    Example: "Taksim Square → Bus → Istanbul Airport → Flight → Heathrow".
    Returns an empty string for a route with no segments.
    """
    if not route.segments:
        return ""

    parts: list[str] = []
    for stop in build_stops(route.segments):
        parts.append(stop.location.name)
        if stop.transport_after is not None:
            parts.append(type_label(stop.transport_after))
    return SUMMARY_SEPARATOR.join(parts)
