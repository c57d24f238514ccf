"""Grouping and stop-sequence derivation for route search results."""

from aviation_mcp.itinerary.transformer import (
    DIRECT_LABEL,
    build_stops,
    group_routes_by_via,
    is_ground_transport,
    route_path,
    route_summary,
    segment_role_label,
    type_label,
    via_label,
)

__all__ = [
    # Grouping
    "group_routes_by_via",
    "via_label",
    "DIRECT_LABEL",
    # Stops
    "build_stops",
    # Labels
    "route_summary",
    "route_path",
    "type_label",
    "segment_role_label",
    "is_ground_transport",
]
