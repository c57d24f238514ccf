from aviation_mcp.app import mcp
from aviation_mcp.models.responses import RouteDetailResponse, SearchRoutesResponse
from aviation_mcp.services.route_search_service import close_route_detail as _close_route_detail
from aviation_mcp.services.route_search_service import get_search_state as _get_search_state
from aviation_mcp.services.route_search_service import search_routes as _search_routes
from aviation_mcp.services.route_search_service import select_route as _select_route


@mcp.tool()
async def search_routes(
    origin: str | None = None,
    destination: str | None = None,
    date: str | None = None,
) -> SearchRoutesResponse:
    """Search routes between two locations on a date.

    Each route is a flight with optional ground transport (bus, subway, uber)
    before and after it. Results are grouped by the airport the flight departs
    from, in the order the routes were found.

    Examples:
        search_routes("Taksim Square", "LHR", "2025-03-12")
        search_routes("1", "5", "2025-03-12")  # by location id

    Args:
        origin: Origin location - id, code, or name.
        destination: Destination location - same format as origin.
        date: Travel date in YYYY-MM-DD format.

    Returns:
        SearchRoutesResponse with status "success" and groups, "empty" when no
        routes exist, "error" when the search failed, or "idle" with a prompt
        when origin, destination or date is missing.
    """
    return await _search_routes(origin=origin, destination=destination, date=date)


@mcp.tool()
def get_search_state() -> SearchRoutesResponse:
    """Get the current search status, criteria and grouped results."""
    return _get_search_state()


@mcp.tool()
def select_route(group_index: int, route_index: int) -> RouteDetailResponse:
    """Show the stop-by-stop detail of one route from the last search.

    Args:
        group_index: Index of the group in the search results.
        route_index: Index of the route within that group.

    Returns:
        RouteDetailResponse listing every stop with the transport to the next one.
    """
    return _select_route(group_index=group_index, route_index=route_index)


@mcp.tool()
def close_route_detail() -> SearchRoutesResponse:
    """Close the route detail view. The search results are kept."""
    return _close_route_detail()
