from aviation_mcp.app import mcp
from aviation_mcp.matching.models import LocationResolutionResponse
from aviation_mcp.models.responses import ListLocationsResponse
from aviation_mcp.services.route_search_service import list_locations as _list_locations
from aviation_mcp.services.route_search_service import resolve_location as _resolve_location


@mcp.tool()
async def list_locations(query: str | None = None, limit: int = 100) -> ListLocationsResponse:
    """List locations available as route search origin or destination.

    Args:
        query: Optional case-insensitive filter on name, code, city or country.
        limit: Maximum number of locations to return (1-500, default 100).

    Returns:
        ListLocationsResponse with picker options labelled "Name (CODE)".
    """
    limit = max(1, min(500, limit))
    return await _list_locations(query=query, limit=limit)


@mcp.tool()
async def resolve_location(
    query: str,
    limit: int = 5,
    min_score: float = 60.0,
) -> LocationResolutionResponse:
    """Resolve a location code, id, or name to matching locations.

    Resolution strategy (priority order):
    1. Exact location code (e.g., "IST", case-insensitive) -> confidence=EXACT
    2. Exact location id (e.g., "12") -> confidence=EXACT
    3. Fuzzy match on name, city and country -> confidence based on score

    Args:
        query: Search query - code, id, or name.
        limit: Maximum number of matches to return (default 5, max 20).
        min_score: Minimum match score 0-100 (default 60).

    Returns:
        LocationResolutionResponse with matches, best_match and resolved flag.
    """
    limit = max(1, min(20, limit))
    min_score = max(0.0, min(100.0, min_score))

    return await _resolve_location(query=query, limit=limit, min_score=min_score)
