"""Route search service behind the MCP tools.

Holds the server's session and search controller as lazily created module
singletons, and shapes controller state into response models.
"""

import datetime
import logging

from aviation_mcp.data.config import AviationConfig, get_config
from aviation_mcp.errors import AuthenticationError
from aviation_mcp.itinerary.transformer import (
    is_ground_transport,
    route_path,
    route_summary,
    segment_role_label,
    type_label,
)
from aviation_mcp.matching.location_matcher import resolve_location as _resolve_location
from aviation_mcp.matching.models import LocationResolutionResponse
from aviation_mcp.models.responses import (
    ListLocationsResponse,
    RouteCard,
    RouteDetailResponse,
    RouteGroupResult,
    SearchCriteriaInfo,
    SearchRoutesResponse,
    SessionInfo,
    StopDetail,
)
from aviation_mcp.services import location_service
from aviation_mcp.services.search_session import Failed, SearchCriteria, SearchSessionController
from aviation_mcp.services.session import Session, sign_in

logger = logging.getLogger(__name__)

# Module-level state (lazy-initialized)
_config: AviationConfig | None = None
_session: Session | None = None
_controller: SearchSessionController | None = None


def _get_config() -> AviationConfig:
    """Get or create the config singleton."""
    global _config
    if _config is None:
        _config = get_config()
    return _config


def _get_session() -> Session:
    """Get or create the session singleton."""
    global _session
    if _session is None:
        _session = Session()
    return _session


def _get_controller() -> SearchSessionController:
    """Get or create the search controller bound to the session singleton."""
    global _controller
    if _controller is None:
        _controller = SearchSessionController(_get_session())
    return _controller


def _session_info(session: Session) -> SessionInfo:
    return SessionInfo(
        authenticated=session.is_authenticated,
        username=session.username,
        role=session.role,
        is_admin=session.is_admin,
    )


async def login(username: str | None = None, password: str | None = None) -> SessionInfo:
    """Sign in, falling back to the configured credentials.

    Any previous search is discarded.

    Raises:
        AuthenticationError: If no credentials are available or they are rejected.
    """
    config = _get_config()
    username = username or config.username
    password = password or config.password
    if not username or not password:
        raise AuthenticationError("No credentials given and none configured")

    session = _get_session()
    _get_controller().reset()
    await sign_in(session, username, password, config)
    return _session_info(session)


def logout() -> SessionInfo:
    """End the session and reset the search."""
    session = _get_session()
    _get_controller().reset()
    session.clear()
    logger.info("Signed out")
    return _session_info(session)


async def _ensure_signed_in() -> Session:
    """Return the signed-in session, signing in with configured credentials if needed."""
    session = _get_session()
    if session.is_authenticated:
        return session

    config = _get_config()
    if config.username and config.password:
        await login()
        return session

    raise AuthenticationError("Not signed in - call login first")


async def list_locations(query: str | None = None, limit: int = 100) -> ListLocationsResponse:
    session = await _ensure_signed_in()
    return await location_service.list_locations(session, query=query, limit=limit)


async def resolve_location(
    query: str,
    limit: int = 5,
    min_score: float = 60.0,
) -> LocationResolutionResponse:
    session = await _ensure_signed_in()
    locations = await location_service.get_locations(session, _get_config())
    return _resolve_location(query, locations, limit=limit, min_score=min_score)


def _parse_date(value: str | None) -> str | None:
    """Return the date as YYYY-MM-DD, or None if missing or malformed."""
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(value.strip()).isoformat()
    except ValueError:
        logger.debug(f"Ignoring malformed date {value!r}")
        return None


async def _resolve_location_id(session: Session, query: str | None) -> int | None:
    """Resolve an id, code or name to a location id; None when not confidently resolved."""
    if not query:
        return None
    locations = await location_service.get_locations(session, _get_config())
    result = _resolve_location(query, locations, limit=1)
    if result.resolved and result.best_match is not None:
        return result.best_match.id
    logger.debug(f"Could not resolve location {query!r}")
    return None


def _build_search_response(controller: SearchSessionController) -> SearchRoutesResponse:
    """Shape the controller's current state for grouped presentation."""
    state = controller.state
    criteria = controller.criteria

    message = controller.validation_message
    if isinstance(state, Failed):
        message = state.message

    groups = [
        RouteGroupResult(
            group_index=group_index,
            via_label=group.via_label,
            routes=[
                RouteCard(
                    route_index=route_index,
                    summary=route_summary(route),
                    path=route_path(route),
                    segment_count=len(route.segments),
                )
                for route_index, route in enumerate(group.routes)
            ],
        )
        for group_index, group in enumerate(controller.groups)
    ]

    return SearchRoutesResponse(
        status=controller.status,
        criteria=SearchCriteriaInfo(
            origin_id=criteria.origin_id,
            destination_id=criteria.destination_id,
            date=criteria.date,
            complete=criteria.is_complete,
        ),
        groups=groups,
        route_count=len(controller.routes),
        message=message,
    )


async def search_routes(
    origin: str | None,
    destination: str | None,
    date: str | None,
) -> SearchRoutesResponse:
    """Resolve the search form inputs and run a search.

    Origin and destination accept a location id, code, or name. Inputs that
    cannot be resolved are left unset, so the search is rejected with a
    validation prompt instead of querying the API.
    """
    session = await _ensure_signed_in()
    controller = _get_controller()

    criteria = SearchCriteria(
        origin_id=await _resolve_location_id(session, origin),
        destination_id=await _resolve_location_id(session, destination),
        date=_parse_date(date),
    )
    await controller.submit_search(criteria)
    return _build_search_response(controller)


def get_search_state() -> SearchRoutesResponse:
    return _build_search_response(_get_controller())


def select_route(group_index: int, route_index: int) -> RouteDetailResponse:
    """Select a route from the current groups and describe its stops.

    Raises:
        RuntimeError: If there are no search results.
        ValueError: If the indices do not point at a route.
    """
    controller = _get_controller()
    groups = controller.groups
    if not groups:
        raise RuntimeError("No search results to select a route from")
    if not 0 <= group_index < len(groups):
        raise ValueError(f"group_index must be between 0 and {len(groups) - 1}")
    group = groups[group_index]
    if not 0 <= route_index < len(group.routes):
        raise ValueError(f"route_index must be between 0 and {len(group.routes) - 1}")

    route = group.routes[route_index]
    controller.select_route(route)

    stops = []
    for idx, stop in enumerate(controller.selected_stops()):
        is_departure = idx < len(route.segments)
        stops.append(
            StopDetail(
                name=stop.location.name,
                location_code=stop.location.location_code,
                city=stop.location.city,
                country=stop.location.country,
                transport_after=(
                    type_label(stop.transport_after) if stop.transport_after is not None else None
                ),
                segment_role=(
                    segment_role_label(route.segments[idx].segment_type) if is_departure else None
                ),
                ground_transfer=(
                    is_ground_transport(stop.transport_after)
                    if stop.transport_after is not None
                    else None
                ),
            )
        )

    return RouteDetailResponse(
        group_index=group_index,
        route_index=route_index,
        via_label=group.via_label,
        summary=route_summary(route),
        stops=stops,
    )


def close_route_detail() -> SearchRoutesResponse:
    controller = _get_controller()
    controller.select_route(None)
    return _build_search_response(controller)


def reset_service() -> None:
    """Reset the service state completely.

    Drops the session, controller and config. Useful for testing.
    """
    global _config, _session, _controller
    _config = None
    _session = None
    _controller = None
    # Clear the lru_cache on get_config so it re-reads .env/environment
    # (hasattr check handles case where function is mocked in tests)
    if hasattr(get_config, "cache_clear"):
        get_config.cache_clear()
