"""Search session controller.

Owns the lifecycle of a route search: the selection criteria, the search
state (idle, loading, success, empty, error), and the route selected for
detail viewing. Listeners subscribe to be told about every change.

Only the most recently submitted search may change the state. Each
submission takes a new sequence number and a result is applied only if its
number is still the latest when it arrives; older results are dropped.
There is no timeout: a query that never resolves leaves the state in Loading.
"""

import datetime
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import ClassVar, Protocol

import httpx

from aviation_mcp.data.api_client import AviationApiClient
from aviation_mcp.data.config import AviationConfig, get_config
from aviation_mcp.errors import IncompleteCriteriaError, RouteQueryError
from aviation_mcp.itinerary.transformer import build_stops, group_routes_by_via
from aviation_mcp.models.domain import Route
from aviation_mcp.models.responses import RouteGroup, SearchStatus, Stop
from aviation_mcp.services.session import Session

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please select origin, destination, and date"
QUERY_FAILED_MESSAGE = "Failed to search routes"

_UNSET = object()


def _normalize_date(value: datetime.date | str | None) -> str | None:
    """Convert a date to YYYY-MM-DD; blank strings count as unset."""
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass
class SearchCriteria:
    """Origin, destination and travel date of a search."""

    origin_id: int | None = None
    destination_id: int | None = None
    date: str | None = None  # YYYY-MM-DD

    def __post_init__(self) -> None:
        self.date = _normalize_date(self.date)

    def missing_fields(self) -> tuple[str, ...]:
        missing = []
        if self.origin_id is None:
            missing.append("origin_id")
        if self.destination_id is None:
            missing.append("destination_id")
        if self.date is None:
            missing.append("date")
        return tuple(missing)

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def require_complete(self) -> None:
        """Raise IncompleteCriteriaError unless all three fields are set."""
        missing = self.missing_fields()
        if missing:
            raise IncompleteCriteriaError(VALIDATION_MESSAGE, missing=missing)


# Search states. Exactly one holds at a time.


@dataclass(frozen=True)
class Idle:
    status: ClassVar[SearchStatus] = SearchStatus.IDLE


@dataclass(frozen=True)
class Loading:
    status: ClassVar[SearchStatus] = SearchStatus.LOADING

    request_id: int


@dataclass(frozen=True)
class Success:
    """Non-empty search result with its grouping computed once."""

    status: ClassVar[SearchStatus] = SearchStatus.SUCCESS

    routes: list[Route]
    groups: list[RouteGroup] = field(repr=False)


@dataclass(frozen=True)
class Empty:
    status: ClassVar[SearchStatus] = SearchStatus.EMPTY


@dataclass(frozen=True)
class Failed:
    status: ClassVar[SearchStatus] = SearchStatus.ERROR

    message: str


SearchState = Idle | Loading | Success | Empty | Failed


class RouteQuery(Protocol):
    """Collaborator that returns the routes for a search."""

    async def __call__(self, origin_id: int, destination_id: int, date: str) -> list[Route]: ...


class ApiRouteQuery:
    """Route query backed by the route-search API.

    Reads the session token at call time, so a cleared session stops
    authenticating subsequent queries.
    """

    def __init__(self, session: Session, config: AviationConfig | None = None):
        self._session = session
        self._config = config

    async def __call__(self, origin_id: int, destination_id: int, date: str) -> list[Route]:
        config = self._config or get_config()
        try:
            async with AviationApiClient(config, token=self._session.token) as client:
                return await client.fetch_routes(origin_id, destination_id, date)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers undecodable bodies and pydantic validation errors
            raise RouteQueryError("Route query failed", cause=e) from e


Listener = Callable[["SearchSessionController"], None]


class SearchSessionController:
    """State container for one user's route searches.

    Usage:
        controller = SearchSessionController(session)
        await controller.submit_search(SearchCriteria(1, 5, "2025-03-12"))
        for group in controller.groups:
            ...
    """

    def __init__(
        self,
        session: Session,
        route_query: RouteQuery | None = None,
        *,
        error_message: str = QUERY_FAILED_MESSAGE,
    ):
        """Initialize the controller in the Idle state.

        Args:
            session: Session the searches run under.
            route_query: Collaborator returning routes; defaults to the API.
            error_message: User-facing message for the Error state.
        """
        self._route_query: RouteQuery = route_query or ApiRouteQuery(session)
        self._error_message = error_message

        self._criteria = SearchCriteria()
        self._state: SearchState = Idle()
        self._request_seq = 0
        self._selected_route: Route | None = None
        self._validation_message: str | None = None
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def status(self) -> SearchStatus:
        return self._state.status

    @property
    def criteria(self) -> SearchCriteria:
        """A copy of the current criteria; use update_criteria to change them."""
        return replace(self._criteria)

    @property
    def routes(self) -> list[Route]:
        if isinstance(self._state, Success):
            return self._state.routes
        return []

    @property
    def groups(self) -> list[RouteGroup]:
        if isinstance(self._state, Success):
            return self._state.groups
        return []

    @property
    def selected_route(self) -> Route | None:
        return self._selected_route

    @property
    def validation_message(self) -> str | None:
        """Prompt from the last rejected submission, cleared on the next accepted one."""
        return self._validation_message

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        self._notify()

    def update_criteria(
        self,
        *,
        origin_id=_UNSET,
        destination_id=_UNSET,
        date=_UNSET,
    ) -> SearchCriteria:
        """Edit criteria fields without searching. Pass None to clear a field."""
        changes = {}
        if origin_id is not _UNSET:
            changes["origin_id"] = origin_id
        if destination_id is not _UNSET:
            changes["destination_id"] = destination_id
        if date is not _UNSET:
            changes["date"] = date

        self._criteria = replace(self._criteria, **changes)
        self._notify()
        return self.criteria

    async def submit_search(self, criteria: SearchCriteria | None = None) -> bool:
        """Validate the criteria and run a search.

        Args:
            criteria: Replaces the current criteria when given.

        Returns:
            False if the criteria were incomplete (state unchanged, no query
            issued), True once an accepted search has resolved or been
            superseded.
        """
        if criteria is not None:
            self._criteria = replace(criteria)

        try:
            self._criteria.require_complete()
        except IncompleteCriteriaError as e:
            self._validation_message = e.message
            logger.warning(f"Search rejected, missing: {', '.join(e.missing)}")
            self._notify()
            return False

        self._validation_message = None
        self._request_seq += 1
        request_id = self._request_seq
        self._selected_route = None
        self._set_state(Loading(request_id=request_id))

        origin_id = self._criteria.origin_id
        destination_id = self._criteria.destination_id
        date = self._criteria.date
        logger.debug(f"Search {request_id}: {origin_id} -> {destination_id} on {date}")

        try:
            routes = await self._route_query(origin_id, destination_id, date)
        except Exception as e:
            if request_id != self._request_seq:
                logger.debug(f"Dropping failure of superseded search {request_id}")
                return True
            logger.warning(f"Search {request_id} failed: {e}")
            self._set_state(Failed(message=self._error_message))
            return True

        if request_id != self._request_seq:
            logger.debug(f"Dropping {len(routes)} routes from superseded search {request_id}")
            return True

        if not routes:
            logger.info(f"Search {request_id} found no routes")
            self._set_state(Empty())
        else:
            routes = list(routes)
            groups = group_routes_by_via(routes)
            logger.info(f"Search {request_id} found {len(routes)} routes in {len(groups)} groups")
            self._set_state(Success(routes=routes, groups=groups))
        return True

    def select_route(self, route: Route | None) -> None:
        """Open the detail view for a route, or close it with None.

        Raises:
            RuntimeError: If there are no search results to select from.
            ValueError: If the route is not one of the current results.
        """
        if route is None:
            self._selected_route = None
            self._notify()
            return

        if not isinstance(self._state, Success):
            raise RuntimeError("No search results to select a route from")
        if route not in self._state.routes:
            raise ValueError("Route is not part of the current search results")

        self._selected_route = route
        self._notify()

    def selected_stops(self) -> list[Stop]:
        """Stops of the selected route, or [] when nothing is selected."""
        route = self._selected_route
        if route is None or not route.segments:
            return []
        return build_stops(route.segments)

    def reset(self) -> None:
        """Return to Idle and forget criteria, results and selection.

        Any search still in flight is superseded.
        """
        self._request_seq += 1
        self._criteria = SearchCriteria()
        self._selected_route = None
        self._validation_message = None
        self._set_state(Idle())
