"""Reference data for the search form: the locations a user can pick from."""

import logging

from aviation_mcp.data.api_client import AviationApiClient
from aviation_mcp.data.config import AviationConfig, get_config
from aviation_mcp.models.domain import Location
from aviation_mcp.models.responses import ListLocationsResponse, LocationOption
from aviation_mcp.services.session import Session

logger = logging.getLogger(__name__)


def location_option_label(location: Location) -> str:
    """Label used in origin/destination pickers, e.g. "Istanbul Airport (IST)"."""
    return f"{location.name} ({location.location_code})"


def _location_to_option(location: Location) -> LocationOption:
    return LocationOption(
        id=location.id,
        name=location.name,
        city=location.city,
        country=location.country,
        location_code=location.location_code,
        label=location_option_label(location),
    )


async def get_locations(
    session: Session,
    config: AviationConfig | None = None,
    force_refresh: bool = False,
) -> list[Location]:
    """Fetch locations, cached on the session.

    Locations do not change within a session, so the API is called at most
    once per sign-in unless force_refresh is set.

    Raises:
        AuthenticationError: If the session is not signed in.
        httpx.HTTPError: If the HTTP request fails.
    """
    session.require_authenticated()

    if not force_refresh and session.locations is not None:
        logger.debug(f"Using {len(session.locations)} cached locations")
        return session.locations

    config = config or get_config()
    async with AviationApiClient(config, token=session.token) as client:
        locations = await client.fetch_locations()

    session.locations = locations
    logger.debug(f"Fetched {len(locations)} locations")
    return locations


async def list_locations(
    session: Session,
    query: str | None = None,
    limit: int = 100,
) -> ListLocationsResponse:
    """List locations as picker options, optionally filtered by a substring.

    The filter matches case-insensitively against the option label, city and
    country.
    """
    locations = await get_locations(session)

    options = [_location_to_option(location) for location in locations]
    if query:
        needle = query.strip().lower()
        options = [
            option
            for option in options
            if needle in option.label.lower()
            or needle in option.city.lower()
            or needle in option.country.lower()
        ]

    options = options[:limit]
    return ListLocationsResponse(locations=options, count=len(options))
