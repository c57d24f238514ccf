import httpx
from pydantic import TypeAdapter

from aviation_mcp.data.config import AviationConfig
from aviation_mcp.models.domain import AuthResult, Location, Route

_locations_adapter = TypeAdapter(list[Location])
_routes_adapter = TypeAdapter(list[Route])


class AviationApiClient:
    """Async HTTP client for the route-search API.

    Usage:
        async with AviationApiClient(config, token=session.token) as client:
            routes = await client.fetch_routes(1, 5, "2025-03-12")
    """

    def __init__(self, config: AviationConfig, token: str | None = None):
        """Initialize the client.

        Args:
            config: Configuration with the API base URL and endpoint paths.
            token: Bearer token of the signed-in session, if any.
        """
        self._config = config
        self._token = token
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "AviationApiClient":
        """Enter async context - create HTTP client."""
        headers = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.AsyncClient(
            headers=headers, timeout=self._config.request_timeout_seconds
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")
        return self._client

    async def login(self, username: str, password: str) -> AuthResult:
        """Exchange credentials for a bearer token.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails or credentials are rejected.
        """
        client = self._require_client()
        response = await client.post(
            self._config.url(self._config.login_path),
            json={"username": username, "password": password},
        )
        response.raise_for_status()
        return AuthResult.model_validate(response.json())

    async def fetch_locations(self) -> list[Location]:
        """Fetch the locations available for route search.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
            pydantic.ValidationError: If the payload is not a list of locations.
        """
        client = self._require_client()
        response = await client.get(self._config.url(self._config.locations_path))
        response.raise_for_status()
        return _locations_adapter.validate_python(response.json())

    async def fetch_routes(self, origin_id: int, destination_id: int, date: str) -> list[Route]:
        """Fetch all routes between two locations on a date.

        Args:
            origin_id: Origin location ID.
            destination_id: Destination location ID.
            date: Travel date in YYYY-MM-DD format.

        Returns:
            Routes in the order the service returned them.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
            pydantic.ValidationError: If the payload is not a list of routes.
        """
        client = self._require_client()
        response = await client.get(
            self._config.url(self._config.routes_path),
            params={"originId": origin_id, "destinationId": destination_id, "date": date},
        )
        response.raise_for_status()
        return _routes_adapter.validate_python(response.json())
