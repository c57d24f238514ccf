"""Tests for the route-search API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from aviation_mcp.data.api_client import AviationApiClient
from aviation_mcp.data.config import AviationConfig
from aviation_mcp.models.domain import SegmentType, TransportationType


def create_locations_response() -> list[dict]:
    """Create a sample locations response for testing."""
    return [
        {"id": 1, "name": "Taksim Square", "country": "Turkey", "city": "Istanbul", "locationCode": "CCIST"},
        {"id": 2, "name": "Istanbul Airport", "country": "Turkey", "city": "Istanbul", "locationCode": "IST"},
        {"id": 4, "name": "Heathrow", "country": "UK", "city": "London", "locationCode": "LHR"},
    ]


def create_routes_response() -> list[dict]:
    """Create a sample routes response: one bus+flight route, one flight-only route."""
    taksim, ist, lhr = create_locations_response()
    return [
        {
            "segments": [
                {"transportationId": 7, "type": "BUS", "from": taksim, "to": ist, "segmentType": "BEFORE_FLIGHT"},
                {"transportationId": 3, "type": "FLIGHT", "from": ist, "to": lhr, "segmentType": "FLIGHT"},
            ]
        },
        {
            "segments": [
                {"transportationId": 3, "type": "FLIGHT", "from": ist, "to": lhr, "segmentType": "FLIGHT"},
            ]
        },
    ]


@pytest.fixture
def config() -> AviationConfig:
    """Create a test config."""
    return AviationConfig(AVIATION_API_URL="https://example.com/api/")


def _mock_http(mock_client_class, payload, method: str = "get") -> AsyncMock:
    mock_response = MagicMock()
    mock_response.json.return_value = payload

    mock_client = AsyncMock()
    setattr(mock_client, method, AsyncMock(return_value=mock_response))
    mock_client_class.return_value = mock_client
    return mock_client


@pytest.mark.asyncio
async def test_fetch_routes_parses_json(config: AviationConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _mock_http(mock_client_class, create_routes_response())

        async with AviationApiClient(config, token="abc") as client:
            routes = await client.fetch_routes(1, 4, "2025-03-12")

    assert len(routes) == 2
    first = routes[0]
    assert [s.type for s in first.segments] == [TransportationType.BUS, TransportationType.FLIGHT]
    assert first.segments[0].from_location.location_code == "CCIST"
    assert first.segments[1].segment_type == SegmentType.FLIGHT
    assert len(routes[1].segments) == 1

    mock_client.get.assert_awaited_once_with(
        "https://example.com/api/routes",
        params={"originId": 1, "destinationId": 4, "date": "2025-03-12"},
    )


@pytest.mark.asyncio
async def test_fetch_routes_rejects_malformed_payload(config: AviationConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        _mock_http(mock_client_class, [{"segments": [{"type": "BUS"}]}])

        async with AviationApiClient(config) as client:
            with pytest.raises(ValidationError):
                await client.fetch_routes(1, 4, "2025-03-12")


@pytest.mark.asyncio
async def test_fetch_locations_parses_json(config: AviationConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _mock_http(mock_client_class, create_locations_response())

        async with AviationApiClient(config, token="abc") as client:
            locations = await client.fetch_locations()

    assert [loc.location_code for loc in locations] == ["CCIST", "IST", "LHR"]
    mock_client.get.assert_awaited_once_with("https://example.com/api/routes/locations")


@pytest.mark.asyncio
async def test_login_posts_credentials(config: AviationConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _mock_http(
            mock_client_class,
            {"token": "jwt", "username": "agency", "role": "AGENCY"},
            method="post",
        )

        async with AviationApiClient(config) as client:
            auth = await client.login("agency", "secret")

    assert auth.token == "jwt"
    assert auth.role == "AGENCY"
    mock_client.post.assert_awaited_once_with(
        "https://example.com/api/auth/login",
        json={"username": "agency", "password": "secret"},
    )


@pytest.mark.asyncio
async def test_client_requires_async_context(config: AviationConfig):
    """Test that client methods fail without async context."""
    client = AviationApiClient(config)

    with pytest.raises(RuntimeError, match="Client not initialized"):
        await client.fetch_routes(1, 4, "2025-03-12")


@pytest.mark.asyncio
async def test_client_sets_bearer_header(config: AviationConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        _mock_http(mock_client_class, [])

        async with AviationApiClient(config, token="jwt-token") as client:
            await client.fetch_locations()

        mock_client_class.assert_called_once()
        call_kwargs = mock_client_class.call_args.kwargs
        assert call_kwargs["headers"]["Authorization"] == "Bearer jwt-token"
        assert call_kwargs["timeout"] == 30.0


@pytest.mark.asyncio
async def test_client_without_token_sends_no_auth_header(config: AviationConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        _mock_http(mock_client_class, [])

        async with AviationApiClient(config) as client:
            await client.fetch_locations()

        assert "Authorization" not in mock_client_class.call_args.kwargs["headers"]


@pytest.mark.asyncio
async def test_client_closed_on_exit(config: AviationConfig):
    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = _mock_http(mock_client_class, [])

        async with AviationApiClient(config) as client:
            await client.fetch_locations()

    mock_client.aclose.assert_awaited_once()


def test_config_url_joins_paths():
    config = AviationConfig(AVIATION_API_URL="http://localhost:8080/api/")
    assert config.url("/routes") == "http://localhost:8080/api/routes"
    assert config.url("routes/locations") == "http://localhost:8080/api/routes/locations"
