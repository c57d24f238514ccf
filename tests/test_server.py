"""Tests for the MCP server, health tool and search CLI."""

from unittest.mock import AsyncMock, patch

import pytest

from aviation_mcp import __version__
from aviation_mcp.errors import AuthenticationError
from aviation_mcp.models.responses import (
    RouteCard,
    RouteGroupResult,
    SearchCriteriaInfo,
    SearchRoutesResponse,
    SearchStatus,
)
from aviation_mcp.server import health, run_search
from aviation_mcp.services.search_session import VALIDATION_MESSAGE


def test_health_returns_ok_status():
    """Health check should return status ok."""
    response = health()
    assert response.status == "ok"


def test_health_returns_version():
    """Health check should return the current version."""
    response = health()
    assert response.version == __version__


def test_health_returns_timestamp():
    """Health check should return a valid ISO timestamp."""
    response = health()
    assert response.timestamp is not None
    # Should be parseable as ISO format
    assert "T" in response.timestamp


# =============================================================================
# CLI search
# =============================================================================


def _search_response(**kwargs) -> SearchRoutesResponse:
    return SearchRoutesResponse(
        criteria=SearchCriteriaInfo(origin_id=1, destination_id=4, date="2025-03-12"),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_run_search_prints_groups(capsys):
    response = _search_response(
        status=SearchStatus.SUCCESS,
        route_count=1,
        groups=[
            RouteGroupResult(
                group_index=0,
                via_label="Via Istanbul Airport (IST)",
                routes=[
                    RouteCard(
                        route_index=0,
                        summary="BUS → FLIGHT",
                        path="Taksim Square → Bus → Istanbul Airport → Flight → Heathrow Airport",
                        segment_count=2,
                    )
                ],
            )
        ],
    )

    with patch(
        "aviation_mcp.services.route_search_service.search_routes",
        AsyncMock(return_value=response),
    ):
        await run_search("Taksim", "LHR", "2025-03-12")

    output = capsys.readouterr().out
    assert "1 routes found" in output
    assert "Via Istanbul Airport (IST)" in output
    assert "[0.0] Taksim Square → Bus" in output


@pytest.mark.asyncio
async def test_run_search_prints_validation_prompt(capsys):
    response = _search_response(status=SearchStatus.IDLE, message=VALIDATION_MESSAGE)

    with patch(
        "aviation_mcp.services.route_search_service.search_routes",
        AsyncMock(return_value=response),
    ):
        await run_search("Atlantis", "LHR", "2025-03-12")

    assert f"idle: {VALIDATION_MESSAGE}" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_search_reports_sign_in_failure(capsys):
    with patch(
        "aviation_mcp.services.route_search_service.search_routes",
        AsyncMock(side_effect=AuthenticationError("Not signed in - call login first")),
    ):
        await run_search("IST", "LHR", "2025-03-12")

    assert "error: Not signed in" in capsys.readouterr().out
