import argparse
import asyncio
import logging
from datetime import UTC, datetime

from pydantic import BaseModel

from aviation_mcp.app import mcp


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the aviation MCP server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from aviation_mcp import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


def _register_tools() -> None:
    """Import tool modules so their @mcp.tool() decorators run."""
    from aviation_mcp.tools import auth_tools, location_tools, route_tools  # noqa: F401


async def run_search(origin: str, destination: str, date: str) -> None:
    """Run one search with the configured credentials and print the groups."""
    from aviation_mcp.errors import AviationError
    from aviation_mcp.models.responses import SearchStatus
    from aviation_mcp.services import route_search_service

    try:
        result = await route_search_service.search_routes(origin, destination, date)
    except AviationError as e:
        print(f"\nerror: {e.message}")
        return

    if result.status != SearchStatus.SUCCESS:
        print(f"\n{result.status.value}: {result.message or 'No routes found'}")
        return

    print(f"\n{result.route_count} routes found:")
    for group in result.groups:
        print(f"\n{group.via_label}")
        for card in group.routes:
            print(f"  [{group.group_index}.{card.route_index}] {card.path}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="aviation-mcp",
        description="Aviation Routes MCP Server",
    )
    subparsers = parser.add_subparsers(dest="command")

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Search routes once and print them grouped by via-airport",
    )
    search_parser.add_argument("origin", help="Origin location id, code, or name")
    search_parser.add_argument("destination", help="Destination location id, code, or name")
    search_parser.add_argument("date", help="Travel date (YYYY-MM-DD)")
    search_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.command == "search":
        # Configure logging
        log_level = logging.DEBUG if args.verbose else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        asyncio.run(run_search(args.origin, args.destination, args.date))
    else:
        # Default: run MCP server
        _register_tools()
        mcp.run()


if __name__ == "__main__":
    main()
