"""MCP application instance.

This module exists to avoid circular import issues when running with `python -m`.
All tool modules should import `mcp` from here, not from server.py.
"""

from mcp.server.fastmcp import FastMCP

# Initialize the MCP server
mcp = FastMCP(
    "Aviation Routes",
    instructions=(
        "Search multi-modal flight routes between two locations on a date, "
        "grouped by the airport the flight departs from, with stop-by-stop details"
    ),
)
