from aviation_mcp.app import mcp
from aviation_mcp.models.responses import SessionInfo
from aviation_mcp.services.route_search_service import login as _login
from aviation_mcp.services.route_search_service import logout as _logout


@mcp.tool()
async def login(username: str | None = None, password: str | None = None) -> SessionInfo:
    """Sign in to the route-search API.

    When username and password are omitted, the credentials configured in
    AVIATION_USERNAME / AVIATION_PASSWORD are used. Signing in discards any
    previous search.

    Args:
        username: Account name.
        password: Account password.

    Returns:
        SessionInfo with the signed-in user and role.
    """
    return await _login(username=username, password=password)


@mcp.tool()
def logout() -> SessionInfo:
    """Sign out and clear the current search, results and selected route."""
    return _logout()
