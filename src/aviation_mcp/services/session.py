"""Explicit API session: credentials and per-session reference data.

A Session is created at sign-in and cleared at sign-out. It is passed by
reference to whatever needs the bearer token, so clearing it takes effect
on the next request.
"""

import logging
from dataclasses import dataclass

import httpx

from aviation_mcp.data.api_client import AviationApiClient
from aviation_mcp.data.config import AviationConfig, get_config
from aviation_mcp.errors import AuthenticationError
from aviation_mcp.models.domain import AuthResult, Location

logger = logging.getLogger(__name__)

ADMIN_ROLE = "ADMIN"


@dataclass
class Session:
    """Signed-in user state for the route-search API."""

    token: str | None = None
    username: str | None = None
    role: str | None = None
    locations: list[Location] | None = None  # fetched once per session

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def start(self, auth: AuthResult) -> None:
        """Populate the session from a successful login."""
        self.token = auth.token
        self.username = auth.username
        self.role = auth.role
        self.locations = None

    def clear(self) -> None:
        """Forget credentials and cached reference data."""
        self.token = None
        self.username = None
        self.role = None
        self.locations = None

    def require_authenticated(self) -> None:
        if not self.is_authenticated:
            raise AuthenticationError("Not signed in - call login first")


async def sign_in(
    session: Session,
    username: str,
    password: str,
    config: AviationConfig | None = None,
) -> Session:
    """Log in against the API and start the session.

    Raises:
        AuthenticationError: If the API rejects the credentials.
        httpx.HTTPError: For transport failures.
    """
    config = config or get_config()

    try:
        async with AviationApiClient(config) as client:
            auth = await client.login(username, password)
    except httpx.HTTPStatusError as e:
        logger.warning(f"Login rejected for {username}: HTTP {e.response.status_code}")
        raise AuthenticationError("Invalid username or password", cause=e) from e

    session.start(auth)
    logger.info(f"Signed in as {auth.username} ({auth.role})")
    return session
