from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AviationConfig(BaseSettings):
    """Configuration for the route-search API.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_base_url: str = Field(default="http://localhost:8080/api", alias="AVIATION_API_URL")
    request_timeout_seconds: float = Field(default=30.0, alias="AVIATION_API_TIMEOUT")

    # credentials used by the CLI and auto sign-in
    username: str | None = Field(default=None, alias="AVIATION_USERNAME")
    password: str | None = Field(default=None, alias="AVIATION_PASSWORD")

    login_path: str = "/auth/login"
    locations_path: str = "/routes/locations"
    routes_path: str = "/routes"

    def url(self, path: str) -> str:
        """Join the API base URL with an endpoint path."""
        return f"{self.api_base_url.rstrip('/')}/{path.lstrip('/')}"


@lru_cache
def get_config() -> AviationConfig:
    """Get API configuration (cached singleton).

    Returns:
        AviationConfig with values from .env file or environment variables.
    """
    return AviationConfig()
