import json
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_RELAY_ORDER = ["direct", "corsproxy", "allorigins", "cors-anywhere"]


def _parse_list(value):
    """Accept ``a,b,c`` or a JSON list from the environment."""
    if not isinstance(value, str):
        return value
    if value.lstrip().startswith("["):
        return json.loads(value)
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Service settings loaded from environment variables.

    Every variable is prefixed with ``SHELLSCOPE_``, e.g.
    ``SHELLSCOPE_FETCH_TIMEOUT_SECONDS=5``.

    Timeouts are per network request: every HEAD hop of redirect
    resolution gets redirect_timeout and every GET of a relay route gets
    fetch_timeout. Both chains stop after max_redirects hops.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHELLSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Fetching
    fetch_timeout_seconds: float = 10.0
    redirect_timeout_seconds: float = 5.0
    min_content_length: int = 100
    # Bodies are streamed; a route that sends more than this is abandoned.
    max_content_bytes: int = 2 * 1024 * 1024
    max_redirects: int = 5
    relay_order: Annotated[list[str], NoDecode] = list(DEFAULT_RELAY_ORDER)
    block_private_hosts: bool = True
    user_agent: str = "shellscope/0.1 (+command preview)"

    @field_validator("relay_order", mode="before")
    @classmethod
    def parse_relay_order(cls, v):
        return _parse_list(v)

    # Optional YAML file that extends the package-manager / tool tables.
    registry_path: str = ""

    # CORS: comma-separated list (or JSON list) of allowed origins.
    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        return _parse_list(v)

    # Rate limiting, SlowAPI format, e.g. "10/minute", "100/hour".
    analyze_rate_limit: str = "30/minute"

    # App
    debug: bool = True


def get_settings() -> Settings:
    return Settings()
