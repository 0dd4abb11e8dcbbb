"""Client configuration."""

import os

from pydantic import BaseModel, Field, field_validator

from vultr import __version__

DEFAULT_BASE_URL = "https://api.vultr.com"


class ClientConfig(BaseModel):
    """
    Connection settings for the Vultr API.

    Timeout and worker count are handed to the transport and the executor
    as-is. The engine enforces neither.
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Origin every request path is appended to",
    )
    api_key_header: str = Field(
        default="API-Key",
        description="Header carrying the credential",
        min_length=1,
    )
    timeout_seconds: float | None = Field(
        default=None,
        description="Transport timeout; None waits indefinitely",
        gt=0,
    )
    max_workers: int | None = Field(
        default=None,
        description="Thread pool size for non-blocking calls; None uses the executor default",
        ge=1,
    )
    user_agent: str = Field(
        default=f"vultr-python/{__version__}",
        description="User-Agent header value",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        if not value:
            raise ValueError("base_url is required")
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build config from VULTR_* environment variables, defaults otherwise."""
        values = {}

        base_url = os.getenv("VULTR_API_URL")
        if base_url:
            values["base_url"] = base_url

        timeout = os.getenv("VULTR_TIMEOUT")
        if timeout:
            values["timeout_seconds"] = float(timeout)

        max_workers = os.getenv("VULTR_MAX_WORKERS")
        if max_workers:
            values["max_workers"] = int(max_workers)

        return cls(**values)
