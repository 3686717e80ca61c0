"""CDISC Library connection settings.

Settings come from explicit arguments first, then the environment:

    CDISC_API_KEY          API key sent in the ``api-key`` header (required)
    CDISC_LIBRARY_URL      Base URL of the MDR API
    CDISC_LIBRARY_TIMEOUT  Request timeout in seconds
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from ctlookup.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.library.cdisc.org/api/mdr"
DEFAULT_TIMEOUT = 30.0


class LibraryConfig(BaseModel):
    """Connection settings for the CDISC Library API."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="MDR API base URL")
    api_key: str = Field(..., min_length=1, description="CDISC Library API key")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Timeout in seconds")

    @classmethod
    def from_env(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
    ) -> LibraryConfig:
        """Build a config from arguments, falling back to environment variables.

        Raises:
            ConfigurationError: If no API key is available or the timeout is not a number.
        """
        key = api_key or os.environ.get("CDISC_API_KEY")
        if not key:
            raise ConfigurationError(
                "CDISC_API_KEY environment variable is not set. "
                "Set it with: export CDISC_API_KEY=<your key>, or pass --api-key."
            )

        raw_timeout = os.environ.get("CDISC_LIBRARY_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(
                f"CDISC_LIBRARY_TIMEOUT must be a number of seconds, got '{raw_timeout}'"
            ) from e

        return cls(
            base_url=base_url or os.environ.get("CDISC_LIBRARY_URL") or DEFAULT_BASE_URL,
            api_key=key,
            timeout=timeout,
        )
