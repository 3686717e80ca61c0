"""HTTP client for the CDISC Library metadata repository.

Wraps httpx with the ``api-key`` header, JSON decoding, and loguru-based
call logging. Failures surface as ``LibraryRequestError``; nothing is
retried and nothing is cached.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
from loguru import logger

from ctlookup.config import LibraryConfig
from ctlookup.errors import LibraryRequestError

PACKAGES_PATH = "/ct/packages"


class CDISCLibraryClient:
    """Synchronous CDISC Library API client.

    Usage::

        with CDISCLibraryClient(LibraryConfig.from_env()) as client:
            links = client.list_packages()
            payload = client.get_package("sdtmct", "2023-12-15")
    """

    def __init__(
        self,
        config: LibraryConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the underlying httpx client.

        Args:
            config: Connection settings (base URL, API key, timeout).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url,
            headers={"api-key": config.api_key, "Accept": "application/json"},
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> CDISCLibraryClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_json(self, path: str) -> Any:
        """GET a path relative to the base URL and decode the JSON body.

        Raises:
            LibraryRequestError: On transport failure, non-2xx status, or a
                body that is not valid JSON.
        """
        start = time.monotonic()
        try:
            response = self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise LibraryRequestError(
                f"CDISC Library returned HTTP {status} for {e.request.url}"
                + (" (check the API key)" if status in (401, 403) else ""),
                url=str(e.request.url),
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            raise LibraryRequestError(
                f"Could not reach CDISC Library at {e.request.url}: {e}",
                url=str(e.request.url),
            ) from e

        logger.info(
            "CDISC Library GET {path} | status={status} latency={lat:.2f}s",
            path=path,
            status=response.status_code,
            lat=time.monotonic() - start,
        )

        try:
            return response.json()
        except ValueError as e:
            raise LibraryRequestError(
                f"CDISC Library response for {response.url} is not valid JSON",
                url=str(response.url),
                status_code=response.status_code,
            ) from e

    def list_packages(self) -> list[dict[str, Any]]:
        """Return the package links from the CT package listing.

        Each link is a dict with at least an ``href`` key, e.g.
        ``{"href": "/mdr/ct/packages/sdtmct-2023-12-15", "title": "..."}``.
        """
        payload = self.get_json(PACKAGES_PATH)
        if not isinstance(payload, dict):
            raise LibraryRequestError(
                "CT package listing is not a JSON object", url=PACKAGES_PATH
            )
        links = (payload.get("_links") or {}).get("packages") or []
        return [link for link in links if isinstance(link, dict)]

    def get_package(self, api_id: str, version: str) -> Any:
        """Return the raw JSON of one CT package, e.g. ``sdtmct-2023-12-15``."""
        return self.get_json(f"{PACKAGES_PATH}/{api_id}-{version}")
