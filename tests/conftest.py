"""Shared fixtures: CDISC Library payloads and a client backed by httpx.MockTransport."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ctlookup.config import LibraryConfig
from ctlookup.library.client import CDISCLibraryClient

BASE_URL = "https://library.test/api/mdr"


@pytest.fixture
def listing_payload() -> dict[str, Any]:
    """A CT package listing as returned by GET /ct/packages."""
    return {
        "_links": {
            "self": {"href": "/mdr/ct/packages", "type": "Terminology"},
            "packages": [
                {"href": "/mdr/ct/packages/sdtmct-2022-01-01", "title": "SDTM CT 2022-01-01"},
                {"href": "/mdr/ct/packages/adamct-2024-03-29", "title": "ADaM CT 2024-03-29"},
                {"href": "/mdr/ct/packages/sdtmct-2023-06-15", "title": "SDTM CT 2023-06-15"},
                {"href": "/mdr/ct/packages/qs-ftct-2022-06-24", "title": "QS-FT CT 2022-06-24"},
                {"href": "/mdr/ct/packages/sdtmct-2021-12-31", "title": "SDTM CT 2021-12-31"},
                {"href": "/mdr/ct/packages/define-xmlct-2023-03-31", "title": "Define-XML CT"},
                {"href": "/mdr/ct/packages/unknownct-2024-01-01", "title": "Not a standard"},
                {"href": "/mdr/ct/packages/sdtmct-latest", "title": "Malformed date"},
            ],
        }
    }


@pytest.fixture
def package_payload() -> dict[str, Any]:
    """A small SDTM CT package, shaped like the CDISC Library JSON."""
    return {
        "name": "SDTM CT 2023-12-01",
        "effectiveDate": "2023-12-01",
        "codelists": [
            {
                "conceptId": "C66781",
                "submissionValue": "AGEU",
                "name": "Age Unit",
                "extensible": "false",
                "terms": [
                    {
                        "conceptId": "C29848",
                        "submissionValue": "YEARS",
                        "preferredTerm": "Year",
                        "definition": "The period of time for the earth to orbit the sun.",
                    },
                    {
                        "conceptId": "C29844",
                        "submissionValue": "WEEKS",
                        "preferredTerm": "Week",
                        "definition": "Any period of seven consecutive days.",
                    },
                ],
            },
            {
                "conceptId": "C71620",
                "submissionValue": "UNIT",
                "name": "Unit",
                "extensible": "true",
                "terms": [
                    {"conceptId": "C28253", "submissionValue": "mg", "preferredTerm": "Milligram"},
                    {"conceptId": "C48155", "submissionValue": "g", "preferredTerm": "Gram"},
                    {"conceptId": "C28254", "submissionValue": "mL", "preferredTerm": "Milliliter"},
                ],
            },
            {
                "conceptId": "C99999",
                "submissionValue": "EMPTYCL",
                "name": "Codelist Without Terms",
                "extensible": "false",
                "terms": [],
            },
        ],
    }


@pytest.fixture
def make_client(
    listing_payload: dict[str, Any], package_payload: dict[str, Any]
) -> Callable[..., tuple[CDISCLibraryClient, list[httpx.Request]]]:
    """Factory for a client whose requests are served from the payload fixtures.

    Packages are keyed by path segment (e.g. ``sdtmct-2023-12-01``); unknown
    packages return 404. Every request is recorded in the returned list.
    """

    def _factory(
        packages: dict[str, Any] | None = None,
        listing: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> tuple[CDISCLibraryClient, list[httpx.Request]]:
        served = packages if packages is not None else {"sdtmct-2023-12-01": package_payload}
        served_listing = listing if listing is not None else listing_payload
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if status_code is not None:
                return httpx.Response(status_code, json={"message": "error"})
            path = request.url.path
            if path == "/api/mdr/ct/packages":
                return httpx.Response(200, json=served_listing)
            name = path.rsplit("/", 1)[-1]
            if path.startswith("/api/mdr/ct/packages/") and name in served:
                return httpx.Response(200, json=served[name])
            return httpx.Response(404, json={"message": "Not Found"})

        config = LibraryConfig(base_url=BASE_URL, api_key="test-key")
        client = CDISCLibraryClient(config, transport=httpx.MockTransport(handler))
        return client, requests

    return _factory
