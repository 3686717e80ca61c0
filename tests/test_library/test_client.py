"""Tests for CDISCLibraryClient (no real network calls)."""

from __future__ import annotations

import httpx
import pytest

from ctlookup.config import LibraryConfig
from ctlookup.errors import LibraryRequestError
from ctlookup.library.client import CDISCLibraryClient


def _client(handler) -> CDISCLibraryClient:
    config = LibraryConfig(base_url="https://library.test/api/mdr", api_key="k-123")
    return CDISCLibraryClient(config, transport=httpx.MockTransport(handler))


class TestGetJson:
    def test_sends_api_key_and_accept_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        with _client(handler) as client:
            assert client.get_json("/ct/packages") == {"ok": True}
        assert seen[0].headers["api-key"] == "k-123"
        assert seen[0].headers["accept"] == "application/json"
        assert str(seen[0].url) == "https://library.test/api/mdr/ct/packages"

    def test_http_error_carries_status(self) -> None:
        with _client(lambda r: httpx.Response(404)) as client:
            with pytest.raises(LibraryRequestError) as exc_info:
                client.get_json("/ct/packages/sdtmct-1900-01-01")
        assert exc_info.value.status_code == 404
        assert exc_info.value.url.endswith("/ct/packages/sdtmct-1900-01-01")

    def test_forbidden_mentions_api_key(self) -> None:
        with _client(lambda r: httpx.Response(403)) as client:
            with pytest.raises(LibraryRequestError, match="check the API key"):
                client.get_json("/ct/packages")

    def test_transport_error_has_no_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(LibraryRequestError, match="Could not reach") as exc_info:
                client.get_json("/ct/packages")
        assert exc_info.value.status_code is None

    def test_invalid_json(self) -> None:
        with _client(lambda r: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(LibraryRequestError, match="not valid JSON"):
                client.get_json("/ct/packages")


class TestListPackages:
    def test_returns_links(self, listing_payload: dict) -> None:
        with _client(lambda r: httpx.Response(200, json=listing_payload)) as client:
            links = client.list_packages()
        assert len(links) == 8
        assert links[0]["href"] == "/mdr/ct/packages/sdtmct-2022-01-01"

    def test_missing_links_is_empty(self) -> None:
        with _client(lambda r: httpx.Response(200, json={})) as client:
            assert client.list_packages() == []

    def test_non_object_listing_raises(self) -> None:
        with _client(lambda r: httpx.Response(200, json=[1, 2])) as client:
            with pytest.raises(LibraryRequestError):
                client.list_packages()


class TestGetPackage:
    def test_path(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"codelists": []})

        with _client(handler) as client:
            client.get_package("qs-ftct", "2022-06-24")
        assert seen == ["/api/mdr/ct/packages/qs-ftct-2022-06-24"]
