from __future__ import annotations

import httpx
import pytest

from seecat_enrichment.catalog import CategoryCatalogClient
from seecat_enrichment.core.exceptions import UpstreamFetchError, UpstreamTimeoutError


def _client(settings, handler) -> CategoryCatalogClient:
    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="https://catalog.test/api/")
    return CategoryCatalogClient(settings, client=http)


def test_fetch_category_sends_id_query(settings, spring_schema):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=spring_schema)

    with _client(settings, handler) as client:
        payload = client.fetch_category("MC-0107")

    assert payload == spring_schema
    assert seen[0].url.path == "/api/material_categories/get"
    assert seen[0].url.params["id"] == "MC-0107"


def test_fetch_without_id_lists_all_categories(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        assert "id" not in request.url.params
        return httpx.Response(200, json={"data": []})

    with _client(settings, handler) as client:
        assert client.fetch_category() == {"data": []}


def test_timeout_is_retryable(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with _client(settings, handler) as client, pytest.raises(UpstreamTimeoutError) as excinfo:
        client.fetch_category("MC-0107")
    assert excinfo.value.retryable is True
    assert excinfo.value.status_code == 504


@pytest.mark.parametrize("status", [404, 500, 503])
def test_non_2xx_is_upstream_fetch_error(settings, status):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"message": "nope"})

    with _client(settings, handler) as client, pytest.raises(UpstreamFetchError) as excinfo:
        client.fetch_category("MC-0107")
    assert not isinstance(excinfo.value, UpstreamTimeoutError)
    assert excinfo.value.retryable is False
    assert excinfo.value.to_payload()["kind"] == "upstream_fetch"


def test_connection_failure_is_upstream_fetch_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with _client(settings, handler) as client, pytest.raises(UpstreamFetchError):
        client.fetch_category("MC-0107")


def test_non_json_body_is_upstream_fetch_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with _client(settings, handler) as client, pytest.raises(UpstreamFetchError):
        client.fetch_category("MC-0107")
