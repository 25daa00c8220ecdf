"""Unit tests for CatalogClient."""

import json
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from anime_cli.client import JSON_API_HEADERS, CatalogClient, build_search_url
from anime_cli.config import ApiConfig
from anime_cli.errors import (
    ClientError,
    DecodeError,
    InvalidQueryError,
    ServiceError,
    TransportError,
)


def _response(status_code: int = 200, **kwargs) -> httpx.Response:
    request = httpx.Request("GET", "https://kitsu.io/api/edge/anime")
    return httpx.Response(status_code, request=request, **kwargs)


def _mock_http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _bad_gzip(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip at all")


class TestBuildSearchUrl:
    @pytest.mark.parametrize(
        "query",
        [
            "cowboy bebop",
            "Re:Zero",
            "fate/stay night",
            "a+b & c=d #1",
            "100% [bracketed]",
            "進撃の巨人",
            " leading and trailing ",
        ],
    )
    def test_query_round_trips(self, query: str) -> None:
        url = build_search_url(query)

        params = parse_qs(urlsplit(str(url)).query, keep_blank_values=True)
        assert params["filter[text]"] == [query]

    def test_targets_anime_endpoint(self) -> None:
        url = build_search_url("naruto")

        assert url.scheme == "https"
        assert url.host == "kitsu.io"
        assert url.path == "/api/edge/anime"

    def test_custom_base_url(self) -> None:
        url = build_search_url("naruto", "http://localhost:9000/api/")
        assert str(url).startswith("http://localhost:9000/api/anime?")


class TestCatalogClient:
    @pytest.mark.asyncio
    async def test_returns_entries(self, bebop_payload) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.return_value = _response(json={"data": [bebop_payload]})

        entries = await CatalogClient(http).search("cowboy bebop")

        assert [e.title for e in entries] == ["Cowboy Bebop"]

    @pytest.mark.asyncio
    async def test_sends_json_api_headers(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.return_value = _response(json={"data": []})

        await CatalogClient(http).search("naruto")

        http.get.assert_called_once_with(build_search_url("naruto"), headers=JSON_API_HEADERS)
        assert JSON_API_HEADERS == {
            "Accept": "application/vnd.api+json",
            "Content-Type": "application/vnd.api+json",
        }

    @pytest.mark.asyncio
    async def test_uses_configured_base_url(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.return_value = _response(json={"data": []})
        config = ApiConfig(base_url="http://mirror.test/api")

        await CatalogClient(http, config).search("naruto")

        url = http.get.call_args.args[0]
        assert url.host == "mirror.test"

    @pytest.mark.asyncio
    async def test_empty_results(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.return_value = _response(json={"data": []})

        assert await CatalogClient(http).search("zzzz") == []

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = httpx.ConnectError("Name or service not known")

        with pytest.raises(TransportError, match="Name or service not known") as exc_info:
            await CatalogClient(http).search("naruto")
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = httpx.ReadTimeout("")

        with pytest.raises(TransportError, match="ReadTimeout"):
            await CatalogClient(http).search("naruto")

    @pytest.mark.asyncio
    async def test_error_status_raises_service_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.return_value = _response(503, text="unavailable")

        with pytest.raises(ServiceError) as exc_info:
            await CatalogClient(http).search("naruto")
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_malformed_json_raises_decode_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.return_value = _response(content=b"<html>not json</html>")

        with pytest.raises(DecodeError, match="Failed to parse anime data"):
            await CatalogClient(http).search("naruto")

    @pytest.mark.asyncio
    async def test_schema_mismatch_raises_decode_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        body = {"data": [{"id": "1", "attributes": {"canonicalTitle": "Ok"}}, {"id": 2}]}
        http.get.return_value = _response(content=json.dumps(body).encode())

        with pytest.raises(DecodeError):
            await CatalogClient(http).search("naruto")

    @pytest.mark.asyncio
    async def test_wrong_field_type_raises_decode_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        body = {"data": [{"id": 1, "attributes": {"canonicalTitle": "Numeric id"}}]}
        http.get.return_value = _response(json=body)

        with pytest.raises(DecodeError):
            await CatalogClient(http).search("naruto")

    @pytest.mark.asyncio
    async def test_errors_share_client_error_base(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = httpx.ConnectError("refused")

        with pytest.raises(ClientError):
            await CatalogClient(http).search("naruto")

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = httpx.ConnectError("refused")

        with pytest.raises(TransportError):
            await CatalogClient(http).search("naruto")
        assert http.get.call_count == 1

    @pytest.mark.asyncio
    async def test_undecodable_body_raises_decode_error(self) -> None:
        async with _mock_http(_bad_gzip) as http:
            with pytest.raises(DecodeError, match="Failed to decode") as exc_info:
                await CatalogClient(http).search("naruto")
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    @pytest.mark.asyncio
    async def test_redirect_loop_raises_transport_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = httpx.TooManyRedirects("Exceeded maximum allowed redirects.")

        with pytest.raises(TransportError, match="Exceeded maximum allowed redirects"):
            await CatalogClient(http).search("naruto")

    @pytest.mark.asyncio
    async def test_invalid_url_from_transport_raises_transport_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)
        http.get.side_effect = httpx.InvalidURL("Invalid port: 'x'")

        with pytest.raises(TransportError):
            await CatalogClient(http).search("naruto")


class TestUnencodableQueries:
    @pytest.mark.asyncio
    async def test_lone_surrogate_raises_invalid_query_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)

        with pytest.raises(InvalidQueryError, match="Cannot search for this query"):
            await CatalogClient(http).search("caf\udce9")
        http.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_overlong_query_raises_client_error(self) -> None:
        http = AsyncMock(spec=httpx.AsyncClient)

        with pytest.raises(ClientError):
            await CatalogClient(http).search("x" * 70000)
        http.get.assert_not_called()
