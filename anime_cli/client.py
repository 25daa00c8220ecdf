"""Kitsu catalog search client."""

import logging

import httpx
from pydantic import ValidationError

from anime_cli.config import ApiConfig
from anime_cli.errors import DecodeError, InvalidQueryError, ServiceError, TransportError
from anime_cli.models import CatalogEntry, SearchResponse

logger = logging.getLogger(__name__)

JSON_API_MEDIA_TYPE = "application/vnd.api+json"

JSON_API_HEADERS = {
    "Accept": JSON_API_MEDIA_TYPE,
    "Content-Type": JSON_API_MEDIA_TYPE,
}


def build_search_url(query: str, base_url: str = ApiConfig().base_url) -> httpx.URL:
    """Build the anime search URL for a free-text query.

    The query is passed through as-is; the catalog defines matching semantics.
    """
    return httpx.URL(f"{base_url.rstrip('/')}/anime", params={"filter[text]": query})


def create_http_client(config: ApiConfig) -> httpx.AsyncClient:
    """HTTP client used for catalog requests."""
    return httpx.AsyncClient(timeout=config.timeout)


class CatalogClient:
    """Searches the catalog with one GET per call. No caching, no retries."""

    def __init__(self, http_client: httpx.AsyncClient, config: ApiConfig | None = None) -> None:
        self._http = http_client
        self._config = config or ApiConfig()

    async def search(self, query: str) -> list[CatalogEntry]:
        """Search the catalog by text.

        Args:
            query: Free-text search string.

        Returns:
            Matching entries in the order the catalog returned them.

        Raises:
            TransportError: The request could not be sent or got no response.
            ServiceError: The catalog answered with an error status.
            DecodeError: The body is not valid JSON or does not match the schema.
            InvalidQueryError: The query cannot be put into a URL.
        """
        try:
            url = build_search_url(query, self._config.base_url)
        except (UnicodeEncodeError, httpx.InvalidURL) as e:
            raise InvalidQueryError(f"Cannot search for this query: {e}") from e
        logger.debug("GET %s", url)

        try:
            response = await self._http.get(url, headers=JSON_API_HEADERS)
        except httpx.DecodingError as e:
            raise DecodeError(f"Failed to decode Kitsu response body: {e}") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.debug("Kitsu request failed: %r", e)
            raise TransportError(
                f"Failed to send request to Kitsu API: {str(e) or type(e).__name__}"
            ) from e

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.debug(
                "Kitsu search failed: status=%d, body=%s",
                e.response.status_code,
                e.response.text,
            )
            raise ServiceError(
                f"Kitsu API returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e

        try:
            document = SearchResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"Failed to parse anime data: {e}") from e

        logger.info("Search %r returned %d entries", query, len(document.data))
        return document.data
