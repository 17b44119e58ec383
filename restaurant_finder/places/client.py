"""Places search HTTP client."""

from __future__ import annotations

import asyncio
import logging
import re
from urllib.parse import unquote

import httpx
from pydantic import ValidationError

from ..errors import MalformedUpstreamResponse, SearchUnavailable
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig
from .models import PlacesSearchResponse, SearchPage

logger = logging.getLogger(__name__)

_CURSOR_RE = re.compile(r"[?&]cursor=([^&>;\s]+)")

# Diagnostic only; callers always see the generic SearchUnavailable message.
_STATUS_MESSAGES: dict[int, str] = {
    401: "Invalid Foursquare API key. Please check credentials.",
    403: "Access to this resource is forbidden.",
    404: "The requested endpoint does not exist.",
    405: "Method not allowed for this endpoint.",
    409: "Conflict in request. Modify your query and try again.",
}


def describe_status(response: httpx.Response) -> str:
    message = _STATUS_MESSAGES.get(response.status_code)
    if message:
        return f"Foursquare API Error: {message}"
    return f"Foursquare API Error: {response.status_code} {response.reason_phrase}"


def extract_next_cursor(link_header: str | None) -> str | None:
    """Return the ``cursor`` token from a ``link`` header, or None on the last page."""
    if not link_header:
        return None
    match = _CURSOR_RE.search(link_header)
    if not match:
        return None
    return unquote(match.group(1))


class PlacesClient:
    """HTTP client for the Foursquare Places search endpoint."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        config: PlacesConfig = DEFAULT_PLACES_CONFIG,
    ) -> None:
        """Initialize with a shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            config: Credentials, endpoint and per-call deadline
        """
        self._client = http_client
        self._config = config

    async def search(self, params: dict[str, str], cursor: str | None = None) -> SearchPage:
        """Fetch one page of places.

        Args:
            params: Query-string parameters from ``build_search_parameters``
            cursor: Continuation token from a previous page, if any

        Returns:
            SearchPage with validated results and the next cursor (None on the
            last page)

        Raises:
            SearchUnavailable: On transport errors, timeouts and non-2xx statuses
            MalformedUpstreamResponse: When the body fails schema validation
        """
        query = dict(params)
        if cursor:
            query["cursor"] = cursor

        headers = {
            "Accept": "application/json",
            "Authorization": self._config.api_key,
        }

        logger.debug("Searching places", extra={"params": query})

        try:
            response = await asyncio.wait_for(
                self._client.get(self._config.search_url, params=query, headers=headers),
                timeout=self._config.timeout,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Foursquare API Error: no response within %.1fs", self._config.timeout)
            raise SearchUnavailable("search timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Foursquare API Error: %s", exc)
            raise SearchUnavailable("transport error") from exc

        if not response.is_success:
            logger.error(describe_status(response))
            raise SearchUnavailable(f"status {response.status_code}")

        next_cursor = extract_next_cursor(response.headers.get("link"))

        try:
            body = PlacesSearchResponse.model_validate_json(response.content)
        except ValidationError as exc:
            logger.error("Malformed Foursquare response: %s", exc)
            raise MalformedUpstreamResponse("response failed validation") from exc

        logger.info(
            "Fetched places",
            extra={"result_count": len(body.results), "has_next": next_cursor is not None},
        )

        return SearchPage(results=body.results, next_cursor=next_cursor)
