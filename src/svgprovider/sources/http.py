"""Async HTTP source wrapping httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from svgprovider.config.defaults import DEFAULT_HTTP_TIMEOUT
from svgprovider.errors.exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)


class HttpSvgClient:
    """Fetches SVG markup with a plain GET.

    Owns its AsyncClient unless one is injected; injected clients are left
    open on close().
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    async def get_text(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        try:
            response = await self._client.get(url, headers=dict(headers or {}))
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(
                f"Request to {url} failed: {exc}",
                error_type="transport",
                locator=url,
                original=exc,
            ) from exc

        if not response.is_success:
            raise SourceUnavailableError(
                f"GET {url} returned HTTP {response.status_code}",
                error_type="bad_status",
                locator=url,
                http_status=response.status_code,
            )

        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return response.text

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
