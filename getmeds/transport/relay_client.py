"""
Relay Client

Async HTTP access to retailer sites. Requests go through the CORS relay
when it is enabled and straight to the retailer otherwise. Every failure
(transport error or non-2xx status) surfaces as UpstreamError; callers
decide whether that aborts their contribution or degrades it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from ..common.config_loader import Settings
from ..common.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings, **kwargs) -> httpx.AsyncClient:
    """
    Create the shared async HTTP client.

    The configured timeout is the only timeout in the pipeline.

    Args:
        settings: Pipeline settings (user agent, language, timeout)
        **kwargs: Passed through to httpx.AsyncClient (e.g., transport)
    """
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
        "Accept-Language": settings.accept_language,
    }
    return httpx.AsyncClient(
        headers=headers,
        timeout=settings.request_timeout,
        follow_redirects=True,
        **kwargs,
    )


class RelayClient:
    """
    Fetches retailer content through the relay.

    Usage:
        async with create_http_client(settings) as client:
            transport = RelayClient(client, settings.relay_url, settings.use_relay)
            html = await transport.get_retailer_text("sopharmacy", search_url)
    """

    def __init__(self, client: httpx.AsyncClient, relay_url: str = "", use_relay: bool = True):
        self.client = client
        self.relay_url = relay_url
        self.use_relay = bool(use_relay and relay_url)

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: Settings) -> "RelayClient":
        return cls(client, settings.relay_url, settings.use_relay)

    async def _get(self, url: str, params: Optional[Dict[str, str]] = None) -> httpx.Response:
        """GET a URL, converting every failure into UpstreamError."""
        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Request failed: {type(e).__name__}: {e}", url=url) from e

        if not response.is_success:
            raise UpstreamError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                url=str(response.request.url),
            )
        return response

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamError(
                f"Invalid JSON response: {e}",
                status_code=response.status_code,
                url=str(response.request.url),
            ) from e

    async def _fetch_retailer(self, relay_name: str, target_url: str) -> httpx.Response:
        if self.use_relay:
            logger.debug("Relay fetch [%s]: %s", relay_name, target_url)
            return await self._get(self.relay_url, params={"pharmacy": relay_name, "url": target_url})
        logger.debug("Direct fetch: %s", target_url)
        return await self._get(target_url)

    async def get_retailer_text(self, relay_name: str, target_url: str) -> str:
        """Fetch a retailer page through the retailer-specific relay route."""
        response = await self._fetch_retailer(relay_name, target_url)
        return response.text

    async def get_retailer_json(self, relay_name: str, target_url: str) -> Any:
        """Fetch a retailer JSON document through the retailer-specific relay route."""
        response = await self._fetch_retailer(relay_name, target_url)
        return self._decode_json(response)

    async def get_proxied_json(self, target_url: str) -> Any:
        """Fetch JSON through the generic allow-listed relay route."""
        if self.use_relay:
            logger.debug("Proxy fetch: %s", target_url)
            response = await self._get(self.relay_url, params={"url": target_url})
        else:
            response = await self._get(target_url)
        return self._decode_json(response)

    async def session_search(self, relay_name: str, query: str) -> Any:
        """
        Run a relay-side stateful search (cookies + CSRF token).

        Raises:
            ConfigurationError: If the relay is disabled
            UpstreamError: If the relay or the retailer fails
        """
        if not self.use_relay:
            raise ConfigurationError(
                f"{relay_name} requires the relay; enable use_relay and set relay_url"
            )
        logger.debug("Session search [%s]: %s", relay_name, query)
        response = await self._get(self.relay_url, params={"pharmacy": relay_name, "q": query})
        return self._decode_json(response)
