from __future__ import annotations

import re
from typing import Optional

from ..config import AppConfig, get_config
from ..logging import get_logger
from .interface import ConfigSource

_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)
_PLAIN_HTTP = re.compile(r"^http://", re.IGNORECASE)


def normalize_endpoint(url: Optional[str], secure_page: bool) -> Optional[str]:
    """Return a usable HTTP(S) endpoint, or None.

    Trailing slashes are dropped, and a plain-HTTP URL is upgraded to HTTPS
    when the page itself is served over HTTPS (never the other way round).
    """
    url = (url or "").strip().rstrip("/")
    if not url or not _HTTP_URL.match(url):
        return None
    if secure_page and _PLAIN_HTTP.match(url):
        url = _PLAIN_HTTP.sub("https://", url)
    return url


class EndpointResolver:
    """Works out where orders are POSTed.

    The configured URL comes from a store configuration that may load slowly or
    not at all, so resolution waits for it, refreshes it at most once, and then
    falls back to the URL declared by the page.
    """

    def __init__(
        self,
        source: Optional[ConfigSource] = None,
        fallback_url: Optional[str] = None,
        secure_page: bool = True,
    ) -> None:
        self.source = source
        self.fallback_url = fallback_url
        self.secure_page = secure_page
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(cls, source: Optional[ConfigSource] = None, config: Optional[AppConfig] = None) -> "EndpointResolver":
        config = config or get_config()
        return cls(source=source, fallback_url=config.orders_api_url, secure_page=config.page_secure)

    async def resolve(self) -> Optional[str]:
        """Return the endpoint URL or None. Never raises."""
        try:
            url = await self._resolve()
        except Exception as exc:
            self.logger.error(f"Endpoint resolution failed, using page fallback: {exc}")
            url = self._fallback()
        if url:
            self.logger.info(f"Orders API URL resolved: {url}")
        else:
            self.logger.info("No orders API URL configured")
        return url

    async def _resolve(self) -> Optional[str]:
        if self.source is None:
            return self._fallback()

        try:
            await self.source.wait_ready()
        except Exception as exc:
            self.logger.warning(f"Configuration did not load cleanly: {exc}")

        url = self._read_configured()
        if url:
            return url

        self.logger.info("Orders API URL missing after initial load, refreshing configuration once")
        try:
            await self.source.refresh()
        except Exception as exc:
            self.logger.warning(f"Configuration refresh failed: {exc}")
            return self._fallback()

        return self._read_configured() or self._fallback()

    def _read_configured(self) -> Optional[str]:
        return normalize_endpoint(self.source.get_endpoint_url(), self.secure_page)

    def _fallback(self) -> Optional[str]:
        return normalize_endpoint(self.fallback_url, self.secure_page)
