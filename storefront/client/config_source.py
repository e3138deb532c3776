from __future__ import annotations

import asyncio
from typing import Optional

import requests

from ..config import get_config
from ..logging import get_logger

ORDERS_API_URL_KEY = "ordersApiUrl"


class RemoteConfigSource:
    """Store configuration document fetched over HTTP.

    The document is the shared store data JSON; only its `ordersApiUrl` field
    matters here. The first `wait_ready()` performs the initial load, and a
    failed load leaves the previous values in place.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        config = get_config()
        self.url = url if url is not None else config.store_data_url
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.request_timeout_seconds
        self.logger = get_logger(__name__)
        self._data: dict = {}
        self._loaded = False
        self._lock = asyncio.Lock()

    async def wait_ready(self) -> None:
        if self._loaded:
            return
        async with self._lock:
            if not self._loaded:
                await self._load()
                self._loaded = True

    async def refresh(self) -> None:
        await self._load()

    def get_endpoint_url(self) -> Optional[str]:
        value = self._data.get(ORDERS_API_URL_KEY)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    async def _load(self) -> None:
        if not self.url:
            self.logger.debug("No store data URL configured")
            return
        try:
            response = await asyncio.to_thread(
                self.session.get,
                self.url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            self.logger.warning(f"Loading store data from {self.url} failed: {exc}")
            return
        if isinstance(data, dict):
            self._data = data
            self.logger.debug(f"Store data loaded from {self.url}")
        else:
            self.logger.warning(f"Store data at {self.url} is not a JSON object")
