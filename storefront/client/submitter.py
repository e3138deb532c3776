from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import requests
from pydantic import BaseModel

from ..config import get_config
from ..logging import get_logger
from .resolver import normalize_endpoint

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def serialize_order(order: Any) -> str:
    """Encode an order as the compact JSON body the orders API expects."""
    if isinstance(order, BaseModel):
        return order.model_dump_json(by_alias=True)
    return json.dumps(order, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


class OrderSubmitter:
    """POSTs orders to the orders API.

    The HTTP status is the only success signal: any 2xx counts as accepted,
    whatever the body looks like. Every failure (bad URL, encoding error,
    transport error, non-2xx status) comes back as False.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        secure_page: Optional[bool] = None,
    ) -> None:
        config = get_config()
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.request_timeout_seconds
        self.secure_page = config.page_secure if secure_page is None else secure_page
        self.logger = get_logger(__name__)

    async def submit(self, url: str, order: Any) -> bool:
        try:
            return await self._submit(url, order)
        except Exception as exc:
            self.logger.exception(f"Orders API submit failed unexpectedly: {exc}")
            return False

    async def _submit(self, url: str, order: Any) -> bool:
        endpoint = normalize_endpoint(url, self.secure_page)
        if not endpoint:
            self.logger.warning(f"No valid orders API URL: {url!r}")
            return False

        try:
            body = serialize_order(order)
        except (TypeError, ValueError) as exc:
            self.logger.error(f"Order could not be encoded: {exc}")
            return False

        self.logger.info(f"Request: POST {endpoint} body length: {len(body)}")
        try:
            response = await asyncio.to_thread(
                self.session.post,
                endpoint,
                data=body.encode("utf-8"),
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except (requests.RequestException, OSError) as exc:
            self.logger.error(f"Orders API request failed (network/other): {exc}")
            return False

        self.logger.info(
            f"Response: {response.status_code} {response.reason} "
            f"Content-Type: {response.headers.get('Content-Type')}"
        )
        self._log_body(response)

        if not 200 <= response.status_code <= 299:
            self.logger.error(f"Orders API error {response.status_code}: {response.text[:300]}")
            return False
        self.logger.info("Orders API success")
        return True

    def _log_body(self, response: requests.Response) -> None:
        text = response.text or ""
        try:
            parsed = json.loads(text) if text else {}
            self.logger.debug(f"Response body: {parsed}")
        except ValueError:
            self.logger.debug(f"Response body (raw): {text[:200] or '(empty)'}")
