"""
Orders API request handling.

POST appends the order to the shared orders document (newest first) with a
read-modify-write against the document store. The write carries the
concurrency token obtained by the read, so a concurrent submission makes the
write fail with a retryable error instead of silently dropping an order.

Every response, errors and the pre-flight included, carries permissive CORS
headers so the storefront can post from any origin.
"""
from __future__ import annotations

import json
import time
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urlparse

from ..config import AppConfig, get_config
from ..errors import BadRequestError, ConcurrentWriteError, DocumentStoreError
from ..logging import get_logger
from ..models import OrderAccepted, OrderError
from .github import GitHubContentsStore
from .interface import DocumentStore, ParsedRequest, Response

logger = get_logger(__name__)

StoreFactory = Callable[[AppConfig], DocumentStore]
Clock = Callable[[], float]

ORDERS_KEY = "orders"
DEFAULT_STATUS = "pending"
REQUIRED_ANY_OF = ("fullName", "phone")
CONFLICT_RETRY_AFTER_SECONDS = 1


# ---- CORS ----

def request_origin(request: ParsedRequest) -> str:
    """Origin header, else the origin of the Referer, else `*`."""
    origin = request.header("origin")
    if origin:
        return origin
    referer = request.header("referer")
    if referer:
        parsed = urlparse(referer)
        if parsed.scheme and parsed.netloc:
            return f"{parsed.scheme}://{parsed.netloc}"
    return "*"


def cors_headers(origin: Optional[str]) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Accept",
        "Access-Control-Max-Age": "86400",
    }


# ---- Body parsing and validation ----

def parse_body(raw: Any) -> Any:
    """Decode the request body.

    Accepts an already-decoded dict or JSON text (str or bytes). Blank text is an
    empty object; None stays None so the caller can reject it as a non-object.

    Raises:
        BadRequestError: for malformed JSON or an unsupported body type.
    """
    if raw is None or isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BadRequestError("Invalid JSON body", detail=str(exc)) from exc
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise BadRequestError("Invalid JSON body", detail=str(exc)) from exc
    raise BadRequestError("Invalid JSON body", detail=f"Unsupported body type: {type(raw).__name__}")


def validate_order(order: Any) -> Dict[str, Any]:
    if not isinstance(order, dict):
        raise BadRequestError("Request body must be a JSON object")
    if not any(order.get(name) for name in REQUIRED_ANY_OF):
        raise BadRequestError(
            "Order must include fullName and phone",
            detail=f"missing fields: {', '.join(REQUIRED_ANY_OF)}",
        )
    return order


def assign_identity(order: Dict[str, Any], clock: Clock = time.time) -> Tuple[Dict[str, Any], bool]:
    """Return a copy with `id` and `status` filled in, and whether the id was generated here."""
    order = dict(order)
    generated = not order.get("id")
    if generated:
        order["id"] = f"ord-{int(clock() * 1000)}"
    else:
        order["id"] = str(order["id"])
    if not order.get("status"):
        order["status"] = DEFAULT_STATUS
    return order, generated


# ---- Orders document ----

def decode_document(content: Optional[str]) -> Dict[str, Any]:
    if content is None or not content.strip():
        return {}
    try:
        document = json.loads(content)
    except ValueError as exc:
        raise DocumentStoreError(f"Orders document is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise DocumentStoreError("Orders document is not a JSON object")
    return document


def merge_order(document: Dict[str, Any], order: Dict[str, Any], disambiguate: bool = True) -> Dict[str, Any]:
    """Prepend `order` to the document's orders list, normalizing a missing or non-list field to empty.

    With `disambiguate`, an id already present in the document gets a numeric
    suffix (`ord-123-2`, `ord-123-3`, ...). The order dict is updated in place.
    """
    orders = document.get(ORDERS_KEY)
    if not isinstance(orders, list):
        orders = []

    if disambiguate:
        taken = {existing.get("id") for existing in orders if isinstance(existing, dict)}
        base_id, suffix = order["id"], 2
        while order["id"] in taken:
            order["id"] = f"{base_id}-{suffix}"
            suffix += 1

    merged = dict(document)
    merged[ORDERS_KEY] = [order] + orders
    return merged


def encode_document(document: Dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


# ---- Handler ----

class OrdersHandler:
    """Turns one ParsedRequest into one Response; never raises."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        store_factory: Optional[StoreFactory] = None,
        clock: Clock = time.time,
    ) -> None:
        self.config = config or get_config()
        self.store_factory = store_factory or GitHubContentsStore.from_config
        self.clock = clock

    def handle(self, request: ParsedRequest) -> Response:
        origin = request_origin(request)
        method = (request.method or "").upper()

        if method == "OPTIONS":
            return Response(status=204, headers=cors_headers(origin))
        if method != "POST":
            return self._error(origin, 405, "Method not allowed")

        user_agent = request.header("user-agent") or "(none)"
        logger.info(
            f"POST request origin={origin} userAgent={user_agent[:80]} "
            f"contentType={request.header('content-type')}"
        )

        if not self.config.github_configured:
            logger.error("Missing env: GITHUB_TOKEN, GITHUB_OWNER, or GITHUB_REPO")
            return self._error(origin, 500, "Orders API not configured (missing env)")

        try:
            order = validate_order(parse_body(request.body))
        except BadRequestError as exc:
            logger.error(f"Rejected order: {exc.message} ({exc.detail or 'no detail'})")
            return self._error(origin, 400, exc.message, detail=exc.detail)

        order, generated = assign_identity(order, self.clock)
        logger.info(f"Order accepted id={order['id']} fullName={order.get('fullName')} phone={order.get('phone')}")

        try:
            order_id = self._append(order, generated)
            body = OrderAccepted(id=order_id).model_dump()
        except ConcurrentWriteError as exc:
            logger.warning(f"Concurrent update while saving order {order['id']}: {exc}")
            return self._error(
                origin, 500, "Order conflicted with a concurrent update, please retry",
                detail=str(exc),
                headers={"Retry-After": str(CONFLICT_RETRY_AFTER_SECONDS)},
            )
        except Exception as exc:
            logger.error(f"Error saving order {order['id']}: {exc}")
            return self._error(origin, 500, "Failed to save order", detail=str(exc))

        logger.info(f"Order saved {order_id}")
        return Response(
            status=200,
            headers=cors_headers(origin),
            body=body,
        )

    def _append(self, order: Dict[str, Any], generated: bool) -> str:
        path = self.config.orders_document_path
        store = self.store_factory(self.config)
        stored = store.read(path)
        document = merge_order(decode_document(stored.content), order, disambiguate=generated)
        store.write(path, encode_document(document), stored.sha, f"Add order {order['id']}")
        return order["id"]

    @staticmethod
    def _error(
        origin: str,
        status: int,
        message: str,
        detail: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Response:
        response_headers = cors_headers(origin)
        response_headers.update(headers or {})
        return Response(status=status, headers=response_headers, body=OrderError(error=message, detail=detail).to_body())


def handle(
    request: ParsedRequest,
    config: Optional[AppConfig] = None,
    store_factory: Optional[StoreFactory] = None,
    clock: Clock = time.time,
) -> Response:
    """Handle one orders API request."""
    return OrdersHandler(config=config, store_factory=store_factory, clock=clock).handle(request)
