from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..config import get_config
from ..logging import get_logger
from ..models import CartItem, OrderDraft

CHECKOUT_CART_KEY = "checkoutCart"
ORDERS_KEY = "orders"


class JsonFileDraftStore:
    """
    Local draft store kept in a single JSON file.

    Holds one "current cart" slot (the checkout snapshot) and an append-only list
    of orders, newest first, that could not be delivered to the orders API.
    A missing or unreadable file behaves as an empty store.
    """

    def __init__(self, path: str | Path = None) -> None:
        if path is None:
            path = get_config().local_store_path
        self.path = Path(path)
        self.logger = get_logger(__name__)

    # ---------- file helpers ----------

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as exc:
            self.logger.warning(f"Local store unreadable, starting empty: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    # ---------- checkout snapshot ----------

    def load_checkout_cart(self) -> List[CartItem]:
        raw = self._read().get(CHECKOUT_CART_KEY) or []
        try:
            return [CartItem.model_validate(item) for item in raw]
        except (TypeError, ValidationError) as exc:
            self.logger.warning(f"Checkout cart snapshot invalid, ignoring: {exc}")
            return []

    def save_checkout_cart(self, items: List[CartItem]) -> None:
        data = self._read()
        data[CHECKOUT_CART_KEY] = [item.model_dump() for item in items]
        self._write(data)

    def clear_checkout_cart(self) -> None:
        data = self._read()
        if data.pop(CHECKOUT_CART_KEY, None) is not None:
            self._write(data)

    # ---------- orders ----------

    def append_order(self, order: OrderDraft) -> None:
        data = self._read()
        orders = data.get(ORDERS_KEY)
        if not isinstance(orders, list):
            orders = []
        orders.insert(0, order.to_payload())
        data[ORDERS_KEY] = orders
        self._write(data)
        self.logger.info(f"Order saved to local store {self.path}")

    def list_orders(self, limit: Optional[int] = None) -> List[dict]:
        orders = self._read().get(ORDERS_KEY)
        if not isinstance(orders, list):
            return []
        return orders[:limit] if limit else orders
