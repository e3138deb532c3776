# storefront/client/interface.py
from __future__ import annotations

from typing import Awaitable, List, Optional, Protocol, Union

from ..models import CartItem, OrderDraft


# ---- Views the presenter can navigate to ----

LANDING_VIEW = "./"
ORDER_VIEW = "./order.html"
PRODUCTS_VIEW = "./products.html"


# ---- Collaborator protocols ----

class CartProvider(Protocol):
    """Live shopping cart owned by the storefront pages."""

    def items(self) -> List[CartItem]:
        """Current cart lines."""
        ...

    def total(self) -> Union[int, float]:
        """Current cart total."""
        ...

    def clear(self) -> None:
        """Reset the cart after an order went through."""
        ...


class ConfigSource(Protocol):
    """
    Store configuration that carries the orders API URL.

    The first load may still be in progress when a submission starts, and it can
    fail on slow connections; `refresh()` performs one more load.
    """

    async def wait_ready(self) -> None:
        """Return once the initial load has finished, successfully or not."""
        ...

    def get_endpoint_url(self) -> Optional[str]:
        ...

    async def refresh(self) -> None:
        ...


class DraftStore(Protocol):
    """Local persistence: the "current cart" checkout slot and the append-only orders list."""

    def load_checkout_cart(self) -> List[CartItem]:
        ...

    def save_checkout_cart(self, items: List[CartItem]) -> None:
        ...

    def clear_checkout_cart(self) -> None:
        ...

    def append_order(self, order: OrderDraft) -> Optional[Awaitable[None]]:
        """Persist one order; may be a coroutine. Raises on failure."""
        ...


class Presenter(Protocol):
    """User-facing side effects of the checkout page."""

    def alert(self, message: str) -> None:
        ...

    def set_submit_control(self, enabled: bool, label: str) -> None:
        ...

    def navigate(self, view: str) -> None:
        ...


class Resolver(Protocol):
    async def resolve(self) -> Optional[str]:
        ...


class Submitter(Protocol):
    async def submit(self, url: str, order: OrderDraft) -> bool:
        ...
