from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from ..logging import get_logger
from ..models import CartItem
from .interface import ORDER_VIEW, PRODUCTS_VIEW, CartProvider, DraftStore, Presenter
from .strings import Localizer

logger = get_logger(__name__)


def proceed_to_checkout(
    cart: CartProvider,
    drafts: DraftStore,
    presenter: Presenter,
    t: Callable[[str], str] = Localizer(),
) -> bool:
    """Snapshot the cart for the order page and go there. Returns False for an empty cart."""
    items = list(cart.items() or [])
    if not items:
        presenter.alert(t("cartEmptyCheckout"))
        return False
    try:
        drafts.save_checkout_cart(items)
    except Exception as exc:
        # The order page re-checks the snapshot and bounces back if it is missing.
        logger.warning(f"Saving checkout cart failed: {exc}")
    presenter.navigate(ORDER_VIEW)
    return True


def open_order_view(
    drafts: DraftStore,
    presenter: Presenter,
    t: Callable[[str], str] = Localizer(),
) -> Optional[List[CartItem]]:
    """Entry guard for the order page: the snapshot to render, or None after redirecting."""
    try:
        items = list(drafts.load_checkout_cart())
    except Exception as exc:
        logger.warning(f"Reading checkout cart failed: {exc}")
        items = []
    if not items:
        presenter.alert(t("cartEmptyRedirect"))
        presenter.navigate(PRODUCTS_VIEW)
        return None
    return items


def format_order_items(items: Iterable[CartItem], currency: str = "MAD") -> str:
    return "\n".join(
        f"{item.name} - Size: {item.size}, Color: {item.color}, "
        f"Quantity: {item.quantity}, Price: {item.line_total} {currency}"
        for item in items or []
    )
