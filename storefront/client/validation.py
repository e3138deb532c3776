from __future__ import annotations

import re
from typing import Callable, List

from ..errors import OrderValidationError
from ..models import CartItem, OrderForm
from .strings import Localizer

PHONE_PATTERN = re.compile(r"[0-9+\s-]+")


def is_valid_phone(phone: str) -> bool:
    """Digits, `+`, whitespace and `-` only."""
    return bool(PHONE_PATTERN.fullmatch(phone))


def validate_order_form(
    form: OrderForm,
    cart_items: List[CartItem],
    t: Callable[[str], str] = Localizer(),
) -> None:
    """Check the form and the checkout snapshot before anything is sent.

    Checks run in a fixed order (name, phone, city, cart) and stop at the first
    failure, so the caller only ever has one message to show.

    Raises:
        OrderValidationError: carrying the localization key and the resolved message.
    """
    full_name = (form.full_name or "").strip()
    phone = (form.phone or "").strip()
    city = (form.city or "").strip()

    if not full_name:
        raise OrderValidationError("enterFullName", t("enterFullName"))
    if not phone:
        raise OrderValidationError("enterPhone", t("enterPhone"))
    if not is_valid_phone(phone):
        raise OrderValidationError("invalidPhone", t("invalidPhone"))
    if not city:
        raise OrderValidationError("enterCity", t("enterCity"))
    if not cart_items:
        raise OrderValidationError("cartEmpty", t("cartEmpty"))
