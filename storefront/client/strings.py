from __future__ import annotations

from typing import Callable, Dict, Optional

DEFAULT_STRINGS: Dict[str, str] = {
    "orderSuccess": "Order submitted successfully! We will contact you soon.",
    "orderSaveError": "Order could not be saved. Please try again or contact us directly.",
    "orderBuildError": "Unable to build order. Please try again.",
    "confirmOrder": "Confirm Order",
    "submitting": "Submitting...",
    "enterFullName": "Please enter your full name",
    "enterPhone": "Please enter your phone number",
    "invalidPhone": "Please enter a valid phone number",
    "enterCity": "Please enter your city",
    "cartEmpty": "Your cart is empty. Please add products before checkout.",
    "cartEmptyCheckout": "Your cart is empty",
    "cartEmptyRedirect": "Your cart is empty. Redirecting to products...",
}

Translate = Callable[[str], Optional[str]]


class Localizer:
    """Resolves message keys through an optional translation function.

    Keys the translation function does not know (or returns empty for) fall back
    to DEFAULT_STRINGS, and unknown keys fall back to the key itself.
    """

    def __init__(self, translate: Optional[Translate] = None, defaults: Optional[Dict[str, str]] = None) -> None:
        self._translate = translate
        self._defaults = dict(DEFAULT_STRINGS)
        if defaults:
            self._defaults.update(defaults)

    def __call__(self, key: str) -> str:
        if self._translate is not None:
            translated = self._translate(key)
            if translated:
                return translated
        return self._defaults.get(key, key)
