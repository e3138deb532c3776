from .cart import CartItem
from .orders import OrderDraft, OrderForm, iso_timestamp
from .responses import OrderAccepted, OrderError

__all__ = [
    # Client-side models
    "CartItem",
    "OrderForm",
    "OrderDraft",
    "iso_timestamp",
    # Orders API response bodies
    "OrderAccepted",
    "OrderError",
]
