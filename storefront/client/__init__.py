from .checkout import format_order_items, open_order_view, proceed_to_checkout
from .config_source import RemoteConfigSource
from .coordinator import SubmissionCoordinator, SubmissionResult, SubmissionState
from .local_store import JsonFileDraftStore
from .resolver import EndpointResolver, normalize_endpoint
from .strings import DEFAULT_STRINGS, Localizer
from .submitter import OrderSubmitter
from .validation import validate_order_form

__all__ = [
    "SubmissionCoordinator",
    "SubmissionResult",
    "SubmissionState",
    "EndpointResolver",
    "normalize_endpoint",
    "OrderSubmitter",
    "validate_order_form",
    "RemoteConfigSource",
    "JsonFileDraftStore",
    "Localizer",
    "DEFAULT_STRINGS",
    "proceed_to_checkout",
    "open_order_view",
    "format_order_items",
]
