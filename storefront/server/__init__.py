from .github import GitHubContentsStore
from .handler import OrdersHandler, handle
from .interface import DocumentStore, ParsedRequest, Response, StoredDocument

__all__ = [
    "handle",
    "OrdersHandler",
    "GitHubContentsStore",
    "DocumentStore",
    "ParsedRequest",
    "Response",
    "StoredDocument",
]
