# storefront/server/interface.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol


# ---- Request / response passed across the framework boundary ----

@dataclass
class ParsedRequest:
    """Framework-independent view of an inbound HTTP request."""
    method: str
    headers: Dict[str, str] = field(default_factory=dict)
    # dict (already decoded), str/bytes (raw JSON text) or None (no body)
    body: Any = None

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default


@dataclass
class Response:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None


@dataclass
class StoredDocument:
    """Raw document text plus the concurrency token it was read at.

    `content` is None when the document does not exist yet; writing it then
    creates the document.
    """
    content: Optional[str]
    sha: Optional[str] = None


# ---- Remote document store ----

class DocumentStore(Protocol):
    """
    Remote key-value document store holding the shared orders document.

    Implementations raise DocumentStoreError on failure, and ConcurrentWriteError
    when `sha` no longer matches the stored document.
    """

    def read(self, path: str) -> StoredDocument:
        ...

    def write(self, path: str, content: str, sha: Optional[str], message: str) -> None:
        ...
