"""Exception types shared by the storefront client and the orders API."""
from __future__ import annotations

from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront errors."""


class OrderValidationError(StorefrontError):
    """A form field or the cart snapshot failed pre-submission checks.

    `key` is the localization key of the user-facing message.
    """

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.message = message


class BadRequestError(StorefrontError):
    """The inbound order payload is malformed or incomplete (HTTP 400)."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class DocumentStoreError(StorefrontError):
    """Reading, decoding or writing the shared orders document failed."""


class ConcurrentWriteError(DocumentStoreError):
    """The store rejected a write because the document changed since it was read."""
