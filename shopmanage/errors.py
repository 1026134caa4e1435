"""Errors raised by the product store.

Every failure of a store operation is surfaced as one of these, tagged with
the operation name. Transport and decoding errors are chained as ``cause``.
"""

from typing import Optional


class StoreError(Exception):
    """Base class for product store failures."""

    def __init__(self, operation: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.operation = operation
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ValidationError(StoreError):
    """A draft or patch failed local checks; nothing was sent."""


class FetchError(StoreError):
    """Reading the product collection failed."""


class NotFoundError(StoreError):
    """The catalog has no product with the requested id."""

    def __init__(self, operation: str, product_id: int, cause: Optional[BaseException] = None):
        super().__init__(operation, f"Product with id '{product_id}' not found", cause)
        self.product_id = product_id


class SyncError(StoreError):
    """A create, update, delete or single read failed at transport or status level."""
