"""Exceptions raised by the catalog sync collaborators."""

from typing import Optional


class CatalogSyncError(Exception):
    """Base class for errors raised by this service."""


class RecordStoreError(CatalogSyncError):
    """The WooCommerce record store could not answer a lookup."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnknownHookError(CatalogSyncError):
    """A hook name nothing is subscribed to."""


class MalformedHookError(CatalogSyncError):
    """Hook arguments that do not match the documented shape."""
