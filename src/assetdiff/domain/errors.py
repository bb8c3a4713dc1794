"""Domain error taxonomy."""

from __future__ import annotations


class AssetDiffError(Exception):
    """Base class for errors raised by assetdiff."""


class CatalogError(AssetDiffError):
    """Raised for failures of the persistent catalog."""


class NotInitializedError(CatalogError):
    """Raised when the catalog store is used before ``initialize()``."""


class StorageFailureError(CatalogError):
    """Raised when the catalog cannot be opened or a transaction cannot commit."""


class ScanRootNotFoundError(AssetDiffError, FileNotFoundError):
    """Raised when the directory to scan does not exist."""


class RecordParseError(AssetDiffError, ValueError):
    """Raised for a single malformed inventory record."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class OperationInProgressError(AssetDiffError):
    """Raised when a catalog-mutating operation overlaps a running one."""


class SessionAlreadyOpenError(CatalogError, RuntimeError):
    """Raised when a unit of work is entered while its session is still open."""
