"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    CatalogStore,
    DiffResultRepository,
    JobRepository,
    LocalFileRepository,
    RemoteAssetRepository,
)
from .scanning import LocalFileScanner
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogRepositories",
    "CatalogStore",
    "CatalogUnitOfWork",
    "DiffResultRepository",
    "JobRepository",
    "LocalFileRepository",
    "LocalFileScanner",
    "RemoteAssetRepository",
    "RepositoryCollection",
    "UnitOfWork",
]
