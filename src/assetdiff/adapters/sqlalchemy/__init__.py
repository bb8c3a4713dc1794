"""SQLAlchemy adapter package for the assetdiff catalog."""

from __future__ import annotations

from .mappings import (
    catalog_metadata,
    diff_result_table,
    job_table,
    local_file_table,
    remote_asset_table,
)
from .repositories import (
    SqlAlchemyDiffResultRepository,
    SqlAlchemyJobRepository,
    SqlAlchemyLocalFileRepository,
    SqlAlchemyRemoteAssetRepository,
)
from .store import SqlAlchemyCatalogStore
from .unit_of_work import SqlAlchemyCatalogUnitOfWork

__all__ = [
    "SqlAlchemyCatalogStore",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyDiffResultRepository",
    "SqlAlchemyJobRepository",
    "SqlAlchemyLocalFileRepository",
    "SqlAlchemyRemoteAssetRepository",
    "catalog_metadata",
    "diff_result_table",
    "job_table",
    "local_file_table",
    "remote_asset_table",
]
