"""Application services moving inventories through the catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from assetdiff.domain.projection import DiffSummary, summarize_results
from assetdiff.domain.reconciliation import compute_diff

if TYPE_CHECKING:
    from collections.abc import Iterable

    from assetdiff.domain.model import DiffResult, LocalFile, RemoteAsset
    from assetdiff.domain.ports.persistence import CatalogStore

log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileResult:
    """Outcome of one diff run for a source."""

    source_name: str
    remote_count: int
    local_count: int
    results: list[DiffResult] = field(default_factory=list)

    @property
    def summary(self) -> DiffSummary:
        return summarize_results(self.source_name, self.results)


def replace_local_inventory(store: CatalogStore, files: Iterable[LocalFile]) -> int:
    """Make ``files`` the complete local inventory."""

    return store.replace_local_files(files)


def import_remote_inventory(store: CatalogStore, assets: Iterable[RemoteAsset]) -> int:
    """Insert or overwrite remote assets by key."""

    return store.upsert_remote_assets(assets)


def reconcile_source(store: CatalogStore, source_name: str) -> ReconcileResult:
    """Diff the stored remote assets of ``source_name`` against the local inventory."""

    remote_assets = store.load_remote_assets(source_name)
    local_files = store.load_local_files()
    log.info(
        "Loaded %s remote assets and %s local files for %s",
        len(remote_assets),
        len(local_files),
        source_name,
    )

    results = compute_diff(remote_assets, local_files)
    store.save_diff_results(results)

    return ReconcileResult(
        source_name=source_name,
        remote_count=len(remote_assets),
        local_count=len(local_files),
        results=results,
    )
