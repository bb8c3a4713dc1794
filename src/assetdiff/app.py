"""Application orchestration entry points."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from assetdiff.adapters.filesystem import scan_local_files
from assetdiff.adapters.jsonl import read_remote_assets, write_diff_results, write_remote_assets
from assetdiff.adapters.sqlalchemy import SqlAlchemyCatalogStore
from assetdiff.config import (
    ReconcileConfig,
    get_database_config,
    get_reconcile_config,
    require_local_root,
)
from assetdiff.domain.data_integration import (
    ReconcileResult,
    import_remote_inventory,
    reconcile_source,
    replace_local_inventory,
)
from assetdiff.domain.errors import OperationInProgressError, StorageFailureError
from assetdiff.domain.model import JobStatus, JobType
from assetdiff.domain.projection import DiffSummary, load_summary

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from assetdiff.domain.model import JobRun
    from assetdiff.domain.ports.persistence import CatalogStore
    from assetdiff.domain.ports.scanning import LocalFileScanner


log = getLogger(__name__)


class OperationGuard:
    """Allows one catalog-mutating operation at a time for whoever owns the guard."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: str | None = None

    @property
    def current(self) -> str | None:
        return self._current

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise OperationInProgressError(
                f"Cannot start {operation} while {self._current} is running"
            )
        self._current = operation
        try:
            yield
        finally:
            self._current = None
            self._lock.release()


# Shared by every operation in the process unless a caller passes its own guard.
DEFAULT_GUARD = OperationGuard()


@dataclass(slots=True)
class ScanOutcome:
    root: Path
    files_scanned: int


@dataclass(slots=True)
class ImportOutcome:
    source_name: str
    imported: int
    skipped: int


@dataclass(slots=True)
class ExportOutcome:
    source_name: str
    path: Path
    written: int


@dataclass(slots=True)
class _JobDetail:
    text: str | None = None


@contextmanager
def _catalog(store: CatalogStore | None, database_path: Path | None) -> Iterator[CatalogStore]:
    if store is not None:
        store.initialize()
        yield store
        return
    database_uri = get_database_config(database_path=database_path).uri
    owned = SqlAlchemyCatalogStore(database_uri=database_uri)
    try:
        owned.initialize()
        yield owned
    finally:
        owned.dispose()


@contextmanager
def _tracked_job(
    store: CatalogStore,
    job_type: JobType,
    *,
    source_name: str | None = None,
) -> Iterator[_JobDetail]:
    job_id = store.record_job_started(job_type, source_name=source_name)
    detail = _JobDetail()
    try:
        yield detail
    except Exception as exc:
        try:
            store.record_job_finished(job_id, JobStatus.FAILED, detail=str(exc))
        except StorageFailureError:
            log.warning("Could not record failure of %s job %s", job_type, job_id)
        raise
    store.record_job_finished(job_id, JobStatus.SUCCEEDED, detail=detail.text)


def _source_name(source_name: str | None, config: ReconcileConfig | None) -> str:
    if source_name and source_name.strip():
        return source_name.strip()
    return (config or get_reconcile_config()).source_name


def scan_local(
    *,
    root: Path | None = None,
    config: ReconcileConfig | None = None,
    store: CatalogStore | None = None,
    database_path: Path | None = None,
    guard: OperationGuard | None = None,
    scanner: LocalFileScanner = scan_local_files,
) -> ScanOutcome:
    """Scan the local tree and replace the local inventory with what was found."""

    effective_config = config or get_reconcile_config()
    scan_root = root or require_local_root(effective_config)
    with (guard or DEFAULT_GUARD).hold("scan"), _catalog(store, database_path) as catalog:
        log.info("Starting local scan of %s", scan_root)
        with _tracked_job(catalog, JobType.SCAN) as job:
            files = scanner(scan_root, ignore_patterns=effective_config.ignore_patterns)
            stored = replace_local_inventory(catalog, files)
            job.text = f"{stored} files"
    log.info("Finished local scan: stored=%s", stored)
    return ScanOutcome(root=scan_root, files_scanned=stored)


def import_remote(
    *,
    inventory: Path | Iterable[str],
    source_name: str | None = None,
    config: ReconcileConfig | None = None,
    store: CatalogStore | None = None,
    database_path: Path | None = None,
    guard: OperationGuard | None = None,
) -> ImportOutcome:
    """Import a JSONL remote inventory, upserting assets by key."""

    effective_source = _source_name(source_name, config)
    with (
        (guard or DEFAULT_GUARD).hold("import"),
        _catalog(store, database_path) as catalog,
        _tracked_job(catalog, JobType.IMPORT, source_name=effective_source) as job,
    ):
        log.info("Starting remote import for source %s", effective_source)
        batch = read_remote_assets(inventory, default_source=effective_source)
        imported = import_remote_inventory(catalog, batch.assets)
        job.text = f"{imported} assets, {batch.skipped} lines skipped"
    log.info("Finished remote import: imported=%s, skipped=%s", imported, batch.skipped)
    return ImportOutcome(source_name=effective_source, imported=imported, skipped=batch.skipped)


def run_diff(
    *,
    source_name: str | None = None,
    config: ReconcileConfig | None = None,
    store: CatalogStore | None = None,
    database_path: Path | None = None,
    guard: OperationGuard | None = None,
) -> ReconcileResult:
    """Reconcile one source against the local inventory and store the verdicts."""

    effective_source = _source_name(source_name, config)
    with (
        (guard or DEFAULT_GUARD).hold("diff"),
        _catalog(store, database_path) as catalog,
        _tracked_job(catalog, JobType.DIFF, source_name=effective_source) as job,
    ):
        log.info("Starting diff for source %s", effective_source)
        result = reconcile_source(catalog, effective_source)
        summary = result.summary
        job.text = (
            f"present={summary.present}, missing={summary.missing}, "
            f"uncertain={summary.uncertain}"
        )
    log.info(
        "Finished diff: present=%s, missing=%s, uncertain=%s",
        summary.present,
        summary.missing,
        summary.uncertain,
    )
    return result


def export_report(
    *,
    out: Path,
    source_name: str | None = None,
    config: ReconcileConfig | None = None,
    store: CatalogStore | None = None,
    database_path: Path | None = None,
    guard: OperationGuard | None = None,
) -> ExportOutcome:
    """Write the latest diff results of a source to a JSONL file."""

    effective_source = _source_name(source_name, config)
    with (
        (guard or DEFAULT_GUARD).hold("report"),
        _catalog(store, database_path) as catalog,
        _tracked_job(catalog, JobType.REPORT, source_name=effective_source) as job,
    ):
        results = catalog.load_latest_diff_results(effective_source)
        written = write_diff_results(out, results)
        job.text = f"{written} results to {out}"
    log.info("Report for %s written to %s (%s results)", effective_source, out, written)
    return ExportOutcome(source_name=effective_source, path=out, written=written)


def export_remote_inventory(
    *,
    out: Path,
    source_name: str | None = None,
    config: ReconcileConfig | None = None,
    store: CatalogStore | None = None,
    database_path: Path | None = None,
    guard: OperationGuard | None = None,
) -> ExportOutcome:
    """Write the stored remote assets of a source to a JSONL file."""

    effective_source = _source_name(source_name, config)
    with (
        (guard or DEFAULT_GUARD).hold("export"),
        _catalog(store, database_path) as catalog,
        _tracked_job(catalog, JobType.REPORT, source_name=effective_source) as job,
    ):
        assets = catalog.load_remote_assets(effective_source)
        written = write_remote_assets(out, assets)
        job.text = f"{written} remote assets to {out}"
    log.info("Remote inventory for %s written to %s", effective_source, out)
    return ExportOutcome(source_name=effective_source, path=out, written=written)


def show_summary(
    *,
    source_name: str | None = None,
    config: ReconcileConfig | None = None,
    store: CatalogStore | None = None,
    database_path: Path | None = None,
) -> DiffSummary:
    """Return verdict counts currently stored for a source."""

    effective_source = _source_name(source_name, config)
    with _catalog(store, database_path) as catalog:
        return load_summary(catalog, effective_source)


def recent_jobs(
    *,
    limit: int = 20,
    store: CatalogStore | None = None,
    database_path: Path | None = None,
) -> list[JobRun]:
    """Return the most recent operations, newest first."""

    with _catalog(store, database_path) as catalog:
        return list(catalog.load_recent_jobs(limit))
