from __future__ import annotations

import json
import threading
from typing import TYPE_CHECKING

import pytest

from assetdiff import app
from assetdiff.adapters.sqlalchemy import SqlAlchemyCatalogStore
from assetdiff.app import (
    DEFAULT_GUARD,
    OperationGuard,
    export_remote_inventory,
    export_report,
    import_remote,
    recent_jobs,
    run_diff,
    scan_local,
    show_summary,
)
from assetdiff.config import MissingConfigurationError, ReconcileConfig, sqlite_uri
from assetdiff.domain.errors import (
    OperationInProgressError,
    ScanRootNotFoundError,
    StorageFailureError,
)
from assetdiff.domain.model import DiffStatus, JobStatus, JobType
from tests.helpers.records import make_local_file

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from assetdiff.domain.model import LocalFile


def _inventory_line(asset_id: str, filename: str, size_bytes: int, **extra: object) -> str:
    return json.dumps(
        {"sourceAssetId": asset_id, "filename": filename, "sizeBytes": size_bytes, **extra}
    )


def _backup_tree(root: Path) -> None:
    (root / "a").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "ABC123_photo.jpg").write_bytes(b"p" * 10)
    (root / "a" / "v.mp4").write_bytes(b"v" * 10000)
    (root / "b" / "v.mp4").write_bytes(b"v" * 10000)
    (root / ".DS_Store").write_bytes(b"junk")


def test_scan_local_stores_scanned_files(
    tmp_path: Path, catalog_store: SqlAlchemyCatalogStore
) -> None:
    root = tmp_path / "backup"
    _backup_tree(root)

    outcome = scan_local(config=ReconcileConfig(local_root=root), store=catalog_store)

    assert outcome.files_scanned == 3
    assert outcome.root == root
    assert len(catalog_store.load_local_files()) == 3
    [job] = catalog_store.load_recent_jobs()
    assert job.job_type is JobType.SCAN
    assert job.status is JobStatus.SUCCEEDED
    assert job.detail == "3 files"


def test_scan_local_explicit_root_overrides_config(
    tmp_path: Path, catalog_store: SqlAlchemyCatalogStore
) -> None:
    seen: list[Path] = []

    def fake_scanner(root: Path, *, ignore_patterns: Sequence[str] = ()) -> list[LocalFile]:
        seen.append(root)
        assert ignore_patterns == ("*.tmp",)
        return [make_local_file("/l/one.jpg")]

    config = ReconcileConfig(local_root=tmp_path / "configured", ignore_patterns=("*.tmp",))

    outcome = scan_local(
        root=tmp_path / "explicit", config=config, store=catalog_store, scanner=fake_scanner
    )

    assert seen == [tmp_path / "explicit"]
    assert outcome.files_scanned == 1


def test_scan_local_without_root_fails_before_touching_storage(
    catalog_store: SqlAlchemyCatalogStore,
) -> None:
    with pytest.raises(MissingConfigurationError):
        scan_local(config=ReconcileConfig(), store=catalog_store)

    assert catalog_store.load_recent_jobs() == []


def test_scan_local_missing_root_records_failed_job(
    tmp_path: Path, catalog_store: SqlAlchemyCatalogStore
) -> None:
    catalog_store.replace_local_files([make_local_file("/l/kept.jpg")])

    with pytest.raises(ScanRootNotFoundError):
        scan_local(root=tmp_path / "gone", config=ReconcileConfig(), store=catalog_store)

    [job] = catalog_store.load_recent_jobs()
    assert job.status is JobStatus.FAILED
    assert job.detail is not None
    assert "gone" in job.detail
    assert [f.full_path for f in catalog_store.load_local_files()] == ["/l/kept.jpg"]


def test_import_remote_uses_configured_default_source(
    catalog_store: SqlAlchemyCatalogStore,
) -> None:
    lines = [
        _inventory_line("A1", "a.jpg", 1),
        _inventory_line("A2", "b.jpg", 2, sourceName="gphotos"),
        "{broken",
    ]

    outcome = import_remote(
        inventory=lines, config=ReconcileConfig(source_name="icloud"), store=catalog_store
    )

    assert outcome.source_name == "icloud"
    assert outcome.imported == 2
    assert outcome.skipped == 1
    assert [a.source_asset_id for a in catalog_store.load_remote_assets("icloud")] == ["A1"]
    assert [a.source_asset_id for a in catalog_store.load_remote_assets("gphotos")] == ["A2"]
    [job] = catalog_store.load_recent_jobs()
    assert job.job_type is JobType.IMPORT
    assert job.source_name == "icloud"
    assert job.detail == "2 assets, 1 lines skipped"


def test_explicit_source_name_overrides_config(catalog_store: SqlAlchemyCatalogStore) -> None:
    outcome = import_remote(
        inventory=[_inventory_line("A1", "a.jpg", 1)],
        source_name="dropbox",
        config=ReconcileConfig(source_name="icloud"),
        store=catalog_store,
    )

    assert outcome.source_name == "dropbox"
    assert len(catalog_store.load_remote_assets("dropbox")) == 1


def test_full_reconciliation_flow(tmp_path: Path, catalog_store: SqlAlchemyCatalogStore) -> None:
    root = tmp_path / "backup"
    _backup_tree(root)
    config = ReconcileConfig(local_root=root)
    inventory = tmp_path / "remote.jsonl"
    inventory.write_text(
        "\n".join(
            [
                _inventory_line("ABC123", "photo.jpg", 500),
                _inventory_line("V1", "v.mp4", 10000),
                _inventory_line("M1", "missing.txt", 12),
            ]
        ),
        encoding="utf-8",
    )

    scan_local(config=config, store=catalog_store)
    import_remote(inventory=inventory, config=config, store=catalog_store)
    result = run_diff(config=config, store=catalog_store)

    statuses = {r.source_asset_id: r.status for r in result.results}
    assert statuses == {
        "ABC123": DiffStatus.PRESENT,
        "V1": DiffStatus.UNCERTAIN,
        "M1": DiffStatus.MISSING,
    }
    assert result.remote_count == 3
    assert result.local_count == 3

    summary = show_summary(config=config, store=catalog_store)
    assert (summary.present, summary.missing, summary.uncertain) == (1, 1, 1)
    assert summary.last_diff_at is not None

    report = tmp_path / "out" / "report.jsonl"
    exported = export_report(out=report, config=config, store=catalog_store)
    assert exported.written == 3
    records = [json.loads(line) for line in report.read_text(encoding="utf-8").splitlines()]
    by_id = {record["sourceAssetId"]: record for record in records}
    assert by_id["ABC123"]["matchedLocalPath"] == str((root / "ABC123_photo.jpg").resolve())
    assert by_id["V1"]["reason"] == "ambiguous candidates (2 files match)"
    assert by_id["M1"]["status"] == "Missing"

    jobs = recent_jobs(store=catalog_store)
    assert [job.job_type for job in jobs] == [
        JobType.REPORT,
        JobType.DIFF,
        JobType.IMPORT,
        JobType.SCAN,
    ]
    assert all(job.status is JobStatus.SUCCEEDED for job in jobs)


def test_export_remote_inventory_writes_stored_assets(
    tmp_path: Path, catalog_store: SqlAlchemyCatalogStore
) -> None:
    import_remote(inventory=[_inventory_line("A1", "a.jpg", 1)], store=catalog_store)

    outcome = export_remote_inventory(out=tmp_path / "remote.jsonl", store=catalog_store)

    assert outcome.written == 1
    [record] = [json.loads(line) for line in outcome.path.read_text(encoding="utf-8").splitlines()]
    assert record["sourceAssetId"] == "A1"


def test_injected_store_is_initialised(sqlite_engine: Engine) -> None:
    store = SqlAlchemyCatalogStore(engine=sqlite_engine)

    summary = show_summary(source_name="icloud", store=store)

    assert store.is_initialized is True
    assert summary.total == 0


def test_operations_open_database_path(tmp_path: Path) -> None:
    database = tmp_path / "state" / "catalog.db"

    result = run_diff(source_name="icloud", database_path=database)

    assert result.results == []
    assert database.is_file()
    [job] = recent_jobs(database_path=database)
    assert job.job_type is JobType.DIFF


def test_operation_guard_rejects_overlapping_operations() -> None:
    guard = OperationGuard()

    with guard.hold("scan"):
        assert guard.busy is True
        assert guard.current == "scan"
        with pytest.raises(OperationInProgressError, match="scan"), guard.hold("diff"):
            pass

    assert guard.busy is False
    with guard.hold("diff"):
        assert guard.current == "diff"


def test_busy_guard_blocks_mutating_operation(catalog_store: SqlAlchemyCatalogStore) -> None:
    guard = OperationGuard()

    with guard.hold("import"), pytest.raises(OperationInProgressError):
        run_diff(source_name="icloud", store=catalog_store, guard=guard)

    assert catalog_store.load_recent_jobs() == []


def test_operations_without_explicit_guard_share_one(tmp_path: Path) -> None:
    store = SqlAlchemyCatalogStore(database_uri=sqlite_uri(tmp_path / "catalog.db"))
    scanning = threading.Event()
    release = threading.Event()
    errors: list[BaseException] = []

    def blocking_scanner(root: Path, *, ignore_patterns: Sequence[str] = ()) -> list[LocalFile]:
        scanning.set()
        release.wait(timeout=5)
        return [make_local_file("/l/one.jpg")]

    def run_scan() -> None:
        try:
            scan_local(
                root=tmp_path, config=ReconcileConfig(), store=store, scanner=blocking_scanner
            )
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    worker = threading.Thread(target=run_scan)
    worker.start()
    try:
        assert scanning.wait(timeout=5)
        assert DEFAULT_GUARD.current == "scan"
        with pytest.raises(OperationInProgressError, match="scan"):
            import_remote(inventory=[], source_name="icloud", store=store)
    finally:
        release.set()
        worker.join(timeout=5)

    assert errors == []
    assert DEFAULT_GUARD.busy is False
    [job] = store.load_recent_jobs()
    assert job.job_type is JobType.SCAN
    store.dispose()


def test_owned_store_is_disposed_when_initialisation_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    disposed: list[bool] = []

    class UnopenableStore(SqlAlchemyCatalogStore):
        def initialize(self) -> None:
            raise StorageFailureError("Could not open catalog")

        def dispose(self) -> None:
            disposed.append(True)
            super().dispose()

    monkeypatch.setattr(app, "SqlAlchemyCatalogStore", UnopenableStore)

    with pytest.raises(StorageFailureError):
        show_summary(source_name="icloud", database_path=tmp_path / "catalog.db")

    assert disposed == [True]
