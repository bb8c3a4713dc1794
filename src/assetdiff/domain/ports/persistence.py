"""Ports for persisting catalog records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from assetdiff.domain.model import (
        DiffResult,
        DiffStatus,
        JobRun,
        JobStatus,
        JobType,
        LocalFile,
        RemoteAsset,
    )


@runtime_checkable
class RemoteAssetRepository(Protocol):
    """Remote assets keyed by ``(source_name, source_asset_id)``."""

    def upsert_many(self, assets: Iterable[RemoteAsset]) -> int: ...

    def list_for_source(self, source_name: str) -> list[RemoteAsset]: ...


@runtime_checkable
class LocalFileRepository(Protocol):
    """Local files keyed by ``full_path``; replaced as a whole."""

    def replace_all(self, files: Iterable[LocalFile]) -> int: ...

    def list_all(self) -> list[LocalFile]: ...


@runtime_checkable
class DiffResultRepository(Protocol):
    """Diff verdicts keyed by ``(source_name, source_asset_id)``."""

    def upsert_many(self, results: Iterable[DiffResult]) -> int: ...

    def list_for_source(self, source_name: str) -> list[DiffResult]: ...

    def count_by_status(self, source_name: str) -> dict[DiffStatus, int]: ...

    def last_updated(self, source_name: str) -> datetime | None: ...


@runtime_checkable
class JobRepository(Protocol):
    """History of application operations."""

    def start(self, job_type: JobType, *, source_name: str | None = None) -> int: ...

    def finish(self, job_id: int, status: JobStatus, *, detail: str | None = None) -> None: ...

    def recent(self, limit: int) -> list[JobRun]: ...


@runtime_checkable
class CatalogStore(Protocol):
    """Durable catalog of remote assets, local files, diff results and jobs.

    Every mutating operation runs in a single transaction: it either applies
    completely or leaves the catalog as it was.
    """

    def initialize(self) -> None: ...

    def replace_local_files(self, files: Iterable[LocalFile]) -> int: ...

    def upsert_remote_assets(self, assets: Iterable[RemoteAsset]) -> int: ...

    def save_diff_results(self, results: Iterable[DiffResult]) -> int: ...

    def load_remote_assets(self, source_name: str) -> list[RemoteAsset]: ...

    def load_local_files(self) -> list[LocalFile]: ...

    def load_latest_diff_results(self, source_name: str) -> list[DiffResult]: ...

    def diff_status_counts(self, source_name: str) -> dict[DiffStatus, int]: ...

    def last_diff_at(self, source_name: str) -> datetime | None: ...

    def record_job_started(self, job_type: JobType, *, source_name: str | None = None) -> int: ...

    def record_job_finished(
        self, job_id: int, status: JobStatus, *, detail: str | None = None
    ) -> None: ...

    def load_recent_jobs(self, limit: int = 20) -> Sequence[JobRun]: ...
