"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from assetdiff.adapters.sqlalchemy.mappings import (
    DIFF_RESULT_VALUE_COLUMNS,
    REMOTE_ASSET_VALUE_COLUMNS,
    diff_result_from_row,
    diff_result_table,
    diff_result_to_row,
    job_run_from_row,
    job_table,
    local_file_from_row,
    local_file_table,
    local_file_to_row,
    remote_asset_from_row,
    remote_asset_table,
    remote_asset_to_row,
)
from assetdiff.domain.model import DiffStatus, JobStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime

    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from assetdiff.domain.model import (
        DiffResult,
        JobRun,
        JobType,
        LocalFile,
        RemoteAsset,
    )


def _upsert_rows(
    session: Session,
    table: Table,
    rows: list[dict[str, object]],
    *,
    key_columns: tuple[str, ...],
    value_columns: tuple[str, ...],
) -> None:
    if not rows:
        return
    stmt = sqlite_insert(table)
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c[name] for name in key_columns],
        set_={name: stmt.excluded[name] for name in value_columns},
    )
    session.execute(stmt, rows)


class SqlAlchemyRemoteAssetRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_many(self, assets: Iterable[RemoteAsset]) -> int:
        # later duplicates of a key win, matching row-by-row upsert semantics
        rows_by_key = {asset.key: remote_asset_to_row(asset) for asset in assets}
        _upsert_rows(
            self.session,
            remote_asset_table,
            list(rows_by_key.values()),
            key_columns=("source_name", "source_asset_id"),
            value_columns=REMOTE_ASSET_VALUE_COLUMNS,
        )
        return len(rows_by_key)

    def list_for_source(self, source_name: str) -> list[RemoteAsset]:
        stmt = (
            select(remote_asset_table)
            .where(remote_asset_table.c.source_name == source_name)
            .order_by(remote_asset_table.c.source_asset_id)
        )
        return [remote_asset_from_row(row) for row in self.session.execute(stmt).mappings()]


class SqlAlchemyLocalFileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def replace_all(self, files: Iterable[LocalFile]) -> int:
        by_path: dict[str, LocalFile] = {}
        for local_file in files:
            by_path[local_file.full_path] = local_file
        self.session.execute(delete(local_file_table))
        rows = [
            local_file_to_row(local_file, position=position)
            for position, local_file in enumerate(by_path.values())
        ]
        if rows:
            self.session.execute(insert(local_file_table), rows)
        return len(rows)

    def list_all(self) -> list[LocalFile]:
        stmt = select(local_file_table).order_by(local_file_table.c.scan_position)
        return [local_file_from_row(row) for row in self.session.execute(stmt).mappings()]


class SqlAlchemyDiffResultRepository:
    def __init__(self, session: Session, *, clock: Callable[[], datetime]) -> None:
        self.session = session
        self._clock = clock

    def upsert_many(self, results: Iterable[DiffResult]) -> int:
        updated_at = self._clock()
        rows_by_key = {
            result.key: diff_result_to_row(result, updated_at=updated_at) for result in results
        }
        _upsert_rows(
            self.session,
            diff_result_table,
            list(rows_by_key.values()),
            key_columns=("source_name", "source_asset_id"),
            value_columns=DIFF_RESULT_VALUE_COLUMNS,
        )
        return len(rows_by_key)

    def list_for_source(self, source_name: str) -> list[DiffResult]:
        stmt = (
            select(diff_result_table)
            .where(diff_result_table.c.source_name == source_name)
            .order_by(diff_result_table.c.source_asset_id)
        )
        return [diff_result_from_row(row) for row in self.session.execute(stmt).mappings()]

    def count_by_status(self, source_name: str) -> dict[DiffStatus, int]:
        stmt = (
            select(diff_result_table.c.status, func.count())
            .where(diff_result_table.c.source_name == source_name)
            .group_by(diff_result_table.c.status)
        )
        return {DiffStatus(status): count for status, count in self.session.execute(stmt)}

    def last_updated(self, source_name: str) -> datetime | None:
        stmt = select(func.max(diff_result_table.c.updated_at)).where(
            diff_result_table.c.source_name == source_name
        )
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyJobRepository:
    def __init__(self, session: Session, *, clock: Callable[[], datetime]) -> None:
        self.session = session
        self._clock = clock

    def start(self, job_type: JobType, *, source_name: str | None = None) -> int:
        stmt = insert(job_table).values(
            job_type=job_type,
            source_name=source_name,
            started_at=self._clock(),
            status=JobStatus.RUNNING,
        )
        result = self.session.execute(stmt)
        return cast(int, result.inserted_primary_key[0])

    def finish(self, job_id: int, status: JobStatus, *, detail: str | None = None) -> None:
        stmt = (
            update(job_table)
            .where(job_table.c.id == job_id)
            .values(status=status, completed_at=self._clock(), detail=detail)
        )
        self.session.execute(stmt)

    def recent(self, limit: int) -> list[JobRun]:
        stmt = select(job_table).order_by(job_table.c.id.desc()).limit(limit)
        return [job_run_from_row(row) for row in self.session.execute(stmt).mappings()]


if TYPE_CHECKING:
    from assetdiff.domain.ports.persistence import (
        DiffResultRepository,
        JobRepository,
        LocalFileRepository,
        RemoteAssetRepository,
    )

    _session_stub = cast("Session", object())
    _remote_repo: RemoteAssetRepository = SqlAlchemyRemoteAssetRepository(_session_stub)
    _clock_stub = cast("Callable[[], datetime]", object())
    _local_repo: LocalFileRepository = SqlAlchemyLocalFileRepository(_session_stub)
    _diff_repo: DiffResultRepository = SqlAlchemyDiffResultRepository(
        _session_stub, clock=_clock_stub
    )
    _job_repo: JobRepository = SqlAlchemyJobRepository(_session_stub, clock=_clock_stub)
