"""SQLAlchemy table metadata for the catalog and row <-> record conversion."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

from assetdiff.domain.model import (
    DiffResult,
    DiffStatus,
    JobRun,
    JobStatus,
    JobType,
    LocalFile,
    RemoteAsset,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import RowMapping


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum_values(enum_cls: type[Any]) -> list[str]:
    return [member.value for member in enum_cls]


def _str_enum(enum_cls: type[Any], length: int) -> Enum:
    return Enum(enum_cls, native_enum=False, length=length, values_callable=_enum_values)


catalog_metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

remote_asset_table = Table(
    "remote_assets",
    catalog_metadata,
    Column("source_name", String, primary_key=True),
    Column("source_asset_id", String, primary_key=True),
    Column("filename", String, nullable=False),
    Column("size_bytes", BigInteger, nullable=False),
    Column("created_utc", UTCDateTime, nullable=True),
    Column("media_type", String, nullable=True),
    Index("ix_remote_assets_source", "source_name"),
)

local_file_table = Table(
    "local_files",
    catalog_metadata,
    Column("full_path", String, primary_key=True),
    Column("filename", String, nullable=False),
    Column("size_bytes", BigInteger, nullable=False),
    Column("last_write_utc", UTCDateTime, nullable=False),
    Column("scan_position", Integer, nullable=False),
    Index("ix_local_files_filename_size", "filename", "size_bytes"),
)

diff_result_table = Table(
    "diff_results",
    catalog_metadata,
    Column("source_name", String, primary_key=True),
    Column("source_asset_id", String, primary_key=True),
    Column("status", _str_enum(DiffStatus, 16), nullable=False),
    Column("reason", String, nullable=False),
    Column("matched_local_path", String, nullable=True),
    Column("updated_at", UTCDateTime, nullable=False),
)

job_table = Table(
    "jobs",
    catalog_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("job_type", _str_enum(JobType, 16), nullable=False),
    Column("source_name", String, nullable=True),
    Column("started_at", UTCDateTime, nullable=False),
    Column("completed_at", UTCDateTime, nullable=True),
    Column("status", _str_enum(JobStatus, 16), nullable=False),
    Column("detail", String, nullable=True),
)

REMOTE_ASSET_VALUE_COLUMNS: Final[tuple[str, ...]] = (
    "filename",
    "size_bytes",
    "created_utc",
    "media_type",
)
DIFF_RESULT_VALUE_COLUMNS: Final[tuple[str, ...]] = (
    "status",
    "reason",
    "matched_local_path",
    "updated_at",
)


def remote_asset_to_row(asset: RemoteAsset) -> dict[str, object]:
    return {
        "source_name": asset.source_name,
        "source_asset_id": asset.source_asset_id,
        "filename": asset.filename,
        "size_bytes": asset.size_bytes,
        "created_utc": asset.created_utc,
        "media_type": asset.media_type,
    }


def remote_asset_from_row(row: RowMapping) -> RemoteAsset:
    return RemoteAsset(
        source_name=row["source_name"],
        source_asset_id=row["source_asset_id"],
        filename=row["filename"],
        size_bytes=row["size_bytes"],
        created_utc=row["created_utc"],
        media_type=row["media_type"],
    )


def local_file_to_row(local_file: LocalFile, *, position: int) -> dict[str, object]:
    return {
        "full_path": local_file.full_path,
        "filename": local_file.filename,
        "size_bytes": local_file.size_bytes,
        "last_write_utc": local_file.last_write_utc,
        "scan_position": position,
    }


def local_file_from_row(row: RowMapping) -> LocalFile:
    return LocalFile(
        full_path=row["full_path"],
        filename=row["filename"],
        size_bytes=row["size_bytes"],
        last_write_utc=row["last_write_utc"],
    )


def diff_result_to_row(result: DiffResult, *, updated_at: datetime) -> dict[str, object]:
    return {
        "source_name": result.source_name,
        "source_asset_id": result.source_asset_id,
        "status": result.status,
        "reason": result.reason,
        "matched_local_path": result.matched_local_path,
        "updated_at": updated_at,
    }


def diff_result_from_row(row: RowMapping) -> DiffResult:
    return DiffResult(
        source_name=row["source_name"],
        source_asset_id=row["source_asset_id"],
        status=row["status"],
        reason=row["reason"],
        matched_local_path=row["matched_local_path"],
    )


def job_run_from_row(row: RowMapping) -> JobRun:
    return JobRun(
        id=row["id"],
        job_type=row["job_type"],
        status=row["status"],
        started_at=row["started_at"],
        source_name=row["source_name"],
        completed_at=row["completed_at"],
        detail=row["detail"],
    )

