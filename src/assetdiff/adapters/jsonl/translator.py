"""Translate inventory records into domain records and back."""

from __future__ import annotations

from assetdiff.domain.model import DiffResult, RemoteAsset

from .schema import DiffResultRecord, RemoteAssetRecord


def translate_remote_asset(record: RemoteAssetRecord, *, default_source: str) -> RemoteAsset:
    """Build a ``RemoteAsset``, filling a missing source name from ``default_source``."""

    return RemoteAsset(
        source_name=record.source_name or default_source,
        source_asset_id=record.source_asset_id,
        filename=record.filename,
        size_bytes=record.size_bytes,
        created_utc=record.created_utc,
        media_type=record.media_type,
    )


def remote_asset_record(asset: RemoteAsset) -> RemoteAssetRecord:
    return RemoteAssetRecord(
        source_name=asset.source_name,
        source_asset_id=asset.source_asset_id,
        filename=asset.filename,
        size_bytes=asset.size_bytes,
        created_utc=asset.created_utc,
        media_type=asset.media_type,
    )


def diff_result_record(result: DiffResult) -> DiffResultRecord:
    return DiffResultRecord(
        source_name=result.source_name,
        source_asset_id=result.source_asset_id,
        status=result.status,
        reason=result.reason,
        matched_local_path=result.matched_local_path,
    )

