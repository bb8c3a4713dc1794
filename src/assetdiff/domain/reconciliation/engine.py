"""Matching policy that turns two inventories into per-asset verdicts.

Rules are evaluated per remote asset in strict precedence, first match wins:

1. a local filename starts with ``"<source_asset_id>_"`` (backup tools commonly
   prefix the source id), checked over every local file;
2. exactly one local file has the same filename and the same byte size;
   several such files make the verdict ambiguous;
3. otherwise the asset is missing.

Filenames compare case-insensitively, sizes exactly. Timestamps are never used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from assetdiff.domain.model import DiffResult, DiffStatus
from assetdiff.domain.reconciliation.index import LocalFileIndex

if TYPE_CHECKING:
    from collections.abc import Iterable

    from assetdiff.domain.model import LocalFile, RemoteAsset

REASON_ASSET_ID_PREFIX: Final[str] = "exact match by asset ID prefix"
REASON_FILENAME_AND_SIZE: Final[str] = "matched by filename and size"
REASON_NO_MATCH: Final[str] = "no matching local file found"


def ambiguous_reason(candidate_count: int) -> str:
    return f"ambiguous candidates ({candidate_count} files match)"


def compute_diff(
    remote_assets: Iterable[RemoteAsset],
    local_files: Iterable[LocalFile],
) -> list[DiffResult]:
    """Return one verdict per remote asset, in input order."""

    index = LocalFileIndex.build(local_files)
    return [match_remote_asset(remote, index) for remote in remote_assets]


def match_remote_asset(remote: RemoteAsset, index: LocalFileIndex) -> DiffResult:
    prefixed = index.first_with_id_prefix(remote.source_asset_id)
    if prefixed is not None:
        return _verdict(remote, DiffStatus.PRESENT, REASON_ASSET_ID_PREFIX, prefixed.full_path)

    candidates = [
        local_file
        for local_file in index.with_filename(remote.filename)
        if local_file.size_bytes == remote.size_bytes
    ]
    if len(candidates) == 1:
        return _verdict(
            remote, DiffStatus.PRESENT, REASON_FILENAME_AND_SIZE, candidates[0].full_path
        )
    if len(candidates) > 1:
        return _verdict(remote, DiffStatus.UNCERTAIN, ambiguous_reason(len(candidates)))

    return _verdict(remote, DiffStatus.MISSING, REASON_NO_MATCH)


def _verdict(
    remote: RemoteAsset,
    status: DiffStatus,
    reason: str,
    matched_local_path: str | None = None,
) -> DiffResult:
    return DiffResult(
        source_name=remote.source_name,
        source_asset_id=remote.source_asset_id,
        status=status,
        reason=reason,
        matched_local_path=matched_local_path,
    )
