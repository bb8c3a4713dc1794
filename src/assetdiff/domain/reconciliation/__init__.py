"""Reconciliation of remote assets against the local inventory."""

from __future__ import annotations

from .engine import (
    REASON_ASSET_ID_PREFIX,
    REASON_FILENAME_AND_SIZE,
    REASON_NO_MATCH,
    ambiguous_reason,
    compute_diff,
    match_remote_asset,
)
from .index import LocalFileIndex, fold

__all__ = [
    "REASON_ASSET_ID_PREFIX",
    "REASON_FILENAME_AND_SIZE",
    "REASON_NO_MATCH",
    "LocalFileIndex",
    "ambiguous_reason",
    "compute_diff",
    "fold",
    "match_remote_asset",
]
