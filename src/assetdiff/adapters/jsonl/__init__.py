"""Public interface for the line-delimited JSON inventory adapter."""

from __future__ import annotations

from .reader import ImportBatch, parse_remote_asset_line, read_remote_assets
from .schema import DiffResultRecord, RemoteAssetRecord
from .translator import (
    diff_result_record,
    remote_asset_record,
    translate_remote_asset,
)
from .writer import write_diff_results, write_remote_assets

__all__ = [
    "DiffResultRecord",
    "ImportBatch",
    "RemoteAssetRecord",
    "diff_result_record",
    "parse_remote_asset_line",
    "read_remote_assets",
    "remote_asset_record",
    "translate_remote_asset",
    "write_diff_results",
    "write_remote_assets",
]
