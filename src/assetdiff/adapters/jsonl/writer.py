"""Write records as line-delimited JSON."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .translator import diff_result_record, remote_asset_record

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from pydantic import BaseModel

    from assetdiff.domain.model import DiffResult, RemoteAsset

log = getLogger(__name__)


def _write_records(path: Path, records: Iterable[BaseModel]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(record.model_dump_json(by_alias=True))
            handle.write("\n")
            written += 1
    log.info("Wrote %s records to %s", written, path)
    return written


def write_diff_results(path: Path, results: Iterable[DiffResult]) -> int:
    return _write_records(path, (diff_result_record(result) for result in results))


def write_remote_assets(path: Path, assets: Iterable[RemoteAsset]) -> int:
    return _write_records(path, (remote_asset_record(asset) for asset in assets))
