"""Read line-delimited JSON inventories.

Malformed lines never abort an import: each one is logged with its line
number and skipped, and the count of skipped lines is reported back.
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from assetdiff.config.errors import ConfigurationError
from assetdiff.domain.errors import RecordParseError

from .schema import RemoteAssetRecord
from .translator import translate_remote_asset

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from assetdiff.domain.model import RemoteAsset

log = getLogger(__name__)

BOM: Final[str] = "\ufeff"


@dataclass(slots=True)
class ImportBatch:
    """Remote assets parsed from one inventory, plus how many lines were dropped."""

    assets: list[RemoteAsset] = field(default_factory=list)
    skipped: int = 0


def _decode_line(line: str | bytes, *, line_number: int) -> str:
    if isinstance(line, str):
        return line
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RecordParseError(
            f"invalid UTF-8 at byte {exc.start}", line_number=line_number
        ) from exc


def parse_remote_asset_line(
    line: str | bytes, *, default_source: str, line_number: int
) -> RemoteAsset:
    """Parse one inventory line or raise ``RecordParseError``."""

    text = _decode_line(line, line_number=line_number)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordParseError(f"invalid JSON: {exc.msg}", line_number=line_number) from exc
    try:
        record = RemoteAssetRecord.model_validate(payload)
        return translate_remote_asset(record, default_source=default_source)
    except ValidationError as exc:
        raise RecordParseError(
            f"invalid remote asset: {exc.error_count()} validation error(s)",
            line_number=line_number,
        ) from exc
    except ValueError as exc:
        raise RecordParseError(f"invalid remote asset: {exc}", line_number=line_number) from exc


def read_remote_assets(source: Path | Iterable[str], *, default_source: str) -> ImportBatch:
    """Read remote assets from a JSONL file path or an iterable of lines.

    Files are read as bytes and decoded line by line, so one badly encoded
    line is skipped like any other malformed line. A leading BOM is ignored.
    """

    if not default_source or not default_source.strip():
        raise ConfigurationError("A default source name is required to import remote assets")

    batch = ImportBatch()
    for line_number, line in _numbered_lines(source):
        if not line.strip():
            continue
        try:
            batch.assets.append(
                parse_remote_asset_line(
                    line, default_source=default_source, line_number=line_number
                )
            )
        except RecordParseError as exc:
            batch.skipped += 1
            log.warning("Skipping inventory line %s: %s", line_number, exc)
    log.info("Read %s remote assets (%s lines skipped)", len(batch.assets), batch.skipped)
    return batch


def _numbered_lines(source: Path | Iterable[str]) -> Iterator[tuple[int, str | bytes]]:
    if isinstance(source, Path):
        with source.open("rb") as handle:
            for line_number, line in enumerate(handle, start=1):
                yield line_number, line.removeprefix(codecs.BOM_UTF8) if line_number == 1 else line
        return
    for line_number, line in enumerate(source, start=1):
        yield line_number, line.removeprefix(BOM) if line_number == 1 else line
