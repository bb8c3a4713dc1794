"""Enumerate a local directory tree into ``LocalFile`` records."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from fnmatch import fnmatch
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from assetdiff.domain.errors import ScanRootNotFoundError
from assetdiff.domain.model import LocalFile

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

log = getLogger(__name__)

JUNK_FILENAMES: Final[frozenset[str]] = frozenset({".ds_store", "thumbs.db"})
APPLEDOUBLE_PREFIX: Final[str] = "._"


def is_junk_file(filename: str, ignore_patterns: Sequence[str] = ()) -> bool:
    """Return whether ``filename`` is OS metadata or matches an ignore pattern."""

    folded = filename.casefold()
    if folded in JUNK_FILENAMES or filename.startswith(APPLEDOUBLE_PREFIX):
        return True
    return any(fnmatch(folded, pattern.casefold()) for pattern in ignore_patterns)


def scan_local_files(root: Path, *, ignore_patterns: Sequence[str] = ()) -> list[LocalFile]:
    """Walk ``root`` depth-first and return every regular file that is not junk.

    Within a directory files come before subdirectories, each sorted by name,
    so repeated scans of an unchanged tree yield the same order. Entries that
    cannot be read are logged and skipped.
    """

    resolved = root.expanduser().resolve()
    if not resolved.is_dir():
        raise ScanRootNotFoundError(f"Root path does not exist: {root}")

    log.info("Scanning local files below %s", resolved)
    files = list(_walk(resolved, ignore_patterns))
    log.info("Scanned %s files below %s", len(files), resolved)
    return files


def _walk(directory: Path, ignore_patterns: Sequence[str]) -> Iterator[LocalFile]:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        log.warning("Could not enumerate directory %s: %s", directory, exc)
        return

    subdirectories: list[Path] = []
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                subdirectories.append(Path(entry.path))
                continue
            if not entry.is_file():
                continue
            if is_junk_file(entry.name, ignore_patterns):
                continue
            stat = entry.stat()
        except OSError as exc:
            log.warning("Could not access file %s: %s", entry.path, exc)
            continue
        yield LocalFile(
            full_path=entry.path,
            filename=entry.name,
            size_bytes=stat.st_size,
            last_write_utc=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        )

    for subdirectory in subdirectories:
        yield from _walk(subdirectory, ignore_patterns)


if TYPE_CHECKING:
    from assetdiff.domain.ports.scanning import LocalFileScanner

    _scanner_check: LocalFileScanner = scan_local_files
