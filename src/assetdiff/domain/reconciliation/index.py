"""Lookup structures over a local inventory, built once per diff run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from assetdiff.domain.model import LocalFile


def _simple_upper(char: str) -> str:
    upper = char.upper()
    return upper if len(upper) == 1 else char


def fold(value: str) -> str:
    """Ordinal case-insensitive comparison key.

    Each code point is upper-cased on its own and kept as is when its upper case
    expands to several code points (``"ß"``, ``"ﬁ"``), so the key has the same
    length as ``value`` and ``"ss"`` never equals ``"ß"``. Locale independent.
    """

    return "".join(_simple_upper(char) for char in value)


@dataclass(slots=True)
class LocalFileIndex:
    """Local files grouped for the two matching rules.

    ``by_filename`` maps a folded filename to its files in enumeration order.
    ``by_id_prefix`` maps every folded ``"<prefix>_"`` that starts some filename
    to the first file (in enumeration order) carrying that prefix, so an
    asset-id lookup is a dict hit instead of a scan over all files.
    """

    by_filename: dict[str, list[LocalFile]] = field(default_factory=dict)
    by_id_prefix: dict[str, LocalFile] = field(default_factory=dict)
    size: int = 0

    @classmethod
    def build(cls, local_files: Iterable[LocalFile]) -> LocalFileIndex:
        index = cls()
        for local_file in local_files:
            index.add(local_file)
        return index

    def add(self, local_file: LocalFile) -> None:
        folded = fold(local_file.filename)
        self.by_filename.setdefault(folded, []).append(local_file)
        start = 0
        while (position := folded.find("_", start)) != -1:
            self.by_id_prefix.setdefault(folded[: position + 1], local_file)
            start = position + 1
        self.size += 1

    def first_with_id_prefix(self, source_asset_id: str) -> LocalFile | None:
        """Return the first file whose name starts with ``"<source_asset_id>_"``."""

        return self.by_id_prefix.get(fold(f"{source_asset_id}_"))

    def with_filename(self, filename: str) -> list[LocalFile]:
        return self.by_filename.get(fold(filename), [])
