"""Inventory records on both sides of a reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from assetdiff.domain.model._internal import as_utc, require_size, require_text

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoteAsset:
    """One item held by a remote source, identified by the id the source issued."""

    source_name: str
    source_asset_id: str
    filename: str
    size_bytes: int
    created_utc: datetime | None = None
    media_type: str | None = None

    def __post_init__(self) -> None:
        require_text(self.source_name, "source_name")
        require_text(self.source_asset_id, "source_asset_id")
        require_text(self.filename, "filename")
        require_size(self.size_bytes)
        object.__setattr__(self, "created_utc", as_utc(self.created_utc))

    @property
    def key(self) -> tuple[str, str]:
        return (self.source_name, self.source_asset_id)


@dataclass(frozen=True, slots=True, kw_only=True)
class LocalFile:
    """One file found on local storage; ``full_path`` is the natural key."""

    full_path: str
    filename: str
    size_bytes: int
    last_write_utc: datetime

    def __post_init__(self) -> None:
        require_text(self.full_path, "full_path")
        require_text(self.filename, "filename")
        require_size(self.size_bytes)
        object.__setattr__(self, "last_write_utc", as_utc(self.last_write_utc))

    @classmethod
    def from_path(cls, path: str, *, size_bytes: int, last_write_utc: datetime) -> LocalFile:
        return cls(
            full_path=path,
            filename=PurePath(path).name,
            size_bytes=size_bytes,
            last_write_utc=last_write_utc,
        )
