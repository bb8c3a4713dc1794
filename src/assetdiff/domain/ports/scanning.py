"""Ports for producing inventories from outside the catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from assetdiff.domain.model import LocalFile


@runtime_checkable
class LocalFileScanner(Protocol):
    """Callable port enumerating the files below a directory tree."""

    def __call__(self, root: Path, *, ignore_patterns: Sequence[str] = ()) -> list[LocalFile]: ...


__all__ = ["LocalFileScanner"]
