"""Reconciliation run settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var
from .errors import MissingConfigurationError

DEFAULT_SOURCE_NAME: Final[str] = "icloud"


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    """Which remote source to reconcile and where its local mirror lives."""

    source_name: str = DEFAULT_SOURCE_NAME
    local_root: Path | None = None
    ignore_patterns: tuple[str, ...] = ()


def _split_patterns(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def get_reconcile_config() -> ReconcileConfig:
    local_root = optional_env_var("ASSETDIFF_LOCAL_ROOT")
    return ReconcileConfig(
        source_name=optional_env_var("ASSETDIFF_SOURCE_NAME") or DEFAULT_SOURCE_NAME,
        local_root=Path(local_root) if local_root else None,
        ignore_patterns=_split_patterns(optional_env_var("ASSETDIFF_IGNORE")),
    )


def require_local_root(config: ReconcileConfig) -> Path:
    """Return the configured scan root or raise if none is set."""

    if config.local_root is None:
        raise MissingConfigurationError(
            "Local root path is not configured (pass --root or set ASSETDIFF_LOCAL_ROOT)"
        )
    return config.local_root
