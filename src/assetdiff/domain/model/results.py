"""Reconciliation verdicts."""

from __future__ import annotations

from dataclasses import dataclass

from assetdiff.domain.model._internal import require_text
from assetdiff.domain.model.enums import DiffStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class DiffResult:
    """Verdict for one remote asset.

    ``matched_local_path`` is set if and only if ``status`` is ``PRESENT``.
    """

    source_name: str
    source_asset_id: str
    status: DiffStatus
    reason: str
    matched_local_path: str | None = None

    def __post_init__(self) -> None:
        require_text(self.source_name, "source_name")
        require_text(self.source_asset_id, "source_asset_id")
        object.__setattr__(self, "status", DiffStatus(self.status))
        has_match = self.matched_local_path is not None
        if has_match != (self.status is DiffStatus.PRESENT):
            raise ValueError(
                f"matched_local_path must be set exactly when status is Present "
                f"(status={self.status}, matched_local_path={self.matched_local_path!r})"
            )

    @property
    def key(self) -> tuple[str, str]:
        return (self.source_name, self.source_asset_id)
