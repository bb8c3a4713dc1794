"""Read-side aggregation of stored diff results."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from assetdiff.domain.model import DiffStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from assetdiff.domain.model import DiffResult
    from assetdiff.domain.ports.persistence import CatalogStore


@dataclass(frozen=True, slots=True)
class DiffSummary:
    """Verdict counts for one source."""

    source_name: str
    present: int = 0
    missing: int = 0
    uncertain: int = 0
    last_diff_at: datetime | None = None

    @property
    def total(self) -> int:
        return self.present + self.missing + self.uncertain

    @property
    def fully_backed_up(self) -> bool:
        """True when every known asset has a confident local match."""

        return self.total > 0 and self.missing == 0 and self.uncertain == 0

    @classmethod
    def from_counts(
        cls,
        source_name: str,
        counts: Mapping[DiffStatus, int],
        *,
        last_diff_at: datetime | None = None,
    ) -> DiffSummary:
        return cls(
            source_name=source_name,
            present=counts.get(DiffStatus.PRESENT, 0),
            missing=counts.get(DiffStatus.MISSING, 0),
            uncertain=counts.get(DiffStatus.UNCERTAIN, 0),
            last_diff_at=last_diff_at,
        )


def summarize_results(source_name: str, results: Iterable[DiffResult]) -> DiffSummary:
    """Count in-memory verdicts belonging to ``source_name``."""

    counts = Counter(result.status for result in results if result.source_name == source_name)
    return DiffSummary.from_counts(source_name, counts)


def load_summary(store: CatalogStore, source_name: str) -> DiffSummary:
    """Count the verdicts currently committed for ``source_name``."""

    return DiffSummary.from_counts(
        source_name,
        store.diff_status_counts(source_name),
        last_diff_at=store.last_diff_at(source_name),
    )
