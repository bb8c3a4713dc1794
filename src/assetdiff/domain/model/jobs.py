"""Bookkeeping for application operations run against the catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from assetdiff.domain.model.enums import JobStatus, JobType

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class JobRun:
    id: int
    job_type: JobType
    status: JobStatus
    started_at: datetime
    source_name: str | None = None
    completed_at: datetime | None = None
    detail: str | None = None

    @property
    def finished(self) -> bool:
        return self.status is not JobStatus.RUNNING
