"""Public domain model surface."""

from __future__ import annotations

from assetdiff.domain.model.enums import DiffStatus, JobStatus, JobType
from assetdiff.domain.model.inventory import LocalFile, RemoteAsset
from assetdiff.domain.model.jobs import JobRun
from assetdiff.domain.model.results import DiffResult

__all__ = [
    "DiffResult",
    "DiffStatus",
    "JobRun",
    "JobStatus",
    "JobType",
    "LocalFile",
    "RemoteAsset",
]
