"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class DiffStatus(StrEnum):
    PRESENT = "Present"
    MISSING = "Missing"
    UNCERTAIN = "Uncertain"


class JobType(StrEnum):
    SCAN = "scan"
    IMPORT = "import"
    DIFF = "diff"
    REPORT = "report"


class JobStatus(StrEnum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
