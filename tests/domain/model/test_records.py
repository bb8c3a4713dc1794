from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from assetdiff.domain.model import DiffResult, DiffStatus, JobRun, JobStatus, JobType, LocalFile
from tests.helpers.records import make_remote_asset


def test_remote_asset_key_combines_source_and_id() -> None:
    asset = make_remote_asset("A1", source_name="icloud")

    assert asset.key == ("icloud", "A1")


@pytest.mark.parametrize("field_name", ["source_name", "source_asset_id", "filename"])
def test_remote_asset_rejects_blank_text(field_name: str) -> None:
    values: dict[str, object] = {
        "source_name": "icloud",
        "source_asset_id": "A1",
        "filename": "a.jpg",
        "size_bytes": 1,
        field_name: "  ",
    }

    with pytest.raises(ValueError, match=field_name):
        make_remote_asset(**values)  # type: ignore[arg-type]


def test_remote_asset_rejects_negative_size() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        make_remote_asset(size_bytes=-1)


def test_remote_asset_rejects_non_integer_size() -> None:
    with pytest.raises(TypeError):
        make_remote_asset(size_bytes=True)


def test_zero_byte_files_are_valid() -> None:
    assert make_remote_asset(size_bytes=0).size_bytes == 0


def test_remote_asset_normalises_timestamps_to_utc() -> None:
    offset = timezone(timedelta(hours=2))
    aware = make_remote_asset(created_utc=datetime(2024, 1, 1, 12, 0, tzinfo=offset))
    naive = make_remote_asset(created_utc=datetime(2024, 1, 1, 12, 0))

    assert aware.created_utc == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    assert aware.created_utc is not None
    assert aware.created_utc.tzinfo is UTC
    assert naive.created_utc == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def test_local_file_from_path_derives_filename() -> None:
    local_file = LocalFile.from_path(
        "/backup/2024/IMG_0001.HEIC",
        size_bytes=10,
        last_write_utc=datetime(2024, 1, 1, tzinfo=UTC),
    )

    assert local_file.filename == "IMG_0001.HEIC"
    assert local_file.full_path == "/backup/2024/IMG_0001.HEIC"


def test_diff_result_requires_path_for_present() -> None:
    with pytest.raises(ValueError, match="matched_local_path"):
        DiffResult(
            source_name="icloud",
            source_asset_id="A1",
            status=DiffStatus.PRESENT,
            reason="matched",
        )


def test_diff_result_rejects_path_for_missing() -> None:
    with pytest.raises(ValueError, match="matched_local_path"):
        DiffResult(
            source_name="icloud",
            source_asset_id="A1",
            status=DiffStatus.MISSING,
            reason="none",
            matched_local_path="/backup/a.jpg",
        )


def test_diff_result_coerces_status_strings() -> None:
    result = DiffResult(
        source_name="icloud",
        source_asset_id="A1",
        status="Uncertain",  # type: ignore[arg-type]
        reason="ambiguous candidates (2 files match)",
    )

    assert result.status is DiffStatus.UNCERTAIN
    assert result.key == ("icloud", "A1")


def test_diff_status_values_are_stable_labels() -> None:
    assert [status.value for status in DiffStatus] == ["Present", "Missing", "Uncertain"]


def test_job_run_finished_reflects_status() -> None:
    started = datetime(2024, 1, 1, tzinfo=UTC)
    running = JobRun(id=1, job_type=JobType.SCAN, status=JobStatus.RUNNING, started_at=started)
    done = JobRun(id=2, job_type=JobType.DIFF, status=JobStatus.FAILED, started_at=started)

    assert running.finished is False
    assert done.finished is True
