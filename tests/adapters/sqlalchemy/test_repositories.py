from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from assetdiff.adapters.sqlalchemy import (
    SqlAlchemyDiffResultRepository,
    SqlAlchemyLocalFileRepository,
    SqlAlchemyRemoteAssetRepository,
    diff_result_table,
    local_file_table,
)
from assetdiff.domain.model import DiffResult, DiffStatus
from tests.helpers.records import FakeClock, make_local_file, make_remote_asset

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_remote_upsert_keeps_last_duplicate_in_batch(sqlite_session: Session) -> None:
    repository = SqlAlchemyRemoteAssetRepository(sqlite_session)

    stored = repository.upsert_many(
        [
            make_remote_asset("A1", filename="first.jpg"),
            make_remote_asset("A1", filename="second.jpg"),
        ]
    )
    sqlite_session.commit()

    assert stored == 1
    [asset] = repository.list_for_source("icloud")
    assert asset.filename == "second.jpg"


def test_remote_upsert_of_empty_batch_is_a_no_op(sqlite_session: Session) -> None:
    repository = SqlAlchemyRemoteAssetRepository(sqlite_session)

    assert repository.upsert_many([]) == 0
    assert repository.list_for_source("icloud") == []


def test_local_replace_keeps_scan_order_and_dedupes_paths(sqlite_session: Session) -> None:
    repository = SqlAlchemyLocalFileRepository(sqlite_session)

    stored = repository.replace_all(
        [
            make_local_file("/l/b.jpg", size_bytes=1),
            make_local_file("/l/a.jpg"),
            make_local_file("/l/b.jpg", size_bytes=2),
        ]
    )
    sqlite_session.commit()

    assert stored == 2
    files = repository.list_all()
    assert [(f.full_path, f.size_bytes) for f in files] == [("/l/b.jpg", 2), ("/l/a.jpg", 1024)]
    count = sqlite_session.execute(select(func.count()).select_from(local_file_table)).scalar_one()
    assert count == 2


def test_diff_results_stamp_update_time(sqlite_session: Session) -> None:
    clock = FakeClock()
    repository = SqlAlchemyDiffResultRepository(sqlite_session, clock=clock)
    result = DiffResult(
        source_name="icloud",
        source_asset_id="A1",
        status=DiffStatus.UNCERTAIN,
        reason="ambiguous candidates (2 files match)",
    )

    repository.upsert_many([result])
    sqlite_session.commit()

    row = sqlite_session.execute(select(diff_result_table)).mappings().one()
    assert row["status"] is DiffStatus.UNCERTAIN
    assert repository.last_updated("icloud") == row["updated_at"]
    assert repository.count_by_status("icloud") == {DiffStatus.UNCERTAIN: 1}
    assert repository.list_for_source("icloud") == [result]
