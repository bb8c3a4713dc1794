from __future__ import annotations

from assetdiff.domain.model import DiffResult, DiffStatus
from assetdiff.domain.projection import DiffSummary, load_summary, summarize_results
from tests.helpers.records import DEFAULT_TIME, FakeCatalogStore


def _result(asset_id: str, status: DiffStatus, *, source_name: str = "icloud") -> DiffResult:
    return DiffResult(
        source_name=source_name,
        source_asset_id=asset_id,
        status=status,
        reason="test",
        matched_local_path=f"/l/{asset_id}" if status is DiffStatus.PRESENT else None,
    )


def test_summarize_results_counts_each_status() -> None:
    results = [
        _result("A", DiffStatus.PRESENT),
        _result("B", DiffStatus.PRESENT),
        _result("C", DiffStatus.MISSING),
        _result("D", DiffStatus.UNCERTAIN),
        _result("E", DiffStatus.MISSING, source_name="gphotos"),
    ]

    summary = summarize_results("icloud", results)

    assert summary == DiffSummary(source_name="icloud", present=2, missing=1, uncertain=1)
    assert summary.total == 4
    assert summary.fully_backed_up is False


def test_from_counts_defaults_absent_statuses_to_zero() -> None:
    summary = DiffSummary.from_counts("icloud", {DiffStatus.PRESENT: 3})

    assert (summary.present, summary.missing, summary.uncertain) == (3, 0, 0)
    assert summary.fully_backed_up is True


def test_empty_summary_is_not_fully_backed_up() -> None:
    assert DiffSummary(source_name="icloud").fully_backed_up is False


def test_load_summary_reads_store_counts() -> None:
    store = FakeCatalogStore()
    store.save_diff_results([_result("A", DiffStatus.PRESENT), _result("B", DiffStatus.MISSING)])

    summary = load_summary(store, "icloud")

    assert summary.present == 1
    assert summary.missing == 1
    assert summary.last_diff_at == DEFAULT_TIME


def test_load_summary_for_unknown_source_is_empty() -> None:
    summary = load_summary(FakeCatalogStore(), "nowhere")

    assert summary.total == 0
    assert summary.last_diff_at is None
