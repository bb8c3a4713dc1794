"""Catalog store built on a SQLAlchemy engine.

``initialize()`` opens the engine and upgrades the schema; afterwards every
operation runs in its own unit of work so that it commits completely or not at
all. Library errors surface as ``StorageFailureError``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, cast

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from assetdiff.adapters.sqlalchemy.migrations import upgrade_head
from assetdiff.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork, utcnow
from assetdiff.domain.errors import NotInitializedError, StorageFailureError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from datetime import datetime

    from sqlalchemy.engine import Engine

    from assetdiff.domain.model import (
        DiffResult,
        DiffStatus,
        JobRun,
        JobStatus,
        JobType,
        LocalFile,
        RemoteAsset,
    )
    from assetdiff.domain.ports.unit_of_work import CatalogRepositories

log = logging.getLogger(__name__)


class SqlAlchemyCatalogStore:
    """Durable catalog of remote assets, local files, diff results and jobs."""

    def __init__(
        self,
        *,
        engine: Engine | None = None,
        database_uri: str | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if engine is None and database_uri is None:
            raise ValueError("Either engine or database_uri is required")
        self._engine = engine
        self._owns_engine = engine is None
        self._database_uri = database_uri
        self._clock = clock
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    def initialize(self) -> None:
        """Open the database and bring its schema up to date; safe to repeat."""

        try:
            if self._engine is None:
                self._engine = create_engine(cast("str", self._database_uri), future=True)
            upgrade_head(engine=self._engine)
        except SQLAlchemyError as exc:
            raise StorageFailureError(f"Could not open catalog: {exc}") from exc
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
            log.debug("Catalog store initialised on %s", self._engine.url)

    def dispose(self) -> None:
        """Release the engine; the store must be initialised again before reuse."""

        self._session_factory = None
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
            self._engine = None

    def unit_of_work(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session_factory is None:
            raise NotInitializedError(
                "Catalog store not initialised. Call initialize() before using it."
            )
        return SqlAlchemyCatalogUnitOfWork(self._session_factory, clock=self._clock)

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[CatalogRepositories]:
        uow = self.unit_of_work()
        try:
            with uow:
                yield uow.repositories
                uow.commit()
        except SQLAlchemyError as exc:
            raise StorageFailureError(f"Catalog {operation} failed: {exc}") from exc

    # Mutations -----------------------------------------------------------------

    def replace_local_files(self, files: Iterable[LocalFile]) -> int:
        with self._transaction("local file replacement") as repositories:
            stored = repositories.local_files.replace_all(files)
        log.info("Replaced local file catalog with %s files", stored)
        return stored

    def upsert_remote_assets(self, assets: Iterable[RemoteAsset]) -> int:
        with self._transaction("remote asset upsert") as repositories:
            stored = repositories.remote_assets.upsert_many(assets)
        log.info("Upserted %s remote assets", stored)
        return stored

    def save_diff_results(self, results: Iterable[DiffResult]) -> int:
        with self._transaction("diff result save") as repositories:
            stored = repositories.diff_results.upsert_many(results)
        log.info("Saved %s diff results", stored)
        return stored

    # Snapshots -----------------------------------------------------------------

    def load_remote_assets(self, source_name: str) -> list[RemoteAsset]:
        with self._transaction("remote asset load") as repositories:
            return repositories.remote_assets.list_for_source(source_name)

    def load_local_files(self) -> list[LocalFile]:
        with self._transaction("local file load") as repositories:
            return repositories.local_files.list_all()

    def load_latest_diff_results(self, source_name: str) -> list[DiffResult]:
        with self._transaction("diff result load") as repositories:
            return repositories.diff_results.list_for_source(source_name)

    def diff_status_counts(self, source_name: str) -> dict[DiffStatus, int]:
        with self._transaction("diff status count") as repositories:
            return repositories.diff_results.count_by_status(source_name)

    def last_diff_at(self, source_name: str) -> datetime | None:
        with self._transaction("diff timestamp lookup") as repositories:
            return repositories.diff_results.last_updated(source_name)

    # Jobs ----------------------------------------------------------------------

    def record_job_started(self, job_type: JobType, *, source_name: str | None = None) -> int:
        with self._transaction("job start") as repositories:
            return repositories.jobs.start(job_type, source_name=source_name)

    def record_job_finished(
        self, job_id: int, status: JobStatus, *, detail: str | None = None
    ) -> None:
        with self._transaction("job completion") as repositories:
            repositories.jobs.finish(job_id, status, detail=detail)

    def load_recent_jobs(self, limit: int = 20) -> list[JobRun]:
        with self._transaction("job history load") as repositories:
            return repositories.jobs.recent(limit)


if TYPE_CHECKING:
    from assetdiff.domain.ports.persistence import CatalogStore

    _store_check: CatalogStore = SqlAlchemyCatalogStore(database_uri="sqlite://")
