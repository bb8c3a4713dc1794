"""SQLAlchemy-backed unit of work for the catalog repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from assetdiff.adapters.sqlalchemy.repositories import (
    SqlAlchemyDiffResultRepository,
    SqlAlchemyJobRepository,
    SqlAlchemyLocalFileRepository,
    SqlAlchemyRemoteAssetRepository,
)
from assetdiff.domain.errors import NotInitializedError, SessionAlreadyOpenError
from assetdiff.domain.ports.unit_of_work import CatalogRepositories, RepositoryCollection

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from sqlalchemy.orm import Session, sessionmaker


def utcnow() -> datetime:
    return datetime.now(UTC)


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise NotInitializedError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise NotInitializedError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise SessionAlreadyOpenError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyCatalogUnitOfWork(BaseSqlAlchemyUnitOfWork[CatalogRepositories]):
    """Unit of work spanning all catalog repositories."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(session_factory)
        self._clock = clock

    def _build_repositories(self, session: Session) -> CatalogRepositories:
        return CatalogRepositories(
            remote_assets=SqlAlchemyRemoteAssetRepository(session),
            local_files=SqlAlchemyLocalFileRepository(session),
            diff_results=SqlAlchemyDiffResultRepository(session, clock=self._clock),
            jobs=SqlAlchemyJobRepository(session, clock=self._clock),
        )


if TYPE_CHECKING:
    from typing import cast

    from assetdiff.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork(
        cast("sessionmaker[Session]", object())
    )
