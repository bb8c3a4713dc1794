from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from assetdiff.adapters.sqlalchemy import SqlAlchemyCatalogStore
from assetdiff.adapters.sqlalchemy.migrations import upgrade_head
from tests.helpers.records import FakeClock

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog_store(sqlite_engine: Engine, clock: FakeClock) -> Iterator[SqlAlchemyCatalogStore]:
    store = SqlAlchemyCatalogStore(engine=sqlite_engine, clock=clock)
    store.initialize()
    try:
        yield store
    finally:
        store.dispose()
