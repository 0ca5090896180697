from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple

# Settings are validated at import time of roofcms.db.session.
os.environ.setdefault("DATABASE_URL", "sqlite:///./roofcms-test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-0123456789")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from roofcms.db.models import Base
from roofcms.db.store import RelationalStore, StoreUnavailable


class ScriptedStore(RelationalStore):
    """Real store over SQLite that can be told to fail specific calls.

    Every write call is appended to ``calls`` as ``(method, table)``.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        fail_update_ids: Iterable[Any] = (),
        fail_delete: bool = False,
        fail_insert: bool = False,
        fail_fetch: bool = False,
    ):
        super().__init__(session_factory, max_workers=4)
        self.fail_update_ids = set(fail_update_ids)
        self.fail_delete = fail_delete
        self.fail_insert = fail_insert
        self.fail_fetch = fail_fetch
        self.calls: List[Tuple[str, str]] = []

    def fetch_ordered(self, model, filters=None, extra_criteria=()):
        if self.fail_fetch:
            raise StoreUnavailable("fetch refused")
        return super().fetch_ordered(model, filters, extra_criteria)

    def update(self, model, row_id, fields):
        self.calls.append(("update", model.__tablename__))
        if row_id in self.fail_update_ids:
            raise StoreUnavailable(f"update of {row_id} refused")
        return super().update(model, row_id, fields)

    def delete_where(self, model, column, value):
        self.calls.append(("delete_where", model.__tablename__))
        if self.fail_delete:
            raise StoreUnavailable("delete refused")
        return super().delete_where(model, column, value)

    def bulk_insert(self, model, rows):
        rows = list(rows)
        self.calls.append(("bulk_insert", model.__tablename__))
        if self.fail_insert:
            raise StoreUnavailable("insert refused")
        return super().bulk_insert(model, rows)


@pytest.fixture
def engine(tmp_path: Path) -> Iterator[Engine]:
    db_engine = create_engine(
        f"sqlite:///{tmp_path / 'roofcms.db'}",
        future=True,
        connect_args={"check_same_thread": False, "timeout": 15},
    )

    @event.listens_for(db_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=db_engine)
    try:
        yield db_engine
    finally:
        db_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def store(session_factory: sessionmaker) -> RelationalStore:
    return RelationalStore(session_factory, max_workers=4)


@pytest.fixture
def scripted_store(session_factory: sessionmaker):
    def _make(**failures: Any) -> ScriptedStore:
        return ScriptedStore(session_factory, **failures)

    return _make


@pytest.fixture
def add_rows(session_factory: sessionmaker):
    """Insert ORM rows and return their ids in insertion order."""

    def _add(model, rows: Iterable[Mapping[str, Any]]) -> List[Any]:
        with session_factory() as session, session.begin():
            instances = [model(**row) for row in rows]
            session.add_all(instances)
            session.flush()
            return [instance.id for instance in instances]

    return _add


@pytest.fixture
def orders_of(store: RelationalStore):
    def _orders(model, filters: Optional[Mapping[str, Any]] = None) -> List[Tuple[Any, int]]:
        return [(row["id"], row["order"]) for row in store.fetch_ordered(model, filters)]

    return _orders
