"""Relational store used by the ordering and relation services.

Every call runs in its own session and transaction, so two calls are never
atomic with respect to each other. ``batch_update`` is N independent
single-row updates issued concurrently and awaited together.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type

from sqlalchemy import delete, func, inspect, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.sql import ColumnElement

logger = logging.getLogger("roofcms.store")

Filters = Mapping[str, Any]
Row = Dict[str, Any]


class StoreError(Exception):
    """Base class for failures reported by the relational store."""


class StoreUnavailable(StoreError):
    """The backend rejected or could not complete a call."""


class RowNotFound(StoreError):
    """An update targeted an id that no longer exists."""

    def __init__(self, table: str, row_id: Any):
        super().__init__(f"{table} row {row_id!r} not found.")
        self.table = table
        self.row_id = row_id


class PartialBatchFailure(StoreError):
    """One or more calls of a batch update failed while others may have committed."""

    def __init__(self, table: str, failures: Mapping[Any, StoreError], total: int):
        super().__init__(f"{len(failures)} of {total} updates on {table} failed.")
        self.table = table
        self.failures = dict(failures)
        self.total = total

    @property
    def failed_ids(self) -> List[Any]:
        return list(self.failures)


def row_to_dict(instance: Any) -> Row:
    mapper = inspect(instance).mapper
    return {attr.key: getattr(instance, attr.key) for attr in mapper.column_attrs}


def build_criteria(model: Type[Any], filters: Optional[Filters]) -> List[ColumnElement]:
    """Equality criteria per column; ``None`` matches ``IS NULL``."""
    criteria: List[ColumnElement] = []
    for column_name, value in (filters or {}).items():
        column = getattr(model, column_name)
        criteria.append(column.is_(None) if value is None else column == value)
    return criteria


class RelationalStore:
    def __init__(self, session_factory: sessionmaker, max_workers: int = 8):
        self._session_factory = session_factory
        self._max_workers = max(1, max_workers)

    def _fail(self, event: str, exc: SQLAlchemyError, **context: Any) -> StoreUnavailable:
        logger.error(event, extra={**context, "error": str(exc)})
        return StoreUnavailable(f"{event}: {exc}")

    # Reads

    def fetch_ordered(
        self,
        model: Type[Any],
        filters: Optional[Filters] = None,
        extra_criteria: Sequence[ColumnElement] = (),
    ) -> List[Row]:
        stmt = (
            select(model)
            .where(*build_criteria(model, filters), *extra_criteria)
            .order_by(model.order.asc(), model.created_at.asc(), model.id.asc())
        )
        try:
            with self._session_factory() as session:
                return [row_to_dict(row) for row in session.scalars(stmt).all()]
        except SQLAlchemyError as exc:
            raise self._fail("store_fetch_failed", exc, table=model.__tablename__) from exc

    def fetch_column(self, model: Type[Any], column: str, filters: Optional[Filters] = None) -> List[Any]:
        stmt = select(getattr(model, column)).where(*build_criteria(model, filters)).order_by(model.id.asc())
        try:
            with self._session_factory() as session:
                return list(session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise self._fail("store_fetch_failed", exc, table=model.__tablename__) from exc

    def exists(self, model: Type[Any], row_id: Any) -> bool:
        try:
            with self._session_factory() as session:
                return session.get(model, row_id) is not None
        except SQLAlchemyError as exc:
            raise self._fail("store_fetch_failed", exc, table=model.__tablename__) from exc

    def next_order(
        self,
        model: Type[Any],
        filters: Optional[Filters] = None,
        extra_criteria: Sequence[ColumnElement] = (),
    ) -> int:
        """Order value that appends a new row at the end of its scope."""
        stmt = select(func.coalesce(func.max(model.order), -1)).where(
            *build_criteria(model, filters), *extra_criteria
        )
        try:
            with self._session_factory() as session:
                return session.execute(stmt).scalar_one() + 1
        except SQLAlchemyError as exc:
            raise self._fail("store_fetch_failed", exc, table=model.__tablename__) from exc

    # Writes

    def insert(self, model: Type[Any], values: Mapping[str, Any]) -> Row:
        return self.bulk_insert(model, [values])[0]

    def update(self, model: Type[Any], row_id: Any, fields: Mapping[str, Any]) -> Row:
        table = model.__tablename__
        try:
            with self._session_factory() as session, session.begin():
                result = session.execute(update(model).where(model.id == row_id).values(**fields))
                if result.rowcount == 0:
                    raise RowNotFound(table, row_id)
                return row_to_dict(session.get(model, row_id))
        except SQLAlchemyError as exc:
            raise self._fail("store_update_failed", exc, table=table, row_id=row_id) from exc

    def batch_update(self, model: Type[Any], updates: Sequence[Tuple[Any, Mapping[str, Any]]]) -> None:
        if not updates:
            return

        failures: Dict[Any, StoreError] = {}
        workers = min(self._max_workers, len(updates))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="store-update") as pool:
            futures = {pool.submit(self.update, model, row_id, fields): row_id for row_id, fields in updates}
            for future in as_completed(futures):
                row_id = futures[future]
                try:
                    future.result()
                except StoreError as exc:
                    failures[row_id] = exc

        if failures:
            raise PartialBatchFailure(model.__tablename__, failures, total=len(updates))

    def delete_where(self, model: Type[Any], column: str, value: Any) -> int:
        table = model.__tablename__
        try:
            with self._session_factory() as session, session.begin():
                result = session.execute(delete(model).where(getattr(model, column) == value))
                return result.rowcount
        except SQLAlchemyError as exc:
            raise self._fail("store_delete_failed", exc, table=table, column=column, value=value) from exc

    def bulk_insert(self, model: Type[Any], rows: Iterable[Mapping[str, Any]]) -> List[Row]:
        table = model.__tablename__
        try:
            with self._session_factory() as session, session.begin():
                instances = [model(**row) for row in rows]
                session.add_all(instances)
                session.flush()
                return [row_to_dict(instance) for instance in instances]
        except SQLAlchemyError as exc:
            raise self._fail("store_insert_failed", exc, table=table) from exc
