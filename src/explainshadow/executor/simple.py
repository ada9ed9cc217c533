"""
Executor running mapped statements on a single transaction.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import TYPE_CHECKING, Any

from ..mapping import BoundSql, MappedStatement, ParameterBinder
from ..security.redaction import describe_params, redact_params
from .base import CacheKey, ExecutorError, ResultHandler, Row, RowBounds
from .cache import LocalCache
from .transaction import Transaction

if TYPE_CHECKING:
    from ..session.configuration import Configuration


class SimpleExecutor:
    """
    Executes each statement with a fresh cursor on the transaction's connection.

    Query results are kept in a local cache until the next update, commit,
    rollback or close.
    """

    def __init__(self, configuration: "Configuration", transaction: Transaction) -> None:
        self.configuration = configuration
        self._transaction = transaction
        self.local_cache = LocalCache()
        self._closed = False

    @property
    def transaction(self) -> Transaction:
        self._ensure_open()
        return self._transaction

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------ #
    # Interceptable operations
    # ------------------------------------------------------------------ #
    def query(
        self,
        statement: MappedStatement,
        parameter: Any,
        row_bounds: RowBounds = RowBounds.DEFAULT,
        result_handler: ResultHandler | None = None,
    ) -> list[Row]:
        bound_sql = statement.bound_sql(parameter)
        cache_key = self.create_cache_key(statement, parameter, row_bounds, bound_sql)
        return self.query_with_cache_key(
            statement, parameter, row_bounds, result_handler, cache_key, bound_sql
        )

    def query_with_cache_key(
        self,
        statement: MappedStatement,
        parameter: Any,
        row_bounds: RowBounds,
        result_handler: ResultHandler | None,
        cache_key: CacheKey,
        bound_sql: BoundSql,
    ) -> list[Row]:
        self._ensure_open()
        if result_handler is None:
            cached = self.local_cache.get(cache_key)
            if cached is not None:
                return cached
        rows = self._query_database(statement, parameter, row_bounds, result_handler, bound_sql)
        if result_handler is None:
            self.local_cache.put(cache_key, rows)
        return rows

    def update(self, statement: MappedStatement, parameter: Any) -> int:
        self._ensure_open()
        self.local_cache.clear()
        bound_sql = statement.bound_sql(parameter)
        values = self._bind(statement, parameter, bound_sql)
        with closing(self._transaction.execute(bound_sql.sql, values)) as cursor:
            count = cursor.rowcount
        self._trace(statement, "<==    Updates: %s", count)
        return count

    # ------------------------------------------------------------------ #
    def create_cache_key(
        self,
        statement: MappedStatement,
        parameter: Any,
        row_bounds: RowBounds,
        bound_sql: BoundSql,
    ) -> CacheKey:
        self._ensure_open()
        binder = self.configuration.new_parameter_binder(statement, parameter, bound_sql)
        return CacheKey.build(statement.id, row_bounds, bound_sql.sql, binder.values())

    def commit(self) -> None:
        self._ensure_open()
        self.local_cache.clear()
        self._transaction.commit()

    def rollback(self) -> None:
        if self._closed:
            return
        self.local_cache.clear()
        self._transaction.rollback()

    def close(self, *, rollback: bool = False) -> None:
        if self._closed:
            return
        try:
            if rollback:
                self.rollback()
        finally:
            self.local_cache.clear()
            self._transaction.close()
            self._closed = True

    # ------------------------------------------------------------------ #
    def _query_database(
        self,
        statement: MappedStatement,
        parameter: Any,
        row_bounds: RowBounds,
        result_handler: ResultHandler | None,
        bound_sql: BoundSql,
    ) -> list[Row]:
        values = self._bind(statement, parameter, bound_sql)
        rows: list[Row] = []
        total = 0
        with closing(self._transaction.execute(bound_sql.sql, values)) as cursor:
            labels = [column[0] for column in cursor.description or ()]
            for row in self._bounded_rows(cursor, row_bounds):
                mapped = dict(zip(labels, row))
                total += 1
                if result_handler is not None:
                    result_handler(mapped)
                else:
                    rows.append(mapped)
        self._trace(statement, "<==      Total: %s", total)
        return rows

    @staticmethod
    def _bounded_rows(cursor: Any, row_bounds: RowBounds):
        for _ in range(row_bounds.offset):
            if cursor.fetchone() is None:
                return
        fetched = 0
        while row_bounds.limit is None or fetched < row_bounds.limit:
            row = cursor.fetchone()
            if row is None:
                return
            fetched += 1
            yield row

    def _bind(self, statement: MappedStatement, parameter: Any, bound_sql: BoundSql) -> tuple[Any, ...]:
        binder: ParameterBinder = self.configuration.new_parameter_binder(statement, parameter, bound_sql)
        values = binder.values()
        log = statement.statement_log
        if log.isEnabledFor(logging.DEBUG):
            log.debug("==>  Preparing: %s", bound_sql.sql)
            log.debug("==> Parameters: %s", describe_params(redact_params(values, names=binder.names())))
        return values

    @staticmethod
    def _trace(statement: MappedStatement, message: str, *args: Any) -> None:
        log = statement.statement_log
        if log.isEnabledFor(logging.DEBUG):
            log.debug(message, *args)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ExecutorError("Executor was closed.")
