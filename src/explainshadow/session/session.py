"""
Session API for running mapped statements.
"""

from __future__ import annotations

from typing import Any, Optional

from ..executor import Executor, ResultHandler, Row, RowBounds, TooManyResultsError
from ..mapping import MappedStatement, StatementConfigurationError
from ..utils import get_logger
from .configuration import Configuration


class SqlSession:
    """
    Runs mapped statements by id on one executor and its transaction.

    Used as a context manager the session commits on success, rolls back on
    error and always closes.
    """

    def __init__(self, configuration: Configuration, executor: Executor) -> None:
        self.configuration = configuration
        self.executor = executor
        self._dirty = False
        self.logger = get_logger("session")

    def __enter__(self) -> "SqlSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type:
                self.rollback()
            else:
                self.commit()
        finally:
            self.close()

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def select_list(
        self,
        statement_id: str,
        parameter: Any = None,
        row_bounds: RowBounds = RowBounds.DEFAULT,
    ) -> list[Row]:
        statement = self._statement(statement_id, query=True)
        return self.executor.query(statement, parameter, row_bounds, None)

    def select_one(self, statement_id: str, parameter: Any = None) -> Optional[Row]:
        rows = self.select_list(statement_id, parameter)
        if len(rows) > 1:
            raise TooManyResultsError(
                f"Expected one result (or None) from '{statement_id}', got {len(rows)}."
            )
        return rows[0] if rows else None

    def select(
        self,
        statement_id: str,
        parameter: Any,
        result_handler: ResultHandler,
        row_bounds: RowBounds = RowBounds.DEFAULT,
    ) -> None:
        statement = self._statement(statement_id, query=True)
        self.executor.query(statement, parameter, row_bounds, result_handler)

    # ------------------------------------------------------------------ #
    # Updates
    # ------------------------------------------------------------------ #
    def insert(self, statement_id: str, parameter: Any = None) -> int:
        return self.update(statement_id, parameter)

    def delete(self, statement_id: str, parameter: Any = None) -> int:
        return self.update(statement_id, parameter)

    def update(self, statement_id: str, parameter: Any = None) -> int:
        statement = self._statement(statement_id, query=False)
        self._dirty = True
        return self.executor.update(statement, parameter)

    # ------------------------------------------------------------------ #
    # Transaction control
    # ------------------------------------------------------------------ #
    def commit(self, force: bool = False) -> None:
        if self._dirty or force:
            self.executor.commit()
        self._dirty = False

    def rollback(self, force: bool = False) -> None:
        if self._dirty or force:
            self.executor.rollback()
        self._dirty = False

    def close(self) -> None:
        if self.executor.closed:
            return
        self.executor.close(rollback=self._dirty)
        self._dirty = False

    # ------------------------------------------------------------------ #
    def _statement(self, statement_id: str, *, query: bool) -> MappedStatement:
        statement = self.configuration.get_statement(statement_id)
        if statement.command_type.is_query != query:
            kind = "select" if query else "update"
            raise StatementConfigurationError(
                f"Statement '{statement_id}' is a {statement.command_type.value}, "
                f"not usable as a {kind}."
            )
        return statement
