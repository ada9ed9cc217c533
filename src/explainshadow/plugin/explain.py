"""
Interceptor that logs the database's explain plan for each executed statement.

After the wrapped query or update has produced its result (or raised), the
interceptor runs ``<explain prefix> + <same SQL>`` on the same connection with
the same bound parameters and writes every plan row to the statement's log at
DEBUG level. It is active only while that log is enabled for DEBUG, and it
never changes what the caller receives: explain failures are logged and
dropped, and the primary result or exception is passed through untouched.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Sequence

from ..adapters.base import parse_bool
from ..dialects.explain import DatabaseType
from ..mapping import BoundSql, MappedStatement, ParameterBinder, StatementType
from .interceptor import Interceptor, Invocation, OperationKind

if TYPE_CHECKING:
    from ..executor.base import Executor

PLAN_MARKER = "<== ExplainPlan: "


class ExplainInterceptor(Interceptor):
    """
    Shadow-executes explain statements for queries and updates.

    ``explain_on_failure`` controls whether the plan is still attempted when
    the wrapped operation raised. The primary exception is re-raised either way.
    """

    def __init__(self, *, explain_on_failure: bool = True) -> None:
        self.explain_on_failure = explain_on_failure

    def intercept(self, invocation: Invocation) -> Any:
        try:
            result = invocation.proceed()
        except Exception:
            if self.explain_on_failure:
                self._shadow(invocation)
            raise
        self._shadow(invocation)
        return result

    def set_properties(self, properties: Mapping[str, str]) -> None:
        if "explain_on_failure" in properties:
            self.explain_on_failure = parse_bool(
                properties["explain_on_failure"], key="explain_on_failure"
            )

    # ------------------------------------------------------------------ #
    def _shadow(self, invocation: Invocation) -> None:
        statement = invocation.statement
        if not statement.statement_log.isEnabledFor(logging.DEBUG):
            return
        if statement.statement_type is StatementType.CALLABLE:
            return
        parameter = invocation.parameter
        if invocation.kind is OperationKind.QUERY_WITH_CACHE_KEY:
            bound_sql = invocation.args[5]
        else:
            bound_sql = statement.bound_sql(parameter)
        self.execute_explain(statement, parameter, bound_sql, invocation.target)

    def execute_explain(
        self,
        statement: MappedStatement,
        parameter: Any,
        bound_sql: BoundSql,
        executor: "Executor",
    ) -> None:
        """
        Run the explain statement on ``executor``'s connection and log each plan row.

        Databases without a prefix-style explain are skipped silently, as are
        executors whose transaction has not connected yet. The statement runs
        inside the transaction's savepoint scope. Any other failure is logged
        as a single plan line and swallowed.
        """

        prefix = DatabaseType.from_database_id(statement.database_id).explain_prefix
        if prefix is None:
            return
        log = statement.statement_log
        explain_sql = prefix + bound_sql.sql

        try:
            transaction = executor.transaction
            connection = transaction.current_connection()
            if connection is None:
                # the primary never reached the database; no connection to share
                return
            with transaction.savepoint(), closing(connection.cursor()) as cursor:
                binder = self._new_binder(statement, parameter, bound_sql)
                cursor.execute(explain_sql, binder.values())
                labels = [column[0] for column in cursor.description or ()]
                for row in _fetch_rows(cursor):
                    log.debug("%s%s", PLAN_MARKER, format_plan_row(labels, row))
        except Exception as exc:
            log.debug("%sFailed to execute EXPLAIN: %s", PLAN_MARKER, exc)

    @staticmethod
    def _new_binder(statement: MappedStatement, parameter: Any, bound_sql: BoundSql) -> ParameterBinder:
        if statement.configuration is not None:
            return statement.configuration.new_parameter_binder(statement, parameter, bound_sql)
        return ParameterBinder(statement, parameter, bound_sql)


def format_plan_row(labels: Sequence[str], row: Sequence[Any]) -> str:
    """
    ``value`` for single-column plans, ``label=value, ...`` otherwise.

    SQL NULL renders as ``null``. Rows wider than the cursor description are
    rendered as bare values.
    """

    column_count = len(labels) or len(row)
    if column_count == 1:
        return _render(row[0])
    if len(labels) < len(row):
        return ", ".join(_render(value) for value in row)
    return ", ".join(f"{label}={_render(value)}" for label, value in zip(labels, row))


def _render(value: Any) -> str:
    return "null" if value is None else str(value)


def _fetch_rows(cursor: Any) -> Iterator[Sequence[Any]]:
    while True:
        row = cursor.fetchone()
        if row is None:
            return
        yield row
