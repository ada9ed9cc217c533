"""
Mapped statement metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from ..dialects.sqlite import SQLiteDialect
from ..utils import statement_logger
from .errors import StatementConfigurationError
from .sql_source import BoundSql, SqlSource

if TYPE_CHECKING:
    from ..session.configuration import Configuration


class StatementType(Enum):
    STATEMENT = "statement"
    PREPARED = "prepared"
    CALLABLE = "callable"


class CommandType(Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_query(self) -> bool:
        return self is CommandType.SELECT


@dataclass
class MappedStatement:
    """
    A named SQL template plus everything needed to execute and trace it.

    ``statement_log`` is the per-statement logging sink. It defaults to
    ``explainshadow.statements.<id>`` and may be replaced at construction,
    e.g. with a test double.
    """

    id: str
    sql: str
    command_type: CommandType
    configuration: Optional["Configuration"] = None
    statement_type: StatementType = StatementType.PREPARED
    database_id: str | None = None
    statement_log: logging.Logger = None  # type: ignore[assignment]
    sql_source: SqlSource = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise StatementConfigurationError("Mapped statements require a non-empty id.")
        if self.statement_log is None:
            self.statement_log = statement_logger(self.id)
        dialect = self.configuration.dialect if self.configuration is not None else SQLiteDialect()
        self.sql_source = SqlSource.parse(self.sql, dialect)

    def bound_sql(self, parameter: Any) -> BoundSql:
        return self.sql_source.bound_sql(parameter)
