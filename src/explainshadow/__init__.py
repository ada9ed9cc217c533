"""
explainshadow public package initialization.

A statement-mapping data-access layer over DB-API drivers whose executor can
be wrapped by plugins, including one that logs explain plans alongside every
executed statement.
"""

from .adapters import ConnectionConfig  # noqa: F401
from .dialects import DatabaseType  # noqa: F401
from .executor import RowBounds  # noqa: F401
from .mapping import CommandType, MappedStatement, StatementType  # noqa: F401
from .plugin import ExplainInterceptor, Interceptor, Invocation, OperationKind  # noqa: F401
from .session import Configuration, SqlSession, SqlSessionFactory  # noqa: F401

__all__ = [
    "CommandType",
    "Configuration",
    "ConnectionConfig",
    "DatabaseType",
    "ExplainInterceptor",
    "Interceptor",
    "Invocation",
    "MappedStatement",
    "OperationKind",
    "RowBounds",
    "SqlSession",
    "SqlSessionFactory",
    "StatementType",
]
