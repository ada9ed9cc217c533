"""
Dialect strategy registry.
"""

from .base import Dialect
from .explain import DatabaseType, resolve_database_type
from .mysql import MySQLDialect
from .postgres import PostgresDialect
from .sqlite import SQLiteDialect

__all__ = [
    "DatabaseType",
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "resolve_database_type",
]
