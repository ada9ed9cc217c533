"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final


class SQLiteDialect:
    """
    SQLite dialect using qmark placeholders.
    """

    name: Final[str] = "sqlite"
    param_style: Final[str] = "qmark"
    database_id: Final[str] = "sqlite"

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "?"
