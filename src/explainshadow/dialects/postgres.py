"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Final


class PostgresDialect:
    """
    PostgreSQL dialect using psycopg's ``%s`` positional placeholders.
    """

    name: Final[str] = "postgresql"
    param_style: Final[str] = "format"
    database_id: Final[str] = "postgresql"

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "%s"
