"""
MySQL dialect implementation.
"""

from __future__ import annotations

from typing import Final


class MySQLDialect:
    """
    MySQL dialect using ``%s`` positional placeholders.
    """

    name: Final[str] = "mysql"
    param_style: Final[str] = "format"
    database_id: Final[str] = "mysql"

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace("`", "``")
        return f"`{escaped}`"

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "%s"
