"""
Explain-statement prefixes per target database.
"""

from __future__ import annotations

from enum import Enum


class DatabaseType(Enum):
    """
    Database families with their EXPLAIN prefix.

    A ``None`` prefix means the database has no prefix-style explain syntax and
    explain plans are skipped for it.
    """

    DEFAULT = "EXPLAIN "
    ORACLE = "EXPLAIN PLAN FOR "
    SQL_SERVER = None

    @property
    def explain_prefix(self) -> str | None:
        return self.value

    @property
    def supports_explain(self) -> bool:
        return self.value is not None

    @classmethod
    def from_database_id(cls, database_id: str | None) -> "DatabaseType":
        """
        Resolve a statement's database id; ``None`` and unknown ids map to ``DEFAULT``.
        """

        if database_id is None:
            return cls.DEFAULT
        lowered = database_id.lower()
        if lowered == "oracle":
            return cls.ORACLE
        if lowered in ("sqlserver", "sql server"):
            return cls.SQL_SERVER
        return cls.DEFAULT


def resolve_database_type(database_id: str | None) -> DatabaseType:
    return DatabaseType.from_database_id(database_id)
