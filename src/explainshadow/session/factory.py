"""
Factory producing sessions bound to one configuration.
"""

from __future__ import annotations

from typing import Any

from .configuration import Configuration
from .session import SqlSession


class SqlSessionFactory:
    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "SqlSessionFactory":
        return cls(Configuration.from_dsn(dsn, **kwargs))

    def open_session(self) -> SqlSession:
        transaction = self.configuration.new_transaction()
        executor = self.configuration.new_executor(transaction)
        return SqlSession(self.configuration, executor)
