"""
Transaction owning the adapter connection shared by an executor.
"""

from __future__ import annotations

from typing import Any, ContextManager, Sequence

from ..adapters.base import AdapterTransactionError, ConnectionConfig, DatabaseAdapter
from ..utils import get_logger


class Transaction:
    """
    Lazily connects its adapter and scopes commit/rollback to that connection.
    """

    def __init__(self, adapter: DatabaseAdapter, config: ConnectionConfig) -> None:
        self.adapter = adapter
        self.config = config
        self._connected = False
        self.logger = get_logger("executor.transaction")

    @property
    def connected(self) -> bool:
        return self._connected

    def get_connection(self) -> Any:
        if not self._connected:
            self.logger.debug("Opening connection to %s", self.config.descriptive_label())
            self.adapter.connect(self.config)
            self._connected = True
        return self.adapter.connection()

    def current_connection(self) -> Any | None:
        """
        The connection opened for this transaction, or ``None`` if none is open yet.
        """

        if not self._connected:
            return None
        return self.adapter.current_connection()

    def savepoint(self) -> ContextManager[None]:
        return self.adapter.savepoint()

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        self.get_connection()
        return self.adapter.execute(sql, params)

    def commit(self) -> None:
        if not self._connected or self.config.autocommit:
            return
        try:
            self.adapter.commit()
        except Exception as exc:
            raise AdapterTransactionError("Commit failed.") from exc

    def rollback(self) -> None:
        if not self._connected or self.config.autocommit:
            return
        try:
            self.adapter.rollback()
        except Exception as exc:
            raise AdapterTransactionError("Rollback failed.") from exc

    def close(self) -> None:
        if self._connected:
            try:
                self.adapter.close()
            finally:
                self._connected = False
