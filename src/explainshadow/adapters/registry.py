"""
Adapter lookup by DSN backend.
"""

from __future__ import annotations

from typing import Callable

from .base import AdapterConfigurationError, ConnectionConfig, DatabaseAdapter
from .mysql import MySQLAdapter
from .postgres import PostgresAdapter
from .sqlite import SQLiteAdapter

AdapterFactory = Callable[[], DatabaseAdapter]

ADAPTERS: dict[str, AdapterFactory] = {
    "sqlite": SQLiteAdapter,
    "postgresql": PostgresAdapter,
    "mysql": MySQLAdapter,
}


def adapter_factory_for(config: ConnectionConfig) -> AdapterFactory:
    backend = config.backend
    if backend is None and "://" not in config.url:
        # bare file paths and ":memory:" are sqlite databases
        backend = "sqlite"
    try:
        return ADAPTERS[backend]
    except KeyError:
        raise AdapterConfigurationError(
            f"No adapter registered for DSN {config.redacted_dsn()!r}."
        ) from None
