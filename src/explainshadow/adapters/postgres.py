"""
PostgreSQL database adapter implementation.
"""

from __future__ import annotations

from contextlib import closing, contextmanager
from dataclasses import dataclass
from typing import Any, Sequence

from ..dialects.postgres import PostgresDialect
from ..security.redaction import redact_params
from ..utils import get_logger, time_call
from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    ConnectionConfig,
    DatabaseAdapter,
    count_format_placeholders,
    validate_param_count,
)


def _load_driver():
    try:
        import psycopg

        return psycopg
    except ImportError:
        return None


@dataclass
class PostgresConnectionState:
    connection: Any
    config: ConnectionConfig
    driver: Any


class PostgresAdapter(DatabaseAdapter):
    """
    Adapter wrapping the psycopg PostgreSQL driver.
    """

    def __init__(self, slow_query_ms: int | None = None) -> None:
        self.dialect = PostgresDialect()
        self._state: PostgresConnectionState | None = None
        self.logger = get_logger("adapters.postgres")
        self.slow_query_ms = slow_query_ms if slow_query_ms is not None else 100

    def connect(self, config: ConnectionConfig) -> Any:
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("psycopg is required to use PostgresAdapter.")

        options = dict(config.options or {})
        if config.ssl:
            for key, value in config.ssl.postgres_options().items():
                options.setdefault(key, value)
        if config.timeout and "connect_timeout" not in options:
            options["connect_timeout"] = int(config.timeout)
        if config.slow_query_ms is not None:
            self.slow_query_ms = config.slow_query_ms

        self.logger.info(
            "Connecting to PostgreSQL %s (autocommit=%s)",
            config.descriptive_label(),
            config.autocommit,
        )

        conninfo = config.url.split("?", 1)[0] if config.dsn else config.url
        try:
            connection = driver.connect(conninfo, **options)
        except Exception as exc:
            raise AdapterConnectionError("Failed to connect to PostgreSQL.") from exc
        connection.autocommit = bool(config.autocommit)
        if config.isolation_level:
            setattr(connection, "isolation_level", config.isolation_level)

        self._state = PostgresConnectionState(connection, config, driver)
        return connection

    def connection(self) -> Any:
        if not self._state:
            raise AdapterConnectionError("PostgresAdapter is not connected.")
        conn = self._state.connection
        if getattr(conn, "closed", False):
            self.logger.warning("PostgreSQL connection closed; reconnecting.")
            conn = self.connect(self._state.config)
        return conn

    def current_connection(self) -> Any | None:
        if not self._state or getattr(self._state.connection, "closed", False):
            return None
        return self._state.connection

    @contextmanager
    def savepoint(self, name: str = "explainshadow_savepoint"):
        """
        Run the block under a savepoint so a failure inside it does not leave
        the open transaction aborted. A no-op in autocommit mode.
        """

        connection = self.current_connection()
        if connection is None or connection.autocommit:
            yield
            return
        _run(connection, f"SAVEPOINT {name}")
        try:
            yield
        except Exception:
            _run(connection, f"ROLLBACK TO SAVEPOINT {name}")
            raise
        finally:
            _run(connection, f"RELEASE SAVEPOINT {name}")

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    def execute(self, sql: str, params: Sequence[Any] | None = None):
        cursor = self.connection().cursor()
        params = tuple(params or ())
        try:
            validate_param_count(count_format_placeholders(sql), params)
            with time_call(
                "postgres.execute",
                self.logger,
                sql=sql,
                params=redact_params(params),
                threshold_ms=self.slow_query_ms,
            ):
                cursor.execute(sql, params)
        except Exception:
            cursor.close()
            raise
        return cursor

    def commit(self) -> None:
        self.connection().commit()

    def rollback(self) -> None:
        self.connection().rollback()


def _run(connection: Any, sql: str) -> None:
    with closing(connection.cursor()) as cursor:
        cursor.execute(sql)
