"""
Adapter protocol, connection configuration and error types.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, ContextManager, Protocol, Sequence

from ..dialects.base import Dialect
from ..security.dsns import DSNConfig, parse_dsn


class AdapterError(RuntimeError):
    """Base error for adapter-related failures."""


class AdapterConfigurationError(AdapterError):
    """Raised when configuration or required dependencies are invalid."""


class AdapterConnectionError(AdapterError):
    """Raised when establishing or using a connection fails."""


class AdapterExecutionError(AdapterError):
    """Raised when SQL execution or parameter validation fails."""


class AdapterTransactionError(AdapterError):
    """Raised when transaction operations fail."""


@dataclass
class SSLConfig:
    mode: str | None = None
    rootcert: str | None = None
    cert: str | None = None
    key: str | None = None
    ca: str | None = None
    check_hostname: bool | None = None

    def is_empty(self) -> bool:
        return not any(
            [self.mode, self.rootcert, self.cert, self.key, self.ca, self.check_hostname is not None]
        )

    def postgres_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self.mode:
            options["sslmode"] = self.mode
        if self.rootcert:
            options["sslrootcert"] = self.rootcert
        if self.cert:
            options["sslcert"] = self.cert
        if self.key:
            options["sslkey"] = self.key
        return options

    def mysql_options(self) -> dict[str, Any]:
        ssl: dict[str, Any] = {}
        if self.ca:
            ssl["ca"] = self.ca
        if self.cert:
            ssl["cert"] = self.cert
        if self.key:
            ssl["key"] = self.key
        if self.check_hostname is not None:
            ssl["check_hostname"] = self.check_hostname
        if not ssl:
            return {}
        return {"ssl": ssl}


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# DSN query key -> SSLConfig attribute
_SSL_QUERY_KEYS = {
    "sslmode": "mode",
    "sslrootcert": "rootcert",
    "sslcert": "cert",
    "sslkey": "key",
    "ssl_ca": "ca",
    "ssl_cert": "cert",
    "ssl_key": "key",
}


def parse_bool(value: str, *, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise AdapterConfigurationError(f"Invalid boolean value for '{key}': {value!r}")


def _parse_number(value: str, *, key: str, kind: type) -> Any:
    try:
        return kind(value)
    except ValueError as exc:
        raise AdapterConfigurationError(
            f"Invalid {kind.__name__} value for '{key}': {value!r}"
        ) from exc


def _pop(query: dict[str, str], key: str, convert) -> Any:
    if key not in query:
        return None
    return convert(query.pop(key), key=key)


def _parse_ssl(query: dict[str, str]) -> SSLConfig | None:
    ssl = SSLConfig()
    for query_key, attribute in _SSL_QUERY_KEYS.items():
        if query_key in query:
            setattr(ssl, attribute, query.pop(query_key))
    if "ssl_check_hostname" in query:
        ssl.check_hostname = parse_bool(query.pop("ssl_check_hostname"), key="ssl_check_hostname")
    return None if ssl.is_empty() else ssl


def _parse_option_values(query: dict[str, str]) -> dict[str, Any]:
    options: dict[str, Any] = {}
    for key, value in query.items():
        if key == "connect_timeout":
            options[key] = _parse_number(value, key=key, kind=int)
        else:
            options[key] = value
    return options


@dataclass
class ConnectionConfig:
    """
    Normalized connection configuration for adapters.

    ``database_id`` names the database family used for dialect-specific
    behaviour such as explain syntax; when absent the adapter dialect decides.
    """

    url: str
    autocommit: bool = False
    isolation_level: str | None = None
    timeout: float | None = None
    slow_query_ms: int | None = None
    database_id: str | None = None
    options: dict[str, Any] | None = None
    ssl: SSLConfig | None = None
    dsn: DSNConfig | None = None
    source: str | None = None

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a connection config by parsing the DSN string.

        Keyword arguments win over values found in the DSN query string.
        """

        parsed = parse_dsn(dsn)
        query = dict(parsed.query)

        from_query: dict[str, Any] = {
            "autocommit": _pop(query, "autocommit", parse_bool),
            "timeout": _pop(query, "timeout", lambda v, key: _parse_number(v, key=key, kind=float)),
            "slow_query_ms": _pop(
                query, "slow_query_ms", lambda v, key: _parse_number(v, key=key, kind=int)
            ),
            "isolation_level": query.pop("isolation_level", None),
            "database_id": query.pop("database_id", None),
            "ssl": _parse_ssl(query),
        }
        options = _parse_option_values(query)
        options.update(kwargs.pop("options", None) or {})

        values = {key: kwargs.pop(key, value) for key, value in from_query.items()}
        if values["autocommit"] is None:
            values["autocommit"] = False

        return cls(url=dsn, dsn=parsed, options=options or None, **values, **kwargs)

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "ConnectionConfig":
        """
        Build a config from an environment variable containing a DSN.
        """

        value = os.getenv(env_var)
        if not value:
            raise AdapterConfigurationError(f"Environment variable {env_var} is not set")
        return cls.from_dsn(value, source=env_var, **kwargs)

    @property
    def backend(self) -> str | None:
        if self.dsn is not None:
            return self.dsn.backend
        return parse_dsn(self.url).backend

    def redacted_dsn(self) -> str:
        """
        Return a DSN safe for logging (credentials removed).
        """

        if self.dsn:
            return self.dsn.redacted()
        return self.url

    def descriptive_label(self) -> str:
        redacted = self.redacted_dsn()
        if self.source:
            return f"{self.source} ({redacted})"
        return redacted


class DatabaseAdapter(Protocol):
    """
    Adapter interface exposing the database operations used by the executor.
    """

    dialect: Dialect
    slow_query_ms: int

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Establish a connection handle using the supplied configuration.
        """

    def connection(self) -> Any:
        """
        Return the live DB-API connection, failing when not connected.
        """

    def current_connection(self) -> Any | None:
        """
        Return the open connection, or ``None``. Never connects or reconnects.
        """

    def savepoint(self) -> ContextManager[None]:
        """
        Scope in which a failed statement leaves the enclosing transaction usable.
        """

    def close(self) -> None:
        """
        Close underlying resources. Implementations should be idempotent.
        """

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> Any:
        """
        Execute a single SQL statement returning an open DB-API cursor.
        """

    def commit(self) -> None:
        """
        Commit the current transaction.
        """

    def rollback(self) -> None:
        """
        Roll back the current transaction.
        """


def count_format_placeholders(sql: str) -> int:
    """
    Count ``%s`` placeholders, skipping ``%%`` escapes.
    """

    count = 0
    idx = 0
    while idx < len(sql) - 1:
        if sql[idx] == "%" and sql[idx + 1] == "s":
            count += 1
            idx += 2
            continue
        if sql[idx] == "%" and sql[idx + 1] == "%":
            idx += 2
            continue
        idx += 1
    return count


def validate_param_count(placeholder_count: int, params: Sequence[Any]) -> None:
    if placeholder_count == 0:
        if params:
            raise AdapterExecutionError("Parameters provided but SQL statement has no placeholders.")
        return
    if placeholder_count != len(params):
        raise AdapterExecutionError(
            f"Parameter count mismatch: expected {placeholder_count}, received {len(params)}."
        )
