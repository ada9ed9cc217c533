"""
Executor protocol and the value types passed through it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..mapping import BoundSql, MappedStatement
    from .transaction import Transaction

Row = dict[str, Any]
ResultHandler = Callable[[Row], None]


class ExecutorError(RuntimeError):
    """Raised when an executor is misused, e.g. after being closed."""


class TooManyResultsError(ExecutorError):
    """Raised when a single-row select returns more than one row."""


@dataclass(frozen=True)
class RowBounds:
    """
    Client-side pagination applied while reading a result.
    """

    offset: int = 0
    limit: Optional[int] = None

    DEFAULT: ClassVar["RowBounds"]

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("RowBounds offset must be >= 0.")
        if self.limit is not None and self.limit < 0:
            raise ValueError("RowBounds limit must be >= 0 or None.")


RowBounds.DEFAULT = RowBounds()


@dataclass(frozen=True)
class CacheKey:
    """
    Identity of a query invocation for the executor's local cache.
    """

    statement_id: str
    offset: int
    limit: Optional[int]
    sql: str
    fingerprint: str

    @classmethod
    def build(
        cls, statement_id: str, row_bounds: RowBounds, sql: str, params: Sequence[Any]
    ) -> "CacheKey":
        return cls(statement_id, row_bounds.offset, row_bounds.limit, sql, _fingerprint(params))


def _fingerprint(params: Sequence[Any]) -> str:
    normalized = []
    for value in params:
        if isinstance(value, (list, tuple)):
            normalized.append(tuple(value))
        elif isinstance(value, dict):
            normalized.append(tuple(sorted(value.items())))
        elif isinstance(value, bytearray):
            normalized.append(bytes(value))
        else:
            normalized.append(value)
    return repr(tuple(normalized))


class Executor(Protocol):
    """
    The three interceptable statement operations plus transaction control.
    """

    @property
    def transaction(self) -> "Transaction": ...

    def query(
        self,
        statement: "MappedStatement",
        parameter: Any,
        row_bounds: RowBounds = RowBounds.DEFAULT,
        result_handler: ResultHandler | None = None,
    ) -> list[Row]: ...

    def query_with_cache_key(
        self,
        statement: "MappedStatement",
        parameter: Any,
        row_bounds: RowBounds,
        result_handler: ResultHandler | None,
        cache_key: CacheKey,
        bound_sql: "BoundSql",
    ) -> list[Row]: ...

    def update(self, statement: "MappedStatement", parameter: Any) -> int: ...

    def create_cache_key(
        self,
        statement: "MappedStatement",
        parameter: Any,
        row_bounds: RowBounds,
        bound_sql: "BoundSql",
    ) -> CacheKey: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def close(self, *, rollback: bool = False) -> None: ...

    @property
    def closed(self) -> bool: ...
