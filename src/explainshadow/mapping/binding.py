"""
Parameter binding shared by primary statements and their explain shadows.
"""

from __future__ import annotations

import datetime
import decimal
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from .errors import BindingError
from .sql_source import BoundSql

if TYPE_CHECKING:
    from .statement import MappedStatement

# Parameter objects of these types are bound as-is to every placeholder.
SIMPLE_TYPES = (
    str,
    int,
    float,
    bool,
    bytes,
    bytearray,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    Enum,
)

_MISSING = object()


def _convert(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


class ParameterBinder:
    """
    Resolves the ordered driver parameters for one statement invocation.
    """

    def __init__(self, statement: "MappedStatement", parameter: Any, bound_sql: BoundSql) -> None:
        self.statement = statement
        self.parameter = parameter
        self.bound_sql = bound_sql

    def values(self) -> tuple[Any, ...]:
        return tuple(
            _convert(self._resolve(mapping.property)) for mapping in self.bound_sql.parameter_mappings
        )

    def names(self) -> tuple[str, ...]:
        return tuple(mapping.property for mapping in self.bound_sql.parameter_mappings)

    def _resolve(self, name: str) -> Any:
        parameter = self.parameter
        if parameter is None:
            return None
        if isinstance(parameter, SIMPLE_TYPES):
            return parameter
        current = parameter
        for segment in name.split("."):
            current = self._lookup(current, segment)
            if current is _MISSING:
                raise BindingError(
                    f"No value for parameter '{name}' in {type(parameter).__name__} "
                    f"(statement '{self.statement.id}')."
                )
            if current is None:
                return None
        return current

    @staticmethod
    def _lookup(source: Any, key: str) -> Any:
        if isinstance(source, Mapping):
            return source[key] if key in source else _MISSING
        return getattr(source, key, _MISSING)
