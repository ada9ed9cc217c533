"""
Resolution of ``#{name}`` parameter references into driver placeholders.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from ..dialects.base import Dialect
from .errors import StatementConfigurationError

# String literals are matched first so references inside them are left alone.
_TOKEN_RE = re.compile(
    r"""'(?:[^']|'')*'|"(?:[^"]|"")*"|\#\{\s*([^}]*?)\s*\}""",
    re.DOTALL,
)
_PROPERTY_RE = re.compile(r"^[A-Za-z_][\w]*(?:\.[A-Za-z_][\w]*)*$")


@dataclass(frozen=True)
class ParameterMapping:
    property: str
    position: int


@dataclass(frozen=True)
class BoundSql:
    """
    Driver-ready SQL with the ordered parameter mappings it needs.
    """

    sql: str
    parameter_mappings: tuple[ParameterMapping, ...] = ()
    parameter_object: Any = None


@dataclass(frozen=True)
class SqlSource:
    sql: str
    parameter_mappings: tuple[ParameterMapping, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, template: str, dialect: Dialect) -> "SqlSource":
        mappings: list[ParameterMapping] = []

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name is None:
                return match.group(0)
            if not _PROPERTY_RE.match(name):
                raise StatementConfigurationError(f"Invalid parameter reference '#{{{name}}}'.")
            position = len(mappings)
            mappings.append(ParameterMapping(property=name, position=position))
            return dialect.parameter_placeholder(position)

        sql = _TOKEN_RE.sub(replace, template)
        return cls(sql=sql, parameter_mappings=tuple(mappings))

    def bound_sql(self, parameter: Any) -> BoundSql:
        return BoundSql(sql=self.sql, parameter_mappings=self.parameter_mappings, parameter_object=parameter)
