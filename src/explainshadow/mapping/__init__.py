"""
Mapped statements, SQL template resolution and parameter binding.
"""

from .binding import ParameterBinder
from .errors import BindingError, MappingError, StatementConfigurationError, StatementNotFoundError
from .sql_source import BoundSql, ParameterMapping, SqlSource
from .statement import CommandType, MappedStatement, StatementType

__all__ = [
    "BindingError",
    "BoundSql",
    "CommandType",
    "MappedStatement",
    "MappingError",
    "ParameterBinder",
    "ParameterMapping",
    "SqlSource",
    "StatementConfigurationError",
    "StatementNotFoundError",
    "StatementType",
]
