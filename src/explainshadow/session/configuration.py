"""
Configuration shared by every session created from one factory.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..adapters.base import ConnectionConfig, DatabaseAdapter
from ..adapters.registry import adapter_factory_for
from ..dialects.base import Dialect
from ..executor import Executor, SimpleExecutor, Transaction
from ..mapping import (
    BoundSql,
    CommandType,
    MappedStatement,
    ParameterBinder,
    StatementConfigurationError,
    StatementNotFoundError,
    StatementType,
)
from ..plugin import Interceptor, InterceptorChain
from ..utils import get_logger


class Configuration:
    """
    Registry of mapped statements, interceptors and connection settings.

    ``database_id`` identifies the target database family for statements
    registered without their own id. It falls back to the connection
    config's ``database_id`` and then to the adapter dialect's.
    """

    def __init__(
        self,
        adapter_factory: Callable[[], DatabaseAdapter],
        connection_config: ConnectionConfig,
        *,
        dialect: Optional[Dialect] = None,
        database_id: Optional[str] = None,
    ) -> None:
        self.adapter_factory = adapter_factory
        self.connection_config = connection_config
        self.dialect: Dialect = dialect or adapter_factory().dialect
        self.database_id = database_id or connection_config.database_id or self.dialect.database_id
        self.interceptor_chain = InterceptorChain()
        self._statements: Dict[str, MappedStatement] = {}
        self.logger = get_logger("session.configuration")

    @classmethod
    def from_dsn(cls, dsn: str, **kwargs: Any) -> "Configuration":
        database_id = kwargs.pop("database_id", None)
        config = ConnectionConfig.from_dsn(dsn, **kwargs)
        return cls(adapter_factory_for(config), config, database_id=database_id)

    @classmethod
    def from_env(cls, env_var: str, **kwargs: Any) -> "Configuration":
        database_id = kwargs.pop("database_id", None)
        config = ConnectionConfig.from_env(env_var, **kwargs)
        return cls(adapter_factory_for(config), config, database_id=database_id)

    # ------------------------------------------------------------------ #
    # Statements
    # ------------------------------------------------------------------ #
    def add_statement(
        self,
        statement_id: str,
        sql: str,
        command_type: CommandType,
        *,
        statement_type: StatementType = StatementType.PREPARED,
        database_id: Optional[str] = None,
        statement_log: Optional[logging.Logger] = None,
    ) -> MappedStatement:
        if statement_id in self._statements:
            raise StatementConfigurationError(f"Mapped statement '{statement_id}' is already registered.")
        statement = MappedStatement(
            id=statement_id,
            sql=sql,
            command_type=command_type,
            configuration=self,
            statement_type=statement_type,
            database_id=database_id or self.database_id,
            statement_log=statement_log,
        )
        self._statements[statement_id] = statement
        self.logger.debug("Registered statement %s (%s)", statement_id, command_type.value)
        return statement

    def get_statement(self, statement_id: str) -> MappedStatement:
        try:
            return self._statements[statement_id]
        except KeyError:
            raise StatementNotFoundError(statement_id) from None

    def has_statement(self, statement_id: str) -> bool:
        return statement_id in self._statements

    @property
    def statements(self) -> tuple[MappedStatement, ...]:
        return tuple(self._statements.values())

    # ------------------------------------------------------------------ #
    # Plugins and factories
    # ------------------------------------------------------------------ #
    def add_interceptor(self, interceptor: Interceptor) -> None:
        self.interceptor_chain.add_interceptor(interceptor)

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self.interceptor_chain.interceptors

    def new_transaction(self) -> Transaction:
        return Transaction(self.adapter_factory(), self.connection_config)

    def new_executor(self, transaction: Transaction) -> Executor:
        executor: Executor = SimpleExecutor(self, transaction)
        return self.interceptor_chain.plugin_all(executor)

    def new_parameter_binder(
        self, statement: MappedStatement, parameter: Any, bound_sql: BoundSql
    ) -> ParameterBinder:
        return ParameterBinder(statement, parameter, bound_sql)
