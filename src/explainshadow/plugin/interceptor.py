"""
Interception of executor operations by registered plugins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Mapping

from ..executor.base import RowBounds

if TYPE_CHECKING:
    from ..executor.base import Executor
    from ..mapping import MappedStatement


class OperationKind(Enum):
    """
    The executor operations an interceptor can wrap.
    """

    QUERY = "query"
    QUERY_WITH_CACHE_KEY = "query_with_cache_key"
    UPDATE = "update"


@dataclass(frozen=True)
class Invocation:
    """
    A pending executor call. ``args`` are positional, in the executor method's order.
    """

    target: "Executor"
    kind: OperationKind
    args: tuple[Any, ...]

    @property
    def statement(self) -> "MappedStatement":
        return self.args[0]

    @property
    def parameter(self) -> Any:
        return self.args[1]

    def proceed(self) -> Any:
        return getattr(self.target, self.kind.value)(*self.args)


class Interceptor(ABC):
    """
    Base class for executor plugins.
    """

    @abstractmethod
    def intercept(self, invocation: Invocation) -> Any:
        """
        Handle ``invocation``; implementations call ``invocation.proceed()``.
        """

    def plugin(self, target: "Executor") -> "Executor":
        return InterceptedExecutor(target, self)

    def set_properties(self, properties: Mapping[str, str]) -> None:
        """
        Receive string properties from configuration. No-op by default.
        """


class InterceptedExecutor:
    """
    Executor decorator routing the interceptable operations through one interceptor.
    """

    def __init__(self, target: "Executor", interceptor: Interceptor) -> None:
        self._target = target
        self._interceptor = interceptor

    @property
    def target(self) -> "Executor":
        return self._target

    def query(self, statement, parameter, row_bounds=None, result_handler=None):
        row_bounds = row_bounds if row_bounds is not None else RowBounds.DEFAULT
        return self._invoke(OperationKind.QUERY, statement, parameter, row_bounds, result_handler)

    def query_with_cache_key(self, statement, parameter, row_bounds, result_handler, cache_key, bound_sql):
        return self._invoke(
            OperationKind.QUERY_WITH_CACHE_KEY,
            statement,
            parameter,
            row_bounds,
            result_handler,
            cache_key,
            bound_sql,
        )

    def update(self, statement, parameter):
        return self._invoke(OperationKind.UPDATE, statement, parameter)

    def _invoke(self, kind: OperationKind, *args: Any) -> Any:
        return self._interceptor.intercept(Invocation(self._target, kind, args))

    def __getattr__(self, name: str) -> Any:
        return getattr(self._target, name)


class InterceptorChain:
    """
    Ordered interceptor registry. The last interceptor added wraps outermost.
    """

    def __init__(self) -> None:
        self._interceptors: List[Interceptor] = []

    def add_interceptor(self, interceptor: Interceptor) -> None:
        self._interceptors.append(interceptor)

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return tuple(self._interceptors)

    def plugin_all(self, target: "Executor") -> "Executor":
        for interceptor in self._interceptors:
            target = interceptor.plugin(target)
        return target

    def clear(self) -> None:
        self._interceptors.clear()
