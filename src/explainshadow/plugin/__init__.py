"""
Executor plugins.
"""

from .explain import PLAN_MARKER, ExplainInterceptor, format_plan_row
from .interceptor import InterceptedExecutor, Interceptor, InterceptorChain, Invocation, OperationKind

__all__ = [
    "PLAN_MARKER",
    "ExplainInterceptor",
    "InterceptedExecutor",
    "Interceptor",
    "InterceptorChain",
    "Invocation",
    "OperationKind",
    "format_plan_row",
]
