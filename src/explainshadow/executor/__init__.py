"""
Statement executors, transactions and result pagination.
"""

from .base import CacheKey, Executor, ExecutorError, ResultHandler, Row, RowBounds, TooManyResultsError
from .cache import LocalCache
from .simple import SimpleExecutor
from .transaction import Transaction

__all__ = [
    "CacheKey",
    "Executor",
    "ExecutorError",
    "LocalCache",
    "ResultHandler",
    "Row",
    "RowBounds",
    "SimpleExecutor",
    "TooManyResultsError",
    "Transaction",
]
