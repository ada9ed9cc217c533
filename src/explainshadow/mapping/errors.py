"""
Error hierarchy for statement mapping and parameter binding.
"""

from __future__ import annotations


class MappingError(RuntimeError):
    """Base error for mapped statement problems."""


class BindingError(MappingError):
    """Raised when a parameter object cannot supply a mapped value."""


class StatementNotFoundError(MappingError):
    """Raised when a statement id is not registered."""

    def __init__(self, statement_id: str) -> None:
        self.statement_id = statement_id
        super().__init__(f"Mapped statement '{statement_id}' is not registered.")


class StatementConfigurationError(MappingError):
    """Raised when a statement definition is invalid or duplicated."""
