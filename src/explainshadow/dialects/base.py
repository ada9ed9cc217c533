"""
Dialect strategy interfaces describing how statements are rendered per backend.
"""

from __future__ import annotations

from typing import Protocol


class Dialect(Protocol):
    """
    Strategy interface consumed by the mapping and adapter layers.
    """

    @property
    def name(self) -> str: ...

    @property
    def param_style(self) -> str: ...

    @property
    def database_id(self) -> str: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def parameter_placeholder(self, position: int | None = None) -> str: ...
