"""Security helpers for explainshadow."""

from .dsns import DSNConfig, parse_dsn
from .redaction import REDACTED_VALUE, describe_params, redact_params, redact_value

__all__ = [
    "DSNConfig",
    "REDACTED_VALUE",
    "describe_params",
    "parse_dsn",
    "redact_params",
    "redact_value",
]
