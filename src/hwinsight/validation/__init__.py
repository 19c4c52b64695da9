"""
Validation and error handling for the hwinsight package.

This module provides input validation and error handling with consistent
error reporting across the engine, its views and the CLI.
"""

from .exceptions import (
    ArchiveQueryError,
    ErrorSeverity,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_query_error,
)

from .validators import (
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_timestamp,
    validate_timezone,
    validate_usage_range,
)

__all__ = [
    "ArchiveQueryError",
    "ErrorSeverity",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_query_error",
    "validate_enum_choice",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_timestamp",
    "validate_timezone",
    "validate_usage_range",
]
