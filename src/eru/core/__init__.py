"""Eru Core -- the Either primitive, error aggregate, settings and logging.

Architecture::

    enums.py       Shared enums (ReductionStrategy)
    errors.py      EruError hierarchy + ValidationError aggregate
    result.py      Result[T] envelope (Ok / Err / success / alternative / bind)
    settings.py    ERU_* environment settings (pydantic-settings)
    logging.py     Structured logging (structlog)
"""

from eru.core.enums import ReductionStrategy
from eru.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    EruError,
    UsageError,
    ValidationError,
    categorize_error,
    error_from_message,
    error_from_messages,
)
from eru.core.result import (
    Err,
    Ok,
    Result,
    alternative,
    alternatives,
    bind,
    from_bool,
    is_result,
    success,
)

__all__ = [
    # Enums
    "ReductionStrategy",
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "EruError",
    "UsageError",
    "ConfigError",
    "ValidationError",
    "error_from_message",
    "error_from_messages",
    "categorize_error",
    # Result
    "Result",
    "Ok",
    "Err",
    "success",
    "alternative",
    "bind",
    "alternatives",
    "from_bool",
    "is_result",
]
