"""
Structured error types for eru.

Provides a small hierarchy of typed errors with metadata for categorization,
logging and reporting. The most important member is ValidationError, the
ordered and combinable error aggregate that the validation engine carries in
the alternative branch of a Result.

Two very different things are modelled here:

- **Failures as values:** ValidationError instances are normally *returned*
  inside Err, never raised by the engine. Callers inspect the Result.
- **Faults:** UsageError and ConfigError are raised when the library itself
  is called incorrectly (empty message list, unknown rule shape, bad setting).

Manifesto:
    - **Explicit construction:** No implicit conversion from strings or
      string lists. Use error_from_message() / error_from_messages().
    - **Order is contract:** Messages keep the order they were given in, and
      combine() concatenates first-operand-first.
    - **Value equality:** Two aggregates are equal iff their message
      sequences are equal element by element.
    - **Rich context:** Errors carry an ErrorContext for logging.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────┐
        │                      EruError                         │
        │       (category, retryable, context, cause)           │
        ├──────────────────┬──────────────────┬────────────────┤
        │ ValidationError  │   UsageError     │  ConfigError   │
        │ (VALIDATION)     │   (USAGE)        │  (CONFIG)      │
        │ messages: tuple  │                  │                │
        │ combine() / +    │                  │                │
        └──────────────────┴──────────────────┴────────────────┘

Examples:
    >>> first = error_from_message("Must have a valid age")
    >>> second = error_from_message("Must have a name")
    >>> first.combine(second).messages
    ('Must have a valid age', 'Must have a name')
    >>> error_from_messages(["a", "b"]) == ValidationError("a", "b")
    True

Tags:
    errors, error-aggregate, validation, eru-core

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification.

    Attributes:
        VALIDATION: Rule failures reported by the validation engine
        USAGE: The library was called with arguments it cannot accept
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    VALIDATION = "VALIDATION"     # Rule failures (returned, not raised)
    USAGE = "USAGE"               # Bad arguments to the library
    CONFIG = "CONFIG"             # Missing config, invalid settings

    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only non-None fields end up in to_dict(), so a bare ErrorContext
    serializes to an empty dict.

    Attributes:
        rule_index: Position of the rule that produced or triggered the error
        strategy: Reduction strategy in effect ("fail_fast" / "harvest_all")
        metadata: Additional key-value pairs
    """

    rule_index: int | None = None
    strategy: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["rule_index", "strategy"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class EruError(Exception):
    """
    Base exception for all eru errors.

    Every EruError carries a category, a retryable flag, an ErrorContext and
    an optional chained cause. Subclasses set ``default_category`` and
    ``default_retryable`` to provide sensible defaults.

    Examples:
        >>> error = EruError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(strategy="fail_fast").context.strategy
        'fail_fast'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> EruError:
        """
        Add context to this error (fluent API).

        Usage:
            raise UsageError("Unknown rule").with_context(rule_index=2)
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# MISUSE ERRORS (raised)
# =============================================================================


class UsageError(EruError):
    """
    The library was called with arguments it cannot work with.

    Never retryable - the calling code must be fixed.
    """

    default_category = ErrorCategory.USAGE
    default_retryable = False


class ConfigError(EruError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# VALIDATION ERROR AGGREGATE (returned)
# =============================================================================


class ValidationError(EruError):
    """
    Ordered, immutable, combinable sequence of validation messages.

    ValidationError is the alternative payload of every failed validation.
    It always holds at least one message. Combining two aggregates yields a
    new aggregate holding the left operand's messages followed by the right
    operand's messages; neither operand is modified.

    Examples:
        >>> error = ValidationError("Must have a valid age")
        >>> error.messages
        ('Must have a valid age',)
        >>> (error + ValidationError("Must have a name")).messages
        ('Must have a valid age', 'Must have a name')

    Guardrails:
        ❌ DON'T: Pass a bare string where an aggregate is expected
        ✅ DO: Wrap it with error_from_message()

        ❌ DON'T: Compare str(error) to check messages
        ✅ DO: Compare error.messages (or two aggregates directly)
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        *messages: str,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        if not messages:
            raise UsageError("ValidationError requires at least one message")
        for position, message in enumerate(messages):
            if not isinstance(message, str):
                raise UsageError(
                    f"ValidationError messages must be str, got {type(message).__name__}"
                ).with_context(position=position)
        self._messages: tuple[str, ...] = tuple(messages)
        super().__init__("; ".join(self._messages), context=context, cause=cause)

    @property
    def messages(self) -> tuple[str, ...]:
        """The message sequence, in declared order."""
        return self._messages

    def combine(self, other: ValidationError) -> ValidationError:
        """Concatenate message sequences, ``self`` first."""
        if not isinstance(other, ValidationError):
            raise UsageError(
                f"Cannot combine ValidationError with {type(other).__name__}"
            )
        return ValidationError(*self._messages, *other._messages)

    def __add__(self, other: object) -> ValidationError:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.combine(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._messages == other._messages

    def __hash__(self) -> int:
        return hash(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self):
        return iter(self._messages)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["messages"] = list(self._messages)
        return result

    def __reduce__(self):
        # Messages go through __init__ for validation; context and cause are state.
        return (self.__class__, self._messages, {"context": self.context, "cause": self.cause})

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.context = state["context"]
        self.cause = state["cause"]
        if self.cause is not None:
            self.__cause__ = self.cause

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(repr(m) for m in self._messages)})"


def error_from_message(message: str) -> ValidationError:
    """Build an aggregate holding a single message."""
    return ValidationError(message)


def error_from_messages(messages: Iterable[str]) -> ValidationError:
    """Build an aggregate from an ordered sequence of messages (at least one)."""
    if isinstance(messages, str):
        raise UsageError("error_from_messages expects a sequence of str, not a str")
    return ValidationError(*messages)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, EruError):
        return error.category
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.USAGE
    return ErrorCategory.UNKNOWN


__all__ = [
    # Category enum
    "ErrorCategory",
    # Context
    "ErrorContext",
    # Base
    "EruError",
    # Misuse
    "UsageError",
    "ConfigError",
    # Aggregate
    "ValidationError",
    "error_from_message",
    "error_from_messages",
    # Utilities
    "categorize_error",
]
