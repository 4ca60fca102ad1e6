"""
Result envelope: the two-branch success/alternative container.

Provides a typed Result[T] pattern (the "Either" of the validation engine).
A Result is exactly one of Ok(value) or Err(error), immutable once built.
Operations on an Err short-circuit, so a failure flows through a chain of
flat_map calls untouched. That property is what the validation engine's
chained entry points rely on.

Manifesto:
    - **Explicit over Implicit:** Failures are values the caller must inspect
    - **Functional composition:** Chain with map/flat_map, no try/except
    - **Uniform collection:** alternatives() turns any Result into a 0- or
      1-element tuple of errors, so failures can be harvested with one
      comprehension

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        │                    (Type Alias)                              │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │     Module helpers      │
        │   (Success)     │  (Alternative)  │                         │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: Exc    │ • success()             │
        │ • map()         │ • map_err()     │ • alternative()         │
        │ • flat_map()    │ • or_else()     │ • bind()                │
        │ • fold()        │ • fold()        │ • alternatives()        │
        │ • alternatives()│ • alternatives()│ • from_bool()           │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> from eru.core.result import Ok, Err
    >>> from eru.core.errors import ValidationError
    >>> Ok(10).map(lambda x: x * 2).unwrap()
    20
    >>> failed = Err(ValidationError("Must have a name"))
    >>> failed.flat_map(lambda x: Ok(x + 1)) is failed
    True
    >>> Ok(1).alternatives(), failed.alternatives()
    ((), (ValidationError('Must have a name'),))

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use fold(), unwrap_or() or pattern matching

    ❌ DON'T: Raise exceptions inside flat_map functions for expected failures
    ✅ DO: Return Err from the function instead

Tags:
    result-pattern, either, functional-programming, monadic, eru-core

Doc-Types:
    - API Reference
    - Design Patterns Guide
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from eru.core.errors import EruError


T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Ok never copies or mutates the wrapped value: ``Ok(x).value is x``.

    Examples:
        >>> Ok(5).flat_map(lambda x: Ok(x * 2)).unwrap()
        10
        >>> Ok("x").fold(str.upper, lambda e: "failed")
        'X'
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        """Get value or call f with error (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Alias for flat_map."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform error if Err (no-op for Ok)."""
        return self

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        """Return self if Ok, otherwise call f with error."""
        return self

    def fold(self, on_ok: Callable[[T], R], on_err: Callable[[Exception], R]) -> R:
        """Collapse both branches into one value (calls on_ok for Ok)."""
        return on_ok(self.value)

    def alternatives(self) -> tuple[Exception, ...]:
        """Errors held by this result: always empty for Ok."""
        return ()

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        """Call f with value for side effects, return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        """Call f with error for side effects (no-op for Ok)."""
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Alternative (failed) result containing an error.

    Transformations of the success branch return this same instance, so a
    failure propagates unchanged through any chain of flat_map calls.

    Examples:
        >>> from eru.core.errors import ValidationError
        >>> err = Err(ValidationError("bad"))
        >>> err.map(lambda x: x * 2) is err
        True
        >>> err.unwrap_or("default")
        'default'
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        """Call f with error to get value."""
        return f(self.error)

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return self  # type: ignore[return-value]

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return self  # type: ignore[return-value]

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return self  # type: ignore[return-value]

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        """Call f with error to try recovery."""
        return f(self.error)

    def fold(self, on_ok: Callable[[T], R], on_err: Callable[[Exception], R]) -> R:
        """Collapse both branches into one value (calls on_err for Err)."""
        return on_err(self.error)

    def alternatives(self) -> tuple[Exception, ...]:
        """Errors held by this result: exactly one for Err."""
        return (self.error,)

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        """No-op for Err."""
        return self

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        """Call f with error for side effects, return self."""
        f(self.error)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, EruError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]


# =============================================================================
# CONSTRUCTORS AND HELPERS
# =============================================================================


def success(value: T) -> Result[T]:
    """Wrap *value* in the success branch."""
    return Ok(value)


def alternative(error: Exception) -> Result[Any]:
    """Wrap *error* in the alternative branch."""
    return Err(error)


def bind(result: Result[T], f: Callable[[T], Result[U]]) -> Result[U]:
    """Chain *f* through the success branch; an Err is returned unchanged."""
    return result.flat_map(f)


def alternatives(result: Result[T]) -> tuple[Exception, ...]:
    """Zero errors for Ok, one error for Err."""
    return result.alternatives()


def from_bool(
    condition: bool,
    ok_value: T,
    error: Exception,
) -> Result[T]:
    """
    Create Result from boolean condition.

    Examples:
        >>> from eru.core.errors import ValidationError
        >>> age = 15
        >>> from_bool(age >= 18, age, ValidationError("Must be 18 or older")).is_err()
        True
    """
    if condition:
        return Ok(ok_value)
    return Err(error)


def is_result(obj: object) -> bool:
    """True if *obj* is an Ok or an Err."""
    return isinstance(obj, (Ok, Err))


__all__ = [
    # Types
    "Result",
    "Ok",
    "Err",
    # Constructors
    "success",
    "alternative",
    "from_bool",
    # Helpers
    "bind",
    "alternatives",
    "is_result",
]
