"""
Validation engine: fail-fast and harvest-all reduction of rule lists.

Given a value and an ordered list of rules, the engine produces a single
Result: ``Ok(value)`` with the original object when every rule passes, or
``Err(ValidationError)`` describing what failed. Two strategies share one
reduction shape:

- **Fail-fast** (``check_quick``): rules run left to right and the first
  failure is returned as-is; later rules are never evaluated.
- **Harvest-all** (``check``): every rule runs against the original value and
  the messages of every failing rule are concatenated, in rule order, into
  one aggregate ValidationError.

Manifesto:
    - **Failures are values:** The engine never raises for a failed rule
    - **Order is contract:** Rule order decides which failure fail-fast
      reports and the message order harvest-all reports
    - **No sandboxing:** A predicate that raises propagates as a fault
    - **Explicit entry points:** Raw values go through check*/validate,
      already-produced Results through check*_chained/validate_chained

Architecture:
    ::

        rules (descriptors)                 reducer                outcome
        ───────────────────                 ───────                ───────
        Rule(predicate, error)   ┐
        (predicate, error)       ├─> rule functions ─> _fail_fast      ─> Ok(value)
        value -> Result          ┘                    _harvest_errors     Err(ValidationError)

        check_chained(Err(e), rules)  ─> Err(e)           (no rule evaluated)
        check_chained(Ok(v),  rules)  ─> check(v, rules)
        check_rule_chained(Ok(v), predicate, error) ─> check_rule(v, predicate, error)

Examples:
    >>> from eru.core.errors import error_from_message
    >>> person = {"age": 11, "name": ""}
    >>> rules = [
    ...     (lambda p: p["age"] >= 18, error_from_message("Must have a valid age")),
    ...     (lambda p: p["name"].strip() != "", error_from_message("Must have a name")),
    ... ]
    >>> check(person, rules).error.messages
    ('Must have a valid age', 'Must have a name')
    >>> check_quick(person, rules).error.messages
    ('Must have a valid age',)

Guardrails:
    ❌ DON'T: Pass a single (predicate, error) pair as the rule list
    ✅ DO: Wrap it in a list, or use check_rule() / check_rule_chained()

    ❌ DON'T: Return Err(ValueError(...)) from a rule function
    ✅ DO: Return Err(ValidationError(...)) so messages can be aggregated

Tags:
    validation, fail-fast, error-aggregation, either, eru

Doc-Types:
    - API Reference
    - Validation Guide
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import reduce
from typing import Any, Generic, TypeVar, Union

from eru.core.enums import ReductionStrategy
from eru.core.errors import UsageError, ValidationError
from eru.core.logging import debug_enabled, get_logger
from eru.core.result import Err, Ok, Result, from_bool, is_result

logger = get_logger(__name__)

V = TypeVar("V")

RuleFunction = Callable[[V], Result[V]]
RuleDescriptor = Union[RuleFunction, tuple[Callable[[V], bool], ValidationError]]
Reducer = Callable[[tuple[RuleFunction, ...]], Callable[[V], Result[V]]]


@dataclass(frozen=True, slots=True)
class Rule(Generic[V]):
    """
    A predicate paired with the error to report when it is false.

    Calling a Rule turns it into a rule function: a truthy predicate gives
    ``Ok(value)``, a falsy one gives ``Err(error)``.

    Examples:
        >>> adult = Rule(lambda age: age >= 18, ValidationError("Must be an adult"))
        >>> adult(21)
        Ok(21)
        >>> adult(11)
        Err(ValidationError('Must be an adult'))
    """

    predicate: Callable[[V], bool]
    error: ValidationError

    def __post_init__(self) -> None:
        if not callable(self.predicate):
            raise UsageError(
                f"Rule predicate must be callable, got {type(self.predicate).__name__}"
            )
        if not isinstance(self.error, ValidationError):
            raise UsageError(
                f"Rule error must be a ValidationError, got {type(self.error).__name__}; "
                "use error_from_message() to build one"
            )

    def __call__(self, value: V) -> Result[V]:
        return from_bool(bool(self.predicate(value)), value, self.error)


# =============================================================================
# RULE NORMALIZATION
# =============================================================================


def _as_rule_function(descriptor: Any, index: int) -> RuleFunction:
    if isinstance(descriptor, tuple):
        if len(descriptor) != 2:
            raise UsageError(
                f"Rule pair must be (predicate, error), got a {len(descriptor)}-tuple"
            ).with_context(rule_index=index)
        try:
            return Rule(*descriptor)
        except UsageError as exc:
            raise exc.with_context(rule_index=index)
    if callable(descriptor):
        return descriptor
    raise UsageError(
        f"Rule must be a callable or a (predicate, error) pair, got {type(descriptor).__name__}"
    ).with_context(rule_index=index)


def _normalize_rules(rules: Iterable[RuleDescriptor]) -> tuple[RuleFunction, ...]:
    if isinstance(rules, (str, bytes)) or not isinstance(rules, Iterable):
        raise UsageError(
            f"Rules must be an ordered sequence, got {type(rules).__name__}"
        )
    if (
        isinstance(rules, tuple)
        and len(rules) == 2
        and callable(rules[0])
        and isinstance(rules[1], ValidationError)
    ):
        raise UsageError(
            "Got a single (predicate, error) pair where a rule list was expected; "
            "wrap it in a list, or use check_rule() / check_rule_chained()"
        )
    return tuple(_as_rule_function(descriptor, index) for index, descriptor in enumerate(rules))


def _evaluate(rule: RuleFunction, value: V, index: int, strategy: ReductionStrategy) -> Result[V]:
    outcome = rule(value)
    if not is_result(outcome):
        raise UsageError(
            f"Rule function must return Ok or Err, got {type(outcome).__name__}"
        ).with_context(rule_index=index, strategy=strategy.value)
    if outcome.is_err():
        if not isinstance(outcome.error, ValidationError):
            raise UsageError(
                f"Rule function failed with {type(outcome.error).__name__}; "
                "expected a ValidationError"
            ).with_context(rule_index=index, strategy=strategy.value)
        if debug_enabled(__name__):
            logger.debug(
                "validation_rule_failed",
                strategy=strategy.value,
                rule_index=index,
                messages=len(outcome.error),
            )
    return outcome


# =============================================================================
# REDUCTION STRATEGIES
# =============================================================================


def _fail_fast(rules: tuple[RuleFunction, ...]) -> Callable[[V], Result[V]]:
    def reduce_rules(value: V) -> Result[V]:
        for index, rule in enumerate(rules):
            outcome = _evaluate(rule, value, index, ReductionStrategy.FAIL_FAST)
            if outcome.is_err():
                if debug_enabled(__name__):
                    logger.debug(
                        "validation_short_circuited",
                        rule_index=index,
                        skipped=len(rules) - index - 1,
                    )
                return outcome
        return Ok(value)

    return reduce_rules


def _harvest_errors(rules: tuple[RuleFunction, ...]) -> Callable[[V], Result[V]]:
    def reduce_rules(value: V) -> Result[V]:
        errors = [
            error
            for index, rule in enumerate(rules)
            for error in _evaluate(rule, value, index, ReductionStrategy.HARVEST_ALL).alternatives()
        ]
        if not errors:
            return Ok(value)

        aggregate = reduce(ValidationError.combine, errors)
        if debug_enabled(__name__):
            logger.debug(
                "validation_failed",
                strategy=ReductionStrategy.HARVEST_ALL.value,
                failed_rules=len(errors),
                total_rules=len(rules),
                messages=len(aggregate),
            )
        return Err(aggregate)

    return reduce_rules


_REDUCERS: dict[ReductionStrategy, Reducer] = {
    ReductionStrategy.FAIL_FAST: _fail_fast,
    ReductionStrategy.HARVEST_ALL: _harvest_errors,
}


def _check(value: V, reduce_rules: Reducer, rules: tuple[RuleFunction, ...]) -> Result[V]:
    return reduce_rules(rules)(value)


def _require_result(result: Any) -> None:
    if not is_result(result):
        raise UsageError(
            f"Chained validation expects an Ok or Err, got {type(result).__name__}; "
            "use check()/check_quick() for raw values"
        )


def _resolve_strategy(strategy: ReductionStrategy | str) -> ReductionStrategy:
    try:
        return ReductionStrategy(strategy)
    except ValueError as exc:
        valid = ", ".join(s.value for s in ReductionStrategy)
        raise UsageError(
            f"Unknown reduction strategy {strategy!r} (expected one of: {valid})", cause=exc
        ) from exc


# =============================================================================
# PUBLIC ENTRY POINTS
# =============================================================================


def check_quick(value: V, rules: Iterable[RuleDescriptor]) -> Result[V]:
    """
    Validate and stop at the first failing rule (fail-fast).

    Returns the first failing rule's Err unchanged, or ``Ok(value)`` holding
    the original object when every rule passes. Rules after the first
    failure are never evaluated.
    """
    return _check(value, _fail_fast, _normalize_rules(rules))


def check(value: V, rules: Iterable[RuleDescriptor]) -> Result[V]:
    """
    Validate and aggregate every failing rule's messages (harvest-all).

    Every rule is evaluated against the original value. Returns
    ``Ok(value)`` when none fail, otherwise one Err whose ValidationError
    holds the failing rules' messages in rule order.
    """
    return _check(value, _harvest_errors, _normalize_rules(rules))


def check_rule(value: V, predicate: Callable[[V], bool], error: ValidationError) -> Result[V]:
    """Harvest-all validation against a single (predicate, error) pair."""
    return check(value, [Rule(predicate, error)])


def check_quick_rule(value: V, predicate: Callable[[V], bool], error: ValidationError) -> Result[V]:
    """Fail-fast validation against a single (predicate, error) pair."""
    return check_quick(value, [Rule(predicate, error)])


def check_chained(result: Result[V], rules: Iterable[RuleDescriptor]) -> Result[V]:
    """
    Harvest-all validation of an already-produced Result.

    An Err is returned unchanged and no rule is evaluated; an ``Ok(v)`` is
    validated with ``check(v, rules)``.
    """
    _require_result(result)
    normalized = _normalize_rules(rules)
    return result.flat_map(lambda value: _check(value, _harvest_errors, normalized))


def check_quick_chained(result: Result[V], rules: Iterable[RuleDescriptor]) -> Result[V]:
    """Fail-fast counterpart of check_chained()."""
    _require_result(result)
    normalized = _normalize_rules(rules)
    return result.flat_map(lambda value: _check(value, _fail_fast, normalized))


def check_rule_chained(
    result: Result[V], predicate: Callable[[V], bool], error: ValidationError
) -> Result[V]:
    """Harvest-all validation of an already-produced Result against one pair."""
    _require_result(result)
    rule = Rule(predicate, error)
    return result.flat_map(lambda value: check(value, [rule]))


def check_quick_rule_chained(
    result: Result[V], predicate: Callable[[V], bool], error: ValidationError
) -> Result[V]:
    """Fail-fast counterpart of check_rule_chained()."""
    _require_result(result)
    rule = Rule(predicate, error)
    return result.flat_map(lambda value: check_quick(value, [rule]))


def validate(
    value: V,
    rules: Iterable[RuleDescriptor],
    strategy: ReductionStrategy | str = ReductionStrategy.HARVEST_ALL,
) -> Result[V]:
    """
    Validate a raw value with the named strategy (harvest-all by default).

    ``strategy`` is a ReductionStrategy or its string value; an unknown
    name raises UsageError.
    """
    reducer = _REDUCERS[_resolve_strategy(strategy)]
    return _check(value, reducer, _normalize_rules(rules))


def validate_chained(
    result: Result[V],
    rules: Iterable[RuleDescriptor],
    strategy: ReductionStrategy | str = ReductionStrategy.HARVEST_ALL,
) -> Result[V]:
    """Validate an already-produced Result with the named strategy."""
    _require_result(result)
    reducer = _REDUCERS[_resolve_strategy(strategy)]
    normalized = _normalize_rules(rules)
    return result.flat_map(lambda value: _check(value, reducer, normalized))


__all__ = [
    "Rule",
    "RuleFunction",
    "RuleDescriptor",
    "ReductionStrategy",
    "check",
    "check_quick",
    "check_rule",
    "check_quick_rule",
    "check_chained",
    "check_quick_chained",
    "check_rule_chained",
    "check_quick_rule_chained",
    "validate",
    "validate_chained",
]
