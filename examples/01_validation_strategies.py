#!/usr/bin/env python3
"""Validation Strategies: Fail-Fast vs Harvest-All.

================================================================================
TWO WAYS TO REDUCE A RULE LIST
================================================================================

A rule is a predicate plus the error to report when it is false. Given a
value and an ordered list of rules, eru produces one Result:

    Ok(value)               every rule passed (the same object comes back)
    Err(ValidationError)    something failed

How much failure information survives depends on the strategy::

    check_quick(value, rules)   fail-fast: first failing rule only,
                                later rules never run
    check(value, rules)         harvest-all: every rule runs, every failing
                                rule's messages concatenated in rule order

Run:
    python examples/01_validation_strategies.py
"""

from dataclasses import dataclass

from eru import (
    Rule,
    check,
    check_chained,
    check_quick,
    error_from_message,
    validate,
)
from eru.core.logging import configure_logging


@dataclass
class Person:
    age: int
    name: str


RULES = [
    (lambda p: p.age >= 18, error_from_message("Must have a valid age")),
    (lambda p: p.name.strip() != "", error_from_message("Must have a name")),
]


def render(result) -> str:
    return result.fold(
        lambda person: f"OK: {person}",
        lambda error: "FAILED: " + " | ".join(error.messages),
    )


def main():
    configure_logging(level="DEBUG", json_format=False)

    print("=" * 60)
    print("Validation Strategies")
    print("=" * 60)

    minor = Person(age=11, name="")
    adult = Person(age=30, name="Ada")

    print("\n[1] Harvest-all reports every failure")
    print(f"  check(minor):       {render(check(minor, RULES))}")

    print("\n[2] Fail-fast reports the first failure")
    print(f"  check_quick(minor): {render(check_quick(minor, RULES))}")

    print("\n[3] Success returns the original object")
    result = check(adult, RULES)
    print(f"  check(adult).value is adult: {result.value is adult}")

    print("\n[4] Chaining: a prior failure is propagated untouched")
    first = check(minor, [Rule(lambda p: p.age >= 18, error_from_message("age"))])
    second = check_chained(first, [Rule(lambda p: p.name != "", error_from_message("name"))])
    print(f"  {render(second)}")

    print("\n[5] Strategy by name (harvest-all when omitted)")
    print(f"  validate(minor, 'fail_fast'): {render(validate(minor, RULES, 'fail_fast'))}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
