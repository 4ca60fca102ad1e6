"""
Continuation monad.

A Continuation[T, A] is a computation written as "give me a consumer of T
producing A, and I will produce the A". Nothing runs when continuations are
built or composed; composition happens by substitution, and the whole chain
executes only once a terminal consumer is supplied.

Manifesto:
    - **Deferred:** bind() never runs anything, calling the continuation does
    - **Pure:** No captured mutable state, no exceptions raised by the
      combinators themselves
    - **Lawful:** lift/bind satisfy left identity, right identity and
      associativity exactly

Architecture:
    ::

        lift(x)            k ──> k(x)
        bind(m, f)         k ──> m(lambda t: f(t)(k))
        m.map(g)           k ──> m(lambda t: k(g(t)))

Examples:
    >>> from eru.continuation import lift, bind
    >>> add_three = lambda i: lift(i + 3)
    >>> bind(lift(1), add_three)(lambda i: i * 10)
    40
    >>> lift(2).bind(add_three).map(str)(lambda s: s + "!")
    '5!'

Tags:
    continuation, cps, monad, functional-programming, eru

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar


T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")

Consumer = Callable[[T], A]


@dataclass(frozen=True, slots=True)
class Continuation(Generic[T, A]):
    """
    A deferred computation awaiting its final consumer.

    Wraps ``run``, a function from a consumer ``T -> A`` to the answer ``A``.
    Two continuations are equal only behaviorally: apply both to the same
    consumer and compare the answers.
    """

    run: Callable[[Callable[[T], A]], A]

    def __call__(self, consumer: Callable[[T], A]) -> A:
        return self.run(consumer)

    def bind(self, f: Callable[[T], Continuation[U, A]]) -> Continuation[U, A]:
        """Sequence *f* after this computation (see module-level bind())."""
        return bind(self, f)

    def flat_map(self, f: Callable[[T], Continuation[U, A]]) -> Continuation[U, A]:
        """Alias for bind."""
        return bind(self, f)

    def map(self, f: Callable[[T], U]) -> Continuation[U, A]:
        """Transform the produced value before it reaches the consumer."""
        run = self.run
        return Continuation(lambda k: run(lambda t: k(f(t))))


def lift(value: T) -> Continuation[T, A]:
    """Continuation that hands *value* straight to whatever consumer it gets."""
    return Continuation(lambda k: k(value))


as_continuation = lift


def bind(
    continuation: Continuation[T, A],
    f: Callable[[T], Continuation[U, A]],
) -> Continuation[U, A]:
    """
    Compose a continuation with a continuation-producing function.

    The returned continuation, given a final consumer ``k``, runs
    *continuation* with an inner consumer that feeds the produced value to
    *f* and immediately applies the resulting continuation to ``k``.

    Examples:
        >>> bind(lift(4), lambda i: lift(i * i))(lambda i: i + 1)
        17
    """
    run = continuation.run
    return Continuation(lambda k: run(lambda t: f(t)(k)))


def run(continuation: Continuation[T, A], consumer: Callable[[T], A]) -> A:
    """Supply the terminal consumer and produce the answer."""
    return continuation(consumer)


__all__ = [
    "Continuation",
    "Consumer",
    "lift",
    "as_continuation",
    "bind",
    "run",
]
