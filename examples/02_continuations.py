#!/usr/bin/env python3
"""Continuations: Deferring "What Happens Next".

A Continuation is a computation that waits for its final consumer::

    lift(x)         k -> k(x)
    bind(m, f)      k -> m(lambda t: f(t)(k))

Building and composing continuations runs nothing. The chain executes only
when a consumer is supplied, and the consumer decides the answer type.

Run:
    python examples/02_continuations.py
"""

from eru.continuation import Continuation, bind, lift


def main():
    print("=" * 60)
    print("Continuations")
    print("=" * 60)

    trace = []

    def step(i: int) -> Continuation:
        trace.append(i)
        return lift(i * 2)

    pipeline = bind(bind(lift(5), step), step)
    print(f"\n[1] After composition, steps run: {trace}")

    print(f"[2] pipeline(str):        {pipeline(str)!r}")
    print(f"    steps run:            {trace}")
    print(f"[3] pipeline(lambda x: x + 1): {pipeline(lambda x: x + 1)}")

    print("\n[4] Left identity: bind(lift(3), f) == f(3)")
    f = lambda i: lift(i + 3)  # noqa: E731
    print(f"  {bind(lift(3), f)(str)!r} == {f(3)(str)!r}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
