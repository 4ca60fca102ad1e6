"""Church-encoded booleans.

A Church boolean is a curried selector over two arguments: TRUE keeps the
first, FALSE keeps the second. ``church()`` and ``unchurch()`` convert
between Python bools and selectors.

    >>> TRUE("yes")("no"), FALSE("yes")("no")
    ('yes', 'no')
    >>> unchurch(church(False))
    False
"""

from __future__ import annotations

from typing import Any, Callable

ChurchBoolean = Callable[[Any], Callable[[Any], Any]]


def TRUE(first: Any) -> Callable[[Any], Any]:
    return lambda second: first


def FALSE(first: Any) -> Callable[[Any], Any]:
    return lambda second: second


def church(flag: bool) -> ChurchBoolean:
    return TRUE if flag else FALSE


def unchurch(selector: ChurchBoolean) -> bool:
    return selector(True)(False)


__all__ = [
    "ChurchBoolean",
    "TRUE",
    "FALSE",
    "church",
    "unchurch",
]
