"""Capability checks used by the Result algebra.

Instead of probing arbitrary attributes, the library asks two narrow
questions of a value: can it be awaited (Thenable), and is it a
container whose elements should be yielded one level deep.
"""

from __future__ import annotations

import inspect
from collections.abc import Generator, Iterable
from typing import Any, Protocol, TypeGuard, runtime_checkable

# Text is iterable in Python but is treated as a single value.
ATOMIC_ITERABLES: tuple[type, ...] = (str, bytes, bytearray)


@runtime_checkable
class Thenable[T](Protocol):
    """Anything that can register a continuation by being awaited.

    Coroutines, asyncio Futures and Tasks, and AsyncResult all qualify.
    """

    def __await__(self) -> Generator[Any, None, T]: ...


def is_thenable(value: object) -> TypeGuard[Thenable[Any]]:
    """True for coroutines, futures, and any object with __await__."""
    return inspect.isawaitable(value)


def is_iterable_payload(value: object) -> TypeGuard[Iterable[Any]]:
    """True if value should be unwrapped one level when iterating a Result."""
    return isinstance(value, Iterable) and not isinstance(value, ATOMIC_ITERABLES)
