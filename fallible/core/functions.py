"""Free functions over Result: construction, predicates, collections.

from_ is the single place where a raised exception is captured and
turned into a typed Err instead of propagating.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeGuard

from fallible.core.config import log_fault
from fallible.core.result import Err, Ok

log = logging.getLogger(__name__)


def ok[T](value: T = None) -> Ok[T]:  # type: ignore[assignment]
    """Build an Ok. With no argument the value is None."""
    return Ok(value)


def error[E](err: E) -> Err[E]:
    """Build an Err."""
    return Err(err)


def from_[T](fn: Callable[..., T], *args: Any, **kwargs: Any) -> Ok[T] | Err[Exception]:
    """Call fn and capture its outcome.

    Returns Ok(return value), or Err(exception) if fn raises.
    """
    try:
        return Ok(fn(*args, **kwargs))
    except Exception as exc:
        log_fault(log, "from_: %s raised %r; captured as Err", _name_of(fn), exc)
        return Err(exc)


def is_result(value: object) -> TypeGuard[Ok[Any] | Err[Any]]:
    """True only for genuine Ok and Err instances."""
    return isinstance(value, (Ok, Err))


def is_ok[T](result: Ok[T] | Err[Any]) -> TypeGuard[Ok[T]]:
    return result.ok


def is_error[E](result: Ok[Any] | Err[E]) -> TypeGuard[Err[E]]:
    return not result.ok


def and_[R: Ok[Any] | Err[Any]](results: Iterable[R]) -> R | Ok[None]:
    """Return the first Err, or the last element if every result is Ok.

    An empty input returns ok(). Stops consuming at the first Err.
    """
    last: R | Ok[None] = Ok(None)
    for r in results:
        if isinstance(r, Err):
            return r
        last = r
    return last


def or_[R: Ok[Any] | Err[Any]](results: Iterable[R]) -> R | Ok[None]:
    """Return the first Ok, or the last element if every result is Err.

    An empty input returns ok(). Stops consuming at the first Ok.
    """
    last: R | Ok[None] = Ok(None)
    for r in results:
        if isinstance(r, Ok):
            return r
        last = r
    return last


def flatten[T, E, F](result: Ok[Ok[T] | Err[F]] | Err[E]) -> Ok[T] | Err[E] | Err[F]:
    """Collapse Result[Result[T, F], E] to Result[T, E | F].

    Ok returns its inner Result as-is; Err is returned unchanged.
    """
    if isinstance(result, Ok):
        return result.value
    return result


def unwrap[T](result: Ok[T] | Err[Any]) -> T:
    """Extract Ok value or raise. Test/boundary code only."""
    if isinstance(result, (Ok, Err)):
        return result.unwrap()
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")


def sequence[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Collect Results into Result of list. Short-circuits on first Err."""
    values: list[T] = []
    for r in results:
        if isinstance(r, Err):
            return r
        if isinstance(r, Ok):
            values.append(r.value)
    return Ok(values)


def _name_of(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)
