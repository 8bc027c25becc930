"""Result[T, E] — explicit success/failure values.

Every function that can fail returns Result[T, E] instead of raising.
Ok[T] wraps a success value; Err[E] wraps an error.

Both variants expose the same combinator surface with opposite
short-circuit behavior: a continuation is never invoked on the branch
it does not apply to.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal, NoReturn, final

from fallible.core.errors import ExpectError, UnwrapError, as_exception
from fallible.core.protocols import is_iterable_payload

if TYPE_CHECKING:
    from fallible.core.async_result import AsyncResult


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success variant of Result."""

    value: T

    ok: ClassVar[Literal[True]] = True

    def __iter__(self) -> Iterator[Any]:
        return self.values()

    def is_ok_and(self, f: Callable[[T], bool]) -> bool:
        """Return f(value)."""
        return f(self.value)

    def is_error_and(self, f: Callable[[Any], bool]) -> Literal[False]:  # noqa: ARG002
        return False

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply f to the value, returning Ok(f(value))."""
        return Ok(f(self.value))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value), ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, default: Callable[[Any], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f(value), ignoring the error fallback."""
        return f(self.value)

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """No-op on Ok: error transform does not apply."""
        return self

    def inspect(self, f: Callable[[T], object]) -> Ok[T]:
        """Call f with the value for its side effect and return self."""
        f(self.value)
        return self

    def inspect_error(self, f: Callable[[Any], object]) -> Ok[T]:  # noqa: ARG002
        return self

    def values(self) -> Iterator[Any]:
        """Iterate the payload.

        An iterable payload (other than text) is unwrapped one level and
        its elements are yielded; any other payload is yielded once.
        Each call starts a fresh iteration.
        """
        if is_iterable_payload(self.value):
            yield from self.value  # type: ignore[misc]
        else:
            yield self.value

    def for_each(self, f: Callable[[Any], object]) -> None:
        """Call f on every element produced by values()."""
        for item in self.values():
            f(item)

    def expect(self, msg: str | Callable[[Any], object]) -> T:  # noqa: ARG002
        """Return the value."""
        return self.value

    def unwrap(self) -> T:
        """Return the value."""
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Any], T]) -> T:  # noqa: ARG002
        """Return the value, ignoring the fallback."""
        return self.value

    def unwrap_error(self, f: Callable[[T], object] | None = None) -> NoReturn:
        """Raise — there is no error to return.

        Raises f(value) when f is given, otherwise the value itself.
        Non-exception payloads are wrapped in UnwrapError.
        """
        payload = f(self.value) if f is not None else self.value
        if isinstance(payload, Exception):
            raise payload
        raise UnwrapError(f"Called unwrap_error on Ok: {payload!r}", payload)

    def and_[R](self, other: R) -> R:
        """Return other."""
        return other

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply f to the value, where f itself returns a Result."""
        return f(self.value)

    def bind[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Alias for and_then."""
        return f(self.value)

    def or_(self, other: object) -> Ok[T]:  # noqa: ARG002
        return self

    def or_else(self, f: Callable[[Any], object]) -> Ok[T]:  # noqa: ARG002
        return self

    def clone(self) -> Ok[T]:
        """Return a new Ok holding the same value."""
        return Ok(self.value)

    def flatten(self) -> Any:
        """Return the inner Result if the value is one, else self."""
        if isinstance(self.value, (Ok, Err)):
            return self.value
        return self

    # --- Async bridges ---

    def map_async[U](self, f: Callable[[T], Awaitable[U]]) -> AsyncResult[U, Any]:
        """Apply an async f to the value.

        An AsyncResult returned by f is passed through as-is; any other
        awaitable completes to Ok, and its exception becomes a fault.
        """
        from fallible.core.async_result import AsyncResult

        return AsyncResult.adopt(f(self.value))

    def map_or_else_async[U](
        self,
        default: Callable[[Any], Awaitable[U]],  # noqa: ARG002
        f: Callable[[T], Awaitable[U]],
    ) -> AsyncResult[U, Any]:
        from fallible.core.async_result import AsyncResult

        return AsyncResult.adopt(f(self.value))

    def and_then_async[U, E](
        self, f: Callable[[T], Awaitable[Ok[U] | Err[E]]],
    ) -> AsyncResult[U, E]:
        """Apply an async f that produces a Result."""
        from fallible.core.async_result import AsyncResult

        return AsyncResult.adopt_result(f(self.value))

    def or_else_async(
        self, f: Callable[[Any], Awaitable[Any]],  # noqa: ARG002
    ) -> AsyncResult[T, Any]:
        from fallible.core.async_result import AsyncResult

        return AsyncResult.ok(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    """Error variant of Result."""

    error: E

    ok: ClassVar[Literal[False]] = False

    def __iter__(self) -> Iterator[Any]:
        return self.values()

    def is_ok_and(self, f: Callable[[Any], bool]) -> Literal[False]:  # noqa: ARG002
        return False

    def is_error_and(self, f: Callable[[E], bool]) -> bool:
        """Return f(error)."""
        return f(self.error)

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """No-op on Err: value transform does not apply."""
        return self

    def map_or[U](self, default: U, f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return the default since there is no Ok value."""
        return default

    def map_or_else[U](self, default: Callable[[E], U], f: Callable[[Any], U]) -> U:  # noqa: ARG002
        """Return default(error)."""
        return default(self.error)

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply f to the error, returning Err(f(error))."""
        return Err(f(self.error))

    def inspect(self, f: Callable[[Any], object]) -> Err[E]:  # noqa: ARG002
        return self

    def inspect_error(self, f: Callable[[E], object]) -> Err[E]:
        """Call f with the error for its side effect and return self."""
        f(self.error)
        return self

    def values(self) -> Iterator[Any]:
        """Iterate nothing — an Err has no values."""
        return iter(())

    def for_each(self, f: Callable[[Any], object]) -> None:  # noqa: ARG002
        return None

    def expect(self, msg: str | Callable[[E], object]) -> NoReturn:
        """Raise with a message, or raise whatever msg(error) returns."""
        if isinstance(msg, str):
            cause = self.error if isinstance(self.error, BaseException) else None
            raise ExpectError(f"{msg}: {self.error}", self.error) from cause
        raise as_exception(msg(self.error))

    def unwrap(self) -> NoReturn:
        """Raise — there is no value to return.

        An exception payload is raised as-is; anything else is wrapped
        in UnwrapError.
        """
        if isinstance(self.error, Exception):
            raise self.error
        raise UnwrapError(f"Called unwrap on Err: {self.error}", self.error)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default since there is no Ok value."""
        return default

    def unwrap_or_else[T](self, f: Callable[[E], T]) -> T:
        """Return f(error)."""
        return f(self.error)

    def unwrap_error(self, f: Callable[[Any], object] | None = None) -> E:  # noqa: ARG002
        """Return the error."""
        return self.error

    def and_(self, other: object) -> Err[E]:  # noqa: ARG002
        return self

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """No-op on Err: short-circuits."""
        return self

    def bind(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """No-op on Err: short-circuits."""
        return self

    def or_[R](self, other: R) -> R:
        """Return other."""
        return other

    def or_else[R](self, f: Callable[[E], R]) -> R:
        """Return f(error), which is expected to be a Result."""
        return f(self.error)

    def clone(self) -> Err[E]:
        """Return a new Err holding the same error."""
        return Err(self.error)

    def flatten(self) -> Err[E]:
        return self

    # --- Async bridges ---

    def map_async(self, f: Callable[[Any], Any]) -> AsyncResult[Any, E]:  # noqa: ARG002
        from fallible.core.async_result import AsyncResult

        return AsyncResult.error(self.error)

    def map_or_else_async[U](
        self,
        default: Callable[[E], Awaitable[U]],
        f: Callable[[Any], Awaitable[U]],  # noqa: ARG002
    ) -> AsyncResult[U, Any]:
        """Apply an async default to the error; its outcome becomes Ok."""
        from fallible.core.async_result import AsyncResult

        return AsyncResult.adopt(default(self.error))

    def and_then_async(self, f: Callable[[Any], Any]) -> AsyncResult[Any, E]:  # noqa: ARG002
        from fallible.core.async_result import AsyncResult

        return AsyncResult.error(self.error)

    def or_else_async[T, F](
        self, f: Callable[[E], Awaitable[Ok[T] | Err[F]]],
    ) -> AsyncResult[T, F]:
        """Apply an async f that produces a replacement Result."""
        from fallible.core.async_result import AsyncResult

        return AsyncResult.adopt_result(f(self.error))


type Result[T, E] = Ok[T] | Err[E]
