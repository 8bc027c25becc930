"""AsyncResult — an asyncio future whose normal outcome is always a Result.

An AsyncResult settles through one of two channels:

  settled   the owned future completes with Ok(value) or Err(error)
  faulted   the owned future completes with an exception

The fault channel is reserved for the unexpected: exceptions raised by
continuations, exceptions of awaitables returned from continuations,
and explicit fault(reason) calls. Typed errors always travel as Err.

Combinators never mutate an AsyncResult; each call wraps a new future
derived from the source. Continuations are registered with
Future.add_done_callback, so they always run later on the event loop and
in registration order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any, NamedTuple, final

from fallible.core.config import log_fault
from fallible.core.errors import as_exception, reason_of
from fallible.core.protocols import is_thenable
from fallible.core.result import Err, Ok

log = logging.getLogger(__name__)

type Executor[T, E] = Callable[
    [Callable[[T], None], Callable[[E], None], Callable[[object], None]],
    object,
]

# Strong references to tasks scheduled on behalf of AsyncResults.
_pending: set[asyncio.Future[Any]] = set()


class _Handles(NamedTuple):
    """The three settle callbacks handed to an executor."""

    succeed: Callable[[Any], None]
    fail: Callable[[Any], None]
    fault: Callable[[object], None]


@final
class _Settlement:
    """Write-once settlement of one future. Later calls are ignored.

    ``raised`` keeps the exception a fault was settled with, so it can be
    reported without retrieving it from the future.
    """

    __slots__ = ("_future", "raised")

    def __init__(self, future: asyncio.Future[Any]) -> None:
        self._future = future
        self.raised: Exception | None = None

    def succeed(self, value: object = None) -> None:
        if not self._future.done():
            self._future.set_result(Ok(value))

    def fail(self, error: object) -> None:
        if not self._future.done():
            self._future.set_result(Err(error))

    def fault(self, reason: object) -> None:
        if not self._future.done():
            self.raised = as_exception(reason)
            self._future.set_exception(self.raised)


@final
class AsyncResult[T, E]:
    """Awaitable wrapper around an owned asyncio.Future[Result[T, E]].

    The executor is called synchronously with three callbacks:
    succeed(value), fail(error) and fault(reason). A running event loop
    is required. If the executor raises, the exception faults the result;
    KeyboardInterrupt and SystemExit are re-raised after faulting.

    ``await async_result`` returns the settled Ok/Err or raises the fault.
    Fault reasons that are not ordinary exceptions, cancellation included,
    are raised wrapped in Fault.
    """

    __slots__ = ("_future", "_settlement")

    def __init__(self, executor: Executor[T, E]) -> None:
        loop = asyncio.get_running_loop()
        self._future: asyncio.Future[Ok[T] | Err[E]] = loop.create_future()
        self._settlement = _Settlement(self._future)
        settlement = self._settlement
        try:
            executor(settlement.succeed, settlement.fail, settlement.fault)
        except BaseException as exc:
            settlement.fault(exc)
            if isinstance(exc, (KeyboardInterrupt, SystemExit)):
                raise

    def __await__(self) -> Generator[Any, None, Ok[T] | Err[E]]:
        return self._future.__await__()

    def __repr__(self) -> str:
        # Never call exception() here: it would mark an unhandled fault as
        # retrieved and silence asyncio's "never retrieved" report.
        if not self._future.done():
            state = "pending"
        elif self._future.cancelled():
            state = "cancelled"
        elif self._settlement.raised is not None:
            state = f"faulted {self._settlement.raised!r}"
        else:
            state = f"settled {self._future.result()!r}"
        return f"<AsyncResult {state}>"

    # --- Construction ---

    @classmethod
    def ok[U](cls, value: U = None) -> AsyncResult[U, Any]:  # type: ignore[assignment]
        """An AsyncResult that settles to Ok(value)."""
        return AsyncResult(lambda succeed, _fail, _fault: succeed(value))

    @classmethod
    def error[F](cls, err: F) -> AsyncResult[Any, F]:
        """An AsyncResult that settles to Err(err)."""
        return AsyncResult(lambda _succeed, fail, _fault: fail(err))

    @classmethod
    def from_[U](
        cls,
        source: Callable[..., Awaitable[U]] | Awaitable[U],
        *args: Any,
        **kwargs: Any,
    ) -> AsyncResult[U, BaseException]:
        """Adapt an awaitable, or a function returning one.

        Normal completion settles Ok. An exception settles Err: a foreign
        awaitable has no Result discipline, so its failure is treated as
        the typed error. Cancellation of the source is a fault. Calling
        ``source`` happens immediately.
        """
        awaitable = source(*args, **kwargs) if callable(source) else source

        def executor(
            succeed: Callable[[U], None],
            fail: Callable[[BaseException], None],
            fault: Callable[[object], None],
        ) -> None:
            def rejected(exc: BaseException) -> None:
                log_fault(log, "from_: awaitable raised %r; settling Err", exc)
                fail(reason_of(exc))  # type: ignore[arg-type]

            _watch(_schedule(awaitable), succeed, rejected, on_cancelled=fault)

        return AsyncResult(executor)

    @classmethod
    def adopt(cls, awaitable: Awaitable[Any]) -> AsyncResult[Any, Any]:
        """Wrap an awaitable whose outcome is a plain value.

        An AsyncResult is returned as-is. Otherwise completion settles Ok
        and an exception faults. An AsyncResult produced by the awaitable
        is spliced in rather than wrapped.
        """
        if isinstance(awaitable, AsyncResult):
            return awaitable

        def executor(succeed: Any, fail: Any, fault: Any) -> None:
            handles = _Handles(succeed, fail, fault)
            _watch(
                _schedule(awaitable),
                lambda value: _succeed_or_splice(value, handles),
                _fault_logged(fault),
            )

        return AsyncResult(executor)

    @classmethod
    def adopt_result(cls, awaitable: Awaitable[Ok[Any] | Err[Any]]) -> AsyncResult[Any, Any]:
        """Wrap an awaitable that produces a Result.

        An AsyncResult is returned as-is. Otherwise the produced Result
        (or a produced AsyncResult, spliced in) settles the wrapper and an
        exception faults. Producing anything else is a fault (TypeError).
        """
        if isinstance(awaitable, AsyncResult):
            return awaitable

        def executor(succeed: Any, fail: Any, fault: Any) -> None:
            handles = _Handles(succeed, fail, fault)

            def produced(value: object) -> None:
                if isinstance(value, (Ok, Err)):
                    _route(value, handles)
                elif isinstance(value, AsyncResult):
                    _splice(value, handles)
                else:
                    got = type(value).__name__
                    fault(TypeError(f"expected an awaitable of Ok or Err, got {got}"))

            _watch(_schedule(awaitable), produced, _fault_logged(fault))

        return AsyncResult(executor)

    # --- Combinators ---

    def then(
        self,
        on_settled: Callable[[Ok[T] | Err[E]], Any] | None = None,
        on_fault: Callable[[object], Any] | None = None,
    ) -> AsyncResult[Any, Any]:
        """Derive a new AsyncResult from this one's outcome.

        Without on_settled the Result passes through; without on_fault a
        fault passes through. A handler's return value goes through
        resolve(); a handler that raises faults the derived result.
        """
        source = self._future

        def executor(succeed: Any, fail: Any, fault: Any) -> None:
            handles = _Handles(succeed, fail, fault)

            def settled(result: Ok[T] | Err[E]) -> None:
                if on_settled is None:
                    _route(result, handles)
                else:
                    _run(on_settled, result, handles)

            def faulted(exc: BaseException) -> None:
                if on_fault is None:
                    fault(exc)
                else:
                    _run(on_fault, reason_of(exc), handles)

            _watch(source, settled, faulted)

        return AsyncResult(executor)

    def catch(self, on_fault: Callable[[object], Any] | None = None) -> AsyncResult[Any, Any]:
        """Handle the fault channel only; a settled Result is untouched."""
        if on_fault is None:
            return self
        return self.then(None, on_fault)

    def map[U](self, f: Callable[[T], Any]) -> AsyncResult[U, E]:
        """Apply f to an Ok value; Err passes through."""

        def on_settled(result: Ok[T] | Err[E]) -> object:
            if isinstance(result, Err):
                return result
            return f(result.value)

        return self.then(on_settled)

    def map_or_else[U](
        self,
        default: Callable[[E], Any],
        f: Callable[[T], Any],
    ) -> AsyncResult[U, Any]:
        """Apply f to an Ok value or default to an Err error."""

        def on_settled(result: Ok[T] | Err[E]) -> object:
            if isinstance(result, Ok):
                return f(result.value)
            return default(result.error)

        return self.then(on_settled)

    def and_then[U, F](self, f: Callable[[T], Any]) -> AsyncResult[U, E | F]:
        """Chain f on an Ok value; Err short-circuits."""

        def on_settled(result: Ok[T] | Err[E]) -> object:
            if isinstance(result, Err):
                return result
            return f(result.value)

        return self.then(on_settled)

    def or_else[F](self, f: Callable[[E], Any]) -> AsyncResult[T, F]:
        """Recover from an Err with f; Ok short-circuits."""

        def on_settled(result: Ok[T] | Err[E]) -> object:
            if isinstance(result, Ok):
                return result
            return f(result.error)

        return self.then(on_settled)


# ---------------------------------------------------------------------------
# Value resolution
# ---------------------------------------------------------------------------


def resolve(value: object, handles: _Handles) -> None:
    """Route a continuation's return value to the right channel.

    1. AsyncResult: its settled Result routes to succeed/fail, its fault
       to fault.
    2. Any other awaitable: completion routes to succeed, an exception
       to fault. Unlike from_, a failing awaitable here is a fault of
       the chain, not a typed error. If it completes with an AsyncResult,
       that one is spliced as in step 1; a plain Ok/Err it completes with
       stays a success payload.
    3. Ok/Err: routes to succeed/fail.
    4. Anything else: succeed(value).
    """
    if isinstance(value, AsyncResult):
        _splice(value, handles)
    elif is_thenable(value):
        _watch(
            _schedule(value),
            lambda produced: _succeed_or_splice(produced, handles),
            _fault_logged(handles.fault),
        )
    elif isinstance(value, (Ok, Err)):
        _route(value, handles)
    else:
        handles.succeed(value)


def _splice(source: AsyncResult[Any, Any], handles: _Handles) -> None:
    _watch(source._future, lambda result: _route(result, handles), handles.fault)


def _succeed_or_splice(value: object, handles: _Handles) -> None:
    if isinstance(value, AsyncResult):
        _splice(value, handles)
    else:
        handles.succeed(value)


def _route(result: Ok[Any] | Err[Any], handles: _Handles) -> None:
    if isinstance(result, Ok):
        handles.succeed(result.value)
    else:
        handles.fail(result.error)


def _run(handler: Callable[[Any], object], arg: object, handles: _Handles) -> None:
    try:
        value = handler(arg)
    except BaseException as exc:
        log_fault(log, "continuation %r raised %r; routing to fault", handler, exc)
        handles.fault(exc)
        if isinstance(exc, (KeyboardInterrupt, SystemExit)):
            raise
        return
    resolve(value, handles)


def _fault_logged(fault: Callable[[object], None]) -> Callable[[BaseException], None]:
    def rejected(exc: BaseException) -> None:
        log_fault(log, "awaitable raised %r; routing to fault", exc)
        fault(exc)

    return rejected


def _schedule(awaitable: Awaitable[Any]) -> asyncio.Future[Any]:
    future = asyncio.ensure_future(awaitable)
    if not future.done():
        _pending.add(future)
        future.add_done_callback(_pending.discard)
    return future


def _watch(
    future: asyncio.Future[Any],
    on_result: Callable[[Any], None],
    on_exception: Callable[[BaseException], None],
    *,
    on_cancelled: Callable[[BaseException], None] | None = None,
) -> None:
    """Register completion callbacks; cancellation counts as an exception."""

    def done(f: asyncio.Future[Any]) -> None:
        if f.cancelled():
            (on_cancelled or on_exception)(asyncio.CancelledError())
            return
        exc = f.exception()
        if exc is not None:
            on_exception(exc)
        else:
            on_result(f.result())

    future.add_done_callback(done)
