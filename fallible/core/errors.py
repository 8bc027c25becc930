"""Fault exceptions — how the Result API raises.

Typed errors travel inside Err values and are never raised by the
library on their own. These exceptions exist for the fail-fast
extractors (unwrap, expect, unwrap_error) and for the AsyncResult fault
channel, where a payload that is not already an Exception has to be
wrapped before Python can raise it or set it on a future.
"""

from __future__ import annotations

from typing import final


class ResultError(Exception):
    """Base class for exceptions raised by fallible."""


class UnwrapError(ResultError, RuntimeError):
    """A value was extracted from the wrong variant.

    ``payload`` holds the error (or value) that could not be returned.
    """

    def __init__(self, message: str, payload: object) -> None:
        super().__init__(message)
        self.payload = payload


@final
class ExpectError(UnwrapError):
    """Raised by Err.expect(msg); the message reads "msg: error"."""


@final
class Fault(ResultError):
    """Carrier for a fault reason that is not an ordinary Exception."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"fault: {reason!r}")
        self.reason = reason


def as_exception(reason: object) -> Exception:
    """Return reason if it is an ordinary exception, else wrap it in Fault.

    BaseExceptions such as CancelledError are wrapped as well, so awaiting
    a faulted result never reads as the awaiting task being cancelled.
    """
    # StopIteration cannot be set on an asyncio future.
    if isinstance(reason, Exception) and not isinstance(reason, StopIteration):
        return reason
    return Fault(reason)


def reason_of(exc: BaseException) -> object:
    """Inverse of as_exception: unwrap a Fault back to its reason."""
    if isinstance(exc, Fault):
        return exc.reason
    return exc
