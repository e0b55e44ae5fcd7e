"""
Result type whose errors record every call site they are propagated through.

``TracedResult`` mirrors :class:`traced_result.result.Result`. The one
addition is the propagation step: ``yield result`` inside a ``@traced``
generator, or ``result.try_()`` inside any ``@traced`` function. On an error
the step returns, from the enclosing function, a new error whose trace is the
old one plus the current call site. Each hop builds a new ``TracedError``, so
results that share an error never see each other's hops.

Combinators (``map``, ``map_err``, ``and_then`` ...) are not propagation
steps and never add sites. Converting to the untraced ``Result`` with
:meth:`TracedResult.into_result` freezes the trace.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar, cast

from traced_result.error import TracedError
from traced_result.errors import Propagation, UnwrapError
from traced_result.location import CallSite, resolve_site
from traced_result.result import Err, Ok, Result

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
E = TypeVar("E")
E_co = TypeVar("E_co", covariant=True)
U = TypeVar("U")
F = TypeVar("F")


def _fault(message: str, error: TracedError[Any]) -> NoReturn:
    if isinstance(error.inner, BaseException):
        raise UnwrapError(message, error) from error.inner
    raise UnwrapError(message, error)


class TracedResult(Generic[T_co, E_co]):
    """Either ``TracedOk(value)`` or ``TracedErr(traced_error)``."""

    __slots__ = ()

    @classmethod
    def from_result(cls, result: Result[T, E]) -> TracedResult[T, E]:
        """Upgrade an untraced result. An existing trace on the error is kept."""

        if isinstance(result, Ok):
            return TracedOk(result.value)
        return TracedErr(cast(Err, result).error)

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------
    def try_(self, site: CallSite | None = None) -> T_co:
        """
        Return the value, or propagate the error out of the calling function.

        On ``TracedErr`` the enclosing ``@traced`` function returns a new error
        whose trace is this one plus the call site of ``try_`` (or ``site``
        when given). This result's own trace is not modified.

        ``site`` lets a helper forward a location it received instead of
        capturing a fresh one.
        """

        if isinstance(self, TracedOk):
            return self.value
        error = cast(TracedErr, self).error
        if site is None:
            site = resolve_site(sys._getframe(1))
        raise Propagation(error.with_location(site))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_ok(self) -> bool:
        return isinstance(self, TracedOk)

    def is_err(self) -> bool:
        return isinstance(self, TracedErr)

    def ok(self) -> T_co | None:
        """The success value, or ``None`` for an error."""

        if isinstance(self, TracedOk):
            return self.value
        return None

    def err(self) -> TracedError[E_co] | None:
        """Return the traced error, or ``None`` if this is a success."""

        if isinstance(self, TracedErr):
            return self.error
        return None

    # ------------------------------------------------------------------
    # Unwrapping
    # ------------------------------------------------------------------
    def unwrap(self) -> T_co:
        """Return the value, or raise ``UnwrapError`` showing the error and its trace."""

        if isinstance(self, TracedOk):
            return self.value
        error = cast(TracedErr, self).error
        _fault(f"called unwrap on an Err value: {error}", error)

    def expect(self, message: str) -> T_co:
        if isinstance(self, TracedOk):
            return self.value
        error = cast(TracedErr, self).error
        _fault(f"{message}: {error}", error)

    def unwrap_err(self) -> TracedError[E_co]:
        if isinstance(self, TracedErr):
            return self.error
        raise UnwrapError(f"called unwrap_err on an Ok value: {cast(TracedOk, self).value!r}")

    def expect_err(self, message: str) -> TracedError[E_co]:
        if isinstance(self, TracedErr):
            return self.error
        raise UnwrapError(f"{message}: {cast(TracedOk, self).value!r}")

    def unwrap_or(self, default: U) -> T_co | U:
        """The success value, falling back to ``default`` for an error."""

        if isinstance(self, TracedOk):
            return self.value
        return default

    def unwrap_or_else(self, default_fn: Callable[[TracedError[E_co]], U]) -> T_co | U:
        """The success value, or ``default_fn(traced_error)`` for an error."""

        if isinstance(self, TracedOk):
            return self.value
        return default_fn(cast(TracedErr, self).error)

    def unwrap_unchecked(self) -> T_co:
        """Read the success value without checking the variant."""

        return self.value  # type: ignore[attr-defined]

    def unwrap_err_unchecked(self) -> TracedError[E_co]:
        """Read the traced error without checking the variant."""

        return self.error  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------
    def map(self, f: Callable[[T_co], U]) -> TracedResult[U, E_co]:
        """Apply ``f`` to the value. An error passes through with its trace."""

        if isinstance(self, TracedOk):
            return TracedOk(f(self.value))
        return cast(TracedResult[U, E_co], self)

    def map_err(self, f: Callable[[E_co], F]) -> TracedResult[T_co, F]:
        """Apply ``f`` to the error payload, keeping the trace."""

        if isinstance(self, TracedErr):
            return TracedErr(self.error.map(f))
        return cast(TracedResult[T_co, F], self)

    def map_or(self, default: U, f: Callable[[T_co], U]) -> U:
        if isinstance(self, TracedOk):
            return f(self.value)
        return default

    def map_or_else(self, default_fn: Callable[[TracedError[E_co]], U], f: Callable[[T_co], U]) -> U:
        if isinstance(self, TracedOk):
            return f(self.value)
        return default_fn(cast(TracedErr, self).error)

    def and_then(self, f: Callable[[T_co], TracedResult[U, E_co]]) -> TracedResult[U, E_co]:
        """Feed a success value into ``f``, which must return a ``TracedResult``."""

        if isinstance(self, TracedOk):
            result = f(self.value)
            if not isinstance(result, TracedResult):
                raise TypeError("and_then must return a TracedResult instance")
            return result
        return cast(TracedResult[U, E_co], self)

    def or_else(
        self, f: Callable[[TracedError[E_co]], TracedResult[T_co, F]]
    ) -> TracedResult[T_co, F]:
        """Recover from an error with a function of the traced error."""

        if isinstance(self, TracedErr):
            result = f(self.error)
            if not isinstance(result, TracedResult):
                raise TypeError("or_else must return a TracedResult instance")
            return result
        return cast(TracedResult[T_co, F], self)

    def __or__(self, other: TracedResult[U, F]) -> TracedResult[T_co, E_co] | TracedResult[U, F]:
        if isinstance(self, TracedOk):
            return self
        return other

    def __bool__(self) -> bool:
        """Success is truthy, error is falsy."""

        return self.is_ok()

    # ------------------------------------------------------------------
    # Downgrading
    # ------------------------------------------------------------------
    def into_result(self) -> Result[T_co, TracedError[E_co]]:
        """
        Convert to an untraced ``Result`` whose error is the ``TracedError``.

        The trace survives but is frozen: the untraced type has no
        propagation step, so no further sites are recorded.
        """

        if isinstance(self, TracedOk):
            return Ok(self.value)
        return Err(cast(TracedErr, self).error)

    stop_trace = into_result

    def discard_call_stack(self) -> Result[T_co, E_co]:
        """Convert to an untraced ``Result`` holding the raw payload."""

        if isinstance(self, TracedOk):
            return Ok(self.value)
        return Err(cast(TracedErr, self).error.into_inner())


@dataclass(frozen=True)
class TracedOk(TracedResult[T, NoReturn], Generic[T]):
    """Success result."""

    value: T


@dataclass(frozen=True)
class TracedErr(TracedResult[NoReturn, E], Generic[E]):
    """
    Error result.

    A raw payload is wrapped into a fresh ``TracedError`` with an empty
    trace; an existing ``TracedError`` is kept together with its trace.
    Unhashable, like the ``TracedError`` it holds.
    """

    error: TracedError[E]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not isinstance(self.error, TracedError):
            object.__setattr__(self, "error", TracedError(self.error))


def ok(value: T) -> TracedResult[T, Any]:
    """Build a successful ``TracedResult``."""

    return TracedOk(value)


def err(payload: E | TracedError[E]) -> TracedResult[Any, E]:
    """Build a failed ``TracedResult``; the trace starts empty."""

    return TracedErr(payload)


__all__ = ["TracedErr", "TracedOk", "TracedResult", "err", "ok"]
