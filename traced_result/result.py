"""
Untraced result type.

This is the channel a ``TracedResult`` is downgraded into. It has no
propagation hook: once an error is here, no further call sites are recorded.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, cast

from traced_result.errors import UnwrapError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
E_co = TypeVar("E_co", covariant=True)
U = TypeVar("U")
F = TypeVar("F")


def _raise_unwrap(message: str, error: object) -> NoReturn:
    if isinstance(error, BaseException):
        raise UnwrapError(message, error) from error
    raise UnwrapError(message, error)


class Result(Generic[T_co, E_co]):
    """``Ok(value)`` or ``Err(error)``; the error may be any payload type."""

    __slots__ = ()

    def is_ok(self) -> bool:
        """``True`` for ``Ok``."""

        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """``True`` for ``Err``."""

        return isinstance(self, Err)

    def ok(self) -> T_co | None:
        """The ``Ok`` value, or ``None`` for ``Err``."""

        if isinstance(self, Ok):
            return self.value
        return None

    def err(self) -> E_co | None:
        """The ``Err`` payload, or ``None`` for ``Ok``."""

        if isinstance(self, Err):
            return self.error
        return None

    def expect(self, message: str) -> T_co:
        """The ``Ok`` value; ``Err`` raises ``UnwrapError`` prefixed with ``message``."""

        if isinstance(self, Ok):
            return self.value
        error = cast(Err, self).error
        _raise_unwrap(f"{message}: {error}", error)

    def unwrap(self) -> T_co:
        """The ``Ok`` value; ``Err`` raises ``UnwrapError`` naming the payload."""

        if isinstance(self, Ok):
            return self.value
        error = cast(Err, self).error
        _raise_unwrap(f"called unwrap on an Err value: {error}", error)

    def unwrap_err(self) -> E_co:
        """The ``Err`` payload; ``Ok`` raises ``UnwrapError``."""

        if isinstance(self, Err):
            return self.error
        raise UnwrapError(f"called unwrap_err on an Ok value: {self.value!r}")

    def expect_err(self, message: str) -> E_co:
        if isinstance(self, Err):
            return self.error
        raise UnwrapError(f"{message}: {self.value!r}")

    def map(self, f: Callable[[T_co], U]) -> Result[U, E_co]:
        """Transform an ``Ok`` value with ``f``; an ``Err`` is returned as is."""

        if isinstance(self, Ok):
            return Ok(f(self.value))
        return cast(Result[U, E_co], self)

    def map_err(self, f: Callable[[E_co], F]) -> Result[T_co, F]:
        """Transform an ``Err`` payload with ``f``; an ``Ok`` is returned as is."""

        if isinstance(self, Err):
            return Err(f(self.error))
        return cast(Result[T_co, F], self)

    def unwrap_or(self, default: U) -> T_co | U:
        """The ``Ok`` value, falling back to ``default`` for ``Err``."""

        if isinstance(self, Ok):
            return self.value
        return default

    def unwrap_or_else(self, default_fn: Callable[[E_co], U]) -> T_co | U:
        """The ``Ok`` value, or ``default_fn(error)`` for ``Err``."""

        if isinstance(self, Ok):
            return self.value
        return default_fn(cast(Err, self).error)

    def and_then(self, f: Callable[[T_co], Result[U, E_co]]) -> Result[U, E_co]:
        """Feed an ``Ok`` value into ``f``, which must itself return a ``Result``."""

        if isinstance(self, Ok):
            result = f(self.value)
            if not isinstance(result, Result):
                raise TypeError("and_then must return a Result instance")
            return result
        return cast(Result[U, E_co], self)

    def __or__(self, other: Result[U, F]) -> Result[T_co, E_co] | Result[U, F]:
        """``self`` when it is ``Ok``, otherwise ``other``."""

        if isinstance(self, Ok):
            return self
        return other

    def __bool__(self) -> bool:
        """``Ok`` is truthy, ``Err`` is falsy."""

        return self.is_ok()


@dataclass(frozen=True)
class Ok(Result[T, NoReturn], Generic[T]):
    """Success result."""

    value: T


@dataclass(frozen=True)
class Err(Result[NoReturn, F], Generic[F]):
    """Error result."""

    error: F


__all__ = ["Err", "Ok", "Result"]
