"""
The traced decorator: the propagation step for ``TracedResult``.

Python has no ``?`` operator, so the early return on error is provided by a
decorator, in one of two forms.

Generator form (sites captured implicitly at each ``yield``)::

    @traced
    def do_something() -> Generator[TracedResult[int, str], int, int]:
        value = yield foo()      # this line is recorded if foo() failed
        return value + 1

Explicit form (plain and ``async def`` functions)::

    @traced
    def do_something() -> TracedResult[int, str]:
        value = foo().try_()     # this line is recorded if foo() failed
        return ok(value + 1)

In both forms a returned ``TracedResult`` is passed through and any other
return value is wrapped in ``TracedOk``.

DO NOT catch ``BaseException`` around ``try_()`` calls: the early return
travels as a ``Propagation`` signal up to the enclosing wrapper.
"""

from __future__ import annotations

import inspect
import logging
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast, overload

from traced_result import utils
from traced_result.error import TracedError
from traced_result.errors import Propagation
from traced_result.location import CallSite, hide_frames, is_transparent, resolve_site, track_caller
from traced_result.traced import TracedErr, TracedOk, TracedResult

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _finish(value: Any) -> TracedResult[Any, Any]:
    if isinstance(value, TracedResult):
        return value
    return TracedOk(value)


def _escape(
    func: Callable[..., Any],
    error: TracedError[Any],
    convert: Callable[[Any], Any] | None,
) -> TracedResult[Any, Any]:
    if convert is not None:
        error = error.map(convert)
    if utils.DEBUG_TRACE:
        logger.debug(
            "%s propagated %r at %s (depth %d)",
            func.__qualname__,
            error.inner,
            error.locations[-1] if error.locations else "<no site>",
            len(error.locations),
        )
    return TracedErr(error)


def _wrap_generator(func: Callable[..., Any], convert: Callable[[Any], Any] | None) -> Callable[..., Any]:
    @wraps(func)
    def generator_wrapper(*args: Any, **kwargs: Any) -> TracedResult[Any, Any]:
        # a transparent function reports where it was called from
        entry_site = None
        if is_transparent(func.__code__):
            entry_site = resolve_site(sys._getframe(1))

        gen = func(*args, **kwargs)
        sent: Any = None
        while True:
            try:
                current = gen.send(sent)
            except StopIteration as stop_exc:
                return _finish(stop_exc.value)
            except Propagation as signal:
                return _escape(func, signal.error, convert)

            if not isinstance(current, TracedResult):
                gen.close()
                raise TypeError(
                    f"@traced generator {func.__qualname__} yielded "
                    f"{type(current).__name__}, expected a TracedResult"
                )
            if isinstance(current, TracedOk):
                sent = current.value
                continue

            site = entry_site or CallSite.from_frame(gen.gi_frame)
            error = cast(TracedErr, current).error.with_location(site)
            gen.close()
            return _escape(func, error, convert)

    hide_frames(generator_wrapper)
    return generator_wrapper


def _wrap_function(func: Callable[..., Any], convert: Callable[[Any], Any] | None) -> Callable[..., Any]:
    @wraps(func)
    def function_wrapper(*args: Any, **kwargs: Any) -> TracedResult[Any, Any]:
        try:
            value = func(*args, **kwargs)
        except Propagation as signal:
            return _escape(func, signal.error, convert)
        return _finish(value)

    hide_frames(function_wrapper)
    return function_wrapper


def _wrap_coroutine(func: Callable[..., Any], convert: Callable[[Any], Any] | None) -> Callable[..., Any]:
    @wraps(func)
    async def coroutine_wrapper(*args: Any, **kwargs: Any) -> TracedResult[Any, Any]:
        try:
            value = await func(*args, **kwargs)
        except Propagation as signal:
            return _escape(func, signal.error, convert)
        return _finish(value)

    hide_frames(coroutine_wrapper)
    return coroutine_wrapper


@overload
def traced(func: F) -> F: ...


@overload
def traced(
    *,
    transparent: bool = False,
    convert: Callable[[Any], Any] | None = None,
) -> Callable[[F], F]: ...


def traced(
    func: Callable[..., Any] | None = None,
    *,
    transparent: bool = False,
    convert: Callable[[Any], Any] | None = None,
) -> Any:
    """
    Make ``func`` a propagation boundary for ``TracedResult`` errors.

    Args:
        func: generator, plain or coroutine function. Generators use
            ``yield result`` as the propagation step; the others use
            ``result.try_()``.
        transparent: attribute recorded sites to the caller of ``func``
            (same as applying :func:`traced_result.location.track_caller`).
        convert: applied to the payload of every error leaving ``func``
            through a propagation step. The trace is kept. Errors that are
            returned directly are not converted.

    Returns:
        The wrapped function, which always returns a ``TracedResult``
        (a coroutine resolving to one for ``async def`` functions).
    """

    def decorate(target: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.isasyncgenfunction(target):
            raise TypeError(f"@traced does not support async generators: {target.__qualname__}")
        if transparent:
            track_caller(target)
        if inspect.isgeneratorfunction(target):
            return _wrap_generator(target, convert)
        if inspect.iscoroutinefunction(target):
            return _wrap_coroutine(target, convert)
        return _wrap_function(target, convert)

    if func is None:
        return decorate
    return decorate(func)


__all__ = ["Propagation", "traced"]
