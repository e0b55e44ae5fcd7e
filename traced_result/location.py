"""
Call-site capture for traced errors.

Locations are read from live interpreter frames: the file comes from the
frame's code object, the line from ``f_lineno`` and the column from the
code object's position table. Two kinds of frames are never reported:

- frames of the library's own machinery (the ``traced`` wrappers and
  ``TracedResult.try_``), registered with :func:`hide_frames`;
- frames of functions marked with :func:`track_caller`, which attribute
  their sites to whoever called them.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Callable
from dataclasses import dataclass
from itertools import islice
from types import CodeType, FrameType
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

_HIDDEN_CODES: set[CodeType] = set()
_TRANSPARENT_CODES: set[CodeType] = set()


@dataclass(frozen=True)
class CallSite:
    """A source location where a propagation step executed."""

    file: str
    line: int
    column: int

    @classmethod
    def from_frame(cls, frame: FrameType) -> CallSite:
        """Return the location ``frame`` is currently executing at."""

        code = frame.f_code
        line = frame.f_lineno or code.co_firstlineno
        return cls(file=code.co_filename, line=line, column=_column_of(frame))

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


def _column_of(frame: FrameType) -> int:
    # co_positions() yields one entry per 2-byte code unit
    if frame.f_lasti < 0:
        return 1
    index = frame.f_lasti // 2
    position = next(islice(frame.f_code.co_positions(), index, None), None)
    if position is None or position[2] is None:
        return 1
    return position[2] + 1


def hide_frames(func: Callable[..., Any]) -> None:
    """Exclude frames running ``func`` from location capture."""

    _HIDDEN_CODES.add(func.__code__)


def is_transparent(code: CodeType) -> bool:
    return code in _TRANSPARENT_CODES


def track_caller(func: F) -> F:
    """
    Mark ``func`` as transparent to caller location.

    Sites recorded while ``func`` is running are attributed to the place
    ``func`` was called from. The rule applies recursively, so a chain of
    transparent helpers reports the first non-transparent caller.

    Works in either order with ``@traced``: the underlying function is found
    through ``__wrapped__``.

    Usage::

        @track_caller
        @traced
        def load_config(path):
            text = yield read_text(path)
            return parse(text)
    """

    target = inspect.unwrap(func)
    _TRANSPARENT_CODES.add(target.__code__)
    return func


def resolve_site(frame: FrameType) -> CallSite:
    """Apply the caller-attribution rule starting at ``frame``."""

    while frame.f_code in _HIDDEN_CODES or frame.f_code in _TRANSPARENT_CODES:
        parent = frame.f_back
        if parent is None:
            break
        frame = parent
    return CallSite.from_frame(frame)


def caller_location() -> CallSite:
    """
    Return the call site of the code that called this function.

    Transparent functions are looked through, so a helper marked with
    :func:`track_caller` gets the site of its own caller. This is the value
    to forward explicitly through ``TracedResult.try_(site=...)``.
    """

    return resolve_site(sys._getframe(1))


__all__ = [
    "CallSite",
    "caller_location",
    "hide_frames",
    "is_transparent",
    "resolve_site",
    "track_caller",
]
