"""The error wrapper that carries a propagation trace."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from traced_result.location import CallSite

E = TypeVar("E")
E2 = TypeVar("E2")


class TracedError(Generic[E]):
    """
    An error payload plus the call sites it was propagated through.

    The trace is stored oldest-first: ``locations[0]`` is the first hop,
    ``locations[-1]`` the most recent one. Sites can only be appended.
    The payload is opaque and never touched by this class.
    """

    __slots__ = ("inner", "_trace")

    def __init__(self, inner: E, locations: tuple[CallSite, ...] | list[CallSite] = ()) -> None:
        self.inner = inner
        self._trace: list[CallSite] = list(locations)

    @property
    def locations(self) -> tuple[CallSite, ...]:
        """Recorded call sites, oldest first."""

        return tuple(self._trace)

    def push_location(self, site: CallSite) -> None:
        """Append ``site`` to the trace."""

        self._trace.append(site)

    def with_location(self, site: CallSite) -> TracedError[E]:
        """Return a new error with ``site`` appended; ``self`` is left unchanged."""

        return TracedError(self.inner, (*self._trace, site))

    def into_inner(self) -> E:
        """Return the payload, dropping the trace."""

        return self.inner

    def split(self) -> tuple[E, list[CallSite]]:
        """Return the payload together with a copy of the trace."""

        return self.inner, list(self._trace)

    def map(self, func: Callable[[E], E2]) -> TracedError[E2]:
        """Wrap ``func(inner)`` with an identical copy of the trace."""

        return TracedError(func(self.inner), self._trace)

    def format(self) -> str:
        """Render the payload followed by the trace, most recent site first."""

        lines = [str(self.inner)]
        lines.extend(str(site) for site in reversed(self._trace))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"TracedError({self.inner!r}, locations={self.locations!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TracedError):
            return NotImplemented
        return self.inner == other.inner and self._trace == other._trace

    __hash__ = None  # type: ignore[assignment]


__all__ = ["TracedError"]
