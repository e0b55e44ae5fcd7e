from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from traced_result.error import TracedError


class UnwrapError(RuntimeError):
    """Raised when a value is unwrapped from the wrong result variant."""

    def __init__(self, message: str, error: Any = None) -> None:
        self.error = error
        super().__init__(message)


class Propagation(BaseException):
    """
    Control signal carrying a traced error out of a ``@traced`` function.

    Raised by ``TracedResult.try_`` and caught by the ``traced`` wrapper of
    the enclosing function. It derives from ``BaseException`` so that
    ``except Exception`` blocks in user code let it through.
    """

    def __init__(self, error: TracedError[Any]) -> None:
        self.error = error
        super().__init__(error)

    def __str__(self) -> str:
        return (
            "traced error propagated out of a function not decorated with @traced:\n"
            f"{self.error}"
        )


__all__ = ["Propagation", "UnwrapError"]
