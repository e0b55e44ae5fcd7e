"""
traced_result - result types that record where their errors were propagated.

Example::

    from traced_result import err, traced

    def foo():
        return err("Baz")

    @traced
    def do_something():
        value = yield foo()
        return value

    @traced
    def main():
        yield do_something()

    print(main().unwrap_err())
    # Baz
    # app.py:13:5
    # app.py:8:13
"""

from traced_result.error import TracedError
from traced_result.errors import Propagation, UnwrapError
from traced_result.location import CallSite, caller_location, track_caller
from traced_result.propagate import traced
from traced_result.result import Err, Ok, Result
from traced_result.traced import TracedErr, TracedOk, TracedResult, err, ok

__version__ = "0.1.0"

__all__ = [
    "CallSite",
    "Err",
    "Ok",
    "Propagation",
    "Result",
    "TracedErr",
    "TracedError",
    "TracedOk",
    "TracedResult",
    "UnwrapError",
    "caller_location",
    "err",
    "ok",
    "track_caller",
    "traced",
]
