"""Exceptions for contract violations.

Expected failures travel as ``Error`` values inside a ``Failure``. The
exceptions here are raised only when the library itself is misused:
building a success from nothing, a failure from no errors, or unwrapping
a failure.
"""

from __future__ import annotations


class OutcomeError(Exception):
    """Base class for misuse of the outcome container."""


class MissingValueError(OutcomeError, ValueError):
    """A success was built without a value, or a failure without errors."""


class UnwrapError(OutcomeError, RuntimeError):
    """``unwrap()`` was called on a failure."""

    def __init__(self, errors: tuple[object, ...]) -> None:
        self.errors = errors
        rendered = "; ".join(str(e) for e in errors)
        super().__init__(f"unwrap() on Failure: {rendered}")
