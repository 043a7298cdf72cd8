"""Outcome container and its collection operations.

Example:
    >>> from fallible.monads import of, traverse
    >>>
    >>> def parse(s: str):
    ...     return of(lambda: int(s)).filter(lambda n: n >= 0)
    >>>
    >>> traverse(["7", "2", "4"], parse).unwrap()
    [7, 2, 4]
"""

from .collections import errors_of, sequence, to_unit, traverse
from .outcome import (
    NO_VALUE_MESSAGE,
    PREDICATE_MESSAGE,
    SUPPRESSED_MESSAGE,
    Failure,
    Failures,
    Outcome,
    Success,
    of,
    of_action,
    of_scoped,
    of_scoped_action,
)

__all__ = [
    # Core type
    "Outcome",
    # Constructors
    "Success",
    "Failure",
    "Failures",
    "of",
    "of_action",
    "of_scoped",
    "of_scoped_action",
    # Collection operations
    "sequence",
    "traverse",
    "errors_of",
    "to_unit",
    # Fixed failure messages
    "NO_VALUE_MESSAGE",
    "PREDICATE_MESSAGE",
    "SUPPRESSED_MESSAGE",
]
