"""Fallible - outcomes instead of exceptions.

An ``Outcome`` is either a Success holding a value or a Failure holding one
or more ``Error`` values. Combinators chain computations and stop at the
first failure; exceptions raised along the way are captured as data.

Quick Start:
    >>> from fallible import Error, Failure, Success, of, sequence, traverse
    >>>
    >>> total = (
    ...     of(lambda: int("21"))
    ...     .map(lambda n: n * 2)
    ...     .filter(lambda n: n < 100)
    ... )
    >>> total.match(on_success=lambda n: n, on_failure=lambda e: -1)
    42

    >>> of(lambda: int("nope")).first_error.is_exceptional
    True

Collections:
    >>> sequence([Success(1), Success(2), Success(3)])
    Success([1, 2, 3])
    >>> [str(e) for e in sequence([Success(1), Failure("bad"), Failure("worse")]).errors]
    ['bad', 'worse']

Scoped resources are released on every path:
    >>> from fallible import of_scoped
    >>> of_scoped(open("data.csv"), lambda f: f.read())  # doctest: +SKIP
"""

from .foundation.config import FallibleSettings, clear_settings_cache, get_settings
from .foundation.errors import (
    UNIT,
    Error,
    ErrorLike,
    MissingValueError,
    OutcomeError,
    Unit,
    UnwrapError,
    as_error,
)
from .monads import (
    Failure,
    Failures,
    Outcome,
    Success,
    errors_of,
    of,
    of_action,
    of_scoped,
    of_scoped_action,
    sequence,
    to_unit,
    traverse,
)
from .runtime.observability import configure_from_settings, configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Outcome
    "Outcome", "Success", "Failure", "Failures",
    "of", "of_action", "of_scoped", "of_scoped_action",
    # Collections
    "sequence", "traverse", "errors_of", "to_unit",
    # Errors
    "Error", "ErrorLike", "as_error", "Unit", "UNIT",
    "OutcomeError", "MissingValueError", "UnwrapError",
    # Settings & logging
    "FallibleSettings", "get_settings", "clear_settings_cache",
    "configure_logging", "configure_from_settings", "get_logger",
]
