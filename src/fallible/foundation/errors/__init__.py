"""Errors as data, plus the exceptions raised on contract violations.

- Error: message, wrapped fault, or aggregate of errors (pydantic, frozen)
- as_error: coerce a str / exception / Error into an Error
- OutcomeError, MissingValueError, UnwrapError: misuse of the container
- Unit/UNIT: value of computations with nothing to return
"""

from .error import Error, ErrorLike, as_error
from .errors import MissingValueError, OutcomeError, UnwrapError
from .types import UNIT, JsonDict, JsonPrimitive, JsonValue, Unit

__all__ = [
    # Error values
    "Error", "ErrorLike", "as_error",
    # Contract violations
    "OutcomeError", "MissingValueError", "UnwrapError",
    # Types
    "Unit", "UNIT", "JsonDict", "JsonPrimitive", "JsonValue",
]
