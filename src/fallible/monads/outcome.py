"""Outcome container: a computation that succeeded with a value or failed with errors.

Single slotted class tagged by the presence of errors:
- Success: holds a non-None value, no errors
- Failure: holds a non-empty tuple of ``Error``, no value

Both states are terminal. Every combinator returns a new Outcome and
short-circuits on Failure: the caller's function is never invoked and the
original errors propagate unchanged.

Faults raised by caller code are captured into ``Error.from_fault`` at
``of``, ``of_action``, ``of_scoped``, ``of_scoped_action``, ``map`` and
``bind``. Nothing else catches.

Example:
    >>> parsed = of(lambda: int("42")).map(lambda n: n * 2).filter(lambda n: n > 0)
    >>> parsed.match(on_success=str, on_failure=lambda e: f"failed: {e}")
    '84'
    >>> of(lambda: int("x")).is_failure()
    True
"""

from __future__ import annotations

import traceback
from contextlib import AbstractContextManager, closing
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, overload

from fallible.foundation.config import get_settings
from fallible.foundation.errors import UNIT, Error, MissingValueError, Unit, UnwrapError, as_error
from fallible.runtime.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from fallible.foundation.errors import ErrorLike

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

NO_VALUE_MESSAGE = "transform produced no value"
PREDICATE_MESSAGE = "value did not satisfy predicate"
SUPPRESSED_MESSAGE = "scope suppressed the result"

_NO_ERRORS: tuple[Error, ...] = ()


class Outcome(Generic[T]):
    """Success with a value, or Failure with one or more errors.

    Build with ``Success``, ``Failure``, ``Failures`` or the capturing
    constructors ``of`` / ``of_scoped``. Direct construction still rejects
    a Success without a value.

    Examples:
        >>> Success(5).map(lambda x: x * 2)
        Success(10)
        >>> Failure("bad").map(lambda x: x * 2)
        Failure(['bad'])
        >>> Success(5).bind(lambda x: Success(x) if x > 10 else Failure("too small")).first_error.message
        'too small'
    """

    __slots__ = ("_value", "_errors")
    __match_args__ = ("_value", "_errors")

    def __init__(self, value: T | None, errors: tuple[Error, ...]) -> None:
        if value is None and not errors:
            raise MissingValueError("Success requires a value, got None")
        self._value = value
        self._errors = errors

    # ─── Variant ───────────────────────────────────────────────────────

    def is_success(self) -> bool:
        return not self._errors

    def is_failure(self) -> bool:
        return bool(self._errors)

    @property
    def errors(self) -> tuple[Error, ...]:
        """All errors, in order. Empty on Success."""
        return self._errors

    @property
    def first_error(self) -> Error | None:
        """First error, or None on Success."""
        return self._errors[0] if self._errors else None

    # ─── Elimination ───────────────────────────────────────────────────

    def match(self, *, on_success: Callable[[T], R], on_failure: Callable[[Error], R]) -> R:
        """Invoke exactly one branch. The sanctioned way to get at the value."""
        return on_failure(self._errors[0]) if self._errors else on_success(self._value)  # type: ignore[arg-type]

    def unwrap(self) -> T:
        """Extract the value. Unsafe: raises UnwrapError on Failure."""
        if self._errors:
            raise UnwrapError(self._errors)
        return self._value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return default if self._errors else self._value  # type: ignore[return-value]

    # ─── Combinators ───────────────────────────────────────────────────

    def map(self, transform: Callable[[T], U]) -> Outcome[U]:
        """Apply transform to the value. A raise or a None result becomes Failure."""
        if self._errors:
            return Outcome(None, self._errors)
        try:
            result = transform(self._value)  # type: ignore[arg-type]
        except Exception as exc:
            return _captured(exc, "map")
        if result is None:
            return Outcome(None, (Error.from_message(NO_VALUE_MESSAGE),))
        return Outcome(result, _NO_ERRORS)

    def bind(self, transform: Callable[[T], Outcome[U]]) -> Outcome[U]:
        """Monadic bind. Returns transform's outcome as-is; a raise becomes Failure."""
        if self._errors:
            return Outcome(None, self._errors)
        try:
            return transform(self._value)  # type: ignore[arg-type]
        except Exception as exc:
            return _captured(exc, "bind")

    flat_map = bind

    def filter(self, predicate: Callable[[T], bool]) -> Outcome[T]:
        """Keep the success only if predicate holds."""
        if self._errors or predicate(self._value):  # type: ignore[arg-type]
            return self
        return Outcome(None, (Error.from_message(PREDICATE_MESSAGE),))

    def for_each(self, action: Callable[[T], object]) -> Outcome[T]:
        """Run action on the value for its side effect. No-op on Failure."""
        if not self._errors:
            action(self._value)  # type: ignore[arg-type]
        return self

    def map_error(self, transform: Callable[[Error], Error]) -> Outcome[T]:
        """Replace the failure with transform(first_error). No-op on Success."""
        if not self._errors:
            return self
        return Outcome(None, (transform(self._errors[0]),))

    def also(self, action: Callable[[], object]) -> Outcome[T]:
        """Run action regardless of variant and return self."""
        action()
        return self

    def pipe(self, func: Callable[[Outcome[T]], R]) -> R:
        """Pass the whole outcome to func."""
        return func(self)

    # ─── Dunder Methods ────────────────────────────────────────────────

    __bool__ = lambda self: not self._errors  # noqa: E731

    def __repr__(self) -> str:
        if self._errors:
            return f"Failure({[str(e) for e in self._errors]!r})"
        return f"Success({self._value!r})"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        if self._errors or other._errors:
            return self._errors == other._errors
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((self._value, self._errors))

    def __iter__(self) -> Iterator[T]:
        """Yields the value if Success, nothing if Failure."""
        if not self._errors:
            yield self._value  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


@overload
def Success() -> Outcome[Unit]: ...
@overload
def Success(value: T) -> Outcome[T]: ...
def Success(value: Any = UNIT) -> Outcome[Any]:  # noqa: N802
    """Construct a Success. Raises MissingValueError for None."""
    if value is None:
        raise MissingValueError("Success requires a value, got None")
    return Outcome(value, _NO_ERRORS)


def Failure(error: ErrorLike) -> Outcome[Any]:  # noqa: N802
    """Construct a Failure from one Error (or a message / exception)."""
    return Outcome(None, (as_error(error),))


def Failures(errors: Iterable[ErrorLike]) -> Outcome[Any]:  # noqa: N802
    """Construct a Failure carrying several errors. Raises MissingValueError if empty."""
    collected = tuple(as_error(e) for e in errors)
    if not collected:
        raise MissingValueError("Failure requires at least one error")
    return Outcome(None, collected)


def of(thunk: Callable[[], T]) -> Outcome[T]:
    """Invoke thunk, capturing any raised exception as a Failure.

    A thunk returning None yields a Failure wrapping the MissingValueError
    from Success construction; use ``of_action`` for procedures.
    """
    try:
        return Success(thunk())
    except Exception as exc:
        return _captured(exc, "of")


def of_action(action: Callable[[], object]) -> Outcome[Unit]:
    """Invoke a procedure for its effect. Success(UNIT) unless it raises."""
    try:
        action()
    except Exception as exc:
        return _captured(exc, "of")
    return Outcome(UNIT, _NO_ERRORS)


def of_scoped(resource: Any, fn: Callable[[Any], T]) -> Outcome[T]:
    """Run fn inside resource's scope; the resource is released exactly once.

    ``resource`` is a context manager (fn receives what ``__enter__``
    returns) or any object with ``close()`` (fn receives the object). Faults
    from acquisition, fn, or release are captured like ``of``.

    Example:
        >>> of_scoped(open("setup.cfg"), lambda f: f.readline())  # doctest: +SKIP
        Success('[metadata]\\n')
    """
    scope = _scope(resource)
    outcome: Outcome[T] = _suppressed()
    try:
        with scope as acquired:
            outcome = Success(fn(acquired))
    except Exception as exc:
        outcome = _captured(exc, "of_scoped")
    _released(resource)
    return outcome


def of_scoped_action(resource: Any, action: Callable[[Any], object]) -> Outcome[Unit]:
    """``of_scoped`` for procedures: Success(UNIT) unless something raises."""
    scope = _scope(resource)
    outcome: Outcome[Unit] = _suppressed()
    try:
        with scope as acquired:
            action(acquired)
            outcome = Outcome(UNIT, _NO_ERRORS)
    except Exception as exc:
        outcome = _captured(exc, "of_scoped")
    _released(resource)
    return outcome


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════════


def _scope(resource: Any) -> AbstractContextManager[Any]:
    if hasattr(resource, "__enter__") and hasattr(resource, "__exit__"):
        return resource  # type: ignore[no-any-return]
    if hasattr(resource, "close"):
        return closing(resource)
    raise TypeError(f"{type(resource).__name__} is neither a context manager nor closeable")


def _captured(exc: Exception, operation: str) -> Outcome[Any]:
    """Convert a raised exception into a Failure, logging the capture."""
    capture = get_settings().capture
    if capture.log_faults:
        log = get_logger("fallible.outcome")
        if capture.include_traceback:
            log = log.bind(traceback="".join(traceback.format_exception(exc)))
        log.debug("fault captured", operation=operation, fault_type=type(exc).__name__, fault=str(exc))
    return Outcome(None, (Error.from_fault(exc),))


def _suppressed() -> Outcome[Any]:
    # Result when the scope's __exit__ swallows the exception.
    return Outcome(None, (Error.from_message(SUPPRESSED_MESSAGE),))


def _released(resource: object) -> None:
    get_logger("fallible.outcome").debug("resource released", resource=type(resource).__name__)
