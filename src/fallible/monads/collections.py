"""Collection operations lifting per-element outcomes into one outcome.

``sequence`` and ``traverse`` deliberately disagree on failure handling:

- sequence: scans everything, reports the first error of every failing element
- traverse: stops at the first failing element, reports one representative error

Example:
    >>> sequence([Success(1), Failure("bad"), Failure("worse")])
    Failure(['bad', 'worse'])
    >>> traverse(["7", "2", "4"], lambda s: of(lambda: int(s)))
    Success([7, 2, 4])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from fallible.foundation.errors import UNIT, Error, Unit

from .outcome import Failure, Failures, Outcome, Success

if TYPE_CHECKING:
    from collections.abc import Iterable

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")


def errors_of(outcomes: Iterable[Outcome[T]]) -> list[Error]:
    """First error of each failing outcome, in order. Successes contribute nothing."""
    return [o.first_error for o in outcomes if o.first_error is not None]


def sequence(outcomes: Iterable[Outcome[T]]) -> Outcome[list[T]]:
    """[Outcome[T]] → Outcome[[T]]. Collects every failure (not fail-fast)."""
    materialized = list(outcomes)
    if any(o.is_failure() for o in materialized):
        return Failures(errors_of(materialized))
    return Success([v for o in materialized for v in o])


def traverse(items: Iterable[A], func: Callable[[A], Outcome[B]]) -> Outcome[list[B]]:
    """Map func over items, collect into Outcome of list. Fail-fast on first Failure.

    The failure carries a single error rebuilt from the failing outcome:
    several errors are aggregated with ``Error.from_many``; a lone error is
    re-wrapped by fault if exceptional, else by message; a lone aggregate
    passes through as-is. Values gathered before the failure are discarded.
    """
    values: list[B] = []
    for item in items:
        r = func(item)
        if r.is_failure():
            return Failure(_representative(r.errors))
        values.extend(r)
    return Success(values)


def to_unit(outcome: Outcome[T]) -> Outcome[Unit]:
    """Discard the success value. A Failure keeps its first error only."""
    if outcome.is_success():
        return Success(UNIT)
    return Failure(outcome.first_error)  # type: ignore[arg-type]


def _representative(errors: tuple[Error, ...]) -> Error:
    if len(errors) > 1:
        return Error.from_many(errors)
    error = errors[0]
    if error.fault is not None:
        return Error.from_fault(error.fault)
    if error.message is not None:
        return Error.from_message(error.message)
    return error
