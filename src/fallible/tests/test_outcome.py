"""Tests for the Outcome container.

Validates:
- Functor / monad laws and the short-circuit law
- Construction contracts (no None success, no empty failure)
- Fault capture at of / map / bind / of_scoped
- Guaranteed release for scoped resources
- Equality and dunder behavior
"""

from __future__ import annotations

from contextlib import suppress
from typing import Callable

import pytest

from fallible import (
    UNIT,
    Error,
    Failure,
    Failures,
    MissingValueError,
    Outcome,
    Success,
    UnwrapError,
    of,
    of_action,
    of_scoped,
    of_scoped_action,
)
from fallible.monads import NO_VALUE_MESSAGE, PREDICATE_MESSAGE, SUPPRESSED_MESSAGE


def _never(*_: object) -> object:
    raise AssertionError("must not be invoked on Failure")


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Laws
# ═════════════════════════════════════════════════════════════════════════════


def test_functor_identity() -> None:
    """fmap id = id"""
    ok: Outcome[int] = Success(42)
    assert ok.map(lambda x: x) == ok

    failed: Outcome[int] = Failure("fail")
    assert failed.map(lambda x: x) == failed


def test_functor_composition() -> None:
    """fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2

    outcome: Outcome[int] = Success(5)
    assert outcome.map(lambda x: f(g(x))) == outcome.map(g).map(f)


def test_monad_left_identity() -> None:
    """return a >>= f = f a"""
    f: Callable[[int], Outcome[int]] = lambda x: Success(x * 2)
    assert Success(42).bind(f) == f(42)


def test_monad_right_identity() -> None:
    """m >>= return = m"""
    m: Outcome[int] = Success(42)
    assert m.bind(Success) == m


def test_monad_associativity() -> None:
    """(m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    m: Outcome[int] = Success(5)
    f: Callable[[int], Outcome[int]] = lambda x: Success(x + 1)
    g: Callable[[int], Outcome[int]] = lambda x: Success(x * 2)

    assert m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))


def test_short_circuit_skips_every_combinator() -> None:
    failed: Outcome[int] = Failures(["first", "second"])

    for result in (failed.map(_never), failed.bind(_never), failed.filter(_never), failed.for_each(_never)):
        assert result.is_failure()
        assert result.errors == failed.errors


def test_success_round_trip() -> None:
    for value in (0, "", [], False, 3.5, "text", UNIT):
        assert Success(value).match(on_success=lambda x: x, on_failure=lambda _: "default") == value


# ═════════════════════════════════════════════════════════════════════════════
# Construction
# ═════════════════════════════════════════════════════════════════════════════


def test_success_construction() -> None:
    outcome = Success(42)

    assert outcome.is_success()
    assert not outcome.is_failure()
    assert outcome.errors == ()
    assert outcome.first_error is None
    assert outcome.match(on_success=lambda v: v, on_failure=lambda _: 0) == 42


def test_success_rejects_none() -> None:
    with pytest.raises(MissingValueError):
        Success(None)


def test_missing_value_is_value_error() -> None:
    with pytest.raises(ValueError):
        Success(None)


def test_direct_construction_rejects_valueless_success() -> None:
    with pytest.raises(MissingValueError):
        Outcome(None, ())

    assert Outcome(None, (Error.from_message("bad"),)).is_failure()


def test_success_without_argument_is_unit() -> None:
    assert Success() == Success(UNIT)
    assert Success().unwrap() is UNIT


def test_failure_construction() -> None:
    error = Error.from_message("Test error")
    outcome: Outcome[int] = Failure(error)

    assert outcome.is_failure()
    assert not outcome.is_success()
    assert outcome.first_error is error
    assert outcome.errors == (error,)


def test_failure_from_loose_input() -> None:
    fault = OSError("disk")

    assert Failure("bad").first_error == Error.from_message("bad")
    assert Failure(fault).first_error == Error.from_fault(fault)


def test_failures_keeps_all_errors() -> None:
    outcome = Failures(["a", Error.from_message("b")])
    assert [e.message for e in outcome.errors] == ["a", "b"]


def test_failures_rejects_empty() -> None:
    with pytest.raises(MissingValueError):
        Failures([])


# ═════════════════════════════════════════════════════════════════════════════
# Capture: of / of_action
# ═════════════════════════════════════════════════════════════════════════════


def test_of_success() -> None:
    assert of(lambda: 42) == Success(42)


def test_of_captures_fault() -> None:
    outcome = of(lambda: int("x"))

    assert outcome.is_failure()
    assert outcome.first_error.is_exceptional
    assert isinstance(outcome.first_error.fault, ValueError)


def test_of_none_result_is_failure() -> None:
    outcome = of(lambda: None)

    assert outcome.is_failure()
    assert isinstance(outcome.first_error.fault, MissingValueError)


def test_of_does_not_capture_base_exceptions() -> None:
    def interrupt() -> int:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        of(interrupt)


def test_of_action() -> None:
    calls: list[int] = []

    assert of_action(lambda: calls.append(1)) == Success(UNIT)
    assert calls == [1]

    failed = of_action(lambda: {}["missing"])
    assert isinstance(failed.first_error.fault, KeyError)


# ═════════════════════════════════════════════════════════════════════════════
# Capture: of_scoped
# ═════════════════════════════════════════════════════════════════════════════


def test_of_scoped_success_releases(resource) -> None:
    outcome = of_scoped(resource, lambda _: 42)

    assert outcome == Success(42)
    assert resource.entered == 1
    assert resource.released == 1


def test_of_scoped_passes_acquired_resource(resource) -> None:
    seen: list[object] = []
    of_scoped(resource, lambda r: seen.append(r) or 1)
    assert seen == [resource]


def test_of_scoped_fault_releases(resource) -> None:
    def boom(_: object) -> int:
        raise RuntimeError("Test exception")

    outcome = of_scoped(resource, boom)

    assert outcome.is_failure()
    assert outcome.first_error.is_exceptional
    assert str(outcome.first_error.fault) == "Test exception"
    assert resource.released == 1


def test_of_scoped_none_result_releases(resource) -> None:
    outcome = of_scoped(resource, lambda _: None)

    assert isinstance(outcome.first_error.fault, MissingValueError)
    assert resource.released == 1


def test_of_scoped_release_fault_is_captured(failing_resource) -> None:
    outcome = of_scoped(failing_resource, lambda _: 42)

    assert isinstance(outcome.first_error.fault, OSError)
    assert failing_resource.released == 1


def test_of_scoped_closeable(closeable) -> None:
    assert of_scoped(closeable, lambda c: c.closed) == Success(0)
    assert closeable.closed == 1


def test_of_scoped_rejects_non_resource() -> None:
    with pytest.raises(TypeError):
        of_scoped(42, lambda _: 1)


def test_of_scoped_action(resource) -> None:
    assert of_scoped_action(resource, lambda _: None) == Success(UNIT)
    assert resource.released == 1

    failed = of_scoped_action(resource, lambda _: 1 / 0)
    assert isinstance(failed.first_error.fault, ZeroDivisionError)
    assert resource.released == 2


def test_of_scoped_suppressing_scope_is_failure() -> None:
    outcome = of_scoped(suppress(ValueError), lambda _: int("x"))

    assert outcome.is_failure()
    assert outcome.first_error == Error.from_message(SUPPRESSED_MESSAGE)


def test_of_scoped_action_suppressing_scope_is_failure() -> None:
    outcome = of_scoped_action(suppress(ValueError), lambda _: int("x"))

    assert outcome.is_failure()
    assert outcome.first_error.message == SUPPRESSED_MESSAGE
    assert of_scoped_action(suppress(ValueError), lambda _: None) == Success(UNIT)


# ═════════════════════════════════════════════════════════════════════════════
# Combinators
# ═════════════════════════════════════════════════════════════════════════════


def test_map_success() -> None:
    assert Success(5).map(lambda x: x * 2) == Success(10)


def test_map_captures_fault() -> None:
    outcome = Success(5).map(lambda x: x / 0)
    assert isinstance(outcome.first_error.fault, ZeroDivisionError)


def test_map_none_result() -> None:
    outcome = Success(5).map(lambda _: None)

    assert outcome.is_failure()
    assert outcome.first_error == Error.from_message(NO_VALUE_MESSAGE)


def test_map_failure_keeps_all_errors() -> None:
    failed = Failures(["a", "b"])
    assert failed.map(lambda x: x).errors == failed.errors


def test_bind_returns_transform_outcome() -> None:
    inner = Failure("inner")
    assert Success(5).bind(lambda _: inner) is inner
    assert Success(5).bind(lambda x: Success(x * 2)) == Success(10)


def test_bind_captures_fault() -> None:
    outcome = Success({}).bind(lambda d: Success(d["missing"]))
    assert isinstance(outcome.first_error.fault, KeyError)


def test_flat_map_alias() -> None:
    assert Success(5).flat_map(lambda x: Success(x + 1)) == Success(5).bind(lambda x: Success(x + 1))


def test_filter() -> None:
    ok = Success(3)

    assert ok.filter(lambda v: v > 2) is ok
    rejected = ok.filter(lambda v: v > 4)
    assert rejected.is_failure()
    assert rejected.first_error.message == PREDICATE_MESSAGE


def test_for_each() -> None:
    seen: list[int] = []
    ok = Success(7)

    assert ok.for_each(seen.append) is ok
    assert seen == [7]


def test_map_error() -> None:
    failed: Outcome[int] = Failures(["a", "b"])
    remapped = failed.map_error(lambda e: Error.from_message(f"wrapped: {e.message}"))

    assert remapped.errors == (Error.from_message("wrapped: a"),)

    ok = Success(1)
    assert ok.map_error(_never) is ok


def test_also_runs_for_both_variants() -> None:
    calls: list[str] = []
    ok, failed = Success(1), Failure("x")

    assert ok.also(lambda: calls.append("ok")) is ok
    assert failed.also(lambda: calls.append("failed")) is failed
    assert calls == ["ok", "failed"]


def test_match_invokes_exactly_one_branch() -> None:
    assert Success(42).match(on_success=lambda x: f"success: {x}", on_failure=_never) == "success: 42"
    assert Failure("fail").match(on_success=_never, on_failure=lambda e: f"failed: {e}") == "failed: fail"


def test_pipe() -> None:
    assert Success(2).pipe(lambda o: o.is_success()) is True


# ═════════════════════════════════════════════════════════════════════════════
# Extraction & Dunders
# ═════════════════════════════════════════════════════════════════════════════


def test_unwrap() -> None:
    assert Success(42).unwrap() == 42

    with pytest.raises(UnwrapError, match="bad"):
        Failure("bad").unwrap()


def test_unwrap_or() -> None:
    assert Success(5).unwrap_or(10) == 5
    assert Failure("fail").unwrap_or(10) == 10


def test_equality() -> None:
    error = Error.from_message("x")

    assert Success(1) == Success(1)
    assert Success(1) != Success(2)
    assert Failure(error) == Failure(Error.from_message("x"))
    assert Failures(["a", "b"]) != Failures(["b", "a"])
    assert Success(1) != Failure("1")
    assert Success(1) != 1


def test_truthiness() -> None:
    assert bool(Success(42)) is True
    assert bool(Failure("fail")) is False


def test_iteration() -> None:
    assert list(Success(42)) == [42]
    assert list(Failure("fail")) == []


def test_repr() -> None:
    assert repr(Success(42)) == "Success(42)"
    assert repr(Failures(["a", "b"])) == "Failure(['a', 'b'])"


def test_structural_pattern_matching() -> None:
    match Success(3):
        case Outcome(value, ()):
            matched = value
        case _:
            matched = None
    assert matched == 3
