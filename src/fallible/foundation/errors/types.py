"""Shared type aliases and the Unit value."""

from __future__ import annotations

from typing import Any, Union

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]


class Unit:
    """The single value of a computation that has nothing to return.

    Used as the success payload of procedures (see ``of_action``) and of
    outcomes whose value has been discarded (see ``to_unit``).
    """

    __slots__ = ()
    _instance: Unit | None = None

    def __new__(cls) -> Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    __repr__ = lambda self: "Unit()"  # noqa: E731
    __hash__ = lambda self: 0  # noqa: E731

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unit)

    def __reduce__(self) -> tuple[type[Unit], tuple[()]]:
        return (Unit, ())


UNIT = Unit()
