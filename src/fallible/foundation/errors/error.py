"""Immutable failure descriptor carried by ``Failure`` outcomes.

An ``Error`` is one of three shapes:

- message error: a human-readable string, no underlying cause
- fault-wrapped error: an exception captured at a boundary such as ``of``
- aggregate error: an ordered sequence of child errors

Construct through ``Error.from_message``, ``Error.from_fault`` or
``Error.from_many`` (or ``as_error`` for loose input). Pydantic frozen=True
for immutability; the fault is kept as the original object, never copied
or inspected.

Example:
    >>> e = Error.from_many([Error.from_message("bad"), Error.from_fault(KeyError("k"))])
    >>> e.is_exceptional
    True
    >>> str(e)
    "bad; KeyError: 'k'"
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, model_validator

from .types import JsonDict

ErrorLike: TypeAlias = "Error | str | BaseException"

_NO_CHILDREN: tuple[Error, ...] = ()


class Error(BaseModel):
    """Failure cause: a message, a wrapped fault, or an aggregate of errors.

    Equality is structural: message, fault identity and children
    (element-wise, in order) must match.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", arbitrary_types_allowed=True,
        revalidate_instances="never",
        json_schema_extra={"title": "Error", "description": "Message, wrapped fault, or aggregate of errors"},
    )

    message: str | None = None
    fault: BaseException | None = Field(default=None, repr=False)
    children: tuple[Error, ...] = _NO_CHILDREN

    @model_validator(mode="after")
    def _single_cause(self) -> Error:
        if self.message is not None and self.fault is not None:
            raise ValueError("an error carries either a message or a fault, not both")
        return self

    # ─── Constructors ──────────────────────────────────────────────────

    @classmethod
    def from_message(cls, message: str) -> Error:
        """Leaf error with a message."""
        return cls.model_construct(message=message, fault=None, children=_NO_CHILDREN)

    @classmethod
    def from_fault(cls, fault: BaseException) -> Error:
        """Leaf error wrapping an exception as-is."""
        return cls.model_construct(message=None, fault=fault, children=_NO_CHILDREN)

    @classmethod
    def from_many(cls, errors: Iterable[Error]) -> Error:
        """Aggregate node. Order preserved, duplicates kept, may be empty."""
        return cls.model_construct(message=None, fault=None, children=tuple(errors))

    # ─── Derived ───────────────────────────────────────────────────────

    @computed_field
    @property
    def is_exceptional(self) -> bool:
        """True if this error, or any descendant, wraps a fault."""
        return self.fault is not None or any(child.is_exceptional for child in self.children)

    @property
    def is_aggregate(self) -> bool:
        return bool(self.children)

    @field_serializer("fault")
    def _serialize_fault(self, fault: BaseException | None) -> str | None:
        return None if fault is None else _describe_fault(fault)

    def to_dict(self) -> JsonDict:
        """JSON-safe dict (fault rendered as ``"TypeName: text"``)."""
        return self.model_dump(mode="json")

    def __str__(self) -> str:
        if self.message is not None:
            return self.message
        if self.fault is not None:
            return _describe_fault(self.fault)
        return "; ".join(str(child) for child in self.children)

    def __hash__(self) -> int:
        return hash((self.message, self.fault, self.children))


def _describe_fault(fault: BaseException) -> str:
    return f"{type(fault).__name__}: {fault}"


def as_error(value: Error | str | BaseException) -> Error:
    """Coerce loose input into an ``Error`` via the matching constructor."""
    if isinstance(value, Error):
        return value
    if isinstance(value, str):
        return Error.from_message(value)
    if isinstance(value, BaseException):
        return Error.from_fault(value)
    raise TypeError(f"cannot build an Error from {type(value).__name__}")
