"""Bound values — leaf nodes set directly by calling code.

A BoundValue is the only node kind meant to be written from outside the
graph. set() stores the value and synchronously notifies every subscriber,
unless the change-detection policy says nothing changed.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from bindflow import _anchor
from bindflow.binding import TypedBinding
from bindflow.policy import CompPolicy

T = TypeVar("T")


class BoundValue(TypedBinding[T]):
    """A leaf value whose changes propagate to its subscribers."""

    __slots__ = ()

    def __init__(self, value: T | None = None, *, comp_policy: CompPolicy | None = None) -> None:
        super().__init__(value, comp_policy)

    @classmethod
    def zero(cls, factory: Callable[[], T], *, comp_policy: CompPolicy | None = None) -> BoundValue[T]:
        """A leaf holding the zero value of a type: BoundValue.zero(int).get() == 0."""
        return cls(factory(), comp_policy=comp_policy)

    def set(self, value: T) -> None:
        """Write a new value. Subscribers run before this returns."""
        self._check_live()
        self._store(value)

    def __repr__(self) -> str:
        if self.disposed:
            return "BoundValue(<disposed>)"
        return f"BoundValue({_anchor.values[self._id]!r})"
