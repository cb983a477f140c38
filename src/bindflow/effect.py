"""Effects — side effects run whenever a set of inputs changes.

An Effect is a subscriber with no value of its own: on every notification it
calls its function with the current input values. It is the end of a
propagation chain, where values leave the graph (printing, widget updates).

Effects run synchronously inside the set() or get() that caused them, in
subscription order. Exceptions from the function propagate to that caller.

Inputs do not keep their subscribers alive: hold on to the Effect for as
long as it should keep firing.
"""

from __future__ import annotations

from typing import Any, Callable

from bindflow import _anchor
from bindflow.binding import Binding, TypedBinding, check_arity, fn_name


class Effect(Binding):
    """A reactive side effect over a fixed list of inputs."""

    __slots__ = ()

    def __init__(
        self,
        fn: Callable[..., Any],
        *inputs: TypedBinding[Any],
        fire_immediately: bool = True,
    ) -> None:
        check_arity(fn, len(inputs))
        super().__init__()
        self._attach(fn, inputs)
        if fire_immediately:
            self.update()

    def update(self) -> None:
        """Run the effect with the current input values."""
        if self.disposed:
            return
        _anchor.derivation_fns[self._id](*self._input_values())

    def __repr__(self) -> str:
        if self.disposed:
            return "Effect(<disposed>)"
        return f"Effect({fn_name(_anchor.derivation_fns[self._id])}, active)"


def effect(
    *inputs: TypedBinding[Any],
    fire_immediately: bool = True,
) -> Callable[[Callable[..., Any]], Effect]:
    """Decorator factory: run fn now and again whenever any input changes.

    Returns the Effect (call .dispose() to stop).

    Usage:
        price = BoundValue(10)
        log = []

        @effect(price)
        def record(p):
            log.append(p)
        # log == [10]

        price.set(12)
        # log == [10, 12]

        record.dispose()
        price.set(13)
        # log == [10, 12]
    """

    def decorate(fn: Callable[..., Any]) -> Effect:
        return Effect(fn, *inputs, fire_immediately=fire_immediately)

    return decorate
