"""Node base classes — the notify capability and the observable value.

Binding is anything that can be told "an input changed" (update()).
TypedBinding adds a stored value, a change-detection policy and an ordered
subscriber list. Both are thin handles: state lives in _anchor.

A node is released from the anchor either explicitly via dispose() or when
it is garbage collected. Release unsubscribes it from its inputs first, so a
source never notifies a dependent that is gone.
"""

from __future__ import annotations

import inspect
import logging
import weakref
from typing import Callable, Generic, Sequence, TypeVar

from bindflow import _anchor
from bindflow.errors import BindingArityError, BindingDisposedError
from bindflow.policy import CompPolicy, check_policy, default_comp_policy

logger = logging.getLogger("bindflow.binding")

T = TypeVar("T")


def fn_name(fn: Callable) -> str:
    return getattr(fn, "__name__", None) or repr(fn)


def check_arity(fn: Callable, count: int) -> None:
    """Raise BindingArityError unless fn accepts exactly `count` positional args.

    Callables without an introspectable signature are let through.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        logger.debug("No signature for %r, skipping arity check", fn)
        return
    try:
        signature.bind(*range(count))
    except TypeError as exc:
        raise BindingArityError(
            f"{fn_name(fn)}{signature} cannot be called with {count} input(s): {exc}"
        ) from None


class Binding:
    """A graph participant that can be notified of an upstream change."""

    __slots__ = ("_id", "_finalizer", "__weakref__")

    def __init__(self) -> None:
        self._id = _anchor.register(self)
        self._finalizer = weakref.finalize(self, _anchor.release, self._id)
        self._finalizer.atexit = False

    def update(self) -> None:
        """Called by an input after its value changed. No-op by default."""

    @property
    def disposed(self) -> bool:
        return not _anchor.is_live(self._id)

    def dispose(self) -> None:
        """Unsubscribe from all inputs and drop this node's state. Idempotent."""
        if self._finalizer.alive:
            logger.debug("Disposing %s #%d", type(self).__name__, self._id)
            self._finalizer()

    def _check_live(self) -> None:
        if not _anchor.is_live(self._id):
            raise BindingDisposedError(f"{type(self).__name__} #{self._id} is disposed")

    def _attach(self, fn: Callable, sources: Sequence[TypedBinding]) -> None:
        """Store fn and strong refs to sources, subscribe to each in order."""
        for source in sources:
            if not isinstance(source, TypedBinding):
                raise TypeError(f"inputs must be bindings, got {source!r}")
            source._check_live()
        _anchor.derivation_fns[self._id] = fn
        _anchor.inputs[self._id] = tuple(sources)
        for source in sources:
            _anchor.subscribe(source._id, self._id)

    def _input_values(self) -> list:
        return [source.get() for source in _anchor.inputs[self._id]]


class TypedBinding(Binding, Generic[T]):
    """A node holding a value of type T that notifies its subscribers on change."""

    __slots__ = ()

    def __init__(self, value: T | None = None, comp_policy: CompPolicy | None = None) -> None:
        if comp_policy is None:
            comp_policy = default_comp_policy()
        check_policy(comp_policy, CompPolicy)
        super().__init__()
        _anchor.values[self._id] = value
        _anchor.comp_policies[self._id] = comp_policy

    def get(self) -> T:
        """Read the current value."""
        self._check_live()
        return _anchor.values[self._id]

    def peek(self) -> T:
        """Read the stored value without triggering any recomputation."""
        self._check_live()
        return _anchor.values[self._id]

    @property
    def comp_policy(self) -> CompPolicy:
        self._check_live()
        return _anchor.comp_policies[self._id]

    @comp_policy.setter
    def comp_policy(self, policy: CompPolicy) -> None:
        self._check_live()
        _anchor.comp_policies[self._id] = check_policy(policy, CompPolicy)

    def different_with(self, other: T) -> bool:
        """Whether storing `other` counts as a change under the comp policy."""
        self._check_live()
        current = _anchor.values[self._id]
        policy = _anchor.comp_policies[self._id]
        if policy is CompPolicy.NOT_EQUAL:
            return current != other
        if policy is CompPolicy.EQUAL:
            return not (current == other)
        # ALWAYS, and COUNT so that a misconfigured node never drops updates
        return True

    def _store(self, value: T) -> None:
        """Store value and notify subscribers if the comp policy calls it a change."""
        if self.different_with(value):
            _anchor.values[self._id] = value
            self._notify()

    def _notify(self) -> None:
        """Call update() on every live subscriber, in registration order."""
        for subscriber_id in list(_anchor.subscribers[self._id]):
            subscriber = _anchor.resolve(subscriber_id)
            if subscriber is not None:
                subscriber.update()

    @property
    def subscribers(self) -> list[Binding]:
        """Live subscribers in registration order. Repeats are kept."""
        found = (_anchor.resolve(sid) for sid in _anchor.subscribers.get(self._id, ()))
        return [node for node in found if node is not None]

    @property
    def subscriber_count(self) -> int:
        return len(_anchor.subscribers.get(self._id, ()))

    def dispose(self) -> None:
        if not self.disposed and self.subscriber_count:
            logger.warning(
                "Disposing %s #%d with %d live subscriber(s)",
                type(self).__name__, self._id, self.subscriber_count,
            )
        super().dispose()

