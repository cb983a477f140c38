"""Bound expressions — derived values computed from a fixed list of inputs.

A BoundExpr wraps a function and an ordered tuple of input nodes. The
function is called positionally with each input's current value, and the
result is stored through the same change-detected path a BoundValue uses,
so a BoundExpr can itself be the input of another one.

Evaluation policy:
- INSTANT: every input notification recomputes immediately and pushes the
  result on to this node's own subscribers. A set() on a leaf therefore
  drives the whole chain of instant nodes before it returns.
- LAZY: an input notification only marks the node dirty. The next get()
  recomputes once, however many notifications arrived in between, and only
  then are this node's subscribers told about the new value.

Inputs are held strongly for as long as the expression lives. Subscriber
back-references are ids in the anchor, so an input never keeps its
dependents alive.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar, overload

from bindflow import _anchor
from bindflow.binding import TypedBinding, check_arity, fn_name
from bindflow.policy import CompPolicy, EvalPolicy, check_policy, default_eval_policy

R = TypeVar("R")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


class BoundExpr(TypedBinding[R], Generic[R]):
    """A derived value that recomputes when any of its inputs changes."""

    __slots__ = ()

    def __init__(
        self,
        fn: Callable[..., R],
        *inputs: TypedBinding[Any],
        eval_policy: EvalPolicy | None = None,
        comp_policy: CompPolicy | None = None,
    ) -> None:
        check_arity(fn, len(inputs))
        policy = eval_policy if eval_policy is not None else default_eval_policy()
        check_policy(policy, EvalPolicy)
        super().__init__(None, comp_policy)
        _anchor.eval_policies[self._id] = policy
        self._attach(fn, inputs)
        _anchor.dirty_flags[self._id] = policy is EvalPolicy.INSTANT
        self.update()

    @property
    def eval_policy(self) -> EvalPolicy:
        self._check_live()
        return _anchor.eval_policies[self._id]

    @eval_policy.setter
    def eval_policy(self, policy: EvalPolicy) -> None:
        self._check_live()
        _anchor.eval_policies[self._id] = check_policy(policy, EvalPolicy)

    @property
    def dirty(self) -> bool:
        """True while a lazy node's cached value is stale."""
        self._check_live()
        return _anchor.dirty_flags[self._id]

    @property
    def inputs(self) -> tuple[TypedBinding[Any], ...]:
        return _anchor.inputs[self._id]

    def get(self) -> R:
        """Read the value, recomputing first if it is stale."""
        self._check_live()
        if _anchor.dirty_flags[self._id]:
            self._recompute()
        return _anchor.values[self._id]

    def update(self) -> None:
        """Called by an input after it changed."""
        self._check_live()
        policy = _anchor.eval_policies[self._id]
        if policy is EvalPolicy.INSTANT:
            self._recompute()
        elif policy is EvalPolicy.LAZY:
            _anchor.dirty_flags[self._id] = True
        # EvalPolicy.COUNT: nothing to do

    def _recompute(self) -> None:
        """Call fn over the current input values and store the result.

        The node is marked dirty while fn runs, so if fn raises the next get()
        tries again. The flag is cleared before storing, so subscribers that
        read this node while being notified see it clean and do not recompute it.
        """
        _anchor.dirty_flags[self._id] = True
        value = _anchor.derivation_fns[self._id](*self._input_values())
        _anchor.dirty_flags[self._id] = False
        self._store(value)

    def __repr__(self) -> str:
        if self.disposed:
            return "BoundExpr(<disposed>)"
        fn = _anchor.derivation_fns[self._id]
        dirty = _anchor.dirty_flags[self._id]
        state = "dirty" if dirty else f"cached={_anchor.values[self._id]!r}"
        return f"BoundExpr({fn_name(fn)}, {state})"


@overload
def expression(
    a: TypedBinding[A],
    /,
    *,
    eval_policy: EvalPolicy | None = ...,
    comp_policy: CompPolicy | None = ...,
) -> Callable[[Callable[[A], R]], BoundExpr[R]]: ...


@overload
def expression(
    a: TypedBinding[A],
    b: TypedBinding[B],
    /,
    *,
    eval_policy: EvalPolicy | None = ...,
    comp_policy: CompPolicy | None = ...,
) -> Callable[[Callable[[A, B], R]], BoundExpr[R]]: ...


@overload
def expression(
    a: TypedBinding[A],
    b: TypedBinding[B],
    c: TypedBinding[C],
    /,
    *,
    eval_policy: EvalPolicy | None = ...,
    comp_policy: CompPolicy | None = ...,
) -> Callable[[Callable[[A, B, C], R]], BoundExpr[R]]: ...


@overload
def expression(
    *inputs: TypedBinding[Any],
    eval_policy: EvalPolicy | None = ...,
    comp_policy: CompPolicy | None = ...,
) -> Callable[[Callable[..., R]], BoundExpr[R]]: ...


def expression(
    *inputs: TypedBinding[Any],
    eval_policy: EvalPolicy | None = None,
    comp_policy: CompPolicy | None = None,
) -> Callable[[Callable[..., R]], BoundExpr[R]]:
    """Decorator factory to create a BoundExpr from a function.

    Usage:
        a = BoundValue(1)
        b = BoundValue(2)

        @expression(a, b)
        def total(x, y):
            return x + y

        total.get()  # 3
        a.set(3)
        total.get()  # 5
    """

    def decorate(fn: Callable[..., R]) -> BoundExpr[R]:
        return BoundExpr(fn, *inputs, eval_policy=eval_policy, comp_policy=comp_policy)

    return decorate
