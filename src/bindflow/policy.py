"""Change-detection and evaluation policies.

CompPolicy decides whether a stored value counts as changed (and so whether
subscribers hear about it). EvalPolicy decides when a BoundExpr recomputes.
Both carry a COUNT sentinel that is never meant to be active.
"""

from __future__ import annotations

from enum import Enum


class CompPolicy(Enum):
    NOT_EQUAL = 0
    EQUAL = 1
    ALWAYS = 2
    COUNT = 3


class EvalPolicy(Enum):
    INSTANT = 0
    LAZY = 1
    COUNT = 2


def check_policy(policy, kind):
    """Return policy if it is a member of kind, else raise TypeError."""
    if not isinstance(policy, kind):
        raise TypeError(f"expected {kind.__name__}, got {policy!r}")
    return policy


# ─── Defaults ────────────────────────────────────────────────────────────────
_default_comp = CompPolicy.NOT_EQUAL
_default_eval = EvalPolicy.INSTANT


def set_default_policies(
    comp_policy: CompPolicy | None = None,
    eval_policy: EvalPolicy | None = None,
) -> None:
    """Set the policies used by nodes constructed without an explicit one.

    Already-constructed nodes keep what they have. None leaves a default as is:
        bindflow.set_default_policies(eval_policy=EvalPolicy.LAZY)
    """
    global _default_comp, _default_eval
    if comp_policy is not None:
        _default_comp = check_policy(comp_policy, CompPolicy)
    if eval_policy is not None:
        _default_eval = check_policy(eval_policy, EvalPolicy)


def default_comp_policy() -> CompPolicy:
    return _default_comp


def default_eval_policy() -> EvalPolicy:
    return _default_eval
