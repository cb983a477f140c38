"""bindflow: typed dataflow bindings with instant and lazy evaluation."""

from importlib.metadata import version as _version

__version__ = _version("bindflow")

from bindflow.policy import CompPolicy, EvalPolicy, set_default_policies
from bindflow.errors import BindingError, BindingArityError, BindingDisposedError
from bindflow.binding import Binding, TypedBinding
from bindflow.value import BoundValue
from bindflow.expr import BoundExpr, expression
from bindflow.effect import Effect, effect
# textual NOT auto-imported — opt-in only

__all__ = [
    "CompPolicy",
    "EvalPolicy",
    "set_default_policies",
    "BindingError",
    "BindingArityError",
    "BindingDisposedError",
    "Binding",
    "TypedBinding",
    "BoundValue",
    "BoundExpr",
    "expression",
    "Effect",
    "effect",
]
