"""Data anchor — plain Python structures that hold all binding state.

Nodes are thin handles holding an _id. Everything else (values, policies,
functions, inputs, subscriber lists) lives here, keyed by that id.

Subscriber lists hold ids, never nodes. Ids come from a counter and are
never reused, so resolving the id of a released node yields None instead of
some other node that happens to live at the same slot.
"""

import itertools
import weakref

# Live node table — id -> weakref to the handle
nodes: dict[int, weakref.ref] = {}

# Value state (BoundValue + BoundExpr)
values: dict[int, object] = {}
comp_policies: dict[int, object] = {}
subscribers: dict[int, list[int]] = {}  # source id -> subscriber ids, in order

# Derivation state (BoundExpr + Effect)
eval_policies: dict[int, object] = {}
derivation_fns: dict[int, object] = {}  # deriv_id -> callable
inputs: dict[int, tuple] = {}  # deriv_id -> strong refs to input handles
dirty_flags: dict[int, bool] = {}

_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)


def register(node) -> int:
    node_id = new_id()
    nodes[node_id] = weakref.ref(node)
    subscribers[node_id] = []
    return node_id


def resolve(node_id: int):
    """The live handle for node_id, or None if released or collected."""
    ref = nodes.get(node_id)
    return ref() if ref is not None else None


def is_live(node_id: int) -> bool:
    return node_id in nodes


def subscribe(source_id: int, subscriber_id: int) -> None:
    subscribers[source_id].append(subscriber_id)


def unsubscribe(source_id: int, subscriber_id: int) -> None:
    refs = subscribers.get(source_id)
    if refs is not None:
        refs[:] = [ref for ref in refs if ref != subscriber_id]


def release(node_id: int) -> None:
    """Drop all state for node_id. Unsubscribes from inputs before letting them go."""
    for source in inputs.get(node_id, ()):
        unsubscribe(source._id, node_id)
    nodes.pop(node_id, None)
    values.pop(node_id, None)
    comp_policies.pop(node_id, None)
    subscribers.pop(node_id, None)
    eval_policies.pop(node_id, None)
    derivation_fns.pop(node_id, None)
    dirty_flags.pop(node_id, None)
    inputs.pop(node_id, None)
