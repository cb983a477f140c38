"""Tests for BoundValue and change-detection policies."""

import pytest

from bindflow import BoundValue, BoundExpr, CompPolicy, Effect, BindingDisposedError


class _AlwaysEqualAndUnequal:
    """== and != both say yes, so NOT_EQUAL and EQUAL disagree on it."""

    def __eq__(self, other):
        return True

    def __ne__(self, other):
        return True

    __hash__ = object.__hash__


class TestBoundValue:
    def test_get_set(self):
        v = BoundValue(42)
        assert v.get() == 42
        v.set(100)
        assert v.get() == 100

    def test_default_is_none(self):
        assert BoundValue().get() is None

    def test_zero(self):
        assert BoundValue.zero(int).get() == 0
        assert BoundValue.zero(float).get() == 0.0
        assert BoundValue.zero(str).get() == ""

    def test_notifies_in_registration_order(self):
        v = BoundValue("hello")
        log = []
        first = Effect(lambda s: log.append(("first", s)), v, fire_immediately=False)
        second = Effect(lambda s: log.append(("second", s)), v, fire_immediately=False)
        v.set("world")
        assert log == [("first", "world"), ("second", "world")]
        assert v.subscribers == [first, second]

    def test_repr(self):
        v = BoundValue(5)
        assert repr(v) == "BoundValue(5)"
        v.dispose()
        assert repr(v) == "BoundValue(<disposed>)"

    def test_disposed_rejects_reads_and_writes(self):
        v = BoundValue(1)
        v.dispose()
        assert v.disposed
        with pytest.raises(BindingDisposedError):
            v.get()
        with pytest.raises(BindingDisposedError):
            v.set(2)

    def test_dispose_is_idempotent(self):
        v = BoundValue(1)
        v.dispose()
        v.dispose()
        assert v.disposed


class TestCompPolicy:
    def _counting(self, source):
        calls = []

        def fn(x):
            calls.append(x)
            return x

        return BoundExpr(fn, source), calls

    def test_not_equal_suppresses_same_value(self):
        a = BoundValue(1)
        e, calls = self._counting(a)
        assert len(calls) == 1
        a.set(1)
        a.set(1)
        assert len(calls) == 1
        a.set(2)
        assert len(calls) == 2
        assert e.get() == 2

    def test_always_recomputes_once_per_set(self):
        a = BoundValue(1, comp_policy=CompPolicy.ALWAYS)
        e, calls = self._counting(a)
        assert len(calls) == 1
        a.set(1)
        assert len(calls) == 2
        a.set(1)
        assert len(calls) == 3
        assert e.get() == 1

    def test_equal_uses_equality(self):
        start = _AlwaysEqualAndUnequal()
        a = BoundValue(start, comp_policy=CompPolicy.EQUAL)
        a.set(_AlwaysEqualAndUnequal())
        assert a.get() is start

    def test_not_equal_uses_inequality(self):
        start = _AlwaysEqualAndUnequal()
        replacement = _AlwaysEqualAndUnequal()
        a = BoundValue(start)
        a.set(replacement)
        assert a.get() is replacement

    def test_count_sentinel_always_propagates(self):
        a = BoundValue(1, comp_policy=CompPolicy.COUNT)
        assert a.different_with(1)
        e, calls = self._counting(a)
        a.set(1)
        assert len(calls) == 2

    def test_policy_assignable(self):
        a = BoundValue(1)
        assert a.comp_policy is CompPolicy.NOT_EQUAL
        e, calls = self._counting(a)
        a.comp_policy = CompPolicy.ALWAYS
        a.set(1)
        assert len(calls) == 2

    def test_rejects_non_policy(self):
        with pytest.raises(TypeError):
            BoundValue(1, comp_policy="equal")
        a = BoundValue(1)
        with pytest.raises(TypeError):
            a.comp_policy = "equal"
        assert a.comp_policy is CompPolicy.NOT_EQUAL
