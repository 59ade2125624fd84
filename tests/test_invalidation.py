"""Tests for memoization and invalidation across whole graphs."""

import numpy as np
import pytest

import lazygraph as lg
from lazygraph import EMPTY, Handle, round_to


def _all_handles(root: Handle) -> list[Handle]:
    seen: dict[int, Handle] = {}
    stack = [root]
    while stack:
        handle = stack.pop()
        if handle.node.node_id not in seen:
            seen[handle.node.node_id] = handle
            stack.extend(handle.children)
    return list(seen.values())


def _example_graph() -> tuple[lg.InputHandle, lg.InputHandle, lg.InputHandle, Handle]:
    x1 = lg.create_input("x1")
    x2 = lg.create_input("x2")
    x3 = lg.create_input("x3")
    graph = lg.add(x1, lg.mul(x2, lg.sin(lg.add(x2, lg.pow(x3, 3.0)))))
    return x1, x2, x3, graph


class TestExampleGraphs:
    def test_compute(self) -> None:
        x1, x2, x3, graph = _example_graph()
        x1.set(1.0)
        x2.set(2.0)
        x3.set(3.0)
        assert round_to(graph.compute(), 5) == -0.32727

        x1.set(2.0)
        x2.set(3.0)
        x3.set(4.0)
        assert round_to(graph.compute(), 5) == -0.56656

    def test_invalidate(self) -> None:
        x1, x2, x3, graph = _example_graph()
        assert not graph.is_valid
        x1.set(1.0)
        x2.set(2.0)
        x3.set(3.0)
        assert not graph.is_valid
        graph.compute()
        assert graph.is_valid
        x1.set(3.0)
        assert not graph.is_valid

    def test_chained_adds_invalidate_only_path_to_changed_input(self) -> None:
        x1 = lg.create_input("x1")
        x2 = lg.create_input("x2")
        x3 = lg.create_input("x3")
        inner = lg.add(x2, x3)
        middle = lg.add(x2, inner)
        upper = lg.add(x2, middle)
        graph = lg.add(x1, upper)

        handles = _all_handles(graph)
        assert all(h.cache_state() == EMPTY for h in handles)

        x1.set(1.0)
        x2.set(2.0)
        x3.set(3.0)
        assert all(h.cache_state() == EMPTY for h in handles)

        assert graph.compute() == 1.0 + 2.0 + 2.0 + 2.0 + 3.0
        assert all(h.is_valid for h in handles)

        x1.set(3.0)

        assert not graph.is_valid
        assert not x1.is_valid
        for handle in (upper, middle, inner, x2, x3):
            assert handle.is_valid
        assert graph.compute() == 3.0 + 2.0 + 2.0 + 2.0 + 3.0


class TestMemoization:
    def test_second_compute_does_no_work(self) -> None:
        x1, x2, x3, graph = _example_graph()
        x1.set(1.0)
        x2.set(2.0)
        x3.set(3.0)

        first = graph.compute()
        counts = {h.node.node_id: h.node.evaluations for h in _all_handles(graph)}
        second = graph.compute()

        assert first == second
        assert counts == {h.node.node_id: h.node.evaluations for h in _all_handles(graph)}

    def test_recompute_after_set_only_touches_dependents(self) -> None:
        x1 = lg.create_input("x1")
        x2 = lg.create_input("x2")
        heavy = lg.sin(lg.pow(x2, 2.0))
        graph = lg.add(x1, heavy)
        x1.set(1.0)
        x2.set(2.0)
        graph.compute()

        x1.set(5.0)
        graph.compute()

        assert heavy.node.evaluations == 1
        assert graph.node.evaluations == 2


class TestReachability:
    def test_set_empties_exactly_the_dependents(self) -> None:
        # diamond: x feeds both branches, y only the right one
        x = lg.create_input("x")
        y = lg.create_input("y")
        left = lg.sin(x)
        right = lg.mul(x, y)
        top = lg.add(left, right)
        other = lg.cos(y)
        for handle, value in ((x, 1.0), (y, 2.0)):
            handle.set(value)
        top.compute()
        other.compute()

        y.set(3.0)

        reached = lg.dependents(y) | {y.node.node_id}
        for handle in (*_all_handles(top), other):
            if handle.node.node_id in reached:
                assert handle.cache_state() == EMPTY, handle
            else:
                assert handle.is_valid, handle

    def test_diamond_recomputes_correctly(self) -> None:
        x = lg.create_input("x")
        top = lg.add(lg.sin(x), lg.mul(x, x))
        x.set(1.0)
        assert top.compute() == np.float32(np.sin(np.float32(1.0))) + np.float32(1.0)
        x.set(2.0)
        assert top.compute() == np.float32(np.sin(np.float32(2.0))) + np.float32(4.0)

    def test_new_parent_over_valid_child(self) -> None:
        x = lg.create_input("x")
        first = lg.sin(x)
        x.set(1.0)
        first.compute()

        second = lg.cos(x)
        second.compute()
        x.set(2.0)

        assert not first.is_valid
        assert not second.is_valid


class TestIdempotentInvalidation:
    def test_double_set_equals_single_set(self) -> None:
        x1, x2, x3, graph = _example_graph()
        x1.set(1.0)
        x2.set(2.0)
        x3.set(3.0)
        graph.compute()

        x2.set(10.0)
        states = [h.cache_state() for h in _all_handles(graph)]
        x2.set(3.0)

        assert states == [h.cache_state() for h in _all_handles(graph)]
        assert graph.compute() == pytest.approx(1.0 + 3.0 * np.sin(3.0 + 27.0), abs=1e-5)

    def test_invalidating_empty_node_changes_nothing(self) -> None:
        x = lg.create_input("x")
        y = lg.create_input("y")
        out = lg.add(lg.sin(x), y)
        x.set(1.0)
        y.set(2.0)
        out.compute()
        x.set(0.5)
        snapshot = [h.cache_state() for h in _all_handles(out)]

        x.node.invalidate()

        assert snapshot == [h.cache_state() for h in _all_handles(out)]


class TestDeepGraphs:
    def test_long_chain_compute_and_set(self) -> None:
        x = lg.create_input("x")
        acc: Handle = x
        for _ in range(5000):
            acc = lg.add(acc, x)

        x.set(1.0)
        assert acc.compute() == 5001.0
        x.set(2.0)
        assert not acc.is_valid
        assert acc.compute() == 10002.0

    def test_long_chain_with_constants(self) -> None:
        x = lg.create_input("x")
        acc: Handle = x
        for _ in range(5000):
            acc = acc + 1
        x.set(1.0)
        assert acc.compute() == 5001.0
        x.set(0.0)
        assert acc.compute() == 5000.0

    def test_each_node_evaluated_once_per_change(self) -> None:
        x = lg.create_input("x")
        chain = [x]
        for _ in range(2000):
            chain.append(lg.mul(chain[-1], x))
        x.set(1.0)
        chain[-1].compute()
        x.set(1.0)
        chain[-1].compute()
        assert all(h.node.evaluations == 2 for h in chain)
