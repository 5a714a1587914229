"""Tests for the traversal algorithms in domain/model/graph.py."""

import random

from behaviorgraph.domain.model.graph import (
    find_cycles,
    kahn_order,
    longest_reverse_chain,
    reverse_depth,
)
from tests.factories import make_graph


class TestFindCycles:
    """Tests for find_cycles."""

    def test_acyclic_graph(self) -> None:
        """DAG has no cycles."""
        graph = make_graph(("A", "B", "C"), (("A", "B"), ("B", "C")))

        assert find_cycles(graph) == ()

    def test_two_node_cycle(self) -> None:
        """A ⇄ B is reported once, as the DFS path slice."""
        graph = make_graph(("A", "B"), (("A", "B"), ("B", "A")))

        assert find_cycles(graph) == (("A", "B"),)

    def test_independent_cycles_all_reported(self) -> None:
        """Every DFS root is tried, so disjoint cycles are all found."""
        graph = make_graph(
            ("A", "B", "C", "D", "E"),
            (("A", "B"), ("B", "A"), ("C", "D"), ("D", "E"), ("E", "C")),
        )

        assert find_cycles(graph) == (("A", "B"), ("C", "D", "E"))

    def test_self_loop(self) -> None:
        """Edge to itself is a one-unit cycle."""
        graph = make_graph(("A",), (("A", "A"),))

        assert find_cycles(graph) == (("A",),)

    def test_deep_chain_does_not_recurse(self) -> None:
        """Explicit stack handles chains deeper than the recursion limit."""
        nodes = tuple(f"U{i}" for i in range(3000))
        edges = tuple((nodes[i], nodes[i + 1]) for i in range(len(nodes) - 1))
        graph = make_graph(nodes, (*edges, (nodes[-1], nodes[0])))

        cycles = find_cycles(graph)

        assert len(cycles) == 1
        assert len(cycles[0]) == 3000


class TestKahnOrder:
    """Tests for kahn_order."""

    def test_chain(self) -> None:
        """Dependencies come first."""
        graph = make_graph(("A", "B", "C"), (("A", "B"), ("B", "C")))

        assert kahn_order(graph) == (("C", "B", "A"), ())

    def test_ties_keep_declaration_order(self) -> None:
        """Units ready together are emitted in declaration order."""
        graph = make_graph(("A", "B", "C"), (("A", "C"), ("B", "C")))

        assert kahn_order(graph) == (("C", "A", "B"), ())

    def test_independent_units(self) -> None:
        """No edges: declaration order."""
        graph = make_graph(("X", "Y", "Z"))

        assert kahn_order(graph) == (("X", "Y", "Z"), ())

    def test_cycle_leaves_remaining(self) -> None:
        """Units on a cycle are returned as remaining."""
        graph = make_graph(("A", "B", "C"), (("A", "B"), ("B", "A")))

        ordered, remaining = kahn_order(graph)

        assert ordered == ("C",)
        assert remaining == ("A", "B")

    def test_random_dags_respect_every_edge(self) -> None:
        """Every unit exactly once, every dependency before its dependent."""
        for seed in range(20):
            rng = random.Random(seed)
            nodes = [f"U{i}" for i in range(12)]
            edges = [
                (nodes[i], nodes[j])
                for i in range(len(nodes))
                for j in range(i)
                if rng.random() < 0.3
            ]
            rng.shuffle(nodes)
            graph = make_graph(tuple(nodes), tuple(edges))

            ordered, remaining = kahn_order(graph)

            assert remaining == ()
            assert sorted(ordered) == sorted(nodes)
            for unit, dependency in edges:
                assert ordered.index(dependency) < ordered.index(unit)


class TestReverseDepth:
    """Tests for reverse_depth."""

    def test_chain_depth(self) -> None:
        """Depth counts nodes from root through dependents."""
        graph = make_graph(("A", "B", "C"), (("A", "B"), ("B", "C")))

        assert reverse_depth(graph, "C") == 3

    def test_leaf_depth_is_one(self) -> None:
        """Unit with no dependents has depth 1."""
        graph = make_graph(("A", "B"), (("A", "B"),))

        assert reverse_depth(graph, "A") == 1

    def test_memo_gives_same_result(self) -> None:
        """Shared memo does not change depths on acyclic graphs."""
        graph = make_graph(
            ("A", "B", "C", "D"),
            (("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")),
        )
        memo: dict[str, int] = {}

        assert reverse_depth(graph, "D", memo=memo) == 3
        assert reverse_depth(graph, "D", memo=memo) == 3
        assert memo["A"] == 1

    def test_cycle_terminates(self) -> None:
        """Branch set stops the walk on cycles."""
        graph = make_graph(("A", "B"), (("A", "B"), ("B", "A")))

        assert reverse_depth(graph, "A") == 2


class TestLongestReverseChain:
    """Tests for longest_reverse_chain."""

    def test_chain(self) -> None:
        """Chain starts at root and follows dependents."""
        graph = make_graph(("A", "B", "C"), (("A", "B"), ("B", "C")))

        assert longest_reverse_chain(graph, "C") == ("C", "B", "A")

    def test_first_longest_wins(self) -> None:
        """Ties keep traversal order."""
        graph = make_graph(("A", "B", "C"), (("A", "C"), ("B", "C")))

        assert longest_reverse_chain(graph, "C") == ("C", "A")

    def test_memo_matches_exhaustive_walk(self) -> None:
        """Memoized walk returns the same chain on random DAGs."""
        for seed in range(20):
            rng = random.Random(seed)
            nodes = tuple(f"U{i}" for i in range(10))
            edges = tuple(
                (nodes[i], nodes[j])
                for i in range(len(nodes))
                for j in range(i)
                if rng.random() < 0.4
            )
            graph = make_graph(nodes, edges)
            memo: dict[str, tuple[str, ...]] = {}

            for node in nodes:
                assert longest_reverse_chain(graph, node, memo=memo) == (
                    longest_reverse_chain(graph, node)
                )

    def test_wide_dag_is_fast(self) -> None:
        """Layered graph with many paths is solved once per unit."""
        layers = [[f"L{layer}N{i}" for i in range(4)] for layer in range(40)]
        nodes = tuple(name for layer in layers for name in layer)
        edges = tuple(
            (upper, lower)
            for below, above in zip(layers, layers[1:], strict=False)
            for upper in above
            for lower in below
        )
        graph = make_graph(nodes, edges)

        chain = longest_reverse_chain(graph, "L0N0", memo={})

        assert len(chain) == 40
