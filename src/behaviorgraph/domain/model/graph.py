"""Dependency graph over behavior units and its traversal algorithms.

The graph is a derived view: it is rebuilt from units on every analysis.
Algorithms work on integer index arenas (declaration order) with explicit
stacks, so deep graphs never hit the interpreter recursion limit and
visit order is deterministic.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from behaviorgraph.domain.model.enums import CallKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True, slots=True)
class MissingReference:
    """Call target that names no known unit.

    Attributes:
        source: Calling unit
        target: Unknown target name
        kind: Call kind (DIRECT is fatal, EVENT_SEND is a warning)
    """

    source: str
    target: str
    kind: CallKind


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """Immutable unit dependency graph.

    Invariants (FAIL-FIRST):
    - nodes are unique
    - every forward/reverse key and neighbour is in nodes
    - forward[a] contains b ⟺ reverse[b] contains a

    Attributes:
        nodes: Unit names in declaration order
        forward: Unit → direct dependencies (insertion order)
        reverse: Unit → dependents (insertion order)
        missing_references: Dropped edges to unknown units
    """

    nodes: tuple[str, ...]
    forward: Mapping[str, tuple[str, ...]]
    reverse: Mapping[str, tuple[str, ...]]
    missing_references: tuple[MissingReference, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        known = frozenset(self.nodes)
        if len(known) != len(self.nodes):
            raise ValueError("nodes must be unique")

        for node, successors in self.forward.items():
            if node not in known:
                raise ValueError(f"forward key '{node}' not in nodes")
            for succ in successors:
                if succ not in known:
                    raise ValueError(f"dependency '{succ}' of '{node}' not in nodes")
                if node not in self.reverse.get(succ, ()):
                    raise ValueError(
                        f"inconsistent: {node}→{succ} in forward, {node} not in reverse[{succ}]"
                    )

        for node, predecessors in self.reverse.items():
            if node not in known:
                raise ValueError(f"reverse key '{node}' not in nodes")
            for pred in predecessors:
                if pred not in known:
                    raise ValueError(f"dependent '{pred}' of '{node}' not in nodes")
                if node not in self.forward.get(pred, ()):
                    raise ValueError(
                        f"inconsistent: {pred}→{node} in reverse, {node} not in forward[{pred}]"
                    )

    def dependencies(self, node: str) -> tuple[str, ...]:
        """Direct dependencies of node (outgoing edges)."""
        return self.forward.get(node, ())

    def dependents(self, node: str) -> tuple[str, ...]:
        """Units depending on node (incoming edges)."""
        return self.reverse.get(node, ())

    def has_edge(self, from_: str, to: str) -> bool:
        """Check if from_ depends directly on to."""
        return to in self.forward.get(from_, ())

    def has_node(self, node: str) -> bool:
        """Check if node exists."""
        return node in self.nodes

    @property
    def edges(self) -> tuple[tuple[str, str], ...]:
        """All (unit, dependency) pairs, node order then insertion order."""
        return tuple((node, dep) for node in self.nodes for dep in self.dependencies(node))

    @property
    def edge_count(self) -> int:
        """Total number of direct dependency edges."""
        return sum(len(deps) for deps in self.forward.values())

    @property
    def node_count(self) -> int:
        """Total number of units."""
        return len(self.nodes)

    @classmethod
    def from_edges(
        cls,
        nodes: Iterable[str],
        edges: Iterable[tuple[str, str]],
        missing_references: tuple[MissingReference, ...] = (),
    ) -> DependencyGraph:
        """Build graph from declared nodes and (unit, dependency) edges.

        Duplicate edges are collapsed, first occurrence wins.

        Args:
            nodes: Unit names in declaration order
            edges: (unit, dependency) pairs, both must be in nodes
            missing_references: Dropped edges to report

        Returns:
            DependencyGraph with every node present in forward and reverse
        """
        node_tuple = tuple(nodes)
        forward: dict[str, list[str]] = {node: [] for node in node_tuple}
        reverse: dict[str, list[str]] = {node: [] for node in node_tuple}

        for from_node, to_node in edges:
            if to_node in forward.get(from_node, ()):
                continue
            forward.setdefault(from_node, []).append(to_node)
            reverse.setdefault(to_node, []).append(from_node)

        return cls(
            nodes=node_tuple,
            forward=MappingProxyType({k: tuple(v) for k, v in forward.items()}),
            reverse=MappingProxyType({k: tuple(v) for k, v in reverse.items()}),
            missing_references=missing_references,
        )

    @classmethod
    def empty(cls) -> DependencyGraph:
        """Create graph with no units."""
        return cls(nodes=(), forward=MappingProxyType({}), reverse=MappingProxyType({}))


# =============================================================================
# GRAPH ALGORITHMS - index arena, explicit stacks
# =============================================================================


def _arena(
    graph: DependencyGraph,
    *,
    reverse: bool = False,
) -> tuple[dict[str, int], tuple[tuple[int, ...], ...]]:
    """Translate graph into index arena.

    Returns:
        (name → index, adjacency by index) for forward or reverse edges
    """
    index = {name: i for i, name in enumerate(graph.nodes)}
    lookup = graph.dependents if reverse else graph.dependencies
    adjacency = tuple(tuple(index[n] for n in lookup(name)) for name in graph.nodes)
    return index, adjacency


def find_cycles(graph: DependencyGraph) -> tuple[tuple[str, ...], ...]:
    """Find cycles among direct dependencies with depth-first search.

    Every unit is tried as a DFS root in declaration order, so independent
    cycles in separate components are all reported. Each back-edge into the
    current DFS path yields one cycle: the path slice from the revisited
    node to the current node, inclusive, without repeating the start.

    Args:
        graph: Dependency graph

    Returns:
        Cycles in discovery order (empty if acyclic)
    """
    _, adjacency = _arena(graph)
    count = len(adjacency)
    visited = [False] * count
    on_stack = [False] * count
    cycles: list[tuple[str, ...]] = []

    for root in range(count):
        if visited[root]:
            continue

        visited[root] = True
        on_stack[root] = True
        path = [root]
        cursors = [0]

        while path:
            node = path[-1]
            cursor = cursors[-1]
            if cursor < len(adjacency[node]):
                cursors[-1] = cursor + 1
                nxt = adjacency[node][cursor]
                if on_stack[nxt]:
                    start = path.index(nxt)
                    cycles.append(tuple(graph.nodes[i] for i in path[start:]))
                elif not visited[nxt]:
                    visited[nxt] = True
                    on_stack[nxt] = True
                    path.append(nxt)
                    cursors.append(0)
            else:
                on_stack[node] = False
                path.pop()
                cursors.pop()

    return tuple(cycles)


def kahn_order(graph: DependencyGraph) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Order units so that every dependency precedes its dependents.

    Kahn's algorithm over direct edges. When several units are ready at
    the same time, the one declared first is emitted first.

    Args:
        graph: Dependency graph

    Returns:
        (ordered, remaining). remaining is non-empty only when cycles
        exist, and holds exactly the units that could not be ordered,
        in declaration order.
    """
    _, dependents = _arena(graph, reverse=True)
    pending = [len(graph.dependencies(name)) for name in graph.nodes]

    ready = [i for i, count in enumerate(pending) if count == 0]
    heapq.heapify(ready)
    ordered: list[int] = []

    while ready:
        node = heapq.heappop(ready)
        ordered.append(node)
        for dependent in dependents[node]:
            pending[dependent] -= 1
            if pending[dependent] == 0:
                heapq.heappush(ready, dependent)

    done = set(ordered)
    remaining = tuple(graph.nodes[i] for i in range(len(graph.nodes)) if i not in done)
    return tuple(graph.nodes[i] for i in ordered), remaining


def reverse_depth(
    graph: DependencyGraph,
    start: str,
    *,
    memo: dict[str, int] | None = None,
) -> int:
    """Longest path length (in nodes) from start through dependents.

    Nodes already on the current branch are skipped, which keeps the walk
    finite on cyclic graphs. The branch set is cleared per start node.

    Args:
        graph: Dependency graph
        start: Starting unit (usually a root)
        memo: Shared depth cache. Only valid for acyclic graphs.

    Returns:
        1 for a unit with no dependents, 1 + deepest dependent otherwise
    """
    index, dependents = _arena(graph, reverse=True)
    names = graph.nodes
    on_branch = [False] * len(names)

    root = index[start]
    if memo is not None and start in memo:
        return memo[start]

    on_branch[root] = True
    path = [root]
    cursors = [0]
    best = [0]
    depth = 0

    while path:
        node = path[-1]
        cursor = cursors[-1]
        if cursor < len(dependents[node]):
            cursors[-1] = cursor + 1
            child = dependents[node][cursor]
            if on_branch[child]:
                continue
            if memo is not None and names[child] in memo:
                best[-1] = max(best[-1], memo[names[child]])
                continue
            on_branch[child] = True
            path.append(child)
            cursors.append(0)
            best.append(0)
        else:
            depth = 1 + best.pop()
            on_branch[node] = False
            path.pop()
            cursors.pop()
            if memo is not None:
                memo[names[node]] = depth
            if best:
                best[-1] = max(best[-1], depth)

    return depth


def longest_reverse_chain(
    graph: DependencyGraph,
    start: str,
    *,
    memo: dict[str, tuple[str, ...]] | None = None,
) -> tuple[str, ...]:
    """Longest simple chain from start through dependents.

    The first chain reaching a new maximum length wins, so ties keep
    traversal order.

    Args:
        graph: Dependency graph
        start: Starting unit
        memo: Shared chain cache. Only valid for acyclic graphs.

    Returns:
        Chain of unit names beginning with start
    """
    if memo is not None:
        return _memoized_reverse_chain(graph, start, memo)

    index, dependents = _arena(graph, reverse=True)
    names = graph.nodes
    on_path = [False] * len(names)

    root = index[start]
    on_path[root] = True
    path = [root]
    cursors = [0]
    longest: tuple[int, ...] = (root,)

    while path:
        node = path[-1]
        cursor = cursors[-1]
        if cursor < len(dependents[node]):
            cursors[-1] = cursor + 1
            child = dependents[node][cursor]
            if on_path[child]:
                continue
            on_path[child] = True
            path.append(child)
            cursors.append(0)
            if len(path) > len(longest):
                longest = tuple(path)
        else:
            on_path[node] = False
            path.pop()
            cursors.pop()

    return tuple(names[i] for i in longest)


def _memoized_reverse_chain(
    graph: DependencyGraph,
    start: str,
    memo: dict[str, tuple[str, ...]],
) -> tuple[str, ...]:
    """Longest chain on an acyclic graph, each unit solved once.

    Picks the first dependent with the longest chain, which is the chain
    the exhaustive walk would find first.
    """
    stack = [(start, False)]
    while stack:
        node, expanded = stack.pop()
        if node in memo:
            continue
        children = graph.dependents(node)
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in children if child not in memo)
            continue
        best: tuple[str, ...] = ()
        for child in children:
            if len(memo[child]) > len(best):
                best = memo[child]
        memo[node] = (node, *best)
    return memo[start]
