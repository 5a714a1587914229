"""DOT export of the dependency graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from behaviorgraph.domain.model.graph import DependencyGraph


class DotExporter:
    """Serializes a dependency graph to Graphviz DOT.

    One node line per unit in declaration order, then one edge line per
    direct dependency in insertion order. Same graph, same text.
    """

    def __init__(self, graph_name: str = "DependencyGraph") -> None:
        """Initialize exporter.

        Args:
            graph_name: Name of the digraph
        """
        self._graph_name = graph_name

    def export(self, graph: DependencyGraph) -> str:
        """Render graph as DOT source."""
        lines = [
            f"digraph {self._graph_name} {{",
            "    rankdir=TB;",
            "    node [shape=box, style=rounded];",
            "",
        ]
        lines.extend(f'    "{node}" [label="{node}"];' for node in graph.nodes)
        lines.append("")
        lines.extend(f'    "{source}" -> "{target}";' for source, target in graph.edges)
        lines.append("}")
        return "\n".join(lines) + "\n"
