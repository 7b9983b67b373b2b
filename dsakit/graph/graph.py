"""Generic weighted graph backed by an adjacency list.

This module provides the Graph class: a mapping from each vertex to the
ordered list of ``(neighbor, weight)`` pairs leaving it. Reachability, cycle
detection and topological ordering are implemented in sibling modules and
exposed here as methods.
"""

from __future__ import annotations

import sys
from collections.abc import Hashable, Iterator
from pathlib import Path
from typing import Generic, TextIO, TypeVar

import structlog

from dsakit.graph import cycles, exporter, ordering, traversal

logger = structlog.get_logger(__name__)

V = TypeVar("V", bound=Hashable)

DEFAULT_WEIGHT = exporter.DEFAULT_WEIGHT


class OrientationError(ValueError):
    """Raised when an operation is not defined for the graph's orientation.

    Topological ordering, for example, only exists for directed graphs.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Graph(Generic[V]):
    """A weighted directed or undirected graph.

    Vertices are any hashable values. Each vertex maps to the list of
    ``(neighbor, weight)`` pairs leaving it, kept in insertion order; that
    order decides the order in which traversals visit neighbors.

    Two policies for unknown vertices coexist on purpose: mutations create
    them implicitly (``add_edge`` adds both endpoints), while queries treat
    them as absent and answer ``False`` or empty.

    Duplicate edges and self-loops are stored as given. Use
    :class:`dsakit.graph.validator.GraphValidator` to report them.

    Thread-safety:
        This class is NOT thread-safe. Concurrent mutation from several
        threads is undefined behavior; protect all calls with an external
        lock if a graph must be shared.

    Recursion:
        ``dfs``, ``has_cycle`` and ``topological_sort`` recurse once per
        level of depth. Paths longer than ``sys.getrecursionlimit()`` raise
        ``RecursionError``.

    Example:
        >>> g = Graph(directed=True)
        >>> g.add_edge("A", "B")
        >>> g.add_edge("B", "C", weight=4)
        >>> g.bfs("A", "C")
        True
        >>> g.topological_sort()
        ['A', 'B', 'C']
    """

    def __init__(self, directed: bool = False):
        self._directed = directed
        self.adjacency: dict[V, list[tuple[V, int]]] = {}

        logger.debug("graph_initialized", directed=directed)

    @property
    def directed(self) -> bool:
        """Whether edges are one-way. Fixed at construction."""
        return self._directed

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        edge_count = sum(len(nbrs) for nbrs in self.adjacency.values())
        return f"Graph({kind}, V={len(self.adjacency)}, entries={edge_count})"

    def __len__(self) -> int:
        return len(self.adjacency)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self.adjacency

    def __iter__(self) -> Iterator[V]:
        return iter(self.adjacency)

    # Mutation

    def add_vertex(self, vertex: V) -> None:
        """Add a vertex with no edges. Adding a known vertex is a no-op."""
        if vertex not in self.adjacency:
            self.adjacency[vertex] = []
            logger.debug("vertex_added", vertex=vertex)

    def add_edge(self, source: V, target: V, weight: int = DEFAULT_WEIGHT) -> None:
        """Add an edge, creating either endpoint if it is unknown.

        For undirected graphs the reciprocal entry is added as well. Existing
        edges are not checked, so repeated calls store parallel edges.

        Args:
            source: Tail vertex
            target: Head vertex
            weight: Integer edge weight
        """
        self.add_vertex(source)
        self.add_vertex(target)
        self.adjacency[source].append((target, weight))
        if not self._directed:
            self.adjacency[target].append((source, weight))

        logger.debug("edge_added", source=source, target=target, weight=weight)

    def remove_edge(self, source: V, target: V) -> None:
        """Remove every edge from source to target.

        All parallel entries are removed, not just the first. For undirected
        graphs the reverse entries go too. Unknown vertices are ignored.
        """
        removed = 0
        if source in self.adjacency:
            removed += self._drop_targets(source, target)
        if not self._directed and target in self.adjacency:
            removed += self._drop_targets(target, source)

        logger.debug("edge_removed", source=source, target=target, entries=removed)

    def remove_vertex(self, vertex: V) -> None:
        """Remove a vertex and every edge pointing at it.

        Every other neighbor list is scanned, so this is O(V * degree).
        Unknown vertices are ignored.
        """
        if vertex not in self.adjacency:
            return

        del self.adjacency[vertex]
        purged = 0
        for other in self.adjacency:
            purged += self._drop_targets(other, vertex)

        logger.debug("vertex_removed", vertex=vertex, back_references=purged)

    def _drop_targets(self, vertex: V, target: V) -> int:
        neighbors = self.adjacency[vertex]
        kept = [(nbr, w) for nbr, w in neighbors if nbr != target]
        self.adjacency[vertex] = kept
        return len(neighbors) - len(kept)

    # Queries

    def has_edge(self, source: V, target: V) -> bool:
        """Return True if any edge leads from source to target."""
        return any(nbr == target for nbr, _ in self.adjacency.get(source, ()))

    def neighbors(self, vertex: V) -> list[V]:
        """Return the neighbors of vertex in insertion order, weights stripped.

        Unknown vertices have no neighbors.
        """
        return [nbr for nbr, _ in self.adjacency.get(vertex, ())]

    def weight(self, source: V, target: V) -> int | None:
        """Return the weight of the first stored edge source -> target, or None."""
        for nbr, w in self.adjacency.get(source, ()):
            if nbr == target:
                return w
        return None

    def vertices(self) -> list[V]:
        return list(self.adjacency)

    def edges(self) -> list[tuple[V, V, int]]:
        """Return every stored ``(source, target, weight)`` entry.

        Undirected edges appear once per stored direction.
        """
        return [(u, v, w) for u, nbrs in self.adjacency.items() for v, w in nbrs]

    def dump(self, out: TextIO = sys.stdout) -> None:
        """Write a textual representation of this graph to out."""
        for vertex, nbrs in self.adjacency.items():
            pairs = "".join(f"({nbr}, {w}) " for nbr, w in nbrs)
            out.write(f"{vertex} -> {pairs}\n")

    # Algorithms

    def bfs(self, start: V, target: V) -> bool:
        """Breadth-first reachability. False if either vertex is unknown."""
        return traversal.bfs_reachable(self.adjacency, start, target)

    def dfs(self, start: V, target: V) -> bool:
        """Depth-first reachability. False if either vertex is unknown."""
        return traversal.dfs_reachable(self.adjacency, start, target)

    def has_cycle(self) -> bool:
        if self._directed:
            return cycles.has_directed_cycle(self.adjacency)
        return cycles.has_undirected_cycle(self.adjacency)

    def topological_sort(self) -> list[V]:
        """Return the vertices in topological order.

        The graph is assumed acyclic and this is not checked: on a cyclic
        graph the result is some ordering that violates at least one edge.
        Call :meth:`has_cycle` first when that matters.

        Raises:
            OrientationError: If the graph is undirected
        """
        if not self._directed:
            msg = "Topological sort only applies to directed graphs."
            logger.error("topological_sort_on_undirected_graph", vertex_count=len(self))
            raise OrientationError(msg)
        return ordering.topological_order(self.adjacency)

    # Export

    def to_dot(self) -> str:
        return exporter.to_dot(self)

    def export_dot(self, path: str | Path) -> Path:
        """Write the DOT description of this graph to path."""
        return exporter.write_dot(self, path)

    def export_png(self, path: str | Path) -> Path:
        """Render this graph to a PNG image with Graphviz."""
        return exporter.render(self, path, fmt="png")
