"""Topological ordering by depth-first postorder."""

from collections.abc import Hashable, Mapping, Sequence
from typing import TypeVar

import structlog

logger = structlog.get_logger(__name__)

V = TypeVar("V", bound=Hashable)


def topological_order(adjacency: Mapping[V, Sequence[tuple[V, int]]]) -> list[V]:
    """Order the vertices of a directed graph so every edge points forward.

    Each vertex is appended after all of its unvisited descendants, and the
    postorder is reversed at the end. Roots are taken in insertion order.

    Cycles are not detected. For a cyclic graph the result still lists every
    vertex once, but at least one edge points backwards.

    Args:
        adjacency: Mapping from vertex to its ``(neighbor, weight)`` pairs

    Returns:
        List of all vertices
    """
    visited: set = set()
    postorder: list[V] = []

    def visit(node: V) -> None:
        visited.add(node)
        for neighbor, _ in adjacency[node]:
            if neighbor not in visited:
                visit(neighbor)
        postorder.append(node)

    for node in adjacency:
        if node not in visited:
            visit(node)

    postorder.reverse()
    logger.debug("topological_order_computed", vertex_count=len(postorder))
    return postorder
