"""Cycle detection for directed and undirected adjacency mappings.

Directed graphs use three-state coloring: a vertex is in progress while it
is on the current recursion stack, and reaching an in-progress vertex again
means a back edge, i.e. a cycle.

Undirected graphs store every edge twice, so walking back along the edge
just taken must not count. The walk carries the immediate predecessor and
only a visited neighbor other than that predecessor signals a cycle.

Both detectors start a walk from every unvisited vertex so that
disconnected components are covered, and touch each vertex once overall.
"""

from collections.abc import Hashable, Mapping, Sequence
from enum import Enum
from typing import TypeVar

import structlog

logger = structlog.get_logger(__name__)

V = TypeVar("V", bound=Hashable)

Adjacency = Mapping[V, Sequence[tuple[V, int]]]


class VisitState(Enum):
    """Coloring used by the directed detector.

    Attributes:
        UNVISITED: Not reached yet
        IN_PROGRESS: On the current recursion stack
        DONE: Fully explored without finding a cycle
    """

    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# Stands in for the predecessor of a walk's root vertex.
_NO_PARENT = object()


def has_directed_cycle(adjacency: Adjacency) -> bool:
    """Return True if any back edge exists in the directed graph."""
    state: dict = {}

    def detect(node: V) -> bool:
        state[node] = VisitState.IN_PROGRESS
        for neighbor, _ in adjacency[node]:
            neighbor_state = state.get(neighbor, VisitState.UNVISITED)
            if neighbor_state is VisitState.IN_PROGRESS:
                logger.debug("back_edge_found", source=node, target=neighbor)
                return True
            if neighbor_state is VisitState.UNVISITED and detect(neighbor):
                return True
        state[node] = VisitState.DONE
        return False

    for node in adjacency:
        if node not in state and detect(node):
            return True

    logger.debug("no_directed_cycle", vertex_count=len(adjacency))
    return False


def has_undirected_cycle(adjacency: Adjacency) -> bool:
    """Return True if the undirected graph contains a cycle.

    Roots have no predecessor, so a self-loop always counts. Parallel edges
    between two vertices look like the edge just taken and do not count.
    """
    visited: set = set()

    def detect(node: V, parent: object) -> bool:
        visited.add(node)
        for neighbor, _ in adjacency[node]:
            if neighbor not in visited:
                if detect(neighbor, node):
                    return True
            elif neighbor != parent:
                logger.debug("cycle_edge_found", source=node, target=neighbor)
                return True
        return False

    for node in adjacency:
        if node not in visited and detect(node, _NO_PARENT):
            return True

    logger.debug("no_undirected_cycle", vertex_count=len(adjacency))
    return False
