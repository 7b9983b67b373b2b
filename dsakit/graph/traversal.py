"""Breadth-first and depth-first reachability over an adjacency mapping.

Both searches answer the same question, whether ``target`` can be reached
from ``start`` by following edges, and therefore always agree. They differ
only in visiting order. Neighbors are expanded in stored (insertion) order.
"""

from collections import deque
from collections.abc import Hashable, Mapping, Sequence
from typing import TypeVar

import structlog

logger = structlog.get_logger(__name__)

V = TypeVar("V", bound=Hashable)

Adjacency = Mapping[V, Sequence[tuple[V, int]]]


def bfs_reachable(adjacency: Adjacency, start: V, target: V) -> bool:
    """Return True if target is reachable from start, searching breadth-first.

    A vertex is marked visited when it is enqueued, so it is never queued
    twice. The search succeeds when target is dequeued; a known start vertex
    therefore reaches itself.

    Args:
        adjacency: Mapping from vertex to its ``(neighbor, weight)`` pairs
        start: Vertex to search from
        target: Vertex to look for

    Returns:
        False if either vertex is unknown or target is unreachable
    """
    if start not in adjacency or target not in adjacency:
        logger.debug("bfs_unknown_vertex", start=start, target=target)
        return False

    visited = {start}
    queue = deque([start])

    while queue:
        node = queue.popleft()
        if node == target:
            logger.debug("bfs_target_found", start=start, target=target, visited=len(visited))
            return True

        for neighbor, _ in adjacency[node]:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    logger.debug("bfs_target_unreachable", start=start, target=target, visited=len(visited))
    return False


def dfs_reachable(adjacency: Adjacency, start: V, target: V) -> bool:
    """Return True if target is reachable from start, searching depth-first.

    Recursive: a vertex is marked visited on entry and the first successful
    recursive call short-circuits the search.

    Args:
        adjacency: Mapping from vertex to its ``(neighbor, weight)`` pairs
        start: Vertex to search from
        target: Vertex to look for

    Returns:
        False if either vertex is unknown or target is unreachable
    """
    if start not in adjacency or target not in adjacency:
        logger.debug("dfs_unknown_vertex", start=start, target=target)
        return False

    visited: set = set()

    def visit(node: V) -> bool:
        if node == target:
            return True
        visited.add(node)
        for neighbor, _ in adjacency[node]:
            if neighbor not in visited and visit(neighbor):
                return True
        return False

    found = visit(start)
    logger.debug("dfs_complete", start=start, target=target, found=found, visited=len(visited))
    return found
