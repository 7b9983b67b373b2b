"""Opt-in structural validation for graphs.

The base Graph accepts self-loops and parallel edges without complaint. This
module is the stricter layer on top: it inspects a graph without changing
it and reports self-loops, parallel edges, broken undirected symmetry and,
for directed graphs, the vertex paths of cycles.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from dsakit.graph.graph import Graph

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Report containing validation results for a graph.

    Attributes:
        is_valid: Whether the graph passed all validation checks
        errors: List of error messages (critical issues)
        warnings: List of warning messages (potential issues)
        self_loops: Vertices with an edge to themselves
        parallel_edges: ``(u, v)`` pairs stored more than once
        asymmetric_edges: Undirected entries without a reciprocal entry
        cycles: Directed cycles, each a vertex path ending where it started
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    self_loops: list[Any] = field(default_factory=list)
    parallel_edges: list[tuple[Any, Any]] = field(default_factory=list)
    asymmetric_edges: list[tuple[Any, Any]] = field(default_factory=list)
    cycles: list[list[Any]] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False
        logger.error("validation_error", message=message)

    def add_warning(self, message: str) -> None:
        """Add a warning message without failing validation."""
        self.warnings.append(message)
        logger.warning("validation_warning", message=message)

    def summary(self) -> str:
        """Generate a human-readable summary of the validation report."""
        lines = [
            f"Validation Status: {'PASS' if self.is_valid else 'FAIL'}",
            f"Errors: {len(self.errors)}",
            f"Warnings: {len(self.warnings)}",
            f"Self-loops: {len(self.self_loops)}",
            f"Parallel Edges: {len(self.parallel_edges)}",
            f"Asymmetric Edges: {len(self.asymmetric_edges)}",
            f"Cycles: {len(self.cycles)}",
        ]

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        if self.warnings:
            lines.append("\nWarnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)

        if self.cycles:
            lines.append("\nCycles Detected:")
            for i, cycle in enumerate(self.cycles, 1):
                lines.append(f"  {i}. {' -> '.join(str(v) for v in cycle)}")

        return "\n".join(lines)


class GraphValidator:
    """Validator for graphs with detailed reporting.

    Args:
        strict: Treat self-loops, parallel edges and cycles as errors rather
            than warnings. Asymmetric undirected edges are always errors.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._visited: set = set()
        self._rec_stack: set = set()
        self._path: list = []

    def validate(self, graph: "Graph") -> ValidationReport:
        """Validate a graph and generate a detailed report.

        Args:
            graph: The Graph to validate

        Returns:
            ValidationReport containing all validation results
        """
        logger.info(
            "starting_graph_validation",
            vertex_count=len(graph.adjacency),
            directed=graph.directed,
            strict=self.strict,
        )

        report = ValidationReport()
        flag = report.add_error if self.strict else report.add_warning

        loops = self._find_self_loops(graph)
        if loops:
            report.self_loops = loops
            flag(f"Self-loops on: {', '.join(str(v) for v in loops)}")

        parallel = self._find_parallel_edges(graph)
        if parallel:
            report.parallel_edges = parallel
            pairs = ", ".join(f"{u}-{v}" for u, v in parallel)
            flag(f"Parallel edges: {pairs}")

        if not graph.directed:
            asymmetric = self._find_asymmetric_edges(graph)
            if asymmetric:
                report.asymmetric_edges = asymmetric
                pairs = ", ".join(f"{u}-{v}" for u, v in asymmetric)
                report.add_error(f"Undirected edges without a reciprocal entry: {pairs}")
        else:
            cycles = self._detect_cycles(graph.adjacency)
            if cycles:
                report.cycles = cycles
                for cycle in cycles:
                    flag(f"Cycle detected: {' -> '.join(str(v) for v in cycle)}")

        logger.info(
            "graph_validation_complete",
            is_valid=report.is_valid,
            error_count=len(report.errors),
            warning_count=len(report.warnings),
        )

        return report

    def _find_self_loops(self, graph: "Graph") -> list:
        return [u for u, nbrs in graph.adjacency.items() if any(v == u for v, _ in nbrs)]

    def _find_parallel_edges(self, graph: "Graph") -> list[tuple]:
        """Find ``(u, v)`` pairs stored more than once in ``adjacency[u]``.

        An undirected edge is stored from both ends, so each unordered pair is
        reported once, and an undirected self-loop only counts as parallel
        when it was added twice (more than two stored entries).
        """
        parallel = []
        seen: set = set()

        for u, nbrs in graph.adjacency.items():
            counts = Counter(v for v, _ in nbrs)
            for v, count in counts.items():
                limit = 2 if (not graph.directed and v == u) else 1
                if count <= limit:
                    continue
                if not graph.directed and (v, u) in seen:
                    continue
                seen.add((u, v))
                parallel.append((u, v))

        if parallel:
            logger.debug("parallel_edges_found", count=len(parallel))
        return parallel

    def _find_asymmetric_edges(self, graph: "Graph") -> list[tuple]:
        """Find undirected entries ``u -> v`` with no matching ``v -> u`` entry.

        Entries are matched by target and weight, one for one.
        """
        asymmetric = []
        for u, nbrs in graph.adjacency.items():
            for v, weight in nbrs:
                if v == u:
                    continue
                forward = sum(1 for x, w in nbrs if x == v and w == weight)
                backward = sum(
                    1 for x, w in graph.adjacency.get(v, ()) if x == u and w == weight
                )
                if forward != backward and (u, v) not in asymmetric:
                    asymmetric.append((u, v))
        return asymmetric

    def _detect_cycles(self, adjacency: dict) -> list[list]:
        """Detect cycles using DFS, recording the path of each one found.

        At most one cycle is reported per depth-first tree.

        Args:
            adjacency: Mapping from vertex to its ``(neighbor, weight)`` pairs

        Returns:
            List of cycles, each a list of vertices whose first and last
            entries are the same vertex
        """
        self._visited = set()
        self._rec_stack = set()
        self._path = []
        cycles = []

        for node in adjacency:
            if node not in self._visited:
                cycle = self._dfs_cycle_detect(node, adjacency)
                if cycle:
                    cycles.append(cycle)
                self._rec_stack.clear()
                self._path.clear()

        return cycles

    def _dfs_cycle_detect(self, node: Any, adjacency: dict) -> list | None:
        self._visited.add(node)
        self._rec_stack.add(node)
        self._path.append(node)

        for neighbor, _ in adjacency.get(node, ()):
            if neighbor not in self._visited:
                cycle = self._dfs_cycle_detect(neighbor, adjacency)
                if cycle:
                    return cycle
            elif neighbor in self._rec_stack:
                cycle_start_idx = self._path.index(neighbor)
                return [*self._path[cycle_start_idx:], neighbor]

        # Backtrack
        self._rec_stack.remove(node)
        self._path.pop()
        return None
