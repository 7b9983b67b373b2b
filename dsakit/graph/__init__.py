"""Generic weighted graph with reachability, cycle detection and ordering.

This package provides the Graph adjacency store, the traversal, cycle and
topological-ordering algorithms built on it, DOT/Mermaid export with
Graphviz rendering, and an opt-in validator for stricter structural checks.
"""

from dsakit.graph.exporter import ExportError, RenderError, render, to_dot, to_mermaid, write_dot
from dsakit.graph.graph import Graph, OrientationError
from dsakit.graph.validator import GraphValidator, ValidationReport

__all__ = [
    "ExportError",
    "Graph",
    "GraphValidator",
    "OrientationError",
    "RenderError",
    "ValidationReport",
    "render",
    "to_dot",
    "to_mermaid",
    "write_dot",
]
