#!/usr/bin/env python3
"""Demonstration entry point for dsakit.

Exercises each collaborator structure, then builds a small weighted
undirected graph, prints its adjacency lists and the answers to a few
queries, and optionally exports it as DOT source or a rendered image.
"""

import argparse
import sys
from typing import TextIO

import structlog

from dsakit.config import get_config
from dsakit.graph import ExportError, Graph, write_dot
from dsakit.log_config import configure_logging
from dsakit.structures import DSU, LinkedList, MaxHeap, MinHeap, Vector

logger = structlog.get_logger(__name__)

SAMPLE_EDGES = (
    ("A", "B", 4),
    ("A", "C", 3),
    ("B", "C", 1),
    ("C", "D", 5),
)


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def demo_structures(out: TextIO = sys.stdout) -> None:
    """Print a short tour of the collaborator structures."""
    items: LinkedList[int] = LinkedList()
    items.push_back(10)
    items.push_back(20)
    items.push_front(5)
    items.insert(1, 15)
    out.write(f"Linked List: {list(items)}\n")
    out.write(f"Find 15 at index: {items.find(15)}\n\n")

    fruits: Vector[str] = Vector()
    for fruit in ("apple", "banana", "apple"):
        fruits.push_back(fruit)
    out.write(f"Vector: {list(fruits)}\n")
    out.write(f"Size of vector: {len(fruits)}\n")
    out.write(f"Find 'banana' at index: {fruits.find('banana')}\n")
    out.write("Frequency map:\n")
    for key, count in fruits.freq_map().items():
        out.write(f"  {key}: {count}\n")
    out.write("\n")

    sets: DSU[int] = DSU()
    for x in (1, 2, 3, 4):
        sets.make_set(x)
    sets.union(1, 2)
    sets.union(3, 4)
    out.write(f"DSU same_set(1, 2): {yes_no(sets.same_set(1, 2))}\n")
    out.write(f"DSU same_set(2, 3): {yes_no(sets.same_set(2, 3))}\n\n")

    min_heap: MinHeap[int] = MinHeap()
    for value in (10, 5, 8):
        min_heap.push(value)
    out.write(f"MinHeap top: {min_heap.top()}\n")
    min_heap.pop()
    out.write(f"After pop, MinHeap top: {min_heap.top()}\n\n")

    max_heap: MaxHeap[int] = MaxHeap()
    for value in (10, 20, 15):
        max_heap.push(value)
    out.write(f"MaxHeap top: {max_heap.top()}\n")
    max_heap.pop()
    out.write(f"After pop, MaxHeap top: {max_heap.top()}\n\n")


def build_sample_graph() -> Graph[str]:
    """Build the sample undirected graph A-B(4), A-C(3), B-C(1), C-D(5)."""
    graph: Graph[str] = Graph(directed=False)
    for source, target, weight in SAMPLE_EDGES:
        graph.add_edge(source, target, weight)
    return graph


def demo_graph(graph: Graph[str], out: TextIO = sys.stdout) -> None:
    out.write("Graph:\n")
    graph.dump(out)
    out.write(f"BFS from A to D: {yes_no(graph.bfs('A', 'D'))}\n")
    out.write(f"DFS from A to D: {yes_no(graph.dfs('A', 'D'))}\n")
    out.write(f"Has cycle: {yes_no(graph.has_cycle())}\n")


def run(args: argparse.Namespace, out: TextIO = sys.stdout) -> int:
    """Run the demonstration.

    Args:
        args: Parsed command-line arguments
        out: Stream receiving the demonstration output

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        config = get_config(args.config, reload=True)
    except (FileNotFoundError, ValueError) as e:
        configure_logging(args.log_level or "INFO", json_logs=not args.console_logs)
        logger.exception("configuration_error", error=str(e))
        return 1

    configure_logging(
        args.log_level or config.logging.level,
        json_logs=config.logging.json_logs and not args.console_logs,
    )

    demo_structures(out)
    graph = build_sample_graph()
    demo_graph(graph, out)

    try:
        if args.dot:
            path = write_dot(graph, args.dot)
            out.write(f"DOT written to: {path}\n")
        if args.png:
            path = graph.export_png(args.png)
            out.write(f"Image written to: {path}\n")
    except ExportError as e:
        logger.exception("export_failed", error=e.message)
        return 1

    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="dsakit demonstration - data structures and graph queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the demonstration
  python main.py

  # Also render the sample graph (requires Graphviz)
  python main.py --png graph_output.png

  # Write DOT source with readable debug logs
  python main.py --dot graph.dot --log-level DEBUG --console-logs
        """,
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file (default: dsakit.yaml if present)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured logging level",
    )

    parser.add_argument(
        "--console-logs",
        action="store_true",
        help="Render logs for humans instead of as JSON",
    )

    parser.add_argument(
        "--dot",
        type=str,
        default=None,
        help="Write the sample graph as DOT source to this path",
    )

    parser.add_argument(
        "--png",
        type=str,
        default=None,
        help="Render the sample graph to this image path with Graphviz",
    )

    return parser.parse_args(argv)


def main() -> None:
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
