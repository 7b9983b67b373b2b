"""Textual export of graphs and rendering through Graphviz.

Document generation (:func:`to_dot`, :func:`to_mermaid`) is pure. The I/O
half writes DOT files and supervises the external ``dot`` process.

DOT layout::

    graph G {
        "A" -- "B" [label=4];
        "C";
    }

Isolated vertices get a line of their own, each undirected edge is written
once, and the weight label only appears for weights other than 1.
"""

from __future__ import annotations

import contextlib
import subprocess
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from dsakit.config import get_config
from dsakit.log_config import export_context

if TYPE_CHECKING:
    from dsakit.graph.graph import Graph

logger = structlog.get_logger(__name__)

DEFAULT_WEIGHT = 1


class ExportError(Exception):
    """Raised when a graph document cannot be written."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RenderError(ExportError):
    """Raised when the external renderer fails or cannot be started.

    Attributes:
        message: Description of the failure
        returncode: Exit status of the renderer, None if it never ran
        stderr: Captured error output of the renderer
    """

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def _escape(label: object) -> str:
    """Quote-safe DOT text; backslashes first so an escaped quote stays escaped."""
    return str(label).replace("\\", "\\\\").replace('"', '\\"')


def _mermaid_text(label: object) -> str:
    return str(label).replace('"', "#quot;")


def _edge_entries(graph: Graph) -> Iterator[tuple[object, object | None, int]]:
    """Yield ``(u, v, weight)`` per emitted line; ``v`` is None for isolated vertices.

    For undirected graphs an entry is skipped once its reverse has been
    emitted.
    """
    written: set[tuple[object, object]] = set()

    for u, neighbors in graph.adjacency.items():
        if not neighbors:
            yield u, None, DEFAULT_WEIGHT

        for v, weight in neighbors:
            if not graph.directed and (v, u) in written:
                continue
            yield u, v, weight
            written.add((u, v))


def to_dot(graph: Graph) -> str:
    """Generate a Graphviz DOT document for graph.

    Args:
        graph: The graph to describe

    Returns:
        DOT source terminated by a newline
    """
    graph_type = "digraph" if graph.directed else "graph"
    connector = " -> " if graph.directed else " -- "

    lines = [f"{graph_type} G {{"]
    for u, v, weight in _edge_entries(graph):
        if v is None:
            lines.append(f'    "{_escape(u)}";')
            continue

        line = f'    "{_escape(u)}"{connector}"{_escape(v)}"'
        if weight != DEFAULT_WEIGHT:
            line += f" [label={weight}]"
        lines.append(line + ";")
    lines.append("}")

    return "\n".join(lines) + "\n"


def to_mermaid(graph: Graph) -> str:
    """Generate a Mermaid flowchart for graph.

    Vertices get positional ids (``n0``, ``n1``...) and keep their label as
    node text, so any hashable label is safe to emit.
    """
    ids = {vertex: f"n{index}" for index, vertex in enumerate(graph.adjacency)}
    connector = "-->" if graph.directed else "---"

    lines = ["graph TD" if graph.directed else "graph LR"]
    lines.extend(
        f'    {node_id}["{_mermaid_text(vertex)}"]'
        for vertex, node_id in ids.items()
    )

    for u, v, weight in _edge_entries(graph):
        if v is None:
            continue
        label = f"|{weight}|" if weight != DEFAULT_WEIGHT else ""
        lines.append(f"    {ids[u]} {connector}{label} {ids[v]}")

    return "\n".join(lines) + "\n"


def write_dot(graph: Graph, path: str | Path) -> Path:
    """Write the DOT document for graph to path.

    Raises:
        ExportError: If the file cannot be created
    """
    dot_path = Path(path)
    with export_context(dot_path, len(graph.adjacency)):
        try:
            dot_path.write_text(to_dot(graph), encoding="utf-8")
        except OSError as e:
            logger.exception("dot_file_write_failed", error=str(e))
            msg = f"Unable to open file: {dot_path}"
            raise ExportError(msg) from e

        logger.info("dot_file_written")
    return dot_path


@contextlib.contextmanager
def _temporary_dot_file(document: str, keep: bool = False) -> Iterator[Path]:
    """Write document to a temporary ``.dot`` file and remove it on exit.

    Removal is best-effort and happens whether or not the body raised.
    """
    try:
        with tempfile.NamedTemporaryFile(
            "w", suffix=".dot", delete=False, encoding="utf-8"
        ) as handle:
            handle.write(document)
            dot_path = Path(handle.name)
    except OSError as e:
        logger.exception("temp_dot_file_failed", error=str(e))
        msg = "Unable to open temp DOT file."
        raise ExportError(msg) from e

    try:
        yield dot_path
    finally:
        if keep:
            logger.debug("temp_dot_file_kept", path=str(dot_path))
        else:
            with contextlib.suppress(OSError):
                dot_path.unlink()


def render(
    graph: Graph,
    output_path: str | Path,
    *,
    fmt: str | None = None,
    executable: str | None = None,
) -> Path:
    """Render graph to an image by running Graphviz on its DOT document.

    The call blocks until the renderer exits; there is no timeout.

    Args:
        graph: The graph to render
        output_path: Image file to produce
        fmt: Output format (``png``, ``svg``...); defaults to the configured one
        executable: Graphviz program; defaults to the configured one

    Returns:
        Path of the produced image

    Raises:
        ExportError: If the configuration cannot be loaded, a previous output
            file cannot be removed, or the temporary DOT file cannot be created
        RenderError: If the renderer cannot be started, exits non-zero, or
            leaves no output file behind
    """
    output = Path(output_path)

    with export_context(output, len(graph.adjacency)):
        try:
            settings = get_config().render
        except (OSError, ValueError) as e:
            logger.exception("render_configuration_failed", error=str(e))
            msg = f"Unable to load render configuration: {e}"
            raise ExportError(msg) from e

        fmt = (fmt or settings.output_format).lower()
        executable = executable or settings.executable

        # A leftover image must not pass for this run's output.
        try:
            output.unlink(missing_ok=True)
        except OSError as e:
            logger.exception("stale_output_not_removed", error=str(e))
            msg = f"Unable to replace output file: {output}"
            raise ExportError(msg) from e

        with _temporary_dot_file(to_dot(graph), keep=settings.keep_dot) as dot_path:
            command = [executable, f"-T{fmt}", str(dot_path), "-o", str(output)]
            logger.info("rendering_graph", command=command)

            try:
                result = subprocess.run(command, capture_output=True, text=True, check=False)
            except OSError as e:
                logger.exception("renderer_not_started", executable=executable, error=str(e))
                msg = f"Graphviz '{executable}' command could not be started: {e}"
                raise RenderError(msg) from e

            if result.returncode != 0:
                logger.error(
                    "renderer_failed",
                    executable=executable,
                    returncode=result.returncode,
                    stderr=result.stderr,
                )
                msg = f"Graphviz '{executable}' command failed with exit code {result.returncode}."
                raise RenderError(msg, returncode=result.returncode, stderr=result.stderr or "")

        if not output.exists():
            msg = f"Graphviz '{executable}' produced no output file: {output}"
            logger.error("render_output_missing")
            raise RenderError(msg, returncode=result.returncode)

        logger.info("graph_rendered", fmt=fmt)
    return output
