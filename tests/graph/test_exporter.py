"""Unit tests for DOT/Mermaid generation and Graphviz rendering.

Tests cover:
- DOT headers, connectors, isolated vertices and weight labels
- One line per undirected edge
- Mermaid output
- Writing DOT files
- Renderer supervision: command line, exit status, temp-file cleanup
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from dsakit.config import get_config
from dsakit.graph.exporter import (
    ExportError,
    RenderError,
    render,
    to_dot,
    to_mermaid,
    write_dot,
)
from dsakit.graph.graph import Graph


def edge_lines(document: str) -> list[str]:
    return [line for line in document.splitlines() if " -> " in line or " -- " in line]


class TestToDot:
    """Test DOT document generation."""

    def test_empty_undirected(self):
        """Test an empty graph is just the wrapper."""
        assert to_dot(Graph()) == "graph G {\n}\n"

    def test_empty_directed(self):
        """Test the directed header."""
        assert to_dot(Graph(directed=True)) == "digraph G {\n}\n"

    def test_single_undirected_edge_written_once(self):
        """Test a two-vertex undirected graph has exactly one edge line and no label."""
        graph = Graph()
        graph.add_edge("A", "B")

        document = to_dot(graph)

        assert document == 'graph G {\n    "A" -- "B";\n}\n'
        assert len(edge_lines(document)) == 1
        assert "label" not in document

    def test_directed_edges_both_ways_both_written(self):
        """Test that opposite directed edges are two lines."""
        graph = Graph(directed=True)
        graph.add_edge("A", "B")
        graph.add_edge("B", "A")

        document = to_dot(graph)

        assert '    "A" -> "B";' in document
        assert '    "B" -> "A";' in document

    def test_weight_label_only_for_non_default(self):
        """Test that weight labels appear only when the weight is not 1."""
        graph = Graph(directed=True)
        graph.add_edge("A", "B", 4)
        graph.add_edge("B", "C")

        document = to_dot(graph)

        assert '    "A" -> "B" [label=4];' in document
        assert '    "B" -> "C";' in document

    def test_isolated_vertex_line(self):
        """Test that a vertex without edges is declared on its own line."""
        graph = Graph()
        graph.add_vertex("lonely")
        graph.add_edge("A", "B")

        document = to_dot(graph)

        assert document.splitlines()[1] == '    "lonely";'

    def test_sink_vertex_in_directed_graph_declared(self):
        """Test that a directed sink has an empty neighbor list and gets its own line."""
        graph = Graph(directed=True)
        graph.add_edge("A", "B")

        assert to_dot(graph) == 'digraph G {\n    "A" -> "B";\n    "B";\n}\n'

    def test_sample_graph(self):
        """Test the full document for the demonstration graph."""
        graph = Graph()
        graph.add_edge("A", "B", 4)
        graph.add_edge("A", "C", 3)
        graph.add_edge("B", "C", 1)
        graph.add_edge("C", "D", 5)

        assert to_dot(graph) == (
            "graph G {\n"
            '    "A" -- "B" [label=4];\n'
            '    "A" -- "C" [label=3];\n'
            '    "B" -- "C";\n'
            '    "C" -- "D" [label=5];\n'
            "}\n"
        )

    def test_undirected_parallel_edges_written_per_entry(self):
        """Test that parallel undirected edges are each written once from one side."""
        graph = Graph()
        graph.add_edge("A", "B")
        graph.add_edge("A", "B", 2)

        assert edge_lines(to_dot(graph)) == ['    "A" -- "B";', '    "A" -- "B" [label=2];']

    def test_undirected_self_loop_written_once(self):
        """Test that the two stored entries of a self-loop make one line."""
        graph = Graph()
        graph.add_edge("A", "A")

        assert edge_lines(to_dot(graph)) == ['    "A" -- "A";']

    def test_quotes_escaped(self):
        """Test that double quotes inside labels are escaped."""
        graph = Graph()
        graph.add_vertex('say "hi"')

        assert '    "say \\"hi\\"";' in to_dot(graph)

    def test_backslashes_escaped(self):
        """Test that a trailing backslash cannot swallow the closing quote."""
        graph = Graph()
        graph.add_edge("a\\", "b")

        assert to_dot(graph) == 'graph G {\n    "a\\\\" -- "b";\n}\n'

    def test_backslash_before_quote_escaped(self):
        """Test that backslashes are doubled before quotes are escaped."""
        graph = Graph()
        graph.add_vertex('x\\"')

        assert '    "x\\\\\\"";' in to_dot(graph)

    def test_graph_method_delegates(self):
        """Test that Graph.to_dot matches the module function."""
        graph = Graph(directed=True)
        graph.add_edge(1, 2, 3)

        assert graph.to_dot() == to_dot(graph)
        assert '"1" -> "2" [label=3];' in graph.to_dot()


class TestToMermaid:
    """Test Mermaid flowchart generation."""

    def test_directed(self):
        """Test the directed flowchart with an edge label."""
        graph = Graph(directed=True)
        graph.add_edge("A", "B", 2)
        graph.add_edge("B", "C")

        assert to_mermaid(graph) == (
            "graph TD\n"
            '    n0["A"]\n'
            '    n1["B"]\n'
            '    n2["C"]\n'
            "    n0 -->|2| n1\n"
            "    n1 --> n2\n"
        )

    def test_undirected_edge_once(self):
        """Test that undirected edges use --- and appear once."""
        graph = Graph()
        graph.add_edge("A", "B")

        document = to_mermaid(graph)

        assert document.startswith("graph LR\n")
        assert document.count("---") == 1

    def test_quotes_replaced(self):
        """Test that double quotes are replaced by the Mermaid entity."""
        graph = Graph()
        graph.add_vertex('a"b')

        assert 'n0["a#quot;b"]' in to_mermaid(graph)


class TestWriteDot:
    """Test writing DOT documents to disk."""

    def test_writes_file(self, tmp_path):
        """Test that the file contains the generated document."""
        graph = Graph()
        graph.add_edge("A", "B")
        target = tmp_path / "graph.dot"

        result = write_dot(graph, target)

        assert result == target
        assert target.read_text(encoding="utf-8") == to_dot(graph)

    def test_graph_export_dot(self, tmp_path):
        """Test the Graph convenience method."""
        graph = Graph(directed=True)
        graph.add_edge("A", "B")

        path = graph.export_dot(tmp_path / "out.dot")

        assert path.read_text(encoding="utf-8").startswith("digraph G {")

    def test_unwritable_path_raises(self, tmp_path):
        """Test that a path in a missing directory raises ExportError."""
        graph = Graph()

        with pytest.raises(ExportError, match="Unable to open file"):
            write_dot(graph, tmp_path / "missing" / "graph.dot")


def fake_dot(returncode: int = 0, create_output: bool = True, seen: list | None = None):
    """Build a subprocess.run replacement that behaves like Graphviz."""

    def run(command, **kwargs):
        dot_file = Path(command[2])
        if seen is not None:
            seen.append((list(command), dot_file.exists(), dot_file.read_text(encoding="utf-8")))
        if returncode == 0 and create_output:
            Path(command[4]).write_bytes(b"\x89PNG")
        stderr = "" if returncode == 0 else "Error: syntax error in line 1"
        return subprocess.CompletedProcess(command, returncode, stdout="", stderr=stderr)

    return run


class TestRender:
    """Test supervision of the external renderer."""

    @pytest.fixture
    def graph(self) -> Graph:
        graph = Graph()
        graph.add_edge("A", "B", 4)
        return graph

    def test_success_invokes_dot_and_cleans_up(self, graph, tmp_path):
        """Test the command line, the temp-file content and its removal."""
        seen: list = []
        output = tmp_path / "graph.png"

        with patch("dsakit.graph.exporter.subprocess.run", side_effect=fake_dot(seen=seen)):
            result = render(graph, output)

        assert result == output
        assert output.exists()
        command, existed, content = seen[0]
        assert command[0] == "dot"
        assert command[1] == "-Tpng"
        assert command[2].endswith(".dot")
        assert command[3:] == ["-o", str(output)]
        assert existed is True
        assert content == to_dot(graph)
        assert not Path(command[2]).exists()

    def test_nonzero_exit_raises_and_cleans_up(self, graph, tmp_path):
        """Test that a failing renderer raises RenderError and the temp file is gone."""
        seen: list = []

        with patch(
            "dsakit.graph.exporter.subprocess.run",
            side_effect=fake_dot(returncode=1, seen=seen),
        ):
            with pytest.raises(RenderError) as exc_info:
                render(graph, tmp_path / "graph.png")

        assert exc_info.value.returncode == 1
        assert "syntax error" in exc_info.value.stderr
        assert "failed with exit code 1" in exc_info.value.message
        assert not Path(seen[0][0][2]).exists()

    def test_missing_executable_raises(self, graph, tmp_path):
        """Test that a renderer that cannot start raises RenderError."""
        with pytest.raises(RenderError, match="could not be started") as exc_info:
            render(graph, tmp_path / "graph.png", executable="definitely-not-graphviz-xyz")

        assert exc_info.value.returncode is None

    def test_missing_output_raises(self, graph, tmp_path):
        """Test that a zero exit without an output file is still a failure."""
        with patch(
            "dsakit.graph.exporter.subprocess.run",
            side_effect=fake_dot(create_output=False),
        ):
            with pytest.raises(RenderError, match="produced no output file"):
                render(graph, tmp_path / "graph.png")

    def test_format_and_executable_overrides(self, graph, tmp_path):
        """Test explicit format and executable arguments."""
        seen: list = []
        output = tmp_path / "graph.svg"

        with patch("dsakit.graph.exporter.subprocess.run", side_effect=fake_dot(seen=seen)):
            render(graph, output, fmt="SVG", executable="/opt/graphviz/bin/dot")

        command = seen[0][0]
        assert command[0] == "/opt/graphviz/bin/dot"
        assert command[1] == "-Tsvg"

    def test_configured_defaults(self, graph, tmp_path, monkeypatch):
        """Test that executable and format come from configuration."""
        monkeypatch.setenv("DSAKIT_RENDER_EXECUTABLE", "neato")
        monkeypatch.setenv("DSAKIT_RENDER_FORMAT", "pdf")
        seen: list = []

        with patch("dsakit.graph.exporter.subprocess.run", side_effect=fake_dot(seen=seen)):
            render(graph, tmp_path / "graph.pdf")

        assert seen[0][0][:2] == ["neato", "-Tpdf"]

    def test_keep_dot_leaves_temp_file(self, graph, tmp_path, monkeypatch):
        """Test that keep_dot preserves the temporary DOT file."""
        monkeypatch.setenv("DSAKIT_RENDER_KEEP_DOT", "true")
        assert get_config().render.keep_dot is True
        seen: list = []

        with patch("dsakit.graph.exporter.subprocess.run", side_effect=fake_dot(seen=seen)):
            render(graph, tmp_path / "graph.png")

        kept = Path(seen[0][0][2])
        assert kept.exists()
        kept.unlink()

    def test_export_png_uses_png(self, graph, tmp_path, monkeypatch):
        """Test that Graph.export_png always asks for PNG."""
        monkeypatch.setenv("DSAKIT_RENDER_FORMAT", "svg")
        seen: list = []

        with patch("dsakit.graph.exporter.subprocess.run", side_effect=fake_dot(seen=seen)):
            graph.export_png(tmp_path / "graph.png")

        assert seen[0][0][1] == "-Tpng"

    def test_stale_output_does_not_count(self, graph, tmp_path):
        """Test that an image left by an earlier run is not taken as this run's output."""
        output = tmp_path / "graph.png"
        output.write_bytes(b"old image")

        with patch(
            "dsakit.graph.exporter.subprocess.run",
            side_effect=fake_dot(create_output=False),
        ):
            with pytest.raises(RenderError, match="produced no output file"):
                render(graph, output)

        assert not output.exists()

    def test_output_replaced_on_success(self, graph, tmp_path):
        """Test that a successful run overwrites a previous image."""
        output = tmp_path / "graph.png"
        output.write_bytes(b"old image")

        with patch("dsakit.graph.exporter.subprocess.run", side_effect=fake_dot()):
            render(graph, output)

        assert output.read_bytes() == b"\x89PNG"

    def test_unrelated_config_file_ignored(self, graph, tmp_path):
        """Test that a generic config.yaml in the working directory is not read."""
        (tmp_path / "config.yaml").write_text("")
        seen: list = []

        with patch("dsakit.graph.exporter.subprocess.run", side_effect=fake_dot(seen=seen)):
            graph.export_png(tmp_path / "graph.png")

        assert seen[0][0][0] == "dot"

    @pytest.mark.parametrize(
        "content",
        ["", "render:\n  output_format: 'png; rm'\n", "render: [unclosed\n"],
    )
    def test_broken_configuration_raises_export_error(self, graph, tmp_path, content):
        """Test that an unusable dsakit.yaml surfaces as ExportError, not ValueError."""
        (tmp_path / "dsakit.yaml").write_text(content)

        with patch("dsakit.graph.exporter.subprocess.run") as mocked:
            with pytest.raises(ExportError, match="Unable to load render configuration") as exc_info:
                render(graph, tmp_path / "graph.png")

        assert not isinstance(exc_info.value, RenderError)
        assert isinstance(exc_info.value.__cause__, ValueError)
        mocked.assert_not_called()
