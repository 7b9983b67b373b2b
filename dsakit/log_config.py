"""Centralized structured logging configuration using structlog.

Every dsakit module logs through structlog with snake_case event names and
keyword context. Call :func:`configure_logging` once at program start; until
then structlog's defaults apply.

Exports bind their target with :func:`export_context`, so every line logged
while a graph is written or rendered carries ``output`` and ``vertex_count``.

Example:
    >>> from dsakit.log_config import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_logs=False)
    >>> logger = get_logger(__name__)
    >>> logger.debug("edge_added", source="A", target="B", weight=1)
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog


def _graph_processors() -> list[Any]:
    """Processors shared by both renderers, ending before the renderer itself."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ],
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structlog and the standard library logging bridge.

    Args:
        level: Logging level name, case-insensitive
        json_logs: If True, one JSON object per line; otherwise plain console output

    Raises:
        ValueError: If an invalid log level is provided
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        msg = f"Invalid log level: {level}"
        raise ValueError(msg)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)
    logging.getLogger().setLevel(numeric_level)

    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=[*_graph_processors(), renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def export_context(output: object, vertex_count: int, **extra: Any) -> Iterator[None]:
    """Bind the export target to every log line emitted inside the block.

    Args:
        output: Path of the file being produced
        vertex_count: Number of vertices in the exported graph
        **extra: Further keys, e.g. ``fmt="png"``
    """
    with structlog.contextvars.bound_contextvars(
        output=str(output), vertex_count=vertex_count, **extra
    ):
        yield


def bind_context(**kwargs: Any) -> None:
    """Bind context variables (e.g. ``graph="demo"``) to all subsequent log lines."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific context variables from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
