"""
Structured logging with structlog.

Modules log through `get_logger(__name__)`; the pipeline binds the
running stage with `log_context(stage=...)` so every line of a stage
carries it. Output goes to stderr so that CLI tables on stdout stay clean.
"""

import logging
import sys
from typing import Any

import structlog

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _renderer(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog for a report run.

    Args:
        level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL (any case).
        json_output: One JSON object per line instead of console output.

    Raises:
        ValueError: If the level name is unknown.
    """
    name = level.upper()
    if name not in _LEVELS:
        msg = f"Unknown log level: {level!r} (expected one of {', '.join(_LEVELS)})"
        raise ValueError(msg)
    log_level = logging.getLevelName(name)

    # pandas/matplotlib warnings routed through stdlib logging share the stream
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            *_renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a logger named after the calling module."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind key-value pairs to every log line emitted inside the block.

    Example:
        with log_context(stage="join"):
            log.info("Joined tables", rows=120)  # includes stage="join"
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
