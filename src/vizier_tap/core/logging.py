"""structlog setup for vizier-tap.

Log lines go to stderr so query output on stdout stays pipeable. With
``json_logs`` each event is one JSON object, for feeding log collectors
from batch jobs that run many catalog queries.
"""

import logging
import sys
from typing import Any

import structlog


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Looked up per logger: CliRunner swaps sys.stderr between invocations.
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Configure structlog.

    Args:
        verbose: Log at DEBUG (every query and its timing) instead of INFO.
        json_logs: Render events as JSON instead of the console format.
    """
    renderer: Any
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **context: Any) -> Any:
    """Return a structlog logger bound to ``name`` and any extra context.

    Clients bind their endpoint here (``tap_url=...``) so every event
    they emit says which service it concerns.
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    if context:
        logger = logger.bind(**context)
    return logger
