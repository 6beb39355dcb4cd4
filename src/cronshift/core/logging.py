"""Structured logging for classification runs.

Every event carries the run it belongs to and, inside the engine, the unit
being classified. Both live in structlog's context variables, so they follow
work onto pool threads through ``contextvars.copy_context()``.

Outputs come from ``LoggingConfig``: each one picks its own renderer, level and
destination. Console outputs go quiet while a progress bar is drawn.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from cronshift.core.progress import is_console_suppressed

if TYPE_CHECKING:
    from cronshift.config.models import LoggingConfig, LogOutputConfig

_CONSOLE_STREAMS = ("stderr", "stdout")

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
]


def bind_run(run_id: str | None = None) -> str:
    """Tag every following event of this context with a batch id."""
    rid = run_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(run_id=rid)
    return rid


@contextmanager
def unit_context(unit: str) -> Iterator[None]:
    """Tag events emitted while one unit is classified."""
    with structlog.contextvars.bound_contextvars(unit=unit):
        yield


class _ProgressAwareFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        return not is_console_suppressed()


def _open_output(output: LogOutputConfig) -> logging.Handler:
    if output.destination not in _CONSOLE_STREAMS:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path, encoding="utf-8")

    handler = logging.StreamHandler(getattr(sys, output.destination))
    handler.addFilter(_ProgressAwareFilter())
    return handler


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    colors = output.destination in _CONSOLE_STREAMS and getattr(sys, output.destination).isatty()
    return structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0)


def configure_logging(
    config: LoggingConfig | None = None,
    *,
    level: str = "INFO",
) -> Path | None:
    """Route structlog events to the configured outputs.

    Without a config, a single console output on stderr at ``level`` is used.
    Calling it again replaces the previous outputs.

    Returns:
        The first file destination, for pointing users at full logs.
    """
    from cronshift.config.models import LoggingConfig

    config = config or LoggingConfig(level=level)  # type: ignore[arg-type]
    root_level = logging.getLevelNamesMapping()[config.level]

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    root.setLevel(root_level)

    log_file: Path | None = None
    for output in config.outputs:
        handler = _open_output(output)
        handler.setLevel(logging.getLevelNamesMapping()[output.level or config.level])
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output),
                foreign_pre_chain=_PRE_CHAIN,
            )
        )
        root.addHandler(handler)
        if log_file is None and isinstance(handler, logging.FileHandler):
            log_file = Path(output.destination)

    return log_file


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    return logger.bind(logger=name) if name else logger  # type: ignore[no-any-return]
