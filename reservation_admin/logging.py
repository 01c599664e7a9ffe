from __future__ import annotations

import logging
import os
import sys

import structlog

DEFAULT_LEVEL = "WARNING"


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LEVEL).upper()
    return getattr(logging, name, logging.WARNING)


def setup_logging(
    log_file: str | os.PathLike | None = None,
    *,
    level: str | None = None,
) -> None:
    """Route structlog events to stderr, and to ``log_file`` when given.

    Command output goes to stdout, so log lines never mix with it. The level
    comes from ``level``, then ``LOG_LEVEL``, defaulting to WARNING. Lines
    are JSON unless ``LOG_FORMAT=console``. The file always gets JSON.
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    def formatter(renderer) -> structlog.stdlib.ProcessorFormatter:
        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )

    json_formatter = formatter(structlog.processors.JSONRenderer())
    stderr = logging.StreamHandler(sys.stderr)
    if os.getenv("LOG_FORMAT", "json").lower() == "console":
        stderr.setFormatter(formatter(structlog.dev.ConsoleRenderer(colors=False)))
    else:
        stderr.setFormatter(json_formatter)
    handlers: list[logging.Handler] = [stderr]

    if log_file:
        directory = os.path.dirname(str(log_file))
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(json_formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=_resolve_level(level), handlers=handlers, force=True)
