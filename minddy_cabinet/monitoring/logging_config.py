"""Logging configuration."""

import logging
import sys
from typing import Iterable

import structlog

NOISY_LOGGERS = ("httpx", "httpcore")

# applied to structlog events and to plain ``logging`` records alike
SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def build_formatter(json_format: bool = False) -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering stdlib records through the structlog chain."""

    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer(colors=False)
    processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_format:
        processors.append(structlog.processors.format_exc_info)
    processors.append(renderer)

    return structlog.stdlib.ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=SHARED_PROCESSORS
    )


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS
) -> None:
    """Setup structured logging for the cabinet.

    Modules log through ``logging.getLogger``; their records share the
    structlog renderer, so context bound with ``bind_command_context``
    (command name, backend URL) appears on every line.
    """

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stderr, so command output on stdout stays pipeable
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(json_format))
    logging.basicConfig(
        handlers=[handler],
        level=getattr(logging, level.upper(), logging.INFO)
    )

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_command_context(command: str, api_url: str) -> None:
    """Attach the running CLI command to subsequent log events."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command, api_url=api_url)
