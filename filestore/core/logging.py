"""
Logging for the file store tools.

structlog renders every record, including records from stdlib loggers,
through one handler on stderr, so logs never interleave with what the
tools print on stdout. logging.yaml picks the level and the renderer;
the entry points raise the level with -v / -d.

    setup_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.debug("Menu choice", source="shell", choice="1")
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from filestore.core.config import get_app_config

# Libraries that log one INFO record per HTTP request
NOISY_LOGGERS = ("httpx", "httpcore")


def _renderer(format_type: str) -> Processor:
    if format_type == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(level: str | None = None, format_type: str | None = None) -> None:
    """
    Send structlog and stdlib records to stderr.

    Args:
        level: Overrides ``level`` from logging.yaml.
        format_type: "console" or "json"; overrides ``format`` from logging.yaml.
    """
    config = get_app_config().logging
    level = (level or config.level).upper()

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=_renderer(format_type or config.format),
        foreign_pre_chain=pre_chain,
    ))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """structlog logger for a module, usually ``get_logger(__name__)``."""
    return structlog.get_logger(name)
