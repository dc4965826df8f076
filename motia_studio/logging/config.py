"""structlog setup for the CLI and embedding applications.

Modules log through ``structlog.get_logger(__name__)`` with snake_case event
names; this module only decides where those lines go and how they look.
"""

import logging
import sys
from typing import Literal, TextIO

import structlog
from structlog.types import Processor

from motia_studio.config import get_settings

LogFormat = Literal["json", "console"]


def _renderer(log_format: LogFormat, stream: TextIO) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=stream.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(
    service_name: str | None = None,
    log_format: LogFormat | None = None,
    log_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Route studio logs through stdlib logging to ``stream``.

    Arguments left out come from :class:`~motia_studio.config.Settings`.
    ``stream`` defaults to stdout; the CLI passes stderr so that ``--json``
    output stays parseable.
    """
    settings = get_settings()
    stream = stream or sys.stdout
    level = (log_level or settings.log_level).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, level, logging.INFO),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            # deployment_id / project_id bound by the lifecycle
            structlog.contextvars.merge_contextvars,
            structlog.processors.format_exc_info,
            _renderer(log_format or settings.log_format, stream),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=service_name or settings.service_name)
