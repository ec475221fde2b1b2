"""
structlog setup for batch runs.

Log lines go to stderr; stdout belongs to the rich progress bar and summary.
"""

import logging
import sys
import uuid
from contextlib import contextmanager

import structlog

from recipe_scan.config import get_settings

# Libraries whose INFO output drowns the pipeline events
NOISY_LOGGERS = ("urllib3", "PIL")


def _renderer(fmt: str):
    if fmt == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def setup_logging(log_level: str = None, log_format: str = None):
    """
    Configure structlog over stdlib logging.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Override format ('json' or 'console')
    """
    settings = get_settings()
    level = getattr(logging, log_level or settings.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ] + _renderer(log_format or settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def batch_context(input_dir: str, batch_id: str = None):
    """
    Bind the batch id and input directory for log lines from the calling thread.

    Pipeline workers run in pool threads and bind their group label instead.
    """
    batch_id = batch_id or uuid.uuid4().hex[:8]
    structlog.contextvars.bind_contextvars(batch_id=batch_id, input_dir=input_dir)
    try:
        yield batch_id
    finally:
        structlog.contextvars.unbind_contextvars("batch_id", "input_dir")
