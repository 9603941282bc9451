import logging
import sys

import structlog
from structlog.stdlib import add_log_level, add_logger_name


def setup_logging(level: int = logging.INFO, colors: bool | None = None) -> None:
    """Configure structlog and standard logging with the given level.

    Log lines go to stderr so that map dumps on stdout stay clean.  Safe to
    call again once the config file has named the wanted level.
    """
    if colors is None:
        colors = sys.stderr.isatty()
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers are module globals; caching would pin the first level.
        cache_logger_on_first_use=False,
    )
