"""structlog configuration for applications embedding the generator."""

import logging

import structlog


def configure_logging(level: str = "INFO", log_format: str = "plain") -> None:
    """
    Route structlog through stdlib logging.

    Args:
        level: Stdlib level name
        log_format: ``json`` for machine-readable output, anything else
            for the console renderer
    """
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format="%(message)s")

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
