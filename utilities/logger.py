"""
Logging system using structlog.
Provides structured logging with different output formats and levels.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import structlog
from structlog.stdlib import LoggerFactory


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[Union[str, Path]] = None,
    debug: bool = False
) -> None:
    """
    Set up structured logging with configurable output formats.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        log_file: Optional log file path
        debug: Add call-site information to every event
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        logging.getLogger().addHandler(file_handler)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging system initialized",
        level=log_level,
        format=log_format,
        file=str(log_file) if log_file else None,
        debug=debug
    )


class CatalogLogger:
    """
    Logger for catalog operations with bound context.
    """

    def __init__(self, name: str = "catalog"):
        self.logger = structlog.get_logger(name)
        self.context = {}

    def bind_context(self, **kwargs) -> 'CatalogLogger':
        """
        Bind context variables to the logger.

        Args:
            **kwargs: Context variables to bind

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def log_lookup(self, book_id: str, strategy: str, items: Optional[int] = None) -> None:
        """Log a provider lookup for an identifier."""
        self.logger.info(
            "Provider lookup",
            book_id=book_id,
            strategy=strategy,
            items=items,
            **self.context
        )

    def log_saved(self, book_id: str, title: str) -> None:
        self.logger.info(
            "Book saved",
            book_id=book_id,
            title=title,
            **self.context
        )

    def log_rejected(self, book_id: str, error_kind: str, error: str) -> None:
        """Log a rejected add-by-id request."""
        self.logger.warning(
            "Add book rejected",
            book_id=book_id,
            error_kind=error_kind,
            error=error,
            **self.context
        )
