"""
Structured logging for app-killer.

Features:
- structlog event names with key/value context in every module
- Console: human-readable output on stderr
- File: JSON lines with rotation (5MB, 3 backups)

Modules only ever call structlog.get_logger(__name__); this module decides
where the records go.
"""

import logging
import logging.handlers
import sys

import structlog

from .config import KillerConfig

__all__ = ["configure_logging", "LOGGER_NAME"]

LOGGER_NAME = "app_killer"

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _formatter(renderer) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(config: KillerConfig, *, log_to_file: bool = True) -> logging.Logger:
    """Route structlog through stdlib logging handlers.

    Safe to call more than once; previous handlers are replaced.

    Args:
        config: Supplies level, log file and rotation settings
        log_to_file: Also write JSON lines to config.log_file when writable

    Returns:
        The package's stdlib logger
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(level)
    package_logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=False)))
    package_logger.addHandler(console)

    if log_to_file:
        try:
            config.ensure_dirs()
            file_handler = logging.handlers.RotatingFileHandler(
                str(config.log_file),
                maxBytes=config.log_max_bytes,
                backupCount=config.log_backup_count,
            )
        except OSError:
            pass  # Skip file logging if not writable
        else:
            file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
            package_logger.addHandler(file_handler)

    return package_logger
