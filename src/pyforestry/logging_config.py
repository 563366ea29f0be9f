"""
Logging configuration for pyforestry.

Every module obtains its logger through get_logger() so that all package
loggers hang off the "pyforestry" root and can be configured in one place.
"""
import logging
from typing import Optional, Union

__all__ = [
    'PACKAGE_LOGGER_NAME',
    'setup_logging',
    'get_logger',
    'log_growth_summary',
    'log_harvest_summary',
]

PACKAGE_LOGGER_NAME = 'pyforestry'

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_configured = False


def setup_logging(level: Union[int, str] = logging.WARNING,
                  log_format: Optional[str] = None) -> logging.Logger:
    """Configure the package logger.

    Attaches a single stream handler to the package logger the first time it
    is called; later calls only adjust the level.

    Args:
        level: Logging level as an int or a level name such as "INFO"
        log_format: Format string for the handler. Defaults to DEFAULT_FORMAT.

    Returns:
        The configured package logger
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package namespace.

    Args:
        name: Usually the caller's __name__

    Returns:
        Logger instance
    """
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + '.'):
        name = f'{PACKAGE_LOGGER_NAME}.{name}'
    return logging.getLogger(name)


def log_growth_summary(logger: logging.Logger, forest_name: str, years: int,
                       tree_count: int, mean_height_gain: float) -> None:
    """Log a one-line summary of a growth step."""
    logger.info(
        f"Forest '{forest_name}' grew {years} year(s): "
        f"{tree_count} trees, mean height gain {mean_height_gain:.2f} ft"
    )


def log_harvest_summary(logger: logging.Logger, forest_name: str, threshold: float,
                        removed: int, remaining: int) -> None:
    """Log a one-line summary of a reap."""
    logger.info(
        f"Forest '{forest_name}' reaped above {threshold:g} ft: "
        f"removed {removed}, remaining {remaining}"
    )
