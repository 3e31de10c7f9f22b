"""
Logging setup for stylequill.

Library modules only call ``logging.getLogger(__name__)``; applications
(the CLI included) call :func:`setup_logging` once.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``."""
    return logging.getLogger(name)


def setup_logging(level: str = "INFO", use_rich: bool = True, console: Console = None) -> None:
    """
    Setup logging for the application.

    Args:
        level: Log level name
        use_rich: Whether to use rich logging
        console: Console the rich handler writes to (stderr by default)

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)

    if use_rich:
        rich_handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
        root_logger.addHandler(rich_handler)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        root_logger.addHandler(handler)
