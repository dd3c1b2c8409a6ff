# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Simple logging configuration using Python's standard logging with Rich.

The runtime itself only emits records through module loggers
(``logging.getLogger(__name__)``) and never configures handlers. Applications
and the CLI opt in to console output via setup_logging().

Usage:
    from protomatter._internal.logging import setup_logging

    # In CLI setup
    setup_logging(level="verbose")

    # In library code
    import logging
    logger = logging.getLogger(__name__)
    logger.debug("Created blueprint...")
"""

import logging

PACKAGE_LOGGER = "protomatter"

LEVEL_MAP = {
    'quiet': logging.ERROR,
    'normal': logging.WARNING,
    'verbose': logging.INFO,
    'debug': logging.DEBUG,
}


def setup_logging(level: str = "normal") -> None:
    """Configure the protomatter logger with a Rich handler.

    Maps verbosity names to logging constants:
    - quiet:   ERROR (40) - Only show errors
    - normal:  WARNING (30) - Default, show warnings and errors
    - verbose: INFO (20) - Show informational messages
    - debug:   DEBUG (10) - Show everything, including dispatch traces

    Unknown names fall back to normal. Calling again only adjusts levels.
    """
    from rich.logging import RichHandler

    log_level = LEVEL_MAP.get(level.lower(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)

    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    if not handlers:
        handler = RichHandler(
            rich_tracebacks=(log_level == logging.DEBUG),
            show_path=False,
            markup=False,
            show_time=False
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
        handlers = [handler]

    for handler in handlers:
        handler.setLevel(log_level)
