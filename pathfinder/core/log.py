#!/usr/bin/env python3
"""
Pathfinder logging setup.

Library modules only call logging.getLogger(__name__); the entry points
(viewer, command line) call PathfinderLogger.setup_logging() once.
"""

import logging

ROOT_NAME = "pathfinder"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class PathfinderLogger:
    """
    Configures the `pathfinder` logger with a console handler.

    Calling setup_logging again only adjusts the level, so entry points
    can be invoked repeatedly (e.g. from tests) without stacking handlers.
    """

    _initialized = False

    @classmethod
    def setup_logging(cls, log_level=logging.INFO, stream=None):
        """
        Set up logging for the application.

        Args:
            log_level (int | str): level name or number (default: logging.INFO)
            stream: where the console handler writes (default: sys.stderr)

        Returns:
            logging.Logger: the configured `pathfinder` logger
        """
        if isinstance(log_level, str):
            name = log_level.upper()
            log_level = logging.getLevelName(name)
            if not isinstance(log_level, int):
                raise ValueError(f"Unknown log level: {name}")

        logger = logging.getLogger(ROOT_NAME)
        logger.setLevel(log_level)

        if cls._initialized:
            for handler in logger.handlers:
                handler.setLevel(log_level)
            return logger

        # Remove existing handlers if any
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

        cls._initialized = True
        logger.debug("Logging system initialized")
        return logger
