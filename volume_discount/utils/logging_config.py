"""
Logging configuration for the volume discount app.

Configures the ``volume_discount`` logger once, with the level taken from
the LOG_LEVEL environment variable (default: INFO).
"""
import logging
import os
import sys

ROOT_LOGGER_NAME = 'volume_discount'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = None) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Log level name, overrides LOG_LEVEL when given

    Returns:
        The package logger
    """
    level = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        # stderr keeps stdout clean for function output on the CLI
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Get a logger namespaced under the package logger."""
    if name:
        return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
    return logging.getLogger(ROOT_LOGGER_NAME)
