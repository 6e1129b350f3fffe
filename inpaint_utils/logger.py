"""
Centralized logging configuration for TextInpaint Pro.
Provides structured logging with different levels for development and production.
"""

import logging
import os
import sys
from functools import wraps
import time


# Create loggers
logger = logging.getLogger('text_inpaint')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configure logging for the application.

    Handlers are attached to the root logger so module loggers created with
    ``logging.getLogger(__name__)`` share the same format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file to write logs to (in addition to console)
    """
    root = logging.getLogger()
    # Clear handlers installed by a previous call (Streamlit reruns the script)
    for handler in list(root.handlers):
        if getattr(handler, "_text_inpaint", False):
            root.removeHandler(handler)
    root.setLevel(level)
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    console_handler._text_inpaint = True
    root.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        file_handler._text_inpaint = True
        root.addHandler(file_handler)

    return logger


def log_exceptions(func):
    """
    Decorator to automatically log exceptions from functions.

    Usage:
        @log_exceptions
        def my_function():
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Exception in {func.__name__}: {str(e)}", exc_info=True)
            raise
    return wrapper


def log_performance(func):
    """
    Decorator to log function execution time.

    Usage:
        @log_performance
        def slow_function():
            ...
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            elapsed = time.time() - start_time
            logger.info(f"{func.__name__} completed in {elapsed:.3f}s")
            return result
        except Exception:
            elapsed = time.time() - start_time
            logger.debug(f"{func.__name__} failed after {elapsed:.3f}s")
            raise
    return wrapper


def level_from_env(default=logging.INFO):
    """Resolve INPAINT_LOG_LEVEL (name such as DEBUG) to a logging level."""
    name = os.getenv("INPAINT_LOG_LEVEL", "").upper()
    return getattr(logging, name, default) if name else default
