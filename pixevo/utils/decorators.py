"""
Decorators for the PixEvo system.
"""

import time
import functools
import logging
from typing import Callable, Optional

from ..core.logging import get_logger


def log_execution_time(logger: Optional[logging.Logger] = None):
    """
    Decorator to log function execution time.

    Completion is logged at INFO, failures at ERROR before re-raising.

    Args:
        logger: Logger instance for timing messages

    Returns:
        Decorated function
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if logger is None:
                logger_instance = get_logger(func.__module__)
            else:
                logger_instance = logger

            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = time.perf_counter() - start_time
                logger_instance.error(
                    f"{func.__name__} failed after {execution_time:.4f}s: {str(e)}"
                )
                raise
            execution_time = time.perf_counter() - start_time
            logger_instance.info(
                f"{func.__name__} completed in {execution_time:.4f}s"
            )
            return result

        return wrapper

    return decorator
