"""Decorators for consistent error handling and timing in the app layer."""
from __future__ import annotations

import functools
import time
from typing import Callable, TypeVar

from loguru import logger

from core.result import Success, Failure, Result

T = TypeVar('T')


def as_result(func: Callable[..., T]) -> Callable[..., Result[T, Exception]]:
    """Decorator wrapping return values in Success and exceptions in Failure."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Result[T, Exception]:
        try:
            return Success(func(*args, **kwargs))
        except Exception as e:
            return Failure(e)
    return wrapper


def log_execution_time(logger_instance=logger, level: str = "DEBUG"):
    """Decorator logging how long the wrapped call took.

    Args:
        logger_instance: Logger to use
        level: Log level name (DEBUG, INFO, ...)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - start_time
                logger_instance.log(level.upper(), f"{func.__name__} executed in {elapsed * 1000:.2f}ms")
        return wrapper
    return decorator
