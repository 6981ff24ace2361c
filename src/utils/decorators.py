"""Utility decorators for logging provider calls."""
import inspect
import functools
import time
from typing import Callable
from src.utils.logging import get_logger

logger = get_logger(__name__)


def log_execution(log_args: bool = True, log_result: bool = False):
    """
    Decorator to log function execution with timing.

    Failures are logged and re-raised unchanged.

    Args:
        log_args: Whether to log function arguments
        log_result: Whether to log function result

    Example:
        @log_execution(log_args=True)
        async def get_daily_series(self, base, quote):
            ...
    """
    def decorator(func: Callable):
        def _start(args, kwargs) -> dict:
            extra = {"function": func.__name__}
            if log_args:
                extra["function_args"] = str(args)[:100]  # Truncate long args
                extra["function_kwargs"] = str(kwargs)[:100]
            logger.debug(f"Starting {func.__name__}", extra=extra)
            return extra

        def _elapsed_ms(start_time: float) -> float:
            return round((time.perf_counter() - start_time) * 1000, 2)

        def _finish(start_time: float, result) -> None:
            log_extra = {"function": func.__name__, "execution_time_ms": _elapsed_ms(start_time)}
            if log_result:
                log_extra["result"] = str(result)[:100]
            logger.debug(f"Completed {func.__name__}", extra=log_extra)

        def _fail(start_time: float, e: Exception) -> None:
            logger.warning(
                f"Failed {func.__name__}",
                extra={"function": func.__name__, "execution_time_ms": _elapsed_ms(start_time), "error": str(e)}
            )

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            _start(args, kwargs)
            start_time = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _fail(start_time, e)
                raise
            _finish(start_time, result)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            _start(args, kwargs)
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _fail(start_time, e)
                raise
            _finish(start_time, result)
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
