"""Decorator utilities for cross-cutting concerns."""
import time
import logging
import functools
import inspect
from typing import Any, Callable, Optional, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: Optional[F] = None, *, level: int = logging.INFO) -> Any:
    """Log how long a sync or async function took, and whether it raised.

    Usable bare (``@log_execution_time``) or with options
    (``@log_execution_time(level=logging.DEBUG)``).
    """
    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def async_wrapper(*args, **kwargs):
                start_time = time.perf_counter()
                try:
                    result = await fn(*args, **kwargs)
                except Exception as e:
                    duration = time.perf_counter() - start_time
                    logger.error(f"{fn.__name__} failed after {duration:.3f}s: {e}")
                    raise
                logger.log(level, f"{fn.__name__} completed in {time.perf_counter() - start_time:.3f}s")
                return result
            return cast(F, async_wrapper)

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.error(f"{fn.__name__} failed after {duration:.3f}s: {e}")
                raise
            logger.log(level, f"{fn.__name__} completed in {time.perf_counter() - start_time:.3f}s")
            return result
        return cast(F, wrapper)

    if func is not None:
        return decorator(func)
    return decorator
