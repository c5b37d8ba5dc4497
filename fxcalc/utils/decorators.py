"""Resilience decorators for rate-source coroutines.

All three wrap coroutine functions only; the calculator core is synchronous
and never retries or times out.
"""
import asyncio
import functools
import time
from typing import Any, Awaitable, Callable, Tuple, Type

from fxcalc.utils.logging import get_logger

logger = get_logger(__name__)

AsyncFunc = Callable[..., Awaitable[Any]]


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable[[AsyncFunc], AsyncFunc]:
    """Re-await a coroutine on ``exceptions`` with exponential backoff.

    Once ``max_attempts`` is spent the last failure propagates unchanged, so
    a source can still translate it into a ``DataProviderError``.

    Example:
        @retry(max_attempts=3, delay=1.0, exceptions=(httpx.HTTPError,))
        async def _get(self, params): ...
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: AsyncFunc) -> AsyncFunc:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            wait = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(f"{func.__qualname__} gave up after {attempt} attempts: {e}")
                        raise
                    logger.warning(
                        f"{func.__qualname__} attempt {attempt}/{max_attempts} failed ({e}), "
                        f"retrying in {wait:.1f}s"
                    )
                    await asyncio.sleep(wait)
                    wait *= backoff

        return wrapper

    return decorator


def timeout(seconds: float) -> Callable[[AsyncFunc], AsyncFunc]:
    """Bound a coroutine's run time; overruns raise the builtin ``TimeoutError``."""

    def decorator(func: AsyncFunc) -> AsyncFunc:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await asyncio.wait_for(func(*args, **kwargs), timeout=seconds)
            except asyncio.TimeoutError as e:
                logger.warning(f"{func.__qualname__} timed out after {seconds}s")
                raise TimeoutError(f"{func.__qualname__} exceeded {seconds}s") from e

        return wrapper

    return decorator


def log_execution(log_args: bool = True, log_result: bool = False) -> Callable[[AsyncFunc], AsyncFunc]:
    """Debug-log a coroutine's call, duration and outcome."""

    def decorator(func: AsyncFunc) -> AsyncFunc:
        name = func.__qualname__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            if log_args:
                logger.debug(f"{name} called with args={args!r:.100} kwargs={kwargs!r:.100}")
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{name} failed after {_elapsed_ms(started):.1f}ms: {e}")
                raise
            message = f"{name} finished in {_elapsed_ms(started):.1f}ms"
            if log_result:
                message += f" -> {result!r:.100}"
            logger.debug(message)
            return result

        return wrapper

    return decorator
