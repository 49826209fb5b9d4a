# dayflow/services/side_effects.py
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def best_effort(default: Callable[[], Any], label: str):
    """
    Mark a service coroutine as a side channel of some primary action.

    Failures are logged with traceback, the service session is rolled back so
    the caller can keep using it, and ``default()`` is returned instead of
    raising. The decorated method must belong to an object with a
    ``session`` attribute.
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except Exception:
                logger.exception(f"{label} failed, primary action unaffected")
                try:
                    await self.session.rollback()
                except Exception:
                    logger.exception(f"{label}: rollback after failure also failed")
                return default()
        return wrapper
    return decorator
