"""Exception handling wrapper for the functions exposed to the host."""

import functools
import traceback
import uuid
from typing import Any, Awaitable, Callable, TypeVar, cast

from openweather_extension.logging_context import correlation_id_contextvar

ERROR_RESULT = "Error."

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def safe_function(func: F) -> F:
    """
    Decorator for extension methods called by the host. No exception escapes:
    the message is stored in the extension's last_error slot and the error
    sentinel is returned to the language model instead.

    Each call runs under a fresh correlation id so its log lines can be grouped.
    """

    @functools.wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        token = correlation_id_contextvar.set(uuid.uuid4().hex[:12])
        try:
            return await func(self, *args, **kwargs)
        except Exception as e:
            self.logger.error(
                f"Function '{func.__name__}' failed: {traceback.format_exc()}"
            )
            self.last_error = str(e) or type(e).__name__
            return ERROR_RESULT
        finally:
            correlation_id_contextvar.reset(token)

    return cast(F, wrapper)
