"""Guards shared by the write tools of the Tempo server."""

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from fastmcp import Context

logger = logging.getLogger("mcp-tempo.utils.decorators")

ToolFunc = TypeVar("ToolFunc", bound=Callable[..., Awaitable[Any]])


def _is_read_only(ctx: Context) -> bool:
    state = ctx.request_context.lifespan_context
    if not isinstance(state, dict):
        return False
    app_context = state.get("app_lifespan_context")
    return bool(app_context is not None and app_context.read_only)


def check_write_access(func: ToolFunc) -> ToolFunc:
    """Refuse a worklog-changing tool while the server runs in read-only mode.

    The wrapped tool must be async and take ``ctx`` first. In read-only mode
    nothing reaches Tempo: the call fails with ``ValueError`` naming the
    refused action, e.g. "Cannot delete worklog in read-only mode."
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        if _is_read_only(ctx):
            action = func.__name__.replace("_", " ")
            logger.warning(f"Refused '{func.__name__}': server is read-only.")
            raise ValueError(f"Cannot {action} in read-only mode.")
        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
