"""Dependency provider for the TempoFetcher used by tool functions."""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_tempo.servers.context import MainAppContext
from mcp_tempo.tempo import TempoFetcher

logger = logging.getLogger("mcp-tempo.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    """Return the MainAppContext yielded by the server lifespan, if any."""
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    if isinstance(lifespan_ctx_dict, dict):
        return lifespan_ctx_dict.get("app_lifespan_context")
    return None


async def get_tempo_fetcher(ctx: Context) -> TempoFetcher:
    """Returns the TempoFetcher created by the server lifespan.

    Args:
        ctx: The FastMCP context.

    Returns:
        The shared TempoFetcher instance.

    Raises:
        ValueError: If Tempo is not configured.
    """
    app_lifespan_ctx = get_app_context(ctx)
    if app_lifespan_ctx is None or app_lifespan_ctx.tempo is None:
        logger.error("Tempo configuration could not be resolved.")
        raise ValueError(
            "Tempo client (fetcher) not available. Ensure TEMPO_BASE_URL and TEMPO_PAT are set."
        )
    return app_lifespan_ctx.tempo
