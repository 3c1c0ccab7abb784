"""Main FastMCP server setup for the Tempo integration."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools import Tool
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_tempo.tempo import TempoFetcher
from mcp_tempo.tempo.config import TempoConfig
from mcp_tempo.utils.environment import (
    get_enabled_tools,
    is_read_only_mode,
    is_tempo_configured,
    should_include_tool,
)

from .context import MainAppContext
from .tempo import tempo_mcp

logger = logging.getLogger("mcp-tempo.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP) -> AsyncIterator[dict]:
    logger.info("Main Tempo MCP server lifespan starting...")
    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()

    loaded_tempo_config: TempoConfig | None = None
    tempo: TempoFetcher | None = None

    if is_tempo_configured():
        try:
            tempo_config = TempoConfig.from_env()
            if tempo_config.is_auth_configured():
                loaded_tempo_config = tempo_config
                tempo = TempoFetcher(config=tempo_config)
                logger.info(
                    "Tempo configuration loaded and authentication is configured."
                )
            else:
                logger.warning(
                    "Tempo URL found, but authentication is not fully configured. Tempo tools will be unavailable."
                )
        except Exception as e:
            logger.error(f"Failed to load Tempo configuration: {e}", exc_info=True)

    app_context = MainAppContext(
        full_tempo_config=loaded_tempo_config,
        tempo=tempo,
        read_only=read_only,
        enabled_tools=enabled_tools,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")
    try:
        yield {"app_lifespan_context": app_context}
    finally:
        if tempo is not None:
            tempo.close()
        logger.info("Main Tempo MCP server lifespan shutting down.")


class ToolFilterMiddleware(Middleware):
    """Hides tools according to enabled_tools, read-only mode and Tempo configuration."""

    async def on_list_tools(
        self,
        context: MiddlewareContext,
        call_next: CallNext,
    ) -> Sequence[Tool]:
        all_tools = await call_next(context)

        app_lifespan_state: MainAppContext | None = None
        if context.fastmcp_context is not None:
            app_lifespan_state = context.fastmcp_context.lifespan_context.get(
                "app_lifespan_context"
            )
        if app_lifespan_state is None:
            logger.warning("Lifespan context not available during tools/list call.")
            return []

        read_only = app_lifespan_state.read_only
        enabled_tools_filter = app_lifespan_state.enabled_tools
        logger.debug(
            f"on_list_tools: read_only={read_only}, enabled_tools_filter={enabled_tools_filter}"
        )
        logger.debug(
            f"Aggregated {len(all_tools)} tools before filtering: {[t.name for t in all_tools]}"
        )

        filtered_tools: list[Tool] = []
        for tool_obj in all_tools:
            registered_name = tool_obj.name
            tool_tags = tool_obj.tags

            if not should_include_tool(registered_name, enabled_tools_filter):
                logger.debug(f"Excluding tool '{registered_name}' (not enabled)")
                continue

            if read_only and "write" in tool_tags:
                logger.debug(
                    f"Excluding tool '{registered_name}' due to read-only mode and 'write' tag"
                )
                continue

            if "tempo" in tool_tags and app_lifespan_state.tempo is None:
                logger.debug(
                    f"Excluding Tempo tool '{registered_name}' as Tempo configuration/authentication is incomplete."
                )
                continue

            filtered_tools.append(tool_obj)

        logger.debug(f"on_list_tools: Total tools after filtering: {len(filtered_tools)}")
        return filtered_tools


main_mcp = FastMCP(
    name="Tempo MCP",
    lifespan=main_lifespan,
    middleware=[ToolFilterMiddleware()],
)
main_mcp.mount(tempo_mcp, namespace="tempo")


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)


logger.info("Added /healthz endpoint for Kubernetes probes")
