"""Server settings read from environment variables."""

import logging
import os

logger = logging.getLogger("mcp-tempo.utils.environment")

TRUTHY = ("true", "1", "yes", "y", "on")


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode hides and refuses the tools that create or delete
    worklogs, leaving searches and schedule lookups available.
    """
    return os.getenv("READ_ONLY_MODE", "false").lower() in TRUTHY


def is_tempo_configured() -> bool:
    """True when both the base URL and the personal access token are set."""
    configured = bool(os.getenv("TEMPO_BASE_URL") and os.getenv("TEMPO_PAT"))
    if not configured:
        logger.info(
            "Tempo is not configured: TEMPO_BASE_URL and TEMPO_PAT are required."
        )
    return configured


def get_enabled_tools() -> list[str] | None:
    """Parse the comma-separated ENABLED_TOOLS variable.

    Returns:
        The tool names, or None when the variable is unset or holds no names

    Examples:
        ENABLED_TOOLS="tempo_get_worklogs, tempo_get_schedule"
            -> ["tempo_get_worklogs", "tempo_get_schedule"]
        ENABLED_TOOLS=" , " -> None
    """
    raw = os.getenv("ENABLED_TOOLS")
    if not raw:
        return None
    tools = [name.strip() for name in raw.split(",") if name.strip()]
    logger.debug(f"Enabled tools from environment: {tools}")
    return tools or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Check a tool name against the enabled tools list (None allows all)."""
    return enabled_tools is None or tool_name in enabled_tools
