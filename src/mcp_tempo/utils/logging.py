"""Logging utilities for MCP Tempo.

All output goes to stderr, since stdout carries the MCP protocol when the
server runs over stdio.
"""

import logging

APP_LOGGER = "mcp-tempo"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Configure MCP Tempo logging on the root logger.

    Args:
        level: The minimum logging level to display (default: WARNING)

    Returns:
        The application logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace handlers so repeated setup calls do not duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
    root_logger.addHandler(handler)

    for logger_name in (APP_LOGGER, "mcp.server", "mcp.server.lowlevel.server"):
        logging.getLogger(logger_name).setLevel(level)

    return logging.getLogger(APP_LOGGER)


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Masks sensitive strings for logging.

    Args:
        value: The string to mask
        keep_chars: Number of characters to keep visible at start and end

    Returns:
        Masked string with most characters replaced by asterisks
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    hidden = "*" * (len(value) - keep_chars * 2)
    return f"{value[:keep_chars]}{hidden}{value[-keep_chars:]}"


def log_config_param(
    logger: logging.Logger,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Log one configuration parameter, masking it if sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"Tempo {param}: {display_value}")
