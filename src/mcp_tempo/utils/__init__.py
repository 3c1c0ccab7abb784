"""
Utility functions for the MCP Tempo integration.
"""

from .cache import CacheEntry, ExpiringCache, is_expired
from .environment import get_enabled_tools, is_read_only_mode, should_include_tool
from .logging import mask_sensitive, setup_logging
from .units import hours_to_seconds, seconds_to_hours
from .urls import path_segment

__all__ = [
    "CacheEntry",
    "ExpiringCache",
    "is_expired",
    "get_enabled_tools",
    "is_read_only_mode",
    "should_include_tool",
    "mask_sensitive",
    "setup_logging",
    "hours_to_seconds",
    "seconds_to_hours",
    "path_segment",
]
