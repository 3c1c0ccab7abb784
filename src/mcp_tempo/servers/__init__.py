"""Server implementations for MCP Tempo."""

from .main import main_mcp
from .tempo import tempo_mcp

__all__ = ["tempo_mcp", "main_mcp"]
