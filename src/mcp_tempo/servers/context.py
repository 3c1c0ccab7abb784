from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_tempo.tempo import TempoFetcher
    from mcp_tempo.tempo.config import TempoConfig


@dataclass(frozen=True)
class MainAppContext:
    """
    Context created once at server startup.

    Holds the Tempo configuration loaded from the environment and the single
    client shared by all tool calls, so the issue cache and the resolved
    identity live as long as the server.
    """

    full_tempo_config: TempoConfig | None = None
    tempo: TempoFetcher | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
