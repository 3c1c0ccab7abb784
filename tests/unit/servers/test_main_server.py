"""Tests for the main MCP server lifespan, tool filtering and health check."""

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from fastmcp import Client
from fastmcp.client import FastMCPTransport
from starlette.requests import Request

from mcp_tempo.servers.main import health_check, main_lifespan, main_mcp
from mcp_tempo.tempo import TempoFetcher

ALL_TOOLS = {
    "tempo_get_worklogs",
    "tempo_post_worklog",
    "tempo_bulk_post_worklogs",
    "tempo_delete_worklog",
    "tempo_get_schedule",
}
READ_TOOLS = {"tempo_get_worklogs", "tempo_get_schedule"}

TEMPO_ENV = {
    "TEMPO_BASE_URL": "https://jira.example.com",
    "TEMPO_PAT": "test-personal-token",
}


async def _listed_tool_names() -> set[str]:
    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        tools = await client.list_tools()
    return {tool.name for tool in tools}


class TestMainLifespan:
    """Tests for the server lifespan."""

    @pytest.mark.anyio
    async def test_creates_fetcher_when_configured(self):
        with patch.dict(os.environ, TEMPO_ENV, clear=True):
            async with main_lifespan(main_mcp) as state:
                app_context = state["app_lifespan_context"]
                assert isinstance(app_context.tempo, TempoFetcher)
                assert app_context.full_tempo_config.url == "https://jira.example.com"
                assert app_context.read_only is False
                assert app_context.enabled_tools is None

    @pytest.mark.anyio
    async def test_no_fetcher_without_configuration(self):
        with patch.dict(os.environ, {}, clear=True):
            async with main_lifespan(main_mcp) as state:
                app_context = state["app_lifespan_context"]
                assert app_context.tempo is None
                assert app_context.full_tempo_config is None

    @pytest.mark.anyio
    async def test_invalid_configuration_is_logged(self, caplog):
        env = {**TEMPO_ENV, "TEMPO_TIMEOUT": "-5"}
        with patch.dict(os.environ, env, clear=True):
            async with main_lifespan(main_mcp) as state:
                assert state["app_lifespan_context"].tempo is None
        assert "Failed to load Tempo configuration" in caplog.text

    @pytest.mark.anyio
    async def test_reads_server_settings(self):
        env = {
            **TEMPO_ENV,
            "READ_ONLY_MODE": "true",
            "ENABLED_TOOLS": "tempo_get_worklogs,tempo_get_schedule",
        }
        with patch.dict(os.environ, env, clear=True):
            async with main_lifespan(main_mcp) as state:
                app_context = state["app_lifespan_context"]
                assert app_context.read_only is True
                assert app_context.enabled_tools == [
                    "tempo_get_worklogs",
                    "tempo_get_schedule",
                ]

    @pytest.mark.anyio
    async def test_closes_fetcher_on_shutdown(self):
        with patch.dict(os.environ, TEMPO_ENV, clear=True):
            with patch.object(TempoFetcher, "close") as mock_close:
                async with main_lifespan(main_mcp):
                    mock_close.assert_not_called()
        mock_close.assert_called_once_with()


class TestToolFiltering:
    """Tests for the tools/list filtering middleware."""

    @pytest.mark.anyio
    async def test_all_tools_listed(self):
        with patch.dict(os.environ, TEMPO_ENV, clear=True):
            assert await _listed_tool_names() == ALL_TOOLS

    @pytest.mark.anyio
    async def test_read_only_hides_write_tools(self):
        env = {**TEMPO_ENV, "READ_ONLY_MODE": "true"}
        with patch.dict(os.environ, env, clear=True):
            assert await _listed_tool_names() == READ_TOOLS

    @pytest.mark.anyio
    async def test_enabled_tools_filter(self):
        env = {**TEMPO_ENV, "ENABLED_TOOLS": "tempo_get_schedule, tempo_post_worklog"}
        with patch.dict(os.environ, env, clear=True):
            assert await _listed_tool_names() == {
                "tempo_get_schedule",
                "tempo_post_worklog",
            }

    @pytest.mark.anyio
    async def test_enabled_tools_and_read_only_combine(self):
        env = {
            **TEMPO_ENV,
            "READ_ONLY_MODE": "true",
            "ENABLED_TOOLS": "tempo_get_schedule,tempo_post_worklog",
        }
        with patch.dict(os.environ, env, clear=True):
            assert await _listed_tool_names() == {"tempo_get_schedule"}

    @pytest.mark.anyio
    async def test_tempo_tools_hidden_without_configuration(self):
        with patch.dict(os.environ, {}, clear=True):
            assert await _listed_tool_names() == set()


@pytest.mark.anyio
async def test_health_check():
    response = await health_check(MagicMock(spec=Request))
    assert response.status_code == 200
    assert json.loads(response.body) == {"status": "ok"}
