"""Tests for the environment-driven server settings."""

import os
from unittest.mock import patch

import pytest

from mcp_tempo.utils.environment import (
    get_enabled_tools,
    is_read_only_mode,
    is_tempo_configured,
    should_include_tool,
)


@pytest.mark.parametrize(
    "value,expected",
    [("true", True), ("1", True), ("YES", True), ("on", True), ("false", False), ("", False)],
)
def test_is_read_only_mode(value, expected):
    with patch.dict(os.environ, {"READ_ONLY_MODE": value}, clear=True):
        assert is_read_only_mode() is expected


def test_is_read_only_mode_default():
    with patch.dict(os.environ, {}, clear=True):
        assert is_read_only_mode() is False


def test_is_tempo_configured():
    with patch.dict(
        os.environ,
        {"TEMPO_BASE_URL": "https://jira.example.com", "TEMPO_PAT": "token"},
        clear=True,
    ):
        assert is_tempo_configured() is True
    with patch.dict(
        os.environ, {"TEMPO_BASE_URL": "https://jira.example.com"}, clear=True
    ):
        assert is_tempo_configured() is False


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, None),
        ("", None),
        (" , ", None),
        ("tempo_get_worklogs", ["tempo_get_worklogs"]),
        (
            "tempo_get_worklogs, tempo_get_schedule ,",
            ["tempo_get_worklogs", "tempo_get_schedule"],
        ),
    ],
)
def test_get_enabled_tools(value, expected):
    env = {} if value is None else {"ENABLED_TOOLS": value}
    with patch.dict(os.environ, env, clear=True):
        assert get_enabled_tools() == expected


def test_should_include_tool():
    assert should_include_tool("tempo_get_worklogs", None) is True
    assert should_include_tool("tempo_get_worklogs", ["tempo_get_worklogs"]) is True
    assert should_include_tool("tempo_delete_worklog", ["tempo_get_worklogs"]) is False
