"""
Test fixtures for model testing.
"""

from copy import deepcopy
from typing import Any

import pytest

from tests.fixtures.tempo_mocks import (
    MOCK_ISSUE_RESPONSES,
    MOCK_ISSUE_WORKLOGS_RESPONSE,
    MOCK_SCHEDULE_RESPONSE,
    MOCK_TEMPO_WORKLOG,
)


@pytest.fixture
def jira_issue_data() -> dict[str, Any]:
    """Return mock Jira issue data."""
    return deepcopy(MOCK_ISSUE_RESPONSES["PROJ-1"])


@pytest.fixture
def jira_worklog_data() -> dict[str, Any]:
    """Return one mock Jira issue worklog entry."""
    return deepcopy(MOCK_ISSUE_WORKLOGS_RESPONSE["worklogs"][0])


@pytest.fixture
def tempo_worklog_data() -> dict[str, Any]:
    """Return a mock Tempo worklog."""
    return deepcopy(MOCK_TEMPO_WORKLOG)


@pytest.fixture
def tempo_schedule_data() -> dict[str, Any]:
    """Return a mock Tempo Core schedule item."""
    return deepcopy(MOCK_SCHEDULE_RESPONSE[0])
