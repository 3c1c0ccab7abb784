"""Test fixtures for Tempo unit tests."""

import itertools
import os
from copy import deepcopy
from unittest.mock import MagicMock, patch

import pytest

from mcp_tempo.tempo import TempoFetcher
from mcp_tempo.tempo.config import TempoConfig
from mcp_tempo.tempo.constants import (
    ISSUE_PATH,
    MYSELF_PATH,
    SCHEDULE_SEARCH_PATH,
    WORKLOG_SEARCH_PATH,
    WORKLOGS_PATH,
)
from tests.fixtures.tempo_mocks import (
    MOCK_ISSUE_RESPONSES,
    MOCK_ISSUE_WORKLOGS_RESPONSE,
    MOCK_MYSELF_RESPONSE,
    MOCK_SCHEDULE_RESPONSE,
    MOCK_TEMPO_SEARCH_RESPONSE,
    make_http_error,
)

BASE_URL = "https://jira.example.com"


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(
        os.environ,
        {
            "TEMPO_BASE_URL": BASE_URL,
            "TEMPO_PAT": "test-personal-token",
        },
        clear=True,
    ):
        yield


@pytest.fixture
def mock_config():
    """Create a TempoConfig instance for a test server."""
    return TempoConfig(
        url=BASE_URL,
        personal_token="test-personal-token",
    )


def _created_worklog(data, worklog_id):
    issue = next(
        issue
        for issue in MOCK_ISSUE_RESPONSES.values()
        if issue["id"] == data["originTaskId"]
    )
    return {
        "tempoWorklogId": worklog_id,
        "billableSeconds": data["billableSeconds"],
        "timeSpentSeconds": data["timeSpentSeconds"],
        "issue": {
            "key": issue["key"],
            "id": int(issue["id"]),
            "summary": issue["fields"]["summary"],
        },
        "comment": data.get("comment", ""),
        "started": data["started"].replace("T", " "),
        "worker": data["worker"],
        "attributes": data["attributes"],
    }


@pytest.fixture
def mock_tempo_api():
    """Fake ``atlassian.Jira`` client whose verbs are routed by request path."""
    mock_api = MagicMock()
    worklog_ids = itertools.count(6001)

    def mock_get(path, params=None):
        if path == MYSELF_PATH:
            return deepcopy(MOCK_MYSELF_RESPONSE)
        if path.startswith(f"{ISSUE_PATH}/") and path.endswith("/worklog"):
            return deepcopy(MOCK_ISSUE_WORKLOGS_RESPONSE)
        if path.startswith(f"{ISSUE_PATH}/"):
            issue_key = path.rsplit("/", 1)[1]
            if issue_key in MOCK_ISSUE_RESPONSES:
                return deepcopy(MOCK_ISSUE_RESPONSES[issue_key])
            raise make_http_error(
                404, {"errorMessages": ["Issue Does Not Exist"], "errors": {}}
            )
        raise AssertionError(f"Unexpected GET {path}")

    def mock_post(path, data=None, params=None):
        if path == WORKLOGS_PATH:
            return [_created_worklog(data, next(worklog_ids))]
        if path == WORKLOG_SEARCH_PATH:
            return deepcopy(MOCK_TEMPO_SEARCH_RESPONSE)
        if path == SCHEDULE_SEARCH_PATH:
            return deepcopy(MOCK_SCHEDULE_RESPONSE)
        raise AssertionError(f"Unexpected POST {path}")

    mock_api.get.side_effect = mock_get
    mock_api.post.side_effect = mock_post
    mock_api.delete.return_value = None
    yield mock_api


@pytest.fixture
def tempo_fetcher(mock_config, mock_tempo_api, fake_clock):
    """Create a TempoFetcher backed by the fake Jira client."""
    with patch("mcp_tempo.tempo.client.Jira", return_value=mock_tempo_api):
        fetcher = TempoFetcher(config=mock_config, clock=fake_clock)
        yield fetcher
        fetcher.close()
