"""Module for resolving issue keys to Jira issue ids."""

import logging

from mcp_tempo.exceptions import ProtocolError
from mcp_tempo.models import ResolvedIssue
from mcp_tempo.utils.urls import path_segment

from .client import TempoClient
from .constants import ISSUE_PATH

logger = logging.getLogger("mcp-tempo")


class IssuesMixin(TempoClient):
    """Mixin for issue resolution, backed by the expiring issue cache."""

    async def resolve_issue(self, issue_key: str) -> ResolvedIssue:
        """
        Resolve an issue key such as ``PROJ-123`` to its id and summary.

        Args:
            issue_key: The issue key

        Returns:
            A copy of the resolved issue

        Raises:
            ValueError: If the issue key is empty or not a single path segment
            NotFoundError: If Jira does not know the issue
        """
        if not issue_key:
            raise ValueError("Issue key is required")

        cached = self._issue_cache.get(issue_key)
        if cached is not None:
            logger.debug(f"Issue cache hit for {issue_key}")
            return cached.model_copy()

        data = await self._request(
            "GET",
            f"{ISSUE_PATH}/{path_segment(issue_key)}",
            params={"fields": "summary"},
            not_found=f"Issue {issue_key} not found. Please check the issue key.",
        )
        if not isinstance(data, dict) or not data.get("id"):
            raise ProtocolError(f"Unexpected response resolving issue {issue_key}")

        issue = ResolvedIssue.from_api_response(data, issue_key=issue_key)
        self._issue_cache.put(issue_key, issue)
        logger.debug(f"Resolved {issue_key} to id {issue.id}")
        return issue.model_copy()

    def get_cached_issues(self) -> list[ResolvedIssue]:
        """Copies of the issues resolved within the cache TTL, oldest first."""
        return [issue.model_copy() for issue in self._issue_cache.values()]
