"""Module for Tempo worklog operations."""

import asyncio
import logging
from collections.abc import Sequence

from mcp_tempo.exceptions import ProtocolError
from mcp_tempo.models import (
    BatchOutcome,
    ResolvedIssue,
    TempoWorklog,
    WorklogCreatePayload,
    WorklogCreateRequest,
)
from mcp_tempo.models.tempo.worklog import user_identifiers
from mcp_tempo.utils.dates import in_date_range, parse_date_ymd, to_tempo_datetime
from mcp_tempo.utils.units import hours_to_seconds
from mcp_tempo.utils.urls import path_segment

from .constants import ISSUE_PATH, WORKLOG_SEARCH_PATH, WORKLOGS_PATH
from .identity import IdentityMixin
from .issues import IssuesMixin

logger = logging.getLogger("mcp-tempo")


class WorklogMixin(IssuesMixin, IdentityMixin):
    """Mixin for Tempo worklog search, creation and deletion."""

    async def search_worklogs(
        self,
        from_date: str,
        to_date: str | None = None,
        issue_key: str | None = None,
    ) -> list[TempoWorklog]:
        """
        Get the authenticated user's worklogs within a date range.

        With an issue key the issue's Jira worklogs are read and filtered
        here; without one Tempo's search endpoint filters server-side. Both
        paths return only the caller's entries dated within
        ``[from_date, to_date]``, each carrying the issue summary.

        Args:
            from_date: First day (YYYY-MM-DD)
            to_date: Last day, inclusive (defaults to from_date)
            issue_key: Optional issue to restrict the search to

        Returns:
            List of worklogs

        Raises:
            ValueError: If the dates are invalid or reversed
        """
        if not from_date:
            raise ValueError("Start date is required")
        to_date = to_date or from_date
        if parse_date_ymd(from_date) > parse_date_ymd(to_date):
            raise ValueError(f"Start date {from_date} is after end date {to_date}")

        current_user = await self.get_current_user()

        if issue_key:
            return await self._search_issue_worklogs(
                issue_key, from_date, to_date, current_user
            )

        response = await self._request(
            "POST",
            WORKLOG_SEARCH_PATH,
            data={"from": from_date, "to": to_date, "worker": [current_user]},
        )
        if not isinstance(response, list):
            logger.warning(
                f"Worklog search returned {type(response).__name__}, expected a list"
            )
            return []

        worklogs = [
            TempoWorklog.from_api_response(item)
            for item in response
            if isinstance(item, dict)
        ]
        result = [
            worklog
            for worklog in worklogs
            if in_date_range(worklog.started, from_date, to_date)
            and worklog.worker == current_user
        ]
        logger.debug(
            f"Worklog search {from_date}..{to_date}: {len(result)} of {len(worklogs)} kept"
        )
        return result

    async def _search_issue_worklogs(
        self, issue_key: str, from_date: str, to_date: str, current_user: str
    ) -> list[TempoWorklog]:
        issue = await self.resolve_issue(issue_key)
        response = await self._request(
            "GET",
            f"{ISSUE_PATH}/{path_segment(issue.key)}/worklog",
            not_found=f"Issue {issue_key} not found or its worklogs are not visible.",
        )
        entries = response.get("worklogs") if isinstance(response, dict) else None
        if not isinstance(entries, list):
            return []

        result = [
            TempoWorklog.from_jira_worklog(entry, issue)
            for entry in entries
            if isinstance(entry, dict)
            and current_user in user_identifiers(entry.get("author"))
            and in_date_range(entry.get("started"), from_date, to_date)
        ]
        for worklog in result:
            worklog.worker = current_user
        logger.debug(
            f"Issue {issue_key} worklogs: {len(result)} of {len(entries)} belong to "
            f"{current_user} in {from_date}..{to_date}"
        )
        return result

    def _payload_for(
        self, request: WorklogCreateRequest, issue: ResolvedIssue, worker: str
    ) -> WorklogCreatePayload:
        time_spent_seconds = hours_to_seconds(request.hours)
        return WorklogCreatePayload(
            billable_seconds=time_spent_seconds if request.billable else 0,
            time_spent_seconds=time_spent_seconds,
            worker=worker,
            started=to_tempo_datetime(request.start_date),
            origin_task_id=issue.id,
            end_date=to_tempo_datetime(request.effective_end_date),
            comment=request.description or None,
        )

    async def build_worklog_payload(
        self, request: WorklogCreateRequest
    ) -> WorklogCreatePayload:
        """
        Build the Tempo creation payload for ``request``.

        The issue key is resolved to its numeric id and the authenticated
        user becomes the worker.
        """
        issue = await self.resolve_issue(request.issue_key)
        worker = await self.get_current_user()
        return self._payload_for(request, issue, worker)

    async def create_worklog(self, payload: WorklogCreatePayload) -> TempoWorklog:
        """
        Submit a creation payload.

        Tempo answers with a list holding the single created worklog.

        Raises:
            ProtocolError: If the response is not a non-empty list
        """
        response = await self._request(
            "POST", WORKLOGS_PATH, data=payload.to_api_payload()
        )
        if not isinstance(response, list) or not response:
            raise ProtocolError("Unexpected response format from Tempo API")
        if not isinstance(response[0], dict):
            raise ProtocolError("Unexpected worklog format from Tempo API")
        return TempoWorklog.from_api_response(response[0])

    async def post_worklog(self, request: WorklogCreateRequest) -> TempoWorklog:
        """Create one worklog from a request."""
        payload = await self.build_worklog_payload(request)
        worklog = await self.create_worklog(payload)
        logger.info(
            f"Logged {request.hours}h on {request.issue_key} for {request.start_date}"
        )
        return worklog

    async def delete_worklog(self, worklog_id: str) -> None:
        """
        Delete a worklog.

        Raises:
            ValueError: If the id is empty or not numeric
            NotFoundError: If the worklog does not exist
        """
        if not worklog_id:
            raise ValueError("Worklog ID is required")
        # Tempo worklog ids are plain integers
        if not (worklog_id.isascii() and worklog_id.isdigit()):
            raise ValueError(f"Worklog ID must be numeric, got {worklog_id!r}")
        await self._request(
            "DELETE",
            f"{WORKLOGS_PATH}{path_segment(worklog_id)}",
            not_found=f"Worklog {worklog_id} not found.",
        )
        logger.info(f"Deleted worklog {worklog_id}")

    async def create_worklogs_batch(
        self, requests: Sequence[WorklogCreateRequest]
    ) -> list[BatchOutcome]:
        """
        Create many worklogs concurrently.

        Each distinct issue key is resolved once, then all creations run
        concurrently. A failing item is reported in its outcome and never
        stops the other items.

        Args:
            requests: The worklogs to create

        Returns:
            One outcome per request, in request order
        """
        if not requests:
            return []

        try:
            worker = await self.get_current_user()
        except Exception as e:  # noqa: BLE001 - reported per item
            logger.error(f"Batch of {len(requests)} aborted, no identity: {e}")
            return [
                BatchOutcome(success=False, error=str(e), request=request)
                for request in requests
            ]

        issue_keys = list(dict.fromkeys(request.issue_key for request in requests))
        resolutions = await asyncio.gather(
            *(self.resolve_issue(key) for key in issue_keys), return_exceptions=True
        )
        issues = dict(zip(issue_keys, resolutions, strict=True))

        async def create_one(request: WorklogCreateRequest) -> TempoWorklog:
            issue = issues[request.issue_key]
            if isinstance(issue, BaseException):
                raise issue
            return await self.create_worklog(
                self._payload_for(request, issue, worker)
            )

        results = await asyncio.gather(
            *(create_one(request) for request in requests), return_exceptions=True
        )

        outcomes = []
        for request, result in zip(requests, results, strict=True):
            if isinstance(result, TempoWorklog):
                outcomes.append(
                    BatchOutcome(success=True, worklog=result, request=request)
                )
            elif isinstance(result, Exception):
                outcomes.append(
                    BatchOutcome(success=False, error=str(result), request=request)
                )
            else:
                raise result

        failed = sum(1 for outcome in outcomes if not outcome.success)
        logger.info(
            f"Batch created {len(outcomes) - failed} of {len(outcomes)} worklogs"
        )
        return outcomes
