"""
Tempo worklog models.

This module provides Pydantic models for worklog creation requests, the
creation payload sent to Tempo, the worklog records read back, and the
per-item outcome of a batch creation.
"""

import logging
from typing import Any

from pydantic import Field, field_validator

from mcp_tempo.utils.dates import parse_date_ymd, started_date
from mcp_tempo.utils.units import seconds_to_hours

from ..base import ApiModel
from ..constants import EMPTY_STRING, TEMPO_DEFAULT_ID
from .issue import ResolvedIssue

logger = logging.getLogger(__name__)

MIN_HOURS = 0.1
MAX_HOURS = 24


def user_key(user: Any) -> str:
    """Reduce a Tempo worker string or a Jira user object to its key."""
    if isinstance(user, str):
        return user
    if isinstance(user, dict):
        for field in ("key", "name", "accountId", "emailAddress"):
            if isinstance(user.get(field), str):
                return user[field]
    return EMPTY_STRING


def user_identifiers(user: Any) -> set[str]:
    """All identifiers a Jira author object can be matched on."""
    if isinstance(user, str):
        return {user}
    if not isinstance(user, dict):
        return set()
    return {
        user[field]
        for field in ("key", "name", "accountId", "emailAddress")
        if isinstance(user.get(field), str)
    }


class WorklogCreateRequest(ApiModel):
    """
    A request to log ``hours`` against ``issue_key`` on ``start_date``.
    """

    issue_key: str = Field(min_length=1)
    hours: float = Field(ge=MIN_HOURS, le=MAX_HOURS)
    start_date: str
    end_date: str | None = None
    billable: bool = True
    description: str | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _check_date(cls, value: str | None) -> str | None:
        parse_date_ymd(value)
        return value

    @property
    def effective_end_date(self) -> str:
        return self.end_date or self.start_date

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "issue_key": self.issue_key,
            "date": self.start_date,
            "hours": self.hours,
        }
        if self.description:
            result["description"] = self.description
        return result


class BulkWorklogEntry(ApiModel):
    """
    One single-day entry of a bulk creation.
    """

    issue_key: str = Field(min_length=1, description="Jira issue key (e.g., 'PROJ-1234')")
    hours: float = Field(
        ge=MIN_HOURS, le=MAX_HOURS, description="Hours worked (decimal)"
    )
    date: str = Field(
        pattern=r"^\d{4}-\d{2}-\d{2}$", description="Date in YYYY-MM-DD format"
    )
    description: str | None = Field(
        default=None, description="Work description (optional)"
    )

    def to_request(self, billable: bool = True) -> WorklogCreateRequest:
        return WorklogCreateRequest(
            issue_key=self.issue_key,
            hours=self.hours,
            start_date=self.date,
            end_date=self.date,
            billable=billable,
            description=self.description,
        )


class WorklogCreatePayload(ApiModel):
    """
    The body Tempo Timesheets expects when creating a worklog.
    """

    attributes: dict[str, Any] = Field(default_factory=dict)
    billable_seconds: int
    time_spent_seconds: int
    worker: str
    started: str
    origin_task_id: str
    remaining_estimate: int | None = None
    end_date: str
    comment: str | None = None

    def to_api_payload(self) -> dict[str, Any]:
        """Render the payload with Tempo's camelCase field names."""
        payload: dict[str, Any] = {
            "attributes": self.attributes,
            "billableSeconds": self.billable_seconds,
            "timeSpentSeconds": self.time_spent_seconds,
            "worker": self.worker,
            "started": self.started,
            "originTaskId": self.origin_task_id,
            "remainingEstimate": self.remaining_estimate,
            "endDate": self.end_date,
        }
        if self.comment:
            payload["comment"] = self.comment
        return payload


class TempoWorklog(ApiModel):
    """
    Model representing a worklog entry read back from Tempo or Jira.
    """

    id: str = TEMPO_DEFAULT_ID
    issue_key: str = EMPTY_STRING
    issue_summary: str = EMPTY_STRING
    time_spent_seconds: int = 0
    billable_seconds: int = 0
    started: str = EMPTY_STRING
    worker: str = EMPTY_STRING
    attributes: dict[str, Any] = Field(default_factory=dict)
    time_spent: str = EMPTY_STRING
    comment: str = EMPTY_STRING

    @property
    def date(self) -> str:
        return started_date(self.started)

    @property
    def hours(self) -> float:
        return seconds_to_hours(self.time_spent_seconds)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "TempoWorklog":
        """
        Create a TempoWorklog from a Tempo Timesheets response item.

        Args:
            data: The worklog data from the Tempo API

        Returns:
            A TempoWorklog instance
        """
        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        # Newer Tempo versions report tempoWorklogId next to the legacy id
        worklog_id = data.get("tempoWorklogId") or data.get("id") or TEMPO_DEFAULT_ID
        issue = data.get("issue") or {}

        return cls(
            id=str(worklog_id),
            issue_key=str(issue.get("key", EMPTY_STRING)),
            issue_summary=str(issue.get("summary") or EMPTY_STRING),
            time_spent_seconds=_as_int(data.get("timeSpentSeconds")),
            billable_seconds=_as_int(data.get("billableSeconds")),
            started=str(data.get("started") or EMPTY_STRING),
            worker=user_key(data.get("worker")),
            attributes=data.get("attributes") or {},
            time_spent=str(data.get("timeSpent") or EMPTY_STRING),
            comment=str(data.get("comment") or EMPTY_STRING),
        )

    @classmethod
    def from_jira_worklog(
        cls, data: dict[str, Any], issue: ResolvedIssue
    ) -> "TempoWorklog":
        """
        Create a TempoWorklog from a Jira issue worklog entry.

        Jira has no billable notion, so all time is reported as billable.
        """
        time_spent_seconds = _as_int(data.get("timeSpentSeconds"))
        return cls(
            id=str(data.get("id") or TEMPO_DEFAULT_ID),
            issue_key=issue.key,
            issue_summary=issue.summary,
            time_spent_seconds=time_spent_seconds,
            billable_seconds=time_spent_seconds,
            started=str(data.get("started") or EMPTY_STRING),
            worker=user_key(data.get("author")),
            time_spent=str(data.get("timeSpent") or EMPTY_STRING),
            comment=str(data.get("comment") or EMPTY_STRING),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        result = {
            "id": self.id,
            "issue_key": self.issue_key,
            "issue_summary": self.issue_summary,
            "date": self.date,
            "hours": self.hours,
            "time_spent_seconds": self.time_spent_seconds,
            "billable_seconds": self.billable_seconds,
            "started": self.started,
            "worker": self.worker,
            "time_spent": self.time_spent,
        }
        if self.comment:
            result["comment"] = self.comment
        if self.attributes:
            result["attributes"] = self.attributes
        return result


class BatchOutcome(ApiModel):
    """
    Result of one item of a batch creation.
    """

    success: bool
    request: WorklogCreateRequest
    worklog: TempoWorklog | None = None
    error: str | None = None

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "success": self.success,
            **self.request.to_simplified_dict(),
        }
        if self.worklog is not None:
            result["worklog"] = self.worklog.to_simplified_dict()
        if self.error is not None:
            result["error"] = self.error
        return result


def _as_int(value: Any) -> int:
    try:
        return int(value) if value is not None else 0
    except (ValueError, TypeError):
        return 0
