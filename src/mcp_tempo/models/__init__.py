"""
Pydantic models for Tempo and Jira API responses.
"""

from .base import ApiModel
from .tempo import (
    BatchOutcome,
    BulkWorklogEntry,
    ResolvedIssue,
    ScheduleDay,
    ScheduleSummary,
    TempoWorklog,
    UserSchedule,
    WorklogCreatePayload,
    WorklogCreateRequest,
)

__all__ = [
    "ApiModel",
    "ResolvedIssue",
    "WorklogCreateRequest",
    "WorklogCreatePayload",
    "TempoWorklog",
    "BatchOutcome",
    "BulkWorklogEntry",
    "ScheduleDay",
    "ScheduleSummary",
    "UserSchedule",
]
