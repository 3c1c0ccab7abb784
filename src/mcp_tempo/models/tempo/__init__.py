"""
Tempo data models for the MCP Tempo integration.
"""

from .issue import ResolvedIssue
from .schedule import ScheduleDay, ScheduleSummary, UserSchedule
from .worklog import (
    BatchOutcome,
    BulkWorklogEntry,
    TempoWorklog,
    WorklogCreatePayload,
    WorklogCreateRequest,
)

__all__ = [
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
