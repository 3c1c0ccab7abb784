"""Tempo FastMCP server instance and tool definitions."""

import json
import logging
from datetime import datetime, timezone
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_tempo.models import BulkWorklogEntry, WorklogCreateRequest
from mcp_tempo.models.tempo.worklog import MAX_HOURS, MIN_HOURS
from mcp_tempo.servers.dependencies import get_tempo_fetcher
from mcp_tempo.tempo.constants import MAX_BULK_ENTRIES
from mcp_tempo.tempo.summaries import daily_totals, summarize_batch, summarize_worklogs
from mcp_tempo.utils.decorators import check_write_access

logger = logging.getLogger("mcp-tempo.server.tempo")

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

tempo_mcp = FastMCP(
    name="Tempo MCP Service",
    instructions="Provides tools for logging and reviewing time in Tempo Timesheets.",
)


def _dumps(result: Any) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


@tempo_mcp.tool(tags={"tempo", "read"})
async def get_worklogs(
    ctx: Context,
    start_date: Annotated[
        str, Field(description="Start date in YYYY-MM-DD format", pattern=DATE_PATTERN)
    ],
    end_date: Annotated[
        str | None,
        Field(
            description="End date in YYYY-MM-DD format (optional, defaults to start_date)",
            pattern=DATE_PATTERN,
        ),
    ] = None,
    issue_key: Annotated[
        str | None,
        Field(description="Optional filter by specific issue key (e.g., 'PROJ-1234')"),
    ] = None,
) -> str:
    """Retrieve the authenticated user's worklogs for a date range.

    Args:
        ctx: The FastMCP context.
        start_date: First day of the range.
        end_date: Last day of the range, inclusive.
        issue_key: Optional issue to restrict the search to.

    Returns:
        JSON string with the worklogs, total hours and hours per issue.
    """
    tempo = await get_tempo_fetcher(ctx)
    worklogs = await tempo.search_worklogs(
        from_date=start_date, to_date=end_date or start_date, issue_key=issue_key
    )
    result = {
        "start_date": start_date,
        "end_date": end_date or start_date,
        "worklogs": [worklog.to_simplified_dict() for worklog in worklogs],
        **summarize_worklogs(worklogs),
    }
    if issue_key:
        result["issue_key"] = issue_key
    return _dumps(result)


@tempo_mcp.tool(tags={"tempo", "write"})
@check_write_access
async def post_worklog(
    ctx: Context,
    issue_key: Annotated[
        str, Field(description="Jira issue key (e.g., 'PROJ-1234')", min_length=1)
    ],
    hours: Annotated[
        float, Field(description="Hours worked (decimal)", ge=MIN_HOURS, le=MAX_HOURS)
    ],
    start_date: Annotated[
        str, Field(description="Start date in YYYY-MM-DD format", pattern=DATE_PATTERN)
    ],
    end_date: Annotated[
        str | None,
        Field(
            description="End date in YYYY-MM-DD format (optional, defaults to start_date)",
            pattern=DATE_PATTERN,
        ),
    ] = None,
    billable: Annotated[
        bool, Field(description="Whether the time is billable (default: true)")
    ] = True,
    description: Annotated[
        str | None, Field(description="Work description (optional)")
    ] = None,
) -> str:
    """Create a new worklog entry.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        hours: Hours worked.
        start_date: Day the work was done.
        end_date: Optional last day for multi-day entries.
        billable: Whether the time is billable.
        description: Optional work description.

    Returns:
        JSON string representing the created worklog.

    Raises:
        ValueError: If in read-only mode or Tempo client unavailable.
    """
    tempo = await get_tempo_fetcher(ctx)
    request = WorklogCreateRequest(
        issue_key=issue_key,
        hours=hours,
        start_date=start_date,
        end_date=end_date,
        billable=billable,
        description=description,
    )
    worklog = await tempo.post_worklog(request)
    result = {"message": "Worklog created successfully", "worklog": worklog.to_simplified_dict()}
    return _dumps(result)


@tempo_mcp.tool(tags={"tempo", "write"})
@check_write_access
async def bulk_post_worklogs(
    ctx: Context,
    worklogs: Annotated[
        list[BulkWorklogEntry],
        Field(
            description=(
                "Worklog entries to create, each with issue_key, hours, date "
                f"and an optional description (1 to {MAX_BULK_ENTRIES} entries)"
            ),
            min_length=1,
            max_length=MAX_BULK_ENTRIES,
        ),
    ],
    billable: Annotated[
        bool,
        Field(description="Whether the time is billable for all entries (default: true)"),
    ] = True,
) -> str:
    """Create multiple worklog entries concurrently.

    Entries are created independently: some may succeed while others fail,
    and every entry's outcome is reported.

    Args:
        ctx: The FastMCP context.
        worklogs: The entries to create.
        billable: Whether the time is billable.

    Returns:
        JSON string with per-entry results, a summary and daily totals.

    Raises:
        ValueError: If in read-only mode, or if every entry failed.
    """
    tempo = await get_tempo_fetcher(ctx)
    requests = [entry.to_request(billable=billable) for entry in worklogs]
    outcomes = await tempo.create_worklogs_batch(requests)

    result = {
        "results": [outcome.to_simplified_dict() for outcome in outcomes],
        "summary": summarize_batch(outcomes),
        "daily_totals": daily_totals(outcomes),
    }
    logger.debug(f"bulk_post_worklogs: {result['summary']}")
    if not any(outcome.success for outcome in outcomes):
        raise ValueError(f"All {len(outcomes)} worklog entries failed:\n{_dumps(result)}")
    return _dumps(result)


@tempo_mcp.tool(tags={"tempo", "write"})
@check_write_access
async def delete_worklog(
    ctx: Context,
    worklog_id: Annotated[
        str, Field(description="Tempo worklog ID to delete", pattern=r"^[0-9]+$")
    ],
) -> str:
    """Delete an existing worklog entry. This cannot be undone.

    Args:
        ctx: The FastMCP context.
        worklog_id: The worklog to delete.

    Returns:
        JSON string confirming the deletion.

    Raises:
        ValueError: If in read-only mode or Tempo client unavailable.
    """
    tempo = await get_tempo_fetcher(ctx)
    await tempo.delete_worklog(worklog_id)
    result = {
        "message": f"Worklog {worklog_id} deleted successfully",
        "worklog_id": worklog_id,
        "deleted_at": datetime.now(timezone.utc).isoformat(),
    }
    return _dumps(result)


@tempo_mcp.tool(tags={"tempo", "read"})
async def get_schedule(
    ctx: Context,
    start_date: Annotated[
        str, Field(description="Start date in YYYY-MM-DD format", pattern=DATE_PATTERN)
    ],
    end_date: Annotated[
        str | None,
        Field(
            description="End date in YYYY-MM-DD format (optional, defaults to start_date)",
            pattern=DATE_PATTERN,
        ),
    ] = None,
) -> str:
    """Retrieve the authenticated user's work schedule.

    Shows working and non-working days and the hours required on each, which
    helps to decide which days to fill before bulk logging.

    Args:
        ctx: The FastMCP context.
        start_date: First day of the range.
        end_date: Last day of the range, inclusive.

    Returns:
        JSON string with the schedule days and a summary.
    """
    tempo = await get_tempo_fetcher(ctx)
    schedule = await tempo.get_schedule(start_date, end_date or start_date)
    result = {
        "start_date": start_date,
        "end_date": end_date or start_date,
        **schedule.to_simplified_dict(),
    }
    return _dumps(result)


@tempo_mcp.prompt()
def worklog_summary(username: str, month: str, include_analysis: bool = False) -> str:
    """Generate a prompt for analyzing a user's worklogs over a month (YYYY-MM)."""
    text = (
        f"Analyze the worklog data for {username} in {month}. "
        "Use get_schedule and get_worklogs for that month, then report:\n"
        "- Total hours worked against the required hours\n"
        "- Distribution across projects and issues\n"
        "- Daily patterns\n"
        "- Missing working days or potential gaps"
    )
    if include_analysis:
        text += "\n\nInclude a detailed analysis with recommendations."
    return text


@tempo_mcp.resource(
    "tempo://issues/recent",
    name="Recent Issues",
    description="Issues resolved within the last few minutes, for quick reference",
    mime_type="application/json",
    tags={"tempo", "read"},
)
async def recent_issues(ctx: Context) -> str:
    """List the issues held in the issue cache, oldest first."""
    tempo = await get_tempo_fetcher(ctx)
    issues = tempo.get_cached_issues()
    return _dumps({"issues": [issue.to_simplified_dict() for issue in issues]})
