"""Aggregations over worklogs and batch outcomes used by the tool layer."""

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from mcp_tempo.models import BatchOutcome, TempoWorklog
from mcp_tempo.utils.units import seconds_to_hours


def summarize_worklogs(worklogs: Sequence[TempoWorklog]) -> dict[str, Any]:
    """Total hours overall and per issue."""
    seconds_by_issue: dict[str, int] = defaultdict(int)
    entries_by_issue: dict[str, int] = defaultdict(int)
    summaries: dict[str, str] = {}
    for worklog in worklogs:
        seconds_by_issue[worklog.issue_key] += worklog.time_spent_seconds
        entries_by_issue[worklog.issue_key] += 1
        summaries.setdefault(worklog.issue_key, worklog.issue_summary)

    return {
        "total_hours": seconds_to_hours(sum(w.time_spent_seconds for w in worklogs)),
        "count": len(worklogs),
        "by_issue": [
            {
                "issue_key": key,
                "issue_summary": summaries[key],
                "hours": seconds_to_hours(seconds),
                "entries": entries_by_issue[key],
            }
            for key, seconds in sorted(seconds_by_issue.items())
        ],
    }


def daily_totals(outcomes: Sequence[BatchOutcome]) -> dict[str, dict[str, float]]:
    """Hours of the successful outcomes, keyed by date then issue key."""
    totals: dict[str, dict[str, float]] = {}
    for outcome in outcomes:
        if not outcome.success:
            continue
        day = totals.setdefault(outcome.request.start_date, {})
        key = outcome.request.issue_key
        day[key] = round(day.get(key, 0) + outcome.request.hours, 2)
    return {date: dict(sorted(day.items())) for date, day in sorted(totals.items())}


def summarize_batch(outcomes: Sequence[BatchOutcome]) -> dict[str, Any]:
    """Counts and the hours successfully logged by a batch."""
    successful = [outcome for outcome in outcomes if outcome.success]
    return {
        "total_entries": len(outcomes),
        "successful": len(successful),
        "failed": len(outcomes) - len(successful),
        "total_hours": round(sum(o.request.hours for o in successful), 2),
    }
