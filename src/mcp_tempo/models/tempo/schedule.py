"""
Tempo Core schedule models.
"""

from typing import Any

from pydantic import Field

from mcp_tempo.utils.units import seconds_to_hours

from ..base import ApiModel
from ..constants import EMPTY_STRING, UNKNOWN, WORKING_DAY


class ScheduleDay(ApiModel):
    """
    Required working time for one calendar day.
    """

    date: str
    required_seconds: int = 0
    type: str = UNKNOWN

    @property
    def is_working_day(self) -> bool:
        return self.type == WORKING_DAY

    @property
    def required_hours(self) -> float:
        return seconds_to_hours(self.required_seconds)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "ScheduleDay":
        return cls(
            date=str(data.get("date") or EMPTY_STRING)[:10],
            required_seconds=int(data.get("requiredSeconds") or 0),
            type=str(data.get("type") or UNKNOWN),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "required_hours": self.required_hours,
            "is_working_day": self.is_working_day,
            "type": "Working Day" if self.is_working_day else "Non-Working Day",
        }


class ScheduleSummary(ApiModel):
    """
    Aggregate figures for a list of schedule days.
    """

    total_days: int = 0
    working_days: int = 0
    non_working_days: int = 0
    total_required_hours: float = 0
    average_daily_hours: float = 0

    @classmethod
    def from_days(
        cls, days: list[ScheduleDay], required_seconds: int | None = None
    ) -> "ScheduleSummary":
        """
        Derive the summary from ``days``.

        Args:
            days: The schedule days
            required_seconds: Schedule-level total; defaults to the sum of the days

        Returns:
            A ScheduleSummary instance
        """
        working_days = sum(1 for day in days if day.is_working_day)
        if required_seconds is None:
            required_seconds = sum(day.required_seconds for day in days)
        total_required_hours = seconds_to_hours(required_seconds)
        average = (
            round(total_required_hours / working_days, 2) if working_days > 0 else 0
        )
        return cls(
            total_days=len(days),
            working_days=working_days,
            non_working_days=len(days) - working_days,
            total_required_hours=total_required_hours,
            average_daily_hours=average,
        )


class UserSchedule(ApiModel):
    """
    A user's schedule over a date range as returned by Tempo Core.
    """

    days: list[ScheduleDay] = Field(default_factory=list)
    required_seconds: int = 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "UserSchedule":
        schedule = (data or {}).get("schedule") or {}
        days = [
            ScheduleDay.from_api_response(day)
            for day in schedule.get("days") or []
            if isinstance(day, dict)
        ]
        required = schedule.get("requiredSeconds")
        return cls(
            days=days,
            required_seconds=(
                int(required)
                if required is not None
                else sum(day.required_seconds for day in days)
            ),
        )

    @property
    def summary(self) -> ScheduleSummary:
        return ScheduleSummary.from_days(self.days, self.required_seconds)

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "days": [day.to_simplified_dict() for day in self.days],
            "summary": self.summary.to_simplified_dict(),
        }
