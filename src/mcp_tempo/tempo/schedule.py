"""Module for Tempo Core work schedule operations."""

import logging

from mcp_tempo.models import UserSchedule
from mcp_tempo.utils.dates import parse_date_ymd

from .constants import SCHEDULE_SEARCH_PATH
from .identity import IdentityMixin

logger = logging.getLogger("mcp-tempo")


class ScheduleMixin(IdentityMixin):
    """Mixin for reading the authenticated user's work schedule."""

    async def get_schedule(
        self, start_date: str, end_date: str | None = None
    ) -> UserSchedule:
        """
        Get the required working time per day for a date range.

        Args:
            start_date: First day (YYYY-MM-DD)
            end_date: Last day, inclusive (defaults to start_date)

        Returns:
            The schedule; empty when Tempo returns no schedule for the user
        """
        if not start_date:
            raise ValueError("Start date is required")
        end_date = end_date or start_date
        if parse_date_ymd(start_date) > parse_date_ymd(end_date):
            raise ValueError(f"Start date {start_date} is after end date {end_date}")

        current_user = await self.get_current_user()
        response = await self._request(
            "POST",
            SCHEDULE_SEARCH_PATH,
            data={"from": start_date, "to": end_date, "userKeys": [current_user]},
        )
        if not isinstance(response, list) or not response:
            logger.warning(f"No schedule returned for {start_date}..{end_date}")
            return UserSchedule()
        if not isinstance(response[0], dict):
            logger.warning("Schedule search returned an unexpected item")
            return UserSchedule()

        schedule = UserSchedule.from_api_response(response[0])
        logger.debug(
            f"Schedule {start_date}..{end_date}: {len(schedule.days)} days for {current_user}"
        )
        return schedule
