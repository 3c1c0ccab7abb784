"""Tempo API module for mcp_tempo.

This module provides the Tempo Timesheets client implementation.
"""

from .client import TempoClient
from .config import TempoConfig
from .identity import IdentityMixin
from .issues import IssuesMixin
from .schedule import ScheduleMixin
from .worklog import WorklogMixin


class TempoFetcher(WorklogMixin, ScheduleMixin):
    """
    The main Tempo client class providing access to all Tempo operations.

    This class inherits from mixins that provide specific functionality:
    - IssuesMixin: Issue key resolution with an expiring cache
    - IdentityMixin: Memoized lookup of the authenticated user
    - WorklogMixin: Worklog search, creation, deletion and batch creation
    - ScheduleMixin: Work schedule lookup
    """

    pass


__all__ = [
    "TempoFetcher",
    "TempoConfig",
    "TempoClient",
    "IdentityMixin",
    "IssuesMixin",
    "ScheduleMixin",
    "WorklogMixin",
]
