"""
Issue model used to resolve issue keys to numeric ids.
"""

from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING


class ResolvedIssue(ApiModel):
    """
    An issue key resolved to the numeric id Tempo needs, plus its summary.
    """

    id: str
    key: str
    summary: str = EMPTY_STRING

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "ResolvedIssue":
        """
        Create a ResolvedIssue from a Jira ``issue`` response.

        Args:
            data: The issue data from the Jira API
            **kwargs: ``issue_key`` to use when the response carries no key

        Returns:
            A ResolvedIssue instance
        """
        fields = data.get("fields") or {}
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            key=str(data.get("key") or kwargs.get("issue_key", EMPTY_STRING)),
            summary=str(fields.get("summary") or EMPTY_STRING),
        )
