"""Module for resolving the authenticated Jira user."""

import logging

from mcp_tempo.exceptions import (
    AuthenticationError,
    AuthorizationError,
    RateLimitError,
    TempoError,
    TransportError,
)
from mcp_tempo.models.tempo.worklog import user_key

from .client import TempoClient
from .constants import MYSELF_PATH

logger = logging.getLogger("mcp-tempo")


class IdentityMixin(TempoClient):
    """Mixin resolving the user every worklog operation acts on behalf of."""

    async def get_current_user(self) -> str:
        """
        Get the key of the authenticated user.

        The first call asks Jira who the credential belongs to; the answer is
        kept for the lifetime of this client.

        Returns:
            The user key Tempo uses as ``worker``

        Raises:
            AuthenticationError: If the credential is rejected or the answer
                carries no usable user key
            AuthorizationError, RateLimitError, TransportError: Propagated
                unchanged
        """
        if self._current_user is not None:
            return self._current_user

        try:
            myself = await self._request("GET", MYSELF_PATH)
        except (
            AuthenticationError,
            AuthorizationError,
            RateLimitError,
            TransportError,
        ):
            raise
        except TempoError as e:
            logger.error(f"Error getting current user: {e}")
            raise AuthenticationError(f"Failed to get current user: {e}") from e

        current_user = user_key(myself) if isinstance(myself, dict) else ""
        if not current_user:
            error_msg = "Unable to determine current user from API response"
            logger.error(f"{error_msg}: {str(myself)[:200]}")
            raise AuthenticationError(error_msg)

        self._current_user = current_user
        logger.info(f"Authenticated as {current_user}")
        return current_user
