"""Base client module for Tempo API interactions."""

import asyncio
import logging
import time
from typing import Any, Literal

from atlassian import Jira
from requests import Response, Session
from requests.adapters import HTTPAdapter
from requests.exceptions import HTTPError, RequestException

from mcp_tempo.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    TempoError,
    TransportError,
)
from mcp_tempo.models import ResolvedIssue
from mcp_tempo.utils.cache import Clock, ExpiringCache

from .config import TempoConfig
from .constants import MAX_CONCURRENT_REQUESTS

logger = logging.getLogger("mcp-tempo")

HttpMethod = Literal["GET", "POST", "DELETE"]


def _api_error_message(response: Response | None) -> str | None:
    """Pull the human readable message out of a Tempo or Jira error body."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    if body.get("message"):
        return str(body["message"])
    messages = [str(m) for m in body.get("errorMessages") or [] if m]
    errors = body.get("errors")
    if isinstance(errors, dict):
        messages.extend(str(v) for v in errors.values() if v)
    return "; ".join(messages) or None


class TempoClient:
    """Base client for Tempo API interactions.

    Owns the Jira REST client, the issue cache and the memoized identity.
    The blocking Jira calls run off the event loop, at most
    ``MAX_CONCURRENT_REQUESTS`` at a time, so a coroutine awaiting one remote
    call never blocks its siblings.
    """

    _current_user: str | None

    config: TempoConfig

    def __init__(
        self, config: TempoConfig | None = None, clock: Clock = time.monotonic
    ) -> None:
        """Initialize the Tempo client with configuration options.

        Args:
            config: Optional configuration object (will use env vars if not provided)
            clock: Monotonic clock in seconds, used for cache expiry

        Raises:
            ValueError: If configuration is invalid or required credentials are missing
        """
        self.config = config or TempoConfig.from_env()

        # One pooled connection per concurrent call
        session = Session()
        adapter = HTTPAdapter(pool_maxsize=MAX_CONCURRENT_REQUESTS)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        if self.config.proxies:
            session.proxies.update(self.config.proxies)

        self.jira = Jira(
            url=self.config.url,
            token=self.config.personal_token,
            session=session,
            cloud=False,
            verify_ssl=self.config.ssl_verify,
            timeout=self.config.timeout,
        )
        if not self.config.ssl_verify:
            logger.warning(
                "Tempo SSL verification disabled. This is insecure and should "
                "only be used in testing environments."
            )

        self._throttle = asyncio.Semaphore(MAX_CONCURRENT_REQUESTS)
        self._issue_cache: ExpiringCache[ResolvedIssue] = ExpiringCache(clock=clock)
        self._current_user = None

    def close(self) -> None:
        """Release the pooled connections of the HTTP session."""
        self.jira.close()

    def _url(self, path: str) -> str:
        return f"{self.config.url.rstrip('/')}/{path.lstrip('/')}"

    def _send(
        self,
        method: HttpMethod,
        path: str,
        data: dict[str, Any] | None,
        params: dict[str, Any] | None,
    ) -> Any:
        if method == "GET":
            return self.jira.get(path, params=params)
        if method == "POST":
            return self.jira.post(path, data=data, params=params)
        return self.jira.delete(path, params=params)

    async def _request(
        self,
        method: HttpMethod,
        path: str,
        *,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        not_found: str | None = None,
    ) -> Any:
        """Perform one remote call and normalize any failure.

        Args:
            method: HTTP method
            path: Path relative to the configured base URL
            data: JSON body for POST requests
            params: Query parameters
            not_found: Message for a NotFoundError when the server answers 404;
                without it a 404 is treated like any other failure

        Returns:
            The decoded JSON response (None for empty bodies)

        Raises:
            TempoError: One subclass per failure kind, never a raw transport error
        """
        logger.debug(f"{method} {self._url(path)}")
        try:
            async with self._throttle:
                return await asyncio.to_thread(self._send, method, path, data, params)
        except HTTPError as http_err:
            raise self._normalize_http_error(
                http_err, method, path, not_found
            ) from http_err
        except RequestException as e:
            url = self._url(path)
            logger.error(f"Transport failure on {method} {url}: {e}")
            raise TransportError(str(e), method, url) from e

    def _normalize_http_error(
        self,
        http_err: HTTPError,
        method: str,
        path: str,
        not_found: str | None,
    ) -> TempoError:
        response = http_err.response
        status = response.status_code if response is not None else None
        url = self._url(path)
        logger.debug(f"{method} {url} failed with status {status}: {http_err}")

        if status == 401:
            return AuthenticationError(
                "Authentication failed. Please check your Personal Access Token."
            )
        if status == 403:
            return AuthorizationError(
                "Access forbidden. Please check your permissions in Jira/Tempo."
            )
        if status == 429:
            return RateLimitError("Rate limit exceeded. Please try again later.")
        if status == 404 and not_found:
            return NotFoundError(not_found)

        message = _api_error_message(response)
        if message:
            return ApiError(f"Tempo API Error: {message}", status_code=status)
        return TransportError(str(http_err) or "Request failed", method, url, status)
