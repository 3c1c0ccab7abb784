"""Exceptions raised by the Tempo client.

Every failure coming back from the remote API is mapped onto exactly one of
these classes in ``TempoClient._request``.
"""


class TempoError(Exception):
    """Base class for all Tempo client errors."""


class NotFoundError(TempoError):
    """The referenced issue or worklog does not exist."""


class AuthenticationError(TempoError):
    """The credential is missing, invalid or no identity could be resolved."""


class AuthorizationError(TempoError):
    """The credential lacks permission for the requested operation."""


class RateLimitError(TempoError):
    """The remote system throttled the request."""


class ApiError(TempoError):
    """The remote system reported a structured error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(TempoError):
    """A response did not have the documented shape."""


class TransportError(TempoError):
    """Any other transport failure, with request details for diagnostics."""

    def __init__(
        self,
        message: str,
        method: str,
        url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            f"{message} ({method} {url} returned {status_code or 'no response'})"
        )
        self.method = method
        self.url = url
        self.status_code = status_code
