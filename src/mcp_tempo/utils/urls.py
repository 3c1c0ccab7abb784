"""URL-related utility functions for MCP Tempo."""

from urllib.parse import quote


def path_segment(value: str) -> str:
    """Encode a caller supplied value as exactly one URL path segment.

    Slashes and other reserved characters are percent-encoded, so the value
    can never move the request onto a different endpoint.

    Args:
        value: The raw value, such as an issue key

    Returns:
        The encoded segment

    Raises:
        ValueError: If the value is empty or a relative path reference
    """
    if value in ("", ".", ".."):
        raise ValueError(f"Invalid path segment: {value!r}")
    return quote(value, safe="")
