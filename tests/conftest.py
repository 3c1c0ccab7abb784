"""
Root pytest configuration file for MCP Tempo tests.
"""

import pytest


class FakeClock:
    """Manually advanced monotonic clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """A clock that only moves when the test advances it."""
    return FakeClock()


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio, the event loop the server uses."""
    return "asyncio"
