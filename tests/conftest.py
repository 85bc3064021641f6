"""
Pytest configuration and fixtures for stream-segments tests.

This module provides fake sources used to exercise short reads, source
failures and end-of-stream signalling.
"""

import io
from collections.abc import Callable

import pytest

# ============================================================================
# Fake sources
# ============================================================================


class TrickleSource:
    """A source that returns at most `step` bytes per read."""

    def __init__(self, data: bytes, step: int = 3) -> None:
        self._inner = io.BytesIO(data)
        self.step = step
        self.calls = 0

    def read(self, size: int) -> bytes:
        self.calls += 1
        return self._inner.read(min(size, self.step))


class FailingSource:
    """A source that yields `data` and then raises `error` on the next read."""

    def __init__(self, data: bytes, error: Exception) -> None:
        self._inner = io.BytesIO(data)
        self._error = error

    def read(self, size: int) -> bytes:
        chunk = self._inner.read(size)
        if not chunk:
            raise self._error
        return chunk


class EOFErrorSource:
    """A source that signals end of stream by raising EOFError."""

    def __init__(self, data: bytes) -> None:
        self._inner = io.BytesIO(data)

    def read(self, size: int) -> bytes:
        chunk = self._inner.read(size)
        if not chunk:
            raise EOFError
        return chunk


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def trickle() -> Callable[..., TrickleSource]:
    """Factory for sources that only return a few bytes per read."""
    return TrickleSource


@pytest.fixture
def failing() -> Callable[..., FailingSource]:
    """Factory for sources that fail after their data is exhausted."""
    return FailingSource


@pytest.fixture
def eof_raising() -> Callable[..., EOFErrorSource]:
    """Factory for sources that raise EOFError at end of stream."""
    return EOFErrorSource
