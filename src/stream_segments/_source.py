"""
Adapters between byte producers and the Readable capability.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from stream_segments._buffer import ByteBuffer
from stream_segments._errors import SourceReadError
from stream_segments._types import Readable

logger = logging.getLogger(__name__)


class IteratorSource:
    """
    Expose an iterable of byte chunks as a Readable.

    Chunks are pulled lazily; the unread tail of a chunk is kept for the next
    call, so chunk boundaries never leak into `read()` results. This is how
    an httpx response body (`response.iter_bytes()`) becomes a segment
    source.
    """

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._pending = ByteBuffer()
        self._exhausted = False

    def read(self, size: int = -1, /) -> bytes:
        if size < 0:
            while not self._exhausted:
                self._pull()
            return self._pending.take_all()

        while len(self._pending) < size and not self._exhausted:
            self._pull()
        return self._pending.take(size)

    def _pull(self) -> None:
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._exhausted = True
            return
        self._pending.append(chunk)


def read_from(source: Readable, size: int) -> bytes:
    """
    Perform one read against a source.

    EOFError from the source is treated as end of stream. Any other exception
    is wrapped in SourceReadError. A conforming source never returns more
    than `size` bytes; any excess is dropped and logged at DEBUG.

    Args:
        source: The source to read from
        size: Maximum number of bytes to read

    Returns:
        At most `size` bytes; b"" at end of stream

    Raises:
        SourceReadError: If the source fails
    """
    try:
        data = source.read(size)
    except EOFError:
        return b""
    except Exception as e:
        raise SourceReadError(cause=e) from e

    if not data:
        return b""
    if len(data) > size:
        # a source must never push a segment past its cap
        logger.debug(
            "Source returned %d bytes for a %d byte read; dropping %d",
            len(data),
            size,
            len(data) - size,
        )
        return bytes(data[:size])
    return bytes(data)
