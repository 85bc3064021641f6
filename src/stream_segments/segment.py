"""
StreamSegment: a bounded, eagerly-materialized view over a byte stream.

A segment drains its source once, synchronously, inside the constructor.
Every later read is served from that private copy, so a segment can be
handed to another thread while the original source is reused elsewhere.
"""

from __future__ import annotations

import contextlib
import io
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from stream_segments._buffer import ByteBuffer
from stream_segments._errors import (
    EndOfStreamError,
    SourceReadError,
    StreamSegmentError,
)
from stream_segments._source import IteratorSource, read_from
from stream_segments._types import (
    LINE_CHUNK_SIZE,
    MAX_SEGMENT_LENGTH,
    READ_ALL,
    LineCallback,
    Readable,
)
from stream_segments._util import clamp_length, content_length, find_newline

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class StreamSegment:
    """
    A bounded, single-consumer byte stream with push-back.

    Construction reads up to `length` bytes from `source` and freezes them.
    After that the segment never touches `source` again.

        >>> seg = StreamSegment(io.BytesIO(b"a\\nbb\\nccc"), 64)
        >>> list(seg)
        [b'a\\n', b'bb\\n', b'ccc']
        >>> seg.data
        b'a\\nbb\\nccc'

    Reading methods (`read`, `unread`, `readline`, iteration) mutate shared
    cursor state without locking and must be driven by one consumer at a
    time. `data` is immutable and safe to read from anywhere.

    Args:
        source: Anything with a `read(size) -> bytes` method
        length: Maximum number of bytes to take from `source`. Silently
            clamped to MAX_SEGMENT_LENGTH (see `clamped`).
        line_chunk_size: Chunk size used by `readline()`

    Raises:
        ValueError: If length is negative or line_chunk_size is not positive
        SourceReadError: If the source fails while being drained
    """

    def __init__(
        self,
        source: Readable,
        length: int,
        *,
        line_chunk_size: int = LINE_CHUNK_SIZE,
    ) -> None:
        if line_chunk_size <= 0:
            raise ValueError(
                f"line_chunk_size must be positive, got {line_chunk_size}"
            )

        self._requested_length = length
        self._length = clamp_length(length)
        self._line_chunk_size = line_chunk_size
        self._offset = 0
        self._buffer = ByteBuffer()
        self._source: Readable = source

        if self._length != length:
            logger.warning(
                "Segment length %d exceeds the %d byte limit; clamping",
                length,
                MAX_SEGMENT_LENGTH,
            )

        drained = self._drain()

        # Re-anchor on the frozen copy; the original source is released here
        self._offset = 0
        self._data = drained
        self._reader = io.BytesIO(drained)
        self._source = self._reader

        logger.debug(
            "Materialized segment: %d of %d bytes",
            len(drained),
            self._length,
        )

    def _drain(self) -> bytes:
        """Pull everything this segment may hold from the original source."""
        drained = bytearray()
        while len(drained) < self._length:
            try:
                drained += self.read()
            except EndOfStreamError:
                break
        return bytes(drained)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_response(
        cls,
        response: httpx.Response,
        length: int | None = None,
        *,
        line_chunk_size: int = LINE_CHUNK_SIZE,
    ) -> StreamSegment:
        """
        Materialize a segment from an httpx response body.

        The response may be a streaming response; its body is consumed
        through `iter_bytes()`, so content decoding is applied.

        Args:
            response: The response to read
            length: Cap in bytes. Defaults to the Content-Length header, or
                MAX_SEGMENT_LENGTH when the header is missing or the body
                has a Content-Encoding (the header then counts encoded
                bytes, not decoded ones).
            line_chunk_size: Chunk size used by `readline()`

        Returns:
            A fully materialized StreamSegment

        Raises:
            SourceReadError: If the transport fails while reading the body
        """
        if length is None:
            length = _length_from_headers(response.headers)
        return cls(
            IteratorSource(response.iter_bytes()),
            length,
            line_chunk_size=line_chunk_size,
        )

    @classmethod
    async def afrom_response(
        cls,
        response: httpx.Response,
        length: int | None = None,
        *,
        line_chunk_size: int = LINE_CHUNK_SIZE,
    ) -> StreamSegment:
        """
        Async version of from_response.

        The body is drained with `aiter_bytes()` up to the cap before the
        segment is built, so the returned segment never awaits anything.
        The body iterator is closed once the cap is reached.
        """
        if length is None:
            length = _length_from_headers(response.headers)
        limit = clamp_length(length)

        drained = bytearray()
        try:
            async with contextlib.aclosing(response.aiter_bytes()) as chunks:
                async for chunk in chunks:
                    drained += chunk
                    if len(drained) >= limit:
                        break
        except Exception as e:
            raise SourceReadError(cause=e) from e

        return cls(
            io.BytesIO(bytes(drained)),
            length,
            line_chunk_size=line_chunk_size,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def data(self) -> bytes:
        """Everything captured at construction, regardless of consumption."""
        return self._data

    @property
    def length(self) -> int:
        """The configured cap, after clamping. Not the materialized size."""
        return self._length

    @property
    def requested_length(self) -> int:
        """The cap the caller asked for, before clamping."""
        return self._requested_length

    @property
    def clamped(self) -> bool:
        """Whether the requested cap was reduced to MAX_SEGMENT_LENGTH."""
        return self._length != self._requested_length

    @property
    def offset(self) -> int:
        """Bytes delivered to callers so far, net of pushed-back bytes."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Bytes that reads can still return."""
        unread_replay = len(self._data) - self._reader.tell()
        return min(self._length - self._offset, len(self._buffer) + unread_replay)

    @property
    def reader(self) -> io.BytesIO:
        """
        The replay handle over the materialized bytes.

        It shares its cursor with `read()` and `readline()`. Mixing reads
        through this handle with the segment's own reading methods gives
        undefined interleaving and is not supported.
        """
        return self._reader

    def get_data(self) -> bytes:
        return self.data

    def get_length(self) -> int:
        return self.length

    def get_reader(self) -> io.BytesIO:
        return self.reader

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"length={self._length}, "
            f"materialized={len(self._data)}, "
            f"offset={self._offset})"
        )

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read(self, size: int = READ_ALL) -> bytes:
        """
        Read at most `size` bytes.

        Pushed-back bytes are returned before anything new is taken from the
        source. A non-empty result means more may remain.

        Args:
            size: Maximum bytes to return. Negative (READ_ALL) means up to
                the segment's configured length.

        Returns:
            The bytes read; b"" only when size is 0

        Raises:
            EndOfStreamError: If no bytes are available
            SourceReadError: If the source fails and nothing is buffered
        """
        if size < 0:
            size = self._length
        elif size == 0:
            return b""

        pending = len(self._buffer)
        if pending >= size:
            content = self._buffer.take(size)
        else:
            budget = min(size - pending, self._length - self._offset - pending)
            fresh = b""
            if budget > 0:
                try:
                    fresh = read_from(self._source, budget)
                except SourceReadError:
                    if not pending:
                        raise
                    # buffered bytes are already accounted for; serve them
                    logger.debug(
                        "Source read failed; returning %d buffered bytes",
                        pending,
                        exc_info=True,
                    )
            content = self._buffer.take_all() + fresh

        self._offset += len(content)
        if not content:
            raise EndOfStreamError()
        return content

    def unread(self, content: bytes) -> None:
        """
        Push bytes back so the next read returns them first.

        Only the bytes handed back are restored; this is not a rewind.
        """
        self._buffer.push_front(content)
        self._offset -= len(content)

    def readline(self) -> bytes:
        """
        Read one line, including its trailing newline.

        The final line of a segment may have no newline.

        Raises:
            EndOfStreamError: If the segment is already exhausted
        """
        chunk = self.read(self._line_chunk_size)
        pieces: list[bytes] = []

        index = find_newline(chunk)
        while index == -1:
            pieces.append(chunk)
            try:
                chunk = self.read(self._line_chunk_size)
            except EndOfStreamError:
                chunk = b""
                break
            index = find_newline(chunk)

        if index != -1:
            self.unread(chunk[index + 1 :])
            chunk = chunk[: index + 1]
        pieces.append(chunk)
        return b"".join(pieces)

    def __iter__(self) -> Iterator[bytes]:
        """
        Yield lines until the segment is exhausted.

        Iteration stops quietly on any segment error, so a failed read looks
        the same as a clean end of stream.
        """
        while True:
            try:
                line = self.readline()
            except StreamSegmentError:
                return
            yield line

    def iterate(self, callback: LineCallback) -> None:
        """Invoke `callback` with each remaining line."""
        for line in self:
            callback(line)


def _length_from_headers(headers: httpx.Headers) -> int:
    declared = content_length(headers)
    return MAX_SEGMENT_LENGTH if declared is None else declared


def split_segments(
    source: Readable,
    part_length: int,
    *,
    line_chunk_size: int = LINE_CHUNK_SIZE,
) -> Iterator[StreamSegment]:
    """
    Cut a source into consecutive segments of `part_length` bytes.

    Each segment is materialized before it is yielded. Iteration ends when
    the source is exhausted; the last segment may be shorter than
    `part_length`, and an empty trailing segment is never yielded.

    Args:
        source: The source to split
        part_length: Cap of each segment (clamped like any segment length)
        line_chunk_size: Passed on to every segment

    Yields:
        StreamSegment objects in source order

    Raises:
        ValueError: If part_length is not positive
        SourceReadError: If the source fails
    """
    if part_length <= 0:
        raise ValueError(f"part_length must be positive, got {part_length}")

    while True:
        segment = StreamSegment(source, part_length, line_chunk_size=line_chunk_size)
        if not segment.data:
            return
        yield segment
        if len(segment.data) < segment.length:
            return
