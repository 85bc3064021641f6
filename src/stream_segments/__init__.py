"""
Stream Segments

Bounded, eagerly-materialized byte stream segments.

A segment drains up to a fixed number of bytes from any readable source when
it is created, then serves chunked reads, push-back and line iteration from
its own copy. The original source is never touched again, so segments can be
handed to other threads freely.

Example usage:
    >>> import io
    >>> from stream_segments import StreamSegment
    >>>
    >>> seg = StreamSegment(io.BytesIO(b"a\\nbb\\nccc"), 1024)
    >>> for line in seg:
    ...     print(line)
    b'a\\n'
    b'bb\\n'
    b'ccc'
"""

from importlib.metadata import PackageNotFoundError, version

from stream_segments._cimap import CaseInsensitiveDict
from stream_segments._errors import (
    EndOfStreamError,
    SourceReadError,
    StreamSegmentError,
)
from stream_segments._source import IteratorSource
from stream_segments._types import (
    LINE_CHUNK_SIZE,
    MAX_SEGMENT_LENGTH,
    READ_ALL,
    LineCallback,
    Readable,
)
from stream_segments.segment import StreamSegment, split_segments

__all__ = [
    # Types
    "Readable",
    "LineCallback",
    "CaseInsensitiveDict",
    "IteratorSource",
    # Constants
    "MAX_SEGMENT_LENGTH",
    "LINE_CHUNK_SIZE",
    "READ_ALL",
    # Errors
    "StreamSegmentError",
    "EndOfStreamError",
    "SourceReadError",
    # Segments
    "StreamSegment",
    "split_segments",
]

# Use importlib.metadata for version (works with installed package)
# Fall back to hard-coded version for editable installs
try:
    __version__ = version("stream-segments")
except PackageNotFoundError:
    __version__ = "0.1.0"
