"""
Core types and constants for stream segments.

This module defines the fundamental types used throughout the library.
"""

from collections.abc import Callable
from typing import Protocol

# Hard ceiling on the number of bytes a segment will ever hold (16 MiB)
MAX_SEGMENT_LENGTH = 2 << 23

# Chunk size used when scanning for line terminators
LINE_CHUNK_SIZE = 1024

# Size argument meaning "up to the segment's configured length"
READ_ALL = -1

NEWLINE = b"\n"


class Readable(Protocol):
    """
    The only capability a segment needs from its source.

    `read(size)` returns at most `size` bytes. End of stream is signalled by
    returning an empty bytes object or by raising EOFError.
    """

    def read(self, size: int, /) -> bytes: ...


# Type for per-line callbacks
LineCallback = Callable[[bytes], None]

# Type for key/value visitors
ItemVisitor = Callable[[str, str], None]
