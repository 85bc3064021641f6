"""
Shared utility functions for stream segments.
"""

from __future__ import annotations

from collections.abc import Mapping

from stream_segments._cimap import CaseInsensitiveDict
from stream_segments._types import MAX_SEGMENT_LENGTH, NEWLINE

CONTENT_LENGTH_HEADER = "Content-Length"
CONTENT_ENCODING_HEADER = "Content-Encoding"


def find_newline(chunk: bytes) -> int:
    """
    Find the first line terminator in a chunk.

    Args:
        chunk: Bytes to search

    Returns:
        Index of the first newline byte, or -1 if there is none
    """
    return chunk.find(NEWLINE)


def clamp_length(length: int) -> int:
    """
    Clamp a requested segment length to MAX_SEGMENT_LENGTH.

    Args:
        length: The requested length in bytes

    Returns:
        The effective length

    Raises:
        ValueError: If length is negative
    """
    if length < 0:
        raise ValueError(f"Segment length must be non-negative, got {length}")
    return min(length, MAX_SEGMENT_LENGTH)


def content_length(headers: Mapping[str, str]) -> int | None:
    """
    Read the Content-Length from a set of headers.

    Header names are matched case-insensitively, so plain dicts work as well
    as httpx.Headers. Content-Length counts encoded bytes, so it is ignored
    when the body carries a Content-Encoding other than identity.

    Args:
        headers: Response headers

    Returns:
        The declared decoded body length, or None if missing, malformed or
        unknown because the body is encoded
    """
    lookup = CaseInsensitiveDict(dict(headers.items()))
    encoding = lookup.get(CONTENT_ENCODING_HEADER, "").strip().lower()
    if encoding not in ("", "identity"):
        return None

    raw = lookup.get(CONTENT_LENGTH_HEADER)
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 0 else None
