"""Tests for source adapters."""

import io
import logging
from unittest.mock import MagicMock

import pytest

from stream_segments import IteratorSource, SourceReadError
from stream_segments._source import read_from


class TestIteratorSource:
    """Tests for IteratorSource."""

    def test_reads_across_chunk_boundaries(self) -> None:
        source = IteratorSource([b"ab", b"cde", b"f"])
        assert source.read(4) == b"abcd"
        assert source.read(4) == b"ef"
        assert source.read(4) == b""

    def test_read_all(self) -> None:
        source = IteratorSource(iter([b"one", b"two"]))
        assert source.read(-1) == b"onetwo"
        assert source.read(-1) == b""

    def test_pulls_lazily(self) -> None:
        pulled: list[bytes] = []

        def chunks():
            for chunk in (b"aaaa", b"bbbb"):
                pulled.append(chunk)
                yield chunk

        source = IteratorSource(chunks())
        assert source.read(2) == b"aa"
        assert pulled == [b"aaaa"]

    def test_skips_empty_chunks(self) -> None:
        source = IteratorSource([b"", b"x", b"", b"y"])
        assert source.read(2) == b"xy"

    def test_iterator_errors_propagate(self) -> None:
        def chunks():
            yield b"ok"
            raise ConnectionError("reset")

        source = IteratorSource(chunks())
        assert source.read(2) == b"ok"
        with pytest.raises(ConnectionError):
            source.read(2)


class TestReadFrom:
    """Tests for read_from."""

    def test_plain_read(self) -> None:
        assert read_from(io.BytesIO(b"hello"), 3) == b"hel"

    def test_end_of_stream(self) -> None:
        assert read_from(io.BytesIO(b""), 3) == b""

    def test_eof_error_means_end_of_stream(self) -> None:
        source = MagicMock()
        source.read.side_effect = EOFError
        assert read_from(source, 3) == b""

    def test_other_errors_are_wrapped(self) -> None:
        source = MagicMock()
        cause = OSError("boom")
        source.read.side_effect = cause
        with pytest.raises(SourceReadError) as exc_info:
            read_from(source, 3)
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause

    def test_none_means_end_of_stream(self) -> None:
        source = MagicMock()
        source.read.return_value = None
        assert read_from(source, 3) == b""

    def test_oversized_reads_are_truncated(self) -> None:
        source = MagicMock()
        source.read.return_value = b"too much data"
        assert read_from(source, 3) == b"too"

    def test_oversized_reads_are_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        source = MagicMock()
        source.read.return_value = b"too much data"
        with caplog.at_level(logging.DEBUG, logger="stream_segments._source"):
            read_from(source, 3)
        assert "dropping 10" in caplog.text

    def test_exact_reads_are_not_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="stream_segments._source"):
            assert read_from(io.BytesIO(b"abc"), 3) == b"abc"
        assert caplog.records == []
