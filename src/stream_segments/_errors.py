"""
Exception hierarchy for stream segments.

This module defines all exceptions that can be raised by the library.
"""


class StreamSegmentError(Exception):
    """
    Base exception for all stream segment errors.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        parts = [self.message]
        if self.code is not None:
            parts.append(f"[{self.code}]")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r})"
        )


class EndOfStreamError(StreamSegmentError, EOFError):
    """
    Raised when no further bytes are available from a segment.

    This is not a fault: it is the only termination signal of `read()` and
    `readline()`. It subclasses EOFError so generic stream code can catch it.
    """

    def __init__(self, message: str = "End of stream") -> None:
        super().__init__(message, code="EOF")


class SourceReadError(StreamSegmentError):
    """
    Raised when the underlying source fails with anything other than
    end-of-stream.

    The original exception is chained as ``__cause__`` and kept on ``cause``.

    Attributes:
        cause: The exception raised by the source
    """

    def __init__(
        self,
        message: str = "Failed to read from source",
        cause: BaseException | None = None,
    ) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, code="SOURCE_ERROR")
        self.cause = cause
