"""
Look-ahead and push-back storage for stream segments.
"""

from collections import deque


class ByteBuffer:
    """
    A queue of pending byte chunks.

    Chunks can be pushed onto either end, so handing bytes back to the front
    does not copy what is already queued.
    """

    __slots__ = ("_chunks", "_size")

    def __init__(self) -> None:
        self._chunks: deque[bytes] = deque()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def push_front(self, data: bytes) -> None:
        """Put `data` ahead of everything already queued."""
        if data:
            self._chunks.appendleft(bytes(data))
            self._size += len(data)

    def append(self, data: bytes) -> None:
        """Queue `data` after everything already queued."""
        if data:
            self._chunks.append(bytes(data))
            self._size += len(data)

    def take(self, size: int) -> bytes:
        """
        Remove and return the first `size` bytes.

        Returns fewer bytes if fewer are queued, and b"" for a size of 0.
        """
        if size <= 0 or not self._chunks:
            return b""

        taken: list[bytes] = []
        needed = size
        while needed > 0 and self._chunks:
            head = self._chunks.popleft()
            if len(head) > needed:
                # crop the head, leave the tail queued
                self._chunks.appendleft(head[needed:])
                head = head[:needed]
            taken.append(head)
            needed -= len(head)

        result = taken[0] if len(taken) == 1 else b"".join(taken)
        self._size -= len(result)
        return result

    def take_all(self) -> bytes:
        """Remove and return everything queued."""
        return self.take(self._size)
