"""Outgoing byte buffer that removes consumed data lazily."""

from __future__ import annotations


class BackPressure:
    """Bytes waiting to be written to a socket.

    Erased bytes are only counted at first; the buffer is compacted once the
    pending removal exceeds 1/32 of its total length.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._buffer = bytearray(data)
        self.pending_removal = 0
        self.capacity = len(self._buffer)

    def append(self, data: bytes) -> None:
        """Add bytes to the end of the buffer."""
        self._buffer += data
        self.capacity = max(self.capacity, len(self._buffer))

    def erase(self, length: int) -> None:
        """Mark ``length`` bytes from the front as written."""
        if length < 0:
            raise ValueError("length must not be negative")
        self.pending_removal += length
        # Always erase a minimum of 1/32th of the current backpressure
        if self.pending_removal > (len(self._buffer) >> 5):
            del self._buffer[: self.pending_removal]
            self.pending_removal = 0

    def __len__(self) -> int:
        return len(self._buffer) - self.pending_removal

    def clear(self) -> None:
        """Drop all buffered bytes and release the storage."""
        self.pending_removal = 0
        self._buffer = bytearray()
        self.capacity = 0

    def reserve(self, length: int) -> None:
        """Make room for at least ``length`` live bytes."""
        self.capacity = max(self.capacity, length + self.pending_removal)

    def resize(self, length: int) -> None:
        """Truncate or zero-pad the live part to exactly ``length`` bytes."""
        if length < 0:
            raise ValueError("length must not be negative")
        total = length + self.pending_removal
        if total < len(self._buffer):
            del self._buffer[total:]
        else:
            self._buffer.extend(bytes(total - len(self._buffer)))
        self.capacity = max(self.capacity, total)

    def data(self) -> bytes:
        """The bytes that still have to be written."""
        return bytes(self._buffer[self.pending_removal :])

    def total_length(self) -> int:
        """Length of the buffer including bytes pending removal."""
        return len(self._buffer)