from __future__ import annotations

from typing import Optional

from .errors import UnexpectedEndOfFileError, UnexpectedEndOfTrackError


class ByteReader:
    """Forward-only cursor over an in-memory buffer.

    ``limit`` bounds every read: crossing it raises
    :class:`UnexpectedEndOfTrackError`, while running off the end of the
    buffer itself raises :class:`UnexpectedEndOfFileError`.
    """

    __slots__ = ("_data", "position", "limit")

    def __init__(self, data: bytes, position: int = 0, limit: Optional[int] = None) -> None:
        self._data = data
        self.position = position
        self.limit = limit

    def __repr__(self) -> str:
        return f"ByteReader(pos=0x{self.position:X}, limit={self.limit}, size={len(self._data)})"

    def bounded(self, limit: int) -> "ByteReader":
        """Return a reader sharing this buffer that may not read past ``limit``."""

        return ByteReader(self._data, self.position, limit)

    def _check(self, count: int) -> None:
        want = self.position + count
        if self.limit is not None and want > self.limit:
            raise UnexpectedEndOfTrackError(
                f"read of {count} byte(s) crosses track end 0x{self.limit:X}",
                self.position,
            )
        if want > len(self._data):
            raise UnexpectedEndOfFileError(
                f"need {count} byte(s), {len(self._data) - self.position} left",
                self.position,
            )

    def read_byte(self) -> int:
        self._check(1)
        value = self._data[self.position]
        self.position += 1
        return value

    def read_bytes(self, count: int) -> bytes:
        if count < 0:
            raise ValueError("count must be non-negative")
        self._check(count)
        start = self.position
        self.position += count
        return bytes(self._data[start : start + count])

    def read_u16(self) -> int:
        return int.from_bytes(self.read_bytes(2), "big")

    def read_u32(self) -> int:
        return int.from_bytes(self.read_bytes(4), "big")
