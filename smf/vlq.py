"""MIDI variable-length quantities.

Seven data bits per byte, most significant group first; bit 7 set means
another byte follows. Decoding accepts up to five bytes as long as the
result fits in an unsigned 32-bit integer.
"""

from __future__ import annotations

from typing import Tuple

from .errors import InvalidVLQError
from .reader import ByteReader

MAX_VLQ_BYTES = 5
MAX_VLQ_VALUE = 0xFFFFFFFF


def decode_vlq(reader: ByteReader) -> Tuple[int, int]:
    """Read one quantity and return ``(value, bytes_consumed)``."""

    start = reader.position
    value = 0
    consumed = 0
    while True:
        byte = reader.read_byte()
        consumed += 1
        value = (value << 7) | (byte & 0x7F)
        if byte & 0x80:
            if consumed >= MAX_VLQ_BYTES:
                raise InvalidVLQError(
                    f"variable-length quantity not terminated within {MAX_VLQ_BYTES} bytes",
                    start,
                )
            continue
        if value > MAX_VLQ_VALUE:
            raise InvalidVLQError("variable-length quantity overflows 32 bits", start)
        return value, consumed


def encode_vlq(value: int) -> bytes:
    if value < 0 or value > MAX_VLQ_VALUE:
        raise ValueError(f"VLQ value out of range: {value}")
    out = bytearray([value & 0x7F])
    value >>= 7
    while value:
        out.append(0x80 | (value & 0x7F))
        value >>= 7
    out.reverse()
    return bytes(out)
