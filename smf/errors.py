"""Exceptions raised while decoding Standard MIDI Files.

Every error derives from :class:`MidiError`, itself a ``ValueError``, so
callers that only care about "bad input" can keep catching ``ValueError``.
"""

from __future__ import annotations

from typing import Optional


class MidiError(ValueError):
    """Base class for all parse failures.

    ``offset`` is the byte position in the source buffer where decoding
    stopped, or ``None`` when no position applies.
    """

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        if offset is not None:
            message = f"{message} at offset 0x{offset:X}"
        super().__init__(message)
        self.offset = offset


class InvalidHeaderError(MidiError):
    pass


class InvalidHeaderLengthError(MidiError):
    pass


class InvalidTrackChunkError(MidiError):
    pass


class InvalidVLQError(MidiError):
    pass


class InvalidRunningStatusError(MidiError):
    pass


class UnsupportedEventError(MidiError):
    pass


class UnexpectedEndOfFileError(MidiError):
    pass


class UnexpectedEndOfTrackError(MidiError):
    pass


class FileTooLargeError(MidiError):
    pass
