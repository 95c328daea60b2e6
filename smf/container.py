from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import (
    InvalidHeaderError,
    InvalidHeaderLengthError,
    InvalidTrackChunkError,
)
from .events import MetaEvent, MidiEvent, META_TRACK_NAME, decode_event
from .reader import ByteReader
from .vlq import decode_vlq

HEADER_MAGIC = b"MThd"
TRACK_MAGIC = b"MTrk"
HEADER_LENGTH = 6
HEADER_SIZE = 8 + HEADER_LENGTH  # magic + u32 length + three u16 fields


@dataclass(frozen=True)
class MidiHeader:
    format: int
    track_count: int
    division: int

    @classmethod
    def read(cls, reader: ByteReader) -> "MidiHeader":
        offset = reader.position
        magic = reader.read_bytes(4)
        if magic != HEADER_MAGIC:
            raise InvalidHeaderError(f"bad header magic: {magic.hex()}", offset)
        length = reader.read_u32()
        if length != HEADER_LENGTH:
            raise InvalidHeaderLengthError(
                f"header chunk length {length}, expected {HEADER_LENGTH}", offset + 4
            )
        # format is not range-checked; values beyond 0-2 pass through.
        fmt = reader.read_u16()
        track_count = reader.read_u16()
        division = reader.read_u16()
        return cls(format=fmt, track_count=track_count, division=division)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiHeader":
        return cls.read(ByteReader(data))

    @property
    def uses_smpte(self) -> bool:
        return bool(self.division & 0x8000)

    @property
    def ticks_per_quarter(self) -> Optional[int]:
        return None if self.uses_smpte else self.division

    @property
    def smpte_format(self) -> Optional[int]:
        """Frames per second (24, 25, 29 or 30) for SMPTE divisions."""

        if not self.uses_smpte:
            return None
        # Upper byte is the frame rate stored as a negative two's-complement value.
        return 256 - (self.division >> 8)

    @property
    def ticks_per_frame(self) -> Optional[int]:
        return (self.division & 0xFF) if self.uses_smpte else None


@dataclass
class MidiTrack:
    """Events of one ``MTrk`` chunk in file order; delta-times are dropped."""

    events: List[MidiEvent] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.events)

    @property
    def name(self) -> Optional[str]:
        for event in self.events:
            if isinstance(event, MetaEvent) and event.meta_type == META_TRACK_NAME:
                return event.text()
        return None


def read_track(reader: ByteReader) -> MidiTrack:
    """Decode the track chunk at the reader's position.

    The declared chunk length is authoritative: decoding stops once it is
    consumed, End-of-Track or not, and no event may read past it.
    """

    offset = reader.position
    magic = reader.read_bytes(4)
    if magic != TRACK_MAGIC:
        raise InvalidTrackChunkError(f"expected MTrk, found {magic.hex()}", offset)
    length = reader.read_u32()
    end = reader.position + length

    body = reader.bounded(end)
    track = MidiTrack()
    running_status: Optional[int] = None
    while body.position < end:
        decode_vlq(body)  # delta-time
        event, running_status = decode_event(body, running_status)
        track.events.append(event)

    reader.position = body.position
    return track


@dataclass(frozen=True)
class MidiInfo:
    format: int
    track_count: int
    division: int
    total_events: int


@dataclass
class MidiFile:
    """A fully decoded file. Owns its tracks and every event payload."""

    header: MidiHeader
    tracks: List[MidiTrack]

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiFile":
        reader = ByteReader(data)
        header = MidiHeader.read(reader)
        tracks = [read_track(reader) for _ in range(header.track_count)]
        return cls(header=header, tracks=tracks)

    @property
    def total_events(self) -> int:
        return sum(len(track.events) for track in self.tracks)

    def info(self) -> MidiInfo:
        return MidiInfo(
            format=self.header.format,
            track_count=self.header.track_count,
            division=self.header.division,
            total_events=self.total_events,
        )
