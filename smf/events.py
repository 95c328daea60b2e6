"""Track events and the status-byte state machine that decodes them.

Only five event shapes are modeled::

  0x8n  note off         note, velocity
  0x9n  note on          note, velocity
  0xBn  control change   controller, value
  0xCn  program change   program
  0xFF  meta             type, VLQ length, payload

Key pressure (0xAn), channel pressure (0xDn), pitch bend (0xEn), SysEx and
every other system status are rejected with ``UnsupportedEventError``.

Running status: a byte below 0x80 where a status byte is expected is the
first data byte of an event that reuses the previous status. The last status
byte seen (meta included) stays in effect until the next one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .errors import InvalidRunningStatusError, UnsupportedEventError
from .reader import ByteReader
from .vlq import decode_vlq

NOTE_OFF = 0x80
NOTE_ON = 0x90
CONTROL_CHANGE = 0xB0
PROGRAM_CHANGE = 0xC0
META = 0xFF

META_TRACK_NAME = 0x03
META_END_OF_TRACK = 0x2F
META_SET_TEMPO = 0x51


@dataclass(frozen=True)
class NoteOff:
    channel: int
    note: int
    velocity: int

    kind = "note_off"


@dataclass(frozen=True)
class NoteOn:
    channel: int
    note: int
    velocity: int

    kind = "note_on"


@dataclass(frozen=True)
class ControlChange:
    channel: int
    controller: int
    value: int

    kind = "control_change"


@dataclass(frozen=True)
class ProgramChange:
    channel: int
    program: int

    kind = "program_change"


@dataclass(frozen=True)
class MetaEvent:
    meta_type: int
    data: bytes = b""

    kind = "meta"

    @property
    def is_end_of_track(self) -> bool:
        return self.meta_type == META_END_OF_TRACK

    def text(self) -> str:
        """Decode the payload of a text-style meta event (0x01-0x0F)."""

        return self.data.decode("latin-1")

    def tempo(self) -> int:
        """Microseconds per quarter note carried by a Set Tempo event."""

        if self.meta_type != META_SET_TEMPO or len(self.data) != 3:
            raise ValueError(f"not a set-tempo event: {self!r}")
        return int.from_bytes(self.data, "big")


MidiEvent = Union[NoteOff, NoteOn, ControlChange, ProgramChange, MetaEvent]


def decode_event(
    reader: ByteReader, running_status: Optional[int]
) -> Tuple[MidiEvent, Optional[int]]:
    """Decode one event at the reader's position.

    Returns the event and the running status to use for the next call.
    """

    offset = reader.position
    status = reader.read_byte()
    first: Optional[int] = None
    if status < 0x80:
        if running_status is None:
            raise InvalidRunningStatusError(
                f"data byte 0x{status:02X} with no running status", offset
            )
        first = status
        status = running_status
    else:
        running_status = status

    def data_byte() -> int:
        nonlocal first
        if first is not None:
            value, first = first, None
            return value
        return reader.read_byte()

    kind = status & 0xF0
    channel = status & 0x0F

    if kind == NOTE_OFF:
        event: MidiEvent = NoteOff(channel, data_byte(), data_byte())
    elif kind == NOTE_ON:
        event = NoteOn(channel, data_byte(), data_byte())
    elif kind == CONTROL_CHANGE:
        event = ControlChange(channel, data_byte(), data_byte())
    elif kind == PROGRAM_CHANGE:
        event = ProgramChange(channel, data_byte())
    elif status == META:
        meta_type = data_byte()
        length, _ = decode_vlq(reader)
        event = MetaEvent(meta_type, reader.read_bytes(length))
    else:
        raise UnsupportedEventError(f"unsupported event status 0x{status:02X}", offset)

    return event, running_status
