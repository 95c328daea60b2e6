"""Standard MIDI File decoding."""

from .container import (  # noqa: F401
    HEADER_MAGIC,
    HEADER_SIZE,
    TRACK_MAGIC,
    MidiFile,
    MidiHeader,
    MidiInfo,
    MidiTrack,
    read_track,
)
from .errors import (  # noqa: F401
    FileTooLargeError,
    InvalidHeaderError,
    InvalidHeaderLengthError,
    InvalidRunningStatusError,
    InvalidTrackChunkError,
    InvalidVLQError,
    MidiError,
    UnexpectedEndOfFileError,
    UnexpectedEndOfTrackError,
    UnsupportedEventError,
)
from .events import (  # noqa: F401
    ControlChange,
    MetaEvent,
    MidiEvent,
    NoteOff,
    NoteOn,
    ProgramChange,
    decode_event,
)
from .parser import MAX_FILE_SIZE, parse, parse_file, summarize  # noqa: F401
from .reader import ByteReader  # noqa: F401
from .vlq import decode_vlq, encode_vlq  # noqa: F401
