"""Entry points: parse a byte buffer or a file on disk."""

from __future__ import annotations

import os
from typing import Union

from .container import MidiFile, MidiInfo
from .errors import FileTooLargeError

MAX_FILE_SIZE = 10 * 1024 * 1024


def parse(data: bytes) -> MidiFile:
    """Decode a complete Standard MIDI File.

    Either returns a fully populated :class:`MidiFile` or raises a
    :class:`~smf.errors.MidiError`; partial results never escape.
    """

    return MidiFile.from_bytes(bytes(data))


def parse_file(path: Union[str, os.PathLike], *, max_size: int = MAX_FILE_SIZE) -> MidiFile:
    if max_size < 0:
        raise ValueError(f"max_size must be non-negative, got {max_size}")
    with open(path, "rb") as fh:
        data = fh.read(max_size + 1)
    if len(data) > max_size:
        raise FileTooLargeError(f"{os.fspath(path)} is larger than {max_size} bytes")
    return parse(data)


def summarize(midi_file: MidiFile) -> MidiInfo:
    return midi_file.info()
