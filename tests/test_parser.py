"""End-to-end decoding of whole files."""

from __future__ import annotations

import io
from pathlib import Path

import mido
import pytest

from smf import (
    MAX_FILE_SIZE,
    FileTooLargeError,
    InvalidHeaderError,
    InvalidTrackChunkError,
    MidiError,
    MidiFile,
    MidiHeader,
    MidiInfo,
    MidiTrack,
    UnexpectedEndOfFileError,
    UnsupportedEventError,
    parse,
    parse_file,
    summarize,
)
from smf.events import ControlChange, MetaEvent, NoteOff, NoteOn, ProgramChange

MINIMAL = bytes.fromhex("4d546864 00000006 0001 0001 003c 4d54726b 00000004 00ff2f00")


def _chunk(magic: bytes, body: bytes) -> bytes:
    return magic + len(body).to_bytes(4, "big") + body


def _smf(fmt: int, division: int, *bodies: bytes, track_count: int | None = None) -> bytes:
    count = len(bodies) if track_count is None else track_count
    header = _chunk(b"MThd", fmt.to_bytes(2, "big") + count.to_bytes(2, "big") + division.to_bytes(2, "big"))
    return header + b"".join(_chunk(b"MTrk", body) for body in bodies)


def _mido_bytes(mid: mido.MidiFile) -> bytes:
    buf = io.BytesIO()
    mid.save(file=buf)
    return buf.getvalue()


def _two_track_song() -> mido.MidiFile:
    mid = mido.MidiFile(type=1, ticks_per_beat=96)
    conductor = mido.MidiTrack()
    conductor.append(mido.MetaMessage("track_name", name="Conductor", time=0))
    conductor.append(mido.MetaMessage("set_tempo", tempo=500000, time=0))
    conductor.append(mido.MetaMessage("time_signature", numerator=3, denominator=4, time=0))
    mid.tracks.append(conductor)

    piano = mido.MidiTrack()
    piano.append(mido.MetaMessage("track_name", name="Piano", time=0))
    piano.append(mido.Message("program_change", channel=2, program=4, time=0))
    piano.append(mido.Message("control_change", channel=2, control=7, value=100, time=0))
    for note in (60, 64, 67):
        piano.append(mido.Message("note_on", channel=2, note=note, velocity=90, time=0))
    for note in (60, 64, 67):
        piano.append(mido.Message("note_off", channel=2, note=note, velocity=0, time=96))
    mid.tracks.append(piano)
    return mid


def test_minimal_file():
    midi = parse(MINIMAL)
    assert midi == MidiFile(
        header=MidiHeader(format=1, track_count=1, division=60),
        tracks=[MidiTrack(events=[MetaEvent(0x2F, b"")])],
    )


def test_from_bytes_matches_parse():
    assert MidiFile.from_bytes(MINIMAL) == parse(MINIMAL)


def test_header_only_file_with_zero_tracks():
    midi = parse(_smf(0, 480))
    assert midi.tracks == []
    assert midi.info() == MidiInfo(format=0, track_count=0, division=480, total_events=0)


def test_tracks_follow_declared_count():
    data = _smf(1, 96, b"\x00\xFF\x2F\x00", b"\x00\xC0\x01\x00\xFF\x2F\x00", track_count=1)
    midi = parse(data)
    assert len(midi.tracks) == 1


def test_missing_track_chunk():
    data = _smf(1, 96, b"\x00\xFF\x2F\x00", track_count=2)
    with pytest.raises(UnexpectedEndOfFileError):
        parse(data)


def test_foreign_chunk_where_track_expected():
    data = _smf(1, 96, b"\x00\xFF\x2F\x00", track_count=2) + _chunk(b"XFIH", b"\x00" * 4)
    with pytest.raises(InvalidTrackChunkError):
        parse(data)


def test_failure_in_later_track_fails_whole_parse():
    good = b"\x00\x90\x3C\x64\x00\xFF\x2F\x00"
    bad = b"\x00\xE0\x00\x40"
    with pytest.raises(UnsupportedEventError):
        parse(_smf(1, 96, good, good, bad))


def test_rejects_non_midi():
    with pytest.raises(InvalidHeaderError):
        parse(b"RIFF\x00\x00\x00\x06RMIDdata")


def test_accepts_bytearray_and_memoryview():
    assert parse(bytearray(MINIMAL)) == parse(MINIMAL)
    assert parse(memoryview(MINIMAL)) == parse(MINIMAL)


class TestMidoWrittenFiles:
    """Files produced by another writer, including its running-status output."""

    def test_two_track_song(self):
        midi = parse(_mido_bytes(_two_track_song()))
        assert midi.header == MidiHeader(format=1, track_count=2, division=96)

        conductor, piano = midi.tracks
        assert conductor.name == "Conductor"
        assert conductor.events[1].tempo() == 500000
        assert conductor.events[-1].is_end_of_track

        assert piano.name == "Piano"
        assert piano.events[1:] == [
            ProgramChange(2, 4),
            ControlChange(2, 7, 100),
            NoteOn(2, 60, 90),
            NoteOn(2, 64, 90),
            NoteOn(2, 67, 90),
            NoteOff(2, 60, 0),
            NoteOff(2, 64, 0),
            NoteOff(2, 67, 0),
            MetaEvent(0x2F, b""),
        ]

    def test_summary(self):
        midi = parse(_mido_bytes(_two_track_song()))
        # 3 meta + end-of-track, then name + 8 channel events + end-of-track
        assert summarize(midi) == MidiInfo(format=1, track_count=2, division=96, total_events=14)
        assert midi.total_events == 14

    def test_format_zero(self):
        mid = mido.MidiFile(type=0, ticks_per_beat=480)
        track = mido.MidiTrack()
        track.append(mido.Message("note_on", channel=9, note=36, velocity=127, time=0))
        track.append(mido.Message("note_on", channel=9, note=36, velocity=0, time=240))
        mid.tracks.append(track)
        midi = parse(_mido_bytes(mid))
        assert midi.header.format == 0
        assert midi.tracks[0].events == [
            NoteOn(9, 36, 127),
            NoteOn(9, 36, 0),
            MetaEvent(0x2F, b""),
        ]

    def test_pitch_bend_is_unsupported(self):
        mid = _two_track_song()
        mid.tracks[1].insert(2, mido.Message("pitchwheel", channel=2, pitch=1000, time=0))
        with pytest.raises(UnsupportedEventError, match="0xE2"):
            parse(_mido_bytes(mid))


class TestParseFile:
    def test_reads_file(self, tmp_path: Path):
        path = tmp_path / "minimal.mid"
        path.write_bytes(MINIMAL)
        assert parse_file(path) == parse(MINIMAL)
        assert parse_file(str(path)).header.division == 60

    def test_size_limit(self, tmp_path: Path):
        path = tmp_path / "big.mid"
        path.write_bytes(MINIMAL + b"\x00" * 64)
        assert parse_file(path, max_size=len(MINIMAL) + 64).info().total_events == 1
        with pytest.raises(FileTooLargeError, match="larger than"):
            parse_file(path, max_size=len(MINIMAL))

    def test_negative_limit_rejected(self, tmp_path: Path):
        path = tmp_path / "minimal.mid"
        path.write_bytes(MINIMAL)
        with pytest.raises(ValueError, match="non-negative"):
            parse_file(path, max_size=-2)
        assert parse_file(path, max_size=len(MINIMAL)).info().total_events == 1

    def test_default_limit_is_ten_mebibytes(self):
        assert MAX_FILE_SIZE == 10 * 1024 * 1024

    def test_missing_file_is_os_error(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "absent.mid")

    def test_parse_errors_are_midi_errors(self, tmp_path: Path):
        path = tmp_path / "broken.mid"
        path.write_bytes(MINIMAL[:-2])
        with pytest.raises(MidiError):
            parse_file(path)
