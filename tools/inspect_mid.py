#!/usr/bin/env python3
"""Summarise Standard MIDI Files.

Prints the header fields and event totals for each file, optionally with a
per-track event listing. Files that fail to decode are reported on stderr
and skipped, so one bad file never stops a directory scan.

Examples
--------
    python tools/inspect_mid.py                     # every .mid in ./midis
    python tools/inspect_mid.py --list
    python tools/inspect_mid.py song                # midis/song.mid
    python tools/inspect_mid.py path/to/a.mid --events --mido-check
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smf.container import MidiFile, MidiHeader  # noqa: E402
from smf.errors import MidiError  # noqa: E402
from smf.events import (  # noqa: E402
    ControlChange,
    MetaEvent,
    MidiEvent,
    NoteOff,
    NoteOn,
    ProgramChange,
)
from smf.parser import MAX_FILE_SIZE, parse_file  # noqa: E402

DEFAULT_DIR = Path("midis")

META_NAMES = {
    0x00: "sequence_number",
    0x01: "text",
    0x02: "copyright",
    0x03: "track_name",
    0x04: "instrument_name",
    0x05: "lyric",
    0x06: "marker",
    0x07: "cue_point",
    0x20: "channel_prefix",
    0x21: "midi_port",
    0x2F: "end_of_track",
    0x51: "set_tempo",
    0x54: "smpte_offset",
    0x58: "time_signature",
    0x59: "key_signature",
    0x7F: "sequencer_specific",
}


def load_playlist(directory: Path) -> List[str]:
    """Return the sorted names of ``*.mid`` files in ``directory``."""

    if not directory.is_dir():
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_file() and p.suffix == ".mid")


def resolve_midi_path(name: str, directory: Path) -> Optional[Path]:
    """Find ``name`` as given, then as ``directory/name`` and ``directory/name.mid``."""

    direct = Path(name)
    if direct.is_absolute() or direct.is_file():
        return direct
    for candidate in (directory / name, directory / f"{name}.mid"):
        if candidate.is_file():
            return candidate
    return None


def non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return value


def describe_division(header: MidiHeader) -> str:
    if header.uses_smpte:
        return f"{header.smpte_format} fps, {header.ticks_per_frame} ticks/frame (SMPTE)"
    return f"{header.division} ticks/quarter"


def describe_event(event: MidiEvent) -> str:
    if isinstance(event, NoteOn):
        return f"note_on     ch={event.channel:<2} note={event.note:<3} vel={event.velocity}"
    if isinstance(event, NoteOff):
        return f"note_off    ch={event.channel:<2} note={event.note:<3} vel={event.velocity}"
    if isinstance(event, ControlChange):
        return f"control     ch={event.channel:<2} cc={event.controller:<3} value={event.value}"
    if isinstance(event, ProgramChange):
        return f"program     ch={event.channel:<2} program={event.program}"
    if isinstance(event, MetaEvent):
        label = META_NAMES.get(event.meta_type, f"meta_0x{event.meta_type:02X}")
        if 0x01 <= event.meta_type <= 0x0F:
            return f"{label:<11} {event.text()!r}"
        return f"{label:<11} {event.data.hex(' ') or '-'}"
    raise TypeError(f"unknown event {event!r}")


def format_report(name: str, midi: MidiFile, *, show_events: bool = False) -> str:
    header = midi.header
    info = midi.info()
    lines = [
        f"{name}",
        "MIDI File Info:",
        f"  Format: Type {info.format}",
        f"  Tracks: {info.track_count}",
        f"  Division: {describe_division(header)}",
        f"  Events: {info.total_events}",
    ]
    if show_events:
        for index, track in enumerate(midi.tracks):
            title = f"  Track {index}"
            if track.name:
                title += f" ({track.name})"
            lines.append(f"{title}: {len(track.events)} events")
            for event in track.events:
                lines.append(f"    {describe_event(event)}")
    return "\n".join(lines)


def mido_report(path: Path, midi: MidiFile) -> List[str]:
    from smf.crosscheck import compare_with_mido, load_with_mido

    try:
        reference = load_with_mido(path.read_bytes())
    except (OSError, ValueError, EOFError, KeyError) as exc:
        return [f"mido could not read file ({type(exc).__name__}: {exc})"]
    return compare_with_mido(midi, reference)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Summarise Standard MIDI Files.")
    parser.add_argument(
        "names",
        nargs="*",
        help="Files or playlist names; defaults to every .mid in --dir.",
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=DEFAULT_DIR,
        help=f"Playlist directory (default: {DEFAULT_DIR}).",
    )
    parser.add_argument("--list", action="store_true", help="List the playlist and exit.")
    parser.add_argument("--events", action="store_true", help="Print every decoded event.")
    parser.add_argument(
        "--max-size",
        type=non_negative_int,
        default=MAX_FILE_SIZE,
        help=f"Refuse files larger than this many bytes (default: {MAX_FILE_SIZE}).",
    )
    parser.add_argument(
        "--mido-check",
        action="store_true",
        help="Cross-check each decoded file against mido.",
    )
    args = parser.parse_args(argv)

    playlist = load_playlist(args.dir)
    if args.list:
        print("Available MIDI files:")
        for i, name in enumerate(playlist, start=1):
            print(f"  {i}: {name}")
        return 0

    failures = 0
    if args.names:
        paths: List[Path] = []
        for name in args.names:
            resolved = resolve_midi_path(name, args.dir)
            if resolved is None:
                print(f"MIDI file not found: {name}", file=sys.stderr)
                failures += 1
                continue
            paths.append(resolved)
    else:
        paths = [args.dir / name for name in playlist]
        if not paths:
            print(f"No MIDI files found in {args.dir}.", file=sys.stderr)
            return 1

    first = True
    for path in paths:
        try:
            midi = parse_file(path, max_size=args.max_size)
        except (MidiError, OSError) as exc:
            print(
                f"Failed to load MIDI file: {path} ({type(exc).__name__}: {exc})",
                file=sys.stderr,
            )
            failures += 1
            continue

        if not first:
            print()
        first = False
        print(format_report(str(path), midi, show_events=args.events))
        if args.mido_check:
            problems = mido_report(path, midi)
            if problems:
                failures += 1
                for problem in problems:
                    print(f"  mido mismatch: {problem}")
            else:
                print("  mido: consistent")

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
