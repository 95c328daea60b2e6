"""Compare a decoded file against mido's reading of the same bytes."""

from __future__ import annotations

import io
from collections import Counter
from typing import List

import mido

from .container import MidiFile

MODELED_MIDO_TYPES = frozenset({"note_off", "note_on", "control_change", "program_change"})


def _mido_counts(track: mido.MidiTrack) -> Counter:
    counts: Counter = Counter()
    for msg in track:
        if msg.is_meta:
            counts["meta"] += 1
        elif msg.type in MODELED_MIDO_TYPES:
            counts[msg.type] += 1
    return counts


def _smf_counts(events) -> Counter:
    return Counter(event.kind for event in events)


def load_with_mido(data: bytes) -> mido.MidiFile:
    return mido.MidiFile(file=io.BytesIO(data))


def compare_with_mido(midi_file: MidiFile, reference: mido.MidiFile) -> List[str]:
    """Return mismatch descriptions; an empty list means both readers agree."""

    problems: List[str] = []
    header = midi_file.header
    if header.format != reference.type:
        problems.append(f"format: smf={header.format} mido={reference.type}")
    if not header.uses_smpte and header.division != reference.ticks_per_beat:
        problems.append(
            f"division: smf={header.division} mido={reference.ticks_per_beat}"
        )
    if len(midi_file.tracks) != len(reference.tracks):
        problems.append(
            f"track count: smf={len(midi_file.tracks)} mido={len(reference.tracks)}"
        )

    for index, (ours, theirs) in enumerate(zip(midi_file.tracks, reference.tracks)):
        mine = _smf_counts(ours.events)
        other = _mido_counts(theirs)
        if mine != other:
            diff = ", ".join(
                f"{kind}: smf={mine.get(kind, 0)} mido={other.get(kind, 0)}"
                for kind in sorted(set(mine) | set(other))
                if mine.get(kind, 0) != other.get(kind, 0)
            )
            problems.append(f"track {index}: {diff}")
    return problems
