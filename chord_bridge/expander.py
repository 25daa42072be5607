from __future__ import annotations

from typing import List

try:
    from constants import DURATION_MULTIPLIER
    from models import ChordProgression, NoteRecord
    from pitch import note_to_midi
except ImportError:
    from .constants import DURATION_MULTIPLIER
    from .models import ChordProgression, NoteRecord
    from .pitch import note_to_midi


def expand_to_notes(
    progression: ChordProgression,
    duration_multiplier: float = DURATION_MULTIPLIER,
) -> List[NoteRecord]:
    """Flatten a progression into clip notes, chord by chord.

    ``note_id`` is the note's position inside its own chord and starts over at
    zero for every chord. Every note of a chord shares the chord's start and
    duration. An unparseable pitch name raises ``PitchResolutionError``.
    """
    notes: List[NoteRecord] = []
    for chord in progression.chords:
        start_time = chord.start * duration_multiplier
        duration = chord.duration * duration_multiplier
        for index, name in enumerate(chord.notes):
            notes.append(
                NoteRecord(
                    note_id=index,
                    pitch=note_to_midi(name),
                    start_time=start_time,
                    duration=duration,
                )
            )
    return notes
