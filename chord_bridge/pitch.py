"""Scientific pitch notation decoding (C4 = MIDI 60)."""
from __future__ import annotations

import re
from typing import Any

try:
    from constants import MIDI_MAX, MIDI_MIN
    from errors import PitchResolutionError
except ImportError:
    from .constants import MIDI_MAX, MIDI_MIN
    from .errors import PitchResolutionError

LETTER_SEMITONES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
ACCIDENTAL_SEMITONES = {"#": 1, "♯": 1, "x": 2, "b": -1, "♭": -1}

NOTE_RE = re.compile(r"^([A-Ga-g])(#{1,2}|x|b{1,2}|♯|♭)?(-?\d+)$")


def accidental_offset(accidental: str) -> int:
    return sum(ACCIDENTAL_SEMITONES[ch] for ch in accidental)


def note_to_midi(note: Any) -> int:
    """Decode a pitch name such as ``"C#4"`` or ``"Bb3"`` into a MIDI number.

    Integers in the MIDI range pass through unchanged. Anything that cannot be
    decoded, or decodes outside 0-127, raises :class:`PitchResolutionError`.
    """
    if isinstance(note, bool):
        raise PitchResolutionError(note, "unsupported value")
    if isinstance(note, int):
        midi = note
    elif isinstance(note, str):
        match = NOTE_RE.match(note.strip())
        if not match:
            raise PitchResolutionError(note, "invalid note format")
        letter, accidental, octave_str = match.groups()
        semitone = LETTER_SEMITONES[letter.upper()] + accidental_offset(accidental or "")
        midi = (int(octave_str) + 1) * 12 + semitone
    else:
        raise PitchResolutionError(note, "unsupported value")
    if not MIDI_MIN <= midi <= MIDI_MAX:
        raise PitchResolutionError(note, f"outside MIDI range {MIDI_MIN}-{MIDI_MAX}")
    return midi
