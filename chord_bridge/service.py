from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

try:
    from expander import expand_to_notes
    from models import ChordSpec, ModelInfo, NoteRecord, ProgressionResponse
    from requester import ProgressionRequester
except ImportError:
    from .expander import expand_to_notes
    from .models import ChordSpec, ModelInfo, NoteRecord, ProgressionResponse
    from .requester import ProgressionRequester

HOST_NOTES_DICT = "notes"
HOST_CHORD_NAMES_DICT = "chordNames"
HOST_CHORD_NAMES_KEY = "chordNamesString"


def chord_names_string(chords: List[ChordSpec]) -> str:
    return " ".join(chord.chord for chord in chords)


class ProgressionResult(BaseModel):
    tempo: float
    notes: List[NoteRecord] = Field(default_factory=list)
    chords: List[ChordSpec] = Field(default_factory=list)

    def to_response(self) -> ProgressionResponse:
        return ProgressionResponse(
            tempo=self.tempo,
            notes=self.notes,
            chords=self.chords,
            chord_names=chord_names_string(self.chords),
        )

    def to_host_payload(self) -> Dict[str, Dict[str, Any]]:
        """The two named dictionaries a Max for Live patch reads back."""
        return {
            HOST_NOTES_DICT: {"notes": [note.model_dump() for note in self.notes]},
            HOST_CHORD_NAMES_DICT: {HOST_CHORD_NAMES_KEY: chord_names_string(self.chords)},
        }


def request_chord_progression(
    message: str,
    bpm: Optional[float] = None,
    key: Optional[str] = None,
    requester: Optional[ProgressionRequester] = None,
    model: Optional[ModelInfo] = None,
) -> ProgressionResult:
    requester = requester or ProgressionRequester()
    progression = requester.request_progression(message, bpm=bpm, key=key, model=model)
    notes = expand_to_notes(progression)
    return ProgressionResult(tempo=progression.tempo, notes=notes, chords=progression.chords)
