from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

try:
    from constants import (
        DEFAULT_MUTE,
        DEFAULT_PROBABILITY,
        DEFAULT_RELEASE_VELOCITY,
        DEFAULT_VELOCITY,
        DEFAULT_VELOCITY_DEVIATION,
        MIDI_MAX,
        MIDI_MIN,
        ProviderName,
    )
except ImportError:
    from .constants import (
        DEFAULT_MUTE,
        DEFAULT_PROBABILITY,
        DEFAULT_RELEASE_VELOCITY,
        DEFAULT_VELOCITY,
        DEFAULT_VELOCITY_DEVIATION,
        MIDI_MAX,
        MIDI_MIN,
        ProviderName,
    )


class ChordSpec(BaseModel):
    chord: str = Field(description="Chord symbol as displayed, e.g. 'Cmaj7'")
    start: float = Field(ge=0, allow_inf_nan=False, description="Start time in beats")
    duration: float = Field(gt=0, allow_inf_nan=False, description="Length in beats")
    notes: List[str] = Field(description="Pitch names in scientific pitch notation, e.g. 'C4'")


class ChordProgression(BaseModel):
    tempo: float = Field(gt=0, allow_inf_nan=False)
    chords: List[ChordSpec]


class NoteRecord(BaseModel):
    """One note in the Live clip note dictionary shape."""

    note_id: int
    pitch: int = Field(ge=MIDI_MIN, le=MIDI_MAX)
    start_time: float
    duration: float
    velocity: int = Field(default=DEFAULT_VELOCITY, ge=1, le=MIDI_MAX)
    mute: int = Field(default=DEFAULT_MUTE, ge=0, le=1)
    probability: float = Field(default=DEFAULT_PROBABILITY, ge=0, le=1)
    velocity_deviation: int = Field(default=DEFAULT_VELOCITY_DEVIATION, ge=-MIDI_MAX, le=MIDI_MAX)
    release_velocity: int = Field(default=DEFAULT_RELEASE_VELOCITY, ge=1, le=MIDI_MAX)


class ModelInfo(BaseModel):
    provider: Optional[ProviderName] = None
    model_name: Optional[str] = None
    temperature: Optional[float] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None


class ProgressionRequest(BaseModel):
    message: str
    bpm: Optional[float] = Field(default=None, gt=0)
    key: Optional[str] = None
    model: Optional[ModelInfo] = None


class ProgressionResponse(BaseModel):
    tempo: float
    notes: List[NoteRecord] = Field(default_factory=list)
    chords: List[ChordSpec] = Field(default_factory=list)
    chord_names: str = ""
