"""Tests for scientific pitch notation decoding."""
import pytest

from chord_bridge.errors import PitchResolutionError
from chord_bridge.pitch import note_to_midi


@pytest.mark.parametrize(
    "name,expected",
    [
        ("C4", 60),
        ("A3", 57),
        ("G4", 67),
        ("B4", 71),
        ("C#4", 61),
        ("Db4", 61),
        ("Bb3", 58),
        ("F#5", 78),
        ("Cb4", 59),
        ("B#3", 60),
        ("C##4", 62),
        ("Ebb4", 62),
        ("Gx3", 57),
        ("c4", 60),
        ("bb3", 58),
        ("C-1", 0),
        ("G9", 127),
        (" E4 ", 64),
    ],
)
def test_note_to_midi(name, expected):
    assert note_to_midi(name) == expected


def test_integer_pitch_passes_through():
    assert note_to_midi(64) == 64


@pytest.mark.parametrize("name", ["", "H4", "C", "4", "Cmaj7", "C#b4", "C4.5", "middle C"])
def test_invalid_names_raise(name):
    with pytest.raises(PitchResolutionError) as exc_info:
        note_to_midi(name)
    assert exc_info.value.note == name


@pytest.mark.parametrize("name", ["G#9", "B9", "Cb-1", 128, -1])
def test_out_of_range_raises(name):
    with pytest.raises(PitchResolutionError):
        note_to_midi(name)


@pytest.mark.parametrize("value", [None, 60.0, True, ["C4"]])
def test_unsupported_types_raise(value):
    with pytest.raises(PitchResolutionError):
        note_to_midi(value)


def test_pitch_resolution_error_is_value_error():
    with pytest.raises(ValueError):
        note_to_midi("nope")
