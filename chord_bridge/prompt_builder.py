from __future__ import annotations

from typing import Dict, List, Optional

try:
    from constants import DEFAULT_BPM
except ImportError:
    from .constants import DEFAULT_BPM

SYSTEM_PROMPT_TEMPLATE = """You are a music AI for generating interesting chord progressions.
Output the chords with their note durations in JSON format, suitable for creating MIDI data.
Don't default to C major, use the key if provided.
Each chord should be represented as an object with the following fields:
- chord: The chord name (e.g., 'Cmaj7', 'Am9').
- start: The start time in beats.
- duration: The duration in beats.
- notes: An array of the individual notes in the chord in scientific pitch notation (e.g., ['C4', 'E4', 'G4']).
Put the chord objects in a "chords" array and include the tempo as a "tempo" number at the beginning of the JSON output. The tempo is {bpm} BPM.
Ensure the JSON is properly formatted. Only output the JSON in plain text, don't wrap it in a markdown code block or any other formatting."""

USER_PROMPT_TEMPLATE = "Generate a chord progression based on the following instructions: {message}."
KEY_CONSTRAINT_TEMPLATE = " In the key of {key}."


def format_bpm(bpm: float) -> str:
    bpm = float(bpm)
    if bpm.is_integer():
        return str(int(bpm))
    return f"{bpm:g}"


def build_system_prompt(bpm: Optional[float] = None) -> str:
    if bpm is None:
        bpm = DEFAULT_BPM
    return SYSTEM_PROMPT_TEMPLATE.format(bpm=format_bpm(bpm))


def build_user_prompt(message: str, key: Optional[str] = None) -> str:
    prompt = USER_PROMPT_TEMPLATE.format(message=message.strip().rstrip("."))
    if key and key.strip():
        prompt += KEY_CONSTRAINT_TEMPLATE.format(key=key.strip())
    return prompt


def build_chat_messages(system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
