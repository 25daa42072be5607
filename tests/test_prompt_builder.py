"""Tests for chord progression prompt composition."""
from chord_bridge.prompt_builder import (
    build_chat_messages,
    build_system_prompt,
    build_user_prompt,
    format_bpm,
)


class TestSystemPrompt:

    def test_defaults_to_120_bpm(self):
        assert "The tempo is 120 BPM." in build_system_prompt()

    def test_embeds_given_tempo(self):
        prompt = build_system_prompt(96)
        assert "The tempo is 96 BPM." in prompt
        assert "120 BPM" not in prompt

    def test_fractional_tempo(self):
        assert "The tempo is 92.5 BPM." in build_system_prompt(92.5)

    def test_requires_plain_json(self):
        prompt = build_system_prompt()
        assert "JSON" in prompt
        assert "don't wrap it in a markdown code block" in prompt

    def test_names_every_chord_field(self):
        prompt = build_system_prompt()
        for field in ("chord:", "start:", "duration:", "notes:"):
            assert field in prompt

    def test_forbids_defaulting_to_c_major(self):
        assert "Don't default to C major" in build_system_prompt()

    def test_is_deterministic(self):
        assert build_system_prompt(140) == build_system_prompt(140.0)


class TestUserPrompt:

    def test_without_key(self):
        assert build_user_prompt("Give me a I V vi IV progression") == (
            "Generate a chord progression based on the following instructions: "
            "Give me a I V vi IV progression."
        )

    def test_with_key(self):
        prompt = build_user_prompt("a minor 2 5 1 with extended chords", key="E minor")
        assert prompt.endswith("with extended chords. In the key of E minor.")

    def test_blank_key_is_ignored(self):
        assert "In the key of" not in build_user_prompt("something dreamy", key="  ")

    def test_trailing_period_not_doubled(self):
        assert build_user_prompt("moody jazz.").endswith("moody jazz.")
        assert ".." not in build_user_prompt("moody jazz.")


def test_chat_messages_order():
    messages = build_chat_messages("sys", "usr")
    assert messages == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "usr"},
    ]


def test_format_bpm():
    assert format_bpm(120) == "120"
    assert format_bpm(120.0) == "120"
    assert format_bpm(87.5) == "87.5"
