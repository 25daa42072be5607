"""Pytest configuration and fixtures."""
import json
import urllib.request

import pytest

from chord_bridge.config import Settings

CMAJ7_AM7 = {
    "tempo": 120,
    "chords": [
        {"chord": "Cmaj7", "start": 0, "duration": 4, "notes": ["C4", "E4", "G4", "B4"]},
        {"chord": "Am7", "start": 4, "duration": 2, "notes": ["A3", "C4", "E4", "G4"]},
    ],
}


class FakeResponse:
    def __init__(self, body: bytes):
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeUpstream:
    """Stands in for urllib.request.urlopen and records every request."""

    def __init__(self):
        self.requests = []
        self.body = b""
        self.error = None

    def reply(self, content: str):
        envelope = {"choices": [{"message": {"role": "assistant", "content": content}}]}
        self.body = json.dumps(envelope).encode("utf-8")

    def reply_raw(self, body: bytes):
        self.body = body

    def fail(self, error: BaseException):
        self.error = error

    @property
    def last_payload(self):
        return json.loads(self.requests[-1].data.decode("utf-8"))

    def __call__(self, req, timeout=None):
        self.requests.append(req)
        self.timeout = timeout
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body)


@pytest.fixture
def progression_json():
    return json.loads(json.dumps(CMAJ7_AM7))


@pytest.fixture
def settings():
    return Settings(provider="openai", api_key="sk-test", _env_file=None)


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake
