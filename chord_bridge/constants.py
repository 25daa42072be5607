from __future__ import annotations

from typing import Literal

APP_NAME = "Chord Bridge"
BRIDGE_HOST = "127.0.0.1"
BRIDGE_PORT = 8765

PROVIDER_OPENAI = "openai"
PROVIDER_OPENROUTER = "openrouter"
PROVIDER_LMSTUDIO = "lmstudio"
PROVIDER_OLLAMA = "ollama"
REMOTE_PROVIDERS = (PROVIDER_OPENAI, PROVIDER_OPENROUTER)
KNOWN_PROVIDERS = (PROVIDER_OPENAI, PROVIDER_OPENROUTER, PROVIDER_LMSTUDIO, PROVIDER_OLLAMA)
ProviderName = Literal["openai", "openrouter", "lmstudio", "ollama"]

DEFAULT_PROVIDER = PROVIDER_OPENAI
DEFAULT_MODEL_NAME = "gpt-4o-mini"
DEFAULT_OPENROUTER_MODEL = "openai/gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.5
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_LMSTUDIO_BASE_URL = "http://127.0.0.1:1234/v1"
DEFAULT_OLLAMA_BASE_URL = "http://127.0.0.1:11434"
HTTP_TIMEOUT_SEC = 60.0
LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1", "0.0.0.0")

DEFAULT_BPM = 120
LOG_PREVIEW_CHARS = 400

MIDI_MIN = 0
MIDI_MAX = 127

# Live clip note defaults
DEFAULT_VELOCITY = 100
DEFAULT_MUTE = 0
DEFAULT_PROBABILITY = 1.0
DEFAULT_VELOCITY_DEVIATION = 0
DEFAULT_RELEASE_VELOCITY = 100

# Scales chord start/duration beats. Raise to slow down progressions that come back too fast.
DURATION_MULTIPLIER = 1.0
