from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import ValidationError

try:
    from config import Settings, get_settings
    from constants import DEFAULT_OPENROUTER_MODEL, PROVIDER_OPENROUTER
    from errors import SchemaError
    from llm_client import call_llm, default_base_url, parse_llm_json
    from logger_config import logger
    from models import ChordProgression, ModelInfo
    from prompt_builder import build_chat_messages, build_system_prompt, build_user_prompt
    from utils import summarize_text
except ImportError:
    from .config import Settings, get_settings
    from .constants import DEFAULT_OPENROUTER_MODEL, PROVIDER_OPENROUTER
    from .errors import SchemaError
    from .llm_client import call_llm, default_base_url, parse_llm_json
    from .logger_config import logger
    from .models import ChordProgression, ModelInfo
    from .prompt_builder import build_chat_messages, build_system_prompt, build_user_prompt
    from .utils import summarize_text


def decode_progression(parsed: Any) -> ChordProgression:
    try:
        return ChordProgression.model_validate(parsed)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        logger.warning("LLM output is not a chord progression: %s", errors)
        raise SchemaError(f"LLM output is not a chord progression ({exc.error_count()} errors)", errors, parsed) from exc


class ProgressionRequester:
    """Asks a chat-completion model for a chord progression and decodes the answer."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def is_configured_endpoint(self, provider: str, base_url: Optional[str]) -> bool:
        """True when a request targets the endpoint the server key was configured for."""
        configured_url = self.settings.base_url or default_base_url(self.settings.provider)
        return provider == self.settings.provider and (base_url or default_base_url(provider)) == configured_url

    def resolve_model(self, model: Optional[ModelInfo] = None) -> Tuple[str, str, Optional[str], float, Optional[str]]:
        model = model or ModelInfo()
        provider = model.provider or self.settings.provider
        model_name = model.model_name
        if not model_name:
            model_name = self.settings.model_name
            if provider == PROVIDER_OPENROUTER and "/" not in model_name:
                model_name = DEFAULT_OPENROUTER_MODEL
        temperature = model.temperature
        if temperature is None:
            temperature = self.settings.temperature
        base_url = model.base_url
        if not base_url and provider == self.settings.provider:
            base_url = self.settings.base_url
        api_key = model.api_key
        if not api_key and self.is_configured_endpoint(provider, base_url):
            api_key = self.settings.api_key
        return provider, model_name, base_url, float(temperature), api_key

    def request_progression(
        self,
        message: str,
        bpm: Optional[float] = None,
        key: Optional[str] = None,
        model: Optional[ModelInfo] = None,
    ) -> ChordProgression:
        if bpm is None:
            bpm = self.settings.default_bpm
        messages = build_chat_messages(build_system_prompt(bpm), build_user_prompt(message, key))
        provider, model_name, base_url, temperature, api_key = self.resolve_model(model)

        logger.info("Progression: provider=%s model=%s bpm=%s key=%s", provider, model_name, bpm, key)
        logger.info("User prompt to LLM: %s", messages[1]["content"])

        content = call_llm(
            provider,
            model_name,
            base_url,
            temperature,
            messages,
            api_key,
            timeout=self.settings.http_timeout_sec,
        )
        logger.info("LLM response preview: %s", summarize_text(content))

        parsed = parse_llm_json(content, lenient=self.settings.lenient_json)
        return decode_progression(parsed)
