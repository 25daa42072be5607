from __future__ import annotations

import json
import socket
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional

try:
    from constants import (
        DEFAULT_LMSTUDIO_BASE_URL,
        DEFAULT_OLLAMA_BASE_URL,
        DEFAULT_OPENAI_BASE_URL,
        DEFAULT_OPENROUTER_BASE_URL,
        HTTP_TIMEOUT_SEC,
        KNOWN_PROVIDERS,
        LOCAL_HOSTS,
        PROVIDER_LMSTUDIO,
        PROVIDER_OLLAMA,
        PROVIDER_OPENROUTER,
        REMOTE_PROVIDERS,
    )
    from errors import GenerationTimeoutError, ParseError, UpstreamError
    from logger_config import logger
    from utils import summarize_text
except ImportError:
    from .constants import (
        DEFAULT_LMSTUDIO_BASE_URL,
        DEFAULT_OLLAMA_BASE_URL,
        DEFAULT_OPENAI_BASE_URL,
        DEFAULT_OPENROUTER_BASE_URL,
        HTTP_TIMEOUT_SEC,
        KNOWN_PROVIDERS,
        LOCAL_HOSTS,
        PROVIDER_LMSTUDIO,
        PROVIDER_OLLAMA,
        PROVIDER_OPENROUTER,
        REMOTE_PROVIDERS,
    )
    from .errors import GenerationTimeoutError, ParseError, UpstreamError
    from .logger_config import logger
    from .utils import summarize_text


def default_base_url(provider: str) -> str:
    if provider == PROVIDER_OPENROUTER:
        return DEFAULT_OPENROUTER_BASE_URL
    if provider == PROVIDER_OLLAMA:
        return DEFAULT_OLLAMA_BASE_URL
    if provider == PROVIDER_LMSTUDIO:
        return DEFAULT_LMSTUDIO_BASE_URL
    return DEFAULT_OPENAI_BASE_URL


def build_url(base_url: str, path: str) -> str:
    if base_url.endswith("/"):
        base = base_url[:-1]
    else:
        base = base_url
    if not path.startswith("/"):
        path = "/" + path
    return base + path


def is_local_url(url: str) -> bool:
    try:
        host = urllib.parse.urlparse(url).hostname
    except ValueError:
        return False
    if not host:
        return False
    return host in LOCAL_HOSTS or host.startswith("127.")


def is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (socket.timeout, TimeoutError)):
        return True
    reason = getattr(exc, "reason", None)
    return isinstance(reason, (socket.timeout, TimeoutError))


def read_json_response(resp: Any) -> Dict[str, Any]:
    raw = resp.read().decode("utf-8")
    return json.loads(raw)


def post_json(
    url: str,
    payload: Dict[str, Any],
    timeout: float,
    api_key: Optional[str] = None,
) -> Dict[str, Any]:
    data = json.dumps(payload).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    req = urllib.request.Request(url, data=data, headers=headers, method="POST")
    try:
        if is_local_url(url):
            opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))
            with opener.open(req, timeout=timeout) as resp:
                return read_json_response(resp)
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return read_json_response(resp)
    except urllib.error.HTTPError as exc:
        body = exc.read().decode("utf-8", errors="ignore")
        logger.error("LLM HTTP error: %s %s", exc.code, summarize_text(body))
        raise UpstreamError(f"LLM HTTP error: {exc.code}", status_code=exc.code, body=body) from exc
    except urllib.error.URLError as exc:
        if is_timeout(exc):
            logger.error("LLM request timed out after %.1fs: %s", timeout, url)
            raise GenerationTimeoutError(f"LLM request timed out after {timeout:g}s") from exc
        logger.error("LLM connection error: %s", exc)
        raise UpstreamError(f"LLM connection error: {exc.reason}") from exc
    except (socket.timeout, TimeoutError) as exc:
        logger.error("LLM response timed out after %.1fs: %s", timeout, url)
        raise GenerationTimeoutError(f"LLM request timed out after {timeout:g}s") from exc
    except OSError as exc:
        logger.error("LLM connection error: %s", exc)
        raise UpstreamError(f"LLM connection error: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.error("LLM returned invalid JSON body: %s", exc)
        raise UpstreamError(f"LLM returned invalid JSON body: {exc}") from exc


def extract_chat_content(response: Dict[str, Any], provider: str) -> str:
    try:
        if provider == PROVIDER_OLLAMA:
            content = response["message"]["content"]
        else:
            content = response["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        logger.error("%s response missing content: %s", provider, summarize_text(str(response)))
        raise UpstreamError(f"{provider} response missing content") from exc
    if not isinstance(content, str):
        raise UpstreamError(f"{provider} response content is not text")
    return content


def call_llm(
    provider: str,
    model_name: str,
    base_url: Optional[str],
    temperature: float,
    messages: List[Dict[str, str]],
    api_key: Optional[str] = None,
    timeout: float = HTTP_TIMEOUT_SEC,
) -> str:
    base_url = base_url or default_base_url(provider)
    logger.info(
        "call_llm: provider=%s model=%s base_url=%s has_api_key=%s",
        provider,
        model_name,
        base_url,
        bool(api_key),
    )
    if provider not in KNOWN_PROVIDERS:
        logger.error("Unknown LLM provider: %s", provider)
        raise UpstreamError(f"Unknown LLM provider: {provider}")
    if provider in REMOTE_PROVIDERS and not api_key:
        logger.error("%s requires an API key but none provided", provider)
        raise UpstreamError(f"{provider} requires an API key")

    if provider == PROVIDER_OLLAMA:
        url = build_url(base_url, "/api/chat")
        payload: Dict[str, Any] = {
            "model": model_name,
            "messages": messages,
            "options": {"temperature": temperature},
            "stream": False,
        }
    else:
        url = build_url(base_url, "/chat/completions")
        payload = {
            "model": model_name,
            "messages": messages,
            "temperature": temperature,
            "stream": False,
        }

    response = post_json(url, payload, timeout, api_key)
    content = extract_chat_content(response, provider)
    logger.info("LLM response received: %d chars", len(content))
    return content


def strip_code_fences(text: str) -> str:
    fence_start = text.find("```")
    if fence_start == -1:
        return text
    fence_end = text.rfind("```")
    if fence_end == fence_start:
        return text
    inner = text[fence_start + 3 : fence_end]
    if inner.lstrip().startswith("json"):
        inner = inner.lstrip()[4:]
    return inner.strip()


def extract_first_json_object(text: str) -> Optional[str]:
    start = None
    depth = 0
    in_str = False
    escape = False
    for idx, ch in enumerate(text):
        if start is None:
            if ch == "{":
                start = idx
                depth = 1
            continue
        if in_str:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : idx + 1]
    return None


def reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads_json(text: str) -> Any:
    return json.loads(text, parse_constant=reject_constant)


def parse_llm_json(content: str, lenient: bool = False) -> Any:
    """Decode model output as JSON.

    Strict mode is a single ``json.loads`` of the whole text, with the
    ``NaN`` and ``Infinity`` literals Python would otherwise accept rejected. Lenient mode first
    strips markdown fences, then falls back to the first balanced ``{...}``
    object found in the text. Either way failure raises :class:`ParseError`
    carrying the raw text.
    """
    if not lenient:
        try:
            return loads_json(content)
        except ValueError as exc:
            raise ParseError(f"Invalid JSON from LLM: {exc}", content) from exc

    sanitized = strip_code_fences(content).strip()
    try:
        return loads_json(sanitized)
    except ValueError as exc:
        first_obj = extract_first_json_object(sanitized)
        if first_obj is None:
            raise ParseError(f"Invalid JSON from LLM: {exc}", content) from exc
    try:
        return loads_json(first_obj)
    except ValueError as exc:
        raise ParseError(f"Invalid JSON from LLM: {exc}", content) from exc
