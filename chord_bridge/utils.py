from __future__ import annotations

try:
    from constants import LOG_PREVIEW_CHARS
except ImportError:
    from .constants import LOG_PREVIEW_CHARS


def summarize_text(text: str, limit: int = LOG_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "...(truncated)"
