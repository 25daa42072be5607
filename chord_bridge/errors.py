from __future__ import annotations

from typing import Any, List, Optional


class GenerationError(Exception):
    """Base class for every failure of the progression pipeline."""


class UpstreamError(GenerationError):
    """The text-generation service was unreachable or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GenerationTimeoutError(UpstreamError):
    """The upstream call did not complete within the configured timeout."""


class ParseError(GenerationError):
    """The model answered with text that is not valid JSON."""

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class SchemaError(GenerationError):
    """The model answered with JSON that is not a chord progression."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.payload = payload


class PitchResolutionError(GenerationError, ValueError):
    def __init__(self, note: Any, reason: str = "") -> None:
        detail = f"Cannot resolve pitch {note!r}"
        if reason:
            detail += f": {reason}"
        super().__init__(detail)
        self.note = note
