"""Shared helpers for the conversion entry points."""

from __future__ import annotations

from time import monotonic
from typing import Dict, Tuple


class Timer:
    """Context manager for timing code blocks."""

    def __init__(self) -> None:
        self.duration: float = 0.0
        self._start: float = 0.0

    def __enter__(self) -> "Timer":
        self._start = monotonic()
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:  # pragma: no cover - trivial
        self.duration = monotonic() - self._start


def build_response(function: str, status: str, http_code: int = 200, **payload) -> Tuple[Dict[str, object], int]:
    """Construct a standard response tuple."""

    body: Dict[str, object] = {"status": status, "function": function}
    body.update(payload)
    return body, http_code
