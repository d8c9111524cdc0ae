"""
Safe access to decoded JSON values.

``JsonValue`` wraps whatever ``json.loads`` produced. Every accessor returns
either another ``JsonValue`` or ``None``, so walking an unexpected shape
never raises: a missing key, an out-of-range index or a wrong type all end
up as the missing value.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


class JsonValue:
    """Read-only view over a decoded JSON value."""

    __slots__ = ("_raw",)

    def __init__(self, raw: Any = _MISSING) -> None:
        self._raw = raw

    @classmethod
    def missing(cls) -> JsonValue:
        return cls()

    @property
    def is_missing(self) -> bool:
        return self._raw is _MISSING

    @property
    def raw(self) -> Any:
        """Underlying value, ``None`` when missing."""
        return None if self._raw is _MISSING else self._raw

    def get(self, key: str) -> JsonValue:
        if isinstance(self._raw, dict) and key in self._raw:
            return JsonValue(self._raw[key])
        return JsonValue.missing()

    def at(self, index: int) -> JsonValue:
        if isinstance(self._raw, list) and -len(self._raw) <= index < len(self._raw):
            return JsonValue(self._raw[index])
        return JsonValue.missing()

    def path(self, *keys: str | int) -> JsonValue:
        """Follow a chain of keys/indexes, e.g. ``path("plugins", "title", "text")``."""
        current = self
        for key in keys:
            current = current.at(key) if isinstance(key, int) else current.get(key)
            if current.is_missing:
                break
        return current

    def as_str(self) -> str | None:
        return self._raw if isinstance(self._raw, str) else None

    def as_number(self) -> int | float | None:
        # bool is an int subclass but never a chart magnitude
        if isinstance(self._raw, bool):
            return None
        if isinstance(self._raw, (int, float)):
            return self._raw
        return None

    def as_list(self) -> list[Any] | None:
        return self._raw if isinstance(self._raw, list) else None

    def as_dict(self) -> dict[str, Any] | None:
        return self._raw if isinstance(self._raw, dict) else None

    def items(self) -> list[JsonValue]:
        """Elements of a list value; empty for anything else."""
        values = self.as_list()
        if values is None:
            return []
        return [JsonValue(v) for v in values]

    def __repr__(self) -> str:
        if self.is_missing:
            return "JsonValue(<missing>)"
        return f"JsonValue({self._raw!r})"


def parse_json(text: str) -> JsonValue | None:
    """Parse JSON text; ``None`` on syntax errors."""
    try:
        return JsonValue(json.loads(text))
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("parse_json: invalid JSON (%s): %r", e, text[:200])
        return None
