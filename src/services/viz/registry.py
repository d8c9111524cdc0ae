"""Chart builder registry -- extensible dispatch by chart type.

Callers can register a builder for any chart type tag, including the
built-in ones. A registered builder takes precedence over the built-in
builder for that tag. Registering the same tag again replaces the earlier
builder; there is no removal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from src.config.constants import ChartType
from src.services.viz.models import StyleOptions

logger = logging.getLogger(__name__)

ChartBuilder = Callable[[Any, StyleOptions], "dict[str, Any] | None"]
"""(dataset, style) -> renderer configuration or None."""


def _key(tag: ChartType | str) -> str:
    return tag.value if isinstance(tag, ChartType) else str(tag)


class ChartTypeRegistry:
    """Custom builders keyed by chart type tag."""

    def __init__(self) -> None:
        self._builders: dict[str, ChartBuilder] = {}

    def register(self, tag: ChartType | str, builder: ChartBuilder) -> None:
        """Register a builder for a tag."""
        key = _key(tag)
        if not key:
            raise ValueError("chart type tag must be a non-empty string")
        if not callable(builder):
            raise TypeError(f"builder for {key!r} must be callable")
        replaced = key in self._builders
        self._builders[key] = builder
        logger.info("Registered custom chart builder for type=%s (replaced=%s)", key, replaced)

    def get(self, tag: ChartType | str) -> ChartBuilder | None:
        """Get the builder for a tag. Returns None if not registered."""
        return self._builders.get(_key(tag))

    def __contains__(self, tag: object) -> bool:
        if not isinstance(tag, (str, ChartType)):
            return False
        return _key(tag) in self._builders

    def tags(self) -> list[str]:
        return sorted(self._builders)
