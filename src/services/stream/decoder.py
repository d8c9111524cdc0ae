"""Decode completed stream payloads into chart descriptors."""

from __future__ import annotations

import logging
from typing import Any

from src.services.viz.adapter import from_chartjs_data
from src.services.viz.models import ChartDescriptor
from src.utils.json_value import JsonValue, parse_json

logger = logging.getLogger(__name__)

DESCRIPTOR_KEY = "chartjs"


def decode_payload(text: str) -> ChartDescriptor | None:
    """Parse one payload; ``None`` (logged) when it cannot be used."""
    parsed = parse_json(text)
    if parsed is None:
        logger.error("Parse error: dropping payload %r", text[:200])
        return None

    descriptor = parsed.get(DESCRIPTOR_KEY)
    if descriptor.as_dict() is None:
        logger.error("Payload has no %r object, dropping it", DESCRIPTOR_KEY)
        return None

    return ChartDescriptor(
        type=descriptor.get("type").as_str() or "",
        data=from_chartjs_data(descriptor.get("data")),
        options=descriptor.get("options").as_dict() or {},
    )


def descriptor_title(options: dict[str, Any] | JsonValue) -> str | None:
    """Title text from Chart.js ``options.plugins.title.text``."""
    root = options if isinstance(options, JsonValue) else JsonValue(options)
    return root.path("plugins", "title", "text").as_str()
