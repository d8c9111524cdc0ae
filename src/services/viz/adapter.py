"""Chart.js data -> normalized chart points."""

from __future__ import annotations

import logging
from typing import Any

from src.services.viz.models import ChartDatum
from src.utils.json_value import JsonValue

logger = logging.getLogger(__name__)


def from_chartjs_data(chartjs_data: Any) -> list[ChartDatum]:
    """Convert a Chart.js ``data`` block into a list of ChartDatum.

    Only the first dataset is read. Indexes whose label is not a string or
    number, or whose value is not numeric, are skipped. Any structural
    mismatch returns an empty list.
    """
    root = chartjs_data if isinstance(chartjs_data, JsonValue) else JsonValue(chartjs_data)

    if root.as_dict() is None:
        logger.warning("Invalid Chart.js data format: expected an object, got %s", type(root.raw).__name__)
        return []

    labels = root.get("labels").as_list()
    datasets = root.get("datasets").as_list()
    values = root.path("datasets", 0, "data").as_list()
    if labels is None or not datasets or values is None:
        logger.warning("Chart.js data missing required structure (labels/datasets[0].data)")
        return []

    points: list[ChartDatum] = []
    first = root.path("datasets", 0, "data")
    for index, label in enumerate(root.get("labels").items()):
        name = _label_text(label)
        value = first.at(index).as_number()
        if name is None or value is None:
            continue
        points.append(ChartDatum(name=name, value=value))

    if len(points) < len(labels):
        logger.debug("Dropped %d of %d Chart.js points", len(labels) - len(points), len(labels))
    return points


def _label_text(label: JsonValue) -> str | None:
    text = label.as_str()
    if text is not None:
        return text
    number = label.as_number()
    if number is None:
        return None
    return _js_number_text(number)


def _js_number_text(number: int | float) -> str:
    """Render a number the way the source renders its labels (``2024``, not ``2024.0``)."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)
