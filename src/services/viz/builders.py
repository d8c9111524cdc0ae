"""
Renderer configuration builders.

Three shared shapes cover the built-in chart types:
  XY            bar, horizontalBar, line, areaLine
  pie family    pie, donut, nightAngle
  multi-series  stackedBar, groupedBar, stackedLine

Builders take an already validated dataset and return a plain dict in the
ECharts option format. Defaults are combined with caller overrides by a
top-level (shallow) merge only.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from src.services.viz.models import ChartDatum, SeriesDatum, StyleOptions

DEFAULT_GRID: Mapping[str, Any] = {
    "top": 10,
    "left": 20,
    "right": 20,
    "bottom": 10,
    "containLabel": True,
}

DEFAULT_LEGEND: Mapping[str, Any] = {
    "bottom": 0,
    "orient": "horizontal",
    "left": "center",
    "type": "scroll",
    "itemGap": 20,
    "pageButtonItemGap": 5,
    "pageButtonGap": 5,
    "width": "90%",
    "padding": [50, 0, 0, 0],
}

# Keys replacing the bottom anchor when a legend position is requested
_LEGEND_POSITIONS: Mapping[str, Mapping[str, Any]] = {
    "top": {"top": 0, "padding": [0, 0, 20, 0]},
    "left": {"left": 0, "top": "middle", "orient": "vertical", "width": None, "padding": 5},
    "right": {"right": 0, "left": None, "top": "middle", "orient": "vertical", "width": None, "padding": 5},
}

DEFAULT_TOOLTIP: Mapping[str, Any] = {
    "trigger": "item",
    "backgroundColor": "rgba(255, 255, 255, 0.95)",
    "borderColor": "#ccc",
    "borderWidth": 1,
    "textStyle": {"color": "#333"},
}

PIE_EMPHASIS: Mapping[str, Any] = {
    "itemStyle": {
        "shadowBlur": 10,
        "shadowOffsetX": 0,
        "shadowColor": "rgba(0, 0, 0, 0.5)",
    },
}

ROTATE_LABELS_ABOVE = 10

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` for safe interpolation into tooltip HTML."""
    return text.translate(_HTML_ESCAPES)


def _format_value(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:,}"
    return escape_html(str(value or ""))


class TooltipFormatter:
    """Item tooltip renderer.

    Holds its own copy of the dataset so descriptions can be looked up by
    point name when the renderer calls it with ``{name, value, percent}``.
    """

    def __init__(self, data: Sequence[ChartDatum]) -> None:
        self.data = tuple(data)

    def __call__(self, params: Any) -> str:
        if not isinstance(params, Mapping):
            return ""
        name = params.get("name")
        if not name:
            return ""

        item = next((d for d in self.data if d.name == name), None)
        percent = params.get("percent")
        percent_text = f" ({escape_html(str(percent))}%)" if percent else ""
        description = escape_html(str(item.description)) if item and item.description else ""

        return (
            f"<strong>{escape_html(str(name))}</strong><br/>\n"
            f"Value: {_format_value(params.get('value'))}{percent_text}<br/>\n"
            f"{description}"
        ).strip()

    def __repr__(self) -> str:
        return f"TooltipFormatter(<{len(self.data)} points>)"


# ---------------------------------------------------------------------------
# Shared components
# ---------------------------------------------------------------------------


def get_grid(style: StyleOptions) -> dict[str, Any]:
    grid = dict(DEFAULT_GRID)
    if style.grid is not None:
        grid.update(style.grid.overrides())
    return grid


def get_legend(style: StyleOptions) -> dict[str, Any]:
    legend = copy.deepcopy(dict(DEFAULT_LEGEND))
    position = style.legend_position
    if position and position != "bottom":
        legend.pop("bottom")
        legend.update(_LEGEND_POSITIONS[position])
        legend = {k: v for k, v in legend.items() if v is not None}
    return legend


def get_tooltip(data: Sequence[ChartDatum]) -> dict[str, Any]:
    return {**copy.deepcopy(dict(DEFAULT_TOOLTIP)), "trigger": "item", "formatter": TooltipFormatter(data)}


def _base(style: StyleOptions, tooltip: dict[str, Any], show_legend: bool) -> dict[str, Any]:
    config: dict[str, Any] = {"color": list(style.colors), "grid": get_grid(style)}
    if style.tooltip:
        config["tooltip"] = tooltip
    if show_legend:
        config["legend"] = get_legend(style)
    if style.title or style.subtitle:
        title = {"text": style.title, "subtext": style.subtitle, "left": "center"}
        config["title"] = {k: v for k, v in title.items() if v is not None}
    if style.animation is not None:
        config["animation"] = style.animation
    if style.theme == "dark":
        config["darkMode"] = True
    return config


def _legend_flag(style: StyleOptions, default: bool) -> bool:
    return default if style.show_legend is None else style.show_legend


# ---------------------------------------------------------------------------
# XY
# ---------------------------------------------------------------------------


def build_xy_chart(
    data: Sequence[ChartDatum],
    style: StyleOptions,
    series_config: Mapping[str, Any],
    horizontal: bool = False,
) -> dict[str, Any] | None:
    """Single-series chart on a category axis and a value axis."""
    if not data:
        return None

    names = [d.name for d in data]
    category_axis: dict[str, Any] = {"type": "category", "data": names}
    if not horizontal:
        category_axis["axisLabel"] = {"rotate": 45 if len(data) > ROTATE_LABELS_ABOVE else 0}
    value_axis = {"type": "value"}

    config = _base(style, get_tooltip(data), _legend_flag(style, False))
    config["xAxis"] = value_axis if horizontal else category_axis
    config["yAxis"] = category_axis if horizontal else value_axis
    config["series"] = [{"data": [d.value for d in data], **series_config}]
    return config


def build_bar(data: Sequence[ChartDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_xy_chart(
        data,
        style,
        {"type": "bar", "barMaxWidth": 50, "itemStyle": {"borderRadius": [4, 4, 0, 0]}},
    )


def build_horizontal_bar(data: Sequence[ChartDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_xy_chart(
        data,
        style,
        {"type": "bar", "barMaxWidth": 50, "itemStyle": {"borderRadius": [0, 4, 4, 0]}},
        horizontal=True,
    )


def build_line(data: Sequence[ChartDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_xy_chart(
        data,
        style,
        {"type": "line", "smooth": True, "symbol": "circle", "symbolSize": 8, "lineStyle": {"width": 3}},
    )


def build_area_line(data: Sequence[ChartDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_xy_chart(
        data,
        style,
        {"type": "line", "smooth": True, "areaStyle": {"opacity": 0.5}, "lineStyle": {"width": 2}},
    )


# ---------------------------------------------------------------------------
# Pie family
# ---------------------------------------------------------------------------


def build_pie_chart(
    data: Sequence[ChartDatum],
    style: StyleOptions,
    series_override: Mapping[str, Any] | None = None,
) -> dict[str, Any] | None:
    """Pie chart; ``series_override`` replaces top-level keys of the pie series."""
    if not data:
        return None

    series: dict[str, Any] = {
        "type": "pie",
        "radius": "60%",
        "center": ["50%", "40%"],
        "data": [d.to_dict() for d in data],
        "emphasis": copy.deepcopy(dict(PIE_EMPHASIS)),
    }
    if series_override:
        series.update(series_override)

    config = _base(style, get_tooltip(data), _legend_flag(style, True))
    config["series"] = [series]
    return config


def build_pie(data: Sequence[ChartDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_pie_chart(data, style)


def build_donut(data: Sequence[ChartDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_pie_chart(data, style, {"radius": ["40%", "70%"]})


def build_nightingale(data: Sequence[ChartDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_pie_chart(data, style, {"radius": ["20%", "70%"], "roseType": "area"})


# ---------------------------------------------------------------------------
# Multi-series
# ---------------------------------------------------------------------------


def build_multi_series_chart(
    data: Sequence[SeriesDatum],
    style: StyleOptions,
    series_config: Mapping[str, Any],
) -> dict[str, Any] | None:
    """One renderer series per input series on a shared category axis.

    Categories come from the first series only; every series is expected to
    list its points in that same order.
    """
    if not data or not data[0].data:
        return None

    is_bar = series_config.get("type") == "bar"
    bar_width = {"barMaxWidth": 50 if series_config.get("stack") else 30} if is_bar else {}

    tooltip: dict[str, Any] = {"trigger": "axis"}
    if is_bar:
        tooltip["axisPointer"] = {"type": "shadow"}

    config = _base(style, tooltip, _legend_flag(style, True))
    config["xAxis"] = {"type": "category", "data": [d.name for d in data[0].data]}
    config["yAxis"] = {"type": "value"}
    config["series"] = [
        {
            "name": series.series_name,
            "data": [d.value for d in series.data],
            **bar_width,
            **copy.deepcopy(dict(series_config)),
        }
        for series in data
    ]
    return config


def build_stacked_bar(data: Sequence[SeriesDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_multi_series_chart(data, style, {"type": "bar", "stack": "total"})


def build_grouped_bar(data: Sequence[SeriesDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_multi_series_chart(data, style, {"type": "bar"})


def build_stacked_line(data: Sequence[SeriesDatum], style: StyleOptions) -> dict[str, Any] | None:
    return build_multi_series_chart(
        data,
        style,
        {"type": "line", "stack": "total", "smooth": True, "areaStyle": {}},
    )
