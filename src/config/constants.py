"""
Constants, enums, and static values.
"""

from enum import Enum


class ChartType(str, Enum):
    """Chart types understood by the options factory."""

    BAR = "bar"
    HORIZONTAL_BAR = "horizontalBar"
    LINE = "line"
    AREA_LINE = "areaLine"
    PIE = "pie"
    DONUT = "donut"
    NIGHT_ANGLE = "nightAngle"
    STACKED_BAR = "stackedBar"
    GROUPED_BAR = "groupedBar"
    STACKED_LINE = "stackedLine"
    WATER_FALL = "waterFall"  # reserved
    STACKED_WATER_FALL = "stackedWaterFall"  # reserved

    @classmethod
    def parse(cls, value: "str | ChartType") -> "ChartType | None":
        """Return the matching member, or None for unknown tags."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def family(self) -> "ChartFamily":
        if self in MULTI_SERIES_TYPES:
            return ChartFamily.MULTI
        if self in RESERVED_TYPES:
            return ChartFamily.RESERVED
        return ChartFamily.SINGLE


class ChartFamily(str, Enum):
    """Dataset shape a chart type consumes."""

    SINGLE = "single"
    MULTI = "multi"
    RESERVED = "reserved"


MULTI_SERIES_TYPES = frozenset(
    {ChartType.STACKED_BAR, ChartType.GROUPED_BAR, ChartType.STACKED_LINE}
)

RESERVED_TYPES = frozenset({ChartType.WATER_FALL, ChartType.STACKED_WATER_FALL})


def is_multi_series(chart_type: str) -> bool:
    """Whether a tag expects a list of series rather than a flat list of points."""
    parsed = ChartType.parse(chart_type)
    return parsed is not None and parsed in MULTI_SERIES_TYPES


# Source (Chart.js) chart names -> ChartType
SOURCE_TYPE_MAP: dict[str, ChartType] = {
    "bar": ChartType.BAR,
    "line": ChartType.LINE,
    "pie": ChartType.PIE,
    "doughnut": ChartType.DONUT,
}


# Stream protocol
EVENT_PREFIX = "event:"
DATA_PREFIX = "data:"
DEFAULT_EVENT_NAME = "chartjs"


class PipelineStep(str, Enum):
    """Chart stream pipeline steps."""

    RECONSTRUCT = "reconstruct"
    DECODE = "decode"
    VALIDATE = "validate"
    BUILD = "build"
    CHART = "chart"
    ERROR = "error"
