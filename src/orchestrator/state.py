"""Pipeline event model."""

from dataclasses import dataclass, field
from typing import Any, Optional

from src.services.viz.factory import config_to_jsonable


@dataclass
class ChartEvent:
    """One outcome of the chart stream pipeline."""

    step: str  # chart | error
    chart_type: str
    source_type: str = ""
    title: Optional[str] = None
    options: Optional[dict[str, Any]] = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.options is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form; tooltip formatters are dropped from the options."""
        data: dict[str, Any] = {
            "step": self.step,
            "chart_type": self.chart_type,
            "source_type": self.source_type,
            "title": self.title,
        }
        if self.options is not None:
            data["options"] = config_to_jsonable(self.options)
        if self.errors:
            data["errors"] = list(self.errors)
        return data
