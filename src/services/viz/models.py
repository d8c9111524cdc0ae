"""Visualization service models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ChartDatum:
    """A single named magnitude."""

    name: str
    value: float
    description: str | None = None
    group_id: str | None = None

    @classmethod
    def from_obj(cls, item: Any) -> "ChartDatum":
        """Build from a ChartDatum or a mapping with name/value keys."""
        if isinstance(item, cls):
            return item
        return cls(
            name=read_field(item, "name"),
            value=read_field(item, "value"),
            description=read_field(item, "description"),
            group_id=read_field(item, "groupId", "group_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.description is not None:
            out["description"] = self.description
        if self.group_id is not None:
            out["groupId"] = self.group_id
        return out


@dataclass(frozen=True)
class SeriesDatum:
    """One named series of points for multi-series charts."""

    series_name: str
    data: tuple[ChartDatum, ...] = ()

    @classmethod
    def from_obj(cls, item: Any) -> "SeriesDatum":
        if isinstance(item, cls):
            return item
        points = read_field(item, "data") or ()
        return cls(
            series_name=read_field(item, "seriesName", "series_name"),
            data=tuple(ChartDatum.from_obj(p) for p in points),
        )


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a dataset for a chart type."""

    valid: bool
    errors: tuple[str, ...] = ()


@dataclass
class OptionsResult:
    """Renderer configuration, or the reasons it could not be built."""

    config: dict[str, Any] | None
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.config is not None


@dataclass
class ChartDescriptor:
    """Chart payload decoded from the stream."""

    type: str
    data: list[ChartDatum]
    options: dict[str, Any] = field(default_factory=dict)


class GridConfig(BaseModel):
    """Partial override of the default grid box."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    top: int | str | None = None
    left: int | str | None = None
    right: int | str | None = None
    bottom: int | str | None = None
    contain_label: bool | None = Field(None, alias="containLabel")

    def overrides(self) -> dict[str, Any]:
        """Only the keys the caller actually set."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class StyleOptions(BaseModel):
    """Caller styling for a chart. Unset fields fall back to builder defaults."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    colors: list[str] = Field(default_factory=list)
    title: str | None = None
    subtitle: str | None = None
    show_legend: bool | None = Field(None, alias="showLegend")
    legend_position: Literal["top", "bottom", "left", "right"] | None = Field(
        None, alias="legendPosition"
    )
    tooltip: bool = True
    animation: bool | None = None
    grid: GridConfig | None = None
    theme: Literal["light", "dark"] | None = None


def read_field(item: Any, *names: str) -> Any:
    """Read the first present attribute/key among ``names``."""
    for name in names:
        if isinstance(item, Mapping):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    return None
