"""
Options factory: (chart type, dataset, style) -> renderer configuration.

Every call validates the dataset first; invalid data never reaches a
builder. A builder registered on the factory's registry replaces the
built-in one for that tag. Nothing raised by a builder escapes
:meth:`OptionsFactory.build`; failures come back as an ``OptionsResult``
without a config.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.config.constants import RESERVED_TYPES, ChartFamily, ChartType
from src.services.viz import builders
from src.services.viz.models import ChartDatum, OptionsResult, SeriesDatum, StyleOptions
from src.services.viz.registry import ChartBuilder, ChartTypeRegistry
from src.services.viz.validator import validate_dataset

logger = logging.getLogger(__name__)

BUILTIN_BUILDERS: dict[ChartType, ChartBuilder] = {
    ChartType.BAR: builders.build_bar,
    ChartType.HORIZONTAL_BAR: builders.build_horizontal_bar,
    ChartType.LINE: builders.build_line,
    ChartType.AREA_LINE: builders.build_area_line,
    ChartType.PIE: builders.build_pie,
    ChartType.DONUT: builders.build_donut,
    ChartType.NIGHT_ANGLE: builders.build_nightingale,
    ChartType.STACKED_BAR: builders.build_stacked_bar,
    ChartType.GROUPED_BAR: builders.build_grouped_bar,
    ChartType.STACKED_LINE: builders.build_stacked_line,
}

_unbuilt = [t.value for t in ChartType if t not in RESERVED_TYPES and t not in BUILTIN_BUILDERS]
if _unbuilt:
    raise RuntimeError(f"No built-in builder for chart types: {', '.join(_unbuilt)}")


def _tag(chart_type: ChartType | str) -> str:
    return chart_type.value if isinstance(chart_type, ChartType) else str(chart_type)


def _style(style: StyleOptions | Mapping[str, Any] | None) -> StyleOptions:
    if style is None:
        return StyleOptions()
    if isinstance(style, StyleOptions):
        return style
    return StyleOptions.model_validate(dict(style))


def _normalize(chart_type: ChartType, data: Any) -> tuple[Any, ...]:
    if chart_type.family is ChartFamily.MULTI:
        return tuple(SeriesDatum.from_obj(series) for series in data)
    return tuple(ChartDatum.from_obj(item) for item in data)


class OptionsFactory:
    """Builds renderer configurations, with its own builder registry."""

    def __init__(self, registry: ChartTypeRegistry | None = None) -> None:
        self.registry = registry if registry is not None else ChartTypeRegistry()

    def register_chart_type(self, tag: ChartType | str, builder: ChartBuilder) -> None:
        self.registry.register(tag, builder)

    def build(
        self,
        chart_type: ChartType | str,
        data: Any,
        style: StyleOptions | Mapping[str, Any] | None = None,
    ) -> OptionsResult:
        """Validate ``data`` and build the configuration for ``chart_type``."""
        tag = _tag(chart_type)

        try:
            validation = validate_dataset(tag, data)
            if not validation.valid:
                logger.error("Chart validation failed: %s", ", ".join(validation.errors))
                return OptionsResult(config=None, errors=validation.errors)

            style_options = _style(style)

            custom = self.registry.get(tag)
            if custom is not None:
                config = custom(data, style_options)
            else:
                builtin = ChartType.parse(tag)
                builder = BUILTIN_BUILDERS.get(builtin) if builtin is not None else None
                if builder is None:
                    message = f'Chart type "{tag}" not implemented'
                    logger.warning(message)
                    return OptionsResult(config=None, errors=(message,))
                config = builder(_normalize(builtin, data), style_options)
        except ValidationError as e:
            logger.error("Invalid style options for %r: %s", tag, e)
            return OptionsResult(config=None, errors=tuple(_style_errors(e)))
        except Exception as e:
            logger.error('Error generating chart options for "%s": %s', tag, e, exc_info=True)
            return OptionsResult(config=None, errors=(f"Error generating chart options: {e}",))

        if config is None:
            logger.warning("Builder for %r returned no configuration", tag)
            return OptionsResult(config=None, errors=(f'No configuration produced for "{tag}"',))
        return OptionsResult(config=config)

    def get_options(
        self,
        chart_type: ChartType | str,
        data: Any,
        style: StyleOptions | Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Configuration for ``chart_type``, or None on any failure."""
        return self.build(chart_type, data, style).config


def _style_errors(error: ValidationError) -> list[str]:
    return [
        f"Invalid style option {'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


# Process-wide factory
default_factory = OptionsFactory()


def get_options(
    chart_type: ChartType | str,
    data: Any,
    style: StyleOptions | Mapping[str, Any] | None = None,
) -> dict[str, Any] | None:
    return default_factory.get_options(chart_type, data, style)


def register_chart_type(tag: ChartType | str, builder: ChartBuilder) -> None:
    default_factory.register_chart_type(tag, builder)


def clone_options(config: dict[str, Any]) -> dict[str, Any]:
    """Independent deep copy of a configuration."""
    return copy.deepcopy(config)


def merge_options(*configs: Mapping[str, Any]) -> dict[str, Any]:
    """Top-level merge; later configs win, nested values are replaced whole."""
    merged: dict[str, Any] = {}
    for config in configs:
        merged.update(config)
    return merged


def config_to_jsonable(value: Any) -> Any:
    """Copy of a configuration with callables (tooltip formatters) removed."""
    if isinstance(value, Mapping):
        return {str(k): config_to_jsonable(v) for k, v in value.items() if not callable(v)}
    if isinstance(value, (list, tuple)):
        return [config_to_jsonable(v) for v in value if not callable(v)]
    return value
