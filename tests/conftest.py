"""Pytest configuration and fixtures."""

import pytest

from src.config.settings import Settings
from src.services.viz.factory import OptionsFactory
from src.services.viz.models import ChartDatum, SeriesDatum
from src.services.viz.registry import ChartTypeRegistry


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(replay_delay_ms=0)


@pytest.fixture
def factory():
    """Options factory with its own empty registry."""
    return OptionsFactory(ChartTypeRegistry())


@pytest.fixture
def points():
    return [
        ChartDatum(name="Search", value=1048, description="Organic search"),
        ChartDatum(name="Direct", value=735),
        ChartDatum(name="Email", value=580),
    ]


@pytest.fixture
def two_series():
    months = ["Jan", "Feb", "Mar", "Apr", "May"]
    return [
        SeriesDatum(
            series_name="2023",
            data=tuple(ChartDatum(name=m, value=v) for m, v in zip(months, [10, 12, 9, 14, 18])),
        ),
        SeriesDatum(
            series_name="2024",
            data=tuple(ChartDatum(name=m, value=v) for m, v in zip(months, [11, 15, 13, 17, 21])),
        ),
    ]
