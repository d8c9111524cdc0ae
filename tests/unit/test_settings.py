"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from src.config.settings import DEFAULT_COLORS, Settings


def test_defaults(settings):
    assert settings.stream_event_name == "chartjs"
    assert settings.default_colors == DEFAULT_COLORS
    assert settings.fallback_chart_type == "bar"


def test_log_level_is_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="loud")


def test_negative_replay_delay():
    with pytest.raises(ValidationError):
        Settings(replay_delay_ms=-1)


def test_blank_event_name():
    with pytest.raises(ValidationError):
        Settings(stream_event_name="  ")


def test_env_override(monkeypatch):
    monkeypatch.setenv("STREAM_EVENT_NAME", "chart")
    assert Settings().stream_event_name == "chart"
