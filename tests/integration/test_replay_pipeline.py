"""
End-to-end checks: every bundled sample stream is replayed through the
pipeline and must produce exactly one renderable chart.
"""

import pytest

from src.orchestrator.pipeline import ChartStreamPipeline
from src.services.replay import list_samples, replay_lines, resolve_sample_dir
from src.services.viz.factory import OptionsFactory, config_to_jsonable

EXPECTED = {
    "bar": ("bar", "Monthly Revenue H1"),
    "line": ("line", "Daily Active Users"),
    "pie": ("pie", "Traffic Sources"),
    "area": ("line", "Signups per Year"),
    "doughnut": ("donut", "Budget Allocation"),
}


@pytest.fixture
def pipeline(settings):
    return ChartStreamPipeline(settings, OptionsFactory())


def test_all_samples_are_bundled(settings):
    assert set(list_samples(settings.sample_data_dir)) == set(EXPECTED)


@pytest.mark.parametrize("sample", sorted(EXPECTED))
def test_sample_file_builds_one_chart(pipeline, settings, sample):
    path = resolve_sample_dir(settings.sample_data_dir) / list_samples(settings.sample_data_dir)[sample]
    events = pipeline.process_text(path.read_text(encoding="utf-8"))

    assert len(events) == 1
    event = events[0]
    chart_type, title = EXPECTED[sample]
    assert event.ok
    assert event.chart_type == chart_type
    assert event.title == title
    assert event.options["grid"]["bottom"] == 80
    assert event.options["color"] == settings.default_colors
    assert config_to_jsonable(event.options)["series"]


@pytest.mark.asyncio
async def test_replayed_stream_matches_batch_parse(pipeline, settings):
    path = resolve_sample_dir(settings.sample_data_dir) / list_samples(settings.sample_data_dir)["pie"]

    streamed = [e async for e in pipeline.process_stream(replay_lines(path, delay_ms=0))]
    batch = pipeline.process_text(path.read_text(encoding="utf-8"))

    assert [e.to_dict() for e in streamed] == [e.to_dict() for e in batch]
    assert [d["name"] for d in streamed[0].options["series"][0]["data"]] == [
        "Search",
        "Direct",
        "Email",
        "Social",
        "Referral",
    ]


def test_area_sample_stringifies_numeric_labels(pipeline, settings):
    path = resolve_sample_dir(settings.sample_data_dir) / list_samples(settings.sample_data_dir)["area"]
    event = pipeline.process_text(path.read_text(encoding="utf-8"))[0]
    assert all(isinstance(label, str) for label in event.options["xAxis"]["data"])
    assert "." not in "".join(event.options["xAxis"]["data"])
