"""Tests for the Chart.js data adapter."""

import pytest

from src.services.viz.adapter import from_chartjs_data
from src.services.viz.models import ChartDatum
from src.utils.json_value import JsonValue


def test_drops_non_numeric_values():
    result = from_chartjs_data({"labels": ["a", "b", "c"], "datasets": [{"data": [1, 2, "x"]}]})
    assert result == [ChartDatum(name="a", value=1), ChartDatum(name="b", value=2)]


def test_numeric_labels_become_strings():
    result = from_chartjs_data({"labels": [2023, 2024.0, 1.5], "datasets": [{"data": [1, 2, 3]}]})
    assert [d.name for d in result] == ["2023", "2024", "1.5"]


def test_invalid_labels_are_dropped():
    result = from_chartjs_data({"labels": ["a", None, {"x": 1}, True], "datasets": [{"data": [1, 2, 3, 4]}]})
    assert [d.name for d in result] == ["a"]


def test_only_first_dataset_is_used():
    data = {"labels": ["a", "b"], "datasets": [{"data": [1, 2]}, {"data": [100, 200]}]}
    assert [d.value for d in from_chartjs_data(data)] == [1, 2]


def test_shorter_data_drops_trailing_labels():
    data = {"labels": ["a", "b", "c"], "datasets": [{"data": [1]}]}
    assert [d.name for d in from_chartjs_data(data)] == ["a"]


def test_bool_values_are_not_numbers():
    data = {"labels": ["a", "b"], "datasets": [{"data": [True, 3]}]}
    assert [d.name for d in from_chartjs_data(data)] == ["b"]


def test_accepts_json_value():
    data = JsonValue({"labels": ["a"], "datasets": [{"data": [7]}]})
    assert from_chartjs_data(data) == [ChartDatum(name="a", value=7)]


@pytest.mark.parametrize(
    "malformed",
    [
        None,
        "labels",
        42,
        [],
        {},
        {"labels": ["a"]},
        {"datasets": [{"data": [1]}]},
        {"labels": ["a"], "datasets": []},
        {"labels": ["a"], "datasets": [{}]},
        {"labels": ["a"], "datasets": [{"data": "1"}]},
        {"labels": "a", "datasets": [{"data": [1]}]},
        {"labels": ["a"], "datasets": {"data": [1]}},
    ],
)
def test_malformed_input_returns_empty(malformed):
    assert from_chartjs_data(malformed) == []
