"""Tests for the renderer configuration builders."""

from src.services.viz import builders
from src.services.viz.builders import DEFAULT_GRID, DEFAULT_LEGEND, TooltipFormatter, escape_html
from src.services.viz.models import ChartDatum, GridConfig, StyleOptions


def _points(n):
    return [ChartDatum(name=f"p{i}", value=i) for i in range(n)]


class TestEscapeHtml:
    def test_escapes_the_five_characters(self):
        assert escape_html("""&<>"'""") == "&amp;&lt;&gt;&quot;&#039;"

    def test_leaves_other_text_alone(self):
        assert escape_html("a/b = c") == "a/b = c"


class TestTooltipFormatter:
    def test_script_name_is_escaped(self):
        formatter = TooltipFormatter([ChartDatum(name="<script>", value=1)])
        html = formatter({"name": "<script>", "value": 1})
        assert "&lt;script&gt;" in html
        assert "<script>" not in html

    def test_description_is_looked_up_and_escaped(self):
        formatter = TooltipFormatter([ChartDatum(name="a", value=1, description='say "hi" & <b>bye</b>')])
        html = formatter({"name": "a", "value": 1})
        assert "say &quot;hi&quot; &amp; &lt;b&gt;bye&lt;/b&gt;" in html

    def test_value_and_percent(self):
        formatter = TooltipFormatter([])
        html = formatter({"name": "a", "value": 1234567, "percent": 12.5})
        assert html == "<strong>a</strong><br/>\nValue: 1,234,567 (12.5%)<br/>"

    def test_text_value_and_percent_are_escaped(self):
        formatter = TooltipFormatter([ChartDatum(name="a", value="<script>")])
        html = formatter({"name": "a", "value": "<script>", "percent": "<b>"})
        assert "<script>" not in html
        assert "<b>" not in html
        assert "Value: &lt;script&gt; (&lt;b&gt;%)" in html

    def test_missing_name_renders_nothing(self):
        formatter = TooltipFormatter([])
        assert formatter({"value": 1}) == ""
        assert formatter(None) == ""

    def test_holds_its_own_copy(self):
        data = [ChartDatum(name="a", value=1, description="first")]
        formatter = TooltipFormatter(data)
        data.clear()
        assert "first" in formatter({"name": "a", "value": 1})


class TestXYBuilder:
    def test_bar_axes_and_series(self):
        config = builders.build_bar(_points(3), StyleOptions(colors=["#111"]))
        assert config["color"] == ["#111"]
        assert config["xAxis"] == {"type": "category", "data": ["p0", "p1", "p2"], "axisLabel": {"rotate": 0}}
        assert config["yAxis"] == {"type": "value"}
        assert config["series"][0]["type"] == "bar"
        assert config["series"][0]["data"] == [0, 1, 2]
        assert config["series"][0]["barMaxWidth"] == 50
        assert "legend" not in config

    def test_rotation_above_ten_points(self):
        assert builders.build_line(_points(10), StyleOptions())["xAxis"]["axisLabel"]["rotate"] == 0
        assert builders.build_line(_points(11), StyleOptions())["xAxis"]["axisLabel"]["rotate"] == 45

    def test_horizontal_bar_swaps_axes(self):
        config = builders.build_horizontal_bar(_points(2), StyleOptions())
        assert config["xAxis"] == {"type": "value"}
        assert config["yAxis"]["type"] == "category"
        assert config["yAxis"]["data"] == ["p0", "p1"]
        assert config["series"][0]["itemStyle"] == {"borderRadius": [0, 4, 4, 0]}

    def test_area_line_fills(self):
        series = builders.build_area_line(_points(2), StyleOptions())["series"][0]
        assert series["type"] == "line"
        assert series["areaStyle"] == {"opacity": 0.5}

    def test_grid_override_is_shallow(self):
        style = StyleOptions(grid=GridConfig(bottom=80))
        grid = builders.build_bar(_points(2), style)["grid"]
        assert grid == {**DEFAULT_GRID, "bottom": 80}

    def test_grid_accepts_camel_case(self):
        style = StyleOptions.model_validate({"grid": {"containLabel": False}})
        assert builders.build_bar(_points(1), style)["grid"]["containLabel"] is False

    def test_tooltip_toggle(self):
        assert "tooltip" in builders.build_bar(_points(1), StyleOptions())
        assert "tooltip" not in builders.build_bar(_points(1), StyleOptions(tooltip=False))

    def test_empty_data_returns_none(self):
        assert builders.build_bar([], StyleOptions()) is None


class TestPieFamily:
    def test_pie_defaults(self, points):
        config = builders.build_pie(points, StyleOptions())
        series = config["series"][0]
        assert series["type"] == "pie"
        assert series["radius"] == "60%"
        assert series["center"] == ["50%", "40%"]
        assert series["data"][0] == {"name": "Search", "value": 1048, "description": "Organic search"}
        assert series["emphasis"]["itemStyle"]["shadowBlur"] == 10
        assert config["legend"] == dict(DEFAULT_LEGEND)

    def test_pie_legend_can_be_hidden(self, points):
        assert "legend" not in builders.build_pie(points, StyleOptions(show_legend=False))

    def test_donut_radius_band(self, points):
        assert builders.build_donut(points, StyleOptions())["series"][0]["radius"] == ["40%", "70%"]

    def test_nightingale_rose_mode(self, points):
        series = builders.build_nightingale(points, StyleOptions())["series"][0]
        assert series["radius"] == ["20%", "70%"]
        assert series["roseType"] == "area"


class TestMultiSeries:
    def test_stacked_bar(self, two_series):
        config = builders.build_stacked_bar(two_series, StyleOptions())
        assert config["xAxis"]["data"] == ["Jan", "Feb", "Mar", "Apr", "May"]
        assert [s["name"] for s in config["series"]] == ["2023", "2024"]
        assert all(s["stack"] == "total" and s["barMaxWidth"] == 50 for s in config["series"])
        assert config["tooltip"] == {"trigger": "axis", "axisPointer": {"type": "shadow"}}
        assert "legend" in config

    def test_grouped_bar_width(self, two_series):
        series = builders.build_grouped_bar(two_series, StyleOptions())["series"]
        assert all(s["barMaxWidth"] == 30 and "stack" not in s for s in series)

    def test_stacked_line_smooth_and_filled(self, two_series):
        config = builders.build_stacked_line(two_series, StyleOptions())
        series = config["series"][0]
        assert series["smooth"] is True
        assert series["areaStyle"] == {}
        assert "barMaxWidth" not in series
        assert config["tooltip"] == {"trigger": "axis"}


class TestStyleExtras:
    def test_title_and_subtitle(self, points):
        config = builders.build_pie(points, StyleOptions(title="T", subtitle="S"))
        assert config["title"] == {"text": "T", "subtext": "S", "left": "center"}

    def test_legend_position_top(self, points):
        legend = builders.build_pie(points, StyleOptions(legend_position="top"))["legend"]
        assert legend["top"] == 0
        assert "bottom" not in legend

    def test_legend_position_right(self, points):
        legend = builders.build_pie(points, StyleOptions.model_validate({"legendPosition": "right"}))["legend"]
        assert legend["right"] == 0
        assert legend["orient"] == "vertical"
        assert "left" not in legend

    def test_animation_and_theme(self, points):
        config = builders.build_bar(points, StyleOptions(animation=False, theme="dark"))
        assert config["animation"] is False
        assert config["darkMode"] is True

    def test_defaults_are_not_shared(self, points):
        first = builders.build_pie(points, StyleOptions())
        first["legend"]["padding"].append(99)
        second = builders.build_pie(points, StyleOptions())
        assert second["legend"]["padding"] == [50, 0, 0, 0]
