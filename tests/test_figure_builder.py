from __future__ import annotations

from tablekit.engine.chart_aggregator import aggregate
from tablekit.engine.figure_builder import build_chart_config, build_figure


def test_chart_config_defaults() -> None:
    config = build_chart_config("bar", [], "region", "units")

    assert config["type"] == "bar"
    assert config["data"] == []
    assert config["options"] == {
        "title": "Bar Chart",
        "xAxis": {"label": "region"},
        "yAxis": {"label": "units"},
        "color": "#3B82F6",
        "width": 800,
        "height": 600,
        "showLegend": True,
        "barWidth": 0.8,
    }


def test_chart_config_overrides_and_type_extras() -> None:
    config = build_chart_config(
        "line",
        [],
        "year",
        "rate",
        title="Rate by year",
        options={"color": "#ff0000", "width": 400, "showLegend": False},
    )
    options = config["options"]

    assert options["title"] == "Rate by year"
    assert options["color"] == "#ff0000"
    assert options["width"] == 400
    assert options["height"] == 600
    assert options["showLegend"] is False
    assert options["lineWidth"] == 2 and options["showPoints"] is True


def test_build_figure_without_data() -> None:
    assert build_figure(build_chart_config("pie", [], "kind", "v")) is None


def test_build_figure_bar() -> None:
    series = aggregate([{"g": "a", "v": 1}, {"g": "b", "v": 3}], "g", "v", "bar")

    figure = build_figure(build_chart_config("bar", series, "g", "v", title="Totals"))

    trace = figure["data"][0]
    assert trace["type"] == "bar"
    assert list(trace["x"]) == ["a", "b"]
    assert figure["layout"]["title"]["text"] == "Totals"


def test_build_figure_box_uses_precomputed_quartiles() -> None:
    table = [{"g": "a", "v": v} for v in (1, 2, 3, 4)]
    series = aggregate(table, "g", "v", "box")

    figure = build_figure(build_chart_config("box", series, "g", "v"))

    trace = figure["data"][0]
    assert trace["type"] == "box"
    assert {"q1", "median", "q3", "lowerfence", "upperfence"} <= set(trace)


def test_build_figure_histogram_and_pie() -> None:
    table = [{"v": i} for i in range(1, 11)]
    histogram = build_figure(build_chart_config("histogram", aggregate(table, "v", None, "histogram"), "v", None))
    pie = build_figure(
        build_chart_config("pie", aggregate([{"k": "a", "v": 2}], "k", "v", "pie"), "k", "v")
    )

    assert histogram["data"][0]["type"] == "bar"
    assert histogram["data"][0]["width"] == 2.25
    assert pie["data"][0]["type"] == "pie"
    assert list(pie["data"][0]["labels"]) == ["a"]
