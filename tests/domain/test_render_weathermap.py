from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from domain.errors import DegenerateEdgeGeometryError
from domain.models import ObjectLinkSettings, Point, WeathermapConfig
from domain.scene import Group, Link, PathStroke, Rectangle, Text, Title
from domain.services.render_weathermap import WeathermapRenderer, render_weathermap


def _groups(scene_group: Group) -> list[Group]:
    return [child for child in scene_group.children if isinstance(child, Group)]


def _multistroke(edge_group: Group) -> Group:
    return next(child for child in edge_group.children if isinstance(child, Group))


def test_two_node_scenario_yields_colored_straight_edge(
    weathermap_config: WeathermapConfig,
) -> None:
    scene = render_weathermap(weathermap_config, {"cpu": 75})

    (edge_group,) = _groups(scene.layer("edges"))
    multistroke = _multistroke(edge_group)
    paths = [child for child in multistroke.children if isinstance(child, PathStroke)]

    assert multistroke.style["stroke"] == "rgb(191, 191, 191)"
    assert multistroke.style["fill"] == "none"
    assert "stroke-dasharray" not in multistroke.style
    assert len(paths) == 1
    assert paths[0].segment.start == Point(25, 10)
    assert paths[0].segment.end == Point(125, 10)
    assert paths[0].segment.is_straight
    assert paths[0].stroke_width == 4
    assert Title("core ↔ edge (75.00)") in multistroke.children


def test_missing_metric_value_uses_no_data_treatment(
    weathermap_config: WeathermapConfig,
) -> None:
    scene = render_weathermap(weathermap_config, {})

    (edge_group,) = _groups(scene.layer("edges"))
    multistroke = _multistroke(edge_group)
    assert multistroke.style == {"fill": "none", "stroke": "black", "stroke-dasharray": "1 5"}
    assert Title("core ↔ edge") in multistroke.children


def test_nodes_are_colored_by_fill_gradient(weathermap_config: WeathermapConfig) -> None:
    scene = render_weathermap(weathermap_config, {"core_load": 50})

    measured, unmeasured = _groups(scene.layer("nodes"))
    rect = next(child for child in measured.children if isinstance(child, Rectangle))
    assert rect.style["fill"] == "rgb(127, 127, 127)"
    assert rect.style["stroke"] == "gray"
    assert Title("core (50.00)") in measured.children

    plain_rect = next(child for child in unmeasured.children if isinstance(child, Rectangle))
    assert plain_rect.style["fill"] == "silver"
    assert plain_rect.style["stroke-dasharray"] == "4 2"
    assert not any(isinstance(child, Title) for child in unmeasured.children)


def test_node_without_value_is_drawn_as_no_data(weathermap_config: WeathermapConfig) -> None:
    scene = render_weathermap(weathermap_config, {})

    measured = _groups(scene.layer("nodes"))[0]
    rect = next(child for child in measured.children if isinstance(child, Rectangle))
    text = next(child for child in measured.children if isinstance(child, Text))
    assert rect.style["fill"] == "black"
    assert rect.style["stroke-dasharray"] == "1 5"
    assert text.style == {"fill": "white"}
    assert (text.x, text.y) == (5, 15)


def test_show_numbers_adds_values_to_labels(
    weathermap_config_factory: Callable[..., WeathermapConfig],
) -> None:
    config = weathermap_config_factory(showNumbers=True)
    scene = render_weathermap(config, {"cpu": 12.3456})

    measured = _groups(scene.layer("nodes"))[0]
    node_text = next(child for child in measured.children if isinstance(child, Text))
    assert node_text.text == "core (?)"

    (edge_group,) = _groups(scene.layer("edges"))
    value_text = next(child for child in edge_group.children if isinstance(child, Text))
    assert value_text.text == "12.35"
    assert (value_text.x, value_text.y) == (75, 10)


def test_edges_with_unknown_nodes_are_skipped(
    weathermap_config_factory: Callable[..., WeathermapConfig],
    caplog: pytest.LogCaptureFixture,
) -> None:
    config = weathermap_config_factory(
        weathermapEdges=[
            {"node1": "core", "node2": "ghost", "metricName": "cpu"},
            {"node1": "core", "node2": "edge", "metricName": "cpu"},
        ]
    )
    with caplog.at_level(logging.WARNING):
        scene = render_weathermap(config, {"cpu": 1})

    assert len(scene.layer("edges").children) == 1
    assert "ghost" in caplog.text


def test_dual_metric_edge_colors_each_half(
    weathermap_config_factory: Callable[..., WeathermapConfig],
) -> None:
    config = weathermap_config_factory(
        weathermapEdges=[
            {"node1": "core", "node2": "edge", "metricName": "tx", "metric2Name": "rx"},
        ]
    )
    scene = render_weathermap(config, {"tx": 0, "rx": 100})

    (edge_group,) = _groups(scene.layer("edges"))
    first, second = [child for child in edge_group.children if isinstance(child, Group)]
    assert first.style["stroke"] == "rgb(0, 0, 0)"
    assert second.style["stroke"] == "#ffffff"
    assert Title("core → edge (0.00)") in first.children
    assert Title("edge → core (100.00)") in second.children


def test_style_applies_dash_array_and_multistroke(
    weathermap_config_factory: Callable[..., WeathermapConfig],
) -> None:
    config = weathermap_config_factory(
        weathermapStyles=[{"name": "trunk", "strokeWidthArray": "2 1 2", "dashArray": "6 2"}],
        weathermapEdges=[
            {"node1": "core", "node2": "edge", "metricName": "cpu", "styleName": "trunk"},
        ],
    )
    scene = render_weathermap(config, {"cpu": 10})

    (edge_group,) = _groups(scene.layer("edges"))
    multistroke = _multistroke(edge_group)
    paths = [child for child in multistroke.children if isinstance(child, PathStroke)]
    assert multistroke.style["stroke-dasharray"] == "6 2"
    assert [path.stroke_width for path in paths] == [2, 2]
    assert paths[0].segment.start.y == pytest.approx(9)
    assert paths[1].segment.start.y == pytest.approx(12)


def test_links_wrap_nodes_and_edges(
    weathermap_config_factory: Callable[..., WeathermapConfig],
) -> None:
    payload_nodes = [
        {"label": "core", "x": 0, "y": 0, "width": 50, "height": 20, "linkParams": "var-n=core"},
        {"label": "edge", "x": 100, "y": 0, "width": 50, "height": 20},
    ]
    config = weathermap_config_factory(
        weathermapNodes=payload_nodes,
        link={
            "node": {"type": "absolute", "absoluteUri": "http://grafana/d/x?orgId=1"},
            "edge": {"type": "none"},
        },
    )
    scene = render_weathermap(config, {})

    first, second = scene.layer("nodes").children
    assert isinstance(first, Link)
    assert first.href == "http://grafana/d/x?orgId=1&var-n=core"
    assert isinstance(second, Link)
    assert second.href == "http://grafana/d/x?orgId=1"
    assert isinstance(scene.layer("edges").children[0], Group)


def test_custom_link_resolver_is_used(weathermap_config: WeathermapConfig) -> None:
    seen: list[ObjectLinkSettings] = []

    def resolver(settings: ObjectLinkSettings) -> str | None:
        seen.append(settings)
        return "https://example.com/base"

    scene = WeathermapRenderer(link_resolver=resolver).render(weathermap_config, {})

    assert len(seen) == 2
    assert all(isinstance(item, Link) for item in scene.layer("edges").children)


def test_labels_and_legend_layers(
    weathermap_config_factory: Callable[..., WeathermapConfig],
) -> None:
    config = weathermap_config_factory(
        weathermapLabels=[{"label": "Backbone", "x": 5, "y": 290}],
        legend={"type": "hb", "x": 10, "y": 250, "length": 200, "width": 10},
    )
    scene = render_weathermap(config, {})

    (label_group,) = scene.layer("labels").children
    assert isinstance(label_group, Group)
    assert label_group.children == (Text(x=5, y=290, text="Backbone"),)

    legend = scene.layer("legend")
    bars = [child for child in legend.children if isinstance(child, Group)]
    labels = [child for child in legend.children if isinstance(child, Text)]
    assert [bar.css_class for bar in bars] == ["stroke-legend", "fill-legend"]
    assert [label.text for label in labels] == ["0", "100"]
    assert labels[0].dy == "1em"
    assert [definition.gradient_id for definition in scene.definitions] == [
        "WeathermapLegendGradient-strokeColor-7",
        "WeathermapLegendGradient-fillColor-7",
    ]


def test_coincident_nodes_with_multistroke_style_raise(
    weathermap_config_factory: Callable[..., WeathermapConfig],
) -> None:
    config = weathermap_config_factory(
        weathermapNodes=[
            {"label": "core", "x": 0, "y": 0, "width": 50, "height": 20},
            {"label": "edge", "x": 0, "y": 0, "width": 50, "height": 20},
        ],
        weathermapStyles=[{"name": "trunk", "strokeWidthArray": "2 1 2"}],
        weathermapEdges=[{"node1": "core", "node2": "edge", "styleName": "trunk"}],
    )
    with pytest.raises(DegenerateEdgeGeometryError):
        render_weathermap(config, {})


def test_render_is_idempotent(weathermap_config: WeathermapConfig) -> None:
    assert render_weathermap(weathermap_config, {"cpu": 3}) == render_weathermap(
        weathermap_config, {"cpu": 3}
    )
