from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from domain.models import (
    NO_DATA_FILL,
    NO_DATA_STROKE,
    NO_DATA_TEXT_FILL,
    NODE_STROKE_COLOR,
    NODE_STROKE_WIDTH,
    UNMEASURED_NODE_FILL,
    ColorChannel,
    CurrentValueMap,
    Gradient,
    WeathermapConfig,
    WeathermapEdge,
    WeathermapNode,
    WeathermapStyle,
    format_number,
)
from domain.scene import (
    GradientDefinition,
    GradientDefinitionStop,
    Group,
    Link,
    PathStroke,
    Rectangle,
    SceneItem,
    StyleMap,
    Text,
    Title,
    WeathermapScene,
)
from domain.services.bezier import segment_midpoint
from domain.services.edge_geometry import EdgeGeometryPlanner, PlannedEdgeSegment
from domain.services.gradients import color_for_value
from domain.services.legend_layout import (
    LEGEND_LENGTH,
    LEGEND_WIDTH,
    LegendBar,
    LegendLayout,
    LegendLayoutCalculator,
)
from domain.services.links import LinkResolver, append_link_params, resolve_object_link
from domain.services.stroke_offsets import StrokeOffsetPlanner

logger = logging.getLogger(__name__)

MISSING_VALUE_TEXT = "?"


@dataclass(frozen=True)
class RenderContext:
    config: WeathermapConfig
    gradient: Gradient
    values: CurrentValueMap
    nodes_by_label: Dict[str, WeathermapNode]
    styles_by_name: Dict[str, WeathermapStyle]
    node_link_base: Optional[str]
    edge_link_base: Optional[str]

    def value_for(self, metric_name: Optional[str]) -> Optional[float]:
        if not metric_name or metric_name not in self.values:
            return None
        return self.values[metric_name]


class WeathermapRenderer:
    def __init__(
        self,
        link_resolver: Optional[LinkResolver] = resolve_object_link,
        edge_planner: Optional[EdgeGeometryPlanner] = None,
        stroke_planner: Optional[StrokeOffsetPlanner] = None,
        legend_calculator: Optional[LegendLayoutCalculator] = None,
    ) -> None:
        self.link_resolver = link_resolver
        self.edge_planner = edge_planner or EdgeGeometryPlanner()
        self.stroke_planner = stroke_planner or StrokeOffsetPlanner()
        self.legend_calculator = legend_calculator or LegendLayoutCalculator()

    def render(
        self,
        config: WeathermapConfig,
        values: CurrentValueMap,
        add_view_box: bool = False,
    ) -> WeathermapScene:
        context = self._build_context(config, values)

        definitions: List[GradientDefinition] = []
        legend_layer = self._build_legend(context, definitions)
        edge_layer = Group(children=tuple(self._build_edges(context)), css_class="edges")
        node_layer = Group(children=tuple(self._build_nodes(context)), css_class="nodes")
        label_layer = Group(children=tuple(self._build_labels(context)), css_class="labels")

        logger.debug(
            "Rendered weathermap %s: %d nodes, %d of %d edges, %d labels",
            config.id,
            len(node_layer.children),
            len(edge_layer.children),
            len(config.weathermap_edges),
            len(label_layer.children),
        )
        return WeathermapScene(
            width=config.canvas_size.width,
            height=config.canvas_size.height,
            definitions=tuple(definitions),
            layers=(legend_layer, edge_layer, node_layer, label_layer),
            add_view_box=add_view_box,
        )

    def _build_context(self, config: WeathermapConfig, values: CurrentValueMap) -> RenderContext:
        node_link_base: Optional[str] = None
        edge_link_base: Optional[str] = None
        if self.link_resolver is not None:
            node_link_base = self.link_resolver(config.link.node)
            edge_link_base = self.link_resolver(config.link.edge)
        return RenderContext(
            config=config,
            gradient=config.gradient.with_sorted_stops(),
            values=dict(values),
            nodes_by_label=config.node_lookup(),
            styles_by_name=config.style_lookup(),
            node_link_base=node_link_base,
            edge_link_base=edge_link_base,
        )

    def _build_nodes(self, context: RenderContext) -> List[SceneItem]:
        return [
            self._wrap_in_link(
                self._build_node(context, node), context.node_link_base, node.link_params
            )
            for node in context.config.weathermap_nodes
        ]

    def _build_node(self, context: RenderContext, node: WeathermapNode) -> Group:
        config = context.config
        rect_style: StyleMap = {"stroke": NODE_STROKE_COLOR, "stroke-width": NODE_STROKE_WIDTH}
        text_style: StyleMap = {}

        value = context.value_for(node.metric_name)
        if not node.metric_name:
            rect_style["fill"] = UNMEASURED_NODE_FILL
            rect_style["stroke-dasharray"] = config.unmeasured_dash_array
        elif value is not None:
            rect_style["fill"] = color_for_value(context.gradient, ColorChannel.FILL, value)
        else:
            text_style["fill"] = NO_DATA_TEXT_FILL
            rect_style["fill"] = NO_DATA_FILL
            rect_style["stroke-dasharray"] = config.no_value_dash_array

        if config.show_numbers and node.metric_name is not None:
            shown = format_number(value) if value is not None else MISSING_VALUE_TEXT
            label_text = f"{node.label} ({shown})"
        else:
            label_text = node.label

        children: List[SceneItem] = []
        if value is not None:
            children.append(Title(f"{node.label} ({value:.2f})"))
        children.append(Rectangle(node.x, node.y, node.width, node.height, style=rect_style))
        children.append(
            Text(
                x=node.x + config.text_offsets.left,
                y=node.y + node.height - config.text_offsets.bottom,
                text=label_text,
                style=text_style,
            )
        )
        return Group(children=tuple(children))

    def _build_edges(self, context: RenderContext) -> List[SceneItem]:
        items: List[SceneItem] = []
        for edge in context.config.weathermap_edges:
            node1 = context.nodes_by_label.get(edge.node1)
            node2 = context.nodes_by_label.get(edge.node2)
            if node1 is None or node2 is None:
                logger.warning(
                    "Skipping edge %s -> %s: unknown node label", edge.node1, edge.node2
                )
                continue
            group = self._build_edge(context, edge, node1, node2)
            items.append(self._wrap_in_link(group, context.edge_link_base, edge.link_params))
        return items

    def _build_edge(
        self,
        context: RenderContext,
        edge: WeathermapEdge,
        node1: WeathermapNode,
        node2: WeathermapNode,
    ) -> Group:
        style = context.styles_by_name.get(edge.style_name) if edge.style_name else None
        children: List[SceneItem] = []
        for planned in self.edge_planner.plan(edge, node1, node2):
            children.extend(self._build_edge_segment(context, planned, style))
        return Group(children=tuple(children))

    def _build_edge_segment(
        self,
        context: RenderContext,
        planned: PlannedEdgeSegment,
        style: Optional[WeathermapStyle],
    ) -> List[SceneItem]:
        config = context.config
        value = context.value_for(planned.metric_name)

        group_style: StyleMap = {"fill": "none"}
        if value is not None:
            group_style["stroke"] = color_for_value(context.gradient, ColorChannel.STROKE, value)
            if style is not None and style.dash_array:
                group_style["stroke-dasharray"] = style.dash_array
        else:
            group_style["stroke"] = NO_DATA_STROKE
            group_style["stroke-dasharray"] = config.no_value_dash_array

        strokes: List[SceneItem] = []
        if planned.title:
            title = planned.title if value is None else f"{planned.title} ({value:.2f})"
            strokes.append(Title(title))
        for stroke in self.stroke_planner.plan(planned.segment, config.stroke_width, style):
            strokes.append(PathStroke(segment=stroke.segment, stroke_width=stroke.stroke_width))

        items: List[SceneItem] = [Group(children=tuple(strokes), style=group_style)]
        if config.show_numbers:
            mid = segment_midpoint(planned.segment)
            shown = f"{value:.2f}" if value is not None else MISSING_VALUE_TEXT
            items.append(Text(x=mid.x, y=mid.y, text=shown))
        return items

    def _build_labels(self, context: RenderContext) -> List[SceneItem]:
        return [
            Group(children=(Text(x=label.x, y=label.y, text=label.label),))
            for label in context.config.weathermap_labels
        ]

    def _build_legend(
        self, context: RenderContext, definitions: List[GradientDefinition]
    ) -> Group:
        config = context.config
        layout = self.legend_calculator.layout(config.legend, context.gradient, str(config.id))
        if layout is None:
            return Group(css_class="legend")

        children: List[SceneItem] = []
        for bar in layout.bars:
            children.append(self._legend_bar_group(bar, definitions))
        children.extend(self._legend_labels(layout))
        return Group(children=tuple(children), css_class="legend")

    def _legend_bar_group(self, bar: LegendBar, definitions: List[GradientDefinition]) -> Group:
        shapes: List[SceneItem] = []
        if bar.ramp is not None:
            definitions.append(
                GradientDefinition(
                    gradient_id=bar.ramp.gradient_id,
                    stops=tuple(
                        GradientDefinitionStop(offset_percent=offset, color=color)
                        for offset, color in bar.ramp.stops
                    ),
                )
            )
            shapes.append(
                Rectangle(
                    0.0,
                    0.0,
                    LEGEND_LENGTH,
                    LEGEND_WIDTH,
                    style={"fill": f"url(#{bar.ramp.gradient_id})"},
                )
            )
        for swatch in bar.swatches:
            shapes.append(
                Rectangle(swatch.x, 0.0, swatch.width, LEGEND_WIDTH, style={"fill": swatch.color})
            )
        return Group(children=tuple(shapes), css_class=bar.css_class, transform=bar.transform)

    def _legend_labels(self, layout: LegendLayout) -> List[SceneItem]:
        return [
            Text(
                x=label.x,
                y=label.y,
                text=label.text,
                css_class="legend-label",
                dy=f"{format_number(label.dy)}em",
                style={"text-anchor": label.text_anchor},
            )
            for label in layout.labels
        ]

    def _wrap_in_link(
        self, group: Group, link_uri_base: Optional[str], link_params: Optional[str]
    ) -> SceneItem:
        href = append_link_params(link_uri_base, link_params)
        if href is None:
            return group
        return Link(href=href, child=group)


def render_weathermap(
    config: WeathermapConfig,
    values: CurrentValueMap,
    link_resolver: Optional[LinkResolver] = resolve_object_link,
    add_view_box: bool = False,
) -> WeathermapScene:
    return WeathermapRenderer(link_resolver=link_resolver).render(
        config, values, add_view_box=add_view_box
    )
