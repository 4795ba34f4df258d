from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from domain.models import ColorChannel, Gradient, LegendSettings, format_number
from domain.services.gradients import GRADIENT_LINEAR, GRADIENT_STEPS

LEGEND_LENGTH = 100.0
LEGEND_WIDTH = 5.0
GRADIENT_ID_PREFIX = "WeathermapLegendGradient"


@dataclass(frozen=True)
class LegendSwatch:
    x: float
    width: float
    color: str


@dataclass(frozen=True)
class LegendRamp:
    gradient_id: str
    stops: Tuple[Tuple[float, str], ...]


@dataclass(frozen=True)
class LegendBar:
    channel: ColorChannel
    css_class: str
    transform: str
    ramp: Optional[LegendRamp]
    swatches: Tuple[LegendSwatch, ...]


@dataclass(frozen=True)
class LegendLabel:
    x: float
    y: float
    dy: float
    text_anchor: str
    text: str


@dataclass(frozen=True)
class LegendLayout:
    bars: Tuple[LegendBar, ...]
    labels: Tuple[LegendLabel, ...]


class LegendLayoutCalculator:
    def layout(
        self,
        settings: LegendSettings,
        gradient: Gradient,
        weathermap_id: Optional[str] = None,
    ) -> Optional[LegendLayout]:
        if settings.type == "":
            return None
        bars = (
            self._bar(settings, gradient, ColorChannel.STROKE, weathermap_id),
            self._bar(settings, gradient, ColorChannel.FILL, weathermap_id),
        )
        return LegendLayout(bars=bars, labels=tuple(self.labels(settings, gradient)))

    def ramp(
        self, gradient: Gradient, channel: ColorChannel, weathermap_id: Optional[str] = None
    ) -> LegendRamp:
        gradient_id = f"{GRADIENT_ID_PREFIX}-{channel.value}"
        if weathermap_id is not None:
            gradient_id = f"{gradient_id}-{weathermap_id}"
        stops = tuple((stop.position, stop.color(channel)) for stop in gradient.stops)
        return LegendRamp(gradient_id=gradient_id, stops=stops)

    def swatches(self, gradient: Gradient, channel: ColorChannel) -> List[LegendSwatch]:
        stops = gradient.stops
        if not stops:
            return []
        swatches = [
            LegendSwatch(
                x=previous.position,
                width=current.position - previous.position,
                color=previous.color(channel),
            )
            for previous, current in zip(stops, stops[1:])
        ]
        last = stops[-1]
        swatches.append(
            LegendSwatch(
                x=last.position,
                width=LEGEND_LENGTH - last.position,
                color=last.color(channel),
            )
        )
        return swatches

    def labels(self, settings: LegendSettings, gradient: Gradient) -> List[LegendLabel]:
        if settings.type == "" or settings.type[1] == "n":
            return []

        labels: List[LegendLabel] = []
        for stop in gradient.stops:
            if not stop.show_legend_label:
                continue

            x = settings.x
            y = settings.y
            dy = 0.0
            text_anchor = "start"
            scaled_position = stop.position * settings.length / LEGEND_LENGTH

            if settings.type[0] == "h":
                x += scaled_position
                text_anchor = "middle"
                if settings.type == "hb":
                    y += 2 * settings.width
                    dy = 1.0
            elif settings.type[0] == "v":
                # the top of a vertical legend is the highest value
                y += settings.length - scaled_position
                dy = 0.4
                if settings.type == "vl":
                    text_anchor = "end"
                elif settings.type == "vr":
                    text_anchor = "start"
                    x += 2 * settings.width

            labels.append(
                LegendLabel(
                    x=x, y=y, dy=dy, text_anchor=text_anchor, text=format_number(stop.position)
                )
            )
        return labels

    def _bar(
        self,
        settings: LegendSettings,
        gradient: Gradient,
        channel: ColorChannel,
        weathermap_id: Optional[str],
    ) -> LegendBar:
        ramp: Optional[LegendRamp] = None
        swatches: Tuple[LegendSwatch, ...] = ()
        if gradient.type == GRADIENT_LINEAR:
            ramp = self.ramp(gradient, channel, weathermap_id)
        elif gradient.type == GRADIENT_STEPS:
            swatches = tuple(self.swatches(gradient, channel))
        css_class = "stroke-legend" if channel is ColorChannel.STROKE else "fill-legend"
        return LegendBar(
            channel=channel,
            css_class=css_class,
            transform=self._transform(settings, channel),
            ramp=ramp,
            swatches=swatches,
        )

    def _transform(self, settings: LegendSettings, channel: ColorChannel) -> str:
        scale = (
            f"scale({format_number(settings.length / LEGEND_LENGTH)} "
            f"{format_number(settings.width / LEGEND_WIDTH)})"
        )
        # the fill bar sits next to the stroke bar, one legend width further out
        shift = settings.width if channel is ColorChannel.FILL else 0.0
        if settings.type[0] == "h":
            origin = f"translate({format_number(settings.x)} {format_number(settings.y + shift)})"
            return f"{origin} {scale}"
        origin = (
            f"translate({format_number(settings.x + shift)} "
            f"{format_number(settings.y + settings.length)})"
        )
        return f"{origin} rotate(-90) {scale}"
