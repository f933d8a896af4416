"""
Module that contains the CallStackChartDrawer class which takes the options of a function call,
lays out its stack frame and hands a declarative chart description of it to a rendering backend.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from callstack_chart.chart import ChartConfig
from callstack_chart.config import DrawConfig
from callstack_chart.draw.backend import ChartBackend
from callstack_chart.layout import BarSegment, FrameLayout

logger = logging.getLogger(__name__)


def _format_bytes(size: int | float) -> int | float:
    # whole number sizes print without a fractional part
    return int(size) if float(size).is_integer() else size


@dataclass(slots=True)
class ChartDescription:
    """Everything a backend needs to plot a chart: target container, bar traces, layout and render options."""

    target_id: str
    frame: FrameLayout
    data: list[dict] = field(default_factory=list)
    layout: dict = field(default_factory=dict)
    options: dict = field(default_factory=dict)


class CallStackChartDrawer:
    """Class that describes a call stack chart and draws it using a backend."""

    def __init__(self, config: DrawConfig, backend: ChartBackend) -> None:
        self.cfg = config
        self.backend = backend

    def bar(self, segment: BarSegment) -> dict:
        """Return a single-bar trace for a segment, stacked onto the others in the same column."""
        return {
            "x": [segment.category],
            "y": [segment.size],
            "type": "bar",
            "hoverinfo": "y",
            "marker": {
                "color": segment.color,
                "line": {"color": self.cfg.outline_color, "width": self.cfg.outline_width},
            },
            "textposition": "inside",
            "insidetextanchor": "middle",
            "text": segment.text,
        }

    def chart_layout(self, chart: ChartConfig, frame: FrameLayout) -> dict:
        """Return the layout with axes, frame annotations and the call boundary/frame overlay shapes."""
        ret_size = chart.return_value_size
        font = {"color": self.cfg.annotation_color, "size": self.cfg.annotation_size}
        return {
            "barmode": "stack",
            "title": {"text": chart.title},
            "xaxis": {"title": {"text": self.cfg.x_axis_title}},
            "yaxis": {"title": {"text": self.cfg.y_axis_title}, "range": [0, chart.y_max]},
            "showlegend": False,
            "uniformtext": {"mode": "hide", "minsize": self.cfg.uniformtext_min_size},
            "annotations": [
                {
                    "x": 0.33,
                    "y": ret_size + frame.size / 2,
                    "xref": "paper",
                    "yref": "y",
                    "text": self.cfg.function_call_legend,
                    "showarrow": False,
                    "font": font,
                    "textangle": 270,
                },
                {
                    "x": 0.5,
                    "y": ret_size + frame.size + 2,
                    "xref": "paper",
                    "yref": "y",
                    "text": self.cfg.frame_size_legend.format(size=_format_bytes(frame.size)),
                    "showarrow": False,
                    "font": font,
                },
            ],
            "shapes": [
                {
                    "type": "line",
                    "x0": 0,
                    "y0": ret_size,
                    "x1": 1,
                    "y1": ret_size,
                    "xref": "paper",
                    "yref": "y",
                    "line": {"color": self.cfg.call_boundary_color, "width": self.cfg.call_boundary_width},
                },
                {
                    "type": "rect",
                    "x0": self.cfg.frame_box_x0,
                    "x1": self.cfg.frame_box_x1,
                    "y0": ret_size - self.cfg.frame_box_margin,
                    "y1": ret_size + frame.size + self.cfg.frame_box_margin,
                    "xref": "x",
                    "yref": "y",
                    "line": {
                        "color": self.cfg.frame_box_color,
                        "width": self.cfg.frame_box_width,
                        "dash": self.cfg.frame_box_dash,
                    },
                },
            ],
        }

    def render_options(self) -> dict:
        """Return the options passed to the backend alongside traces and layout."""
        return {
            "responsive": self.cfg.responsive,
            "displayModeBar": self.cfg.display_mode_bar,
            "staticPlot": self.cfg.static_plot,
        }

    def describe(self, options: Mapping[str, Any] | ChartConfig) -> ChartDescription:
        """Validate chart options and build the full chart description, without drawing anything."""
        chart = ChartConfig.from_options(options)
        frame = FrameLayout.from_chart(chart, self.cfg)
        if chart.y_max < chart.return_value_size + frame.size:
            logger.warning(
                "yMax (%s) of chart %s is below the top of its %s byte frame, the chart will be clipped",
                chart.y_max,
                chart.id,
                frame.size,
            )
        return ChartDescription(
            target_id=chart.id,
            frame=frame,
            data=[self.bar(seg) for seg in frame.segments],
            layout=self.chart_layout(chart, frame),
            options=self.render_options(),
        )

    def draw(self, options: Mapping[str, Any] | ChartConfig) -> ChartDescription:
        """Draw the chart into its target container, appending the attribution link if configured."""
        desc = self.describe(options)
        self.backend.new_plot(desc.target_id, desc.data, desc.layout, desc.options)
        if (attribution := self.cfg.attribution) is not None:
            self.backend.append_link(desc.target_id, attribution.text, attribution.href)
        return desc
